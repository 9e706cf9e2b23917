"""Validation helpers used by the CLI before and after rewriting a PNG."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError


class ValidationError(ValueError):
    """Raised when validation cannot be completed."""


@dataclass(frozen=True)
class ValidationResult:
    """Simple structure describing a validation outcome."""

    valid: bool
    message: str = ""


def _ensure_path(path: Path | str) -> Path:
    if isinstance(path, Path):
        return path
    return Path(path)


def validate_png_path(path: Path | str) -> ValidationResult:
    """Check whether *path* refers to an existing regular file.

    The file's contents are left to the PNG decoder, which reports a bad
    signature as ``BAD_HEADER``.
    """

    candidate = _ensure_path(path)
    if not candidate.exists():
        return ValidationResult(False, "File not found")
    if not candidate.is_file():
        return ValidationResult(False, "Not a regular file")
    return ValidationResult(True, "OK")


def require_png_path(path: Path | str) -> Path:
    """Return *path* as a :class:`Path`, raising :class:`ValidationError` if unusable."""

    candidate = _ensure_path(path)
    result = validate_png_path(candidate)
    if not result.valid:
        raise ValidationError(f"{result.message}: {candidate}")
    return candidate


def verify_png_image(path: Path | str) -> ValidationResult:
    """Ask Pillow whether the file at *path* is still a readable PNG image.

    ``Image.verify`` walks the chunk stream and checks CRCs without decoding
    pixel data.
    """

    candidate = _ensure_path(path)
    try:
        with Image.open(candidate) as image:
            image_format = image.format
            image.verify()
    except (OSError, SyntaxError, UnidentifiedImageError) as exc:
        return ValidationResult(False, f"Pillow rejected image: {exc}")

    if image_format != "PNG":
        return ValidationResult(False, f"Unexpected image format: {image_format}")
    return ValidationResult(True, "OK")


__all__ = [
    "ValidationError",
    "ValidationResult",
    "require_png_path",
    "validate_png_path",
    "verify_png_image",
]
