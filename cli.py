"""Command line interface for PNGPANG.

This module implements the command dispatcher used by :mod:`main`. Every
command is a thin wrapper around :mod:`pngpang.commands`; this layer only
checks its inputs, prints results and turns failures into messages.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from config import APP_NAME, APP_VERSION
from pngpang.commands import (
    count_chunk_types,
    decode_message,
    encode_message,
    list_chunks,
    remove_message,
)
from pngpang.errors import PngErrorKind, PngFormatError
from utils.logger import setup_logger
from utils.validators import ValidationError, require_png_path, verify_png_image

logger = setup_logger(__name__)


class CLIError(RuntimeError):
    """Custom error raised for recoverable CLI failures."""


_ERROR_MESSAGES = {
    PngErrorKind.BAD_HEADER: "Bad header.",
    PngErrorKind.MISSING_REQUIRED_CHUNKS: "Malformed PNG: missing required chunks.",
    PngErrorKind.CHUNK_NOT_FOUND: "Chunk not found.",
    PngErrorKind.GENERIC: "Unspecified error.",
    PngErrorKind.IO_ERROR: "I/O error reading file.",
}


def describe_error(error: PngFormatError) -> str:
    """Return the user-facing message for *error*."""

    if error.kind is PngErrorKind.CHUNK_ERROR:
        return f"Chunk error: {error.chunk_error or error}"
    return _ERROR_MESSAGES[error.kind]


def format_decoded(value: Union[str, bytes]) -> str:
    if isinstance(value, str):
        return value
    return "Bytes: " + value.hex(" ").upper()


def format_counts(counts: Mapping[str, int]) -> str:
    return f"Chunks: {dict(counts)}"


class PngPangCLI:
    """CLI dispatcher for PNGPANG."""

    def __init__(self, args) -> None:
        self.args = args
        self.command = getattr(args, "command", None)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def run(self) -> bool:
        try:
            if self.command == "encode":
                self._handle_encode()
            elif self.command == "decode":
                self._handle_decode()
            elif self.command == "remove":
                self._handle_remove()
            elif self.command == "print":
                self._handle_print()
            else:
                raise CLIError("No command specified. Use --help for usage information.")
        except PngFormatError as exc:
            logger.error("%s failed: %s", self.command, exc)
            print(describe_error(exc))
            return False
        except CLIError as exc:
            logger.error("CLI error: %s", exc)
            print(f"Error: {exc}")
            return False
        except KeyboardInterrupt:
            print("Operation cancelled by user.")
            return False

        return True

    def _source(self) -> Path:
        try:
            return require_png_path(self.args.filename)
        except ValidationError as exc:
            raise CLIError(str(exc)) from exc

    def _verify_output(self, path: Path) -> None:
        if not getattr(self.args, "verify", False):
            return
        result = verify_png_image(path)
        if not result.valid:
            raise CLIError(f"{path} failed verification: {result.message}")
        print(f"Verified: {path}")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _handle_encode(self) -> None:
        args = self.args
        written = encode_message(
            self._source(), args.chunk_type, args.message, args.out_filename
        )
        self._verify_output(written)
        print("Done!")

    def _handle_decode(self) -> None:
        args = self.args
        print(format_decoded(decode_message(self._source(), args.chunk_type)))

    def _handle_remove(self) -> None:
        args = self.args
        written = remove_message(self._source(), args.chunk_type, args.out_filename)
        self._verify_output(written)
        print("Done!")

    def _handle_print(self) -> None:
        source = self._source()
        if getattr(self.args, "verbose", False):
            print(f"\n{APP_NAME} v{APP_VERSION} - {source}")
            for index, chunk in enumerate(list_chunks(source)):
                print(f"  [{index}] {chunk}")
        print(format_counts(count_chunk_types(source)))


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point used by unit tests."""

    from main import parse_arguments  # Lazy import to avoid circular dependency.

    args = parse_arguments(list(argv) if argv is not None else None)
    cli = PngPangCLI(args)
    return 0 if cli.run() else 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main(sys.argv[1:]))
