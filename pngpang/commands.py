"""File-level operations behind the ``encode``, ``decode``, ``remove`` and ``print`` commands.

Each operation loads the whole file, works on a :class:`~pngpang.png.Png` in
memory and, where it changes anything, writes the whole file back.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Optional, Tuple, Union

from utils.logger import log_operation, setup_logger

from .chunk import Chunk
from .chunk_type import ChunkType
from .errors import PngErrorKind, PngFormatError
from .png import Png, as_chunk_type

__all__ = [
    "count_chunk_types",
    "decode_message",
    "encode_message",
    "list_chunks",
    "load_png",
    "remove_message",
    "save_png",
]

logger = setup_logger(__name__)

PathLike = Union[str, Path]
TypeLike = Union[ChunkType, str]


def _ensure_path(path: PathLike) -> Path:
    if isinstance(path, Path):
        return path
    return Path(path)


def load_png(path: PathLike) -> Png:
    """Read and decode the PNG at *path*."""

    source = _ensure_path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise PngFormatError.from_os_error(exc) from exc
    png = Png.from_bytes(raw)
    logger.debug("Loaded %s: %d chunks", source, len(png))
    return png


def save_png(png: Png, path: PathLike) -> Path:
    """Encode *png* and write it to *path*, replacing any existing file.

    The container must still start with IHDR and end with IEND; otherwise
    ``MISSING_REQUIRED_CHUNKS`` is raised and nothing is written.
    """

    destination = _ensure_path(path)
    png.validate()
    try:
        destination.write_bytes(png.to_bytes())
    except OSError as exc:
        raise PngFormatError.from_os_error(exc) from exc
    logger.debug("Saved %s: %d chunks", destination, len(png))
    return destination


@log_operation("Encode Message")
def encode_message(
    path: PathLike,
    chunk_type: TypeLike,
    message: str,
    out_path: Optional[PathLike] = None,
) -> Path:
    """Store *message* in a chunk of *chunk_type*, replacing an earlier one.

    The result is written to *out_path*, or back to *path* when omitted.
    """

    source = _ensure_path(path)
    png = load_png(source)
    code = as_chunk_type(chunk_type)
    try:
        data = message.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PngFormatError(
            PngErrorKind.GENERIC, f"Message is not valid UTF-8 text: {exc}"
        ) from exc
    new_chunk = Chunk.new(code, data)

    try:
        png.remove_chunk(code)
    except PngFormatError as exc:
        if exc.kind is not PngErrorKind.CHUNK_NOT_FOUND:
            raise
    else:
        logger.info("Replacing existing %s chunk in %s", code, source)
    png.append_chunk(new_chunk)

    return save_png(png, out_path if out_path is not None else source)


@log_operation("Decode Message")
def decode_message(path: PathLike, chunk_type: TypeLike) -> Union[str, bytes]:
    """Return the data of the first *chunk_type* chunk.

    Text is returned as ``str``; data that is not valid UTF-8 comes back as
    raw ``bytes``.
    """

    png = load_png(path)
    code = as_chunk_type(chunk_type)
    chunk = png.chunk_by_type(code)
    if chunk is None:
        raise PngFormatError(PngErrorKind.CHUNK_NOT_FOUND, f"no {code} chunk in {path}")

    if chunk.is_text():
        return chunk.as_string()
    return chunk.data


@log_operation("Remove Message")
def remove_message(
    path: PathLike,
    chunk_type: TypeLike,
    out_path: Optional[PathLike] = None,
) -> Path:
    """Remove the first *chunk_type* chunk; fails with ``CHUNK_NOT_FOUND`` if absent."""

    source = _ensure_path(path)
    png = load_png(source)
    png.remove_chunk(as_chunk_type(chunk_type))
    return save_png(png, out_path if out_path is not None else source)


@log_operation("Count Chunk Types")
def count_chunk_types(path: PathLike) -> Counter:
    return Counter(str(chunk.chunk_type) for chunk in load_png(path).chunks)


def list_chunks(path: PathLike) -> Tuple[Chunk, ...]:
    return load_png(path).chunks
