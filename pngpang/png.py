"""The PNG container: a signature followed by an ordered list of chunks."""

from __future__ import annotations

import struct
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .chunk import CHUNK_OVERHEAD, Chunk
from .chunk_type import ChunkType
from .errors import ChunkFormatError, PngErrorKind, PngFormatError

__all__ = ["PNG_SIGNATURE", "Png", "as_chunk_type"]

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_LENGTH_STRUCT = struct.Struct(">I")

TypeLike = Union[ChunkType, str]


def as_chunk_type(chunk_type: TypeLike) -> ChunkType:
    """Return *chunk_type* as a :class:`ChunkType`; unparsable strings raise ``CHUNK_ERROR``."""

    if isinstance(chunk_type, ChunkType):
        return chunk_type
    try:
        return ChunkType.from_str(chunk_type)
    except ChunkFormatError as exc:
        raise PngFormatError.from_chunk_error(exc) from exc


class Png:
    """An in-memory PNG file at the chunk level.

    Chunk order is preserved exactly as decoded or appended. The container is
    never reordered behind the caller's back, and every mutating operation
    either succeeds completely or leaves the chunk list untouched.
    """

    SIGNATURE = PNG_SIGNATURE

    def __init__(self, chunks: Iterable[Chunk] = ()) -> None:
        self._chunks: List[Chunk] = list(chunks)

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> "Png":
        """Build a container and check it starts with IHDR and ends with IEND."""

        png = cls(chunks)
        png.validate()
        return png

    @classmethod
    def from_bytes(cls, buffer: Union[bytes, bytearray, memoryview]) -> "Png":
        raw = bytes(buffer)
        if raw[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
            raise PngFormatError(PngErrorKind.BAD_HEADER)

        chunks: List[Chunk] = []
        offset = len(PNG_SIGNATURE)
        total = len(raw)
        while offset < total:
            end = total
            if offset + _LENGTH_STRUCT.size <= total:
                (length,) = _LENGTH_STRUCT.unpack_from(raw, offset)
                end = min(total, offset + CHUNK_OVERHEAD + length)
            try:
                chunk = Chunk.from_bytes(raw[offset:end])
            except ChunkFormatError as exc:
                raise PngFormatError.from_chunk_error(exc) from exc
            chunks.append(chunk)
            offset += CHUNK_OVERHEAD + chunk.length

        png = cls(chunks)
        png.validate()
        return png

    def validate(self) -> None:
        """Raise ``MISSING_REQUIRED_CHUNKS`` unless the first chunk is IHDR and the last IEND."""

        if not self._chunks:
            raise PngFormatError(PngErrorKind.MISSING_REQUIRED_CHUNKS, "PNG contains no chunks")
        if self._chunks[0].chunk_type != ChunkType.HEADER:
            raise PngFormatError(
                PngErrorKind.MISSING_REQUIRED_CHUNKS, "first chunk is not IHDR"
            )
        if self._chunks[-1].chunk_type != ChunkType.END:
            raise PngFormatError(
                PngErrorKind.MISSING_REQUIRED_CHUNKS, "last chunk is not IEND"
            )

    @property
    def header(self) -> bytes:
        return PNG_SIGNATURE

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def _index_of(self, chunk_type: ChunkType) -> Optional[int]:
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type == chunk_type:
                return index
        return None

    def chunk_by_type(self, chunk_type: TypeLike) -> Optional[Chunk]:
        """Return the first chunk of *chunk_type*, or ``None``."""

        index = self._index_of(as_chunk_type(chunk_type))
        return None if index is None else self._chunks[index]

    def append_chunk(self, chunk: Chunk) -> None:
        """Add *chunk* just before a trailing IEND (or last, if there is none).

        Existing chunks of the same type are kept; remove them first to replace.
        """

        if not isinstance(chunk, Chunk):
            raise TypeError("chunk must be a Chunk")
        if self._chunks and self._chunks[-1].chunk_type == ChunkType.END:
            self._chunks.insert(len(self._chunks) - 1, chunk)
        else:
            self._chunks.append(chunk)

    def remove_chunk(self, chunk_type: TypeLike) -> Chunk:
        """Remove and return the first chunk of *chunk_type*.

        Raises ``CHUNK_NOT_FOUND`` when there is no such chunk.
        """

        wanted = as_chunk_type(chunk_type)
        index = self._index_of(wanted)
        if index is None:
            raise PngFormatError(
                PngErrorKind.CHUNK_NOT_FOUND, f"no {wanted} chunk in PNG"
            )
        return self._chunks.pop(index)

    def to_bytes(self) -> bytes:
        return PNG_SIGNATURE + b"".join(chunk.to_bytes() for chunk in self._chunks)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        types = ", ".join(str(chunk.chunk_type) for chunk in self._chunks)
        return f"{type(self).__name__}([{types}])"
