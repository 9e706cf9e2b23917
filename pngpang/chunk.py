"""A single PNG chunk and its binary codec."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass, field
from typing import Union

from .chunk_type import ChunkType
from .errors import ChunkErrorKind, ChunkFormatError

__all__ = ["CHUNK_OVERHEAD", "Chunk", "compute_crc"]

_LENGTH_STRUCT = struct.Struct(">I")
_CRC_STRUCT = struct.Struct(">I")

CHUNK_OVERHEAD = 12
"""Length field, type code and CRC: the size of a chunk with no data."""

BytesLike = Union[bytes, bytearray, memoryview]


def compute_crc(type_bytes: bytes, data: bytes) -> int:
    """Return the CRC-32 (ISO-HDLC) of a chunk's type code and data."""

    return zlib.crc32(data, zlib.crc32(type_bytes)) & 0xFFFFFFFF


@dataclass(frozen=True)
class Chunk:
    """One length-prefixed, CRC-protected record of a PNG stream.

    The CRC is always derived from ``chunk_type`` and ``data``; a chunk built
    in memory is therefore self-consistent without a verification pass.
    """

    chunk_type: ChunkType
    data: bytes = b""
    crc: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.chunk_type, ChunkType):
            raise TypeError("chunk_type must be a ChunkType")
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")
        data = bytes(self.data)
        if len(data) > 0xFFFFFFFF:
            raise ChunkFormatError(ChunkErrorKind.TOO_LONG, "chunk data exceeds 2^32 - 1 bytes")
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "crc", compute_crc(bytes(self.chunk_type), data))

    @classmethod
    def new(cls, chunk_type: ChunkType, data: BytesLike) -> "Chunk":
        return cls(chunk_type, bytes(data))

    @property
    def length(self) -> int:
        """Number of data bytes; excludes the length, type and CRC fields."""

        return len(self.data)

    @classmethod
    def from_bytes(cls, buffer: BytesLike) -> "Chunk":
        """Decode the chunk at the start of *buffer*.

        Bytes after the chunk's CRC are ignored; stepping from one chunk to
        the next is the caller's job.
        """

        raw = bytes(buffer)
        if len(raw) < CHUNK_OVERHEAD:
            raise ChunkFormatError(ChunkErrorKind.TOO_SHORT)

        (length,) = _LENGTH_STRUCT.unpack_from(raw, 0)
        if length > len(raw) - CHUNK_OVERHEAD:
            raise ChunkFormatError(ChunkErrorKind.TOO_LONG)

        data_end = 8 + length
        type_bytes = raw[4:8]
        data = raw[8:data_end]
        (stored_crc,) = _CRC_STRUCT.unpack_from(raw, data_end)

        # Verify before interpreting the type code so corruption is always BAD_CRC.
        if compute_crc(type_bytes, data) != stored_crc:
            raise ChunkFormatError(ChunkErrorKind.BAD_CRC)

        return cls(ChunkType.from_bytes(type_bytes), data)

    def to_bytes(self) -> bytes:
        return (
            _LENGTH_STRUCT.pack(self.length)
            + bytes(self.chunk_type)
            + self.data
            + _CRC_STRUCT.pack(self.crc)
        )

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def is_text(self) -> bool:
        try:
            self.data.decode("utf-8")
        except UnicodeDecodeError:
            return False
        return True

    def as_string(self) -> str:
        """Return the data as UTF-8 text.

        Raises :class:`ChunkFormatError` (``GENERIC``) when the data is not
        valid UTF-8; callers fall back to :attr:`data` in that case.
        """

        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ChunkFormatError(ChunkErrorKind.GENERIC, "chunk data is not valid UTF-8") from exc

    def __str__(self) -> str:
        rendered = self.as_string() if self.is_text() else self.data.hex(" ")
        return f"len: {self.length}  type: {self.chunk_type}  crc: {self.crc}  data: {rendered}"
