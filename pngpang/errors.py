"""Error types raised by the chunk codec and the PNG container."""

from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = [
    "ChunkErrorKind",
    "ChunkFormatError",
    "PngErrorKind",
    "PngFormatError",
]


class ChunkErrorKind(Enum):
    """Failure categories of a single chunk record."""

    TOO_SHORT = "Chunk too short."
    TOO_LONG = "Chunk too long."
    BAD_CRC = "Bad CRC."
    GENERIC = "Non-specific chunk error."


class PngErrorKind(Enum):
    """Failure categories of a whole PNG container."""

    BAD_HEADER = "Bad, incomplete, or missing header."
    MISSING_REQUIRED_CHUNKS = "Missing required chunks."
    CHUNK_NOT_FOUND = "Chunk not found."
    IO_ERROR = "IO Error"
    CHUNK_ERROR = "Chunk Error"
    GENERIC = "Non-specific png error."


class ChunkFormatError(ValueError):
    """Raised when a chunk cannot be built from, or rendered as, bytes."""

    def __init__(self, kind: ChunkErrorKind, message: Optional[str] = None) -> None:
        self.kind = kind
        super().__init__(message or kind.value)


class PngFormatError(ValueError):
    """Raised when a PNG container is malformed or an operation on it fails.

    ``CHUNK_ERROR`` and ``IO_ERROR`` failures keep the underlying exception on
    :attr:`chunk_error` or :attr:`os_error` respectively.
    """

    def __init__(
        self,
        kind: PngErrorKind,
        message: Optional[str] = None,
        *,
        chunk_error: Optional[ChunkFormatError] = None,
        os_error: Optional[OSError] = None,
    ) -> None:
        self.kind = kind
        self.chunk_error = chunk_error
        self.os_error = os_error
        if message is None:
            message = kind.value
            wrapped = chunk_error or os_error
            if wrapped is not None:
                message = f"{kind.value}: {wrapped}"
        super().__init__(message)

    @classmethod
    def from_chunk_error(cls, error: ChunkFormatError) -> "PngFormatError":
        return cls(PngErrorKind.CHUNK_ERROR, chunk_error=error)

    @classmethod
    def from_os_error(cls, error: OSError) -> "PngFormatError":
        return cls(PngErrorKind.IO_ERROR, os_error=error)
