"""The four-byte type code of a PNG chunk."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from .errors import ChunkErrorKind, ChunkFormatError

__all__ = ["ChunkType"]

_PROPERTY_BIT = 0x20


def _is_ascii_letter(value: int) -> bool:
    return 65 <= value <= 90 or 97 <= value <= 122


@dataclass(frozen=True)
class ChunkType:
    """A validated chunk type code such as ``IHDR`` or ``ruSt``.

    The case of each letter encodes a property bit (see the PNG specification,
    section 3.3): ancillary, private, reserved and safe-to-copy.
    """

    code: bytes

    END: ClassVar["ChunkType"]
    HEADER: ClassVar["ChunkType"]

    def __post_init__(self) -> None:
        if not isinstance(self.code, (bytes, bytearray, memoryview)):
            raise ChunkFormatError(ChunkErrorKind.GENERIC, "chunk type must be bytes-like")
        code = bytes(self.code)
        if len(code) != 4:
            raise ChunkFormatError(ChunkErrorKind.GENERIC, "chunk type must be exactly 4 bytes")
        if not all(_is_ascii_letter(c) for c in code):
            raise ChunkFormatError(
                ChunkErrorKind.GENERIC, "chunk type must contain ASCII letters only"
            )
        object.__setattr__(self, "code", code)

    @classmethod
    def from_bytes(cls, value: Union[bytes, bytearray, memoryview]) -> "ChunkType":
        return cls(bytes(value))

    @classmethod
    def from_str(cls, value: str) -> "ChunkType":
        """Parse a type code such as ``"RuSt"``; anything but 4 letters fails."""

        if not isinstance(value, str):
            raise ChunkFormatError(ChunkErrorKind.GENERIC, "chunk type must be a string")
        try:
            encoded = value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise ChunkFormatError(
                ChunkErrorKind.GENERIC, "chunk type must contain ASCII letters only"
            ) from exc
        return cls(encoded)

    def __bytes__(self) -> bytes:
        return self.code

    def is_critical(self) -> bool:
        return self.code[0] & _PROPERTY_BIT == 0

    def is_public(self) -> bool:
        return self.code[1] & _PROPERTY_BIT == 0

    def is_reserved_bit_valid(self) -> bool:
        return self.code[2] & _PROPERTY_BIT == 0

    def is_safe_to_copy(self) -> bool:
        return self.code[3] & _PROPERTY_BIT != 0

    def is_valid(self) -> bool:
        # Only the reserved bit is mandated; the other bits are free.
        return self.is_reserved_bit_valid()

    def __str__(self) -> str:
        return self.code.decode("ascii")


ChunkType.END = ChunkType(b"IEND")
ChunkType.HEADER = ChunkType(b"IHDR")
