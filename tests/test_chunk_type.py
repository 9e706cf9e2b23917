from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pngpang.chunk_type import ChunkType
from pngpang.errors import ChunkErrorKind, ChunkFormatError


def test_chunk_type_from_bytes() -> None:
    chunk_type = ChunkType.from_bytes(bytes([82, 117, 83, 116]))
    assert bytes(chunk_type) == bytes([82, 117, 83, 116])


def test_chunk_type_from_str_matches_bytes() -> None:
    assert ChunkType.from_str("RuSt") == ChunkType.from_bytes(bytes([82, 117, 83, 116]))


def test_chunk_type_string() -> None:
    assert str(ChunkType.from_str("RuSt")) == "RuSt"


@pytest.mark.parametrize(
    ("code", "critical", "public", "reserved_ok", "safe_to_copy"),
    [
        ("RuSt", True, False, True, True),
        ("ruSt", False, False, True, True),
        ("RUSt", True, True, True, True),
        ("RuST", True, False, True, False),
        ("IEND", True, True, True, False),
        ("tEXt", False, True, True, True),
    ],
)
def test_chunk_type_property_bits(code, critical, public, reserved_ok, safe_to_copy) -> None:
    chunk_type = ChunkType.from_str(code)
    assert chunk_type.is_critical() is critical
    assert chunk_type.is_public() is public
    assert chunk_type.is_reserved_bit_valid() is reserved_ok
    assert chunk_type.is_safe_to_copy() is safe_to_copy


def test_reserved_bit_decides_validity() -> None:
    assert ChunkType.from_str("RuSt").is_valid()
    assert not ChunkType.from_str("Rust").is_valid()
    assert not ChunkType.from_str("Rust").is_reserved_bit_valid()


@pytest.mark.parametrize("code", ["Ru1t", "Ru", "RuStx", "", "Ru t", "Rüst"])
def test_from_str_rejects_non_letters_and_wrong_length(code) -> None:
    with pytest.raises(ChunkFormatError) as excinfo:
        ChunkType.from_str(code)
    assert excinfo.value.kind is ChunkErrorKind.GENERIC


@pytest.mark.parametrize("raw", [b"Ru1t", b"\x00\x00\x00\x00", b"RuS", b"Ru[t"])
def test_from_bytes_rejects_illegal_values(raw) -> None:
    with pytest.raises(ChunkFormatError):
        ChunkType.from_bytes(raw)


def test_equality_is_exact_bytes() -> None:
    assert ChunkType.from_str("teSt") == ChunkType.from_str("teSt")
    assert ChunkType.from_str("teSt") != ChunkType.from_str("TeSt")
    assert len({ChunkType.from_str("teSt"), ChunkType.from_bytes(b"teSt")}) == 1


def test_known_constants() -> None:
    assert bytes(ChunkType.END) == bytes([0x49, 0x45, 0x4E, 0x44])
    assert str(ChunkType.HEADER) == "IHDR"


def test_chunk_type_is_immutable() -> None:
    chunk_type = ChunkType.from_str("RuSt")
    with pytest.raises(AttributeError):
        chunk_type.code = b"IEND"
