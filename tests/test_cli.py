from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import main as entry
from cli import describe_error, format_decoded, main
from png_samples import minimal_png_bytes
from pngpang.errors import ChunkErrorKind, ChunkFormatError, PngErrorKind, PngFormatError


def _write_minimal_png(path: Path) -> Path:
    path.write_bytes(minimal_png_bytes())
    return path


def test_encode_then_decode(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")
    stego = tmp_path / "stego.png"

    assert main(["encode", str(cover), "ruSt", "meet at noon", str(stego)]) == 0
    assert "Done!" in capsys.readouterr().out

    assert main(["decode", str(stego), "ruSt"]) == 0
    assert capsys.readouterr().out.strip() == "meet at noon"


def test_encode_with_verify(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert main(["encode", str(cover), "teSt", "checked", "--verify"]) == 0
    out = capsys.readouterr().out
    assert f"Verified: {cover}" in out
    assert "Done!" in out


def test_decode_missing_chunk(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert main(["decode", str(cover), "teSt"]) == 1
    assert capsys.readouterr().out.strip() == "Chunk not found."


def test_remove_then_remove_again(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")
    main(["encode", str(cover), "teSt", "short lived"])
    capsys.readouterr()

    assert main(["remove", str(cover), "teSt", "--verify"]) == 0
    assert "Done!" in capsys.readouterr().out
    assert cover.read_bytes() == minimal_png_bytes()

    assert main(["remove", str(cover), "teSt"]) == 1
    assert capsys.readouterr().out.strip() == "Chunk not found."


def test_print_counts(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert main(["print", str(cover)]) == 0
    assert capsys.readouterr().out.strip() == "Chunks: {'IHDR': 1, 'IDAT': 1, 'IEND': 1}"


def test_print_verbose_lists_chunks(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")
    main(["encode", str(cover), "teSt", "listed"])
    capsys.readouterr()

    assert main(["print", str(cover), "-v"]) == 0
    out = capsys.readouterr().out
    assert "[2] len: 6  type: teSt" in out
    assert "data: listed" in out
    assert "'teSt': 1" in out


def test_missing_file(tmp_path: Path, capsys) -> None:
    assert main(["print", str(tmp_path / "missing.png")]) == 1
    assert capsys.readouterr().out.startswith("Error: File not found")


def test_bad_header(tmp_path: Path, capsys) -> None:
    fake = tmp_path / "fake.png"
    fake.write_bytes(b"GIF89a not a png")

    assert main(["print", str(fake)]) == 1
    assert capsys.readouterr().out.strip() == "Bad header."


def test_invalid_chunk_type(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert main(["encode", str(cover), "Ru1t", "nope"]) == 1
    assert capsys.readouterr().out.startswith("Chunk error:")


def test_format_decoded() -> None:
    assert format_decoded("plain") == "plain"
    assert format_decoded(b"\xff\x00\xab") == "Bytes: FF 00 AB"


def test_describe_error() -> None:
    assert describe_error(PngFormatError(PngErrorKind.MISSING_REQUIRED_CHUNKS)) == (
        "Malformed PNG: missing required chunks."
    )
    assert describe_error(PngFormatError(PngErrorKind.IO_ERROR)) == "I/O error reading file."
    wrapped = PngFormatError.from_chunk_error(ChunkFormatError(ChunkErrorKind.BAD_CRC))
    assert describe_error(wrapped) == "Chunk error: Bad CRC."


def test_entry_point_without_command(capsys) -> None:
    assert entry.main([]) == 1
    assert "usage: pngpang" in capsys.readouterr().out


def test_entry_point_runs_command(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert entry.main(["print", str(cover)]) == 0
    assert "Chunks:" in capsys.readouterr().out


def test_remove_end_chunk_reports_malformed_png(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert main(["remove", str(cover), "IEND"]) == 1
    assert capsys.readouterr().out.strip() == "Malformed PNG: missing required chunks."
    assert cover.read_bytes() == minimal_png_bytes()


def test_encode_undecodable_argument(tmp_path: Path, capsys) -> None:
    cover = _write_minimal_png(tmp_path / "cover.png")

    assert entry.main(["encode", str(cover), "ruSt", "\udcff"]) == 1
    assert capsys.readouterr().out.strip() == "Unspecified error."
    assert cover.read_bytes() == minimal_png_bytes()
