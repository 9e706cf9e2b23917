"""PNGPANG chunk codec and PNG container."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "Chunk",
    "ChunkErrorKind",
    "ChunkFormatError",
    "ChunkType",
    "PNG_SIGNATURE",
    "Png",
    "PngErrorKind",
    "PngFormatError",
    "count_chunk_types",
    "decode_message",
    "encode_message",
    "list_chunks",
    "load_png",
    "remove_message",
    "save_png",
]


if TYPE_CHECKING:  # pragma: no cover - only for typing
    from .chunk import Chunk
    from .chunk_type import ChunkType
    from .commands import (
        count_chunk_types,
        decode_message,
        encode_message,
        list_chunks,
        load_png,
        remove_message,
        save_png,
    )
    from .errors import ChunkErrorKind, ChunkFormatError, PngErrorKind, PngFormatError
    from .png import PNG_SIGNATURE, Png


def __getattr__(name: str) -> Any:
    if name == "Chunk":
        return import_module(".chunk", __name__).Chunk
    if name == "ChunkType":
        return import_module(".chunk_type", __name__).ChunkType
    if name in {"PNG_SIGNATURE", "Png"}:
        return getattr(import_module(".png", __name__), name)
    if name in {"ChunkErrorKind", "ChunkFormatError", "PngErrorKind", "PngFormatError"}:
        return getattr(import_module(".errors", __name__), name)
    if name in {
        "count_chunk_types",
        "decode_message",
        "encode_message",
        "list_chunks",
        "load_png",
        "remove_message",
        "save_png",
    }:
        module = import_module(".commands", __name__)
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
