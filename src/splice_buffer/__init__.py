"""Splice buffer primitives: spans, copy-on-write strings, chunks and the chunk arena."""

import logging

from .basic_types import MAX_TEXT_SIZE, CowStr, Span, TextLike, TextSize, to_text_size
from .chunk import Chunk, ChunkIdx, ChunkVec, EditOptions
from .errors import (
    ChunkCycleError,
    ChunkIndexError,
    EditedChunkSplitError,
    InvalidSpanError,
    SpliceError,
    SplitOffsetError,
    TextSizeError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MAX_TEXT_SIZE",
    "Chunk",
    "ChunkCycleError",
    "ChunkIdx",
    "ChunkIndexError",
    "ChunkVec",
    "CowStr",
    "EditOptions",
    "EditedChunkSplitError",
    "InvalidSpanError",
    "Span",
    "SpliceError",
    "SplitOffsetError",
    "TextLike",
    "TextSize",
    "TextSizeError",
    "to_text_size",
]
