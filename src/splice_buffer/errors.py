"""Exceptions raised when splice buffer contracts are violated."""

from __future__ import annotations

__all__ = [
    "ChunkCycleError",
    "ChunkIndexError",
    "EditedChunkSplitError",
    "InvalidSpanError",
    "SpliceError",
    "SplitOffsetError",
    "TextSizeError",
]


class SpliceError(RuntimeError):
    """Base class for contract violations in the chunk arena."""


class TextSizeError(SpliceError, OverflowError):
    """Raised when an offset or text length does not fit in 32 bits."""


class InvalidSpanError(SpliceError, ValueError):
    """Raised for empty or inverted spans, or spans past the end of the source."""


class SplitOffsetError(SpliceError, ValueError):
    """Raised when a chunk is split at an offset that is not strictly interior."""


class EditedChunkSplitError(SplitOffsetError):
    """Raised when splitting a chunk whose content has already been edited."""


class ChunkIndexError(SpliceError, IndexError):
    """Raised when an index was not minted by the arena being accessed."""


class ChunkCycleError(SpliceError):
    """Raised when following ``next`` links never reaches the end of the chain."""
