"""Offsets, spans and the copy-on-write string held by chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from .errors import InvalidSpanError, TextSizeError

__all__ = [
    "MAX_TEXT_SIZE",
    "CowStr",
    "Span",
    "TextLike",
    "TextSize",
    "to_text_size",
]

TextSize = NewType("TextSize", int)

MAX_TEXT_SIZE = 2**32 - 1
"""Largest offset or text length representable as an unsigned 32-bit value."""


def to_text_size(value: int) -> TextSize:
    """Validate ``value`` as an offset into a source text."""
    if not 0 <= value <= MAX_TEXT_SIZE:
        message = f"Offset {value} is outside the supported range 0..{MAX_TEXT_SIZE}"
        raise TextSizeError(message)
    return TextSize(value)


def _check_length(length: int) -> int:
    if length > MAX_TEXT_SIZE:
        message = f"Text of length {length} exceeds the maximum of {MAX_TEXT_SIZE}"
        raise TextSizeError(message)
    return length


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` range of offsets into one source text."""

    start: TextSize
    end: TextSize

    def __post_init__(self) -> None:
        """Reject empty or inverted ranges."""
        to_text_size(self.start)
        to_text_size(self.end)
        if self.start >= self.end:
            message = f"Span requires start < end, got [{self.start}, {self.end})"
            raise InvalidSpanError(message)

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: TextLike) -> str:
        """Return the slice of ``source`` covered by this span.

        ``source`` must be the text the offsets were computed against; only the
        upper bound is checked here.
        """
        raw = source.as_str() if isinstance(source, CowStr) else source
        if self.end > len(raw):
            message = f"Span [{self.start}, {self.end}) exceeds source of length {len(raw)}"
            raise InvalidSpanError(message)
        return raw[self.start : self.end]


class CowStr:
    """Text that is either borrowed from a source string or owned outright.

    A borrowed value keeps a reference to the source and the span it covers, and
    only slices when read. An owned value holds its own ``str``. Both report the
    same length and text, and compare equal to plain strings with that text.
    """

    __slots__ = ("_len", "_owned", "_source", "_span")

    _len: int
    _owned: str | None
    _source: str | None
    _span: Span | None

    def __init__(self, content: TextLike) -> None:
        """Wrap ``content`` as an owned string, or copy another ``CowStr``."""
        if isinstance(content, CowStr):
            self._owned = content._owned
            self._source = content._source
            self._span = content._span
            self._len = content._len
            return
        self._len = _check_length(len(content))
        self._owned = content
        self._source = None
        self._span = None

    @classmethod
    def borrowed(cls, source: str, span: Span) -> CowStr:
        """Reference ``span`` of ``source`` without copying it."""
        if span.end > len(source):
            message = f"Span [{span.start}, {span.end}) exceeds source of length {len(source)}"
            raise InvalidSpanError(message)
        value = cls.__new__(cls)
        value._len = _check_length(len(span))
        value._owned = None
        value._source = source
        value._span = span
        return value

    @property
    def is_borrowed(self) -> bool:
        """Whether the text is a view into a source string."""
        return self._owned is None

    @property
    def is_owned(self) -> bool:
        """Whether the text was allocated for this value."""
        return self._owned is not None

    def len(self) -> int:
        """Return the length, which always fits in 32 bits."""
        return self._len

    def as_str(self) -> str:
        """Return the text."""
        if self._owned is not None:
            return self._owned
        if self._source is None or self._span is None:  # pragma: no cover - unreachable
            message = "Borrowed CowStr lost its source"
            raise RuntimeError(message)
        return self._source[self._span.start : self._span.end]

    def __len__(self) -> int:
        return self._len

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        kind = "owned" if self.is_owned else "borrowed"
        return f"CowStr({self.as_str()!r}, {kind})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CowStr):
            return self.as_str() == other.as_str()
        if isinstance(other, str):
            return self.as_str() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_str())


TextLike = str | CowStr
