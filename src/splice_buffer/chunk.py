"""Chunks of the output stream and the arena that owns them."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from itertools import chain
from typing import TYPE_CHECKING, NewType

from pydantic import BaseModel

from .basic_types import CowStr, Span, TextLike, TextSize, to_text_size
from .errors import ChunkCycleError, ChunkIndexError, EditedChunkSplitError, SplitOffsetError

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["Chunk", "ChunkIdx", "ChunkVec", "EditOptions"]

logger = logging.getLogger(__name__)

ChunkIdx = NewType("ChunkIdx", int)


class EditOptions(BaseModel):
    """Options applied when replacing the content of a chunk."""

    overwrite: bool = True
    """Discard queued intro and outro fragments along with the original content."""
    store_name: bool = False
    """Mark the replacement as a renamed identifier for name-tracking consumers."""


@dataclass(slots=True)
class Chunk:
    """One segment of the output: a source span or its replacement, plus decorations.

    ``intro`` fragments are emitted before the content and ``outro`` fragments
    after it, each front to back. ``next`` is the arena index of the chunk that
    follows in emission order.
    """

    span: Span
    edited_content: CowStr | None = None
    intro: deque[CowStr] = field(default_factory=deque)
    outro: deque[CowStr] = field(default_factory=deque)
    next: ChunkIdx | None = None
    store_name: bool = False

    @property
    def start(self) -> TextSize:
        """Offset of the first character covered by the chunk."""
        return self.span.start

    @property
    def end(self) -> TextSize:
        """Offset one past the last character covered by the chunk."""
        return self.span.end

    def contains(self, offset: int) -> bool:
        """Return whether ``offset`` lies strictly inside the chunk."""
        return self.start < offset < self.end

    def append_intro(self, content: TextLike) -> None:
        self.intro.append(CowStr(content))

    def prepend_intro(self, content: TextLike) -> None:
        self.intro.appendleft(CowStr(content))

    def append_outro(self, content: TextLike) -> None:
        self.outro.append(CowStr(content))

    def prepend_outro(self, content: TextLike) -> None:
        self.outro.appendleft(CowStr(content))

    def edit(self, content: TextLike, options: EditOptions | None = None) -> None:
        """Replace the emitted content of the chunk with ``content``."""
        options = options or EditOptions()
        if options.overwrite:
            self.intro.clear()
            self.outro.clear()
        self.store_name = options.store_name
        self.edited_content = CowStr(content)
        logger.debug(
            "Edited chunk [%d, %d) overwrite=%s store_name=%s",
            self.start,
            self.end,
            options.overwrite,
            options.store_name,
        )

    def is_edited(self) -> bool:
        return self.edited_content is not None

    def split(self, offset: int) -> Chunk:
        """Shrink this chunk to ``[start, offset)`` and return ``[offset, end)``.

        The returned chunk takes over the outro and the ``next`` link; the intro
        stays on the left half. Linking the left half to the new chunk is up to
        whoever stores it (see :meth:`ChunkVec.split`).
        """
        if self.is_edited():
            message = f"Cannot split chunk [{self.start}, {self.end}) after it has been edited"
            raise EditedChunkSplitError(message)
        if not self.contains(offset):
            message = f"Split offset {offset} is not strictly inside chunk [{self.start}, {self.end})"
            raise SplitOffsetError(message)
        at = to_text_size(offset)
        new_chunk = Chunk(Span(at, self.end))
        new_chunk.outro, self.outro = self.outro, deque()
        new_chunk.next = self.next
        self.span = Span(self.start, at)
        return new_chunk

    def fragments(self, original_source: TextLike) -> Iterator[str]:
        """Yield intro fragments, then the content, then outro fragments."""
        content = (
            self.edited_content.as_str()
            if self.edited_content is not None
            else self.span.text(original_source)
        )
        return chain(
            (fragment.as_str() for fragment in self.intro),
            (content,),
            (fragment.as_str() for fragment in self.outro),
        )


class ChunkVec:
    """Append-only arena owning every chunk, addressed by stable indices."""

    def __init__(self) -> None:
        """Create an empty arena."""
        self._chunks: list[Chunk] = []

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)

    def __getitem__(self, idx: ChunkIdx) -> Chunk:
        return self.get(idx)

    def push(self, chunk: Chunk) -> ChunkIdx:
        """Store ``chunk`` and return its index."""
        idx = ChunkIdx(len(self._chunks))
        self._chunks.append(chunk)
        logger.debug("Pushed chunk %d spanning [%d, %d)", idx, chunk.start, chunk.end)
        return idx

    def get(self, idx: ChunkIdx) -> Chunk:
        """Return the chunk stored at ``idx``."""
        if not 0 <= idx < len(self._chunks):
            message = f"Chunk index {idx} is out of range for an arena of {len(self._chunks)} chunks"
            raise ChunkIndexError(message)
        return self._chunks[idx]

    def split(self, idx: ChunkIdx, offset: int) -> ChunkIdx:
        """Split the chunk at ``idx`` and link the left half to the new right half."""
        chunk = self.get(idx)
        right = chunk.split(offset)
        right_idx = self.push(right)
        chunk.next = right_idx
        logger.debug("Split chunk %d at %d into %d", idx, offset, right_idx)
        return right_idx

    def walk(self, head: ChunkIdx) -> Iterator[tuple[ChunkIdx, Chunk]]:
        """Yield ``(index, chunk)`` pairs following ``next`` links from ``head``."""
        current: ChunkIdx | None = head
        visited = 0
        while current is not None:
            chunk = self.get(current)
            if visited == len(self._chunks):
                message = f"Chunk chain starting at {head} does not terminate"
                raise ChunkCycleError(message)
            yield current, chunk
            visited += 1
            current = chunk.next

    def fragments(self, head: ChunkIdx, original_source: TextLike) -> Iterator[str]:
        """Yield every fragment of the chain starting at ``head`` in output order."""
        for _, chunk in self.walk(head):
            yield from chunk.fragments(original_source)

    def render(self, head: ChunkIdx, original_source: TextLike) -> str:
        """Concatenate the chain starting at ``head`` into the final text."""
        return "".join(self.fragments(head, original_source))
