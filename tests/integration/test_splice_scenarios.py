"""End-to-end rewrites driven through the public arena API."""

from __future__ import annotations

import pytest

from splice_buffer import Chunk, ChunkIdx, ChunkVec, CowStr, EditOptions, Span, to_text_size


def _locate(chunks: ChunkVec, head: ChunkIdx, offset: int) -> ChunkIdx:
    """Return the chunk starting at ``offset``, splitting one if needed."""
    for idx, chunk in chunks.walk(head):
        if chunk.start == offset:
            return idx
        if chunk.contains(offset):
            return chunks.split(idx, offset)
    message = f"No chunk starts at or contains offset {offset}"
    raise AssertionError(message)


@pytest.fixture
def source() -> CowStr:
    """Return a small JavaScript snippet shared by the scenarios."""
    return CowStr("const foo = 1;\nconsole.log(foo);\n")


@pytest.fixture
def document(source: CowStr) -> tuple[ChunkVec, ChunkIdx]:
    """Return an arena with a single chunk covering ``source``."""
    chunks = ChunkVec()
    head = chunks.push(Chunk(Span(to_text_size(0), to_text_size(source.len()))))
    return chunks, head


def test_hello_world_replacement() -> None:
    """Splitting off the second word and overwriting it changes only that word."""
    source = "hello world"
    chunks = ChunkVec()
    head = chunks.push(Chunk(Span(to_text_size(0), to_text_size(len(source)))))
    right = chunks.split(head, 5)
    assert chunks[head].span.text(source) == "hello"
    assert chunks[right].span.text(source) == " world"
    chunks[right].edit(" there", EditOptions(overwrite=True))
    assert chunks.render(head, source) == "hello there"


def test_rename_identifier_everywhere(source: CowStr, document: tuple[ChunkVec, ChunkIdx]) -> None:
    """Every occurrence of an identifier can be renamed with name tracking."""
    chunks, head = document
    text = source.as_str()
    renamed: list[ChunkIdx] = []
    start = text.find("foo")
    while start != -1:
        idx = _locate(chunks, head, start)
        if chunks[idx].end != start + 3:
            _locate(chunks, head, start + 3)
        chunks[idx].edit("bar", EditOptions(store_name=True))
        renamed.append(idx)
        start = text.find("foo", start + 3)
    assert chunks.render(head, source) == "const bar = 1;\nconsole.log(bar);\n"
    assert all(chunks[idx].store_name for idx in renamed)


def test_delete_and_wrap(source: CowStr, document: tuple[ChunkVec, ChunkIdx]) -> None:
    """Deleting a statement and wrapping another keeps untouched text verbatim."""
    chunks, head = document
    text = source.as_str()
    newline = text.index("\n") + 1
    first = _locate(chunks, head, 0)
    second = _locate(chunks, head, newline)
    chunks[first].edit("")
    chunks[second].prepend_intro("if (debug) { ")
    chunks[second].append_outro("}\n")
    assert chunks.render(head, source) == "if (debug) { console.log(foo);\n}\n"
    assert len(chunks) == 2


def test_decorations_survive_later_splits(source: CowStr, document: tuple[ChunkVec, ChunkIdx]) -> None:
    """Fragments queued before a split stay at the outer edges of the range."""
    chunks, head = document
    chunks[head].append_intro("/* start */")
    chunks[head].append_outro("/* end */")
    value = _locate(chunks, head, source.as_str().index("1"))
    _locate(chunks, head, source.as_str().index("1") + 1)
    chunks[value].edit("2", EditOptions(overwrite=False))
    assert chunks.render(head, source) == "/* start */const foo = 2;\nconsole.log(foo);\n/* end */"
