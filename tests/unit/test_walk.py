"""Tests for the bottom-up and top-down tree walkers."""

from dataclasses import replace
from typing import Any

import pytest

from bookfilters.core.codec.json_codec import decode_document
from bookfilters.core.tree.walk import walk_blocks_top_down, walk_bottom_up, walk_top_down
from bookfilters.models.document import (
    Block,
    BlockQuote,
    BulletList,
    Div,
    Emph,
    Header,
    Inline,
    Note,
    Para,
    Str,
)
from bookfilters.protocols import (
    BlockRewrite,
    Finished,
    InlineRewrite,
    PassThrough,
    Rules,
    StatefulPassThrough,
    StatefulRules,
)
from tests.unit.builders import collect_text, div, document, header, para


class Recorder(PassThrough):
    """Records the order in which nodes are offered."""

    def __init__(self) -> None:
        self.seen: list[str] = []

    def rewrite_block(self, block: Block) -> BlockRewrite:
        self.seen.append(type(block).__name__)
        return None

    def rewrite_inline(self, inline: Inline) -> InlineRewrite:
        self.seen.append(inline.text if isinstance(inline, Str) else type(inline).__name__)
        return None


class Upper(PassThrough):
    def rewrite_inline(self, inline: Inline) -> InlineRewrite:
        if isinstance(inline, Str):
            return Str(inline.text.upper())
        return None


def test_pass_through_classes_satisfy_protocols() -> None:
    assert isinstance(PassThrough(), Rules)
    assert isinstance(StatefulPassThrough(), StatefulRules)


def test_pass_through_returns_equal_document(book_json: dict[str, Any]) -> None:
    doc = decode_document(book_json)
    assert walk_bottom_up(doc, PassThrough()) == doc
    result, state = walk_top_down(doc, StatefulPassThrough(), 0)
    assert result == doc
    assert state == 0


def test_bottom_up_offers_children_before_parent() -> None:
    doc = document(div(content=(Para((Emph((Str("a"),)),)),)))
    recorder = Recorder()
    walk_bottom_up(doc, recorder)
    assert recorder.seen == ["a", "Emph", "Para", "Div"]


def test_bottom_up_parent_sees_rewritten_children() -> None:
    seen: list[Block] = []

    class Both(Upper):
        def rewrite_block(self, block: Block) -> BlockRewrite:
            seen.append(block)
            return None

    walk_bottom_up(document(para("hi")), Both())
    assert seen == [Para((Str("HI"),))]


def test_bottom_up_replacement_is_not_walked_again() -> None:
    calls: list[str] = []

    class Wrap(PassThrough):
        def rewrite_block(self, block: Block) -> BlockRewrite:
            calls.append(type(block).__name__)
            if isinstance(block, Para):
                return BlockQuote((block,))
            return None

    result = walk_bottom_up(document(para("x")), Wrap())
    assert result.blocks == (BlockQuote((para("x"),)),)
    assert calls == ["Para"]


def test_top_down_offers_parent_before_children() -> None:
    recorder = Recorder()

    class TopDownRecorder(StatefulPassThrough):
        def rewrite_block(self, block: Block, state: None) -> tuple[BlockRewrite, None]:
            return recorder.rewrite_block(block), state

        def rewrite_inline(self, inline: Inline, state: None) -> tuple[InlineRewrite, None]:
            return recorder.rewrite_inline(inline), state

    doc = document(div(content=(Para((Emph((Str("a"),)), Str("b"))),)), para("c"))
    walk_top_down(doc, TopDownRecorder(), None)
    assert recorder.seen == ["Div", "Para", "Emph", "a", "b", "Para", "c"]


class Numbering(StatefulPassThrough):
    """Prefixes each Str with the count of Str nodes seen before it."""

    def rewrite_inline(self, inline: Inline, state: int) -> tuple[InlineRewrite, int]:
        if isinstance(inline, Str):
            return Str(f"{state}:{inline.text}"), state + 1
        return None, state


def test_top_down_threads_state_in_document_order() -> None:
    doc = document(
        header(1, "a"),
        BulletList(((para("b"),), (div(content=(para("c"),)),))),
        Para((Note((para("d"),)), Str("e"))),
    )
    result, count = walk_top_down(doc, Numbering(), 0)
    assert collect_text(result) == ["0:a", "1:b", "2:c", "3:d", "4:e"]
    assert count == 5


def test_top_down_walks_children_of_the_replacement() -> None:
    class Retitle(StatefulPassThrough):
        def rewrite_block(self, block: Block, state: int) -> tuple[BlockRewrite, int]:
            if isinstance(block, Header):
                return replace(block, content=(Str("new"),)), state
            return None, state

    class Both(Retitle, Numbering):
        pass

    result, _ = walk_top_down(document(header(2, "old")), Both(), 0)
    assert collect_text(result) == ["0:new"]


def test_top_down_does_not_descend_into_finished_results() -> None:
    class Freeze(Numbering):
        def rewrite_block(self, block: Block, state: int) -> tuple[BlockRewrite, int]:
            if isinstance(block, Header):
                return Finished((block,)), state
            return None, state

    result, count = walk_top_down(document(header(2, "kept"), para("b")), Freeze(), 0)
    assert collect_text(result) == ["kept", "0:b"]
    assert count == 1


def test_walk_blocks_top_down_returns_blocks_and_state() -> None:
    blocks, count = walk_blocks_top_down((para("a"), para("b")), Numbering(), 3)
    assert blocks == (para("3:a"), para("4:b"))
    assert count == 5


def test_splice_and_delete() -> None:
    class Explode(PassThrough):
        def rewrite_block(self, block: Block) -> BlockRewrite:
            if isinstance(block, Div) and block.attr.has_class("drop"):
                return ()
            if isinstance(block, Div):
                return block.content
            return None

    doc = document(
        para("a"),
        div("drop", content=(para("gone"),)),
        div(content=(para("b"), para("c"))),
    )
    result = walk_bottom_up(doc, Explode())
    assert result.blocks == (para("a"), para("b"), para("c"))


def test_walk_reaches_nodes_inside_opaque_payloads(book_json: dict[str, Any]) -> None:
    doc = decode_document(book_json)
    result = walk_bottom_up(doc, Upper())
    texts = collect_text(result)
    assert "CIRCLE" in texts  # table cell
    assert "CAPTION" in texts  # figure caption
    assert result.meta["title"]["c"][0].text == "Essential"  # meta is not walked


def test_structural_totality(book_json: dict[str, Any]) -> None:
    doc = decode_document(book_json)
    before = collect_text(doc)
    after = collect_text(walk_bottom_up(doc, Upper()))
    assert sorted(t.upper() for t in before) == sorted(after)


def test_rule_errors_propagate() -> None:
    class Boom(PassThrough):
        def rewrite_inline(self, inline: Inline) -> InlineRewrite:
            msg = "boom"
            raise RuntimeError(msg)

    with pytest.raises(RuntimeError, match="boom"):
        walk_bottom_up(document(para("x")), Boom())
