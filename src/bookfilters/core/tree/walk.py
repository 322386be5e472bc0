"""Tree walkers: bottom-up rewrites and top-down rewrites with threaded state."""

from collections.abc import Iterable
from dataclasses import replace
from typing import Any, Generic, TypeVar

from bookfilters.models.document import (
    BLOCK_TYPES,
    INLINE_TYPES,
    Block,
    BlockQuote,
    BulletList,
    Div,
    Document,
    Emph,
    Header,
    Image,
    Inline,
    Link,
    Note,
    OrderedList,
    Para,
    Plain,
    Span,
    Strong,
    Table,
    UnknownBlock,
    UnknownInline,
)
from bookfilters.protocols import BlockRewrite, Finished, InlineRewrite, Rules, StatefulRules

S = TypeVar("S")


def _results(node: Any, rewrite: BlockRewrite | InlineRewrite) -> tuple[Any, ...]:
    if rewrite is None:
        return (node,)
    if isinstance(rewrite, Finished):
        return rewrite.nodes
    if isinstance(rewrite, BLOCK_TYPES + INLINE_TYPES):
        return (rewrite,)
    return tuple(rewrite)


def _single(nodes: tuple[Any, ...]) -> Any:
    if len(nodes) != 1:
        msg = f"Cannot splice {len(nodes)} nodes outside of a node list"
        raise ValueError(msg)
    return nodes[0]


class _Walker:
    """Structural recursion shared by both walks.

    Subclasses decide when the rules run relative to ``descend_*``.
    """

    def block(self, block: Block) -> tuple[Block, ...]:
        raise NotImplementedError

    def inline(self, inline: Inline) -> tuple[Inline, ...]:
        raise NotImplementedError

    def blocks(self, blocks: Iterable[Block]) -> tuple[Block, ...]:
        out: list[Block] = []
        for block in blocks:
            out.extend(self.block(block))
        return tuple(out)

    def inlines(self, inlines: Iterable[Inline]) -> tuple[Inline, ...]:
        out: list[Inline] = []
        for inline in inlines:
            out.extend(self.inline(inline))
        return tuple(out)

    def payload(self, value: Any) -> Any:
        """Walk an opaque payload, reaching the nodes decoded inside it."""
        if isinstance(value, tuple):
            out: list[Any] = []
            for item in value:
                if isinstance(item, BLOCK_TYPES):
                    out.extend(self.block(item))
                elif isinstance(item, INLINE_TYPES):
                    out.extend(self.inline(item))
                else:
                    out.append(self.payload(item))
            return tuple(out)
        if isinstance(value, dict):
            return {key: self.payload(item) for key, item in value.items()}
        if isinstance(value, BLOCK_TYPES):
            return _single(self.block(value))
        if isinstance(value, INLINE_TYPES):
            return _single(self.inline(value))
        return value

    def descend_block(self, block: Block) -> Block:
        match block:
            case Plain() | Para() | Header():
                return replace(block, content=self.inlines(block.content))
            case Div() | BlockQuote():
                return replace(block, content=self.blocks(block.content))
            case BulletList() | OrderedList():
                return replace(block, items=tuple(self.blocks(item) for item in block.items))
            case Table():
                return replace(block, payload=self.payload(block.payload))
            case UnknownBlock():
                return replace(block, content=self.payload(block.content))
        # CodeBlock, RawBlock, HorizontalRule: leaves.
        return block

    def descend_inline(self, inline: Inline) -> Inline:
        match inline:
            case Emph() | Strong() | Span() | Link() | Image():
                return replace(inline, content=self.inlines(inline.content))
            case Note():
                return replace(inline, content=self.blocks(inline.content))
            case UnknownInline():
                return replace(inline, content=self.payload(inline.content))
        return inline


class _BottomUp(_Walker):
    def __init__(self, rules: Rules) -> None:
        self.rules = rules

    def block(self, block: Block) -> tuple[Block, ...]:
        block = self.descend_block(block)
        return _results(block, self.rules.rewrite_block(block))

    def inline(self, inline: Inline) -> tuple[Inline, ...]:
        inline = self.descend_inline(inline)
        return _results(inline, self.rules.rewrite_inline(inline))


class _TopDown(_Walker, Generic[S]):
    def __init__(self, rules: StatefulRules[S], state: S) -> None:
        self.rules = rules
        self.state = state

    def block(self, block: Block) -> tuple[Block, ...]:
        rewrite, self.state = self.rules.rewrite_block(block, self.state)
        if isinstance(rewrite, Finished):
            return rewrite.nodes
        return tuple(self.descend_block(node) for node in _results(block, rewrite))

    def inline(self, inline: Inline) -> tuple[Inline, ...]:
        rewrite, self.state = self.rules.rewrite_inline(inline, self.state)
        if isinstance(rewrite, Finished):
            return rewrite.nodes
        return tuple(self.descend_inline(node) for node in _results(inline, rewrite))


def walk_bottom_up(doc: Document, rules: Rules) -> Document:
    """Rewrite every node of ``doc``, children before their parent.

    A node offered to ``rules`` already holds its rewritten children, and a
    replacement is not walked again. Metadata is left untouched.
    """
    return replace(doc, blocks=_BottomUp(rules).blocks(doc.blocks))


def walk_top_down(doc: Document, rules: StatefulRules[S], state: S) -> tuple[Document, S]:
    """Rewrite every node of ``doc``, parent first, threading ``state``.

    Nodes are offered in document order (depth-first, left to right). The state
    returned for a node is the one seen by its children and by every node after
    it. Children of a replacement node are walked, not those of the original,
    unless the rule returned it inside ``Finished``.

    Returns:
        The rewritten document and the final state.
    """
    blocks, state = walk_blocks_top_down(doc.blocks, rules, state)
    return replace(doc, blocks=blocks), state


def walk_blocks_top_down(
    blocks: Iterable[Block], rules: StatefulRules[S], state: S
) -> tuple[tuple[Block, ...], S]:
    """``walk_top_down`` over a block list, for rules that walk a node's children themselves."""
    walker = _TopDown(rules, state)
    return walker.blocks(blocks), walker.state
