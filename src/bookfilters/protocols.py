"""Rewrite rules plugged into the tree walkers.

A rule method returns ``None`` when it does not apply to the node (the node is
kept), a single node to replace it, or a sequence of nodes to splice in its
place. An empty sequence removes the node. Wrapping the result in ``Finished``
tells the top-down walker the replacement is complete and must not be
descended into.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

from bookfilters.models.document import Block, Inline

S = TypeVar("S")


@dataclass(frozen=True)
class Finished:
    """Replacement nodes whose children were already handled by the rule."""

    nodes: tuple[Block | Inline, ...]


BlockRewrite = Block | Sequence[Block] | Finished | None
InlineRewrite = Inline | Sequence[Inline] | Finished | None


@runtime_checkable
class Rules(Protocol):
    """Stateless rules for ``walk_bottom_up``."""

    def rewrite_block(self, block: Block) -> BlockRewrite:
        """Rewrite a block whose children are already rewritten."""
        ...

    def rewrite_inline(self, inline: Inline) -> InlineRewrite:
        """Rewrite an inline whose children are already rewritten."""
        ...


@runtime_checkable
class StatefulRules(Protocol[S]):
    """Rules for ``walk_top_down``; each call returns the updated state."""

    def rewrite_block(self, block: Block, state: S) -> tuple[BlockRewrite, S]:
        """Rewrite a block before its children are visited."""
        ...

    def rewrite_inline(self, inline: Inline, state: S) -> tuple[InlineRewrite, S]:
        """Rewrite an inline before its children are visited."""
        ...


class PassThrough:
    """Rules that never apply. Subclass and override the arm you need."""

    def rewrite_block(self, block: Block) -> BlockRewrite:
        return None

    def rewrite_inline(self, inline: Inline) -> InlineRewrite:
        return None


class StatefulPassThrough:
    """Stateful rules that never apply and leave the state alone."""

    def rewrite_block(self, block: Block, state: S) -> tuple[BlockRewrite, S]:
        return None, state

    def rewrite_inline(self, inline: Inline, state: S) -> tuple[InlineRewrite, S]:
        return None, state
