"""Domain models for pandoc documents.

Only the node kinds the filters care about (and the containers they must
descend into) are modelled. Anything else decodes to ``UnknownBlock`` or
``UnknownInline`` and is written back untouched.

Payloads that are not modelled field by field (``Table``, unknown nodes,
``OrderedList`` attributes) keep the JSON structure with lists as tuples.
Known nodes nested inside them are decoded, so traversal still reaches them.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Attr:
    """Identifier, classes and key-value pairs attached to a node."""

    identifier: str = ""
    classes: tuple[str, ...] = ()
    attributes: tuple[tuple[str, str], ...] = ()

    def has_class(self, name: str) -> bool:
        return name in self.classes


@dataclass(frozen=True)
class Target:
    """Destination of a link or image."""

    url: str
    title: str = ""


# Inline nodes


@dataclass(frozen=True)
class Str:
    text: str


@dataclass(frozen=True)
class Space:
    pass


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class LineBreak:
    pass


@dataclass(frozen=True)
class Emph:
    content: tuple["Inline", ...]


@dataclass(frozen=True)
class Strong:
    content: tuple["Inline", ...]


@dataclass(frozen=True)
class Span:
    attr: Attr
    content: tuple["Inline", ...]


@dataclass(frozen=True)
class Link:
    attr: Attr
    content: tuple["Inline", ...]
    target: Target


@dataclass(frozen=True)
class Image:
    """An image; ``content`` is the alt text / caption."""

    attr: Attr
    content: tuple["Inline", ...]
    target: Target


@dataclass(frozen=True)
class Code:
    attr: Attr
    text: str


@dataclass(frozen=True)
class Note:
    """A footnote, holding blocks."""

    content: tuple["Block", ...]


@dataclass(frozen=True)
class UnknownInline:
    """An inline node kind we do not model. ``content`` is None when absent."""

    tag: str
    content: Any = None


# Block nodes


@dataclass(frozen=True)
class Plain:
    content: tuple["Inline", ...]


@dataclass(frozen=True)
class Para:
    content: tuple["Inline", ...]


@dataclass(frozen=True)
class Header:
    level: int
    attr: Attr
    content: tuple["Inline", ...]


@dataclass(frozen=True)
class Div:
    """Generic container; filters use its classes as type tags."""

    attr: Attr
    content: tuple["Block", ...]


@dataclass(frozen=True)
class BlockQuote:
    content: tuple["Block", ...]


@dataclass(frozen=True)
class BulletList:
    items: tuple[tuple["Block", ...], ...]


@dataclass(frozen=True)
class OrderedList:
    list_attributes: Any
    items: tuple[tuple["Block", ...], ...]


@dataclass(frozen=True)
class Table:
    """A table. Caption, column specs, head, bodies and foot stay in ``payload``."""

    attr: Attr
    payload: tuple[Any, ...]


@dataclass(frozen=True)
class CodeBlock:
    attr: Attr
    text: str


@dataclass(frozen=True)
class RawBlock:
    format: str
    text: str


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class UnknownBlock:
    """A block node kind we do not model. ``content`` is None when absent."""

    tag: str
    content: Any = None


Inline = (
    Str
    | Space
    | SoftBreak
    | LineBreak
    | Emph
    | Strong
    | Span
    | Link
    | Image
    | Code
    | Note
    | UnknownInline
)

Block = (
    Plain
    | Para
    | Header
    | Div
    | BlockQuote
    | BulletList
    | OrderedList
    | Table
    | CodeBlock
    | RawBlock
    | HorizontalRule
    | UnknownBlock
)

BLOCK_TYPES: tuple[type, ...] = Block.__args__
INLINE_TYPES: tuple[type, ...] = Inline.__args__


@dataclass(frozen=True)
class Document:
    """A whole pandoc document: API version, metadata and top-level blocks."""

    api_version: tuple[int, ...] = (1, 23, 1)
    meta: dict[str, Any] = field(default_factory=dict)
    blocks: tuple[Block, ...] = ()
