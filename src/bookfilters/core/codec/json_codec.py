"""Read and write pandoc's JSON AST.

Every tagged node is encoded as ``{"t": tag, "c": payload}``; nodes without a
payload (``Space``, ``HorizontalRule``, ...) carry only ``"t"``.
"""

import json
from typing import Any

from bookfilters.errors import DocumentDecodeError
from bookfilters.models.document import (
    BLOCK_TYPES,
    INLINE_TYPES,
    Attr,
    Block,
    BlockQuote,
    BulletList,
    Code,
    CodeBlock,
    Div,
    Document,
    Emph,
    Header,
    HorizontalRule,
    Image,
    Inline,
    LineBreak,
    Link,
    Note,
    OrderedList,
    Para,
    Plain,
    RawBlock,
    SoftBreak,
    Space,
    Span,
    Str,
    Strong,
    Table,
    Target,
    UnknownBlock,
    UnknownInline,
)

# Tags pandoc uses for block and inline nodes. Tags in these sets decode to a
# node even when nested inside an opaque payload; everything else stays JSON.
BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "Plain", "Para", "LineBlock", "CodeBlock", "RawBlock", "BlockQuote",
        "OrderedList", "BulletList", "DefinitionList", "Header", "HorizontalRule",
        "Table", "Figure", "Div", "Null",
    }
)
INLINE_TAGS: frozenset[str] = frozenset(
    {
        "Str", "Emph", "Underline", "Strong", "Strikeout", "Superscript", "Subscript",
        "SmallCaps", "Quoted", "Cite", "Code", "Space", "SoftBreak", "LineBreak",
        "Math", "RawInline", "Link", "Image", "Note", "Span",
    }
)


# Decoding


def _split(raw: Any) -> tuple[str, Any]:
    if not isinstance(raw, dict) or not isinstance(raw.get("t"), str):
        msg = f"Expected a tagged node, got {raw!r:.80}"
        raise DocumentDecodeError(msg)
    return raw["t"], raw.get("c")


def _expect_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        msg = f"{what} must be a string, got {value!r:.80}"
        raise DocumentDecodeError(msg)
    return value


def decode_attr(raw: Any) -> Attr:
    identifier, classes, pairs = raw
    if not isinstance(classes, list) or not isinstance(pairs, list):
        msg = f"Attr classes and key-values must be lists, got {raw!r:.80}"
        raise DocumentDecodeError(msg)
    attributes: list[tuple[str, str]] = []
    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 2:
            msg = f"Attr key-value must be a pair, got {pair!r:.80}"
            raise DocumentDecodeError(msg)
        attributes.append((_expect_str(pair[0], "Attr key"), _expect_str(pair[1], "Attr value")))
    return Attr(
        identifier=_expect_str(identifier, "Attr identifier"),
        classes=tuple(_expect_str(name, "Attr class") for name in classes),
        attributes=tuple(attributes),
    )


def decode_target(raw: Any) -> Target:
    url, title = raw
    return Target(url=_expect_str(url, "Target url"), title=_expect_str(title, "Target title"))


def decode_payload(value: Any) -> Any:
    """Decode an opaque payload: lists become tuples, known nodes become models."""
    if isinstance(value, list):
        return tuple(decode_payload(item) for item in value)
    if isinstance(value, dict):
        tag = value.get("t")
        if not isinstance(tag, str):
            return {key: decode_payload(item) for key, item in value.items()}
        if tag == "MetaMap" and isinstance(value.get("c"), dict):
            # Keys of a metadata map are user data, never node fields.
            entries = {key: decode_payload(item) for key, item in value["c"].items()}
            return {**value, "c": entries}
        if tag in BLOCK_TAGS:
            return decode_block(value)
        if tag in INLINE_TAGS:
            return decode_inline(value)
        return {key: decode_payload(item) for key, item in value.items()}
    return value


def decode_blocks(raw: Any) -> tuple[Block, ...]:
    if not isinstance(raw, list):
        msg = f"Expected a list of blocks, got {raw!r:.80}"
        raise DocumentDecodeError(msg)
    return tuple(decode_block(item) for item in raw)


def decode_inlines(raw: Any) -> tuple[Inline, ...]:
    if not isinstance(raw, list):
        msg = f"Expected a list of inlines, got {raw!r:.80}"
        raise DocumentDecodeError(msg)
    return tuple(decode_inline(item) for item in raw)


def _decode_block(tag: str, c: Any, raw: dict[str, Any]) -> Block:
    match tag:
        case "Plain":
            return Plain(decode_inlines(c))
        case "Para":
            return Para(decode_inlines(c))
        case "Header":
            level, attr, content = c
            if not isinstance(level, int):
                msg = f"Header level must be an integer, got {level!r}"
                raise DocumentDecodeError(msg)
            return Header(level, decode_attr(attr), decode_inlines(content))
        case "Div":
            attr, content = c
            return Div(decode_attr(attr), decode_blocks(content))
        case "BlockQuote":
            return BlockQuote(decode_blocks(c))
        case "BulletList":
            return BulletList(tuple(decode_blocks(item) for item in c))
        case "OrderedList":
            list_attributes, items = c
            return OrderedList(
                decode_payload(list_attributes), tuple(decode_blocks(item) for item in items)
            )
        case "Table":
            attr, *rest = c
            return Table(decode_attr(attr), decode_payload(rest))
        case "CodeBlock":
            attr, text = c
            return CodeBlock(decode_attr(attr), _expect_str(text, "CodeBlock text"))
        case "RawBlock":
            fmt, text = c
            return RawBlock(_expect_str(fmt, "RawBlock format"), _expect_str(text, "RawBlock text"))
        case "HorizontalRule":
            return HorizontalRule()
        case _:
            return UnknownBlock(tag, decode_payload(c) if "c" in raw else None)


def _decode_inline(tag: str, c: Any, raw: dict[str, Any]) -> Inline:
    match tag:
        case "Str":
            if not isinstance(c, str):
                msg = f"Str content must be a string, got {c!r:.80}"
                raise DocumentDecodeError(msg)
            return Str(c)
        case "Space":
            return Space()
        case "SoftBreak":
            return SoftBreak()
        case "LineBreak":
            return LineBreak()
        case "Emph":
            return Emph(decode_inlines(c))
        case "Strong":
            return Strong(decode_inlines(c))
        case "Span":
            attr, content = c
            return Span(decode_attr(attr), decode_inlines(content))
        case "Link":
            attr, content, target = c
            return Link(decode_attr(attr), decode_inlines(content), decode_target(target))
        case "Image":
            attr, content, target = c
            return Image(decode_attr(attr), decode_inlines(content), decode_target(target))
        case "Code":
            attr, text = c
            return Code(decode_attr(attr), _expect_str(text, "Code text"))
        case "Note":
            return Note(decode_blocks(c))
        case _:
            return UnknownInline(tag, decode_payload(c) if "c" in raw else None)


def decode_block(raw: Any) -> Block:
    tag, c = _split(raw)
    try:
        return _decode_block(tag, c, raw)
    except DocumentDecodeError:
        raise
    except (TypeError, ValueError) as exc:
        msg = f"Malformed {tag!r} block: {exc}"
        raise DocumentDecodeError(msg) from exc


def decode_inline(raw: Any) -> Inline:
    tag, c = _split(raw)
    try:
        return _decode_inline(tag, c, raw)
    except DocumentDecodeError:
        raise
    except (TypeError, ValueError) as exc:
        msg = f"Malformed {tag!r} inline: {exc}"
        raise DocumentDecodeError(msg) from exc


def decode_document(data: Any) -> Document:
    """Decode a parsed JSON value into a Document.

    Raises:
        DocumentDecodeError: If ``data`` is not a pandoc document (the pre-1.18
            ``[meta, blocks]`` layout included).
    """
    if not isinstance(data, dict) or "blocks" not in data:
        msg = "Input is not a pandoc JSON document (missing 'blocks')"
        raise DocumentDecodeError(msg)
    version = data.get("pandoc-api-version")
    if not isinstance(version, list) or not all(isinstance(v, int) for v in version):
        msg = f"Invalid pandoc-api-version: {version!r}"
        raise DocumentDecodeError(msg)
    meta = data.get("meta", {})
    if not isinstance(meta, dict):
        msg = f"Document meta must be an object, got {meta!r:.80}"
        raise DocumentDecodeError(msg)
    return Document(
        api_version=tuple(version),
        meta={key: decode_payload(value) for key, value in meta.items()},
        blocks=decode_blocks(data["blocks"]),
    )


def read_document(text: str) -> Document:
    """Parse pandoc JSON text into a Document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Input is not valid JSON: {exc}"
        raise DocumentDecodeError(msg) from exc
    return decode_document(data)


# Encoding


def _node(tag: str, content: Any = None, *, bare: bool = False) -> dict[str, Any]:
    if bare:
        return {"t": tag}
    return {"t": tag, "c": content}


def encode_attr(attr: Attr) -> list[Any]:
    return [attr.identifier, list(attr.classes), [[key, value] for key, value in attr.attributes]]


def encode_payload(value: Any) -> Any:
    if isinstance(value, tuple | list):
        return [encode_payload(item) for item in value]
    if isinstance(value, dict):
        return {key: encode_payload(item) for key, item in value.items()}
    if isinstance(value, BLOCK_TYPES):
        return encode_block(value)
    if isinstance(value, INLINE_TYPES):
        return encode_inline(value)
    return value


def encode_blocks(blocks: tuple[Block, ...]) -> list[dict[str, Any]]:
    return [encode_block(block) for block in blocks]


def encode_inlines(inlines: tuple[Inline, ...]) -> list[dict[str, Any]]:
    return [encode_inline(inline) for inline in inlines]


def encode_block(block: Block) -> dict[str, Any]:
    match block:
        case Plain(content):
            return _node("Plain", encode_inlines(content))
        case Para(content):
            return _node("Para", encode_inlines(content))
        case Header(level, attr, content):
            return _node("Header", [level, encode_attr(attr), encode_inlines(content)])
        case Div(attr, content):
            return _node("Div", [encode_attr(attr), encode_blocks(content)])
        case BlockQuote(content):
            return _node("BlockQuote", encode_blocks(content))
        case BulletList(items):
            return _node("BulletList", [encode_blocks(item) for item in items])
        case OrderedList(list_attributes, items):
            return _node(
                "OrderedList",
                [encode_payload(list_attributes), [encode_blocks(item) for item in items]],
            )
        case Table(attr, payload):
            return _node("Table", [encode_attr(attr), *encode_payload(payload)])
        case CodeBlock(attr, text):
            return _node("CodeBlock", [encode_attr(attr), text])
        case RawBlock(fmt, text):
            return _node("RawBlock", [fmt, text])
        case HorizontalRule():
            return _node("HorizontalRule", bare=True)
        case UnknownBlock(tag, content):
            return _node(tag, encode_payload(content), bare=content is None)
    msg = f"Not a block node: {block!r:.80}"
    raise TypeError(msg)


def encode_inline(inline: Inline) -> dict[str, Any]:
    match inline:
        case Str(text):
            return _node("Str", text)
        case Space():
            return _node("Space", bare=True)
        case SoftBreak():
            return _node("SoftBreak", bare=True)
        case LineBreak():
            return _node("LineBreak", bare=True)
        case Emph(content):
            return _node("Emph", encode_inlines(content))
        case Strong(content):
            return _node("Strong", encode_inlines(content))
        case Span(attr, content):
            return _node("Span", [encode_attr(attr), encode_inlines(content)])
        case Link(attr, content, target):
            return _node(
                "Link", [encode_attr(attr), encode_inlines(content), [target.url, target.title]]
            )
        case Image(attr, content, target):
            return _node(
                "Image", [encode_attr(attr), encode_inlines(content), [target.url, target.title]]
            )
        case Code(attr, text):
            return _node("Code", [encode_attr(attr), text])
        case Note(content):
            return _node("Note", encode_blocks(content))
        case UnknownInline(tag, content):
            return _node(tag, encode_payload(content), bare=content is None)
    msg = f"Not an inline node: {inline!r:.80}"
    raise TypeError(msg)


def encode_document(doc: Document) -> dict[str, Any]:
    return {
        "pandoc-api-version": list(doc.api_version),
        "meta": {key: encode_payload(value) for key, value in doc.meta.items()},
        "blocks": encode_blocks(doc.blocks),
    }


def write_document(doc: Document) -> str:
    """Serialize a Document as compact JSON, the way pandoc writes it."""
    return json.dumps(encode_document(doc), ensure_ascii=False, separators=(",", ":"))
