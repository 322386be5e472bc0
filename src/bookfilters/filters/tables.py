"""Wrap tables in a scrollable container for screen formats."""

from loguru import logger

from bookfilters.config import RESPONSIVE_TABLE_FORMATS, TABLE_WRAPPER_CLASS
from bookfilters.core.tree.walk import walk_bottom_up
from bookfilters.models.document import Attr, Block, Div, Document, Table
from bookfilters.protocols import BlockRewrite, PassThrough

WRAPPER_ATTR = Attr(classes=(TABLE_WRAPPER_CLASS,))


def _is_wrapper(block: Block) -> bool:
    return isinstance(block, Div) and block.attr == WRAPPER_ATTR


class ResponsiveTables(PassThrough):
    def rewrite_block(self, block: Block) -> BlockRewrite:
        match block:
            case Table():
                return Div(WRAPPER_ATTR, (block,))
            # A wrapper around a fresh wrapper means the table was wrapped on an
            # earlier run.
            case Div(content=(inner,)) if _is_wrapper(block) and _is_wrapper(inner):
                return inner
        return None


def wrap_tables(doc: Document, fmt: str) -> Document:
    """Wrap every table in ``Div.table-responsive`` when ``fmt`` is a screen format."""
    if fmt not in RESPONSIVE_TABLE_FORMATS:
        logger.debug("Format {!r} needs no table wrappers", fmt)
        return doc
    return walk_bottom_up(doc, ResponsiveTables())
