"""Pandoc filters for building the course book."""

from bookfilters.core.codec.json_codec import read_document, write_document
from bookfilters.core.tree.walk import walk_blocks_top_down, walk_bottom_up, walk_top_down
from bookfilters.filters.images import rewrite_image_extensions
from bookfilters.filters.solutions import relocate_solutions
from bookfilters.filters.tables import wrap_tables
from bookfilters.protocols import (
    Finished,
    PassThrough,
    Rules,
    StatefulPassThrough,
    StatefulRules,
)

__all__ = [
    "Finished",
    "PassThrough",
    "Rules",
    "StatefulPassThrough",
    "StatefulRules",
    "read_document",
    "relocate_solutions",
    "rewrite_image_extensions",
    "walk_blocks_top_down",
    "walk_bottom_up",
    "walk_top_down",
    "wrap_tables",
    "write_document",
]
