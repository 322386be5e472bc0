"""Pick an image file format to suit the output format.

Figures are referenced as ``diagrams/fig1.pdf+svg``, meaning both
``fig1.pdf`` and ``fig1.svg`` exist. Print output gets the PDF, screen output
the SVG.
"""

import re
from dataclasses import replace

from loguru import logger

from bookfilters.config import (
    PRINT_FORMATS,
    PRINT_IMAGE_EXTENSION,
    SCREEN_FORMATS,
    SCREEN_IMAGE_EXTENSION,
)
from bookfilters.core.tree.walk import walk_bottom_up
from bookfilters.models.document import Document, Image, Inline
from bookfilters.protocols import InlineRewrite, PassThrough

DUAL_EXTENSION = re.compile(r"^(?P<stem>.+)\.(?P<first>[A-Za-z0-9]+)\+(?P<second>[A-Za-z0-9]+)$")


def image_extension_for(fmt: str) -> str | None:
    """Return the image extension to use for ``fmt``, or None to leave images alone."""
    if fmt in PRINT_FORMATS:
        return PRINT_IMAGE_EXTENSION
    if fmt in SCREEN_FORMATS:
        return SCREEN_IMAGE_EXTENSION
    return None


class ImageExtensions(PassThrough):
    def __init__(self, extension: str) -> None:
        self.extension = extension

    def rewrite_inline(self, inline: Inline) -> InlineRewrite:
        if not isinstance(inline, Image):
            return None
        match = DUAL_EXTENSION.match(inline.target.url)
        if match is None:
            return None
        url = f"{match['stem']}.{self.extension}"
        logger.debug("Image {} -> {}", inline.target.url, url)
        return replace(inline, target=replace(inline.target, url=url))


def rewrite_image_extensions(doc: Document, fmt: str) -> Document:
    """Rewrite ``<stem>.<ext1>+<ext2>`` image URLs to the extension chosen for ``fmt``."""
    extension = image_extension_for(fmt)
    if extension is None:
        logger.debug("Format {!r} has no image extension, leaving images alone", fmt)
        return doc
    return walk_bottom_up(doc, ImageExtensions(extension))
