"""Configuration constants for the book filters."""

import os

# Environment variable enabling debug logging. Pandoc passes filters nothing but
# the output format, so there is no flag for it.
DEBUG_ENV_VAR: str = "BOOKFILTERS_DEBUG"

# Div classes marking solution call-outs and the appendix that collects them.
SOLUTION_CLASS: str = "solution"
SOLUTIONS_CLASS: str = "solutions"

# Tables are wrapped for horizontal scrolling only in these output formats.
RESPONSIVE_TABLE_FORMATS: frozenset[str] = frozenset(
    {"html", "html4", "html5", "epub", "epub2", "epub3"}
)
TABLE_WRAPPER_CLASS: str = "table-responsive"

# Image extension picked for "<stem>.<ext1>+<ext2>" URLs, by output format.
# Formats missing here leave image URLs alone.
PRINT_FORMATS: frozenset[str] = frozenset({"latex", "pdf", "beamer", "context"})
SCREEN_FORMATS: frozenset[str] = frozenset(
    {"html", "html4", "html5", "epub", "epub2", "epub3"}
)
PRINT_IMAGE_EXTENSION: str = "pdf"
SCREEN_IMAGE_EXTENSION: str = "svg"

# Markdown reader extensions used when assembling the pandoc command line.
MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "grid_tables",
    "multiline_tables",
    "fenced_code_blocks",
    "fenced_code_attributes",
    "yaml_metadata_block",
    "implicit_figures",
    "header_attributes",
    "definition_lists",
    "link_attributes",
)

DEFAULT_TOC_DEPTH: int = 3
HIGHLIGHT_STYLE: str = "tango"


def resolve_verbose() -> bool:
    """Return True when debug logging was requested through the environment."""
    value = os.environ.get(DEBUG_ENV_VAR, "")
    return value.strip().lower() in {"1", "true", "yes", "on"}
