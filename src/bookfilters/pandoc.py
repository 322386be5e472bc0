"""Assemble the pandoc command line for a book build."""

from collections.abc import Sequence

from loguru import logger

from bookfilters.config import DEFAULT_TOC_DEPTH, HIGHLIGHT_STYLE, MARKDOWN_EXTENSIONS


def command_line(
    pages: Sequence[str],
    output: str,
    *,
    metadata: Sequence[str] = (),
    template: str | None = None,
    filters: Sequence[str] = (),
    toc_depth: int = DEFAULT_TOC_DEPTH,
    extra_args: Sequence[str] = (),
) -> str:
    """Build the pandoc invocation rendering ``pages`` into ``output``.

    Args:
        pages: Markdown pages, in book order.
        output: Output file; its extension selects pandoc's writer.
        metadata: YAML files passed as ``--metadata-file``.
        template: Optional pandoc template name.
        filters: Filter executables, run in the given order.
        toc_depth: Heading depth included in the table of contents.
        extra_args: Arguments inserted before the metadata files.

    Returns:
        The command as a single space-separated string. Nothing is run.
    """
    parts = [
        "pandoc",
        f"--output={output}",
        "--from=markdown+" + "+".join(MARKDOWN_EXTENSIONS),
    ]
    if template is not None:
        parts.append(f"--template={template}")
    parts.extend(f"--filter={name}" for name in filters)
    parts.extend(
        [
            "--top-level-division=chapter",
            "--number-sections",
            "--table-of-contents",
            f"--highlight-style {HIGHLIGHT_STYLE}",
            "--standalone",
            "--self-contained",
            f"--toc-depth={toc_depth}",
        ]
    )
    parts.extend(extra_args)
    parts.extend(f"--metadata-file={path}" for path in metadata)
    parts.extend(pages)

    command = " ".join(parts)
    logger.info("pandoc command: {}", command)
    return command
