"""Command-line entry points: the pandoc filters and the build helper."""

from collections.abc import Callable
from typing import Annotated

import typer
from loguru import logger

from bookfilters.config import DEFAULT_TOC_DEPTH, resolve_verbose
from bookfilters.core.codec.json_codec import read_document, write_document
from bookfilters.errors import FilterError
from bookfilters.filters.images import rewrite_image_extensions
from bookfilters.filters.solutions import relocate_solutions
from bookfilters.filters.tables import wrap_tables
from bookfilters.logging_config import configure_logging
from bookfilters.models.document import Document
from bookfilters.pandoc import command_line

FilterFunc = Callable[[Document, str], Document]

FILTERS: dict[str, FilterFunc] = {
    "solutions": lambda doc, _fmt: relocate_solutions(doc),
    "tables": wrap_tables,
    "images": rewrite_image_extensions,
}

FormatArg = Annotated[
    str,
    typer.Argument(metavar="FORMAT", help="Output format pandoc is writing (html, latex, ...)"),
]


def run_filter(transform: FilterFunc, fmt: str) -> None:
    """Read a pandoc document from stdin, transform it, write it to stdout.

    Decode errors and filter precondition failures are logged and exit with
    status 1. Anything else propagates.
    """
    source = typer.get_text_stream("stdin", encoding="utf-8").read()
    try:
        doc = read_document(source)
        result = transform(doc, fmt)
    except FilterError as exc:
        logger.error("{}", exc)
        raise typer.Exit(1) from exc

    out = typer.get_text_stream("stdout", encoding="utf-8")
    out.write(write_document(result))
    out.flush()


def _filter_app(name: str, help_text: str) -> typer.Typer:
    filter_app = typer.Typer(add_completion=False, help=help_text)

    @filter_app.command(name=name, help=help_text)
    def _run(fmt: FormatArg = "") -> None:
        configure_logging(verbose=resolve_verbose(), name=f"{name}-filter")
        run_filter(FILTERS[name], fmt)

    return filter_app


solutions_app = _filter_app("solutions", "Move solution call-outs into the solutions appendix.")
tables_app = _filter_app("tables", "Wrap tables for horizontal scrolling in screen formats.")
images_app = _filter_app("images", "Pick PDF or SVG for dual-format image references.")


app = typer.Typer(help="Pandoc filters and build helpers for the course book.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose or resolve_verbose())


@app.command(name="filter")
def filter_cmd(
    name: str = typer.Argument(..., help=f"Filter to run: {', '.join(FILTERS)}"),
    fmt: FormatArg = "",
) -> None:
    """Run one filter over a pandoc JSON document on stdin."""
    transform = FILTERS.get(name)
    if transform is None:
        logger.error("Unknown filter {!r}; choose one of {}", name, ", ".join(FILTERS))
        raise typer.Exit(1)
    run_filter(transform, fmt)


@app.command()
def command(
    pages: Annotated[list[str], typer.Argument(help="Markdown pages in book order")],
    output: Annotated[str, typer.Option("--output", "-o", help="Output file")],
    metadata: Annotated[
        list[str] | None,
        typer.Option("--metadata", "-m", help="Metadata YAML file (repeatable)"),
    ] = None,
    template: Annotated[
        str | None,
        typer.Option("--template", "-t", help="Pandoc template"),
    ] = None,
    filters: Annotated[
        list[str] | None,
        typer.Option("--filter", "-f", help="Filter executable (repeatable)"),
    ] = None,
    toc_depth: int = typer.Option(DEFAULT_TOC_DEPTH, "--toc-depth", help="TOC depth"),
    extra_args: Annotated[
        list[str] | None,
        typer.Option("--extra-arg", "-x", help="Extra pandoc argument (repeatable)"),
    ] = None,
) -> None:
    """Print the pandoc command line for a book build."""
    typer.echo(
        command_line(
            pages,
            output,
            metadata=metadata or (),
            template=template,
            filters=filters or (),
            toc_depth=toc_depth,
            extra_args=extra_args or (),
        )
    )
