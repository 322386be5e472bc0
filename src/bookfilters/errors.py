"""Errors raised by the document filters."""


class FilterError(Exception):
    """Base class for failures that abort a filter run."""


class DocumentDecodeError(FilterError, ValueError):
    """The input does not decode into a pandoc document."""


class SolutionBeforeHeaderError(FilterError):
    """A solution call-out appears before any heading."""
