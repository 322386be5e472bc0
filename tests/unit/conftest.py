"""Shared test fixtures."""

import sys
from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger

from tests.unit.builders import ATTR_JSON, document_json, plain_json, str_json, table_json


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop sinks a CLI test bound to CliRunner streams."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def captured_logs() -> Iterator[list[str]]:
    """Collect loguru messages as ``LEVEL: message`` strings."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda m: messages.append(f"{m.record['level'].name}: {m.record['message']}"),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def book_json() -> dict[str, Any]:
    """A chapter with an exercise, its solution, a table, a figure and the appendix."""
    return document_json(
        {"t": "Header", "c": [1, ["traits", [], []], [str_json("Traits")]]},
        {
            "t": "Para",
            "c": [
                str_json("See"),
                {"t": "Space"},
                {
                    "t": "Image",
                    "c": [ATTR_JSON, [str_json("Shapes")], ["diagrams/shapes.pdf+svg", ""]],
                },
                {"t": "SoftBreak"},
                {"t": "Math", "c": [{"t": "InlineMath"}, "x^2"]},
            ],
        },
        {"t": "Header", "c": [2, ["exercise-shaping-up", [], []], [str_json("Shaping")]]},
        {"t": "CodeBlock", "c": [["", ["scala"], []], "trait Shape"]},
        {"t": "Div", "c": [["", ["solution"], []], [{"t": "Para", "c": [str_json("Answer")]}]]},
        table_json("Name", "Circle"),
        {"t": "HorizontalRule"},
        {
            "t": "Figure",
            "c": [
                ATTR_JSON,
                [None, [plain_json("Caption")]],
                [{"t": "Plain", "c": [{"t": "Image", "c": [ATTR_JSON, [], ["img/a.pdf+svg", ""]]}]}],
            ],
        },
        {"t": "Div", "c": [["solutions", ["solutions"], []], []]},
        meta={"title": {"t": "MetaInlines", "c": [str_json("Essential")]}},
    )
