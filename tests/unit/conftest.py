"""Shared test fixtures."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from term_highlight.core.importer.json_reader import node_to_json
from term_highlight.models.node import Node
from tests.unit.fakes import doc, li, p, t, ul

CAT_TEXT = "The cat sat on the cat mat"


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop sinks added by a test (the CLI adds one bound to the runner's stderr)."""
    yield
    logger.remove()
    logger.disable("term_highlight")


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture package log records at WARNING and above."""
    messages: list[str] = []
    logger.enable("term_highlight")
    handler_id = logger.add(lambda m: messages.append(str(m)), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def cat_doc() -> Node:
    """One paragraph; matches of "cat" at [5, 8) and [20, 23)."""
    return doc(p(t(CAT_TEXT)))


@pytest.fixture
def selected_doc() -> Node:
    """Paragraph P1 spans [0, 13) with "cat" at [5, 8); the next paragraph has "cat" at [21, 24)."""
    return doc(p(t("The cat sat"), objectId="P1"), p(t("on the cat mat")))


@pytest.fixture
def mixed_doc() -> Node:
    """Selected paragraph, a list whose first item splits "cat" across formatting, a plain paragraph."""
    return doc(
        p(t("The cat sat"), objectId="P1"),
        ul(
            li(p(t("ca"), t("t food", "bold"))),
            li(p(t("dog")), p(t("bird"))),
        ),
        p(t("concat"), t("enate", "em")),
    )


@pytest.fixture
def cat_doc_file(tmp_path: Path, cat_doc: Node) -> Path:
    path = tmp_path / "cat.json"
    path.write_text(json.dumps(node_to_json(cat_doc)))
    return path
