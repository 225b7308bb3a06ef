"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from trackedit.model import Node, blockquote, doc, paragraph


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TRACKEDIT_AUTHOR",
        "TRACKEDIT_LOG_LEVEL",
        "TRACKEDIT_CHECK_INVARIANTS",
        "TRACKEDIT_DEBUG_LOGGING",
        "TRACKEDIT_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def two_paragraphs() -> Node:
    return doc(paragraph("foo"), paragraph("bar"))


@pytest.fixture
def nested_doc() -> Node:
    return doc(paragraph("one"), blockquote(paragraph("two"), paragraph("three")))
