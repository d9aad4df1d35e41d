"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language, get_parser

from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Capture assertions for annotated C snippets
# ---------------------------------------------------------------------------

CAPTURE_MARKER = "//!?"


def parse_capture_annotations(annotated: str) -> tuple[str, dict[tuple[int, int], set[str]]]:
    """Split annotated input into plain code and the captures expected at each (row, column).

    A line whose first non-blank text is ``//!?`` lists capture names expected to
    start on the previous code line at the column where the marker begins.
    """
    code_lines: list[str] = []
    expected: dict[tuple[int, int], set[str]] = {}
    for line in annotated.split("\n"):
        stripped = line.lstrip()
        if stripped.startswith(CAPTURE_MARKER):
            position = (len(code_lines) - 1, len(line) - len(stripped))
            assert position not in expected, f"Duplicate capture annotation at {position}"
            expected[position] = set(stripped.split()[1:])
        else:
            code_lines.append(line)
    return "\n".join(code_lines), expected


def assert_captures(query_source: str, annotated: str) -> None:
    """Run ``query_source`` over the annotated snippet and compare captures with the annotations."""
    code, expected = parse_capture_annotations(annotated)
    source = SourceInfo.new("test.c", code)
    helper = QueryHelper(query_source, source.tree, source.code)

    actual: dict[tuple[int, int], set[str]] = {}
    for name, node in helper.captures():
        actual.setdefault((node.start_point[0], node.start_point[1]), set()).add(name)
    assert actual == expected


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def c_parser() -> Parser:
    """Return a tree-sitter parser for C."""
    return get_parser("c")


@pytest.fixture
def c_language() -> Language:
    """Return the tree-sitter C language."""
    return get_language("c")


@pytest.fixture
def make_source() -> Callable[[str], SourceInfo]:
    """Return a factory building a SourceInfo named test.c from C text."""

    def _make(text: str) -> SourceInfo:
        return SourceInfo.new("test.c", text)

    return _make
