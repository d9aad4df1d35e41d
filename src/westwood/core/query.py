"""Tree-sitter query execution with custom structural predicates.

Supported custom predicates, each also available negated with a ``not-`` prefix:

- ``#has-ancestor? @capture "kind"`` holds when some ancestor of the captured
  node has the given kind.
- ``#has-parent? @capture "kind"`` holds when the immediate parent of the
  captured node has the given kind.

Standard predicates (``#match?``, ``#eq?``, ``#not-eq?`` ...) are evaluated by
tree-sitter itself.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from tree_sitter import Node, Query, QueryCursor, Tree

from westwood.core.parse import c_language
from westwood.errors import CaptureError, QueryPredicateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryMatch:
    pattern_index: int
    captures: dict[str, list[Node]]


def _has_ancestor(node: Node, kind: str) -> bool:
    ancestor = node.parent
    while ancestor is not None:
        if ancestor.type == kind:
            return True
        ancestor = ancestor.parent
    return False


def _has_parent(node: Node, kind: str) -> bool:
    return node.parent is not None and node.parent.type == kind


_STRUCTURAL_PREDICATES: dict[str, Callable[[Node, str], bool]] = {
    "has-ancestor?": _has_ancestor,
    "has-parent?": _has_parent,
}


class QueryHelper:
    """Compiles a query against the C grammar and runs it over one tree."""

    def __init__(self, query_source: str, tree: Tree, code: bytes) -> None:
        self._query = Query(c_language(), query_source)
        self._tree = tree
        self._code = code

    @property
    def query(self) -> Query:
        return self._query

    def expect_index_for_capture(self, name: str) -> int:
        for index in range(self._query.capture_count):
            if self._query.capture_name(index) == name:
                return index
        raise CaptureError(f"Query has no capture named `{name}'")

    def expect_node_for_capture_index(self, qmatch: QueryMatch, capture_index: int) -> Node:
        name = self._query.capture_name(capture_index)
        return self.expect_node(qmatch, name)

    def expect_node(self, qmatch: QueryMatch, name: str) -> Node:
        nodes = qmatch.captures.get(name, [])
        if len(nodes) != 1:
            raise CaptureError(f"Expected exactly one node for capture `{name}', got {len(nodes)}")
        return nodes[0]

    def matches(self) -> list[QueryMatch]:
        cursor = QueryCursor(self._query)
        return [
            QueryMatch(pattern_index, captures)
            for pattern_index, captures in cursor.matches(self._tree.root_node, predicate=self._predicate_matches)
        ]

    def for_each_match(self, handler: Callable[[QueryMatch], None]) -> None:
        for qmatch in self.matches():
            handler(qmatch)

    def captures(self) -> list[tuple[str, Node]]:
        """All captures of matching patterns, ordered by the start of the captured node."""
        ordered: list[tuple[int, int, str, Node]] = []
        for match_order, qmatch in enumerate(self.matches()):
            for name, nodes in qmatch.captures.items():
                for node in nodes:
                    ordered.append((node.start_byte, match_order, name, node))
        ordered.sort(key=lambda item: (item[0], item[1]))
        return [(name, node) for _, _, name, node in ordered]

    def for_each_capture(self, handler: Callable[[str, Node], None]) -> None:
        for name, node in self.captures():
            handler(name, node)

    def _predicate_matches(
        self,
        predicate: str,
        args: Sequence[tuple[str, str]],
        pattern_index: int,
        captures: dict[str, list[Node]],
    ) -> bool:
        operator = predicate.lstrip("#")
        negate = operator.startswith("not-")
        base_operator = operator.removeprefix("not-")

        check = _STRUCTURAL_PREDICATES.get(base_operator)
        if check is None:
            logger.warning("Ignoring unknown predicate `%s'", operator)
            return negate

        if len(args) != 2 or args[0][1] != "capture" or args[1][1] != "string":
            raise QueryPredicateError(f"Invalid arguments to #{operator}. Expected a capture and a string.")
        capture_name, kind = args[0][0].lstrip("@"), args[1][0]
        nodes = captures.get(capture_name, [])
        if len(nodes) != 1:
            raise CaptureError(f"Expected exactly one node for capture `{capture_name}' in #{operator}")

        return check(nodes[0], kind) != negate
