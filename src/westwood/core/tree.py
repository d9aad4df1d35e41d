from collections.abc import Iterable, Iterator
from typing import NamedTuple

from tree_sitter import Node

from westwood.core.source import char_width


class NodeRange(NamedTuple):
    start_byte: int
    end_byte: int
    start_point: tuple[int, int]
    end_point: tuple[int, int]

    @classmethod
    def of(cls, node: Node) -> "NodeRange":
        return cls(
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_point=(node.start_point[0], node.start_point[1]),
            end_point=(node.end_point[0], node.end_point[1]),
        )


def function_definition_name(node: Node, code: bytes) -> str:
    """Return the name of the function defined by a ``function_definition`` node.

    The name is found by following the ``declarator`` field until an
    ``identifier`` is reached.
    """
    assert node.type == "function_definition", f"Expected a function_definition node, got {node.type}"
    current: Node | None = node
    while current is not None and current.type != "identifier":
        current = current.child_by_field_name("declarator")
    assert current is not None, "Function definition has no identifier along its declarator chain"
    return code[current.start_byte : current.end_byte].decode("utf-8")


def collapse_ranges(ranges: Iterable[NodeRange]) -> Iterator[NodeRange]:
    """Merge sorted ranges where one ends exactly where the next begins."""
    current: NodeRange | None = None
    for item in ranges:
        if current is not None and current.end_point == item.start_point:
            current = current._replace(end_byte=item.end_byte, end_point=item.end_point)
            continue
        if current is not None:
            yield current
        current = item
    if current is not None:
        yield current


def indentation(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def indent_width(line: str) -> int:
    return sum(char_width(char) for char in indentation(line))


def is_single_space_between(left: Node, right: Node, code: bytes) -> bool:
    return left.end_byte + 1 == right.start_byte and code[left.end_byte : right.start_byte] == b" "
