from collections.abc import Callable

from tree_sitter import Node

from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.core.tree import NodeRange, collapse_ranges, function_definition_name
from westwood.models import Diagnostic, RuleDescription, Span

DESCRIPTION = RuleDescription(
    group_number=3,
    letter="D",
    code="III:D",
    name="DefineGrouping",
    description="#define statements must be grouped together and set apart by blank lines",
)


def trim_trailing_eol(start: int, end: int, code: bytes) -> int:
    """Return ``end`` moved back over a trailing ``\\n`` or ``\\r\\n``."""
    if end - start >= 2 and code[end - 2 : end] == b"\r\n":
        return end - 2
    if end - start >= 1 and code[end - 1 : end] == b"\n":
        return end - 1
    return end


def _is_blank(line: str) -> bool:
    return line in ("", "\r")


class Rule03d:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        function_bodies: list[Node] = []
        definitions: list[Node] = []
        global_definitions: list[Node] = []
        functions: list[Node] = []

        helper = QueryHelper(load_query_source("rule03d"), source.tree, source.code)
        for label, node in helper.captures():
            match label:
                case "define":
                    definitions.append(node)
                case "define.global":
                    global_definitions.append(node)
                case "function.body":
                    function_bodies.append(node)
                case "function.definition":
                    functions.append(node)
                case _:
                    raise AssertionError(f"Unexpected capture `{label}'")

        def sorted_ranges(nodes: list[Node]) -> list[NodeRange]:
            return sorted({NodeRange.of(node) for node in nodes})

        def group_span(group: NodeRange, label: str) -> Span:
            end = trim_trailing_eol(group.start_byte, group.end_byte, source.code)
            return source.span(group.start_byte, end, label)

        diagnostics: list[Diagnostic] = []
        first_function = min(functions, key=lambda node: node.start_byte, default=None)
        global_groups = list(collapse_ranges(sorted_ranges(global_definitions)))

        if first_function is not None:
            for group in global_groups:
                if first_function.end_byte >= group.start_byte:
                    continue
                diagnostics.append(
                    Diagnostic(
                        rule=DESCRIPTION,
                        message=(
                            "Global preprocessor definitions must be placed at the top of the file, "
                            "before all functions"
                        ),
                    )
                    .with_violation(group_span(group, "Macro(s) defined here"))
                    .with_reference(source.node_span(first_function, "First function defined here"))
                )

        if len(global_groups) > 1:
            diagnostics.append(
                self._ungrouped(global_groups, group_span, "All top-level #define statements must be grouped together")
            )

        define_groups = list(collapse_ranges(sorted_ranges(definitions)))

        for body in sorted(function_bodies, key=lambda node: node.start_byte):
            groups_in_function = [
                group
                for group in define_groups
                if group.start_byte >= body.start_byte and group.end_byte <= body.end_byte
            ]
            if len(groups_in_function) <= 1:
                continue
            assert body.parent is not None, "Function body has no parent"
            name = function_definition_name(body.parent, source.code)
            diagnostics.append(
                self._ungrouped(
                    groups_in_function, group_span, "All #define statements in each function must be grouped together"
                ).with_note(f"In function `{name}()'")
            )

        for group in define_groups:
            # Lines before the start or after the end of the file count as blank.
            start_row = group.start_point[0]
            has_blank_before = start_row == 0 or _is_blank(source.lines[start_row - 1][0])
            if not has_blank_before:
                diagnostics.append(
                    Diagnostic(rule=DESCRIPTION, message="Expected blank line before #define statement(s)")
                    .with_violation(group_span(group, "Macro(s) defined here"))
                )

            end_row, end_column = group.end_point
            next_row = end_row if end_column == 0 else end_row + 1
            has_blank_after = next_row >= len(source.lines) or _is_blank(source.lines[next_row][0])
            if not has_blank_after:
                diagnostics.append(
                    Diagnostic(rule=DESCRIPTION, message="Expected blank line after #define statement(s)")
                    .with_violation(group_span(group, "Macro(s) defined here"))
                )

        return diagnostics

    def _ungrouped(
        self, groups: list[NodeRange], group_span: Callable[[NodeRange, str], Span], message: str
    ) -> Diagnostic:
        first, *rest = groups
        return (
            Diagnostic(rule=DESCRIPTION, message=message)
            .with_reference(group_span(first, "First group of #define statements found here"))
            .with_violations([group_span(group, "More #define statements found here") for group in rest])
        )
