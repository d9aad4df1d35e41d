from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper, QueryMatch
from westwood.core.source import SourceInfo, line_width
from westwood.core.tree import NodeRange, indent_width, indentation
from westwood.models import Diagnostic, RuleDescription, Span

DESCRIPTION = RuleDescription(
    group_number=2,
    letter="A",
    code="II:A",
    name="LineLength",
    description="lines must be 80 columns wide or less",
)

MAX_LINE_WIDTH = 80
WRAPPED_LINE_INDENT_WIDTH = 2


class Rule02a:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        diagnostics = self._check_line_lengths(source)
        diagnostics.extend(self._check_wrapped_indentation(source))
        return diagnostics

    def _check_line_lengths(self, source: SourceInfo) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for row, (line, _) in enumerate(source.iter_lines()):
            width = line_width(line)
            if width <= MAX_LINE_WIDTH:
                continue
            start = source.byte_at_column(row, MAX_LINE_WIDTH)
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message=f"Line length exceeds {MAX_LINE_WIDTH} columns")
                .with_violation(source.span(start, source.line_end_byte(row), f"Line is {width} columns wide"))
            )
        return diagnostics

    def _check_wrapped_indentation(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule02a"), source.tree, source.code)
        splittable_i = helper.expect_index_for_capture("splittable")
        begin_i = helper.expect_index_for_capture("splittable.begin")
        end_i = helper.expect_index_for_capture("splittable.end")

        def match_range(qmatch: QueryMatch) -> NodeRange:
            if "splittable" in qmatch.captures:
                return NodeRange.of(helper.expect_node_for_capture_index(qmatch, splittable_i))
            begin = NodeRange.of(helper.expect_node_for_capture_index(qmatch, begin_i))
            end = NodeRange.of(helper.expect_node_for_capture_index(qmatch, end_i))
            return begin._replace(end_byte=end.end_byte, end_point=end.end_point)

        diagnostics: list[Diagnostic] = []
        seen: set[tuple[int, int]] = set()
        for qmatch in helper.matches():
            node_range = match_range(qmatch)
            first_row, last_row = node_range.start_point[0], node_range.end_point[0]
            if first_row == last_row or (node_range.start_byte, node_range.end_byte) in seen:
                continue
            seen.add((node_range.start_byte, node_range.end_byte))

            first_line, first_line_start = source.lines[first_row]
            first_indent = indentation(first_line)
            first_indent_width = indent_width(first_line)
            expected_width = first_indent_width + WRAPPED_LINE_INDENT_WIDTH

            violations: list[Span] = []
            for row in range(first_row + 1, last_row + 1):
                line, line_start = source.lines[row]
                if indent_width(line) >= expected_width:
                    continue
                indent_bytes = len(indentation(line).encode("utf-8"))
                violations.append(
                    source.span(
                        line_start,
                        line_start + indent_bytes,
                        f"Expected >={expected_width} columns of indentation on continuing line",
                    )
                )
            if not violations:
                continue

            diagnostics.append(
                Diagnostic(
                    rule=DESCRIPTION,
                    message=(
                        "Wrapped expressions/statements must be indented by at least "
                        f"{WRAPPED_LINE_INDENT_WIDTH} spaces"
                    ),
                )
                .with_violations(violations)
                .with_reference(
                    source.span(
                        first_line_start,
                        first_line_start + len(first_indent.encode("utf-8")),
                        f"Found indentation of {first_indent_width} columns on initial line",
                    )
                )
            )
        return diagnostics
