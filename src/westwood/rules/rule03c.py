from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.core.tree import is_single_space_between
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=3,
    letter="C",
    code="III:C",
    name="CommaSpacing",
    description="internal commas and semicolons must be followed by one space",
)


class Rule03c:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03c"), source.tree, source.code)
        delim_i = helper.expect_index_for_capture("delim")
        next_i = helper.expect_index_for_capture("next")

        diagnostics: list[Diagnostic] = []
        seen: set[int] = set()
        for qmatch in helper.matches():
            delim = helper.expect_node_for_capture_index(qmatch, delim_i)
            following = helper.expect_node_for_capture_index(qmatch, next_i)
            if delim.end_point[0] != following.start_point[0] or delim.start_byte in seen:
                continue
            seen.add(delim.start_byte)
            if is_single_space_between(delim, following, source.code):
                continue
            delim_text = source.node_text(delim)
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message="Expected one space after internal commas and semicolons")
                .with_violation(
                    source.span(delim.start_byte, following.start_byte, f"Expected a single space after `{delim_text}'")
                )
            )
        return diagnostics
