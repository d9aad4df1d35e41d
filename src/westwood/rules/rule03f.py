from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=3,
    letter="F",
    code="III:F",
    name="FunctionParenthesis",
    description="no space may be placed between a function name and its opening parenthesis",
)


class Rule03f:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03f"), source.tree, source.code)
        function_i = helper.expect_index_for_capture("function")
        paren_i = helper.expect_index_for_capture("paren")

        diagnostics: list[Diagnostic] = []
        for qmatch in helper.matches():
            function = helper.expect_node_for_capture_index(qmatch, function_i)
            paren = helper.expect_node_for_capture_index(qmatch, paren_i)
            if function.end_byte == paren.start_byte:
                continue
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message="Expected no space between function and parenthesis")
                .with_violation(source.span(function.end_byte, paren.start_byte, "Space found here"))
            )
        return diagnostics
