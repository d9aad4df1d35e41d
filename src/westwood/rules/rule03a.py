from tree_sitter import Node

from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.core.tree import is_single_space_between
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=3,
    letter="A",
    code="III:A",
    name="FlowControlSpacing",
    description="one space must be placed between flow control constructs",
)


class Rule03a:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03a"), source.tree, source.code)
        keyword_i = helper.expect_index_for_capture("keyword")
        lparen_i = helper.expect_index_for_capture("lparen")
        rparen_i = helper.expect_index_for_capture("rparen")
        lbrace_i = helper.expect_index_for_capture("lbrace")

        diagnostics: list[Diagnostic] = []
        for qmatch in helper.matches():
            keyword = helper.expect_node_for_capture_index(qmatch, keyword_i)
            lparen = helper.expect_node_for_capture_index(qmatch, lparen_i)
            keyword_text = source.node_text(keyword)
            if not is_single_space_between(keyword, lparen, source.code):
                diagnostics.append(
                    self._report(source, keyword, lparen, f"Expected a single space after `{keyword_text}'")
                )

            # do-while statements have no parenthesis followed by a brace
            if "rparen" not in qmatch.captures:
                continue
            rparen = helper.expect_node_for_capture_index(qmatch, rparen_i)
            lbrace = helper.expect_node_for_capture_index(qmatch, lbrace_i)
            if not is_single_space_between(rparen, lbrace, source.code):
                diagnostics.append(
                    self._report(
                        source,
                        rparen,
                        lbrace,
                        "Expected a single space between the closing parenthesis and the opening brace",
                    )
                )
        return diagnostics

    def _report(self, source: SourceInfo, left: Node, right: Node, message: str) -> Diagnostic:
        return Diagnostic(rule=DESCRIPTION, message=message).with_violation(
            source.span(left.start_byte, right.end_byte, "Incorrect spacing here")
        )
