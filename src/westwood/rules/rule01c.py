import re

from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=1,
    letter="C",
    code="I:C",
    name="ConstantNames",
    description="constants must be defined with #define and named in upper snake case",
)

_INTEGER_LITERAL = re.compile(r"(?:0[xX][0-9a-fA-F]+|0[bB][01]+|[0-9]+)[uUlL]*")


class Rule01c:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule01c"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for label, node in helper.captures():
            text = source.node_text(node)
            match label:
                case "constant.name.short":
                    diagnostics.append(
                        Diagnostic(rule=DESCRIPTION, message="Constant name must contain at least 2 characters")
                        .with_violation(source.node_span(node, "Constant defined here"))
                    )
                case "constant.name.contains_lower":
                    diagnostics.append(
                        Diagnostic(rule=DESCRIPTION, message="Constant name must use upper snake case")
                        .with_violation(source.node_span(node, "Constant defined here"))
                        .with_suggestion(text.upper())
                    )
                case "constant.value":
                    value = text.strip()
                    if not _INTEGER_LITERAL.fullmatch(value):
                        continue
                    start = node.start_byte + len(text[: len(text) - len(text.lstrip())].encode("utf-8"))
                    end = start + len(value.encode("utf-8"))
                    diagnostics.append(
                        Diagnostic(rule=DESCRIPTION, message="Numeric constant value must be wrapped in parentheses")
                        .with_violation(source.span(start, end, "Value defined here"))
                        .with_suggestion(f"({value})")
                    )
                case _:
                    raise AssertionError(f"Unexpected capture `{label}'")
        return diagnostics
