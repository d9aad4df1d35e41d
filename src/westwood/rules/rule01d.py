from tree_sitter import Node

from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=1,
    letter="D",
    code="I:D",
    name="GlobalVariables",
    description="global variables must be prefixed with g_ and declared before all functions",
)


class Rule01d:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule01d"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        first_function: Node | None = None
        for label, node in helper.captures():
            match label:
                case "function":
                    if first_function is None:
                        first_function = node
                case "declaration.top_level":
                    if first_function is None or node.start_byte < first_function.start_byte:
                        continue
                    diagnostics.append(
                        Diagnostic(
                            rule=DESCRIPTION,
                            message="All top-level declarations must come before function definitions",
                        )
                        .with_violation(source.node_span(node, "Declaration found here"))
                        .with_reference(source.node_span(first_function, "First function defined here"))
                    )
                case "global.no_g_prefix":
                    name = source.node_text(node)
                    diagnostics.append(
                        Diagnostic(rule=DESCRIPTION, message='Global variables must be prefixed with "g_"')
                        .with_violation(source.node_span(node, f"Global variable `{name}' declared here"))
                        .with_suggestion(f"g_{name}")
                    )
                case _:
                    raise AssertionError(f"Unexpected capture `{label}'")
        return diagnostics
