from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.core.tree import function_definition_name
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=2,
    letter="B",
    code="II:B",
    name="FunctionLength",
    description="functions must be kept reasonably small",
)

PAGE_SIZE = 61
MAX_PAGES_PER_FUNCTION = 2
MAX_FUNCTION_LINES = PAGE_SIZE * MAX_PAGES_PER_FUNCTION


class Rule02b:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule02b"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for label, node in helper.captures():
            assert label == "function", f"Unexpected capture `{label}'"
            length = node.end_point[0] - node.start_point[0] + 1
            if length <= MAX_FUNCTION_LINES:
                continue
            name = function_definition_name(node, source.code)
            diagnostics.append(
                Diagnostic(
                    rule=DESCRIPTION,
                    message=(
                        f"Functions must fit on {MAX_PAGES_PER_FUNCTION} pages, "
                        f"i.e. be no longer than {MAX_FUNCTION_LINES} lines"
                    ),
                ).with_violation(source.node_span(node, f"Function `{name}()' is {length} lines long"))
            )
        return diagnostics
