from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=11,
    letter="E",
    code="XI:E",
    name="NoGoto",
    description="do not use goto",
)


class Rule11e:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule11e"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for label, node in helper.captures():
            assert label == "goto", f"Unexpected capture `{label}'"
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message="Do not use `goto'")
                .with_violation(source.node_span(node, "goto used here"))
            )
        return diagnostics
