from tree_sitter import Node

from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=12,
    letter="A",
    code="XII:A",
    name="MultipleDefinitions",
    description="at most one variable may be defined on a single line",
)


def is_function_declaration(declaration: Node) -> bool:
    """Return whether a ``function_declarator`` lies on the chain of ``declarator`` fields."""
    current: Node | None = declaration
    while current is not None:
        if current.type == "function_declarator":
            return True
        current = current.child_by_field_name("declarator")
    return False


class Rule12a:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule12a"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for label, node in helper.captures():
            if label == "first-child":
                continue
            assert label == "declaration", f"Unexpected capture `{label}'"
            if is_function_declaration(node):
                continue

            declarators = node.children_by_field_name("declarator")
            if len(declarators) <= 1:
                continue
            first, *others = declarators
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message="No more than one variable may be defined on a single line")
                .with_reference(source.node_span(first, "First definition here"))
                .with_violations([source.node_span(other, "Additional definition here") for other in others])
            )
        return diagnostics
