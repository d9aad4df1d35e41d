import re

from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=1,
    letter="A",
    code="I:A",
    name="LowerSnakeCase",
    description="names must be in lower snake case",
)

_KIND_NAMES = {
    "variable": "Variable",
    "function": "Function",
    "type": "Type",
    "struct": "Struct",
    "union": "Union",
    "enum": "Enum",
}

_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def to_lower_snake_case(name: str) -> str:
    """Lowercase ``name``, inserting an underscore wherever a lowercase letter precedes an uppercase one."""
    return _CASE_BOUNDARY.sub(r"\1_\2", name).lower()


class Rule01a:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule01a"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        seen: set[tuple[int, int]] = set()
        for label, node in helper.captures():
            key = (node.start_byte, node.end_byte)
            if key in seen:
                continue
            seen.add(key)
            kind = _KIND_NAMES[label]
            name = source.node_text(node)
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message=f"{kind} names must be in lower snake case")
                .with_violation(source.node_span(node, f"{kind} `{name}' declared here"))
                .with_suggestion(to_lower_snake_case(name))
            )
        return diagnostics
