import logging
from collections.abc import Sequence

from westwood.core.parse import has_syntax_errors
from westwood.core.ports.rule import Rule
from westwood.core.source import SourceInfo
from westwood.errors import SyntaxErrorsFound
from westwood.models import Diagnostic

logger = logging.getLogger(__name__)


def run_rules(source: SourceInfo, rules: Sequence[Rule]) -> list[Diagnostic]:
    """Run every rule over ``source`` in order and concatenate the diagnostics.

    Raises SyntaxErrorsFound without running any rule if the tree contains
    ERROR or MISSING nodes.
    """
    if has_syntax_errors(source.tree):
        raise SyntaxErrorsFound(source.filename)

    diagnostics: list[Diagnostic] = []
    for rule in rules:
        found = rule.check(source)
        logger.debug("Rule %s produced %d diagnostic(s)", rule.describe().code, len(found))
        diagnostics.extend(found)
    return diagnostics


def lint_text(filename: str, text: str, rules: Sequence[Rule]) -> list[Diagnostic]:
    return run_rules(SourceInfo.new(filename, text), rules)
