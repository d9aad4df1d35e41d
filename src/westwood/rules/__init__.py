from westwood.config import LintConfig
from westwood.core.ports.rule import Rule
from westwood.rules.rule01a import Rule01a
from westwood.rules.rule01b import Rule01b
from westwood.rules.rule01c import Rule01c
from westwood.rules.rule01d import Rule01d
from westwood.rules.rule02a import Rule02a
from westwood.rules.rule02b import Rule02b
from westwood.rules.rule03a import Rule03a
from westwood.rules.rule03b import Rule03b
from westwood.rules.rule03c import Rule03c
from westwood.rules.rule03d import Rule03d
from westwood.rules.rule03e import Rule03e
from westwood.rules.rule03f import Rule03f
from westwood.rules.rule11a import Rule11a
from westwood.rules.rule11b import Rule11b
from westwood.rules.rule11e import Rule11e
from westwood.rules.rule12a import Rule12a


def get_rules(config: LintConfig | None = None) -> list[Rule]:
    """Return every rule, ordered by group number and letter."""
    config = config or LintConfig()
    return [
        Rule01a(),
        Rule01b(),
        Rule01c(),
        Rule01d(),
        Rule02a(),
        Rule02b(),
        Rule03a(),
        Rule03b(),
        Rule03c(),
        Rule03d(),
        Rule03e(),
        Rule03f(),
        Rule11a(config.max_tab_diagnostics),
        Rule11b(config.max_crlf_diagnostics),
        Rule11e(),
        Rule12a(),
    ]


__all__ = ["get_rules"]
