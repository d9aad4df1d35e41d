from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=1,
    letter="B",
    code="I:B",
    name="MeaningfulNames",
    description="variable names must be descriptive and meaningful",
)


class Rule01b:
    """Whether a name is meaningful is subjective, so nothing is checked automatically."""

    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        return []
