from typing import Protocol

from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription


class Rule(Protocol):
    def describe(self) -> RuleDescription: ...

    def check(self, source: SourceInfo) -> list[Diagnostic]: ...
