from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription
from westwood.rules.limits import limit_diagnostics

DESCRIPTION = RuleDescription(
    group_number=11,
    letter="B",
    code="XI:B",
    name="NoCRLF",
    description="do not use DOS-style newlines (\\r\\n)",
)


class Rule11b:
    def __init__(self, max_diagnostics: int | None = None) -> None:
        self.max_diagnostics = max_diagnostics

    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        line_start = 0
        for segment in source.code.split(b"\n"):
            if segment.endswith(b"\r"):
                cr_position = line_start + len(segment) - 1
                diagnostics.append(
                    Diagnostic(rule=DESCRIPTION, message="Line contains DOS-style ending")
                    .with_violation(source.span(cr_position, cr_position + 1, "Carriage return found here"))
                    .with_note("Use the `fileformat' option in Vim to fix this")
                )
            line_start += len(segment) + 1

        return limit_diagnostics(
            diagnostics,
            self.max_diagnostics,
            lambda remaining: (
                f"{remaining} more lines contain DOS endings, but those warnings are suppressed to avoid noise."
            ),
        )
