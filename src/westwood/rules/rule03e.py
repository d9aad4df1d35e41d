from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=3,
    letter="E",
    code="III:E",
    name="TrailingWhitespace",
    description="lines must not have trailing whitespace",
)


class Rule03e:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for line, line_start in source.iter_lines():
            trimmed = line.rstrip()
            if trimmed == line:
                continue
            start = line_start + len(trimmed.encode("utf-8"))
            end = line_start + len(line.encode("utf-8"))
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message="Line contains trailing whitespace")
                .with_violation(source.span(start, end, "Trailing whitespace found here"))
            )
        return diagnostics
