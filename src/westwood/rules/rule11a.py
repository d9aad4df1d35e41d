from westwood.core.source import SourceInfo
from westwood.core.tree import indentation
from westwood.models import Diagnostic, RuleDescription, Span
from westwood.rules.limits import limit_diagnostics

DESCRIPTION = RuleDescription(
    group_number=11,
    letter="A",
    code="XI:A",
    name="NoTabs",
    description="use spaces instead of tabs for indentation",
)

_MESSAGE = "Use spaces instead of tabs for indentation"


class Rule11a:
    def __init__(self, max_diagnostics: int | None = None) -> None:
        """``max_diagnostics`` caps the number of lines reported; the rest are summarized in a note."""
        self.max_diagnostics = max_diagnostics

    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for line, line_start in source.iter_lines():
            indent = indentation(line)
            if "\t" not in indent:
                continue

            if indent.strip("\t") == "":
                span = source.span(line_start, line_start + len(indent.encode("utf-8")), "Indentation uses tabs")
                diagnostics.append(Diagnostic(rule=DESCRIPTION, message=_MESSAGE).with_violation(span))
                continue

            spans: list[Span] = []
            offset = line_start
            for char in indent:
                if char == "\t":
                    spans.append(source.span(offset, offset + 1, "Tab character found here"))
                offset += len(char.encode("utf-8"))
            diagnostics.append(
                Diagnostic(rule=DESCRIPTION, message=_MESSAGE)
                .with_violations(spans)
                .with_note("Line mixes spaces and tabs")
            )

        return limit_diagnostics(
            diagnostics,
            self.max_diagnostics,
            lambda remaining: (
                f"{remaining} more lines contain tabs, but those warnings are suppressed to avoid noise."
            ),
        )
