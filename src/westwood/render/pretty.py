from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from westwood.core.source import TAB_WIDTH, SourceInfo, line_width
from westwood.models import Diagnostic, Span

_SEVERITY_STYLES = {
    "error": "bold red",
    "warning": "bold yellow",
    "note": "bold green",
    "help": "bold cyan",
}
_GUTTER_STYLE = "bold blue"
_PRIMARY_STYLE = "bold yellow"
_SECONDARY_STYLE = "bold blue"

# Spans covering more lines than this are shown as their first and last lines.
_MAX_EXCERPT_LINES = 4


class PrettyRenderer:
    """Renders diagnostics with source excerpts for a terminal."""

    def __init__(self, console: Console, source: SourceInfo) -> None:
        self.console = console
        self.source = source

    def render(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.console.print(self.render_diagnostic(diagnostic), soft_wrap=True)
            self.console.print()

    def render_diagnostic(self, diagnostic: Diagnostic) -> Text:
        spans = [(span, True) for span in diagnostic.violations] + [(span, False) for span in diagnostic.references]
        last_row = max((span.range.end.row for span, _ in spans), default=0)
        gutter = len(str(last_row + 1))

        text = Text()
        text.append(diagnostic.severity, style=_SEVERITY_STYLES.get(diagnostic.severity, "bold"))
        if diagnostic.rule.code:
            text.append(f"[{diagnostic.rule.code}]", style=_SEVERITY_STYLES.get(diagnostic.severity, "bold"))
        text.append(": ")
        text.append(diagnostic.message, style="bold")
        text.append("\n")

        if diagnostic.violations:
            first = diagnostic.violations[0]
            text.append(f"{' ' * gutter}--> ", style=_GUTTER_STYLE)
            text.append(f"{first.filename}:{first.range.start.row + 1}:{first.range.start.column + 1}\n")

        for span, primary in spans:
            text.append(f"{' ' * gutter} |\n", style=_GUTTER_STYLE)
            self._append_excerpt(text, span, primary, gutter)

        if diagnostic.notes or diagnostic.suggestion is not None:
            text.append(f"{' ' * gutter} |\n", style=_GUTTER_STYLE)
        for note in diagnostic.notes:
            text.append(f"{' ' * gutter} = ", style=_GUTTER_STYLE)
            text.append("note", style="bold")
            text.append(f": {note}\n")
        if diagnostic.suggestion is not None:
            text.append(f"{' ' * gutter} = ", style=_GUTTER_STYLE)
            text.append("help", style="bold")
            text.append(f": Perhaps you meant `{diagnostic.suggestion}'\n")

        text.rstrip()
        return text

    def _append_excerpt(self, text: Text, span: Span, primary: bool, gutter: int) -> None:
        start, end = span.range.start, span.range.end
        rows = list(range(start.row, min(end.row, len(self.source.lines) - 1) + 1)) or [start.row]
        if len(rows) > _MAX_EXCERPT_LINES:
            rows = rows[:2] + [-1] + rows[-2:]

        marker = "^" if primary else "-"
        style = _PRIMARY_STYLE if primary else _SECONDARY_STYLE
        for index, row in enumerate(rows):
            if row == -1:
                text.append(f"{'.' * gutter} |\n", style=_GUTTER_STYLE)
                continue
            line = self.source.lines[row][0] if row < len(self.source.lines) else ""
            text.append(f"{row + 1:>{gutter}} | ", style=_GUTTER_STYLE)
            text.append(_display(line) + "\n")

            first_column = start.column if row == start.row else 0
            last_column = end.column if row == end.row else line_width(line)
            underline = marker * max(1, last_column - first_column)
            text.append(f"{' ' * gutter} | ", style=_GUTTER_STYLE)
            text.append(" " * first_column)
            text.append(underline, style=style)
            if index == len(rows) - 1 and span.label:
                text.append(f" {span.label}", style=style)
            text.append("\n")


def _display(line: str) -> str:
    return line.rstrip("\r").replace("\t", " " * TAB_WIDTH)
