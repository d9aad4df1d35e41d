from collections.abc import Iterable
from typing import TextIO

from westwood.models import Diagnostic


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render a diagnostic as two machine-parseable lines.

    Only the first violation is printed. Line and column numbers are 1-indexed.
    """
    prefix = f"{diagnostic.severity}: "
    code = f"[{diagnostic.rule.code}] " if diagnostic.rule.code else ""
    lines = [f"{prefix}{code}{diagnostic.message}"]
    if diagnostic.violations:
        span = diagnostic.violations[0]
        start, end = span.range.start, span.range.end
        lines.append(
            f"{' ' * len(prefix)}at {span.filename} from line {start.row + 1} column {start.column + 1} "
            f"to line {end.row + 1} column {end.column + 1}"
        )
    return "\n".join(lines)


def write_diagnostics(diagnostics: Iterable[Diagnostic], stream: TextIO) -> None:
    for diagnostic in diagnostics:
        stream.write(format_diagnostic(diagnostic))
        stream.write("\n")
