from collections.abc import Callable

from westwood.models import Diagnostic


def limit_diagnostics(
    diagnostics: list[Diagnostic], maximum: int | None, suppressed_note: Callable[[int], str]
) -> list[Diagnostic]:
    """Keep at most ``maximum`` diagnostics, noting on the last one how many were dropped."""
    if maximum is None or len(diagnostics) <= maximum:
        return diagnostics
    kept = diagnostics[:maximum]
    kept[-1].with_note(suppressed_note(len(diagnostics) - maximum))
    return kept
