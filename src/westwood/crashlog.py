"""Crash reports for unexpected exceptions.

When installed, an uncaught exception writes a report file to the system temp
directory and tells the user where to find it, instead of only dumping a
traceback.
"""

import platform
import secrets
import sys
import tempfile
import traceback
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from types import TracebackType

from pydantic import BaseModel
from rich.console import Console

ExceptHook = Callable[[type[BaseException], BaseException, TracebackType | None], None]

USER_MESSAGE_TEMPLATE = """\
Uh oh! {package} crashed.

A crash log was saved at the following path:
{log_path}

To help us figure out why this happened, please report this crash.
Either open a new issue on GitHub [1] or send an email to the author(s) [2].
Attach the file listed above or copy and paste its contents into the report.

[1]: {repository}/issues/new
[2]: {authors}

For your privacy, we don't automatically collect any information, so we rely on
users to submit crash reports to help us find issues. Thank you!"""


class ProgramMetadata(BaseModel):
    package: str
    binary: str
    version: str
    repository: str
    authors: str


def _source_location(tb: TracebackType | None) -> str:
    frames = traceback.extract_tb(tb)
    if not frames:
        return "(unknown)"
    return f"{frames[-1].filename}:{frames[-1].lineno}"


def generate_report(
    metadata: ProgramMetadata,
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
    timestamp: datetime,
    directory: Path | None = None,
) -> Path | None:
    """Write a crash report and return its path, or None if it could not be written."""
    path = (directory or Path(tempfile.gettempdir())) / f"{secrets.token_hex(8)}.txt"
    message = str(exc) or exc_type.__name__
    lines = [
        f"Package: {metadata.package}",
        f"Binary: {metadata.binary}",
        f"Version: {metadata.version}",
        "",
        f"Architecture: {platform.machine() or '(unknown)'}",
        f"Operating system: {platform.platform()}",
        f"Timestamp: {timestamp.astimezone(UTC).isoformat()}",
        "",
        f"Message: {message}",
        f"Source location: {_source_location(tb)}",
        "",
        "".join(traceback.format_exception(exc_type, exc, tb)),
    ]
    try:
        path.write_text("\n".join(lines), encoding="utf-8")
    except OSError:
        return None
    return path


def install(metadata: ProgramMetadata, replace: bool = True, console: Console | None = None) -> ExceptHook:
    """Install a ``sys.excepthook`` that writes crash reports and return it.

    With ``replace`` false the previous hook still runs first. If the report
    cannot be written, the previous hook runs instead.
    """
    previous_hook: ExceptHook = sys.excepthook
    err_console = console or Console(stderr=True)

    def hook(exc_type: type[BaseException], exc: BaseException, tb: TracebackType | None) -> None:
        timestamp = datetime.now(UTC)
        if issubclass(exc_type, KeyboardInterrupt):
            previous_hook(exc_type, exc, tb)
            return
        if not replace:
            previous_hook(exc_type, exc, tb)

        log_path = generate_report(metadata, exc_type, exc, tb, timestamp)
        if log_path is None:
            if replace:
                previous_hook(exc_type, exc, tb)
            return

        if not replace:
            err_console.print("\n---\n", highlight=False)
        err_console.print(
            USER_MESSAGE_TEMPLATE.format(
                package=metadata.package.capitalize(),
                log_path=log_path,
                repository=metadata.repository,
                authors=metadata.authors,
            ),
            style="red",
            highlight=False,
            markup=False,
        )

    sys.excepthook = hook
    return hook
