import logging
import sys
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from westwood import crashlog
from westwood.config import load_config
from westwood.core.lint import run_rules
from westwood.core.source import SourceInfo
from westwood.errors import ConfigError, SyntaxErrorsFound
from westwood.render.machine import write_diagnostics
from westwood.render.pretty import PrettyRenderer
from westwood.rules import get_rules

logger = logging.getLogger(__name__)

PACKAGE_NAME = "westwood"

SYNTAX_ERROR_MESSAGE = """\
Found syntax error(s) in your code.
Ensure your code compiles before running the linter.
To prevent false positives, the linter will not check code with syntax errors."""


class OutputFormat(str, Enum):
    pretty = "pretty"
    machine = "machine"


class ColorChoice(str, Enum):
    never = "never"
    auto = "auto"
    always = "always"


app = typer.Typer(
    name=PACKAGE_NAME,
    help="Lint C source files for style guide violations.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _package_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0+unknown"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PACKAGE_NAME} {_package_version()}")
        raise typer.Exit()


def _make_console(color: ColorChoice) -> Console:
    if color is ColorChoice.never:
        return Console(color_system=None, highlight=False)
    if color is ColorChoice.always:
        return Console(force_terminal=True, highlight=False)
    return Console(highlight=False)


def _read_input(file: str) -> tuple[str, bytes]:
    if file == "-":
        return "<stdin>", sys.stdin.buffer.read()
    return file, Path(file).read_bytes()


@app.command()
def lint(
    file: Annotated[str, typer.Argument(help="C source file to lint, or '-' for standard input.")],
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format for diagnostics.")
    ] = OutputFormat.pretty,
    color: Annotated[ColorChoice, typer.Option(help="When to use color in pretty output.")] = ColorChoice.auto,
    max_tab_warnings: Annotated[
        int | None, typer.Option(min=1, help="Report at most this many tab indentation warnings.")
    ] = None,
    max_crlf_warnings: Annotated[
        int | None, typer.Option(min=1, help="Report at most this many CRLF line ending warnings.")
    ] = None,
    show_version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Check a C source file for style violations."""
    try:
        config = load_config()
    except ConfigError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from None

    logging.basicConfig(level=config.log_level, format="%(levelname)s: %(message)s", stream=sys.stderr)

    updates = {}
    if max_tab_warnings is not None:
        updates["max_tab_diagnostics"] = max_tab_warnings
    if max_crlf_warnings is not None:
        updates["max_crlf_diagnostics"] = max_crlf_warnings
    config = config.model_copy(update=updates)

    try:
        filename, data = _read_input(file)
    except OSError as exc:
        err_console.print(f"[red]Could not read {file}: {exc.strerror or exc}[/red]")
        raise typer.Exit(code=1) from None

    try:
        source = SourceInfo.from_bytes(filename, data)
    except UnicodeDecodeError:
        err_console.print(f"[red]{filename} is not valid UTF-8 text.[/red]")
        raise typer.Exit(code=1) from None

    logger.debug("Linting %s (%d bytes)", filename, len(data))
    try:
        diagnostics = run_rules(source, get_rules(config))
    except SyntaxErrorsFound:
        err_console.print(SYNTAX_ERROR_MESSAGE, markup=False)
        raise typer.Exit(code=1) from None

    if output_format is OutputFormat.machine:
        write_diagnostics(diagnostics, sys.stdout)
    else:
        PrettyRenderer(_make_console(color), source).render(diagnostics)


def main() -> None:
    # Typer replaces sys.excepthook on every call, so crashes are routed to the hook here.
    crash_hook = crashlog.install(
        crashlog.ProgramMetadata(
            package=PACKAGE_NAME,
            binary=PACKAGE_NAME,
            version=_package_version(),
            repository="https://github.com/kdkasad/westwood",
            authors="Kian Kasad <kian@kasad.com>",
        )
    )
    try:
        app()
    except Exception as exc:
        crash_hook(type(exc), exc, exc.__traceback__)
        sys.exit(1)
