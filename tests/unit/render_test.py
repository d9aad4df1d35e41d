"""Unit tests for the machine and pretty diagnostic renderers."""

import io

from rich.console import Console

from westwood.core.source import SourceInfo
from westwood.models import Diagnostic, Position, RuleDescription, SourceRange, Span
from westwood.render.machine import format_diagnostic, write_diagnostics
from westwood.render.pretty import PrettyRenderer
from westwood.rules.rule01a import Rule01a
from westwood.rules.rule02b import Rule02b
from westwood.rules.rule11b import Rule11b
from westwood.rules.rule12a import Rule12a


def render_pretty(source: SourceInfo, diagnostics: list[Diagnostic]) -> str:
    output = io.StringIO()
    console = Console(file=output, color_system=None, width=120)
    PrettyRenderer(console, source).render(diagnostics)
    return output.getvalue()


class TestMachineFormat:
    def test_two_line_format(self) -> None:
        source = SourceInfo.new("test.c", "int Name;\n")
        diagnostic = Rule01a().check(source)[0]
        assert format_diagnostic(diagnostic) == (
            "warning: [I:A] Variable names must be in lower snake case\n"
            "         at test.c from line 1 column 5 to line 1 column 9"
        )

    def test_only_first_violation_is_printed(self) -> None:
        source = SourceInfo.new("test.c", "int main(void) {\n  int x = 1, y = 2, z;\n  return 0;\n}\n")
        diagnostic = Rule12a().check(source)[0]
        lines = format_diagnostic(diagnostic).split("\n")
        assert lines == [
            "warning: [XII:A] No more than one variable may be defined on a single line",
            "         at test.c from line 2 column 14 to line 2 column 19",
        ]

    def test_without_rule_code(self) -> None:
        rule = RuleDescription(group_number=1, letter="B", code="", name="Nameless", description="no code")
        source_range = SourceRange(
            start_byte=0, end_byte=1, start=Position(row=0, column=0), end=Position(row=0, column=1)
        )
        span = Span(filename="a.c", range=source_range)
        diagnostic = Diagnostic(rule=rule, message="Something").with_violation(span)
        assert format_diagnostic(diagnostic).split("\n")[0] == "warning: Something"

    def test_write_diagnostics(self) -> None:
        source = SourceInfo.new("test.c", "int main() {\r\n  return 0;\r\n}\r\n")
        stream = io.StringIO()
        write_diagnostics(Rule11b().check(source), stream)
        lines = stream.getvalue().splitlines()
        assert len(lines) == 6
        assert lines[1] == "         at test.c from line 1 column 13 to line 1 column 13"


class TestPrettyRenderer:
    def test_violation_with_suggestion(self) -> None:
        source = SourceInfo.new("test.c", "int Name;\n")
        output = render_pretty(source, Rule01a().check(source))
        lines = output.splitlines()
        assert lines[0] == "warning[I:A]: Variable names must be in lower snake case"
        assert " --> test.c:1:5" in lines
        assert "1 | int Name;" in lines
        assert "  |     ^^^^ Variable `Name' declared here" in lines
        assert "  = help: Perhaps you meant `name'" in lines

    def test_references_are_dashed(self) -> None:
        source = SourceInfo.new("test.c", "int a, b;\n")
        output = render_pretty(source, Rule12a().check(source))
        assert "  |        ^ Additional definition here" in output.splitlines()
        assert "  |     - First definition here" in output.splitlines()

    def test_notes(self) -> None:
        source = SourceInfo.new("test.c", "int x;\r\n")
        output = render_pretty(source, Rule11b().check(source))
        assert "  = note: Use the `fileformat' option in Vim to fix this" in output.splitlines()

    def test_long_spans_are_elided(self) -> None:
        source = SourceInfo.new("test.c", "int main() {\n" + "  (void) 0;\n" * 122 + "}\n")
        lines = render_pretty(source, Rule02b().check(source)).splitlines()
        assert "  1 | int main() {" in lines
        assert "... |" in lines
        assert "124 | }" in lines
        assert not any(line.startswith("  3 |") for line in lines)
        assert "    | ^ Function `main()' is 124 lines long" in lines

    def test_tabs_are_expanded(self) -> None:
        source = SourceInfo.new("test.c", "\tint Name;\n")
        lines = render_pretty(source, Rule01a().check(source)).splitlines()
        assert "1 |         int Name;" in lines
        assert "  |             ^^^^ Variable `Name' declared here" in lines
