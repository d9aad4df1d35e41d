from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass, field

from rich.cells import cell_len
from tree_sitter import Node, Tree

from westwood.core.parse import parse_c
from westwood.models import Position, SourceRange, Span

TAB_WIDTH = 8


def char_width(char: str) -> int:
    if char == "\t":
        return TAB_WIDTH
    return cell_len(char)


def line_width(text: str) -> int:
    """Display width of ``text`` with tabs counted as 8 columns.

    Every other character is sized by its East Asian width class; control
    characters count as zero columns.
    """
    return cell_len(text) + TAB_WIDTH * text.count("\t")


def index_lines(text: str) -> list[tuple[str, int]]:
    """Split ``text`` on ``\\n`` into (line_text, line_start_byte) pairs.

    The separator is not part of the line text. A trailing newline does not
    start a new (empty) line.
    """
    lines: list[tuple[str, int]] = []
    position = 0
    for line in text.split("\n"):
        lines.append((line, position))
        position += len(line.encode("utf-8")) + 1
    if text.endswith("\n") or not text:
        lines.pop()
    return lines


@dataclass(frozen=True)
class SourceInfo:
    """Immutable view of one C source file: its text, syntax tree and line index."""

    filename: str
    text: str
    tree: Tree
    lines: tuple[tuple[str, int], ...]
    code: bytes = field(repr=False)
    _line_starts: tuple[int, ...] = field(repr=False)
    _line_lengths: tuple[int, ...] = field(repr=False)

    @classmethod
    def new(cls, filename: str, text: str) -> "SourceInfo":
        code = text.encode("utf-8")
        lines = tuple(index_lines(text))
        return cls(
            filename=filename,
            text=text,
            tree=parse_c(code),
            lines=lines,
            code=code,
            _line_starts=tuple(start for _, start in lines),
            _line_lengths=tuple(len(line.encode("utf-8")) for line, _ in lines),
        )

    @classmethod
    def from_bytes(cls, filename: str, code: bytes) -> "SourceInfo":
        return cls.new(filename, code.decode("utf-8"))

    def iter_lines(self) -> Iterator[tuple[str, int]]:
        return iter(self.lines)

    def line_end_byte(self, row: int) -> int:
        """Byte offset just past the text of line ``row``, excluding its newline."""
        return self._line_starts[row] + self._line_lengths[row]

    def position(self, byte: int) -> Position:
        """Map a byte offset to a 0-indexed (row, display column) position."""
        if not 0 <= byte <= len(self.code):
            raise IndexError(f"Byte offset {byte} is outside of the source ({len(self.code)} bytes)")
        row = bisect_right(self._line_starts, byte) - 1
        if row < 0:
            return Position(row=0, column=0)
        offset = byte - self._line_starts[row]
        if offset > self._line_lengths[row]:
            # Just past the final newline of the file.
            return Position(row=row + 1, column=0)
        prefix = self.code[self._line_starts[row] : byte].decode("utf-8", errors="ignore")
        return Position(row=row, column=line_width(prefix))

    def byte_at_column(self, row: int, column: int) -> int:
        """Return the offset of the first character boundary on ``row`` at display column ``column``.

        Columns past the end of the line map to the end of the line.
        """
        text, offset = self.lines[row]
        width = 0
        for char in text:
            if width >= column:
                break
            char_cols = char_width(char)
            if width + char_cols > column:
                break
            width += char_cols
            offset += len(char.encode("utf-8"))
        return offset

    def range(self, start_byte: int, end_byte: int) -> SourceRange:
        return SourceRange(
            start_byte=start_byte,
            end_byte=end_byte,
            start=self.position(start_byte),
            end=self.position(end_byte),
        )

    def node_range(self, node: Node) -> SourceRange:
        return self.range(node.start_byte, node.end_byte)

    def span(self, start_byte: int, end_byte: int, label: str = "") -> Span:
        return Span(filename=self.filename, range=self.range(start_byte, end_byte), label=label)

    def node_span(self, node: Node, label: str = "") -> Span:
        return self.span(node.start_byte, node.end_byte, label)

    def node_text(self, node: Node) -> str:
        return self.code[node.start_byte : node.end_byte].decode("utf-8")
