from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

Severity = Literal["error", "warning", "note", "help"]


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=0)
    column: int = Field(ge=0)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.column)


class SourceRange(BaseModel):
    """Half-open byte interval with its start and end (row, display column) positions."""

    model_config = ConfigDict(frozen=True)

    start_byte: int = Field(ge=0)
    end_byte: int = Field(ge=0)
    start: Position
    end: Position

    @model_validator(mode="after")
    def _check_ordering(self) -> Self:
        if self.start_byte > self.end_byte:
            raise ValueError(f"start_byte {self.start_byte} is after end_byte {self.end_byte}")
        if self.start.as_tuple() > self.end.as_tuple():
            raise ValueError(f"start position {self.start.as_tuple()} is after end position {self.end.as_tuple()}")
        return self


class Span(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    range: SourceRange
    label: str = ""


class RuleDescription(BaseModel):
    """Static metadata describing one rule of the code standard."""

    model_config = ConfigDict(frozen=True)

    group_number: int = Field(ge=1, le=12)
    letter: str = Field(min_length=1, max_length=1)
    code: str
    name: str
    description: str

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.group_number, self.letter)

    def __lt__(self, other: "RuleDescription") -> bool:
        return self.sort_key < other.sort_key


class Diagnostic(BaseModel):
    rule: RuleDescription
    message: str
    severity: Severity = "warning"
    violations: list[Span] = Field(default_factory=list)
    references: list[Span] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    suggestion: str | None = None

    def with_violation(self, span: Span) -> Self:
        self.violations.append(span)
        return self

    def with_violations(self, spans: list[Span]) -> Self:
        self.violations = list(spans)
        return self

    def with_reference(self, span: Span) -> Self:
        self.references.append(span)
        return self

    def with_references(self, spans: list[Span]) -> Self:
        self.references = list(spans)
        return self

    def with_note(self, note: str) -> Self:
        self.notes.append(note)
        return self

    def with_suggestion(self, suggestion: str) -> Self:
        self.suggestion = suggestion
        return self

    @property
    def code(self) -> str:
        return self.rule.code
