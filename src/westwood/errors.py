class WestwoodError(Exception):
    """Base class for errors raised by the linter."""


class SyntaxErrorsFound(WestwoodError):
    """The parsed tree contains ERROR or MISSING nodes, so rules were not run."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Found syntax error(s) in {filename}")
        self.filename = filename


class ConfigError(WestwoodError):
    pass


class QueryPredicateError(WestwoodError):
    pass


class CaptureError(WestwoodError):
    pass
