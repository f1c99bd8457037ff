from typing import Optional


class IgnoreError(RuntimeError):
    def __init__(self, code: str, message: str, hint: str = ""):
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint


class PatternCompileError(IgnoreError):
    """A glob could not be compiled. ``position`` is the offset of the failure."""

    def __init__(self, pattern: str, message: str, position: Optional[int] = None):
        super().__init__("ERR_PATTERN", message, hint="check brackets, escapes and empty segments")
        self.pattern = pattern
        self.position = position

    def __str__(self) -> str:
        where = f" at offset {self.position}" if self.position is not None else ""
        return f"{self.message}{where}: '{self.pattern}'"


class RuleParseError(IgnoreError):
    def __init__(self, source_path: str, line_number: int, raw_text: str, cause: PatternCompileError):
        super().__init__("ERR_RULE", f"Failed to parse pattern: '{cause.pattern}'", hint=cause.hint)
        self.source_path = source_path
        self.line_number = line_number
        self.raw_text = raw_text
        self.pattern = cause.pattern
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.source_path}:{self.line_number}: {self.message} ({self.cause.message})"


class BoundaryInconsistencyError(IgnoreError):
    def __init__(self, message: str, path: str, boundary_root: str):
        super().__init__("ERR_BOUNDARY", message)
        self.path = path
        self.boundary_root = boundary_root
