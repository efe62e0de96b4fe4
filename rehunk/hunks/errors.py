from enum import StrEnum


class HunkErrorType(StrEnum):
    EMPTY_LINE = "empty_line"
    INVALID_PREFIX = "invalid_prefix"


class HunkBodyError(ValueError):
    def __init__(
        self,
        error_type: HunkErrorType,
        message: str,
        line_number: int,
        hunk_index: int | None = None,
        details: dict | None = None
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.line_number = line_number
        self.hunk_index = hunk_index
        self.details = details or {}

    def with_hunk(self, hunk_index: int) -> "HunkBodyError":
        """Attach the 1-based hunk index and prefix it to the message."""
        self.hunk_index = hunk_index
        self.args = (f"Hunk {hunk_index}: {self.message}",)
        return self


class EmptyLineError(HunkBodyError):
    """A zero-length line inside a hunk body."""
    def __init__(
        self,
        line_number: int,
    ):
        super().__init__(
            HunkErrorType.EMPTY_LINE,
            f"Empty line at line {line_number}",
            line_number,
        )


class InvalidPrefixError(HunkBodyError):
    """A body line whose first character is not a diff prefix."""
    def __init__(
        self,
        prefix: str,
        line_number: int,
    ):
        super().__init__(
            HunkErrorType.INVALID_PREFIX,
            f"Invalid line prefix {prefix!r} at line {line_number}",
            line_number,
            details = {
                "prefix": prefix
            }
        )
        self.prefix = prefix
