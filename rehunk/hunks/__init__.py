from rehunk.hunks.errors import (
    EmptyLineError,
    HunkBodyError,
    HunkErrorType,
    InvalidPrefixError,
)
from rehunk.hunks.header import (
    HUNK_HEADER_RE,
    build_header,
    format_range,
    parse_header,
)
from rehunk.hunks.models import (
    ChangeRecord,
    HunkHeader,
    LineCounts,
    ProcessResult,
)
from rehunk.hunks.processor import classify_body, process_lines

__all__ = [
    "HUNK_HEADER_RE",
    "parse_header",
    "build_header",
    "format_range",
    "classify_body",
    "process_lines",
    "HunkHeader",
    "LineCounts",
    "ChangeRecord",
    "ProcessResult",
    "HunkErrorType",
    "HunkBodyError",
    "EmptyLineError",
    "InvalidPrefixError",
]
