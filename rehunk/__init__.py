from rehunk.hunks import (
    ChangeRecord,
    EmptyLineError,
    HunkBodyError,
    HunkHeader,
    InvalidPrefixError,
    LineCounts,
    ProcessResult,
    build_header,
    classify_body,
    parse_header,
    process_lines,
)

__all__ = [
    "parse_header",
    "build_header",
    "process_lines",
    "classify_body",
    "HunkHeader",
    "LineCounts",
    "ChangeRecord",
    "ProcessResult",
    "HunkBodyError",
    "EmptyLineError",
    "InvalidPrefixError",
]
