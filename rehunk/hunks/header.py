import re

from rehunk.hunks.models import HunkHeader

# Counts are optional: "-5" means a single-line range.
HUNK_HEADER_RE = re.compile(r"^@@\s+-(\d+)(?:,(\d*))?\s+\+(\d+)(?:,(\d*))?\s+@@(.*)$", re.ASCII)


def parse_header(line: str) -> HunkHeader | None:
    """
    Parse a unified-diff hunk header.

    Returns None for anything that is not a header (body lines, file
    markers, malformed headers). An omitted count defaults to 1.

    >>> parse_header("@@ -10,20 +10,25 @@ def foo():")
    HunkHeader(old_start=10, old_count=20, new_start=10, new_count=25, suffix=' def foo():')
    """
    match = HUNK_HEADER_RE.match(line)
    if not match:
        return None

    old_start, old_count, new_start, new_count, suffix = match.groups()
    return HunkHeader(
        old_start = int(old_start),
        old_count = int(old_count) if old_count else 1,
        new_start = int(new_start),
        new_count = int(new_count) if new_count else 1,
        suffix = suffix or "",
    )


def _format_side(sign: str, start: int, count: int) -> str:
    if count == 1:
        return f"{sign}{start}"
    return f"{sign}{start},{count}"


def build_header(
    old_start: int,
    old_count: int,
    new_start: int,
    new_count: int,
    suffix: str = "",
) -> str:
    """
    Render a hunk header, omitting a count only when it equals 1.

    A count of 0 is always written out ("-5,0").
    """
    old_part = _format_side("-", old_start, old_count)
    new_part = _format_side("+", new_start, new_count)
    return f"@@ {old_part} {new_part} @@{suffix}"


def format_range(
    old_start: int,
    old_count: int,
    new_start: int,
    new_count: int,
) -> str:
    """Range text for feedback, always with explicit counts."""
    return f"-{old_start},{old_count} +{new_start},{new_count}"
