import logging
from collections.abc import Sequence

from rehunk.hunks.errors import EmptyLineError, HunkBodyError, InvalidPrefixError
from rehunk.hunks.header import build_header, format_range, parse_header
from rehunk.hunks.models import ChangeRecord, LineCounts, ProcessResult

logger = logging.getLogger(__name__)

CONTEXT_PREFIX = " "
ADDITION_PREFIX = "+"
DELETION_PREFIX = "-"
# "#" lines are git's edit instructions, "\" is "\ No newline at end of file".
IGNORED_PREFIXES = frozenset({"#", "\\"})


def classify_body(body_lines: Sequence[str]) -> LineCounts:
    """
    Tally a hunk body by line prefix.

    Raises:
        EmptyLineError: a zero-length line is found.
        InvalidPrefixError: a line starts with an unrecognized character.

    Line numbers in errors are 1-based within the body.
    """
    context = 0
    additions = 0
    deletions = 0

    for line_number, line in enumerate(body_lines, start=1):
        if line == "":
            raise EmptyLineError(line_number)

        prefix = line[0]
        if prefix == CONTEXT_PREFIX:
            context += 1
        elif prefix == ADDITION_PREFIX:
            additions += 1
        elif prefix == DELETION_PREFIX:
            deletions += 1
        elif prefix in IGNORED_PREFIXES:
            continue
        else:
            raise InvalidPrefixError(prefix, line_number)

    return LineCounts(context=context, additions=additions, deletions=deletions)


def process_lines(lines: Sequence[str]) -> ProcessResult:
    """
    Recalculate the counts of every hunk header in a diff.

    Lines outside hunks are copied verbatim. A hunk's body runs from its
    header to the next header or the end of input. Start offsets and
    suffixes are kept, only the counts are rewritten.

    Raises:
        HunkBodyError: a body contains an empty line or an unknown prefix.
            Nothing is returned in that case.
    """
    out: list[str] = []
    changes: list[ChangeRecord] = []
    hunk_index = 0

    i = 0
    while i < len(lines):
        line = lines[i]
        header = parse_header(line)
        if header is None:
            out.append(line)
            i += 1
            continue

        hunk_index += 1
        body_start = i + 1
        i = body_start
        while i < len(lines) and parse_header(lines[i]) is None:
            i += 1
        body = lines[body_start:i]

        try:
            counts = classify_body(body)
        except HunkBodyError as exc:
            logger.debug("Hunk %d has an invalid body: %s", hunk_index, exc.message)
            exc.with_hunk(hunk_index)
            raise

        old_count = counts.old_count
        new_count = counts.new_count
        out.append(
            build_header(
                header.old_start,
                old_count,
                header.new_start,
                new_count,
                header.suffix,
            )
        )
        out.extend(body)

        changes.append(
            ChangeRecord(
                hunk_index = hunk_index,
                old_range = format_range(
                    header.old_start, header.old_count, header.new_start, header.new_count
                ),
                new_range = format_range(
                    header.old_start, old_count, header.new_start, new_count
                ),
            )
        )
        logger.debug(
            "Hunk %d: context=%d additions=%d deletions=%d",
            hunk_index,
            counts.context,
            counts.additions,
            counts.deletions,
        )

    logger.debug("Processed %d lines, %d hunks", len(lines), hunk_index)
    return ProcessResult(lines=out, changes=changes)
