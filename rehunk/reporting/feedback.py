from collections.abc import Sequence

from rehunk.hunks.models import ChangeRecord

FEEDBACK_PREFIX = "Rehunk: "
NO_HUNKS_MESSAGE = "No hunks found"
NO_CHANGES_MESSAGE = "No changes needed"


def format_change(change: ChangeRecord) -> str:
    if not change.changed:
        return f"Hunk {change.hunk_index}: unchanged"
    return f"Hunk {change.hunk_index}: {change.old_range} -> {change.new_range}"


def format_feedback(changes: Sequence[ChangeRecord]) -> str:
    """
    One-line summary of a recalculation, suitable for a status message.

    Returns:
        "Rehunk: No hunks found", "Rehunk: No changes needed" or the
        per-hunk parts joined by " | ".
    """
    if not changes:
        return FEEDBACK_PREFIX + NO_HUNKS_MESSAGE

    if not any(change.changed for change in changes):
        return FEEDBACK_PREFIX + NO_CHANGES_MESSAGE

    return FEEDBACK_PREFIX + " | ".join(format_change(change) for change in changes)


def feedback_lines(changes: Sequence[ChangeRecord]) -> list[str]:
    if not changes:
        return [NO_HUNKS_MESSAGE]
    return [format_change(change) for change in changes]
