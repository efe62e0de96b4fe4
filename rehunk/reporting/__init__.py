from rehunk.reporting.feedback import (
    FEEDBACK_PREFIX,
    NO_CHANGES_MESSAGE,
    NO_HUNKS_MESSAGE,
    feedback_lines,
    format_change,
    format_feedback,
)

__all__ = [
    "FEEDBACK_PREFIX",
    "NO_CHANGES_MESSAGE",
    "NO_HUNKS_MESSAGE",
    "feedback_lines",
    "format_change",
    "format_feedback",
]
