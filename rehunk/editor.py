import fnmatch
import logging
import os
import shlex
import subprocess
from collections.abc import Iterable
from pathlib import Path

from rehunk.config import RehunkConfig
from rehunk.recalculate import RecalculateOutcome, recalculate_file

logger = logging.getLogger(__name__)

FALLBACK_EDITOR = "vi"


class EditorError(Exception):
    def __init__(self, command: list[str], exit_code: int):
        super().__init__(
            f"Editor {shlex.join(command)!r} exited with code {exit_code}"
        )
        self.command = command
        self.exit_code = exit_code


def is_hunk_edit_file(path: Path, patterns: Iterable[str]) -> bool:
    """True when path looks like the buffer git opens for an edited hunk."""
    path = Path(path)
    for pattern in patterns:
        if fnmatch.fnmatchcase(path.name, pattern) or fnmatch.fnmatchcase(
            str(path), pattern
        ):
            return True
    return False


def _is_self(command: list[str]) -> bool:
    return bool(command) and Path(command[0]).name in ("rehunk", "rehunk.exe")


def resolve_editor(
    config: RehunkConfig,
    environ: dict[str, str] | None = None,
) -> list[str]:
    """
    Editor command as an argv list.

    Order: config, $VISUAL, $EDITOR, then vi. A candidate that would run
    rehunk itself is skipped.
    """
    environ = os.environ if environ is None else environ
    candidates = [config.editor, environ.get("VISUAL"), environ.get("EDITOR")]

    for candidate in candidates:
        if not candidate:
            continue
        command = shlex.split(candidate)
        if _is_self(command):
            logger.debug("Skipping editor %r, it points back at rehunk", candidate)
            continue
        return command

    return [FALLBACK_EDITOR]


def edit_and_recalculate(
    path: Path,
    config: RehunkConfig,
    environ: dict[str, str] | None = None,
) -> RecalculateOutcome | None:
    """
    Open path in the user's editor, then fix its hunk headers.

    Meant to be used as GIT_EDITOR for ``git add -p``. Returns None when
    auto_recalculate is disabled.
    """
    path = Path(path)
    command = [*resolve_editor(config, environ), str(path)]
    logger.debug("Running editor: %s", shlex.join(command))

    completed = subprocess.run(command, check=False)
    if completed.returncode != 0:
        raise EditorError(command, completed.returncode)

    if not config.auto_recalculate:
        logger.info("auto_recalculate is off, leaving %s as edited", path)
        return None

    return recalculate_file(path, config)
