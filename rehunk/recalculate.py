import logging
import os
import tempfile
from pathlib import Path

from filelock import FileLock
from pydantic import BaseModel, ConfigDict

from rehunk.config import RehunkConfig
from rehunk.hunks.errors import HunkBodyError
from rehunk.hunks.models import ProcessResult
from rehunk.hunks.processor import process_lines

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# Undecodable bytes (e.g. Latin-1 source lines) survive a read/write cycle.
ENCODING_ERRORS = "surrogateescape"


class RecalculateOutcome(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    text: str
    result: ProcessResult
    changed: bool
    written: bool = False


def decode_text(data: bytes) -> str:
    return data.decode(ENCODING, errors=ENCODING_ERRORS)


def encode_text(text: str) -> bytes:
    return text.encode(ENCODING, errors=ENCODING_ERRORS)


def recalculate_text(text: str) -> RecalculateOutcome:
    """
    Recalculate hunk headers in a block of diff text.

    Lines are split on line feeds only, so carriage returns stay part of each
    line and a trailing newline survives. Raises HunkBodyError without
    producing any text when a hunk body is invalid.
    """
    lines = text.split("\n")
    trailing_newline = text.endswith("\n")
    if trailing_newline:
        lines.pop()

    result = process_lines(lines)

    new_text = "\n".join(result.lines)
    if trailing_newline:
        new_text += "\n"

    return RecalculateOutcome(
        text = new_text,
        result = result,
        changed = result.any_changed,
    )


def _replace_file(path: Path, content: str) -> None:
    lock = FileLock(str(path) + ".lock")
    with lock:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(
                fd, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline=""
            ) as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if path.exists():
                os.chmod(tmp_name, path.stat().st_mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def recalculate_file(
    path: Path,
    config: RehunkConfig | None = None,
    check: bool = False,
) -> RecalculateOutcome:
    """
    Recalculate hunk headers in a diff file.

    The file is rewritten only when a header changed (or when
    ``write_unchanged`` is set), and never in ``check`` mode or when a body
    is invalid.
    """
    config = config or RehunkConfig()
    path = Path(path)
    text = decode_text(path.read_bytes())

    try:
        outcome = recalculate_text(text)
    except HunkBodyError as exc:
        logger.warning("Leaving %s untouched: %s", path, exc)
        raise

    should_write = outcome.changed or config.write_unchanged
    if should_write and not check:
        _replace_file(path, outcome.text)
        outcome.written = True
        logger.info("Rewrote hunk headers in %s", path)
    else:
        logger.debug("No write for %s (changed=%s, check=%s)", path, outcome.changed, check)

    return outcome
