import logging
import sys
from pathlib import Path

import typer

from rehunk.config import ConfigError, RehunkConfig, load_config
from rehunk.editor import EditorError, edit_and_recalculate, is_hunk_edit_file
from rehunk.hunks.errors import HunkBodyError
from rehunk.hunks.header import format_range, parse_header
from rehunk.logging import setup_logging
from rehunk.recalculate import (
    decode_text,
    encode_text,
    recalculate_file,
    recalculate_text,
)
from rehunk.reporting.feedback import feedback_lines, format_feedback

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help = True)

STDIN_PATH = Path("-")


def _init(config_path: Path | None, verbose: bool) -> RehunkConfig:
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")
    setup_logging(logging.DEBUG if verbose else config.log_level)
    return config


@app.command("fix")
def fix_cmd(
    paths: list[Path] | None = typer.Argument(
        None, help="Diff files to fix in place. Reads stdin when omitted or '-'."
    ),
    check: bool = typer.Option(
        False, "--check", help="Write nothing; exit 1 if any header would change"
    ),
    stdout: bool = typer.Option(
        False, "--stdout", help="Print the fixed diff instead of rewriting files"
    ),
    config_path: Path | None = typer.Option(None, "--config", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Recalculate hunk header line counts."""
    config = _init(config_path, verbose)
    paths = paths or [STDIN_PATH]

    failed = False
    would_change = False
    for path in paths:
        if path == STDIN_PATH:
            try:
                outcome = recalculate_text(decode_text(sys.stdin.buffer.read()))
            except HunkBodyError as exc:
                typer.echo(f"Rehunk: {exc}", err=True)
                raise typer.Exit(code=1)
            would_change = would_change or outcome.changed
            if not check:
                typer.echo(encode_text(outcome.text), nl=False)
            typer.echo(format_feedback(outcome.result.changes), err=True)
            continue

        if not path.is_file():
            raise typer.BadParameter(f"{path} is not a file", param_hint="PATHS")

        try:
            outcome = recalculate_file(path, config, check=check or stdout)
        except HunkBodyError as exc:
            typer.echo(f"{path}: {exc}", err=True)
            failed = True
            continue

        would_change = would_change or outcome.changed
        if stdout:
            typer.echo(encode_text(outcome.text), nl=False)
            continue

        for line in feedback_lines(outcome.result.changes):
            typer.echo(f"{path}: {line}")

    if failed or (check and would_change):
        raise typer.Exit(code=1)


@app.command("edit")
def edit_cmd(
    path: Path = typer.Argument(..., help="File to edit, usually git's hunk-edit buffer"),
    config_path: Path | None = typer.Option(None, "--config", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Open an editor on PATH, then fix its hunk headers (use as GIT_EDITOR)."""
    config = _init(config_path, verbose)

    if not is_hunk_edit_file(path, config.hunk_edit_patterns):
        logger.warning("%s does not look like a git hunk-edit file", path)

    try:
        outcome = edit_and_recalculate(path, config)
    except EditorError as exc:
        typer.echo(f"Rehunk: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code)
    except HunkBodyError as exc:
        # git rejects the hunk itself, so the edit is not lost.
        typer.echo(f"Rehunk: {exc}", err=True)
        raise typer.Exit(code=1)

    if outcome is not None:
        typer.echo(format_feedback(outcome.result.changes), err=True)


@app.command("headers")
def headers_cmd(
    paths: list[Path] = typer.Argument(..., help="Diff files to inspect"),
):
    """List the hunk headers found in each file."""
    for path in paths:
        if not path.is_file():
            raise typer.BadParameter(f"{path} is not a file", param_hint="PATHS")
        index = 0
        for line in decode_text(path.read_bytes()).split("\n"):
            header = parse_header(line)
            if header is None:
                continue
            index += 1
            ranges = format_range(
                header.old_start, header.old_count, header.new_start, header.new_count
            )
            typer.echo(encode_text(f"{path}: Hunk {index}: {ranges}{header.suffix}"))
        if index == 0:
            typer.echo(f"{path}: No hunks found")


@app.callback()
def main():
    """
    Rehunk CLI
    """
    pass
