"""Unit tests for text and file recalculation."""

from pathlib import Path

import pytest

from rehunk.config import RehunkConfig
from rehunk.hunks.errors import EmptyLineError, InvalidPrefixError
from rehunk.recalculate import recalculate_file, recalculate_text

BROKEN_DIFF = """\
diff --git a/f.txt b/f.txt
--- a/f.txt
+++ b/f.txt
@@ -1,3 +1,3 @@
-foo
-bar
-zoo
+1
+3
"""

FIXED_DIFF = BROKEN_DIFF.replace("@@ -1,3 +1,3 @@", "@@ -1,3 +1,2 @@")

CORRUPT_DIFF = """\
@@ -1,2 +1,2 @@
 a
oops
"""


class TestRecalculateText:
    """Tests for recalculate_text."""

    def test_fixes_header(self):
        outcome = recalculate_text(BROKEN_DIFF)
        assert outcome.text == FIXED_DIFF
        assert outcome.changed is True
        assert len(outcome.result.changes) == 1

    def test_correct_text_is_unchanged(self):
        outcome = recalculate_text(FIXED_DIFF)
        assert outcome.text == FIXED_DIFF
        assert outcome.changed is False

    def test_keeps_missing_trailing_newline(self):
        text = "@@ -1,2 +1 @@\n-a\n+b"
        assert recalculate_text(text).text == "@@ -1 +1 @@\n-a\n+b"

    def test_keeps_carriage_returns(self):
        text = "@@ -1,2 +1,2 @@\r\n-a\r\n+b\r\n"
        assert recalculate_text(text).text == "@@ -1 +1 @@\r\n-a\r\n+b\r\n"

    def test_empty_text(self):
        outcome = recalculate_text("")
        assert outcome.text == ""
        assert outcome.result.changes == []

    def test_blank_line_in_body_raises(self):
        with pytest.raises(EmptyLineError):
            recalculate_text("@@ -1 +1 @@\n a\n\n b\n")


class TestRecalculateFile:
    """Tests for recalculate_file."""

    def test_rewrites_changed_file(self, tmp_path: Path):
        path = tmp_path / "hunk.diff"
        path.write_text(BROKEN_DIFF, encoding="utf-8")

        outcome = recalculate_file(path)

        assert outcome.written is True
        assert path.read_text(encoding="utf-8") == FIXED_DIFF
        assert [p.name for p in tmp_path.iterdir() if p.suffix == ".tmp"] == []

    def test_keeps_lock_file_after_write(self, tmp_path: Path):
        """The lock file outlives the write so later writers share its inode."""
        path = tmp_path / "hunk.diff"
        path.write_text(BROKEN_DIFF, encoding="utf-8")
        lock_path = tmp_path / "hunk.diff.lock"
        lock_path.touch()
        inode = lock_path.stat().st_ino

        recalculate_file(path)

        assert lock_path.exists()
        assert lock_path.stat().st_ino == inode

    def test_undecodable_bytes_round_trip(self, tmp_path: Path):
        """Latin-1 body lines are rewritten byte for byte."""
        path = tmp_path / "hunk.diff"
        path.write_bytes(b"@@ -1,3 +1,3 @@\n-caf\xe9\n+cafe\n")

        outcome = recalculate_file(path)

        assert outcome.written is True
        assert path.read_bytes() == b"@@ -1 +1 @@\n-caf\xe9\n+cafe\n"

    def test_unchanged_file_is_not_written(self, tmp_path: Path):
        path = tmp_path / "hunk.diff"
        path.write_text(FIXED_DIFF, encoding="utf-8")
        mtime = path.stat().st_mtime_ns

        outcome = recalculate_file(path)

        assert outcome.written is False
        assert path.stat().st_mtime_ns == mtime

    def test_write_unchanged_forces_write(self, tmp_path: Path):
        path = tmp_path / "hunk.diff"
        path.write_text(FIXED_DIFF, encoding="utf-8")

        outcome = recalculate_file(path, RehunkConfig(write_unchanged=True))

        assert outcome.written is True
        assert path.read_text(encoding="utf-8") == FIXED_DIFF

    def test_check_mode_never_writes(self, tmp_path: Path):
        path = tmp_path / "hunk.diff"
        path.write_text(BROKEN_DIFF, encoding="utf-8")

        outcome = recalculate_file(path, check=True)

        assert outcome.changed is True
        assert outcome.written is False
        assert path.read_text(encoding="utf-8") == BROKEN_DIFF

    def test_corrupt_body_leaves_file_untouched(self, tmp_path: Path):
        path = tmp_path / "hunk.diff"
        path.write_text(CORRUPT_DIFF, encoding="utf-8")

        with pytest.raises(InvalidPrefixError):
            recalculate_file(path)

        assert path.read_text(encoding="utf-8") == CORRUPT_DIFF

    def test_preserves_crlf_on_disk(self, tmp_path: Path):
        path = tmp_path / "hunk.diff"
        path.write_bytes(b"@@ -1,3 +1,3 @@\r\n a\r\n+b\r\n")

        recalculate_file(path)

        assert path.read_bytes() == b"@@ -1 +1,2 @@\r\n a\r\n+b\r\n"
