"""Unit tests for core/counter.py"""

import pytest

from revdiff.core.counter import count_changes, summarize
from revdiff.core.models import ChangeKind, ChangeSummary, ContentPair
from revdiff.core.normalize import normalize, unavailable


def _counts(text: str) -> tuple[int, int]:
    s = count_changes(text)
    return s.additions, s.deletions


def test_count_changes_github_patch(github_patch):
    assert _counts(github_patch) == (3, 3)


def test_count_changes_skips_file_markers():
    text = "--- a/f.txt\n+++ b/f.txt\n@@ -1 +1 @@\n-a\n+b\n"
    assert _counts(text) == (1, 1)


@pytest.mark.parametrize("line", ["+", "+   ", "+\t", "+\r"])
def test_count_changes_whitespace_only_addition_not_counted(line):
    assert _counts(line) == (0, 0)


def test_count_changes_whitespace_only_deletion_not_counted():
    assert _counts("@@ -1,2 +1,0 @@\n-  \n-x\n") == (0, 1)


def test_count_changes_marker_lookalikes_inside_hunk_count():
    """'---x' and '+++y' inside a hunk body are content, not file markers."""
    assert _counts("@@ -1,1 +1,1 @@\n---x\n+++y\n") == (1, 1)


def test_count_changes_marker_lookalikes_outside_hunk_skipped():
    assert _counts("---x\n+++y\n") == (0, 0)


def test_count_changes_ignores_no_newline_marker():
    text = "@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b\n"
    assert _counts(text) == (1, 1)


def test_count_changes_multiple_files():
    one = "--- a/x\n+++ b/x\n@@ -1,2 +1,2 @@\n a\n-b\n+c\n"
    two = "--- a/y\n+++ b/y\n@@ -0,0 +1,2 @@\n+p\n+q\n"
    assert _counts(one + two) == (3, 1)


def test_count_changes_empty():
    assert count_changes("") == ChangeSummary()


# --- summarize ---

def test_summarize_content_diff():
    diff = normalize(ContentPair(before="a\nb\nc\n", after="a\nB\nc\nd\n"), "f.txt")
    assert summarize(diff) == ChangeSummary(additions=2, deletions=1)


def test_summarize_whitespace_only_change():
    """Changing a line to whitespace counts the deletion but not the blank addition."""
    diff = normalize(ContentPair(before="a\nb\n", after="a\n   \n"), "f.txt")
    assert summarize(diff) == ChangeSummary(additions=0, deletions=1)


def test_summarize_placeholder_is_zero():
    diff = unavailable("f.txt", ChangeKind.edit, "timed out")
    assert summarize(diff) == ChangeSummary()
