"""Unit tests for core/views.py"""

from revdiff.core.models import ContentPair
from revdiff.core.normalize import normalize
from revdiff.core.views import SideBySideRow, format_side_by_side, side_by_side


def test_side_by_side_rows():
    diff = normalize(ContentPair(before="a\nb\nc\n", after="a\nx\nc\n"), "f")
    assert side_by_side(diff) == [
        SideBySideRow("context", 1, "a", 1, "a"),
        SideBySideRow("removed", old_lineno=2, old_text="b"),
        SideBySideRow("added", new_lineno=2, new_text="x"),
        SideBySideRow("context", 3, "c", 3, "c"),
    ]


def test_side_by_side_gap_between_hunks():
    before = "".join(f"{i}\n" for i in range(1, 11))
    after = before.replace("2\n", "two\n").replace("9\n", "nine\n")
    diff = normalize(ContentPair(before=before, after=after), "f", context_lines=1)
    rows = side_by_side(diff)
    assert len(diff.hunks) == 2
    assert [r.kind for r in rows].count("gap") == 1


def test_side_by_side_no_hunks():
    diff = normalize(ContentPair(before="a\n", after="a\n"), "f")
    assert side_by_side(diff) == []


def test_format_side_by_side():
    diff = normalize(ContentPair(before="a\nb\n", after="a\nc\n"), "f")
    lines = format_side_by_side(side_by_side(diff), width=10).split("\n")
    assert len(lines) == 3
    assert lines[0].startswith(" ")
    assert lines[1].startswith("-") and "b" in lines[1]
    assert lines[2].startswith("+") and lines[2].endswith("c")


def test_format_side_by_side_truncates_long_lines():
    diff = normalize(ContentPair(before="", after="x" * 50 + "\n"), "f")
    text = format_side_by_side(side_by_side(diff), width=10)
    assert "x" * 11 not in text
