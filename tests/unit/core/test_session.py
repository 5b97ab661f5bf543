"""Unit tests for core/session.py"""

from revdiff.core.models import ChangeKind, ChangeSummary, ContentPair
from revdiff.core.normalize import normalize, unavailable
from revdiff.core.render import format_diff
from revdiff.core.session import ReviewSession
from revdiff.crud.store import MemoryDiffStore


def _diff(path="f.txt", before="a\n", after="b\nc\n"):
    return normalize(ContentPair(before=before, after=after), path)


def test_record_renders_counts_and_stores():
    session = ReviewSession("github", "42")
    entry = session.record(_diff(), position=3)
    assert entry.key == session.key_for("f.txt")
    assert entry.rendered == format_diff(entry.diff)
    assert entry.summary == ChangeSummary(additions=2, deletions=1)
    assert entry.position == 3
    assert session.get("f.txt") == entry


def test_record_same_path_overwrites():
    session = ReviewSession("github", "42")
    session.record(_diff(after="one\n"))
    session.record(_diff(after="two\n"))
    assert len(session.entries()) == 1
    assert "+two" in session.get("f.txt").rendered


def test_totals_sum_entries():
    session = ReviewSession("github", "42")
    session.record(_diff("a.txt"), 0)
    session.record(_diff("b.txt", before="", after="x\ny\nz\n"), 1)
    session.record(unavailable("c.txt", ChangeKind.edit, "timed out"), 2)
    assert session.totals() == ChangeSummary(additions=5, deletions=1)


def test_sessions_share_store_without_collision():
    store = MemoryDiffStore()
    one = ReviewSession("github", "1", store)
    two = ReviewSession("github", "2", store)
    one.record(_diff())
    two.record(_diff())
    assert len(store) == 2
    assert one.clear() == 1
    assert len(store) == 1
    assert two.get("f.txt") is not None


def test_context_manager_clears_on_exit():
    store = MemoryDiffStore()
    with ReviewSession("github", "1", store) as session:
        session.record(_diff())
        assert len(store) == 1
    assert len(store) == 0


def test_keep_leaves_entries():
    store = MemoryDiffStore()
    with ReviewSession("github", "1", store, keep=True) as session:
        session.record(_diff())
    assert len(store) == 1
