"""Review session: owns a Diff Store handle for one review and clears it on teardown"""

import logging
from typing import Optional

from revdiff.core.counter import count_changes
from revdiff.core.models import ChangeSummary, DiffEntry, UnifiedDiff
from revdiff.core.render import format_diff
from revdiff.core.utils.keys import store_key
from revdiff.crud.store import DiffStore, MemoryDiffStore


logger = logging.getLogger(__name__)


class ReviewSession:
    """Records normalized diffs for one (provider, review_id) into a shared store.

    Use as a context manager, or call close(), to drop this review's entries.
    Pass keep=True to leave them for later readers (e.g. a persisted store).
    """

    def __init__(self, provider: str, review_id: str, store: Optional[DiffStore] = None, keep: bool = False):
        self.provider = provider
        self.review_id = review_id
        self.store = store if store is not None else MemoryDiffStore()
        self.keep = keep

    def key_for(self, path: str) -> str:
        return store_key(self.provider, self.review_id, path)

    def record(self, diff: UnifiedDiff, position: int = 0) -> DiffEntry:
        """Render and count diff, then write it under its key (last writer wins)."""
        rendered = format_diff(diff)
        entry = DiffEntry(
            key=self.key_for(diff.path),
            provider=self.provider,
            review_id=self.review_id,
            position=position,
            diff=diff,
            rendered=rendered,
            summary=count_changes(rendered),
        )
        return self.store.put(entry)

    def get(self, path: str) -> Optional[DiffEntry]:
        return self.store.get(self.key_for(path))

    def entries(self) -> list[DiffEntry]:
        return self.store.list_review(self.provider, self.review_id)

    def totals(self) -> ChangeSummary:
        return sum((e.summary for e in self.entries()), ChangeSummary())

    def clear(self) -> int:
        removed = self.store.clear(self.provider, self.review_id)
        logger.debug("Cleared %d entries for %s/%s", removed, self.provider, self.review_id)
        return removed

    def close(self) -> None:
        if not self.keep:
            self.clear()

    def __enter__(self) -> "ReviewSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
