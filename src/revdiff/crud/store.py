"""Diff Store interface and in-memory implementation"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from revdiff.core.models import DiffEntry


class DiffStore(ABC):
    """Keyed cache of DiffEntry values for review sessions. Last writer wins per key."""

    @abstractmethod
    def put(self, entry: DiffEntry) -> DiffEntry:
        raise NotImplementedError

    @abstractmethod
    def get(self, key: str) -> Optional[DiffEntry]:
        raise NotImplementedError

    @abstractmethod
    def list_review(self, provider: str, review_id: str) -> list[DiffEntry]:
        """Entries of one review, in original file order."""
        raise NotImplementedError

    @abstractmethod
    def clear(self, provider: Optional[str] = None, review_id: Optional[str] = None) -> int:
        """Delete entries (all, one provider's, or one review's). Returns count deleted."""
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


def _matches(entry: DiffEntry, provider: Optional[str], review_id: Optional[str]) -> bool:
    return (provider is None or entry.provider == provider) and (
        review_id is None or entry.review_id == review_id
    )


@dataclass
class MemoryDiffStore(DiffStore):
    _entries: dict[str, DiffEntry] = field(default_factory=dict)

    def put(self, entry: DiffEntry) -> DiffEntry:
        self._entries[entry.key] = entry
        return entry

    def get(self, key: str) -> Optional[DiffEntry]:
        return self._entries.get(key)

    def list_review(self, provider: str, review_id: str) -> list[DiffEntry]:
        found = [e for e in self._entries.values() if _matches(e, provider, review_id)]
        return sorted(found, key=lambda e: e.position)

    def clear(self, provider: Optional[str] = None, review_id: Optional[str] = None) -> int:
        doomed = [k for k, e in self._entries.items() if _matches(e, provider, review_id)]
        for k in doomed:
            del self._entries[k]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._entries)
