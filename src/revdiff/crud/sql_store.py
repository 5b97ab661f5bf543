"""SQL-backed Diff Store: persists DiffEntry rows so show/export can read them later"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from revdiff.core.models import ChangeSummary, DiffEntry, UnifiedDiff
from revdiff.crud.store import DiffStore
from revdiff.crud.tables import StoredDiff


logger = logging.getLogger(__name__)


def _row_to_entry(row: StoredDiff) -> DiffEntry:
    return DiffEntry(
        key=row.key,
        provider=row.provider,
        review_id=row.review_id,
        position=row.position,
        diff=UnifiedDiff.model_validate_json(row.diff_json),
        rendered=row.rendered,
        summary=ChangeSummary(additions=row.additions, deletions=row.deletions),
    )


def _entry_to_row(entry: DiffEntry, existing: StoredDiff | None) -> StoredDiff:
    row = existing or StoredDiff(
        key=entry.key, provider=entry.provider, review_id=entry.review_id,
        path=entry.diff.path, change_kind=entry.diff.change_kind.value,
        status=entry.diff.status.value, rendered=entry.rendered, diff_json="",
    )
    row.provider = entry.provider
    row.review_id = entry.review_id
    row.position = entry.position
    row.path = entry.diff.path
    row.change_kind = entry.diff.change_kind.value
    row.status = entry.diff.status.value
    row.additions = entry.summary.additions
    row.deletions = entry.summary.deletions
    row.rendered = entry.rendered
    row.diff_json = entry.diff.model_dump_json()
    row.updated_at = datetime.now()
    return row


class SQLDiffStore(DiffStore):
    """Commits on every write; the caller owns the Session."""

    def __init__(self, session: Session):
        self.session = session

    def put(self, entry: DiffEntry) -> DiffEntry:
        row = _entry_to_row(entry, existing=self.session.get(StoredDiff, entry.key))
        self.session.add(row)
        self.session.commit()
        logger.debug("Stored %s (+%d -%d)", entry.key, entry.summary.additions, entry.summary.deletions)
        return entry

    def get(self, key: str) -> Optional[DiffEntry]:
        row = self.session.get(StoredDiff, key)
        return _row_to_entry(row) if row else None

    def list_review(self, provider: str, review_id: str) -> list[DiffEntry]:
        rows = self.session.exec(
            select(StoredDiff)
            .where(StoredDiff.provider == provider)
            .where(StoredDiff.review_id == review_id)
            .order_by(StoredDiff.position.asc())
        ).all()
        return [_row_to_entry(r) for r in rows]

    def list_reviews(self) -> list[tuple[str, str]]:
        """Distinct (provider, review_id) pairs with stored entries."""
        rows = self.session.exec(
            select(StoredDiff.provider, StoredDiff.review_id).distinct()
            .order_by(StoredDiff.provider, StoredDiff.review_id)
        ).all()
        return [(p, r) for p, r in rows]

    def clear(self, provider: Optional[str] = None, review_id: Optional[str] = None) -> int:
        query = select(StoredDiff)
        if provider is not None:
            query = query.where(StoredDiff.provider == provider)
        if review_id is not None:
            query = query.where(StoredDiff.review_id == review_id)
        rows = self.session.exec(query).all()
        for row in rows:
            self.session.delete(row)
        self.session.commit()
        return len(rows)

    def __len__(self) -> int:
        return self.session.exec(select(func.count()).select_from(StoredDiff)).one()
