"""Canonical diff data models shared by the differ, normalizer, and store"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OpKind(str, Enum):
    equal = "equal"
    insert = "insert"
    delete = "delete"


class ChangeKind(str, Enum):
    add = "add"
    delete = "delete"
    edit = "edit"
    rename = "rename"

    @classmethod
    def from_provider(cls, status: str) -> "ChangeKind":
        """Map a provider's change-type vocabulary onto ChangeKind. Raises ValueError if unknown."""
        kind = _PROVIDER_KINDS.get(status.strip().lower())
        if kind is None:
            raise ValueError(f"Unknown change type: {status!r}")
        return kind


_PROVIDER_KINDS = {
    "add": ChangeKind.add, "added": ChangeKind.add, "new": ChangeKind.add,
    "delete": ChangeKind.delete, "deleted": ChangeKind.delete, "removed": ChangeKind.delete,
    "edit": ChangeKind.edit, "modified": ChangeKind.edit, "changed": ChangeKind.edit,
    "rename": ChangeKind.rename, "renamed": ChangeKind.rename,
}


class DiffStatus(str, Enum):
    complete = "complete"
    unavailable = "unavailable"     # one or both blobs could not be fetched
    omitted = "omitted"             # binary or oversized; differencing skipped
    malformed = "malformed"         # provider patch could not be matched to its path


@dataclass(frozen=True)
class EditOperation:
    """One line of an edit script. Lines keep their '\\n' terminator when present."""
    kind: OpKind
    line: str
    old_lineno: Optional[int] = None    # 1-based; None for insert
    new_lineno: Optional[int] = None    # 1-based; None for delete


class Hunk(BaseModel):
    """Contiguous run of edit operations with unified-diff header fields."""
    model_config = ConfigDict(frozen=True)

    old_start: int = Field(ge=0)
    old_len: int = Field(ge=0)
    new_start: int = Field(ge=0)
    new_len: int = Field(ge=0)
    ops: tuple[EditOperation, ...]
    section: str = ""               # text after the closing '@@' (function context)

    @model_validator(mode="after")
    def _check_counts(self) -> "Hunk":
        old = sum(1 for op in self.ops if op.kind is not OpKind.insert)
        new = sum(1 for op in self.ops if op.kind is not OpKind.delete)
        if (old, new) != (self.old_len, self.new_len):
            raise ValueError(
                f"Hunk header -{self.old_start},{self.old_len} +{self.new_start},{self.new_len} "
                f"does not match its lines ({old} old, {new} new)"
            )
        if all(op.kind is OpKind.equal for op in self.ops):
            raise ValueError("Hunk contains no changed lines")
        return self

    @property
    def old_end(self) -> int:
        """Last old-side line covered by the hunk; for pure insertions, the line they follow."""
        return self.old_start + self.old_len - 1 if self.old_len else self.old_start


class UnifiedDiff(BaseModel):
    """Provider-agnostic diff of one file."""
    model_config = ConfigDict(frozen=True)

    path: str
    change_kind: ChangeKind
    renamed_from: Optional[str] = None
    hunks: tuple[Hunk, ...] = ()
    status: DiffStatus = DiffStatus.complete
    notice: Optional[str] = None    # rendered in place of hunks for placeholders

    @model_validator(mode="after")
    def _check_hunks(self) -> "UnifiedDiff":
        for prev, cur in zip(self.hunks, self.hunks[1:]):
            if cur.old_start <= prev.old_end:
                raise ValueError(
                    f"Hunks out of order or overlapping in {self.path}: "
                    f"-{prev.old_start},{prev.old_len} then -{cur.old_start},{cur.old_len}"
                )
        if self.status is not DiffStatus.complete and self.hunks:
            raise ValueError(f"Placeholder diff for {self.path} must not carry hunks")
        return self

    @property
    def old_path(self) -> str:
        return self.renamed_from or self.path

    @property
    def is_placeholder(self) -> bool:
        return self.status is not DiffStatus.complete


class ChangeSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)

    def __add__(self, other: "ChangeSummary") -> "ChangeSummary":
        return ChangeSummary(
            additions=self.additions + other.additions,
            deletions=self.deletions + other.deletions,
        )


class RawPatch(BaseModel):
    """Provider-supplied hunk text for one file (GitHub-style 'patch' field)."""
    kind: Literal["raw_patch"] = "raw_patch"
    text: str = ""
    change_kind: ChangeKind = ChangeKind.edit
    renamed_from: Optional[str] = None


class ContentPair(BaseModel):
    """Raw file content at the base and head refs; None means the blob was not found."""
    kind: Literal["content_pair"] = "content_pair"
    before: Optional[str] = ""
    after: Optional[str] = ""
    change_kind: ChangeKind = ChangeKind.edit
    renamed_from: Optional[str] = None


ProviderDiffInput = Annotated[Union[RawPatch, ContentPair], Field(discriminator="kind")]


class ChangedFile(BaseModel):
    """One file of a review as listed by the provider."""
    path: str
    change_kind: ChangeKind = ChangeKind.edit
    renamed_from: Optional[str] = None
    patch: Optional[str] = None     # inline patch when the provider listing carries one


class ReviewRequest(BaseModel):
    provider: str
    review_id: str
    base_ref: str = "base"
    head_ref: str = "head"
    files: list[ChangedFile] = []


class DiffEntry(BaseModel):
    """Diff Store value: a normalized diff with its rendered text and counts."""
    key: str
    provider: str
    review_id: str
    position: int = 0               # index in the review's original file order
    diff: UnifiedDiff
    rendered: str
    summary: ChangeSummary
