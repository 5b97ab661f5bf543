"""Provider collaborator interfaces, and a local-directory implementation for the CLI"""

import asyncio
from pathlib import Path
from typing import Iterable, Optional, Protocol

from revdiff.core.models import ChangedFile, ChangeKind


class ContentFetcher(Protocol):
    async def fetch_file_content(self, path: str, ref: str) -> Optional[str]:
        """Blob text of path at ref, or None when the file does not exist there."""
        ...


class PatchFetcher(Protocol):
    async def fetch_raw_patch(self, path: str) -> Optional[str]:
        """Provider patch text for path, or None when the provider has none."""
        ...


def iter_files(root: Path) -> Iterable[str]:
    """POSIX-style relative paths of all files under root, skipping .git."""
    for p in root.rglob("*"):
        if p.is_file() and ".git" not in p.relative_to(root).parts:
            yield p.relative_to(root).as_posix()


def _read(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    return path.read_bytes().decode("utf-8", errors="replace")


class LocalTreeFetcher:
    """ContentFetcher over directory snapshots, one directory per ref."""

    def __init__(self, roots: dict[str, Path]):
        self.roots = {ref: Path(p) for ref, p in roots.items()}

    async def fetch_file_content(self, path: str, ref: str) -> Optional[str]:
        root = self.roots.get(ref)
        if root is None:
            raise KeyError(f"Unknown ref: {ref}")
        return await asyncio.to_thread(_read, root / path)


def discover_changes(base: Path, head: Path) -> list[ChangedFile]:
    """Added, deleted, and edited files between two trees, sorted by path. Renames are not detected."""
    old, new = set(iter_files(base)), set(iter_files(head))
    changes = []
    for path in sorted(old | new):
        if path not in old:
            changes.append(ChangedFile(path=path, change_kind=ChangeKind.add))
        elif path not in new:
            changes.append(ChangedFile(path=path, change_kind=ChangeKind.delete))
        elif (base / path).read_bytes() != (head / path).read_bytes():
            changes.append(ChangedFile(path=path, change_kind=ChangeKind.edit))
    return changes
