"""Provider normalizer: fold raw patches and content pairs into one UnifiedDiff"""

import logging
from functools import singledispatch
from typing import Optional

from revdiff.core.differ import diff_lines
from revdiff.core.errors import BinaryContentError, DiffSizeError, MalformedPatchError
from revdiff.core.hunks import assemble_hunks, whole_file_hunk
from revdiff.core.models import (
    ChangeKind, ContentPair, DiffStatus, OpKind, RawPatch, UnifiedDiff,
)
from revdiff.core.patch import parse_patch
from revdiff.core.utils.content import byte_size, is_binary, split_lines


logger = logging.getLogger(__name__)

OMITTED_NOTICE = "[binary or oversized, diff omitted]"


def placeholder(
    path: str,
    change_kind: ChangeKind,
    status: DiffStatus,
    notice: str,
    renamed_from: Optional[str] = None,
    ) -> UnifiedDiff:
    """Renderable stand-in for a file whose diff could not be computed."""
    logger.info("Placeholder diff for %s (%s): %s", path, status.value, notice)
    return UnifiedDiff(
        path=path, change_kind=change_kind, renamed_from=renamed_from,
        status=status, notice=notice,
    )


def unavailable(path: str, change_kind: ChangeKind, reason: str, renamed_from: Optional[str] = None) -> UnifiedDiff:
    return placeholder(path, change_kind, DiffStatus.unavailable, f"[content unavailable: {reason}]", renamed_from)


def _binary(path: str, change_kind: ChangeKind, renamed_from: Optional[str]) -> UnifiedDiff:
    old = "/dev/null" if change_kind is ChangeKind.add else f"a/{renamed_from or path}"
    new = "/dev/null" if change_kind is ChangeKind.delete else f"b/{path}"
    return placeholder(path, change_kind, DiffStatus.omitted, f"Binary files {old} and {new} differ", renamed_from)


@singledispatch
def normalize(
    source,
    path: str,
    *,
    context_lines: int = 3,
    max_bytes: int = 0,
    max_cells: int = 0,
    ) -> UnifiedDiff:
    """Normalize a RawPatch or ContentPair for path into a UnifiedDiff.

    Never raises for provider-side problems: binary, oversized, missing or
    malformed input comes back as a placeholder diff with a notice.
    """
    raise TypeError(f"Unsupported provider input: {type(source).__name__}")


@normalize.register
def _(source: RawPatch, path: str, *, context_lines: int = 3, max_bytes: int = 0, max_cells: int = 0) -> UnifiedDiff:
    kind, renamed_from = source.change_kind, source.renamed_from
    if not source.text.strip():
        if kind is ChangeKind.rename:
            return UnifiedDiff(path=path, change_kind=kind, renamed_from=renamed_from)
        return placeholder(path, kind, DiffStatus.omitted, OMITTED_NOTICE, renamed_from)
    if max_bytes and byte_size(source.text) > max_bytes:
        return placeholder(path, kind, DiffStatus.omitted, OMITTED_NOTICE, renamed_from)

    try:
        hunks = parse_patch(source.text, path, renamed_from)
        return UnifiedDiff(path=path, change_kind=kind, renamed_from=renamed_from, hunks=hunks)
    except BinaryContentError:
        return _binary(path, kind, renamed_from)
    except (MalformedPatchError, ValueError) as e:
        logger.warning("Malformed patch for %s: %s", path, e)
        return placeholder(
            path, kind, DiffStatus.malformed,
            f"[content unavailable: patch does not match {path}]", renamed_from,
        )


@normalize.register
def _(source: ContentPair, path: str, *, context_lines: int = 3, max_bytes: int = 0, max_cells: int = 0) -> UnifiedDiff:
    kind, renamed_from = source.change_kind, source.renamed_from
    before = "" if kind is ChangeKind.add else source.before
    after = "" if kind is ChangeKind.delete else source.after

    missing = [side for side, text in (("before", before), ("after", after)) if text is None]
    if missing:
        return unavailable(path, kind, f"{' and '.join(missing)} content not found", renamed_from)
    if is_binary(before) or is_binary(after):
        return _binary(path, kind, renamed_from)
    if max_bytes and max(byte_size(before), byte_size(after)) > max_bytes:
        return placeholder(path, kind, DiffStatus.omitted, OMITTED_NOTICE, renamed_from)

    if kind is ChangeKind.add:
        hunks = whole_file_hunk(split_lines(after), OpKind.insert)
    elif kind is ChangeKind.delete:
        hunks = whole_file_hunk(split_lines(before), OpKind.delete)
    elif before == after:
        hunks = []
    else:
        try:
            ops = diff_lines(split_lines(before), split_lines(after), max_cells=max_cells)
        except DiffSizeError as e:
            logger.warning("Skipping diff for %s: %s", path, e)
            return placeholder(path, kind, DiffStatus.omitted, OMITTED_NOTICE, renamed_from)
        hunks = assemble_hunks(ops, context_lines)
    return UnifiedDiff(path=path, change_kind=kind, renamed_from=renamed_from, hunks=tuple(hunks))
