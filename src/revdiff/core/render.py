"""Unified diff formatter: git-style text for one or many UnifiedDiffs"""

from typing import Iterable

from revdiff.core.models import ChangeKind, Hunk, OpKind, UnifiedDiff


NO_NEWLINE_MARKER = "\\ No newline at end of file"
FILE_MODE = "100644"

_PREFIX = {OpKind.equal: " ", OpKind.insert: "+", OpKind.delete: "-"}


def _file_header(diff: UnifiedDiff) -> list[str]:
    old, new = diff.old_path, diff.path
    lines = [f"diff --git a/{old} b/{new}"]
    kind = diff.change_kind

    if kind is ChangeKind.add:
        lines.append(f"new file mode {FILE_MODE}")
    elif kind is ChangeKind.delete:
        lines.append(f"deleted file mode {FILE_MODE}")
    elif kind is ChangeKind.rename and old != new:
        if not diff.hunks and not diff.is_placeholder:
            lines.append("similarity index 100%")
        lines += [f"rename from {old}", f"rename to {new}"]

    if diff.is_placeholder:
        lines.append(diff.notice or "[diff unavailable]")
        return lines
    if kind is ChangeKind.rename and old != new and not diff.hunks:
        return lines

    lines.append("--- /dev/null" if kind is ChangeKind.add else f"--- a/{old}")
    lines.append("+++ /dev/null" if kind is ChangeKind.delete else f"+++ b/{new}")
    return lines


def hunk_header(hunk: Hunk) -> str:
    header = f"@@ -{hunk.old_start},{hunk.old_len} +{hunk.new_start},{hunk.new_len} @@"
    return f"{header} {hunk.section}" if hunk.section else header


def format_hunk(hunk: Hunk) -> list[str]:
    lines = [hunk_header(hunk)]
    for op in hunk.ops:
        text = op.line
        if text.endswith("\n"):
            lines.append(_PREFIX[op.kind] + text[:-1])
        else:
            lines.append(_PREFIX[op.kind] + text)
            lines.append(NO_NEWLINE_MARKER)
    return lines


def format_diff(diff: UnifiedDiff) -> str:
    """Render one file's diff as newline-terminated unified-diff text."""
    lines = _file_header(diff)
    for hunk in diff.hunks:
        lines.extend(format_hunk(hunk))
    return "\n".join(lines) + "\n"


def format_review(diffs: Iterable[UnifiedDiff]) -> str:
    """Concatenate several files' diffs in the given order (one combined patch)."""
    return "".join(format_diff(d) for d in diffs)
