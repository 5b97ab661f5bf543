"""Hunk assembly from an edit script, and replay of hunks onto a line sequence"""

from typing import Sequence

from revdiff.core.models import EditOperation, Hunk, OpKind


def _make_hunk(ops: Sequence[EditOperation], old_before: int, new_before: int) -> Hunk:
    """Build a Hunk; old_before/new_before count the lines on each side preceding it."""
    old_len = sum(1 for op in ops if op.kind is not OpKind.insert)
    new_len = sum(1 for op in ops if op.kind is not OpKind.delete)
    return Hunk(
        old_start=old_before + 1 if old_len else old_before,
        old_len=old_len,
        new_start=new_before + 1 if new_len else new_before,
        new_len=new_len,
        ops=tuple(ops),
    )


def assemble_hunks(ops: Sequence[EditOperation], context_lines: int = 3) -> list[Hunk]:
    """Group an edit script into hunks with up to context_lines of surrounding context.

    Change runs separated by fewer than 2 * context_lines equal lines share a hunk;
    a run of 2 * context_lines or more splits them into adjacent or disjoint hunks.
    Identical inputs (no changes) yield no hunks.
    """
    if context_lines < 0:
        raise ValueError("context_lines must be >= 0")
    changes = [i for i, op in enumerate(ops) if op.kind is not OpKind.equal]
    if not changes:
        return []

    groups: list[tuple[int, int]] = []
    first = last = changes[0]
    for i in changes[1:]:
        gap = i - last - 1
        if gap and gap >= 2 * context_lines:
            groups.append((first, last))
            first = i
        last = i
    groups.append((first, last))

    # Running counts of old/new lines preceding each op index.
    old_seen = [0] * (len(ops) + 1)
    new_seen = [0] * (len(ops) + 1)
    for i, op in enumerate(ops):
        old_seen[i + 1] = old_seen[i] + (op.kind is not OpKind.insert)
        new_seen[i + 1] = new_seen[i] + (op.kind is not OpKind.delete)

    hunks = []
    for first, last in groups:
        lo = max(first - context_lines, 0)
        hi = min(last + context_lines + 1, len(ops))
        hunks.append(_make_hunk(ops[lo:hi], old_seen[lo], new_seen[lo]))
    return hunks


def whole_file_hunk(lines: Sequence[str], kind: OpKind) -> list[Hunk]:
    """Single hunk covering every line as an insert (-0,0 +1,N) or delete (-1,N +0,0)."""
    if not lines:
        return []
    if kind is OpKind.insert:
        ops = [EditOperation(OpKind.insert, line, None, i) for i, line in enumerate(lines, 1)]
    elif kind is OpKind.delete:
        ops = [EditOperation(OpKind.delete, line, i, None) for i, line in enumerate(lines, 1)]
    else:
        raise ValueError(f"whole_file_hunk needs insert or delete, got {kind.value}")
    return [_make_hunk(ops, 0, 0)]


def apply_hunks(before: Sequence[str], hunks: Sequence[Hunk]) -> list[str]:
    """Replay hunks onto before and return the resulting lines.

    Raises ValueError if a context or deleted line does not match before.
    """
    result: list[str] = []
    cursor = 0      # number of before lines consumed
    for hunk in hunks:
        start = hunk.old_start - 1 if hunk.old_len else hunk.old_start
        if start < cursor or start > len(before):
            raise ValueError(f"Hunk -{hunk.old_start},{hunk.old_len} is out of range")
        result.extend(before[cursor:start])
        cursor = start
        for op in hunk.ops:
            if op.kind is OpKind.insert:
                result.append(op.line)
                continue
            if cursor >= len(before) or before[cursor] != op.line:
                raise ValueError(
                    f"Hunk -{hunk.old_start},{hunk.old_len} does not apply at line {cursor + 1}"
                )
            if op.kind is OpKind.equal:
                result.append(op.line)
            cursor += 1
    result.extend(before[cursor:])
    return result
