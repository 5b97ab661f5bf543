"""Line differencer: LCS-based minimal edit script between two line sequences

The dynamic-programming table costs O(n*m) time and space and dominates
every diff computed here. Myers' O(N*D) algorithm would be faster on large,
similar files, but it would have to reproduce the exact tie-breaking below
(insert preferred over delete while backtracking from the end) to be a
drop-in replacement.
"""

from typing import Sequence

from revdiff.core.errors import DiffSizeError
from revdiff.core.models import EditOperation, OpKind


def table_cells(n: int, m: int) -> int:
    return (n + 1) * (m + 1)


def _lcs_table(before: Sequence[str], after: Sequence[str]) -> list[list[int]]:
    """Row i, column j holds the LCS length of before[:i] and after[:j]."""
    m = len(after)
    table = [[0] * (m + 1)]
    for a in before:
        prev = table[-1]
        row = [0] * (m + 1)
        for j in range(1, m + 1):
            if a == after[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                up, left = prev[j], row[j - 1]
                row[j] = up if up >= left else left
        table.append(row)
    return table


def diff_lines(
    before: Sequence[str],
    after: Sequence[str],
    max_cells: int = 0,
    ) -> tuple[EditOperation, ...]:
    """Return the edit script turning before into after.

    Backtracks from (n, m): a common line yields equal; otherwise insert when
    the 'after' axis is at least as good, else delete. A shared suffix is
    peeled off first since the backtrack would consume it as equals anyway.
    Raises DiffSizeError when max_cells > 0 and the table would exceed it.
    """
    n, m = len(before), len(after)
    suffix = 0
    while suffix < n and suffix < m and before[n - 1 - suffix] == after[m - 1 - suffix]:
        suffix += 1
    n, m = n - suffix, m - suffix

    if max_cells and n and m and table_cells(n, m) > max_cells:
        raise DiffSizeError(
            f"LCS table of {n}x{m} lines exceeds {max_cells} cells",
            {"before_lines": n, "after_lines": m},
        )

    table = _lcs_table(before[:n], after[:m]) if n and m else None
    ops: list[EditOperation] = []
    i, j = n, m
    while i > 0 or j > 0:
        if i > 0 and j > 0 and before[i - 1] == after[j - 1]:
            ops.append(EditOperation(OpKind.equal, before[i - 1], i, j))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            ops.append(EditOperation(OpKind.insert, after[j - 1], None, j))
            j -= 1
        else:
            ops.append(EditOperation(OpKind.delete, before[i - 1], i, None))
            i -= 1
    ops.reverse()

    for k in range(suffix):
        ops.append(EditOperation(OpKind.equal, before[n + k], n + k + 1, m + k + 1))
    return tuple(ops)
