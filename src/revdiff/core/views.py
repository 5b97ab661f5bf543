"""Side-by-side alignment of a UnifiedDiff for two-column display"""

from dataclasses import dataclass
from typing import Optional

from revdiff.core.models import OpKind, UnifiedDiff


@dataclass(frozen=True)
class SideBySideRow:
    kind: str                       # 'context', 'removed', 'added', or 'gap'
    old_lineno: Optional[int] = None
    old_text: str = ""
    new_lineno: Optional[int] = None
    new_text: str = ""


def side_by_side(diff: UnifiedDiff) -> list[SideBySideRow]:
    """Context fills both columns, deletions the left, insertions the right; 'gap' separates hunks."""
    rows: list[SideBySideRow] = []
    for n, hunk in enumerate(diff.hunks):
        if n:
            rows.append(SideBySideRow("gap"))
        for op in hunk.ops:
            text = op.line.rstrip("\n")
            if op.kind is OpKind.equal:
                rows.append(SideBySideRow("context", op.old_lineno, text, op.new_lineno, text))
            elif op.kind is OpKind.delete:
                rows.append(SideBySideRow("removed", old_lineno=op.old_lineno, old_text=text))
            else:
                rows.append(SideBySideRow("added", new_lineno=op.new_lineno, new_text=text))
    return rows


def format_side_by_side(rows: list[SideBySideRow], width: int = 60) -> str:
    """Plain-text two-column rendering of side_by_side rows."""
    marks = {"context": " ", "removed": "-", "added": "+", "gap": "~"}
    out = []
    for r in rows:
        if r.kind == "gap":
            out.append("~" * (width * 2 + 17))
            continue
        left = f"{r.old_lineno or '':>6} {r.old_text[:width]:<{width}}"
        right = f"{r.new_lineno or '':>6} {r.new_text[:width]}"
        out.append(f"{marks[r.kind]} {left} | {right}".rstrip())
    return "\n".join(out)
