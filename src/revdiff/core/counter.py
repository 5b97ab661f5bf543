"""Line counter: addition/deletion counts from rendered unified-diff text

A '+' or '-' line counts only when its content (after the prefix) has at
least one non-whitespace character. Whitespace-only changed lines are left
out to match the counters the hosting provider displays.
"""

import re

from revdiff.core.models import ChangeSummary, UnifiedDiff
from revdiff.core.render import format_diff


_HUNK_RE = re.compile(r"^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@")


def _counts_as_change(line: str) -> bool:
    return bool(line[1:].strip())


def count_changes(rendered: str) -> ChangeSummary:
    """Count additions and deletions in one or more rendered file diffs.

    Inside a hunk body (sized by its '@@' header) every '+'/'-' line is content,
    so a deleted '-- comment' line still counts. Outside hunks, lines starting
    with '+++' or '---' are file markers and are skipped.
    """
    additions = deletions = 0
    old_left = new_left = 0

    for line in rendered.split("\n"):
        if old_left > 0 or new_left > 0:
            if line.startswith("+"):
                new_left -= 1
                additions += _counts_as_change(line)
                continue
            if line.startswith("-"):
                old_left -= 1
                deletions += _counts_as_change(line)
                continue
            if line.startswith(" ") or line == "":
                old_left -= 1
                new_left -= 1
                continue
            if line.startswith("\\"):
                continue
            old_left = new_left = 0     # truncated hunk; fall back to header rules

        match = _HUNK_RE.match(line)
        if match:
            old_left = int(match.group(1)) if match.group(1) is not None else 1
            new_left = int(match.group(2)) if match.group(2) is not None else 1
        elif line.startswith("+") and not line.startswith("+++"):
            additions += _counts_as_change(line)
        elif line.startswith("-") and not line.startswith("---"):
            deletions += _counts_as_change(line)

    return ChangeSummary(additions=additions, deletions=deletions)


def summarize(diff: UnifiedDiff) -> ChangeSummary:
    """ChangeSummary of a UnifiedDiff, derived from its rendered text."""
    return count_changes(format_diff(diff))
