"""Patch reader: parse provider patch text into canonical hunks

Accepts either bare hunk text (the per-file 'patch' field some providers
return) or a full git section with extended headers. Header paths must name
the file the patch was declared for.
"""

import re
from dataclasses import replace
from typing import Optional

from revdiff.core.errors import BinaryContentError, MalformedPatchError
from revdiff.core.models import EditOperation, Hunk, OpKind


HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")
GIT_HEADER_RE = re.compile(r"^diff --git a/(.+) b/(.+)$")

# Extended header lines git may emit between 'diff --git' and the first hunk.
_EXTENDED_HEADERS = (
    "index ", "old mode ", "new mode ", "new file mode ", "deleted file mode ",
    "similarity index ", "dissimilarity index ", "rename from ", "rename to ",
    "copy from ", "copy to ",
)


def split_combined_diff(text: str) -> dict[str, str]:
    """Split a multi-file 'git diff' into {b-path: section} in input order."""
    sections: dict[str, list[str]] = {}
    current: Optional[list[str]] = None
    for line in text.split("\n"):
        match = GIT_HEADER_RE.match(line)
        if match:
            current = sections.setdefault(match.group(2), [])
            current.append(line)
        elif current is not None:
            current.append(line)
    return {path: "\n".join(lines).rstrip("\n") + "\n" for path, lines in sections.items()}


def _check_path(found: str, allowed: set[str], line: str) -> None:
    if found not in allowed:
        raise MalformedPatchError(
            f"Patch header {line!r} does not match {sorted(allowed)}",
            {"found": found},
        )


def _read_headers(lines: list[str], path: str, renamed_from: Optional[str]) -> int:
    """Validate header lines before the first hunk; return the index of the first '@@' line."""
    old_paths = {path, renamed_from} if renamed_from else {path}
    for i, line in enumerate(lines):
        if line.startswith("@@"):
            return i
        match = GIT_HEADER_RE.match(line)
        if match:
            _check_path(match.group(1), old_paths, line)
            _check_path(match.group(2), {path}, line)
        elif line.startswith("--- "):
            name = line[4:].rstrip()
            if name != "/dev/null":
                _check_path(name[2:] if name.startswith("a/") else name, old_paths, line)
        elif line.startswith("+++ "):
            name = line[4:].rstrip()
            if name != "/dev/null":
                _check_path(name[2:] if name.startswith("b/") else name, {path}, line)
        elif line.startswith("Binary files ") or line == "GIT binary patch":
            raise BinaryContentError(f"Binary patch for {path}")
        elif line.startswith(_EXTENDED_HEADERS) or not line.strip():
            continue
        else:
            raise MalformedPatchError(f"Unexpected line before first hunk: {line!r}")
    return len(lines)


def _read_hunk(lines: list[str], start: int) -> tuple[Hunk, int]:
    """Parse the hunk whose header is lines[start]; return it and the next line index."""
    match = HUNK_HEADER_RE.match(lines[start])
    if not match:
        raise MalformedPatchError(f"Bad hunk header: {lines[start]!r}")
    old_start, new_start = int(match.group(1)), int(match.group(3))
    old_len = int(match.group(2)) if match.group(2) is not None else 1
    new_len = int(match.group(4)) if match.group(4) is not None else 1

    ops: list[EditOperation] = []
    old_no = old_start if old_len else old_start + 1
    new_no = new_start if new_len else new_start + 1
    old_left, new_left = old_len, new_len
    i = start + 1
    while i < len(lines) and (old_left > 0 or new_left > 0):
        line = lines[i]
        prefix, content = line[:1], line[1:] + "\n"
        if prefix == "+" and new_left > 0:
            ops.append(EditOperation(OpKind.insert, content, None, new_no))
            new_no += 1
            new_left -= 1
        elif prefix == "-" and old_left > 0:
            ops.append(EditOperation(OpKind.delete, content, old_no, None))
            old_no += 1
            old_left -= 1
        elif prefix in (" ", "") and old_left > 0 and new_left > 0:
            # Some providers strip the space off empty context lines.
            ops.append(EditOperation(OpKind.equal, content, old_no, new_no))
            old_no += 1
            new_no += 1
            old_left -= 1
            new_left -= 1
        elif prefix == "\\" and ops:
            ops[-1] = replace(ops[-1], line=ops[-1].line[:-1])
        else:
            raise MalformedPatchError(f"Unexpected line in hunk {lines[start]!r}: {line!r}")
        i += 1

    if old_left > 0 or new_left > 0:
        raise MalformedPatchError(f"Hunk {lines[start]!r} is truncated")
    if i < len(lines) and lines[i].startswith("\\") and ops:
        ops[-1] = replace(ops[-1], line=ops[-1].line[:-1])
        i += 1

    try:
        hunk = Hunk(
            old_start=old_start, old_len=old_len,
            new_start=new_start, new_len=new_len,
            ops=tuple(ops), section=match.group(5).strip(),
        )
    except ValueError as e:
        raise MalformedPatchError(f"Invalid hunk {lines[start]!r}: {e}") from e
    return hunk, i


def parse_patch(text: str, path: str, renamed_from: Optional[str] = None) -> tuple[Hunk, ...]:
    """Parse patch text for path into hunks.

    Raises MalformedPatchError on header/path mismatch or broken hunks, and
    BinaryContentError for git binary patches.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    i = _read_headers(lines, path, renamed_from)
    hunks = []
    while i < len(lines):
        if not lines[i].strip():
            i += 1
            continue
        if not lines[i].startswith("@@"):
            raise MalformedPatchError(f"Unexpected line after hunk: {lines[i]!r}")
        hunk, i = _read_hunk(lines, i)
        hunks.append(hunk)
    return tuple(hunks)
