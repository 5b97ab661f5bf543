"""Diff Store key derivation"""

import re

from revdiff.core.utils.hashing import sha256


_UNSAFE = re.compile(r"[^A-Za-z0-9]")


def sanitize_path(path: str) -> str:
    """Replace every character outside [A-Za-z0-9] with '_'.

    When that changed the path, '_' plus 8 hex chars of the path's SHA-256 is
    appended so 'a-b.ts' and 'a_b.ts' stay distinct.
    """
    cleaned = _UNSAFE.sub("_", path)
    if cleaned == path:
        return cleaned
    return f"{cleaned}_{sha256(path)[:8]}"


def store_key(provider: str, review_id: str, path: str) -> str:
    """Deterministic key: {provider}_{review_id}_{sanitized path}."""
    return f"{provider}_{review_id}_{sanitize_path(path)}"
