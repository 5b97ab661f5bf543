"""SHA-256 hashing for store keys and content change detection"""

import hashlib


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content (64 chars)."""
    return hashlib.sha256(content.encode("utf-8", errors="surrogatepass")).hexdigest()
