# src/cache/fingerprint.py — v3
"""Content fingerprinting for classification cache keys.

A fingerprint identifies a (path, content) pair. It is a dedup/cache key
only and never used as a credential.
"""

from __future__ import annotations

import hashlib


def compute_fingerprint(path: str, content: str) -> str:
    """Compute the cache key for a file.

    SHA-256 over ``"<path>:<content>"``; any change to the path or the full
    (untruncated) content yields a different key.

    Args:
        path: Repository-relative file path.
        content: Full file content.

    Returns:
        64-character lowercase hex digest.
    """
    payload = f"{path}:{content}".encode("utf-8", errors="surrogatepass")
    return hashlib.sha256(payload).hexdigest()
