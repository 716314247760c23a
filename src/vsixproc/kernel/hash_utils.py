"""Content digests for extracted resources."""

import hashlib

from vsixproc._internal.canonical_json import canonical_dumps


def sha256_hex(data: bytes) -> str:
    """SHA256 hex digest of raw bytes (no prefix)."""
    return hashlib.sha256(data).hexdigest()


def compute_canonical_json_sha256(obj) -> str:
    """SHA256 hex digest of the canonical JSON serialization of ``obj``."""
    return sha256_hex(canonical_dumps(obj).encode("utf-8"))
