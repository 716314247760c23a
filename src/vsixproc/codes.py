"""Error code constants for vsixproc ingestion errors.

These constants prevent stringly-typed error codes and give callers
(upload handlers, storage layers) a stable value to map onto responses.
"""

from enum import Enum


class IngestCode(str, Enum):
    """Codes for user-facing ingestion errors."""

    # Archive loading
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    MALFORMED_ARCHIVE = "MALFORMED_ARCHIVE"
    TRUNCATED_INPUT = "TRUNCATED_INPUT"

    # Manifest reading
    MANIFEST_MISSING = "MANIFEST_MISSING"
    MANIFEST_INVALID = "MANIFEST_INVALID"
