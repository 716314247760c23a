"""Centralized canonical JSON serialization.

Used for every JSON document vsixproc emits (CLI summaries, summary
fingerprints) so that output is byte-stable across platforms.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (non-ASCII characters are not escaped)
    - Sorted keys
    - Stable separators (",", ":")
    - Lists keep the order they are given in

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
