"""Best-effort license identification from license file text.

Text is normalized (case, whitespace, typographic punctuation) and matched
against characteristic phrases of well-known licenses. Rules are ordered so
that more specific licenses are tried before the ones they resemble
(AGPL/LGPL before GPL, BSD-3-Clause before BSD-2-Clause, ISC before 0BSD).
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = str.maketrans({
    "‘": "'", "’": "'", "“": '"', "”": '"',
    "–": "-", "—": "-",
})


@dataclass(frozen=True)
class LicenseRule:
    license_id: str
    required: Tuple[str, ...]
    forbidden: Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, text: str) -> bool:
        return all(p in text for p in self.required) and not any(p in text for p in self.forbidden)


_BSD_REDISTRIBUTION = "redistribution and use in source and binary forms, with or without modification, are permitted"
_ISC_GRANT = "permission to use, copy, modify, and/or distribute this software for any purpose with or without fee is hereby granted"

LICENSE_RULES: Tuple[LicenseRule, ...] = (
    LicenseRule("AGPL-3.0", ("gnu affero general public license", "version 3")),
    LicenseRule("LGPL-3.0", ("gnu lesser general public license", "version 3")),
    LicenseRule("LGPL-2.1", ("gnu lesser general public license", "version 2.1")),
    LicenseRule("GPL-3.0", ("gnu general public license", "version 3, 29 june 2007")),
    LicenseRule("GPL-2.0", ("gnu general public license", "version 2, june 1991")),
    LicenseRule("Apache-2.0", ("apache license", "version 2.0")),
    LicenseRule("MPL-2.0", ("mozilla public license", "version 2.0")),
    LicenseRule("EPL-2.0", ("eclipse public license - v 2.0",)),
    LicenseRule("EPL-1.0", ("eclipse public license - v 1.0",)),
    LicenseRule("BSL-1.0", ("boost software license - version 1.0",)),
    LicenseRule("CC0-1.0", ("cc0 1.0 universal",)),
    LicenseRule("Unlicense", ("this is free and unencumbered software released into the public domain",)),
    LicenseRule("BSD-3-Clause", (_BSD_REDISTRIBUTION, "neither the name of")),
    LicenseRule("BSD-2-Clause", (_BSD_REDISTRIBUTION,)),
    LicenseRule("ISC", (_ISC_GRANT, "above copyright notice and this permission notice appear in all copies")),
    LicenseRule("0BSD", (_ISC_GRANT,)),
    LicenseRule("MIT", (
        "permission is hereby granted, free of charge, to any person obtaining a copy",
        "the above copyright notice and this permission notice shall be included",
    )),
    LicenseRule("MIT-0", ("permission is hereby granted, free of charge, to any person obtaining a copy",)),
)


def normalize_license_text(text: str) -> str:
    text = text.translate(_PUNCTUATION).lower()
    return _WHITESPACE.sub(" ", text).strip()


def detect_license(content: bytes) -> Optional[str]:
    """Return an SPDX identifier for the license text, or None if unrecognized."""
    text = normalize_license_text(content.decode("utf-8", errors="replace"))
    if not text:
        return None
    for rule in LICENSE_RULES:
        if rule.matches(text):
            return rule.license_id
    return None
