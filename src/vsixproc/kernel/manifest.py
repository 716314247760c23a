"""Manifest reader: package.json plus the optional package.nls.json overlay."""

from __future__ import annotations

import json
from typing import Any, List, Optional

from .archive import PACKAGE_ROOT, RawArchive
from .errors import ManifestInvalid, ManifestMissing
from .fields import FieldValue, JsonKind, Present, lookup, typed, unique_strings

PACKAGE_JSON = PACKAGE_ROOT + "package.json"
PACKAGE_NLS_JSON = PACKAGE_ROOT + "package.nls.json"


def parse_json_entry(data: bytes, path: str) -> Any:
    """Parse entry bytes as JSON, reporting failures against ``path``."""
    try:
        return json.loads(data)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError
        raise ManifestInvalid(path, str(exc)) from exc
    except RecursionError as exc:
        raise ManifestInvalid(path, "document is nested too deeply") from exc


class Manifest:
    """Parsed manifest with schema-tolerant accessors.

    No accessor raises for missing or mistyped fields; they return None
    (or an empty/absent list) instead.
    """

    def __init__(self, document: Any, overlay: Optional[Any] = None):
        self._document = document
        self._overlay = overlay

    @property
    def document(self) -> Any:
        return self._document

    @property
    def overlay(self) -> Optional[Any]:
        return self._overlay

    @property
    def has_overlay(self) -> bool:
        return self._overlay is not None

    def get_field(self, *path: str) -> FieldValue:
        return lookup(self._document, *path)

    def string(self, *path: str) -> Optional[str]:
        return typed(self.get_field(*path), JsonKind.STRING).value_or(None)

    def boolean(self, *path: str) -> bool:
        return typed(self.get_field(*path), JsonKind.BOOLEAN).value_or(False)

    def is_object(self, *path: str) -> bool:
        return typed(self.get_field(*path), JsonKind.OBJECT).present

    def string_list(self, name: str) -> Optional[List[str]]:
        """String elements of an array field, deduplicated in order; None if not an array."""
        field = typed(self.get_field(name), JsonKind.ARRAY)
        if not isinstance(field, Present):
            return None
        return unique_strings(field.value)

    def engine_list(self, name: str) -> Optional[List[str]]:
        """One "key@value" entry per property of an object field; None if not an object."""
        field = typed(self.get_field(name), JsonKind.OBJECT)
        if not isinstance(field, Present):
            return None
        return [f"{key}@{_engine_range(value)}" for key, value in field.value.items()]

    def url_field(self, name: str) -> Optional[str]:
        """A URL given as a string or as an object with a "url" string."""
        field = self.get_field(name)
        if not isinstance(field, Present):
            return None
        value = field.value
        if isinstance(value, dict):
            value = value.get("url")
        if not isinstance(value, str) or value in ("", "."):
            return None
        return value

    def localized_string(self, name: str) -> Optional[str]:
        """A string field with "%key%" values resolved through the overlay."""
        value = self.string(name)
        if value is None or self._overlay is None:
            return value
        if len(value) > 2 and value.startswith("%") and value.endswith("%"):
            key = value[1:-1]
            return typed(lookup(self._overlay, key), JsonKind.STRING).value_or(None)
        return value


def _engine_range(value: Any) -> str:
    """Render an engine version range.

    Non-string values are kept as compact JSON ("node@14", "vscode@null")
    rather than all collapsing to "null", so a mistyped range stays visible.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def read_manifest(archive: RawArchive) -> Manifest:
    """Locate and parse the manifest and, if present, its localization overlay.

    Raises:
        ManifestMissing: the archive has no extension/package.json.
        ManifestInvalid: either document is not valid JSON.
    """
    data = archive.read_entry(PACKAGE_JSON)
    if data is None:
        raise ManifestMissing(PACKAGE_JSON)
    document = parse_json_entry(data, PACKAGE_JSON)

    overlay = None
    nls_data = archive.read_entry(PACKAGE_NLS_JSON)
    if nls_data is not None:
        overlay = parse_json_entry(nls_data, PACKAGE_NLS_JSON)

    return Manifest(document, overlay)

