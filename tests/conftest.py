"""Pytest configuration and shared fixtures.

Packages are built in memory with zipfile; no binary fixtures are checked in.
"""

import io
import json
import zipfile

import pytest


def build_vsix(entries, manifest=None, nls=None) -> bytes:
    """Build a zip archive.

    Args:
        entries: dict of entry path -> bytes/str content (added in order)
        manifest: optional dict written to extension/package.json first
        nls: optional dict written to extension/package.nls.json
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        if manifest is not None:
            zf.writestr("extension/package.json", json.dumps(manifest))
        if nls is not None:
            zf.writestr("extension/package.nls.json", json.dumps(nls))
        for name, content in (entries or {}).items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            zf.writestr(name, content)
    return buffer.getvalue()


BASIC_MANIFEST = {
    "name": "hello-world",
    "publisher": "acme",
    "version": "1.2.3",
    "displayName": "Hello World",
    "description": "Says hello",
    "engines": {"vscode": "^1.50.0"},
    "categories": ["Other"],
    "keywords": ["hello", "greeting"],
    "license": "MIT",
    "icon": "images/icon.png",
}


@pytest.fixture
def make_vsix():
    """Factory fixture: make_vsix(entries, manifest=..., nls=...) -> bytes."""
    return build_vsix


@pytest.fixture
def basic_manifest():
    return json.loads(json.dumps(BASIC_MANIFEST))


@pytest.fixture
def basic_vsix(basic_manifest):
    return build_vsix(
        {
            "extension/README.md": "# Hello",
            "extension/CHANGELOG.md": "## 1.2.3",
            "extension/LICENSE.txt": "MIT License",
            "extension/images/icon.png": b"\x89PNG\r\n",
            "[Content_Types].xml": "<Types/>",
        },
        manifest=basic_manifest,
    )
