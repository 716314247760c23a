"""Archive loader: uploaded bytes -> addressable zip view.

The whole input is read into memory and judged against the size ceiling on
its realized length. Only then is a backing temporary file written and the
zip view opened. The view is opened at most once per RawArchive and must be
released with close(), which is safe to call on every exit path.
"""

from __future__ import annotations

import http.client
import logging
import tempfile
import zipfile
from pathlib import Path
from typing import IO, List, Optional, Union

from vsixproc._internal.io.zip_archive import (
    close_archive,
    find_entry_ignore_case,
    list_entries,
    open_archive,
    read_entry,
)
from vsixproc.contracts import MAX_CONTENT_SIZE
from .errors import MalformedArchive, PayloadTooLarge, TruncatedInput

logger = logging.getLogger(__name__)

PACKAGE_ROOT = "extension/"

InputSource = Union[bytes, bytearray, memoryview, IO[bytes]]


class RawArchive:
    """Owned upload bytes plus a lazily opened zip view over them."""

    def __init__(
        self,
        content: bytes,
        temp_dir: Optional[Path] = None,
        max_entry_size: Optional[int] = None,
    ):
        self._content = content
        self._temp_dir = temp_dir
        self._max_entry_size = max_entry_size
        self._backing: Optional[IO[bytes]] = None
        self._view: Optional[zipfile.ZipFile] = None
        self._closed = False

    @property
    def content(self) -> bytes:
        return self._content

    @property
    def is_open(self) -> bool:
        return self._view is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> zipfile.ZipFile:
        """Return the zip view, opening it on first use."""
        if self._view is not None:
            return self._view
        if self._closed:
            raise ValueError("archive has already been closed")

        backing = tempfile.TemporaryFile(prefix="extension_", suffix=".vsix", dir=self._temp_dir)
        try:
            backing.write(self._content)
            backing.seek(0)
            view = open_archive(backing)
        except (zipfile.BadZipFile, UnicodeDecodeError, NotImplementedError) as exc:
            # NotImplementedError: unsupported "version needed to extract"
            backing.close()
            raise MalformedArchive(str(exc)) from exc
        except BaseException:
            backing.close()
            raise

        self._backing = backing
        self._view = view
        logger.debug("Opened archive view (%d bytes, %d entries)", len(self._content), len(view.infolist()))
        return view

    def read_entry(self, name: str) -> Optional[bytes]:
        return read_entry(self.open(), name, self._max_entry_size)

    def read_info(self, info: zipfile.ZipInfo) -> Optional[bytes]:
        return read_entry(self.open(), info, self._max_entry_size)

    def find_entry_ignore_case(self, name: str) -> Optional[zipfile.ZipInfo]:
        return find_entry_ignore_case(self.open(), name)

    def entries(self) -> List[zipfile.ZipInfo]:
        return list_entries(self.open())

    def close(self) -> None:
        """Release the zip view and its backing file. Idempotent."""
        self._closed = True
        view, backing = self._view, self._backing
        self._view = None
        self._backing = None
        try:
            if view is not None:
                close_archive(view)
        finally:
            if backing is not None:
                backing.close()

    def __enter__(self) -> "RawArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def read_input(source: InputSource) -> bytes:
    """Read the complete upload into memory.

    Raises:
        TruncatedInput: if the stream ends prematurely.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    try:
        return source.read()
    except (EOFError, http.client.IncompleteRead) as exc:
        raise TruncatedInput(str(exc) or type(exc).__name__) from exc


def load_archive(
    source: InputSource,
    max_content_size: int = MAX_CONTENT_SIZE,
    temp_dir: Optional[Path] = None,
) -> RawArchive:
    """Materialize an upload into an opened RawArchive.

    Raises:
        TruncatedInput: the stream ended prematurely.
        PayloadTooLarge: the realized byte count exceeds ``max_content_size``.
        MalformedArchive: the zip container cannot be opened.

    Entries declaring more than ``max_content_size`` uncompressed bytes read
    as absent.
    """
    content = read_input(source)
    if len(content) > max_content_size:
        raise PayloadTooLarge(len(content), max_content_size)

    archive = RawArchive(content, temp_dir=temp_dir, max_entry_size=max_content_size)
    archive.open()
    return archive
