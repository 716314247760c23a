"""Zip archive primitives (internal).

Thin helpers over ``zipfile`` that give the processing kernel a small,
lookup-oriented surface: open, read an entry by exact name, find an entry
ignoring case, list entries, close. Reads never raise for entries that are
missing or cannot be decoded; they return ``None`` instead.
"""

from __future__ import annotations

import logging
import lzma
import zipfile
import zlib
from typing import IO, List, Optional, Union

logger = logging.getLogger(__name__)

EntryRef = Union[str, zipfile.ZipInfo]

# Failures that mean "this member is damaged", not "the host is broken".
_UNREADABLE_ENTRY_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    EOFError,
    NotImplementedError,  # unsupported compression method
    RuntimeError,  # encrypted member without a password
)


def open_archive(fileobj: IO[bytes]) -> zipfile.ZipFile:
    """Open a zip container over a seekable binary file object.

    Raises zipfile.BadZipFile if the central directory cannot be parsed.
    """
    return zipfile.ZipFile(fileobj, mode="r")


def list_entries(archive: zipfile.ZipFile) -> List[zipfile.ZipInfo]:
    """Return all entries in central-directory order."""
    return archive.infolist()


def find_entry_ignore_case(archive: zipfile.ZipFile, name: str) -> Optional[zipfile.ZipInfo]:
    """Return the first entry whose name equals ``name`` ignoring case."""
    wanted = name.casefold()
    for info in archive.infolist():
        if info.filename.casefold() == wanted:
            return info
    return None


def read_entry(
    archive: zipfile.ZipFile, entry: EntryRef, max_size: Optional[int] = None
) -> Optional[bytes]:
    """Read an entry's bytes.

    ``entry`` may be an exact entry name or a ZipInfo obtained from this archive.
    Returns None if the name is not present, the member data is unreadable, or
    the member declares more than ``max_size`` uncompressed bytes.
    """
    if isinstance(entry, str):
        try:
            info = archive.getinfo(entry)
        except KeyError:
            return None
    else:
        info = entry

    # zipfile never inflates a member past its declared file_size.
    if max_size is not None and info.file_size > max_size:
        logger.debug("Archive entry %s too large (%d bytes)", info.filename, info.file_size)
        return None

    try:
        return archive.read(info)
    except _UNREADABLE_ENTRY_ERRORS as exc:
        logger.debug("Unreadable archive entry %s: %s", info.filename, exc)
        return None
    except OSError as exc:
        # bz2 reports corrupt member data as OSError("Invalid data stream")
        if info.compress_type != zipfile.ZIP_BZIP2:
            raise
        logger.debug("Unreadable archive entry %s: %s", info.filename, exc)
        return None


def last_segment(path: str) -> str:
    """Return the final '/'-separated segment of an entry path."""
    return path[path.rfind("/") + 1:]


def close_archive(archive: zipfile.ZipFile) -> None:
    archive.close()
