"""Processing session for one uploaded extension package.

The session owns the uploaded bytes, the archive view and the parsed
manifest. All three are loaded on first use and cached; close() releases the
archive view and must run on every exit path, which the context manager
guarantees:

    with ExtensionProcessor(stream, PublishOptions(web=True)) as processor:
        metadata = processor.metadata()
        extraction = processor.resources(metadata)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from vsixproc.contracts import PublishOptions
from vsixproc.kernel.archive import InputSource, RawArchive, load_archive
from vsixproc.kernel.manifest import Manifest, read_manifest
from vsixproc.kernel.metadata import (
    ExtensionMetadata,
    bundled_extensions,
    extension_dependencies,
    extract_metadata,
)
from vsixproc.kernel.resources import ResourceExtraction, extract_resources

logger = logging.getLogger(__name__)


class ExtensionProcessor:
    """Single-shot, single-threaded ingestion session."""

    def __init__(self, source: Optional[InputSource], options: Optional[PublishOptions] = None):
        self._source = source
        self._options = options or PublishOptions()
        self._archive: Optional[RawArchive] = None
        self._manifest: Optional[Manifest] = None
        self._closed = False

    @property
    def options(self) -> PublishOptions:
        return self._options

    def load(self) -> RawArchive:
        """Read the upload and open the archive view (once)."""
        if self._archive is not None:
            return self._archive
        if self._closed:
            raise ValueError("processor has already been closed")
        if self._source is None:
            raise ValueError("processor input is missing or was already consumed")

        # The stream can only be consumed once, even if loading fails.
        source, self._source = self._source, None
        self._archive = load_archive(
            source,
            max_content_size=self._options.max_content_size,
            temp_dir=self._options.temp_dir,
        )
        logger.debug("Loaded package (%d bytes)", len(self._archive.content))
        return self._archive

    @property
    def manifest(self) -> Manifest:
        if self._manifest is None:
            self._manifest = read_manifest(self.load())
        return self._manifest

    def extension_name(self) -> Optional[str]:
        return self.manifest.string("name")

    def namespace(self) -> Optional[str]:
        return self.manifest.string("publisher")

    def extension_dependencies(self) -> List[str]:
        return extension_dependencies(self.manifest)

    def bundled_extensions(self) -> List[str]:
        return bundled_extensions(self.manifest)

    def metadata(self) -> ExtensionMetadata:
        """Derive a fresh metadata record from the cached manifest."""
        return extract_metadata(self.manifest)

    def resources(self, metadata: ExtensionMetadata) -> ResourceExtraction:
        """Extract payload resources; the returned metadata carries any license rewrite."""
        return extract_resources(self.load(), self.manifest, metadata, web=self._options.web)

    def close(self) -> None:
        """Release the archive view. Safe to call more than once."""
        self._closed = True
        archive, self._archive = self._archive, None
        if archive is not None:
            archive.close()

    def __enter__(self) -> "ExtensionProcessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
