"""vsixproc: extension package ingestion (manifest metadata + resource extraction)."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("vsixproc")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from vsixproc.api import process_extension, ProcessingResult
from vsixproc.contracts import PublishOptions
from vsixproc.codes import IngestCode
from vsixproc.processor import ExtensionProcessor
from vsixproc.kernel.errors import (
    IngestError,
    PayloadTooLarge,
    MalformedArchive,
    TruncatedInput,
    ManifestMissing,
    ManifestInvalid,
)
from vsixproc.kernel.metadata import ExtensionMetadata
from vsixproc.kernel.resources import FileResource, ResourceKind

__all__ = [
    "__version__",
    "process_extension",
    "ProcessingResult",
    "PublishOptions",
    "ExtensionProcessor",
    "IngestCode",
    "IngestError",
    "PayloadTooLarge",
    "MalformedArchive",
    "TruncatedInput",
    "ManifestMissing",
    "ManifestInvalid",
    "ExtensionMetadata",
    "FileResource",
    "ResourceKind",
]
