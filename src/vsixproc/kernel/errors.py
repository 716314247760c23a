"""User-facing ingestion errors.

All of these mean the uploaded package itself is unacceptable. They carry a
human-readable message meant for the uploader and are never retried.
Internal faults (temp storage, archive close) are plain OSErrors and are not
represented here.
"""

from vsixproc.codes import IngestCode


class IngestError(ValueError):
    """Base class for errors caused by the uploaded package."""

    code: IngestCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _format_size(size: int) -> str:
    if size < 1024 * 1024:
        return f"{size} bytes"
    return f"{size // (1024 * 1024)} MB"


class PayloadTooLarge(IngestError):
    """Raised when the uploaded bytes exceed the configured ceiling."""

    code = IngestCode.PAYLOAD_TOO_LARGE

    def __init__(self, size: int, limit: int):
        super().__init__(f"The extension package exceeds the size limit of {_format_size(limit)}.")
        self.size = size
        self.limit = limit


class MalformedArchive(IngestError):
    """Raised when the zip container cannot be opened."""

    code = IngestCode.MALFORMED_ARCHIVE

    def __init__(self, detail: str):
        super().__init__(f"Could not read zip file: {detail}")
        self.detail = detail


class TruncatedInput(IngestError):
    """Raised when the input stream ends before it was fully read."""

    code = IngestCode.TRUNCATED_INPUT

    def __init__(self, detail: str):
        super().__init__(f"Could not read from input stream: {detail}")
        self.detail = detail


class ManifestMissing(IngestError):
    """Raised when the archive has no primary manifest entry."""

    code = IngestCode.MANIFEST_MISSING

    def __init__(self, path: str):
        super().__init__(f"Entry not found: {path}")
        self.path = path


class ManifestInvalid(IngestError):
    """Raised when the manifest or its localization overlay is not valid JSON."""

    code = IngestCode.MANIFEST_INVALID

    def __init__(self, path: str, detail: str):
        super().__init__(f"Invalid JSON format in {path}: {detail}")
        self.path = path
        self.detail = detail
