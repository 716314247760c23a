"""Public API for vsixproc.

High-level functions that return complete, structured results.
Upload handlers and storage layers should use these instead of importing
from kernel modules directly.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vsixproc.contracts import PublishOptions
from vsixproc.kernel.archive import InputSource
from vsixproc.kernel.hash_utils import compute_canonical_json_sha256
from vsixproc.kernel.metadata import ExtensionMetadata
from vsixproc.kernel.resources import FileResource, ResourceKind
from vsixproc.processor import ExtensionProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """Everything extracted from one uploaded package."""
    metadata: ExtensionMetadata
    resources: List[FileResource]  # extraction order
    dependencies: List[str] = field(default_factory=list)  # extensionDependencies
    bundled_extensions: List[str] = field(default_factory=list)  # extensionPack

    def resource(self, kind: ResourceKind) -> Optional[FileResource]:
        """The first resource of ``kind``, if any."""
        for resource in self.resources:
            if resource.kind is kind:
                return resource
        return None

    def summary(self) -> Dict[str, Any]:
        """JSON-friendly description of the result (resource bytes replaced by size and digest)."""
        summary: Dict[str, Any] = {
            "metadata": self.metadata.model_dump(mode="json"),
            "dependencies": list(self.dependencies),
            "bundled_extensions": list(self.bundled_extensions),
            "resources": [
                {
                    "kind": resource.kind.value,
                    "name": resource.name,
                    "size": resource.size,
                    "sha256": resource.sha256,
                }
                for resource in self.resources
            ],
        }
        summary["fingerprint"] = f"sha256:{compute_canonical_json_sha256(summary)}"
        return summary


def process_extension(source: InputSource, options: Optional[PublishOptions] = None) -> ProcessingResult:
    """
    Run a complete ingestion session over an uploaded package.

    Args:
        source: Binary stream or bytes holding the zip-based package
        options: Ingestion options (size ceiling, web resource toggle)

    Returns:
        ProcessingResult with final metadata (license rewrite applied),
        resources, dependencies and bundled extensions

    Raises:
        IngestError: the package is unacceptable (too large, not a zip,
            truncated, missing or invalid manifest)
    """
    with ExtensionProcessor(source, options) as processor:
        metadata = processor.metadata()
        extraction = processor.resources(metadata)
        result = ProcessingResult(
            metadata=extraction.metadata,
            resources=extraction.resources,
            dependencies=processor.extension_dependencies(),
            bundled_extensions=processor.bundled_extensions(),
        )

    logger.info(
        "Processed %s@%s: %d resources",
        result.metadata.extension_id or "<unnamed>",
        result.metadata.version or "<unversioned>",
        len(result.resources),
    )
    return result
