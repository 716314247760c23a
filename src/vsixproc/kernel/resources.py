"""Resource extractor: archive + metadata -> ordered payload resources.

Every step is optional. A missing or unreadable entry contributes nothing and
is never an error. The only metadata field this phase may change is
``license``; the updated record is returned alongside the resources instead
of being written into the caller's copy.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from vsixproc._internal.io.zip_archive import last_segment
from .archive import PACKAGE_ROOT, RawArchive
from .hash_utils import sha256_hex
from .license_detection import detect_license
from .manifest import PACKAGE_JSON, Manifest
from .metadata import ExtensionMetadata

logger = logging.getLogger(__name__)

README_NAMES = (PACKAGE_ROOT + "README.md", PACKAGE_ROOT + "README", PACKAGE_ROOT + "README.txt")
CHANGELOG_NAMES = (PACKAGE_ROOT + "CHANGELOG.md", PACKAGE_ROOT + "CHANGELOG", PACKAGE_ROOT + "CHANGELOG.txt")
LICENSE_NAMES = (PACKAGE_ROOT + "LICENSE.md", PACKAGE_ROOT + "LICENSE", PACKAGE_ROOT + "LICENSE.txt")

# "SEE MIT LICENSE IN LICENSE.txt" or "SEE LICENSE IN docs/LICENSE"
LICENSE_PATTERN = re.compile(r"SEE( (?P<license>\S+))? LICENSE IN (?P<file>\S+)")


class ResourceKind(str, Enum):
    DOWNLOAD = "download"
    MANIFEST = "manifest"
    README = "readme"
    CHANGELOG = "changelog"
    LICENSE = "license"
    ICON = "icon"
    WEB_RESOURCE = "web-resource"


@dataclass(frozen=True)
class FileResource:
    """One extracted payload belonging to an extension version."""
    kind: ResourceKind
    name: Optional[str]
    content: bytes = field(repr=False)
    extension: Optional[ExtensionMetadata] = field(default=None, repr=False, compare=False)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def sha256(self) -> str:
        return sha256_hex(self.content)


@dataclass(frozen=True)
class ResourceExtraction:
    """Resources in extraction order plus the metadata they belong to."""
    resources: List[FileResource]
    metadata: ExtensionMetadata

    def of_kind(self, kind: ResourceKind) -> List[FileResource]:
        return [r for r in self.resources if r.kind is kind]


def read_from_alternate_names(archive: RawArchive, names: Sequence[str]) -> Optional[Tuple[bytes, str]]:
    """First readable entry matching a candidate name (ignoring case), with its last path segment."""
    for name in names:
        info = archive.find_entry_ignore_case(name)
        if info is None:
            continue
        data = archive.read_info(info)
        if data is None:
            continue
        logger.debug("Matched %s for candidate %s", info.filename, name)
        return data, last_segment(info.filename)
    return None


def _named_resource(kind: ResourceKind, hit: Optional[Tuple[bytes, str]]) -> Optional[FileResource]:
    if hit is None:
        return None
    data, name = hit
    return FileResource(kind=kind, name=name, content=data)


def manifest_resource(archive: RawArchive) -> Optional[FileResource]:
    data = archive.read_entry(PACKAGE_JSON)
    if data is None:
        return None
    return FileResource(kind=ResourceKind.MANIFEST, name="package.json", content=data)


def readme_resource(archive: RawArchive) -> Optional[FileResource]:
    return _named_resource(ResourceKind.README, read_from_alternate_names(archive, README_NAMES))


def changelog_resource(archive: RawArchive) -> Optional[FileResource]:
    return _named_resource(ResourceKind.CHANGELOG, read_from_alternate_names(archive, CHANGELOG_NAMES))


def resolve_license(
    archive: RawArchive, declared: Optional[str]
) -> Tuple[Optional[FileResource], Optional[str]]:
    """Find the license file and the license identifier to record.

    A declaration of the form "SEE <id> LICENSE IN <file>" is rewritten to
    <id> (or None) and <file> is tried first. Otherwise, or if that file is
    missing, the standard license file names are searched. The classifier
    only runs when no identifier is known.
    """
    license_id = declared
    if declared:
        match = LICENSE_PATTERN.search(declared)
        if match:
            license_id = match.group("license")
            file_name = match.group("file")
            logger.debug("License %r rewritten to %r (file %s)", declared, license_id, file_name)
            data = archive.read_entry(PACKAGE_ROOT + file_name)
            if data is not None:
                if not license_id:
                    license_id = detect_license(data)
                resource = FileResource(kind=ResourceKind.LICENSE, name=last_segment(file_name), content=data)
                return resource, license_id

    hit = read_from_alternate_names(archive, LICENSE_NAMES)
    if hit is None:
        return None, license_id
    if not license_id:
        license_id = detect_license(hit[0])
        logger.debug("Detected license %r from %s", license_id, hit[1])
    return _named_resource(ResourceKind.LICENSE, hit), license_id


def icon_resource(archive: RawArchive, manifest: Manifest) -> Optional[FileResource]:
    icon_path = manifest.string("icon")
    if icon_path is None:
        return None
    icon_path = icon_path.replace("\\", "/")
    data = archive.read_entry(PACKAGE_ROOT + icon_path)
    if data is None:
        return None
    return FileResource(kind=ResourceKind.ICON, name=last_segment(icon_path), content=data)


def web_resources(archive: RawArchive) -> List[FileResource]:
    """Every readable file entry under the package root, named by its full path."""
    resources: List[FileResource] = []
    for info in archive.entries():
        if not info.filename.startswith(PACKAGE_ROOT) or info.is_dir():
            continue
        data = archive.read_info(info)
        if data is None:
            continue
        resources.append(FileResource(kind=ResourceKind.WEB_RESOURCE, name=info.filename, content=data))
    return resources


def extract_resources(
    archive: RawArchive,
    manifest: Manifest,
    metadata: ExtensionMetadata,
    web: bool = False,
) -> ResourceExtraction:
    """Extract all payload resources in a fixed order.

    Order: binary, manifest, readme, changelog, license, icon, web resources.
    Web resources are only produced when ``web`` is enabled and the
    extension declares the "web" extension kind.
    """
    resources: List[FileResource] = [
        FileResource(kind=ResourceKind.DOWNLOAD, name=None, content=archive.content)
    ]

    license_resource, license_id = resolve_license(archive, metadata.license)
    for resource in (
        manifest_resource(archive),
        readme_resource(archive),
        changelog_resource(archive),
        license_resource,
        icon_resource(archive, manifest),
    ):
        if resource is not None:
            resources.append(resource)

    if web and metadata.supports_web():
        resources.extend(web_resources(archive))

    if license_id != metadata.license:
        metadata = metadata.model_copy(update={"license": license_id})

    return ResourceExtraction(
        resources=[replace(r, extension=metadata) for r in resources],
        metadata=metadata,
    )
