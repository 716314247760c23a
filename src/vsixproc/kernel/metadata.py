"""Metadata extractor: manifest fields -> ExtensionMetadata."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .manifest import Manifest


class ExtensionMetadata(BaseModel):
    """Structured description of one extension version.

    List fields are None when the manifest did not provide a list at all,
    and otherwise keep first-occurrence order without duplicates.
    """
    name: Optional[str] = None
    namespace: Optional[str] = None  # manifest "publisher"
    version: Optional[str] = None
    preview: bool = False
    display_name: Optional[str] = None
    description: Optional[str] = None
    engines: Optional[List[str]] = None  # "vscode@^1.50.0"
    categories: Optional[List[str]] = None
    extension_kind: Optional[List[str]] = None
    tags: Optional[List[str]] = None  # manifest "keywords"
    license: Optional[str] = None
    homepage: Optional[str] = None
    repository: Optional[str] = None
    bugs: Optional[str] = None
    markdown: Optional[str] = None
    gallery_color: Optional[str] = None
    gallery_theme: Optional[str] = None
    qna: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def extension_id(self) -> Optional[str]:
        if not self.namespace or not self.name:
            return None
        return f"{self.namespace}.{self.name}"

    def supports_web(self) -> bool:
        return bool(self.extension_kind) and "web" in self.extension_kind


def extract_metadata(manifest: Manifest) -> ExtensionMetadata:
    """Map manifest fields onto ExtensionMetadata. Never raises for field shape."""
    gallery_color = None
    gallery_theme = None
    if manifest.is_object("galleryBanner"):
        gallery_color = manifest.string("galleryBanner", "color")
        gallery_theme = manifest.string("galleryBanner", "theme")

    return ExtensionMetadata(
        name=manifest.string("name"),
        namespace=manifest.string("publisher"),
        version=manifest.string("version"),
        preview=manifest.boolean("preview"),
        display_name=manifest.localized_string("displayName"),
        description=manifest.localized_string("description"),
        engines=manifest.engine_list("engines"),
        categories=manifest.string_list("categories"),
        extension_kind=manifest.string_list("extensionKind"),
        tags=manifest.string_list("keywords"),
        license=manifest.string("license"),
        homepage=manifest.url_field("homepage"),
        repository=manifest.url_field("repository"),
        bugs=manifest.url_field("bugs"),
        markdown=manifest.string("markdown"),
        gallery_color=gallery_color,
        gallery_theme=gallery_theme,
        qna=manifest.string("qna"),
    )


def extension_dependencies(manifest: Manifest) -> List[str]:
    """Identifiers from "extensionDependencies"; empty if absent or not an array."""
    return manifest.string_list("extensionDependencies") or []


def bundled_extensions(manifest: Manifest) -> List[str]:
    """Identifiers from "extensionPack"; empty if absent or not an array."""
    return manifest.string_list("extensionPack") or []
