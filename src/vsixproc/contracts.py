"""Public configuration models for vsixproc."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_CONTENT_SIZE = 512 * 1024 * 1024


class PublishOptions(BaseModel):
    """Per-invocation ingestion options."""
    web: bool = Field(default=False, description="Extract web resources for extensions declaring extensionKind 'web'")
    max_content_size: int = Field(default=MAX_CONTENT_SIZE, gt=0, description="Hard ceiling on the uploaded package size in bytes")
    temp_dir: Optional[Path] = Field(default=None, description="Directory for the archive's backing temporary file")

    model_config = ConfigDict(extra="forbid")
