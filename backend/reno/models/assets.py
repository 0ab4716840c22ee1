"""Models for generated phase images and their per-phase lifecycle."""

import base64
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ResolutionTier(str, Enum):
    """Image quality requested from the image model."""

    FAST = "1K"
    HIGH = "2K"
    ULTRA = "4K"


class AssetKind(str, Enum):
    VISUALIZATION = "visualization"
    BLUEPRINT = "blueprint"


class AssetStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class GeneratedImage(BaseModel):
    """A single image returned by the image model."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = "image/png"
    data: bytes

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


class PhaseAssetState(BaseModel):
    """Lifecycle of one asset slot: idle -> in_flight -> succeeded | failed.

    ``image`` is the last successful result and survives a later failure.
    """

    model_config = ConfigDict(frozen=True)

    status: AssetStatus = AssetStatus.IDLE
    image: GeneratedImage | None = None
    error: str | None = None
