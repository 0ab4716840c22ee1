"""Pydantic v2 models for the user-supplied property inputs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EfficiencyClass(str, Enum):
    """Energy-efficiency label, best (A) to worst (H)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"


class PropertyDetails(BaseModel):
    """Basic metrics of the property to renovate."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    address: str = ""
    sqm: int | float = Field(gt=0)
    budget: int | float = Field(gt=0)
    current_efficiency: EfficiencyClass = EfficiencyClass.E


class ImageAsset(BaseModel):
    """An uploaded property photo, encoded for the plan request."""

    model_config = ConfigDict(frozen=True)

    id: str
    filename: str
    mime_type: str
    base64: str
    preview_url: str
