"""
Plan request builder.

Assembles the single multimodal request sent to Gemini for a renovation
plan: the property photos as inline image parts (input order preserved),
the instruction text embedding the property details, and the structured
output schema the model must answer with. Pure; performs no I/O.
"""

from __future__ import annotations

import base64

from google.genai import types as genai_types
from pydantic import BaseModel, ConfigDict

from reno.config import PLAN_MODEL, PLAN_PROMPT, PLAN_TEMPERATURE
from reno.errors import ValidationError
from reno.models.property import ImageAsset, PropertyDetails

_T = genai_types.Type

# ---------------------------------------------------------------------------
# Output schema (binding contract with the plan model)
# ---------------------------------------------------------------------------

PLAN_RESPONSE_SCHEMA = genai_types.Schema(
    type=_T.OBJECT,
    properties={
        "summary": genai_types.Schema(
            type=_T.STRING,
            description="Executive summary of the renovation strategy.",
        ),
        "buildingStyle": genai_types.Schema(
            type=_T.STRING,
            description="Detected architectural style (e.g., Altbau, Plattenbau).",
        ),
        "phases": genai_types.Schema(
            type=_T.ARRAY,
            items=genai_types.Schema(
                type=_T.OBJECT,
                properties={
                    "name": genai_types.Schema(type=_T.STRING),
                    "durationWeeks": genai_types.Schema(type=_T.NUMBER),
                    "costEstimate": genai_types.Schema(type=_T.NUMBER),
                    "description": genai_types.Schema(type=_T.STRING),
                },
                required=["name", "durationWeeks", "costEstimate", "description"],
            ),
        ),
        "roiProjection": genai_types.Schema(
            type=_T.ARRAY,
            items=genai_types.Schema(
                type=_T.OBJECT,
                properties={
                    "year": genai_types.Schema(type=_T.NUMBER),
                    "value": genai_types.Schema(
                        type=_T.NUMBER, description="ROI Percentage"
                    ),
                },
                required=["year", "value"],
            ),
        ),
        "co2Savings": genai_types.Schema(
            type=_T.ARRAY,
            items=genai_types.Schema(
                type=_T.OBJECT,
                properties={
                    "category": genai_types.Schema(
                        type=_T.STRING,
                        description="Area of saving (e.g., Heating, Insulation)",
                    ),
                    "savingTons": genai_types.Schema(type=_T.NUMBER),
                    "description": genai_types.Schema(
                        type=_T.STRING,
                        description="Brief explanation of how this saving is achieved.",
                    ),
                },
                required=["category", "savingTons", "description"],
            ),
        ),
        "funding": genai_types.Schema(
            type=_T.ARRAY,
            items=genai_types.Schema(
                type=_T.OBJECT,
                properties={
                    "name": genai_types.Schema(type=_T.STRING),
                    "amount": genai_types.Schema(type=_T.STRING),
                    "description": genai_types.Schema(type=_T.STRING),
                },
                required=["name", "amount", "description"],
            ),
        ),
        "totalCost": genai_types.Schema(type=_T.NUMBER),
        "totalDuration": genai_types.Schema(
            type=_T.NUMBER, description="Total duration in weeks"
        ),
    },
    required=[
        "summary",
        "phases",
        "roiProjection",
        "co2Savings",
        "funding",
        "totalCost",
        "totalDuration",
        "buildingStyle",
    ],
)


class PlanRequest(BaseModel):
    """Everything needed for one ``generate_content`` call."""

    model_config = ConfigDict(frozen=True)

    model: str
    prompt: str
    contents: genai_types.Content
    config: genai_types.GenerateContentConfig

    @property
    def image_parts(self) -> list[genai_types.Part]:
        return [p for p in self.contents.parts or [] if p.inline_data is not None]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def check_plan_inputs(details: PropertyDetails, images: list[ImageAsset]) -> None:
    """Raise ``ValidationError`` unless a plan request may be issued."""
    if not images:
        raise ValidationError("Please upload at least one image.")
    if not details.address.strip():
        raise ValidationError("Please enter an address.")


def build_plan_prompt(details: PropertyDetails) -> str:
    return PLAN_PROMPT.format(
        address=details.address,
        sqm=details.sqm,
        budget=details.budget,
        efficiency=details.current_efficiency.value,
    )


def build_plan_request(
    details: PropertyDetails,
    images: list[ImageAsset],
) -> PlanRequest:
    """Build the plan request: image parts first, then the instruction."""
    parts: list[genai_types.Part] = [
        genai_types.Part(
            inline_data=genai_types.Blob(
                mime_type=image.mime_type,
                data=base64.b64decode(image.base64),
            )
        )
        for image in images
    ]

    prompt = build_plan_prompt(details)
    parts.append(genai_types.Part(text=prompt))

    return PlanRequest(
        model=PLAN_MODEL,
        prompt=prompt,
        contents=genai_types.Content(role="user", parts=parts),
        config=genai_types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=PLAN_RESPONSE_SCHEMA,
            temperature=PLAN_TEMPERATURE,
        ),
    )
