"""
Phase asset generation service.

Generates a photorealistic visualization or a technical blueprint for one
renovation phase using Gemini's image-generation model. Each call is an
independent request with no caching or shared state, so calls for different
phases can run concurrently.
"""

from __future__ import annotations

import base64
import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from reno.config import (
    BLUEPRINT_PROMPT,
    BLUEPRINT_RESOLUTION,
    IMAGE_ASPECT_RATIO,
    IMAGE_MODEL,
    VISUALIZATION_PROMPT,
)
from reno.errors import NoImageProducedError, ServiceError
from reno.models.assets import GeneratedImage, ResolutionTier
from reno.services.gemini_client import get_client

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def extract_image(response: genai_types.GenerateContentResponse) -> GeneratedImage | None:
    """Return the first inline image of the first candidate, if any."""
    if not response.candidates:
        return None

    content = response.candidates[0].content
    for part in (content.parts if content else None) or []:
        if part.inline_data is not None and part.inline_data.data:
            raw_data = part.inline_data.data
            # google-genai SDK returns raw bytes; fall back to b64 decode
            # only if the response is a string (older SDK versions).
            if not isinstance(raw_data, bytes):
                raw_data = base64.b64decode(raw_data)
            return GeneratedImage(
                mime_type=part.inline_data.mime_type or "image/png",
                data=raw_data,
            )
    return None


async def _generate_image(
    client: genai.Client,
    prompt: str,
    resolution: ResolutionTier,
    label: str,
) -> GeneratedImage:
    config = genai_types.GenerateContentConfig(
        image_config=genai_types.ImageConfig(
            aspect_ratio=IMAGE_ASPECT_RATIO,
            image_size=resolution.value,
        ),
    )

    try:
        response = await client.aio.models.generate_content(
            model=IMAGE_MODEL,
            contents=genai_types.Content(
                role="user", parts=[genai_types.Part(text=prompt)]
            ),
            config=config,
        )
    except genai_errors.APIError as exc:
        logger.error("[visualizer] Gemini API error %s: %s", exc.code, exc.message)
        raise ServiceError(
            f"The image service rejected the {label} request.",
            detail=str(exc),
            status_code=exc.code,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("[visualizer] Transport error reaching Gemini: %s", exc)
        raise ServiceError(
            "Could not reach the image service.", detail=str(exc)
        ) from exc

    image = extract_image(response)
    if image is None:
        raise NoImageProducedError(
            f"No {label} generated.",
            detail="The response did not contain any inline_data parts.",
        )

    logger.info(
        "[visualizer] Generated %s (%s, %d bytes)", label, image.mime_type, len(image.data)
    )
    return image


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def generate_visualization(
    phase_description: str,
    building_style: str,
    resolution_tier: ResolutionTier | str = ResolutionTier.FAST,
    client: genai.Client | None = None,
) -> GeneratedImage:
    """Render a photorealistic image of a renovation phase."""
    prompt = VISUALIZATION_PROMPT.format(
        style=building_style, description=phase_description
    )
    return await _generate_image(
        client or get_client(),
        prompt,
        ResolutionTier(resolution_tier),
        "image",
    )


async def generate_blueprint(
    phase_name: str,
    phase_description: str,
    building_style: str,
    client: genai.Client | None = None,
) -> GeneratedImage:
    """Render a blueprint-style schematic of a renovation phase."""
    prompt = BLUEPRINT_PROMPT.format(
        name=phase_name, description=phase_description, style=building_style
    )
    return await _generate_image(
        client or get_client(),
        prompt,
        ResolutionTier(BLUEPRINT_RESOLUTION),
        "blueprint",
    )
