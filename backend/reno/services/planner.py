"""Plan generation service using Gemini Flash.

Sends the property photos and details to Gemini with a structured-output
schema and returns the answer as a validated ``RenovationPlan``. The call is
all-or-nothing: the caller gets either a fully typed plan or an error that
says which side failed (the service, or the payload it returned).
"""

from __future__ import annotations

import logging
import re

import httpx
import pydantic
from google import genai
from google.genai import errors as genai_errors

from reno.errors import EmptyResponseError, MalformedPayloadError, ServiceError
from reno.models.plan import RenovationPlan
from reno.models.property import ImageAsset, PropertyDetails
from reno.services.gemini_client import get_client
from reno.services.plan_request import build_plan_request

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _strip_fencing(raw_text: str) -> str:
    """Strip optional markdown code fencing around a JSON payload."""
    text = raw_text.strip()
    text = re.sub(r"^```(?:json)?\s*\n?", "", text)
    text = re.sub(r"\n?```\s*$", "", text)
    return text.strip()


def parse_plan(raw_text: str | None) -> RenovationPlan:
    """Parse and validate the model's response text in a single step."""
    if not raw_text or not raw_text.strip():
        raise EmptyResponseError("No response from AI.")

    try:
        return RenovationPlan.model_validate_json(
            _strip_fencing(raw_text), strict=True
        )
    except pydantic.ValidationError as exc:
        logger.error(
            "[planner] Plan payload failed validation (%d error(s))",
            exc.error_count(),
        )
        raise MalformedPayloadError(
            "The AI returned a plan that does not match the expected format.",
            detail=str(exc),
        ) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def generate_plan(
    details: PropertyDetails,
    images: list[ImageAsset],
    client: genai.Client | None = None,
) -> RenovationPlan:
    """Generate a renovation plan for *details* and *images*.

    Parameters
    ----------
    details:
        Address, floor area, budget and efficiency class of the property.
    images:
        Property photos; sent in the given order.
    client:
        Gemini client to use; defaults to the shared client.

    Raises
    ------
    ServiceError
        The service could not be reached or refused the request.
    EmptyResponseError
        The service answered without any text.
    MalformedPayloadError
        The text is not valid JSON or does not match the plan schema.
    """
    request = build_plan_request(details, images)
    client = client or get_client()

    logger.info(
        "[planner] Requesting plan for %r with %d image(s)",
        details.address,
        len(request.image_parts),
    )

    try:
        response = await client.aio.models.generate_content(
            model=request.model,
            contents=request.contents,
            config=request.config,
        )
    except genai_errors.APIError as exc:
        logger.error("[planner] Gemini API error %s: %s", exc.code, exc.message)
        raise ServiceError(
            "The plan service rejected the request.",
            detail=str(exc),
            status_code=exc.code,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("[planner] Transport error reaching Gemini: %s", exc)
        raise ServiceError(
            "Could not reach the plan service.", detail=str(exc)
        ) from exc

    plan = parse_plan(response.text)
    logger.info(
        "[planner] Plan ready: %d phase(s), total cost %s, %s week(s)",
        len(plan.phases),
        plan.total_cost,
        plan.total_duration,
    )
    return plan
