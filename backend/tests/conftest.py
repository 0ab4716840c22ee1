"""
conftest.py: Shared pytest fixtures for the Reno backend test suite.

No network access: Gemini is replaced by ``FakeGeminiClient``, which answers
``client.aio.models.generate_content`` with real ``google.genai.types``
response objects (or raises a configured error).

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``reno.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import base64
import io
import json
import os
import sys

import pytest

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from google.genai import types as genai_types  # noqa: E402
from PIL import Image  # noqa: E402


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------

def text_response(text):
    return genai_types.GenerateContentResponse(
        candidates=[
            genai_types.Candidate(
                content=genai_types.Content(
                    role="model", parts=[genai_types.Part(text=text)]
                )
            )
        ]
    )


def image_response(data, mime_type="image/png"):
    return genai_types.GenerateContentResponse(
        candidates=[
            genai_types.Candidate(
                content=genai_types.Content(
                    role="model",
                    parts=[
                        genai_types.Part(text="Here is your image."),
                        genai_types.Part(
                            inline_data=genai_types.Blob(mime_type=mime_type, data=data)
                        ),
                    ],
                )
            )
        ]
    )


def empty_response():
    return genai_types.GenerateContentResponse(candidates=[])


# ---------------------------------------------------------------------------
# Fake Gemini client
# ---------------------------------------------------------------------------

class _FakeModels:
    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        result = self.responder(model=model, contents=contents, config=config)
        if hasattr(result, "__await__"):
            result = await result
        if isinstance(result, BaseException):
            raise result
        return result


class _FakeAio:
    def __init__(self, models):
        self.models = models


class FakeGeminiClient:
    """Stands in for ``genai.Client``; *responder* decides each answer.

    *responder* may be a response object / exception (returned for every
    call) or a callable ``(model, contents, config) -> response | exception``,
    optionally async.
    """

    def __init__(self, responder):
        if not callable(responder):
            fixed = responder
            responder = lambda **_: fixed  # noqa: E731
        self.aio = _FakeAio(_FakeModels(responder))

    @property
    def calls(self):
        return self.aio.models.calls


def prompt_of(call):
    """Concatenated text parts of a recorded call."""
    return "\n".join(p.text for p in call["contents"].parts if p.text)


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

@pytest.fixture
def png_bytes():
    """A small, real PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (32, 18), color=(40, 90, 160)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def jpeg_asset():
    from reno.services.intake import ingest_image

    return ingest_image(b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg", "front.jpg")


@pytest.fixture
def details():
    from reno.models.property import PropertyDetails

    return PropertyDetails(
        address="Torstraße 45, Berlin",
        sqm=500,
        budget=250000,
        current_efficiency="E",
    )


@pytest.fixture
def plan_payload():
    """A schema-conformant plan as the model would return it."""
    return {
        "summary": "Envelope-first deep retrofit of a Gründerzeit Altbau.",
        "buildingStyle": "Altbau",
        "phases": [
            {
                "name": "Facade Insulation",
                "durationWeeks": 8,
                "costEstimate": 72000,
                "description": "External insulation with mineral wool, heritage-compatible render.",
            },
            {
                "name": "Window Replacement",
                "durationWeeks": 4,
                "costEstimate": 45500.5,
                "description": "Triple-glazed timber windows matching original profiles.",
            },
            {
                "name": "Heat Pump Installation",
                "durationWeeks": 6,
                "costEstimate": 60000,
                "description": "Air-to-water heat pump replacing the gas boiler.",
            },
        ],
        "roiProjection": [
            {"year": 1, "value": 2.5},
            {"year": 5, "value": 14},
            {"year": 10, "value": 31.75},
        ],
        "co2Savings": [
            {"category": "Heating", "savingTons": 12.4, "description": "Gas boiler removed."},
            {"category": "Insulation", "savingTons": 3, "description": "Lower transmission losses."},
        ],
        "funding": [
            {"name": "KfW 261", "amount": "Max €150k", "description": "Efficiency house loan with repayment grant."},
            {"name": "BAFA BEG EM", "amount": "Up to 20%", "description": "Grant for single measures."},
        ],
        "totalCost": 180000,
        "totalDuration": 26,
    }


@pytest.fixture
def plan_json(plan_payload):
    return json.dumps(plan_payload, ensure_ascii=False)


@pytest.fixture
def plan(plan_json):
    from reno.models.plan import RenovationPlan

    return RenovationPlan.model_validate_json(plan_json)


def b64(data):
    return base64.b64encode(data).decode("utf-8")
