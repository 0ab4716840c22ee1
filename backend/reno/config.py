"""
Central configuration module for the Reno backend.

Loads environment variables, defines model identifiers, sampling and image
settings, property defaults, upload limits, and the Gemini prompt templates.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# ---------------------------------------------------------------------------
# Gemini models & sampling
# ---------------------------------------------------------------------------
PLAN_MODEL = os.getenv("PLAN_MODEL", "gemini-2.5-flash")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "gemini-3-pro-image-preview")

# Low temperature keeps the plan grounded and analytical.
PLAN_TEMPERATURE = float(os.getenv("PLAN_TEMPERATURE", "0.4"))

IMAGE_ASPECT_RATIO = "16:9"
DEFAULT_RESOLUTION = "1K"
BLUEPRINT_RESOLUTION = "1K"

# ---------------------------------------------------------------------------
# Property inputs
# ---------------------------------------------------------------------------
EFFICIENCY_CLASSES: list[str] = ["A", "B", "C", "D", "E", "F", "G", "H"]

DEFAULT_PROPERTY_DETAILS: dict = {
    "address": "",
    "sqm": 500,
    "budget": 250_000,
    "currentEfficiency": "E",
}

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
IMAGE_MIME_PREFIX = "image/"
MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
# Savings at or above this many tons fill a CO2 bar completely.
CO2_BAR_FULL_SCALE_TONS = 10.0

# ---------------------------------------------------------------------------
# LLM Prompts
# ---------------------------------------------------------------------------

PLAN_PROMPT = """\
Act as an expert renovation consultant for multifamily properties in Berlin, Germany.
Analyze the provided images of the property and the following details:
Address: {address}
Size: {sqm} sqm
Budget: €{budget}
Current Efficiency Class: {efficiency}

Generate a comprehensive renovation plan that focuses on energy efficiency, ROI, \
and modernization.
Include specific German funding programs (KfW, BAFA) where applicable.
Provide realistic timelines and cost estimates for Berlin market rates.
"""

VISUALIZATION_PROMPT = """\
Photorealistic architectural visualization of a building renovation phase in Berlin.
Style: {style}.
Phase detail: {description}.
Professional architectural photography, high detail, daylight, 8k resolution.\
"""

BLUEPRINT_PROMPT = """\
Technical architectural blueprint drawing of a building renovation phase.
Phase: {name}.
Description: {description}.
Building Style: {style}.
Visual Style: Classic blueprint, white technical lines on blue background, \
schematic, precise, high contrast, top-down or isometric view.\
"""
