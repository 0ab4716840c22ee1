"""
Gemini client factory.

Clients are created on first use rather than at import time so that the
service modules import cleanly without a configured key, and so a request
can bring its own key.
"""

from __future__ import annotations

import logging

from google import genai

from reno.config import GEMINI_API_KEY
from reno.errors import CredentialError

logger = logging.getLogger(__name__)

_default_client: genai.Client | None = None


def _create_client(api_key: str | None) -> genai.Client:
    try:
        return genai.Client(api_key=api_key)
    except ValueError as exc:
        # Raised by the SDK when neither an explicit nor an env key exists.
        raise CredentialError(
            "No Gemini API key configured.", detail=str(exc)
        ) from exc


def get_client(api_key: str | None = None) -> genai.Client:
    """Return a Gemini client for *api_key*, or the shared default client."""
    global _default_client

    if api_key:
        return _create_client(api_key)

    if _default_client is None:
        logger.info("[gemini] Initialising default Gemini client")
        _default_client = _create_client(GEMINI_API_KEY or None)
    return _default_client
