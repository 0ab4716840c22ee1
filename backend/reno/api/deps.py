"""Shared FastAPI dependencies for the Reno routes."""

from __future__ import annotations

from fastapi import Depends, Header
from google import genai

from reno.errors import CredentialError
from reno.services.credentials import EnvCredentialHook, ensure_api_key
from reno.services.gemini_client import get_client
from reno.storage.session_store import PlanningSession, SessionStore, sessions


def get_session_store() -> SessionStore:
    return sessions


def get_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> PlanningSession:
    return store.get(session_id)


async def get_gemini_client(
    x_goog_api_key: str | None = Header(None),
) -> genai.Client:
    """Gemini client for this request; a header key overrides the configured one."""
    if not await ensure_api_key(EnvCredentialHook(x_goog_api_key)):
        raise CredentialError(
            "No API key selected. Please check your API key and try again."
        )
    return get_client(x_goog_api_key)
