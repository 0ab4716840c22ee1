"""
API credential hook.

Some hosts let the user pick an API key before paid generation calls
(image generation in particular). The hook is optional: without one the
system proceeds as if a key is already available.
"""

from __future__ import annotations

import logging
from typing import Protocol

from reno.config import GEMINI_API_KEY
from reno.errors import CredentialError

logger = logging.getLogger(__name__)


class CredentialHook(Protocol):
    async def has_selected_api_key(self) -> bool: ...

    async def open_select_key(self) -> None: ...


class EnvCredentialHook:
    """Reports a key as selected when one is configured or supplied per request.

    A server cannot prompt anyone, so ``open_select_key`` always fails.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key or GEMINI_API_KEY

    async def has_selected_api_key(self) -> bool:
        return bool(self.api_key)

    async def open_select_key(self) -> None:
        raise CredentialError(
            "No API key selected. Provide an X-Goog-Api-Key header or "
            "configure GEMINI_API_KEY."
        )


async def ensure_api_key(hook: CredentialHook | None) -> bool:
    """Return True when generation calls may proceed."""
    if hook is None:
        return True

    if await hook.has_selected_api_key():
        return True

    try:
        await hook.open_select_key()
    except Exception as exc:
        logger.warning("[credentials] Failed to select key: %s", exc)
        return False
    return True
