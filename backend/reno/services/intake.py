"""
Image intake service.

Turns uploaded property photos into ``ImageAsset`` records: a base64 payload
for the plan request plus a data URL the frontend can use as a preview.
Non-image files are filtered out silently.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import uuid
from typing import Protocol

from reno.config import IMAGE_MIME_PREFIX, MAX_FILE_SIZE
from reno.errors import ValidationError
from reno.models.property import ImageAsset

logger = logging.getLogger(__name__)


class Upload(Protocol):
    """The parts of ``fastapi.UploadFile`` the intake relies on."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


# ---------------------------------------------------------------------------
# Single file
# ---------------------------------------------------------------------------

def is_image_type(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.startswith(IMAGE_MIME_PREFIX)


def ingest_image(data: bytes, mime_type: str, filename: str = "") -> ImageAsset | None:
    """Encode one file as an ``ImageAsset``; returns None for non-images."""
    if not is_image_type(mime_type):
        logger.info("[intake] Skipping %r: not an image (%s)", filename, mime_type)
        return None

    b64 = base64.b64encode(data).decode("utf-8")
    return ImageAsset(
        id=uuid.uuid4().hex[:9],
        filename=filename,
        mime_type=mime_type,
        base64=b64,
        preview_url=f"data:{mime_type};base64,{b64}",
    )


async def _read_upload(upload: Upload, max_size: int) -> ImageAsset | None:
    mime_type = upload.content_type or ""
    if not is_image_type(mime_type):
        logger.info(
            "[intake] Skipping %r: not an image (%s)", upload.filename, mime_type
        )
        return None

    data = await upload.read()
    if len(data) > max_size:
        raise ValidationError(
            f"File '{upload.filename}' is too large. Maximum size: "
            f"{max_size // (1024 * 1024)}MB."
        )
    return ingest_image(data, mime_type, upload.filename or "")


async def ingest_uploads(
    uploads: list[Upload],
    max_size: int = MAX_FILE_SIZE,
) -> list[ImageAsset]:
    """Read every upload independently.

    Assets are returned in completion order, which need not match the
    order of *uploads*. The batch is all-or-nothing: if any read fails the
    remaining reads are cancelled and awaited before the error propagates.
    """
    reads = [asyncio.ensure_future(_read_upload(upload, max_size)) for upload in uploads]
    assets: list[ImageAsset] = []
    try:
        for next_done in asyncio.as_completed(reads):
            asset = await next_done
            if asset is not None:
                assets.append(asset)
    except BaseException:
        for read in reads:
            read.cancel()
        await asyncio.gather(*reads, return_exceptions=True)
        raise

    logger.info("[intake] Ingested %d of %d file(s)", len(assets), len(uploads))
    return assets


# ---------------------------------------------------------------------------
# Session collection
# ---------------------------------------------------------------------------

class ImageIntake:
    """Ordered, session-scoped list of uploaded image assets."""

    def __init__(self) -> None:
        self._assets: list[ImageAsset] = []

    def __len__(self) -> int:
        return len(self._assets)

    @property
    def assets(self) -> list[ImageAsset]:
        return list(self._assets)

    def add(self, asset: ImageAsset) -> None:
        self._assets.append(asset)

    def extend(self, assets: list[ImageAsset]) -> None:
        self._assets.extend(assets)

    def remove(self, asset_id: str) -> bool:
        """Drop the asset with *asset_id*; returns False if it was not present."""
        before = len(self._assets)
        self._assets = [a for a in self._assets if a.id != asset_id]
        return len(self._assets) != before

    def clear(self) -> None:
        self._assets = []
