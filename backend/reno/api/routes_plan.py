"""Session, image intake and plan generation routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from google import genai
from pydantic import BaseModel

from reno.api.deps import get_gemini_client, get_session, get_session_store
from reno.models.plan import RenovationPlan
from reno.models.property import ImageAsset, PropertyDetails
from reno.services.intake import ingest_uploads
from reno.storage.session_store import PlanningSession, SessionStore

router = APIRouter(prefix="/api", tags=["plan"])


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class ImageSummary(BaseModel):
    """An uploaded image as listed back to the frontend (no raw payload)."""

    id: str
    filename: str
    mime_type: str
    preview_url: str


class SessionSnapshot(BaseModel):
    id: str
    stage: str
    details: PropertyDetails
    images: list[ImageSummary]
    plan: RenovationPlan | None = None


def _summarise(image: ImageAsset) -> ImageSummary:
    return ImageSummary(
        id=image.id,
        filename=image.filename,
        mime_type=image.mime_type,
        preview_url=image.preview_url,
    )


def _snapshot(session: PlanningSession) -> SessionSnapshot:
    return SessionSnapshot(
        id=session.id,
        stage=session.stage,
        details=session.details,
        images=[_summarise(img) for img in session.images.assets],
        plan=session.plan,
    )


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

@router.post("/sessions", response_model=SessionSnapshot, status_code=201)
async def create_session(
    store: SessionStore = Depends(get_session_store),
) -> SessionSnapshot:
    return _snapshot(store.create())


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
async def read_session(
    session: PlanningSession = Depends(get_session),
) -> SessionSnapshot:
    return _snapshot(session)


@router.post("/sessions/{session_id}/reset", response_model=SessionSnapshot)
async def reset_session(
    session: PlanningSession = Depends(get_session),
) -> SessionSnapshot:
    """Start a new project: drop photos, details, plan and generated assets."""
    session.reset()
    return _snapshot(session)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(
    session: PlanningSession = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
) -> None:
    session.reset()
    store.delete(session.id)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

@router.post("/sessions/{session_id}/images", response_model=list[ImageSummary])
async def upload_images(
    files: list[UploadFile] = File(...),
    session: PlanningSession = Depends(get_session),
) -> list[ImageSummary]:
    """Add property photos; non-image files are ignored."""
    assets = await ingest_uploads(files)
    session.images.extend(assets)
    return [_summarise(img) for img in session.images.assets]


@router.delete(
    "/sessions/{session_id}/images/{image_id}",
    response_model=list[ImageSummary],
)
async def remove_image(
    image_id: str,
    session: PlanningSession = Depends(get_session),
) -> list[ImageSummary]:
    if not session.images.remove(image_id):
        raise HTTPException(status_code=404, detail=f"Image '{image_id}' not found.")
    return [_summarise(img) for img in session.images.assets]


# ---------------------------------------------------------------------------
# POST /api/sessions/{id}/plan
# ---------------------------------------------------------------------------

@router.post("/sessions/{session_id}/plan", response_model=RenovationPlan)
async def create_plan(
    details: PropertyDetails,
    session: PlanningSession = Depends(get_session),
    client: genai.Client = Depends(get_gemini_client),
) -> RenovationPlan:
    """Generate the renovation plan from the uploaded photos and *details*."""
    return await session.request_plan(details, client=client)
