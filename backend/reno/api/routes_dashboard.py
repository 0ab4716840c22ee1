"""Dashboard routes: derived plan views, per-phase assets and PDF export."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from google import genai
from pydantic import BaseModel

from reno.api.deps import get_gemini_client, get_session
from reno.errors import ValidationError
from reno.models.assets import AssetKind, ResolutionTier
from reno.models.dashboard import DashboardView, PhaseAssetView
from reno.services.dashboard import RenovationDashboard, asset_view
from reno.services.export import render_plan_pdf
from reno.storage.session_store import PlanningSession

router = APIRouter(prefix="/api", tags=["dashboard"])


class ImageSizeRequest(BaseModel):
    image_size: ResolutionTier


def _dashboard(session: PlanningSession) -> RenovationDashboard:
    if session.dashboard is None:
        raise ValidationError("No plan has been generated for this session yet.")
    return session.dashboard


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

@router.get("/sessions/{session_id}/dashboard", response_model=DashboardView)
async def read_dashboard(
    session: PlanningSession = Depends(get_session),
) -> DashboardView:
    return _dashboard(session).view()


@router.put("/sessions/{session_id}/dashboard/image-size", response_model=DashboardView)
async def set_image_size(
    body: ImageSizeRequest,
    session: PlanningSession = Depends(get_session),
) -> DashboardView:
    """Choose the resolution tier used by later phase visualizations."""
    dashboard = _dashboard(session)
    dashboard.set_image_size(body.image_size)
    return dashboard.view()


# ---------------------------------------------------------------------------
# Phase assets
# ---------------------------------------------------------------------------

@router.post(
    "/sessions/{session_id}/phases/{index}/visualization",
    response_model=PhaseAssetView,
)
async def visualize_phase(
    index: int,
    session: PlanningSession = Depends(get_session),
    client: genai.Client = Depends(get_gemini_client),
) -> PhaseAssetView:
    state = await _dashboard(session).visualize_phase(index, client=client)
    return asset_view(state)


@router.post(
    "/sessions/{session_id}/phases/{index}/blueprint",
    response_model=PhaseAssetView,
)
async def draft_blueprint(
    index: int,
    session: PlanningSession = Depends(get_session),
    client: genai.Client = Depends(get_gemini_client),
) -> PhaseAssetView:
    state = await _dashboard(session).draft_blueprint(index, client=client)
    return asset_view(state)


@router.get("/sessions/{session_id}/phases/{index}/{kind}")
async def download_phase_asset(
    index: int,
    kind: AssetKind,
    session: PlanningSession = Depends(get_session),
) -> Response:
    """Raw bytes of a generated visualization or blueprint."""
    image = _dashboard(session).store.get(kind, index).image
    if image is None:
        raise HTTPException(
            status_code=404,
            detail=f"No {kind.value} has been generated for phase {index}.",
        )

    filename = (
        f"reno-phase-{index + 1}.png"
        if kind is AssetKind.VISUALIZATION
        else f"blueprint-{index + 1}.png"
    )
    return Response(
        content=image.data,
        media_type=image.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

@router.get("/sessions/{session_id}/export.pdf")
async def export_plan(
    session: PlanningSession = Depends(get_session),
) -> Response:
    dashboard = _dashboard(session)
    pdf_bytes = render_plan_pdf(
        dashboard.plan,
        dashboard.details,
        dashboard.store.images(AssetKind.VISUALIZATION),
    )
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="reno-plan.pdf"'},
    )
