"""
Plan dashboard service.

Holds the per-phase asset state for one plan and derives the chart and card
views the frontend renders. The plan itself is never modified here.

Each ``(asset kind, phase index)`` slot is an independent state machine::

    idle -> in_flight -> succeeded | failed      (re-enterable from either end)

A generation epoch is captured when a call is issued; if the store has been
reset by the time the call completes, the result is dropped and the caller
gets ``StaleResultError``.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from google import genai

from reno.config import CO2_BAR_FULL_SCALE_TONS, DEFAULT_RESOLUTION
from reno.errors import CredentialError, StaleResultError, ValidationError
from reno.models.assets import (
    AssetKind,
    AssetStatus,
    GeneratedImage,
    PhaseAssetState,
    ResolutionTier,
)
from reno.models.dashboard import (
    Co2Bar,
    CostBar,
    DashboardView,
    FundingCard,
    HeaderStats,
    PhaseAssetView,
    PhaseCard,
    RoiPoint,
)
from reno.models.plan import RenovationPhase, RenovationPlan
from reno.models.property import PropertyDetails
from reno.services.credentials import CredentialHook, ensure_api_key
from reno.services.visualizer import generate_blueprint, generate_visualization

logger = logging.getLogger(__name__)

_IDLE = PhaseAssetState()


# ---------------------------------------------------------------------------
# Asset state store
# ---------------------------------------------------------------------------

class PhaseAssetStore:
    """Per-phase generation state keyed by ``(kind, phase index)``."""

    def __init__(self) -> None:
        self._states: dict[tuple[AssetKind, int], PhaseAssetState] = {}
        self.epoch = 0

    def get(self, kind: AssetKind, index: int) -> PhaseAssetState:
        return self._states.get((kind, index), _IDLE)

    def images(self, kind: AssetKind) -> dict[int, GeneratedImage]:
        """Successful images of *kind* by phase index."""
        return {
            index: state.image
            for (k, index), state in self._states.items()
            if k is kind and state.image is not None
        }

    def reset(self) -> None:
        """Forget every slot and invalidate calls still in flight."""
        self._states.clear()
        self.epoch += 1

    async def run(
        self,
        kind: AssetKind,
        index: int,
        generate: Callable[[], Awaitable[GeneratedImage]],
    ) -> PhaseAssetState:
        """Drive one slot through a generation call.

        Returns the slot's new state. A failure is recorded on the slot and
        then re-raised; any earlier image stays in place. A cancelled call
        puts the slot back the way it was. A result (or failure) that lands
        after ``reset`` is dropped and reported as ``StaleResultError``.
        """
        key = (kind, index)
        current = self.get(kind, index)
        if current.status is AssetStatus.IN_FLIGHT:
            logger.info("[dashboard] %s %d already in flight", kind.value, index)
            return current

        issued_epoch = self.epoch
        self._states[key] = current.model_copy(
            update={"status": AssetStatus.IN_FLIGHT, "error": None}
        )

        try:
            image = await generate()
        except Exception as exc:
            if issued_epoch != self.epoch:
                logger.info(
                    "[dashboard] Discarding stale %s failure for phase %d: %s",
                    kind.value, index, exc,
                )
                raise StaleResultError(
                    "The project was reset while the image was being generated.",
                    detail=str(exc),
                ) from exc
            self._states[key] = self._states[key].model_copy(
                update={"status": AssetStatus.FAILED, "error": str(exc)}
            )
            raise
        except BaseException:
            # Cancelled mid-call: leave the slot re-enterable.
            if issued_epoch == self.epoch:
                self._states[key] = current
            raise

        if issued_epoch != self.epoch:
            logger.info(
                "[dashboard] Discarding stale %s for phase %d", kind.value, index
            )
            raise StaleResultError(
                "The project was reset while the image was being generated."
            )

        state = PhaseAssetState(status=AssetStatus.SUCCEEDED, image=image)
        self._states[key] = state
        return state


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

def cost_bars(plan: RenovationPlan) -> list[CostBar]:
    """Phase cost bars scaled against the most expensive phase."""
    max_cost = max((p.cost_estimate for p in plan.phases), default=0)
    bars: list[CostBar] = []
    for idx, phase in enumerate(plan.phases):
        width = (phase.cost_estimate / max_cost * 100.0) if max_cost > 0 else 0.0
        bars.append(
            CostBar(
                index=idx,
                name=phase.name,
                duration_weeks=phase.duration_weeks,
                cost_estimate=phase.cost_estimate,
                width_pct=round(width, 2),
            )
        )
    return bars


def co2_bars(plan: RenovationPlan) -> list[Co2Bar]:
    bars: list[Co2Bar] = []
    for item in plan.co2_savings:
        width = item.saving_tons / CO2_BAR_FULL_SCALE_TONS * 100.0
        bars.append(
            Co2Bar(
                category=item.category,
                saving_tons=item.saving_tons,
                description=item.description,
                width_pct=round(max(0.0, min(width, 100.0)), 2),
            )
        )
    return bars


def asset_view(state: PhaseAssetState) -> PhaseAssetView:
    return PhaseAssetView(
        status=state.status,
        image_url=state.image.data_url if state.image is not None else None,
        error=state.error,
    )


def build_dashboard_view(
    plan: RenovationPlan,
    details: PropertyDetails,
    store: PhaseAssetStore,
    image_size: ResolutionTier,
) -> DashboardView:
    """Assemble the full dashboard view model."""
    return DashboardView(
        header=HeaderStats(
            address=details.address,
            total_cost=plan.total_cost,
            total_duration=plan.total_duration,
            building_style=plan.building_style,
        ),
        image_size=image_size,
        cost_bars=cost_bars(plan),
        phases=[
            PhaseCard(
                index=idx,
                name=phase.name,
                description=phase.description,
                duration_weeks=phase.duration_weeks,
                cost_estimate=phase.cost_estimate,
                visualization=asset_view(store.get(AssetKind.VISUALIZATION, idx)),
                blueprint=asset_view(store.get(AssetKind.BLUEPRINT, idx)),
            )
            for idx, phase in enumerate(plan.phases)
        ],
        roi_projection=[
            RoiPoint(year=m.year, value=m.value) for m in plan.roi_projection
        ],
        co2_savings=co2_bars(plan),
        funding=[
            FundingCard(name=f.name, amount=f.amount, description=f.description)
            for f in plan.funding
        ],
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class RenovationDashboard:
    """One plan plus the on-demand assets generated for its phases."""

    def __init__(
        self,
        plan: RenovationPlan,
        details: PropertyDetails,
        store: PhaseAssetStore | None = None,
        image_size: ResolutionTier = ResolutionTier(DEFAULT_RESOLUTION),
        credential_hook: CredentialHook | None = None,
    ) -> None:
        self.plan = plan
        self.details = details
        self.store = store or PhaseAssetStore()
        self.image_size = image_size
        self.credential_hook = credential_hook

    def _phase(self, index: int) -> RenovationPhase:
        if not 0 <= index < len(self.plan.phases):
            raise ValidationError(
                f"Phase {index} does not exist; the plan has "
                f"{len(self.plan.phases)} phase(s)."
            )
        return self.plan.phases[index]

    async def _require_key(self) -> None:
        if not await ensure_api_key(self.credential_hook):
            raise CredentialError(
                "Could not generate image. Please ensure you have a valid "
                "paid API key selected."
            )

    def set_image_size(self, tier: ResolutionTier | str) -> None:
        self.image_size = ResolutionTier(tier)

    async def visualize_phase(
        self, index: int, client: genai.Client | None = None
    ) -> PhaseAssetState:
        phase = self._phase(index)
        await self._require_key()
        tier = self.image_size
        return await self.store.run(
            AssetKind.VISUALIZATION,
            index,
            lambda: generate_visualization(
                phase.description, self.plan.building_style, tier, client=client
            ),
        )

    async def draft_blueprint(
        self, index: int, client: genai.Client | None = None
    ) -> PhaseAssetState:
        phase = self._phase(index)
        await self._require_key()
        return await self.store.run(
            AssetKind.BLUEPRINT,
            index,
            lambda: generate_blueprint(
                phase.name, phase.description, self.plan.building_style, client=client
            ),
        )

    def view(self) -> DashboardView:
        return build_dashboard_view(self.plan, self.details, self.store, self.image_size)
