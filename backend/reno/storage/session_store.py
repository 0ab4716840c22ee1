"""
In-memory session store for Reno.

A planning session holds everything one user works on: uploaded photos, the
property details, the generated plan and its dashboard. Nothing is persisted;
a reset returns the session to its initial state.
"""

from __future__ import annotations

import logging
import uuid

from google import genai

from reno.config import DEFAULT_PROPERTY_DETAILS
from reno.errors import SessionNotFoundError, StaleResultError
from reno.models.plan import RenovationPlan
from reno.models.property import PropertyDetails
from reno.services.credentials import CredentialHook
from reno.services.dashboard import RenovationDashboard
from reno.services.intake import ImageIntake
from reno.services.plan_request import check_plan_inputs
from reno.services.planner import generate_plan

logger = logging.getLogger(__name__)


def default_details() -> PropertyDetails:
    return PropertyDetails.model_validate(DEFAULT_PROPERTY_DETAILS)


class PlanningSession:
    """State of one user's planning flow: intake, then dashboard."""

    def __init__(
        self,
        session_id: str | None = None,
        credential_hook: CredentialHook | None = None,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex[:12]
        self.credential_hook = credential_hook
        self.epoch = 0
        self.images = ImageIntake()
        self.details = default_details()
        self.plan: RenovationPlan | None = None
        self.dashboard: RenovationDashboard | None = None

    @property
    def stage(self) -> str:
        return "dashboard" if self.plan is not None else "intake"

    async def request_plan(
        self,
        details: PropertyDetails,
        client: genai.Client | None = None,
    ) -> RenovationPlan:
        """Generate a plan and open a fresh dashboard for it.

        Each request takes a new epoch, so a plan that lands after a reset
        or after a newer request was issued is discarded with
        ``StaleResultError``. Session details change only when a plan is
        applied.
        """
        check_plan_inputs(details, self.images.assets)

        self.epoch += 1
        issued_epoch = self.epoch
        plan = await generate_plan(details, self.images.assets, client=client)

        if issued_epoch != self.epoch:
            logger.info("[session] %s moved on; discarding late plan", self.id)
            raise StaleResultError(
                "The project was reset or re-planned while this plan was being "
                "generated."
            )

        if self.dashboard is not None:
            self.dashboard.store.reset()
        self.details = details
        self.plan = plan
        self.dashboard = RenovationDashboard(
            plan, details, credential_hook=self.credential_hook
        )
        return plan

    def reset(self) -> None:
        """Clear every entity and invalidate calls still in flight."""
        self.epoch += 1
        if self.dashboard is not None:
            self.dashboard.store.reset()
        self.images.clear()
        self.details = default_details()
        self.plan = None
        self.dashboard = None
        logger.info("[session] %s reset (epoch %d)", self.id, self.epoch)


class SessionStore:
    def __init__(self) -> None:
        self._sessions: dict[str, PlanningSession] = {}

    def create(self, credential_hook: CredentialHook | None = None) -> PlanningSession:
        session = PlanningSession(credential_hook=credential_hook)
        self._sessions[session.id] = session
        logger.info("[session] Created %s", session.id)
        return session

    def get(self, session_id: str) -> PlanningSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session '{session_id}' not found.")
        return session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


sessions = SessionStore()
