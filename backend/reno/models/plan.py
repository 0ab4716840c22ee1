"""Pydantic v2 models for the AI-generated renovation plan.

Field names serialise in camelCase so the models mirror the structured-output
schema sent to Gemini. Payloads from the model are validated in strict mode
(see ``reno.services.planner.parse_plan``): a payload either becomes a fully
typed plan or fails as a whole.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# JSON integers stay ints and fractions stay floats.
Number = int | float


class _PlanModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class RenovationPhase(_PlanModel):
    """One ordered construction stage."""

    name: str
    duration_weeks: Number
    cost_estimate: Number
    description: str


class RoiMetric(_PlanModel):
    """Cumulative ROI (percent) reached in a given year."""

    year: Number
    value: Number


class Co2Metric(_PlanModel):
    category: str
    saving_tons: Number
    description: str


class FundingBadge(_PlanModel):
    """An eligible funding program, e.g. ``KfW 261`` / ``Max €150k``."""

    name: str
    amount: str
    description: str


class RenovationPlan(_PlanModel):
    """The complete plan returned by the plan service.

    ``total_cost`` and ``total_duration`` are the plan's own declared
    aggregates and are not reconciled against the phases.
    """

    summary: str
    building_style: str
    phases: list[RenovationPhase]
    roi_projection: list[RoiMetric]
    co2_savings: list[Co2Metric]
    funding: list[FundingBadge]
    total_cost: Number
    total_duration: Number
