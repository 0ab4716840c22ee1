"""View models derived from a plan for the dashboard frontend."""

from pydantic import BaseModel

from reno.models.assets import AssetStatus, ResolutionTier


class HeaderStats(BaseModel):
    address: str
    total_cost: float
    total_duration: float
    building_style: str


class CostBar(BaseModel):
    """A phase row in the cost & timeline chart."""

    index: int
    name: str
    duration_weeks: float
    cost_estimate: float
    width_pct: float


class RoiPoint(BaseModel):
    year: float
    value: float


class Co2Bar(BaseModel):
    category: str
    saving_tons: float
    description: str
    width_pct: float


class FundingCard(BaseModel):
    name: str
    amount: str
    description: str


class PhaseAssetView(BaseModel):
    """Asset state for one phase, with the image inlined as a data URL."""

    status: AssetStatus
    image_url: str | None = None
    error: str | None = None


class PhaseCard(BaseModel):
    index: int
    name: str
    description: str
    duration_weeks: float
    cost_estimate: float
    visualization: PhaseAssetView
    blueprint: PhaseAssetView


class DashboardView(BaseModel):
    """Everything the dashboard page renders for one plan."""

    header: HeaderStats
    image_size: ResolutionTier
    cost_bars: list[CostBar]
    phases: list[PhaseCard]
    roi_projection: list[RoiPoint]
    co2_savings: list[Co2Bar]
    funding: list[FundingCard]
