"""
PDF export of a renovation plan.

Lays the plan out on A4 pages with ReportLab: header, key figures, executive
summary, phases, CO2 impact, ROI projection, eligible funding and any phase
visualizations generated so far. Presentation only.
"""

from __future__ import annotations

import io
import logging

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas as rl_canvas

from reno.models.assets import GeneratedImage
from reno.models.plan import RenovationPlan
from reno.models.property import PropertyDetails

logger = logging.getLogger(__name__)

_PRIMARY_RGB = (171 / 255, 35 / 255, 124 / 255)
_TEXT_RGB = (60 / 255, 60 / 255, 60 / 255)
_MUTED_RGB = (100 / 255, 100 / 255, 100 / 255)

_MARGIN = 2 * cm
_BOTTOM = 2.5 * cm


def _fmt_money(value: float) -> str:
    return f"€{value:,.0f}"


class _PlanWriter:
    """Tracks the cursor and breaks pages as content is drawn."""

    def __init__(self, buf: io.BytesIO) -> None:
        self.c = rl_canvas.Canvas(buf, pagesize=A4)
        self.page_w, self.page_h = A4
        self.page = 1
        self.y = self.page_h - _MARGIN
        self.last_line_y = self.y
        self._draw_footer()

    def _draw_footer(self) -> None:
        self.c.setFont("Helvetica", 8)
        self.c.setFillColorRGB(*_MUTED_RGB)
        self.c.drawRightString(self.page_w - _MARGIN, 1.2 * cm, f"Page {self.page}")

    def ensure(self, height: float) -> None:
        if self.y - height < _BOTTOM:
            self.c.showPage()
            self.page += 1
            self.y = self.page_h - _MARGIN
            self._draw_footer()

    def text(
        self,
        value: str,
        size: float = 10,
        bold: bool = False,
        rgb: tuple[float, float, float] = _TEXT_RGB,
        indent: float = 0,
        leading: float | None = None,
    ) -> None:
        font = "Helvetica-Bold" if bold else "Helvetica"
        leading = leading or size * 1.35
        width = self.page_w - 2 * _MARGIN - indent
        for line in simpleSplit(value, font, size, width) or [""]:
            self.ensure(leading)
            self.c.setFont(font, size)
            self.c.setFillColorRGB(*rgb)
            self.c.drawString(_MARGIN + indent, self.y, line)
            self.last_line_y = self.y
            self.y -= leading

    def right_text(self, value: str, size: float = 9) -> None:
        """Draw *value* right-aligned on the line just written."""
        self.c.setFont("Helvetica", size)
        self.c.setFillColorRGB(*_TEXT_RGB)
        self.c.drawRightString(self.page_w - _MARGIN, self.last_line_y, value)

    def heading(self, value: str) -> None:
        self.gap(0.4 * cm)
        self.ensure(1.2 * cm)
        self.text(value, size=14, bold=True, rgb=(0, 0, 0))
        self.gap(0.15 * cm)

    def gap(self, height: float) -> None:
        self.y -= height

    def image(self, image: GeneratedImage, caption: str) -> None:
        try:
            pil_img = Image.open(io.BytesIO(image.data))
            pil_img.load()
        except (OSError, ValueError) as exc:
            logger.warning("[export] Skipping unreadable image %r: %s", caption, exc)
            return

        width = self.page_w - 2 * _MARGIN
        height = width * pil_img.height / pil_img.width
        self.ensure(height + 0.8 * cm)
        self.text(caption, size=9, rgb=_MUTED_RGB)
        self.c.drawImage(
            ImageReader(pil_img), _MARGIN, self.y - height, width=width, height=height
        )
        self.y -= height + 0.4 * cm

    def save(self) -> None:
        self.c.save()


def render_plan_pdf(
    plan: RenovationPlan,
    details: PropertyDetails,
    visualizations: dict[int, GeneratedImage] | None = None,
) -> bytes:
    """Return the plan summary as PDF bytes."""
    buf = io.BytesIO()
    w = _PlanWriter(buf)

    # Header
    w.text("Reno | Renovation Plan", size=20, bold=True, rgb=_PRIMARY_RGB)
    w.gap(0.3 * cm)
    w.text(f"Address: {details.address}", size=12)
    w.text(f"Est. Cost: {_fmt_money(plan.total_cost)}", size=12)
    w.text(f"Duration: {plan.total_duration} Weeks", size=12)
    w.text(f"Building Style: {plan.building_style}", size=12)

    w.heading("Executive Summary")
    w.text(plan.summary, size=10)

    w.heading("Project Phases")
    for i, phase in enumerate(plan.phases):
        w.text(f"{i + 1}. {phase.name} ({phase.duration_weeks} weeks)", size=11)
        w.right_text(f"Est: {_fmt_money(phase.cost_estimate)}")
        w.text(phase.description, size=9, rgb=_MUTED_RGB, indent=0.5 * cm)
        w.gap(0.2 * cm)

    if plan.co2_savings:
        w.heading("CO2 Impact")
        for item in plan.co2_savings:
            w.text(f"{item.category}: {item.saving_tons}t saved", size=11)
            if item.description:
                w.text(item.description, size=9, rgb=_MUTED_RGB, indent=0.5 * cm)

    if plan.roi_projection:
        w.heading("ROI Projection")
        for metric in plan.roi_projection:
            w.text(f"Year {metric.year}: {metric.value}%", size=10)

    w.heading("Eligible Funding")
    for fund in plan.funding:
        w.text(f"[{fund.name}] {fund.amount}", size=11, rgb=_PRIMARY_RGB)
        w.text(fund.description, size=9, rgb=_MUTED_RGB, indent=0.5 * cm)

    if visualizations:
        w.heading("Phase Visualizations")
        for idx in sorted(visualizations):
            if 0 <= idx < len(plan.phases):
                w.image(visualizations[idx], f"{idx + 1}. {plan.phases[idx].name}")

    w.save()
    logger.info("[export] Rendered plan PDF with %d page(s)", w.page)
    return buf.getvalue()
