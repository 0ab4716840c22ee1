"""
test_export.py: Unit tests for the PDF plan export.
"""

import re

from reno.models.assets import GeneratedImage
from reno.services.export import render_plan_pdf


def _page_count(pdf: bytes) -> int:
    return max(int(n) for n in re.findall(rb"/Count (\d+)", pdf))


class TestRenderPlanPdf:

    def test_produces_pdf(self, plan, details):
        pdf = render_plan_pdf(plan, details)
        assert pdf.startswith(b"%PDF")
        assert pdf.rstrip().endswith(b"%%EOF")
        assert _page_count(pdf) == 1

    def test_long_plan_breaks_pages(self, plan, details):
        phases = [
            plan.phases[i % len(plan.phases)].model_copy(
                update={"name": f"Phase {i}", "description": "Detailed works. " * 30}
            )
            for i in range(40)
        ]
        long_plan = plan.model_copy(update={"phases": phases})

        pdf = render_plan_pdf(long_plan, details)

        assert _page_count(pdf) > 1

    def test_embeds_visualizations(self, plan, details, png_bytes):
        without = render_plan_pdf(plan, details)
        with_image = render_plan_pdf(
            plan, details, {0: GeneratedImage(data=png_bytes)}
        )
        assert len(with_image) > len(without)

    def test_skips_unreadable_and_unknown_images(self, plan, details, png_bytes):
        pdf = render_plan_pdf(
            plan,
            details,
            {
                0: GeneratedImage(data=b"definitely not a png"),
                99: GeneratedImage(data=png_bytes),
            },
        )
        assert pdf.startswith(b"%PDF")

    def test_empty_optional_sections(self, plan, details):
        bare = plan.model_copy(update={"co2_savings": [], "roi_projection": [], "funding": []})
        assert render_plan_pdf(bare, details).startswith(b"%PDF")
