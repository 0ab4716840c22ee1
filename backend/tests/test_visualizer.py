"""
test_visualizer.py: Unit tests for phase visualization and blueprint generation.
"""

import asyncio

import httpx
import pytest

from conftest import (
    FakeGeminiClient,
    empty_response,
    image_response,
    prompt_of,
    text_response,
)
from reno.config import IMAGE_MODEL
from reno.errors import AssetGenerationError, NoImageProducedError, ServiceError
from reno.models.assets import ResolutionTier
from reno.services.visualizer import (
    extract_image,
    generate_blueprint,
    generate_visualization,
)


def _run(coro):
    return asyncio.run(coro)


class TestVisualization:

    def test_returns_first_inline_image(self, png_bytes):
        client = FakeGeminiClient(image_response(png_bytes))

        image = _run(
            generate_visualization("New facade insulation", "Altbau", "2K", client=client)
        )

        assert image.data == png_bytes
        assert image.mime_type == "image/png"
        assert image.data_url.startswith("data:image/png;base64,")

    def test_request_shape(self, png_bytes):
        client = FakeGeminiClient(image_response(png_bytes))

        _run(
            generate_visualization(
                "Triple-glazed windows", "Plattenbau", ResolutionTier.ULTRA, client=client
            )
        )

        call = client.calls[0]
        assert call["model"] == IMAGE_MODEL
        assert call["config"].image_config.aspect_ratio == "16:9"
        assert call["config"].image_config.image_size == "4K"
        prompt = prompt_of(call)
        assert "Photorealistic" in prompt
        assert "Style: Plattenbau." in prompt
        assert "Phase detail: Triple-glazed windows." in prompt

    def test_unknown_tier_rejected(self):
        client = FakeGeminiClient(empty_response())
        with pytest.raises(ValueError):
            _run(generate_visualization("x", "y", "8K", client=client))
        assert client.calls == []

    @pytest.mark.parametrize(
        "response",
        [empty_response(), text_response("I cannot draw that.")],
        ids=["no-candidates", "text-only"],
    )
    def test_no_image_produced(self, response):
        client = FakeGeminiClient(response)

        with pytest.raises(NoImageProducedError) as exc_info:
            _run(generate_visualization("Roof", "Altbau", "1K", client=client))

        assert exc_info.value.kind == "no_image_produced"
        assert isinstance(exc_info.value, AssetGenerationError)

    def test_transport_error(self):
        client = FakeGeminiClient(httpx.ConnectError("refused"))
        with pytest.raises(ServiceError):
            _run(generate_visualization("Roof", "Altbau", "1K", client=client))


class TestBlueprint:

    def test_fixed_low_tier_and_schematic_prompt(self, png_bytes):
        client = FakeGeminiClient(image_response(png_bytes, mime_type="image/jpeg"))

        image = _run(
            generate_blueprint("Heat Pump Installation", "Air-to-water unit", "Altbau", client=client)
        )

        assert image.mime_type == "image/jpeg"
        call = client.calls[0]
        assert call["config"].image_config.image_size == "1K"
        assert call["config"].image_config.aspect_ratio == "16:9"
        prompt = prompt_of(call)
        assert "blueprint" in prompt
        assert "Phase: Heat Pump Installation." in prompt
        assert "Building Style: Altbau." in prompt

    def test_no_image_produced(self):
        client = FakeGeminiClient(empty_response())
        with pytest.raises(NoImageProducedError):
            _run(generate_blueprint("Roof", "Re-tiling", "Altbau", client=client))


class TestExtractImage:

    def test_skips_text_parts(self, png_bytes):
        image = extract_image(image_response(png_bytes))
        assert image is not None
        assert image.data == png_bytes

    def test_none_without_image(self):
        assert extract_image(text_response("nothing")) is None
        assert extract_image(empty_response()) is None
