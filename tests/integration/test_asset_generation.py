"""
Integration tests for story text, illustration and narration with real API calls.

Run with: pytest tests/integration/test_asset_generation.py -v
"""

import base64
from io import BytesIO

import pytest
from PIL import Image

from masal.config import (
    extract_image_from_response,
    get_genai_client,
    get_image_config,
    get_image_model,
    get_story_lm,
    STORY_CONSTANTS,
)
from masal.core.export import decode_data_url
from masal.core.inputs import AgeGroup, Gender, UserInput
from masal.core.modules.illustrator import Illustrator
from masal.core.modules.narrator import Narrator
from masal.core.modules.story_writer import StoryWriter


# =============================================================================
# Illustration
# =============================================================================

@pytest.mark.requires_google_api
@pytest.mark.slow
class TestIllustrationReal:
    """Tests that exercise image extraction with real API responses."""

    @pytest.mark.asyncio
    async def test_extracts_image_from_real_response(self):
        """Verify extraction works with actual Gemini API response structure."""
        response = await get_genai_client().aio.models.generate_content(
            model=get_image_model(),
            contents="Generate a simple red circle on white background",
            config=get_image_config(),
        )

        image_bytes, mime_type = extract_image_from_response(response)

        assert mime_type.startswith("image/")
        assert len(image_bytes) > 1000  # Real images are at least a few KB
        img = Image.open(BytesIO(image_bytes))
        assert img.size[0] > 0
        assert img.size[1] > 0

    @pytest.mark.asyncio
    async def test_illustrator_returns_square_data_url(self):
        url = await Illustrator().render(
            "A smiling little girl waving from a small red rocket, watercolor"
        )

        image_bytes, _ = decode_data_url(url)
        img = Image.open(BytesIO(image_bytes))
        assert img.size[0] == img.size[1]


# =============================================================================
# Narration
# =============================================================================

@pytest.mark.requires_google_api
@pytest.mark.slow
class TestNarrationReal:
    @pytest.mark.asyncio
    async def test_narrates_turkish_text(self):
        audio = await Narrator().synthesize("Bir varmış, bir yokmuş. Ayşe yıldızlara bakmış.")

        pcm = base64.b64decode(audio)
        # 16-bit samples, and at least half a second at 24kHz
        assert len(pcm) % 2 == 0
        assert len(pcm) > 24000


# =============================================================================
# Story text
# =============================================================================

@pytest.mark.requires_google_api
@pytest.mark.slow
class TestStoryWriterReal:
    def test_writes_complete_story(self):
        writer = StoryWriter(lm=get_story_lm())

        story = writer(UserInput(
            child_name="Ayşe",
            age_group=AgeGroup.TODDLER,
            gender=Gender.GIRL,
            theme="Uzay Macerası",
        ))

        assert STORY_CONSTANTS["min_pages"] <= story.page_count <= STORY_CONSTANTS["max_pages"]
        assert [p.page_number for p in story.pages] == list(range(1, story.page_count + 1))
        assert all(p.text and p.image_prompt for p in story.pages)
        assert "Ayşe" in story.to_formatted_string()
