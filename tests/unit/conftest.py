"""Pytest fixtures for unit tests."""

import asyncio
from typing import Optional

import pytest

from masal.core.cooldown import CooldownGate
from masal.core.inputs import AgeGroup, UserInput
from masal.core.quota import QuotaLedger
from masal.core.storage import MemoryStore
from masal.core.types import StoryData, StoryPage

# 2026-01-01T00:00:00Z
START_TIME = 1767225600.0
SIX_HOURS_MS = 6 * 60 * 60 * 1000


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    @property
    def now_ms(self) -> int:
        return int(self.now * 1000)


def make_story(page_count: int = 5) -> StoryData:
    return StoryData(
        title="Ayşe ve Yıldızlar",
        summary="Ayşe uzaya gider. Yeni arkadaşlar edinir.",
        cover_image_prompt="A little girl in a rocket",
        pages=[
            StoryPage(
                page_number=i,
                text=f"Sayfa {i} metni.",
                image_prompt=f"Scene {i}: a little girl among the stars",
            )
            for i in range(1, page_count + 1)
        ],
    )


class FakeAssetClient:
    """
    Stand-in for AssetClient.

    Args:
        page_count: Pages in the story returned by the text phase (fresh per call)
        story_error: Raised by the text phase instead
        failing_images: Page numbers whose illustration raises ("cover" for the cover)
        failing_audio: Page numbers whose narration raises
        delays: Per-prompt-key sleep, to make tasks finish out of order
    """

    def __init__(
        self,
        page_count: int = 5,
        story_error: Optional[Exception] = None,
        failing_images: Optional[set] = None,
        failing_audio: Optional[set] = None,
        delays: Optional[dict] = None,
    ):
        self.page_count = page_count
        self.story_error = story_error
        self.failing_images = failing_images or set()
        self.failing_audio = failing_audio or set()
        self.delays = delays or {}
        self.story_calls = 0
        self.illustration_prompts: list[str] = []
        self.speech_texts: list[str] = []

    async def generate_story_text(self, user_input: UserInput) -> StoryData:
        self.story_calls += 1
        if self.story_error:
            raise self.story_error
        return make_story(self.page_count)

    def _page_for_prompt(self, prompt: str):
        if prompt.startswith("A little girl in a rocket"):
            return "cover"
        return int(prompt.split(":")[0].replace("Scene ", ""))

    async def generate_illustration(self, prompt: str) -> str:
        self.illustration_prompts.append(prompt)
        key = self._page_for_prompt(prompt)
        await asyncio.sleep(self.delays.get(("image", key), 0))
        if key in self.failing_images:
            raise RuntimeError(f"image failed for {key}")
        return f"data:image/png;base64,aW1hZ2Ut{key}"

    async def generate_speech(self, text: str) -> Optional[str]:
        self.speech_texts.append(text)
        page_number = int(text.split()[1])
        await asyncio.sleep(self.delays.get(("audio", page_number), 0))
        if page_number in self.failing_audio:
            raise RuntimeError(f"audio failed for page {page_number}")
        return f"YXVkaW8t{page_number}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def ledger(store, clock):
    return QuotaLedger(store, clock=clock, limit=1, reset_period_ms=SIX_HOURS_MS)


@pytest.fixture
def cooldown(clock):
    async def fake_sleep(seconds: float) -> None:
        clock.advance(seconds)

    return CooldownGate(clock=clock, sleep=fake_sleep)


@pytest.fixture
def sample_story():
    return make_story()


@pytest.fixture
def sample_input():
    return UserInput(child_name="Ayşe", age_group=AgeGroup.TODDLER, theme="Uzay Macerası")


@pytest.fixture
def story_factory():
    return make_story


@pytest.fixture
def fake_client_factory():
    return FakeAssetClient
