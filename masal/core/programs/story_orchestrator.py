"""
Main program for generating an illustrated, narrated story.

Pipeline:
1. Check quota (a rejection is returned as a value, state unchanged)
2. Write the story text (one LM call; failure aborts, no credit used)
3. Consume one credit and arm the cooldown
4. Generate the cover illustration and, for every page, an illustration
   and a narration, all concurrently (2 x pages + 1 tasks)
5. Merge the assets into the story by page and hand it to the reader

Asset failures never abort the pipeline: each task falls back (placeholder
image, no audio) and still counts toward progress. Only an unexpected error
in the orchestration itself ends in ErrorState, with a generic message;
the details go to the log.
"""

import asyncio
import logging
import time
import uuid
from typing import Callable, Optional, Union

from masal.config import QUOTA_CONSTANTS, COVER_PROMPT_SUFFIX, PAGE_PROMPT_SUFFIX, USER_MESSAGES
from masal.logging import story_logger
from ..client import AssetClient
from ..cooldown import CooldownGate
from ..inputs import UserInput
from ..modules.illustrator import placeholder_image_url
from ..progress import ProgressTracker
from ..quota import PromoResult, QuotaLedger, QuotaStatus
from ..states import (
    AppState,
    CooldownState,
    ErrorState,
    GeneratingImages,
    GeneratingStory,
    InputState,
    QuotaRejection,
    Reading,
    RejectionReason,
)
from ..types import StoryData, StoryPage

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = USER_MESSAGES["generation_failed"]
QUOTA_EXHAUSTED_MESSAGE = USER_MESSAGES["quota_exhausted"]

StateListener = Callable[[AppState], None]


def cover_prompt(story: StoryData) -> str:
    return f"{story.cover_image_prompt} . {COVER_PROMPT_SUFFIX}"


def page_prompt(page: StoryPage) -> str:
    return f"{page.image_prompt} . {PAGE_PROMPT_SUFFIX}"


class StoryOrchestrator:
    """
    Drives one session from the form to the finished story.

    Args:
        client: Remote generation calls
        ledger: Quota ledger; the orchestrator is the only caller that consumes credit
        cooldown: Gate armed after each successful story
        cooldown_seconds: How long the gate stays locked
        on_state: Called with every new AppState (including each progress update)
    """

    def __init__(
        self,
        client: AssetClient,
        ledger: QuotaLedger,
        cooldown: Optional[CooldownGate] = None,
        cooldown_seconds: float = QUOTA_CONSTANTS["cooldown_seconds"],
        on_state: Optional[StateListener] = None,
    ):
        self.client = client
        self.ledger = ledger
        self.cooldown = cooldown or CooldownGate()
        self.cooldown_seconds = cooldown_seconds
        self.on_state = on_state
        self.state: AppState = self._input_state()

    # =========================================================================
    # State
    # =========================================================================

    def _set_state(self, state: AppState) -> None:
        self.state = state
        if self.on_state:
            try:
                self.on_state(state)
            except Exception as e:
                # The transition stands even if the listener can't render it
                logger.warning(f"State listener failed on {type(state).__name__}: {e}")

    def _input_state(self) -> InputState:
        quota = self.ledger.check_quota()
        return InputState(remaining=quota.remaining, reset_time=quota.reset_time)

    def _fail(self) -> ErrorState:
        state = ErrorState(message=GENERIC_ERROR_MESSAGE)
        self._set_state(state)
        return state

    @property
    def is_generating(self) -> bool:
        return isinstance(self.state, (GeneratingStory, GeneratingImages))

    # =========================================================================
    # Quota passthrough for the presentation layer
    # =========================================================================

    def quota_status(self) -> QuotaStatus:
        return self.ledger.check_quota()

    def apply_promo(self, code: str) -> PromoResult:
        result = self.ledger.apply_promo(code)
        if result.success and isinstance(self.state, InputState):
            self._set_state(self._input_state())
        return result

    # =========================================================================
    # Navigation
    # =========================================================================

    def return_to_input(self) -> Union[InputState, CooldownState]:
        """Go back to the form, or to the cooldown screen while the gate is locked."""
        if self.cooldown.is_locked():
            state = CooldownState(seconds_left=self.cooldown.seconds_left())
        else:
            state = self._input_state()
        self._set_state(state)
        return state

    async def wait_for_cooldown(self) -> InputState:
        """Count the cooldown down once per tick, then enter the form."""
        await self.cooldown.wait(
            on_tick=lambda seconds: self._set_state(CooldownState(seconds_left=seconds))
        )
        state = self._input_state()
        self._set_state(state)
        return state

    # =========================================================================
    # Pipeline
    # =========================================================================

    async def submit(self, user_input: UserInput) -> Union[Reading, ErrorState, QuotaRejection]:
        """
        Run the whole pipeline for one form submission.

        Returns:
            Reading with the finished story, ErrorState on failure, or a
            QuotaRejection (without any state change) when no credit is left
        """
        if self.is_generating:
            raise RuntimeError("A story is already being generated")

        quota = self.ledger.check_quota()
        if quota.exhausted:
            logger.info("Submission rejected: quota exhausted")
            return QuotaRejection(
                reason=RejectionReason.QUOTA_EXHAUSTED,
                message=QUOTA_EXHAUSTED_MESSAGE,
                reset_time=quota.reset_time,
            )

        story_id = uuid.uuid4().hex[:12]
        start_time = time.time()
        story_logger.generation_started(story_id, user_input.child_name)
        self._set_state(GeneratingStory())

        # Text phase: nothing else can start without it
        try:
            story = await self.client.generate_story_text(user_input)
        except Exception as e:
            story_logger.generation_failed(story_id, e, stage="story_text")
            return self._fail()
        story_logger.stage_completed(story_id, "story_text", time.time() - start_time)

        try:
            # Credit is spent before assets start, so abandoning mid-way still costs it
            self.ledger.decrement_quota()
            self.cooldown.arm(self.cooldown_seconds)

            self._set_state(GeneratingImages(percentage=0.0))
            assets_start = time.time()
            await self._generate_assets(story_id, story)
            story_logger.stage_completed(story_id, "assets", time.time() - assets_start)
        except Exception as e:
            story_logger.generation_failed(story_id, e, stage="assets")
            return self._fail()

        story_logger.generation_completed(story_id, time.time() - start_time)
        state = Reading(story=story)
        self._set_state(state)
        return state

    async def _generate_assets(self, story_id: str, story: StoryData) -> None:
        """Fill every asset slot of the story. Individual task failures fall back."""
        tracker = ProgressTracker(
            total=story.asset_task_count,
            on_progress=lambda completed, total, percentage: self._set_state(
                GeneratingImages(percentage=percentage)
            ),
        )

        async def cover_task() -> str:
            try:
                url = await self.client.generate_illustration(cover_prompt(story))
                if not url:
                    raise ValueError("empty image reference")
            except Exception as e:
                story_logger.asset_fallback(story_id, "cover", e)
                url = placeholder_image_url()
            finally:
                tracker.task_finished()
            return url

        async def image_task(page: StoryPage) -> str:
            try:
                url = await self.client.generate_illustration(page_prompt(page))
                if not url:
                    raise ValueError("empty image reference")
            except Exception as e:
                story_logger.asset_fallback(story_id, "image", e, page_number=page.page_number)
                tracker.add_warning(f"Page {page.page_number}: placeholder illustration")
                url = placeholder_image_url()
            finally:
                tracker.task_finished()
            return url

        async def audio_task(page: StoryPage) -> Optional[str]:
            try:
                audio = await self.client.generate_speech(page.text)
            except Exception as e:
                story_logger.asset_fallback(story_id, "audio", e, page_number=page.page_number)
                tracker.add_warning(f"Page {page.page_number}: no narration")
                audio = None
            finally:
                tracker.task_finished()
            return audio or None

        async def page_task(page: StoryPage) -> tuple[str, Optional[str]]:
            image_url, audio = await asyncio.gather(image_task(page), audio_task(page))
            return image_url, audio

        cover_url, page_assets = await asyncio.gather(
            cover_task(),
            asyncio.gather(*(page_task(page) for page in story.pages)),
        )

        # gather preserves argument order, so assets land on their own page
        story.cover_image_url = cover_url
        for page, (image_url, audio) in zip(story.pages, page_assets):
            page.image_url = image_url
            page.audio_base64 = audio

        if tracker.warnings:
            logger.info(f"Story {story_id} finished with {len(tracker.warnings)} fallback asset(s)")
