"""
DSPy Module for writing the story text.

One LM call produces the title, summary, cover prompt and every page.
The result is validated before anything downstream sees it: a story with
missing fields, empty pages or the wrong number of pages is rejected
with GenerationFailed, never patched up.
"""

import logging
from typing import Any, Optional

import dspy

from masal.config import llm_retry, STORY_CONSTANTS, AGE_CONSTRAINTS, DEFAULT_AGE_CONSTRAINT
from ..errors import GenerationFailed
from ..inputs import UserInput
from ..signatures.story_text import StoryTextSignature
from ..types import StoryData, StoryPage

logger = logging.getLogger(__name__)


def _field(source: Any, name: str) -> Any:
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def _required_text(source: Any, name: str) -> str:
    value = _field(source, name)
    if not isinstance(value, str) or not value.strip():
        raise GenerationFailed(f"Story is missing '{name}'")
    return value.strip()


def build_story(
    prediction: Any,
    min_pages: int = STORY_CONSTANTS["min_pages"],
    max_pages: int = STORY_CONSTANTS["max_pages"],
) -> StoryData:
    """
    Turn an LM prediction into a StoryData with empty asset slots.

    Pages are put in the order of their reported numbers and renumbered
    1..N, so downstream code can rely on strictly increasing page numbers.

    Raises:
        GenerationFailed: if any required field is missing or empty, or the
            page count is outside [min_pages, max_pages]
    """
    if prediction is None:
        raise GenerationFailed("Empty response from story model")

    title = _required_text(prediction, "title")
    summary = _required_text(prediction, "summary")
    cover_image_prompt = _required_text(prediction, "cover_image_prompt")

    raw_pages = _field(prediction, "pages")
    if not isinstance(raw_pages, (list, tuple)) or not raw_pages:
        raise GenerationFailed("Story has no pages")
    if not min_pages <= len(raw_pages) <= max_pages:
        raise GenerationFailed(
            f"Story has {len(raw_pages)} pages, expected {min_pages}-{max_pages}"
        )

    drafts = []
    for position, raw in enumerate(raw_pages):
        number = _field(raw, "page_number")
        try:
            number = int(number)
        except (TypeError, ValueError):
            number = position + 1
        drafts.append((number, position, _required_text(raw, "text"), _required_text(raw, "image_prompt")))

    # Stable on ties: the LM's own order decides
    drafts.sort(key=lambda d: (d[0], d[1]))

    pages = [
        StoryPage(page_number=i, text=text, image_prompt=image_prompt)
        for i, (_, _, text, image_prompt) in enumerate(drafts, start=1)
    ]

    return StoryData(
        title=title,
        summary=summary,
        cover_image_prompt=cover_image_prompt,
        pages=pages,
    )


class StoryWriter(dspy.Module):
    """
    Write a personalized story for the child described in a UserInput.

    Args:
        lm: Optional explicit LM to use. If provided, bypasses global
            dspy.configure() state. Useful for testing and explicit control.
        page_count: Number of pages to ask the LM for
    """

    def __init__(
        self,
        lm: Optional[dspy.LM] = None,
        page_count: int = STORY_CONSTANTS["target_page_count"],
    ):
        super().__init__()
        self.generate = dspy.Predict(StoryTextSignature)
        self.page_count = page_count
        self._lm = lm

    def _predict(self, user_input: UserInput):
        return llm_retry(self.generate)(
            child_name=user_input.child_name,
            age_group=user_input.age_group.value,
            gender=user_input.gender.value,
            theme=user_input.theme or "free choice",
            advice=user_input.advice or "free choice",
            appearance=user_input.appearance(),
            age_constraints=AGE_CONSTRAINTS.get(user_input.age_group.value, DEFAULT_AGE_CONSTRAINT),
            language=STORY_CONSTANTS["language"],
            page_count=self.page_count,
            illustration_style=STORY_CONSTANTS["illustration_style"],
        )

    def forward(self, user_input: UserInput) -> StoryData:
        """
        Generate the story text.

        Raises:
            GenerationFailed: for any failure, including LM/network errors
        """
        try:
            if self._lm is not None:
                with dspy.context(lm=self._lm):
                    prediction = self._predict(user_input)
            else:
                prediction = self._predict(user_input)
        except Exception as e:
            raise GenerationFailed(f"Story model call failed: {type(e).__name__}: {e}") from e

        story = build_story(prediction)
        logger.info(f"Story text generated: '{story.title}' with {story.page_count} pages")
        return story
