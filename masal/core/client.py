"""
Asset generation client: the three remote calls the orchestrator needs.

generate_story_text raises GenerationFailed. generate_illustration and
generate_speech never raise: they return a placeholder URL or None.
"""

import asyncio
from typing import Optional

from .inputs import UserInput
from .modules.illustrator import Illustrator
from .modules.narrator import Narrator
from .modules.story_writer import StoryWriter
from .types import StoryData


class AssetClient:
    def __init__(
        self,
        story_writer: Optional[StoryWriter] = None,
        illustrator: Optional[Illustrator] = None,
        narrator: Optional[Narrator] = None,
    ):
        self.story_writer = story_writer or StoryWriter()
        self.illustrator = illustrator or Illustrator()
        self.narrator = narrator or Narrator()

    async def generate_story_text(self, user_input: UserInput) -> StoryData:
        # DSPy calls block, keep the event loop free
        return await asyncio.to_thread(self.story_writer, user_input)

    async def generate_illustration(self, prompt: str) -> str:
        return await self.illustrator.illustrate(prompt)

    async def generate_speech(self, text: str) -> Optional[str]:
        return await self.narrator.narrate(text)
