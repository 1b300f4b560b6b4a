"""
Module for generating cover and page illustrations using Nano Banana.

Two call styles:
- render(): raises IllustrationFailed when no image comes back
- illustrate(): never raises, returns a placeholder URL instead
"""

import base64
import logging
import random
from typing import Optional

from google import genai
from google.genai.types import GenerateContentConfig

from masal.config import (
    get_genai_client,
    get_image_model,
    get_image_config,
    extract_image_from_response,
    image_retry,
    IMAGE_CONSTANTS,
    PLACEHOLDER_IMAGE_URL,
)
from ..errors import IllustrationFailed

logger = logging.getLogger(__name__)


def placeholder_image_url() -> str:
    """A blurred stock image; random seed so pages don't all look identical."""
    return PLACEHOLDER_IMAGE_URL.format(
        size=IMAGE_CONSTANTS["placeholder_size"],
        seed=random.random(),
    )


def to_data_url(image_bytes: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"


class Illustrator:
    """Generate a single illustration from a prompt."""

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        model: Optional[str] = None,
        config: Optional[GenerateContentConfig] = None,
    ):
        self._client = client
        self.model = model or get_image_model()
        self.config = config or get_image_config()

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = get_genai_client()
        return self._client

    @image_retry
    async def _generate(self, prompt: str):
        return await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self.config,
        )

    async def render(self, prompt: str) -> str:
        """
        Generate an illustration and return it as a data: URL.

        Raises:
            IllustrationFailed: if the model call fails or returns no image
        """
        try:
            response = await self._generate(prompt)
            image_bytes, mime_type = extract_image_from_response(response)
        except Exception as e:
            raise IllustrationFailed(f"Image generation failed: {type(e).__name__}: {e}") from e
        return to_data_url(image_bytes, mime_type)

    async def illustrate(self, prompt: str) -> str:
        """Generate an illustration, falling back to a placeholder on any failure."""
        try:
            return await self.render(prompt)
        except IllustrationFailed as e:
            logger.error(f"Image generation error, using placeholder: {e}")
            return placeholder_image_url()
