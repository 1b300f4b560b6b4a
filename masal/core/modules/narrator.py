"""
Module for narrating page text with Gemini TTS.

synthesize() raises SpeechFailed; narrate() returns None instead, so a page
simply has no narration when speech generation fails.
"""

import logging
from typing import Optional

from google import genai
from google.genai.types import GenerateContentConfig

from masal.config import (
    get_genai_client,
    get_speech_model,
    get_speech_config,
    extract_audio_from_response,
    image_retry,
)
from ..errors import SpeechFailed

logger = logging.getLogger(__name__)


class Narrator:
    """Turn page text into base64 PCM audio (24kHz, mono, 16-bit)."""

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        model: Optional[str] = None,
        config: Optional[GenerateContentConfig] = None,
    ):
        self._client = client
        self.model = model or get_speech_model()
        self.config = config or get_speech_config()

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = get_genai_client()
        return self._client

    @image_retry
    async def _generate(self, text: str):
        return await self.client.aio.models.generate_content(
            model=self.model,
            contents=text,
            config=self.config,
        )

    async def synthesize(self, text: str) -> str:
        """
        Narrate text.

        Raises:
            SpeechFailed: if text is empty, or the model call fails or returns no audio
        """
        if not text or not text.strip():
            raise SpeechFailed("No text to narrate")
        try:
            response = await self._generate(text)
            return extract_audio_from_response(response)
        except Exception as e:
            raise SpeechFailed(f"Speech generation failed: {type(e).__name__}: {e}") from e

    async def narrate(self, text: str) -> Optional[str]:
        """Narrate text, or return None on any failure."""
        try:
            return await self.synthesize(text)
        except SpeechFailed as e:
            logger.error(f"TTS error, page will have no narration: {e}")
            return None
