"""
Speech synthesis configuration for page narration.

Gemini TTS returns raw PCM: 24kHz, mono, signed 16-bit little-endian.
"""

import base64
import os

from dotenv import load_dotenv
from google.genai.types import (
    GenerateContentConfig,
    Modality,
    PrebuiltVoiceConfig,
    SpeechConfig,
    VoiceConfig,
)

# Load environment variables from .env file
load_dotenv()

SPEECH_CONSTANTS = {
    "model": os.getenv("MASAL_TTS_MODEL", "gemini-2.5-flash-preview-tts"),
    "voice": os.getenv("MASAL_TTS_VOICE", "Kore"),  # warm storytelling tone
    "sample_rate": 24000,
    "channels": 1,
    "sample_width": 2,  # bytes per sample (16-bit)
}


def get_speech_model() -> str:
    """Get the TTS model ID."""
    return SPEECH_CONSTANTS["model"]


def get_speech_config() -> GenerateContentConfig:
    """Get the config for single-voice narration."""
    return GenerateContentConfig(
        response_modalities=[Modality.AUDIO],
        speech_config=SpeechConfig(
            voice_config=VoiceConfig(
                prebuilt_voice_config=PrebuiltVoiceConfig(voice_name=SPEECH_CONSTANTS["voice"]),
            ),
        ),
    )


def extract_audio_from_response(response) -> str:
    """
    Extract base64-encoded PCM audio from a Gemini TTS response.

    Raises:
        ValueError: If no audio found in response
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates and candidates[0].content:
        for part in candidates[0].content.parts or []:
            if getattr(part, "inline_data", None) and part.inline_data.data:
                data = part.inline_data.data
                return data if isinstance(data, str) else base64.b64encode(data).decode("ascii")

    raise ValueError("No audio data returned")
