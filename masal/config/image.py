"""
Image generation configuration for story illustrations.

Uses Nano Banana (Gemini 2.5 Flash Image) for cover and page illustrations.
"""

import base64
import logging
import os

from dotenv import load_dotenv
from google import genai
from google.genai.errors import ClientError, ServerError
from google.genai.types import GenerateContentConfig, ImageConfig, Modality
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log,
)

from .llm import get_api_key

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Image generation constants
IMAGE_CONSTANTS = {
    "model": os.getenv("MASAL_IMAGE_MODEL", "gemini-2.5-flash-image"),  # Nano Banana
    "aspect_ratio": "1:1",
    "placeholder_size": 512,
}

# Shown when an illustration cannot be generated
PLACEHOLDER_IMAGE_URL = "https://picsum.photos/{size}/{size}?blur=2&random={seed}"

# Network errors and server-side failures that should trigger retry
RETRYABLE_EXCEPTIONS = (
    ServerError,
    ConnectionError,
    TimeoutError,
    BrokenPipeError,
    OSError,
)


def _is_retryable(error: BaseException) -> bool:
    """Retry transient failures and rate limits, never other client errors."""
    if isinstance(error, ClientError):
        return getattr(error, "code", None) == 429
    return isinstance(error, RETRYABLE_EXCEPTIONS)


# Retry decorator for image and speech calls (works for sync and async functions)
image_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception(_is_retryable),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


def get_genai_client() -> genai.Client:
    """
    Get the Gemini client used for illustrations and narration.

    Uses GOOGLE_API_KEY (or GEMINI_API_KEY) from environment.
    """
    return genai.Client(api_key=get_api_key())


def get_image_model() -> str:
    """Get the image model ID."""
    return IMAGE_CONSTANTS["model"]


def get_image_config() -> GenerateContentConfig:
    """Get the default config for image generation."""
    return GenerateContentConfig(
        response_modalities=[Modality.IMAGE],
        image_config=ImageConfig(aspect_ratio=IMAGE_CONSTANTS["aspect_ratio"]),
    )


def extract_image_from_response(response) -> tuple[bytes, str]:
    """
    Extract image bytes from a Gemini API response.

    Args:
        response: The response from genai.Client.aio.models.generate_content()

    Returns:
        Tuple of (image bytes, mime type)

    Raises:
        ValueError: If no image found in response
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates and candidates[0].content:
        for part in candidates[0].content.parts or []:
            if getattr(part, "inline_data", None) and part.inline_data.data:
                data = part.inline_data.data
                image_bytes = base64.b64decode(data) if isinstance(data, str) else data
                return image_bytes, part.inline_data.mime_type or "image/png"

    raise ValueError("No image found in response")
