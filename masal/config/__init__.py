"""
Configuration module for the Masal story generator.

Re-exports all configuration for convenient access.
"""

from .llm import configure_dspy, get_story_lm, llm_retry
from .story import (
    STORY_CONSTANTS,
    AGE_CONSTRAINTS,
    DEFAULT_AGE_CONSTRAINT,
    COVER_PROMPT_SUFFIX,
    PAGE_PROMPT_SUFFIX,
    USER_MESSAGES,
)
from .image import (
    IMAGE_CONSTANTS,
    PLACEHOLDER_IMAGE_URL,
    get_genai_client,
    get_image_model,
    get_image_config,
    extract_image_from_response,
    image_retry,
)
from .speech import (
    SPEECH_CONSTANTS,
    get_speech_model,
    get_speech_config,
    extract_audio_from_response,
)
from .quota import QUOTA_CONSTANTS, PROMO_CODES, QUOTA_STORAGE_KEY, PROMO_STORAGE_KEY
from .paths import DATA_DIR, STORAGE_PATH, OUTPUT_DIR

__all__ = [
    # LLM
    "configure_dspy",
    "get_story_lm",
    "llm_retry",
    # Story
    "STORY_CONSTANTS",
    "AGE_CONSTRAINTS",
    "DEFAULT_AGE_CONSTRAINT",
    "COVER_PROMPT_SUFFIX",
    "PAGE_PROMPT_SUFFIX",
    "USER_MESSAGES",
    # Image
    "IMAGE_CONSTANTS",
    "PLACEHOLDER_IMAGE_URL",
    "get_genai_client",
    "get_image_model",
    "get_image_config",
    "extract_image_from_response",
    "image_retry",
    # Speech
    "SPEECH_CONSTANTS",
    "get_speech_model",
    "get_speech_config",
    "extract_audio_from_response",
    # Quota
    "QUOTA_CONSTANTS",
    "PROMO_CODES",
    "QUOTA_STORAGE_KEY",
    "PROMO_STORAGE_KEY",
    # Paths
    "DATA_DIR",
    "STORAGE_PATH",
    "OUTPUT_DIR",
]
