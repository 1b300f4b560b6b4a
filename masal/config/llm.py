"""
LLM configuration for story text generation.

Story text is written by a DSPy program running on Gemini. Includes:
- 120s timeout per LLM call to fail fast on hanging connections
- Retry with exponential backoff for transient network errors
"""

import os
import logging
from dotenv import load_dotenv
import dspy
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Timeout for LLM calls (seconds)
LLM_TIMEOUT = 120

STORY_LM_MODEL = os.getenv("MASAL_STORY_MODEL", "gemini/gemini-2.5-flash")

# Network errors that should trigger retry
RETRYABLE_EXCEPTIONS = (
    ConnectionError,
    TimeoutError,
    BrokenPipeError,
    OSError,  # Catches [Errno 32] Broken pipe
)


def get_api_key() -> str:
    """Get the Gemini API key (GOOGLE_API_KEY, falling back to GEMINI_API_KEY)."""
    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
    if not api_key:
        raise ValueError(
            "GOOGLE_API_KEY not found in environment. Set it (or GEMINI_API_KEY) in .env file."
        )
    return api_key


def get_story_lm() -> dspy.LM:
    """
    Get the LM used to write story text.

    Includes 120s timeout per call.
    """
    return dspy.LM(
        STORY_LM_MODEL,
        api_key=get_api_key(),
        max_tokens=8192,
        temperature=1.0,
        timeout=LLM_TIMEOUT,
    )


# Retry decorator for LLM calls with network errors
llm_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=2, min=2, max=10),
    retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


def configure_dspy() -> None:
    """
    Configure DSPy with the story LM globally.

    Note:
        For testing or when you need explicit control, prefer passing
        an LM directly to StoryWriter(lm=...) instead of using
        this global configuration.
    """
    dspy.configure(lm=get_story_lm())
