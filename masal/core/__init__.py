# Masal Story Generator - Core Domain

# Re-export types for convenient access
from .types import StoryPage, StoryData
from .inputs import AgeGroup, Gender, UserInput
from .errors import MasalError, GenerationFailed, IllustrationFailed, SpeechFailed
from .states import (
    AppState,
    InputState,
    GeneratingStory,
    GeneratingImages,
    Reading,
    CooldownState,
    ErrorState,
    QuotaRejection,
    RejectionReason,
)

__all__ = [
    "StoryPage",
    "StoryData",
    "AgeGroup",
    "Gender",
    "UserInput",
    "MasalError",
    "GenerationFailed",
    "IllustrationFailed",
    "SpeechFailed",
    "AppState",
    "InputState",
    "GeneratingStory",
    "GeneratingImages",
    "Reading",
    "CooldownState",
    "ErrorState",
    "QuotaRejection",
    "RejectionReason",
]
