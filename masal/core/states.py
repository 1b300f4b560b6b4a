"""
Application states surfaced to the presentation layer.

Each state carries only the data that is valid while it is active:
Reading carries the finished story, ErrorState carries the message, and so on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .types import StoryData


@dataclass(frozen=True)
class InputState:
    """Waiting for the form to be submitted."""

    remaining: int
    reset_time: Optional[int] = None  # epoch ms


@dataclass(frozen=True)
class GeneratingStory:
    """Story text is being written (indeterminate progress)."""


@dataclass(frozen=True)
class GeneratingImages:
    """Illustrations and narration are being generated."""

    percentage: float = 0.0


@dataclass(frozen=True)
class Reading:
    """The finished story is ready."""

    story: StoryData


@dataclass(frozen=True)
class CooldownState:
    """A new story can't be started yet."""

    seconds_left: int


@dataclass(frozen=True)
class ErrorState:
    """Generation failed; message is safe to show to the user."""

    message: str


AppState = Union[InputState, GeneratingStory, GeneratingImages, Reading, CooldownState, ErrorState]


class RejectionReason(str, Enum):
    QUOTA_EXHAUSTED = "quota_exhausted"


@dataclass(frozen=True)
class QuotaRejection:
    """Returned instead of starting a pipeline when no credit is left."""

    reason: RejectionReason
    message: str
    reset_time: Optional[int] = None
