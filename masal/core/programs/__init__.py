from .story_orchestrator import StoryOrchestrator, GENERIC_ERROR_MESSAGE, QUOTA_EXHAUSTED_MESSAGE

__all__ = [
    "StoryOrchestrator",
    "GENERIC_ERROR_MESSAGE",
    "QUOTA_EXHAUSTED_MESSAGE",
]
