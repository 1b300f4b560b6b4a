from .story_text import StoryTextSignature, PageDraft

__all__ = [
    "StoryTextSignature",
    "PageDraft",
]
