"""
Centralized domain types for the Masal story generator.

Story documents are created by the text phase with empty asset slots,
then filled in place by the orchestrator's asset phase.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StoryPage:
    """A single page of the story: text, illustration prompt and generated assets."""

    page_number: int
    text: str
    image_prompt: str
    image_url: Optional[str] = None  # data: URL or placeholder URL
    audio_base64: Optional[str] = None  # 24kHz mono 16-bit PCM, base64

    @property
    def has_narration(self) -> bool:
        return bool(self.audio_base64)

    def to_dict(self) -> dict:
        return {
            "pageNumber": self.page_number,
            "text": self.text,
            "imagePrompt": self.image_prompt,
            "imageUrl": self.image_url,
            "audioBase64": self.audio_base64,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StoryPage":
        return cls(
            page_number=data["pageNumber"],
            text=data["text"],
            image_prompt=data.get("imagePrompt", ""),
            image_url=data.get("imageUrl"),
            audio_base64=data.get("audioBase64"),
        )

    def __str__(self) -> str:
        return f"Page {self.page_number}: {self.text}"


@dataclass
class StoryData:
    """A complete story document.

    The number of pages is fixed once text generation returns; the asset
    phase only fills image_url/audio_base64 slots, never adds or reorders pages.
    """

    title: str
    summary: str
    cover_image_prompt: str
    pages: list[StoryPage] = field(default_factory=list)
    cover_image_url: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def asset_task_count(self) -> int:
        """Cover illustration plus one illustration and one narration per page."""
        return 2 * len(self.pages) + 1

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "summary": self.summary,
            "coverImagePrompt": self.cover_image_prompt,
            "coverImageUrl": self.cover_image_url,
            "pages": [page.to_dict() for page in self.pages],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StoryData":
        return cls(
            title=data["title"],
            summary=data.get("summary", ""),
            cover_image_prompt=data.get("coverImagePrompt", ""),
            cover_image_url=data.get("coverImageUrl"),
            pages=[StoryPage.from_dict(p) for p in data.get("pages", [])],
        )

    def to_formatted_string(self) -> str:
        """Plain-text rendering for terminals and logs."""
        lines = [f"# {self.title}", "", self.summary, ""]
        for page in self.pages:
            lines.append(f"## Page {page.page_number}")
            lines.append(page.text)
            lines.append("")
        return "\n".join(lines)
