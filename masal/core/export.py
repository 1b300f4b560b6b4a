"""
Save a finished story to disk.

Layout of an exported story directory:
    story.json      text, prompts and relative asset paths
    cover.png       when the cover is a generated data: URL
    page_01.png ... page illustrations (same rule)
    page_01.wav ... narration, packaged as RIFF/WAVE
Placeholder illustrations are remote URLs and are kept as URLs in story.json.
"""

import base64
import binascii
import io
import json
import logging
import re
import wave
from pathlib import Path
from typing import Optional

from masal.config import SPEECH_CONSTANTS
from .types import StoryData

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)

MIME_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
}


def pcm_to_wav(
    pcm: bytes,
    sample_rate: int = SPEECH_CONSTANTS["sample_rate"],
    channels: int = SPEECH_CONSTANTS["channels"],
    sample_width: int = SPEECH_CONSTANTS["sample_width"],
) -> bytes:
    """Wrap raw little-endian PCM samples in a WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(sample_width)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()


def decode_data_url(url: str) -> Optional[tuple[bytes, str]]:
    """Return (bytes, mime type) for a base64 data: URL, None for anything else."""
    match = DATA_URL_PATTERN.match(url or "")
    if not match:
        return None
    try:
        return base64.b64decode(match.group("data")), match.group("mime")
    except (binascii.Error, ValueError):
        logger.warning("Malformed data URL, keeping it out of the export")
        return None


def _save_image(url: Optional[str], story_dir: Path, stem: str) -> Optional[str]:
    if not url:
        return None
    decoded = decode_data_url(url)
    if decoded is None:
        return url  # remote placeholder
    image_bytes, mime_type = decoded
    filename = stem + MIME_EXTENSIONS.get(mime_type, ".png")
    (story_dir / filename).write_bytes(image_bytes)
    return filename


def _save_audio(audio_base64: Optional[str], story_dir: Path, stem: str) -> Optional[str]:
    if not audio_base64:
        return None
    try:
        pcm = base64.b64decode(audio_base64)
    except (binascii.Error, ValueError):
        logger.warning(f"Malformed narration for {stem}, skipping")
        return None
    filename = f"{stem}.wav"
    (story_dir / filename).write_bytes(pcm_to_wav(pcm))
    return filename


def save_story(story: StoryData, story_dir: Path) -> Path:
    """
    Write the story and its assets into story_dir.

    Returns:
        Path to the written story.json
    """
    story_dir = Path(story_dir)
    story_dir.mkdir(parents=True, exist_ok=True)

    pages_data = []
    for page in story.pages:
        stem = f"page_{page.page_number:02d}"
        pages_data.append({
            "pageNumber": page.page_number,
            "text": page.text,
            "imagePrompt": page.image_prompt,
            "image": _save_image(page.image_url, story_dir, stem),
            "audio": _save_audio(page.audio_base64, story_dir, stem),
        })

    story_data = {
        "title": story.title,
        "summary": story.summary,
        "coverImagePrompt": story.cover_image_prompt,
        "cover": _save_image(story.cover_image_url, story_dir, "cover"),
        "pages": pages_data,
    }

    story_path = story_dir / "story.json"
    story_path.write_text(json.dumps(story_data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Story '{story.title}' saved to {story_dir}")
    return story_path


def safe_dirname(name: str) -> str:
    """Convert a title to a safe directory name."""
    return "".join(c if c.isalnum() else "_" for c in name).strip("_") or "story"
