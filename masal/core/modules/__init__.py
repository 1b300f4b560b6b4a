# Story text
from .story_writer import StoryWriter, build_story

# Assets
from .illustrator import Illustrator, placeholder_image_url, to_data_url
from .narrator import Narrator

__all__ = [
    "StoryWriter",
    "build_story",
    "Illustrator",
    "placeholder_image_url",
    "to_data_url",
    "Narrator",
]
