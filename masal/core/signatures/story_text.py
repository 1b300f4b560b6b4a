"""
DSPy Signature for writing a personalized children's story in one call.

The story is written around the child described in the form. Every page
comes with an English illustration prompt so the image model can draw it.
"""

import dspy
from pydantic import BaseModel, Field


class PageDraft(BaseModel):
    """One page as returned by the LM, before any assets exist."""

    page_number: int = Field(description="1-based page number")
    text: str = Field(description="The page's story text, in the story language")
    image_prompt: str = Field(description="English illustration prompt for this page")


class StoryTextSignature(dspy.Signature):
    """
    You are a professional children's book author and art director.
    Write a personalized children's tale starring the given child.

    RULES:
    - Write the story text in the requested language.
    - Follow the age group's language constraints exactly.
    - Never include fear, violence or bad examples.
    - The story must have exactly the requested number of pages.
    - Weave the moral into the plot; don't announce it.
    - Every page needs an image_prompt, written in ENGLISH, that describes the
      scene in detail and names the illustration style.
    - Every image_prompt must restate the hero's physical appearance the same way,
      so the child looks consistent from page to page.
    - Also write a cover_image_prompt for the book cover, with the same rules.
    """

    child_name: str = dspy.InputField(desc="Name of the hero")
    age_group: str = dspy.InputField(desc="Reader age group, e.g. 3-5")
    gender: str = dspy.InputField(desc="Hero's gender, or 'unspecified'")
    theme: str = dspy.InputField(desc="Category or theme of the story")
    advice: str = dspy.InputField(desc="Moral or lesson the story should carry")
    appearance: str = dspy.InputField(desc="Hero's physical appearance to repeat in every image prompt")
    age_constraints: str = dspy.InputField(desc="Language rules for this age group")
    language: str = dspy.InputField(desc="Language of the story text")
    page_count: int = dspy.InputField(desc="Exact number of pages to write")
    illustration_style: str = dspy.InputField(desc="Style to name in every image prompt")

    title: str = dspy.OutputField(desc="Story title, in the story language")
    summary: str = dspy.OutputField(desc="Two-sentence summary, in the story language")
    cover_image_prompt: str = dspy.OutputField(desc="English illustration prompt for the book cover")
    pages: list[PageDraft] = dspy.OutputField(desc="The story pages, in reading order")
