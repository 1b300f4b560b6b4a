"""Pydantic models for the story request form."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgeGroup(str, Enum):
    """Reader age group; values are what the form shows."""

    TODDLER = "3-5"
    CHILD = "6-8"
    PRETEEN = "9+"


class Gender(str, Enum):
    GIRL = "girl"
    BOY = "boy"
    NEUTRAL = "unspecified"


class UserInput(BaseModel):
    """Everything the form collects about the child and the story.

    Frozen: a submitted request is never edited.
    """

    model_config = ConfigDict(frozen=True)

    child_name: str = Field(
        ...,
        min_length=1,
        max_length=60,
        description="Name of the story's hero",
        examples=["Ayşe", "Mert"],
    )
    age_group: AgeGroup = AgeGroup.CHILD
    gender: Gender = Gender.NEUTRAL
    theme: str = Field(
        "",
        max_length=200,
        description="Category or theme of the story",
        examples=["Uzay Macerası", "Orman Dostları"],
    )
    advice: str = Field(
        "",
        max_length=500,
        description="Moral or lesson the story should carry",
    )
    hair_color: Optional[str] = Field(None, max_length=40)
    eye_color: Optional[str] = Field(None, max_length=40)

    @field_validator("child_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("child_name must not be blank")
        return value

    @field_validator("hair_color", "eye_color")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def appearance(self) -> str:
        """Physical description to repeat in every illustration prompt."""
        parts = []
        if self.hair_color:
            parts.append(f"{self.hair_color} hair")
        if self.eye_color:
            parts.append(f"{self.eye_color} eyes")
        if parts:
            return "Character physical appearance: " + ", ".join(parts) + "."
        return f"a {self.age_group.value} year old {self.gender.value} child"
