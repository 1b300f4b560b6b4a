"""Unit tests for story types and the request form model."""

import pytest
from pydantic import ValidationError

from masal.core.inputs import AgeGroup, Gender, UserInput
from masal.core.types import StoryData


# =============================================================================
# StoryData
# =============================================================================


class TestStoryData:
    def test_asset_task_count(self, story_factory):
        assert story_factory(4).asset_task_count == 9
        assert story_factory(5).asset_task_count == 11

    def test_dict_uses_camel_case(self, sample_story):
        data = sample_story.to_dict()

        assert data["coverImagePrompt"] == "A little girl in a rocket"
        assert data["coverImageUrl"] is None
        assert data["pages"][0]["pageNumber"] == 1
        assert data["pages"][0]["audioBase64"] is None

    def test_from_dict_restores_story(self, sample_story):
        sample_story.pages[2].audio_base64 = "AAAA"

        restored = StoryData.from_dict(sample_story.to_dict())

        assert restored == sample_story
        assert restored.pages[2].has_narration
        assert not restored.pages[0].has_narration

    def test_formatted_string_lists_pages(self, sample_story):
        text = sample_story.to_formatted_string()

        assert text.startswith("# Ayşe ve Yıldızlar")
        assert "## Page 5" in text
        assert "Sayfa 3 metni." in text


# =============================================================================
# UserInput
# =============================================================================


class TestUserInput:
    def test_defaults(self):
        user_input = UserInput(child_name="Ayşe")

        assert user_input.age_group == AgeGroup.CHILD
        assert user_input.gender == Gender.NEUTRAL
        assert user_input.theme == ""
        assert user_input.advice == ""

    def test_name_is_stripped(self):
        assert UserInput(child_name="  Ayşe ").child_name == "Ayşe"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError):
            UserInput(child_name=name)

    def test_age_group_from_form_value(self):
        assert UserInput(child_name="Ayşe", age_group="3-5").age_group == AgeGroup.TODDLER

    def test_unknown_age_group_rejected(self):
        with pytest.raises(ValidationError):
            UserInput(child_name="Ayşe", age_group="12-14")

    def test_is_frozen(self):
        user_input = UserInput(child_name="Ayşe")
        with pytest.raises(ValidationError):
            user_input.child_name = "Mert"

    def test_appearance_uses_colors(self):
        user_input = UserInput(child_name="Ayşe", hair_color="kızıl", eye_color="yeşil")
        assert user_input.appearance() == "Character physical appearance: kızıl hair, yeşil eyes."

    def test_blank_colors_fall_back_to_age_and_gender(self):
        user_input = UserInput(
            child_name="Ayşe", age_group=AgeGroup.TODDLER, gender=Gender.GIRL, hair_color="  "
        )

        assert user_input.hair_color is None
        assert user_input.appearance() == "a 3-5 year old girl child"
