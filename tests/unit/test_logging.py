"""Unit tests for structured logging."""

import json
import logging

from masal.logging import JSONFormatter, StoryLogger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("story_generation", logging.INFO, __file__, 1, "Hikaye hazır", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_includes_structured_fields(self):
        output = json.loads(JSONFormatter().format(_record(story_id="abc", stage="assets", duration=1.5)))

        assert output["message"] == "Hikaye hazır"
        assert output["level"] == "INFO"
        assert output["story_id"] == "abc"
        assert output["stage"] == "assets"
        assert output["duration"] == 1.5

    def test_keeps_non_ascii_readable(self):
        assert "Hikaye hazır" in JSONFormatter().format(_record())

    def test_omits_absent_fields(self):
        output = json.loads(JSONFormatter().format(_record()))
        assert "story_id" not in output


class TestStoryLogger:
    def test_asset_fallback_is_a_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="story_generation"):
            StoryLogger().asset_fallback("abc", "audio", RuntimeError("quota"), page_number=3)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.page_number == 3
        assert record.error_type == "RuntimeError"

    def test_generation_failed_records_stage(self, caplog):
        with caplog.at_level(logging.ERROR, logger="story_generation"):
            StoryLogger().generation_failed("abc", ValueError("bad"), stage="story_text")

        record = caplog.records[-1]
        assert record.failed_at_stage == "story_text"
        assert record.exc_info is not None
