"""Structured logging infrastructure.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a StoryLogger helper for story generation events.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

# Extra record fields copied into JSON output when present
STRUCTURED_FIELDS = (
    "story_id",
    "stage",
    "duration",
    "error_type",
    "failed_at_stage",
    "asset",
    "page_number",
    "remaining",
    "reset_time",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field_name in STRUCTURED_FIELDS:
            if hasattr(record, field_name):
                log_data[field_name] = getattr(record, field_name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(json_format: bool = True, level: int = logging.INFO) -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)


class StoryLogger:
    """Logger for story generation events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("story_generation")

    def generation_started(self, story_id: str, child_name: str) -> None:
        self.logger.info(
            f"Story generation started for {child_name}",
            extra={"story_id": story_id, "stage": "started"},
        )

    def stage_completed(self, story_id: str, stage: str, duration: Optional[float] = None) -> None:
        extra = {"story_id": story_id, "stage": stage}
        if duration:
            extra["duration"] = round(duration, 2)
        self.logger.info(f"Stage completed: {stage}", extra=extra)

    def generation_completed(self, story_id: str, duration: float) -> None:
        self.logger.info(
            "Story generation completed",
            extra={"story_id": story_id, "stage": "completed", "duration": round(duration, 2)},
        )

    def generation_failed(self, story_id: str, error: Exception, stage: Optional[str] = None) -> None:
        extra = {"story_id": story_id, "stage": "failed", "error_type": type(error).__name__}
        if stage:
            extra["failed_at_stage"] = stage
        self.logger.error(f"Story generation failed: {error}", extra=extra, exc_info=error)

    def asset_fallback(
        self,
        story_id: str,
        asset: str,
        error: Exception,
        page_number: Optional[int] = None,
    ) -> None:
        where = f"page {page_number}" if page_number is not None else "cover"
        self.logger.warning(
            f"Failed to generate {asset} for {where}, using fallback: {error}",
            extra={
                "story_id": story_id,
                "asset": asset,
                "page_number": page_number,
                "error_type": type(error).__name__,
            },
        )

    def quota_changed(self, action: str, remaining: int, reset_time: Optional[int]) -> None:
        self.logger.info(
            f"Quota {action}: {remaining} remaining",
            extra={"remaining": remaining, "reset_time": reset_time},
        )


# Global story logger instance
story_logger = StoryLogger()
