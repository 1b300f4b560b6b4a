"""Progress tracker for the asset phase."""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Type alias for progress callback: (completed, total, percentage)
ProgressCallback = Callable[[int, int, float], None]


class ProgressTracker:
    """
    Counts finished asset tasks and reports completed / total as a percentage.

    Every finished task counts, whether it produced an asset or fell back,
    so progress is monotonic and reaches 100 once every task has finished.
    Runs on a single event loop, so no locking is needed.
    """

    def __init__(self, total: int, on_progress: Optional[ProgressCallback] = None):
        if total <= 0:
            raise ValueError("total must be positive")
        self.total = total
        self.completed = 0
        self.on_progress = on_progress
        self.warnings: list[str] = []

    @property
    def percentage(self) -> float:
        return self.completed / self.total * 100

    def task_finished(self) -> None:
        """Record one finished task and notify the listener."""
        if self.completed >= self.total:
            logger.warning(f"Progress already complete ({self.completed}/{self.total}), ignoring extra task")
            return
        self.completed += 1
        if self.on_progress:
            try:
                self.on_progress(self.completed, self.total, self.percentage)
            except Exception as e:
                # Progress updates are non-critical
                logger.warning(f"Progress listener failed: {e}")

    def add_warning(self, warning: str) -> None:
        """Add a non-fatal warning."""
        self.warnings.append(warning)
