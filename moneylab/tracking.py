"""Usage tracking collaborator, notified after a calculation completes.

Analytics only: a tracker never sees or changes calculation results.
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class UsageTracker(Protocol):
    def record(self, calculator_id: str) -> None:  # pragma: no cover - interface
        ...


class LoggingUsageTracker:
    """Default tracker: one INFO line per completed calculation."""

    def record(self, calculator_id: str) -> None:
        logger.info("Calculator used: %s", calculator_id)
