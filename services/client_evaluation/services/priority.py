"""
Follow-up Priority
==================

Staleness-based follow-up priority for evaluations.

Priority bands, on whole months elapsed since the evaluation was created:
- >= 12 months: High
- >= 6 months:  Medium
- >= 3 months:  Low
- <  3 months:  Update
- unparseable input: Unknown

Version: 0.1.0
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from shared.config import settings
from shared.logging import get_logger
from shared.models.evaluation import Priority


logger = get_logger(__name__)


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class PriorityThresholds:
    """Minimum age in months for each priority."""

    high_months: int = 12
    medium_months: int = 6
    low_months: int = 3

    @classmethod
    def from_settings(cls) -> "PriorityThresholds":
        return cls(
            high_months=settings.priority.high_months,
            medium_months=settings.priority.medium_months,
            low_months=settings.priority.low_months,
        )


def to_utc_datetime(value: Any) -> datetime:
    """
    Coerce a datetime, date or date string to an aware UTC datetime.

    Naive values are read as UTC.

    Raises:
        TypeError: unsupported type
        ValueError: unparseable string
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        moment = date_parser.parse(value)
    else:
        raise TypeError(f"Cannot read a date from {type(value).__name__}")

    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def months_between(start: datetime, end: datetime) -> int:
    """Whole calendar months from start to end, negative if end is earlier."""
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


class PriorityCalculator:
    """Buckets evaluation age into a follow-up priority."""

    def __init__(self, thresholds: PriorityThresholds | None = None) -> None:
        self.thresholds = thresholds or PriorityThresholds()

    def priority_for(self, created_at: Any, now: Any) -> Priority:
        """
        Compute the priority for an evaluation created at ``created_at``.

        Never raises: any failure reading either instant yields Unknown.
        """
        try:
            months_ago = months_between(
                to_utc_datetime(created_at),
                to_utc_datetime(now),
            )
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning(
                "priority_calculation_failed",
                created_at=str(created_at),
                error=str(e),
            )
            return Priority.UNKNOWN

        if months_ago >= self.thresholds.high_months:
            return Priority.HIGH
        if months_ago >= self.thresholds.medium_months:
            return Priority.MEDIUM
        if months_ago >= self.thresholds.low_months:
            return Priority.LOW
        return Priority.UPDATE


default_priority_calculator = PriorityCalculator()


def priority_for(created_at: Any, now: Any) -> Priority:
    """Compute priority with the default 12/6/3 month thresholds."""
    return default_priority_calculator.priority_for(created_at, now)
