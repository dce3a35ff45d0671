"""
Common Value Objects

- DateRange: a stay from check-in (inclusive) to check-out (exclusive)
"""

import math
from dataclasses import dataclass
from datetime import date, datetime

from shared.domain.base import ValueObject
from shared.domain.errors import InvalidDateOrder

SECONDS_PER_NIGHT = 86_400


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if _as_datetime(self.start_date) >= _as_datetime(self.end_date):
            raise InvalidDateOrder()

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        end_date is exclusive, so adjacent ranges don't overlap.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return (_as_datetime(self.start_date) < _as_datetime(other.end_date) and
                _as_datetime(self.end_date) > _as_datetime(other.start_date))

    def contains(self, check_date: date) -> bool:
        """start_date is inclusive, end_date is exclusive"""
        return (_as_datetime(self.start_date) <= _as_datetime(check_date)
                < _as_datetime(self.end_date))

    @property
    def nights(self) -> int:
        """
        Number of billable nights

        Any partial day counts as a full night.
        """
        delta = _as_datetime(self.end_date) - _as_datetime(self.start_date)
        return math.ceil(delta.total_seconds() / SECONDS_PER_NIGHT)

    def __len__(self) -> int:
        return self.nights

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
