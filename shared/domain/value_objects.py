"""
Common Value Objects

- DateRange: Represents a reservation period (start date to end date)
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import ValueObject
from shared.domain.exceptions import RequestValidationError


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Both ends are part of the range. A stay from the 1st to the 10th
    occupies the 10th as well, so another stay beginning on the 10th
    collides with it.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date is None or self.end_date is None:
            raise RequestValidationError("Start date and end date are required")
        if self.end_date <= self.start_date:
            raise RequestValidationError("End date must be after start date")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Examples:
            - DateRange(1, 10) overlaps with DateRange(10, 15) -> True (touching)
            - DateRange(1, 5) overlaps with DateRange(6, 10) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return (self.start_date <= other.end_date and
                self.end_date >= other.start_date)

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date <= self.end_date

    @property
    def nights(self) -> int:
        """Number of nights charged for the stay."""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
