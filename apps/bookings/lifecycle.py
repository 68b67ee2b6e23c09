"""
Booking status lifecycle.

Statuses arrive already parsed into ``Booking.Status`` (unknown strings are
rejected by the serializers). Every (current, target) pair maps to exactly
one outcome:

- target CANCELLED -> CANCEL: the booking row is deleted, freeing its dates,
  unless a completed payment is attached.
- any other target -> UPDATE: the status field is overwritten in place.
"""

from enum import Enum

from .models import Booking


class StatusChange(Enum):
    UPDATE = 'update'
    CANCEL = 'cancel'


def plan_status_change(current: Booking.Status, target: Booking.Status) -> StatusChange:
    if not isinstance(target, Booking.Status):
        raise TypeError(f"Unsupported booking status: {target!r}")
    if target == Booking.Status.CANCELLED:
        return StatusChange.CANCEL
    return StatusChange.UPDATE
