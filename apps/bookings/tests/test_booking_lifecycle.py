"""Tests for the booking status transition function."""

import pytest

from apps.bookings.lifecycle import StatusChange, plan_status_change
from apps.bookings.models import Booking


@pytest.mark.parametrize("current", list(Booking.Status))
def test_cancelled_target_always_means_cancel(current):
    assert plan_status_change(current, Booking.Status.CANCELLED) is StatusChange.CANCEL


@pytest.mark.parametrize("current", list(Booking.Status))
@pytest.mark.parametrize(
    "target",
    [Booking.Status.PENDING, Booking.Status.CONFIRMED, Booking.Status.COMPLETED],
)
def test_other_targets_update_in_place(current, target):
    assert plan_status_change(current, target) is StatusChange.UPDATE


def test_raw_strings_are_rejected():
    with pytest.raises(TypeError):
        plan_status_change(Booking.Status.PENDING, "CANCELLED")
