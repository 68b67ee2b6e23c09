"""Domain services for booking workflows.

All date-changing operations for a property run while holding that
property's lock from ``shared.infrastructure.locks`` and inside a
transaction that re-reads the property row with ``select_for_update()``.
The overlap query and the insert therefore cannot interleave with another
request for the same property, in this process or (on PostgreSQL) in any
other one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

import structlog

from apps.properties.services import get_property
from apps.users.services import get_user_by_username
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    BookingConflictError,
    NotFoundError,
    RequestValidationError,
    StateConflictError,
    require_positive_id,
)
from shared.domain.value_objects import DateRange
from shared.infrastructure.locks import property_locks

from .events import (
    BookingCancelled,
    BookingCreated,
    BookingDeleted,
    BookingStatusChanged,
    BookingUpdated,
)
from .lifecycle import StatusChange, plan_status_change
from .models import Booking

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


@dataclass
class BookingRequest:
    """Input for creating or (partially) updating a booking.

    On update every ``None`` field keeps the booking's current value.
    """
    property_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def calculate_total_price(price_per_night: Decimal, dates: DateRange) -> Decimal:
    """Nightly price times the number of nights."""
    return (Decimal(price_per_night) * dates.nights).quantize(CENT)


def _ensure_dates_free(property_id: int, dates: DateRange, *, exclude_pk=None) -> None:
    overlapping = Booking.objects.overlapping(property_id, dates, exclude_pk=exclude_pk)
    if overlapping.exists():
        logger.info(
            "booking_conflict",
            property_id=property_id,
            start_date=dates.start_date.isoformat(),
            end_date=dates.end_date.isoformat(),
        )
        raise BookingConflictError("Property is already booked for the selected dates")


def get_booking(booking_id: int, *, for_update: bool = False) -> Booking:
    require_positive_id(booking_id, "Booking ID")
    queryset = Booking.objects.select_related("property", "guest")
    if for_update:
        queryset = queryset.select_for_update(of=("self",))
    try:
        return queryset.get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFoundError("Booking not found")


def create_booking(request: BookingRequest, username: str) -> Booking:
    """Reserve ``request``'s date range for the user named ``username``."""

    if request is None:
        raise RequestValidationError("Booking request cannot be null")
    property_id = require_positive_id(request.property_id, "Property ID")
    dates = DateRange(request.start_date, request.end_date)

    with property_locks.hold(property_id):
        with DjangoUnitOfWork() as uow:
            property_obj = get_property(property_id, for_update=True)
            if not property_obj.is_available:
                raise StateConflictError("Property is not available for booking")

            _ensure_dates_free(property_id, dates)

            guest = get_user_by_username(username)
            booking = Booking.objects.create(
                property=property_obj,
                guest=guest,
                start_date=dates.start_date,
                end_date=dates.end_date,
                total_price=calculate_total_price(property_obj.price_per_night, dates),
                status=Booking.Status.PENDING,
            )
            uow.add_event(BookingCreated(
                booking_id=booking.pk,
                property_id=property_id,
                guest_id=guest.pk,
                start_date=booking.start_date,
                end_date=booking.end_date,
                total_price=booking.total_price,
            ))

    logger.info(
        "booking_created",
        booking_id=booking.pk,
        property_id=property_id,
        nights=dates.nights,
        total_price=str(booking.total_price),
    )
    return booking


def update_booking(request: BookingRequest, booking_id: int, username: str) -> Booking:
    """Apply a partial update to the booking's property/date fields.

    The overlap check ignores the booking being updated, so shifting a stay
    within its own dates is allowed. The total price is recomputed only when
    the date range actually changes; the status is left as it is.
    """

    if request is None:
        raise RequestValidationError("Booking request cannot be null")
    property_id = get_booking(booking_id).property_id

    with property_locks.hold(property_id):
        with DjangoUnitOfWork() as uow:
            property_obj = get_property(property_id, for_update=True)
            booking = get_booking(booking_id, for_update=True)
            if request.property_id is not None and request.property_id != booking.property_id:
                get_property(request.property_id)
                raise RequestValidationError("Property ID does not match the booking's property")

            dates = DateRange(
                request.start_date or booking.start_date,
                request.end_date or booking.end_date,
            )
            _ensure_dates_free(booking.property_id, dates, exclude_pk=booking.pk)

            update_fields = []
            if dates != booking.dates:
                booking.start_date = dates.start_date
                booking.end_date = dates.end_date
                booking.total_price = calculate_total_price(property_obj.price_per_night, dates)
                update_fields += ["start_date", "end_date", "total_price"]
            if update_fields:
                booking.save(update_fields=update_fields)

            uow.add_event(BookingUpdated(
                booking_id=booking.pk,
                property_id=booking.property_id,
                start_date=booking.start_date,
                end_date=booking.end_date,
                total_price=booking.total_price,
            ))

    logger.info("booking_updated", booking_id=booking.pk, updated_by=username, fields=update_fields)
    return booking


def accept_or_reject_booking(booking_id: int, property_id: int, new_status: Booking.Status) -> str:
    """Move the booking to ``new_status``.

    Cancelling deletes the booking outright (which frees its dates) unless
    its payment has been completed. Any other status is stored in place.
    """
    from apps.finances.models import Payment  # local import to avoid circular

    require_positive_id(booking_id, "Booking ID")
    require_positive_id(property_id, "Property ID")
    if new_status is None:
        raise RequestValidationError("Booking status cannot be null")
    try:
        new_status = Booking.Status(new_status)
    except ValueError:
        raise RequestValidationError(f"Unknown booking status: {new_status}")

    with DjangoUnitOfWork() as uow:
        booking = get_booking(booking_id, for_update=True)
        old_status = booking.status
        change = plan_status_change(Booking.Status(old_status), new_status)

        if change is StatusChange.CANCEL:
            paid = Payment.objects.filter(
                booking_id=booking.pk,
                status=Payment.Status.COMPLETED,
            ).exists()
            if paid:
                raise StateConflictError("Cannot cancel a completed booking")
            booking.delete()
            uow.add_event(BookingCancelled(
                booking_id=booking_id,
                property_id=booking.property_id,
                old_status=old_status,
            ))
            logger.info("booking_cancelled", booking_id=booking_id, property_id=booking.property_id)
            return "Booking cancelled successfully"

        booking.status = new_status
        booking.save(update_fields=["status"])
        uow.add_event(BookingStatusChanged(
            booking_id=booking.pk,
            property_id=booking.property_id,
            old_status=old_status,
            new_status=new_status.value,
        ))

    logger.info("booking_status_changed", booking_id=booking_id, old_status=old_status, new_status=new_status.value)
    return f"Booking status updated successfully to: {new_status.value} for booking ID: {booking_id}"


def delete_booking(booking_id: int, property_id: int, username: str) -> str:
    """Hard delete; callers are expected to have authorized ``username``."""

    require_positive_id(booking_id, "Booking ID")
    require_positive_id(property_id, "Property ID")
    if not username:
        raise RequestValidationError("Username cannot be empty")

    with DjangoUnitOfWork() as uow:
        booking = get_booking(booking_id, for_update=True)
        booking.delete()
        uow.add_event(BookingDeleted(
            booking_id=booking_id,
            property_id=booking.property_id,
            deleted_by=username,
        ))

    logger.info("booking_deleted", booking_id=booking_id, deleted_by=username)
    return f"Booking ID {booking_id} deleted successfully"


def is_booking_owner(booking_id: int, username: str) -> bool:
    booking = get_booking(booking_id)
    return booking.guest.get_username() == username


def get_bookings_for_user(username: str) -> List[Booking]:
    user = get_user_by_username(username)
    bookings = list(Booking.objects.filter(guest=user).select_related("property"))
    if not bookings:
        raise NotFoundError("No bookings found for this user")
    return bookings


def get_bookings_for_property(property_id: int) -> List[Booking]:
    require_positive_id(property_id, "Property ID")
    bookings = list(Booking.objects.filter(property_id=property_id).select_related("guest"))
    if not bookings:
        raise NotFoundError("No bookings found for this property")
    return bookings
