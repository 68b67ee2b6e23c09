"""
Booking Domain Events

Published after the transaction that produced them commits.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    booking_id: int
    property_id: int
    guest_id: int
    start_date: date
    end_date: date
    total_price: Decimal


@dataclass(kw_only=True)
class BookingUpdated(DomainEvent):
    booking_id: int
    property_id: int
    start_date: date
    end_date: date
    total_price: Decimal


@dataclass(kw_only=True)
class BookingStatusChanged(DomainEvent):
    booking_id: int
    property_id: int
    old_status: str
    new_status: str


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """The booking was rejected or cancelled and its row removed."""
    booking_id: int
    property_id: int
    old_status: str


@dataclass(kw_only=True)
class BookingDeleted(DomainEvent):
    booking_id: int
    property_id: int
    deleted_by: str


BOOKING_EVENTS = (
    BookingCreated,
    BookingUpdated,
    BookingStatusChanged,
    BookingCancelled,
    BookingDeleted,
)
