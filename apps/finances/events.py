"""Payment domain events."""

from dataclasses import dataclass
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class PaymentCreated(DomainEvent):
    payment_id: int
    booking_id: int
    payer_id: int
    amount: Decimal
    method: str


@dataclass(kw_only=True)
class PaymentUpdated(DomainEvent):
    """Status, method or details of a payment changed."""
    payment_id: int
    booking_id: int
    status: str
    method: str
    amount: Decimal


@dataclass(kw_only=True)
class PaymentDeleted(DomainEvent):
    payment_id: int
    booking_id: int


PAYMENT_EVENTS = (PaymentCreated, PaymentUpdated, PaymentDeleted)
