"""Payment services.

A booking carries at most one payment, and the payment amount must equal
the booking's total price. The one-to-one key on ``Payment.booking`` backs
the first rule at the database level.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional

import structlog
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import get_booking
from apps.users.services import get_user_by_username
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    NotFoundError,
    RequestValidationError,
    StateConflictError,
    require_positive_id,
)

from .events import PaymentCreated, PaymentDeleted, PaymentUpdated
from .models import Payment

logger = structlog.get_logger(__name__)


@dataclass
class PaymentRequest:
    amount: Optional[Decimal] = None
    method: Optional[Payment.Method] = None
    transaction_id: Optional[str] = None


def _as_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise RequestValidationError("Payment amount must be a number")
    if not amount.is_finite():
        raise RequestValidationError("Payment amount must be a number")
    return amount


def _choice(choices, value, label: str):
    try:
        return choices(value)
    except ValueError:
        raise RequestValidationError(f"Unknown {label}: {value}")


def _get_payment(payment_id: int, *, for_update: bool = False) -> Payment:
    require_positive_id(payment_id, "Payment ID")
    queryset = Payment.objects.select_related("booking", "payer")
    if for_update:
        queryset = queryset.select_for_update(of=("self",))
    try:
        return queryset.get(pk=payment_id)
    except Payment.DoesNotExist:
        raise NotFoundError(f"Payment not found for ID: {payment_id}")


def _updated_event(payment: Payment) -> PaymentUpdated:
    return PaymentUpdated(
        payment_id=payment.pk,
        booking_id=payment.booking_id,
        status=payment.status,
        method=payment.method,
        amount=payment.amount,
    )


def make_payment(booking_id: int, request: PaymentRequest) -> str:
    """Attach a PENDING payment to the booking; the payer is the booking's guest."""

    require_positive_id(booking_id, "Booking ID")
    if request is None:
        raise RequestValidationError("Payment request cannot be null")
    if request.method is None:
        raise RequestValidationError("Payment method cannot be null")
    method = _choice(Payment.Method, request.method, "payment method")
    amount = _as_decimal(request.amount)

    with DjangoUnitOfWork() as uow:
        booking = get_booking(booking_id, for_update=True)
        if Payment.objects.filter(booking_id=booking.pk).exists():
            raise StateConflictError("Payment already exists for this booking")
        if amount is None or amount != booking.total_price:
            raise RequestValidationError("Payment amount does not match booking total price")

        try:
            with transaction.atomic():
                payment = Payment.objects.create(
                    booking=booking,
                    payer_id=booking.guest_id,
                    amount=amount,
                    method=method,
                    transaction_id=request.transaction_id or "",
                    status=Payment.Status.PENDING,
                    payment_date=timezone.now(),
                )
        except IntegrityError:
            raise StateConflictError("Payment already exists for this booking")

        uow.add_event(PaymentCreated(
            payment_id=payment.pk,
            booking_id=booking.pk,
            payer_id=booking.guest_id,
            amount=payment.amount,
            method=payment.method,
        ))

    logger.info("payment_created", payment_id=payment.pk, booking_id=booking_id, amount=str(amount))
    return f"Payment created successfully for booking ID: {booking_id}"


def get_payment_by_booking_id(booking_id: int) -> Payment:
    require_positive_id(booking_id, "Booking ID")
    payment = Payment.objects.select_related("booking", "payer").filter(booking_id=booking_id).first()
    if payment is None:
        raise NotFoundError(f"Payment not found for booking ID: {booking_id}")
    return payment


def delete_payment_by_booking_id(booking_id: int) -> str:
    require_positive_id(booking_id, "Booking ID")
    with DjangoUnitOfWork() as uow:
        payment = (
            Payment.objects.select_for_update()
            .filter(booking_id=booking_id)
            .first()
        )
        if payment is None:
            raise NotFoundError(f"Payment not found for booking ID: {booking_id}")
        payment_id = payment.pk
        payment.delete()
        uow.add_event(PaymentDeleted(payment_id=payment_id, booking_id=booking_id))

    logger.info("payment_deleted", payment_id=payment_id, booking_id=booking_id)
    return f"Payment deleted successfully for booking ID: {booking_id}"


def update_payment_status(payment_id: int, status: Payment.Status) -> str:
    require_positive_id(payment_id, "Payment ID")
    if status is None:
        raise RequestValidationError("Payment status cannot be null")
    status = _choice(Payment.Status, status, "payment status")

    with DjangoUnitOfWork() as uow:
        payment = _get_payment(payment_id, for_update=True)
        old_status = payment.status
        payment.status = status
        payment.save(update_fields=["status"])
        uow.add_event(_updated_event(payment))

    logger.info("payment_status_changed", payment_id=payment_id, old_status=old_status, new_status=status.value)
    return f"Payment status updated successfully for payment ID: {payment_id}"


def update_payment_method(payment_id: int, method: Payment.Method) -> str:
    require_positive_id(payment_id, "Payment ID")
    if method is None:
        raise RequestValidationError("Payment method cannot be null")
    method = _choice(Payment.Method, method, "payment method")

    with DjangoUnitOfWork() as uow:
        payment = _get_payment(payment_id, for_update=True)
        payment.method = method
        payment.save(update_fields=["method"])
        uow.add_event(_updated_event(payment))

    logger.info("payment_method_changed", payment_id=payment_id, method=method.value)
    return f"Payment method updated successfully for payment ID: {payment_id}"


def update_payment(payment_id: int, request: PaymentRequest) -> str:
    """Partial update of the payment details.

    Any change sends the payment back to PENDING and stamps a new
    ``payment_date``.
    """
    require_positive_id(payment_id, "Payment ID")
    if request is None:
        raise RequestValidationError("Payment request cannot be null")
    amount = _as_decimal(request.amount)

    with DjangoUnitOfWork() as uow:
        payment = _get_payment(payment_id, for_update=True)
        if amount is not None:
            payment.amount = amount
        if request.method is not None:
            payment.method = _choice(Payment.Method, request.method, "payment method")
        if request.transaction_id is not None:
            payment.transaction_id = request.transaction_id
        payment.status = Payment.Status.PENDING
        payment.payment_date = timezone.now()
        payment.save()
        uow.add_event(_updated_event(payment))

    logger.info("payment_updated", payment_id=payment_id)
    return f"Payment updated successfully for payment ID: {payment_id}"


def is_payment_owner(payment_id: int, username: str) -> bool:
    payment = _get_payment(payment_id)
    return payment.payer.get_username() == username


def get_payments_for_user(username: str) -> List[Payment]:
    user = get_user_by_username(username)
    payments = list(Payment.objects.filter(payer=user).select_related("booking"))
    if not payments:
        raise NotFoundError("No payments found for user")
    return payments


def get_total_amount_paid_for_property(property_id: int) -> Decimal:
    """Sum of payment amounts over every booking of the property.

    Bookings without a payment add nothing; a property with no bookings at
    all is reported as not found.
    """
    require_positive_id(property_id, "Property ID")
    if not Booking.objects.filter(property_id=property_id).exists():
        raise NotFoundError(f"No bookings found for property ID: {property_id}")
    total = Payment.objects.filter(booking__property_id=property_id).aggregate(
        total=Sum("amount")
    )["total"]
    return total if total is not None else Decimal("0.00")
