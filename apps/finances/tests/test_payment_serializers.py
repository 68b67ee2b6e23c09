from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from apps.bookings.models import Booking
from apps.finances.models import Payment
from apps.finances.serializers import (
    PaymentMethodSerializer,
    PaymentRequestSerializer,
    PaymentSerializer,
    PaymentStatusSerializer,
)
from apps.properties.models import Property


def test_payment_request_is_parsed():
    serializer = PaymentRequestSerializer(
        data={"amount": "150.50", "payment_method": "BANK_TRANSFER", "transaction_id": "txn_9"}
    )

    assert serializer.is_valid(), serializer.errors
    request = serializer.to_request()
    assert request.amount == Decimal("150.50")
    assert request.method is Payment.Method.BANK_TRANSFER
    assert request.transaction_id == "txn_9"


def test_amount_must_be_positive():
    serializer = PaymentRequestSerializer(data={"amount": "0", "payment_method": "CASH"})

    assert not serializer.is_valid()
    assert "amount" in serializer.errors


def test_unknown_method_is_rejected():
    serializer = PaymentRequestSerializer(data={"amount": "10.00", "payment_method": "BITCOIN"})

    assert not serializer.is_valid()
    assert "payment_method" in serializer.errors


def test_transaction_id_length():
    serializer = PaymentRequestSerializer(
        data={"amount": "10.00", "payment_method": "CASH", "transaction_id": "x" * 256}
    )

    assert not serializer.is_valid()
    assert "transaction_id" in serializer.errors


def test_unknown_status_is_rejected():
    assert not PaymentStatusSerializer(data={"status": "SETTLED"}).is_valid()
    assert PaymentStatusSerializer(data={"status": "REFUNDED"}).is_valid()


def test_non_finite_amount_is_rejected():
    for amount in ("NaN", "Infinity"):
        serializer = PaymentRequestSerializer(data={"amount": amount, "payment_method": "CASH"})
        assert not serializer.is_valid()
        assert "amount" in serializer.errors


def test_status_and_method_are_parsed_into_enums():
    status_serializer = PaymentStatusSerializer(data={"status": "COMPLETED"})
    method_serializer = PaymentMethodSerializer(data={"payment_method": "PAYPAL"})

    assert status_serializer.is_valid(), status_serializer.errors
    assert method_serializer.is_valid(), method_serializer.errors
    assert status_serializer.to_status() is Payment.Status.COMPLETED
    assert method_serializer.to_method() is Payment.Method.PAYPAL
    assert not PaymentMethodSerializer(data={"payment_method": "BITCOIN"}).is_valid()


@pytest.mark.django_db
def test_payment_read_representation():
    user_model = get_user_model()
    owner = user_model.objects.create_user(username="owner", password="password")
    guest = user_model.objects.create_user(username="guest", password="password")
    listing = Property.objects.create(owner=owner, title="Loft", price_per_night=Decimal("100.00"))
    booking = Booking.objects.create(
        property=listing,
        guest=guest,
        start_date=date(2025, 10, 1),
        end_date=date(2025, 10, 3),
        total_price=Decimal("200.00"),
    )
    payment = Payment.objects.create(
        booking=booking,
        payer=guest,
        amount=Decimal("200.00"),
        method=Payment.Method.CASH,
        transaction_id="txn_7",
    )

    data = PaymentSerializer(payment).data

    assert data["booking_id"] == booking.pk
    assert data["payer_username"] == "guest"
    assert data["amount"] == "200.00"
    assert data["method"] == "CASH"
    assert data["status"] == "PENDING"
    assert data["transaction_id"] == "txn_7"
