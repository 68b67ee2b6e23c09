"""Serializers for the finance domain (payments)."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Payment
from .services import PaymentRequest


class PaymentRequestSerializer(serializers.Serializer):
    """Создание или частичное изменение платежа."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    payment_method = serializers.ChoiceField(choices=Payment.Method.choices)
    transaction_id = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def to_request(self) -> PaymentRequest:
        data = self.validated_data
        method = data.get("payment_method")
        return PaymentRequest(
            amount=data.get("amount"),
            method=Payment.Method(method) if method else None,
            transaction_id=data.get("transaction_id"),
        )


class PaymentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Payment.Status.choices)

    def to_status(self) -> Payment.Status:
        return Payment.Status(self.validated_data["status"])


class PaymentMethodSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=Payment.Method.choices)

    def to_method(self) -> Payment.Method:
        return Payment.Method(self.validated_data["payment_method"])


class PaymentSerializer(serializers.ModelSerializer):
    """Отображение платёжных записей."""

    booking_id = serializers.ReadOnlyField(source="booking.id")
    payer_username = serializers.ReadOnlyField(source="payer.username")

    class Meta:
        model = Payment
        fields = [
            "id",
            "booking_id",
            "payer_username",
            "amount",
            "method",
            "status",
            "transaction_id",
            "payment_date",
        ]
        read_only_fields = fields
