"""Serializers for the booking domain.

Request serializers turn raw payloads into the typed inputs the services
expect; unknown status strings and malformed dates stop here.
"""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Booking
from .services import BookingRequest


class BookingRequestSerializer(serializers.Serializer):
    """Создание или частичное изменение брони."""

    property_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def _validate_not_past(self, value):
        if value < timezone.localdate():
            raise serializers.ValidationError("Date must be in the present or future.")
        return value

    def validate_start_date(self, value):  # type: ignore
        return self._validate_not_past(value)

    def validate_end_date(self, value):  # type: ignore
        return self._validate_not_past(value)

    def validate(self, attrs):  # type: ignore
        start_date = attrs.get("start_date")
        end_date = attrs.get("end_date")
        if start_date and end_date and end_date <= start_date:
            raise serializers.ValidationError("End date must be after start date.")
        return attrs

    def to_request(self) -> BookingRequest:
        data = self.validated_data
        return BookingRequest(
            property_id=data.get("property_id"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices)

    def to_status(self) -> Booking.Status:
        return Booking.Status(self.validated_data["status"])


class BookingSerializer(serializers.ModelSerializer):
    """Детальный сериализатор бронирования."""

    property_id = serializers.ReadOnlyField(source="property.id")
    guest_username = serializers.ReadOnlyField(source="guest.username")

    class Meta:
        model = Booking
        fields = [
            "id",
            "property_id",
            "guest_username",
            "start_date",
            "end_date",
            "total_price",
            "booking_date",
            "status",
        ]
        read_only_fields = fields
