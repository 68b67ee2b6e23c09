"""Serializers for reviews.

The write serializer validates rating range and comment length before the
payload reaches the services. Reviewer and property are never accepted
from the client; they come from the booking.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Review
from .services import ReviewRequest


class ReviewRequestSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    comment = serializers.CharField(max_length=2000, required=False, allow_blank=True)

    def validate_rating(self, value: int) -> int:  # type: ignore
        if value < 1 or value > 5:
            raise serializers.ValidationError('Рейтинг должен быть между 1 и 5.')
        return value

    def to_request(self) -> ReviewRequest:
        data = self.validated_data
        return ReviewRequest(rating=data.get('rating'), comment=data.get('comment'))


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews."""

    booking_id = serializers.ReadOnlyField(source='booking.id')
    property_id = serializers.ReadOnlyField(source='property.id')
    user_username = serializers.ReadOnlyField(source='user.username')

    class Meta:
        model = Review
        fields = [
            'id',
            'booking_id',
            'property_id',
            'user_username',
            'rating',
            'comment',
            'review_date',
        ]
        read_only_fields = fields
