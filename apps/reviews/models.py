"""Models for the review domain.

Defines the ``Review`` entity: the guest's rating and comment for a
completed stay. A booking has at most one review.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Represents a review left by a guest for a property."""

    booking = models.OneToOneField(
        'bookings.Booking',
        on_delete=models.CASCADE,
        related_name='review',
        help_text=_('Бронирование, к которому относится отзыв')
    )
    property = models.ForeignKey(
        'properties.Property', on_delete=models.CASCADE, related_name='reviews'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text='Оценка от 1 до 5'
    )
    comment = models.TextField(max_length=2000, blank=True)
    review_date = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-review_date', '-id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name='review_rating_range',
            ),
        ]
        indexes = [
            models.Index(fields=['property', '-review_date'], name='review_property_date_idx'),
            models.Index(fields=['user'], name='review_user_idx'),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for property {self.property_id} (Rating: {self.rating})"
