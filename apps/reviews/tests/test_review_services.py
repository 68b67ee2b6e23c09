"""Tests for the review gate."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.test import TestCase
from structlog.testing import capture_logs

from apps.bookings.models import Booking
from apps.bookings.services import accept_or_reject_booking
from apps.properties.models import Property
from apps.reviews import services
from apps.reviews.models import Review
from apps.reviews.services import ReviewRequest
from shared.domain.exceptions import NotFoundError, RequestValidationError, StateConflictError

User = get_user_model()


class ReviewServiceTests(TestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username='owner', password='password')
        self.guest = User.objects.create_user(username='guest', password='password')
        self.property = Property.objects.create(
            owner=self.owner,
            title='Mountain chalet',
            price_per_night=Decimal('120.00'),
        )
        self.booking = Booking.objects.create(
            property=self.property,
            guest=self.guest,
            start_date=date(2025, 10, 1),
            end_date=date(2025, 10, 3),
            total_price=Decimal('240.00'),
        )

    def _complete(self) -> None:
        accept_or_reject_booking(self.booking.pk, self.property.pk, Booking.Status.COMPLETED)

    def _review(self, rating: int = 5, comment: str = 'Great stay') -> Review:
        self._complete()
        services.create_review(self.booking.pk, ReviewRequest(rating=rating, comment=comment))
        return Review.objects.get(booking=self.booking)

    def test_review_gated_on_completed_booking(self) -> None:
        request = ReviewRequest(rating=4, comment='Cozy')

        with self.assertRaisesMessage(StateConflictError, 'Booking must be completed to create a review'):
            services.create_review(self.booking.pk, request)

        self._complete()
        message = services.create_review(self.booking.pk, request)
        self.assertEqual(message, f'Review created successfully for booking with ID {self.booking.pk}!')

        with self.assertRaisesMessage(StateConflictError, 'Review already exists for this booking'):
            services.create_review(self.booking.pk, request)
        self.assertEqual(Review.objects.count(), 1)

    def test_review_takes_user_and_property_from_booking(self) -> None:
        review = self._review()

        self.assertEqual(review.user, self.guest)
        self.assertEqual(review.property, self.property)
        self.assertEqual(review.rating, 5)
        self.assertIsNotNone(review.review_date)

    def test_confirmed_booking_cannot_be_reviewed(self) -> None:
        accept_or_reject_booking(self.booking.pk, self.property.pk, Booking.Status.CONFIRMED)

        with self.assertRaises(StateConflictError):
            services.create_review(self.booking.pk, ReviewRequest(rating=3))

    def test_rating_bounds(self) -> None:
        self._complete()
        for rating in (0, 6, None):
            with self.subTest(rating=rating):
                with self.assertRaises(RequestValidationError):
                    services.create_review(self.booking.pk, ReviewRequest(rating=rating))
        self.assertFalse(Review.objects.exists())

    def test_unknown_booking(self) -> None:
        with self.assertRaisesMessage(NotFoundError, 'Booking not found'):
            services.create_review(9999, ReviewRequest(rating=5))

    def test_get_review_by_booking_id(self) -> None:
        with self.assertRaisesMessage(NotFoundError, 'No reviews found for this booking'):
            services.get_review_by_booking_id(self.booking.pk)

        review = self._review()

        self.assertEqual(services.get_review_by_booking_id(self.booking.pk).pk, review.pk)

    def test_delete_review_allows_a_new_one(self) -> None:
        review = self._review()

        message = services.delete_review(review.pk)

        self.assertEqual(message, f'Review with ID {review.pk} deleted successfully!')
        self.assertFalse(Review.objects.exists())
        booking = Booking.objects.get(pk=self.booking.pk)
        with self.assertRaises(Review.DoesNotExist):
            booking.review
        services.create_review(self.booking.pk, ReviewRequest(rating=2))
        self.assertEqual(Review.objects.get().rating, 2)

    def test_delete_unknown_review(self) -> None:
        with self.assertRaisesMessage(NotFoundError, 'Review not found'):
            services.delete_review(9999)

    def test_update_review_is_partial(self) -> None:
        review = self._review(rating=5, comment='Great stay')

        message = services.update_review(review.pk, ReviewRequest(comment='Good stay'))

        self.assertEqual(message, f'Review with review ID {review.pk} updated successfully!')
        review.refresh_from_db()
        self.assertEqual(review.comment, 'Good stay')
        self.assertEqual(review.rating, 5)

    def test_update_comment_and_rating(self) -> None:
        review = self._review()

        comment_message = services.update_review_comment(review.pk, 'Noisy street')
        rating_message = services.update_review_rating(review.pk, 3)

        self.assertEqual(
            comment_message,
            f'Review description with review ID {review.pk} updated to Noisy street successfully!',
        )
        self.assertEqual(
            rating_message,
            f'Review rating with review ID {review.pk} updated to 3 successfully!',
        )
        review.refresh_from_db()
        self.assertEqual((review.comment, review.rating), ('Noisy street', 3))

    def test_update_validation(self) -> None:
        review = self._review()

        with self.assertRaisesMessage(RequestValidationError, 'Comment cannot be null'):
            services.update_review_comment(review.pk, None)
        with self.assertRaises(RequestValidationError):
            services.update_review_comment(review.pk, 'x' * 2001)
        with self.assertRaises(RequestValidationError):
            services.update_review_rating(review.pk, 0)
        with self.assertRaises(RequestValidationError):
            services.update_review(review.pk, ReviewRequest(rating=9))

    def test_is_review_owner(self) -> None:
        review = self._review()

        self.assertTrue(services.is_review_owner(review.pk, 'guest'))
        self.assertFalse(services.is_review_owner(review.pk, 'owner'))
        with self.assertRaises(RequestValidationError):
            services.is_review_owner(review.pk, None)

    def test_reviews_for_user_and_property(self) -> None:
        with self.assertRaisesMessage(NotFoundError, 'No reviews found for this user'):
            services.get_reviews_for_user('guest')
        with self.assertRaisesMessage(NotFoundError, 'No reviews found for this property'):
            services.get_reviews_for_property(self.property.pk)
        with self.assertRaisesMessage(NotFoundError, 'Property not found'):
            services.get_reviews_for_property(9999)

        review = self._review()

        self.assertEqual([r.pk for r in services.get_reviews_for_user('guest')], [review.pk])
        self.assertEqual([r.pk for r in services.get_reviews_for_property(self.property.pk)], [review.pk])

    def test_rating_constraint_at_database_level(self) -> None:
        self._complete()

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Review.objects.create(
                    booking=self.booking,
                    property=self.property,
                    user=self.guest,
                    rating=7,
                )


@pytest.mark.django_db
def test_comment_change_is_logged(monkeypatch):
    user_model = get_user_model()
    owner = user_model.objects.create_user(username='owner', password='password')
    guest = user_model.objects.create_user(username='guest', password='password')
    listing = Property.objects.create(owner=owner, title='Loft', price_per_night=Decimal('90.00'))
    booking = Booking.objects.create(
        property=listing,
        guest=guest,
        start_date=date(2025, 10, 1),
        end_date=date(2025, 10, 2),
        total_price=Decimal('90.00'),
        status=Booking.Status.COMPLETED,
    )
    services.create_review(booking.pk, ReviewRequest(rating=4))
    review = Review.objects.get()

    with capture_logs() as logs:
        monkeypatch.setattr(services, 'logger', services.structlog.get_logger('reviews'))
        services.update_review_comment(review.pk, 'Quiet and clean')

    changed = [entry for entry in logs if entry['event'] == 'review_comment_changed']
    assert len(changed) == 1
    assert changed[0]['review_id'] == review.pk
    assert changed[0]['log_level'] == 'info'
