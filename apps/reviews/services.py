"""Review services.

A review may only be written for a COMPLETED booking, and only once per
booking. The reviewer and the property are always taken from the booking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import structlog
from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import get_booking
from apps.properties.services import get_property
from apps.users.services import get_user_by_username
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    NotFoundError,
    RequestValidationError,
    StateConflictError,
    require_positive_id,
)

from .events import ReviewCreated, ReviewDeleted, ReviewUpdated
from .models import Review

logger = structlog.get_logger(__name__)

MAX_COMMENT_LENGTH = 2000


@dataclass
class ReviewRequest:
    rating: Optional[int] = None
    comment: Optional[str] = None


def _check_rating(rating) -> int:
    if rating is None or isinstance(rating, bool) or not isinstance(rating, int):
        raise RequestValidationError('Rating cannot be null')
    if not 1 <= rating <= 5:
        raise RequestValidationError('Rating must be between 1 and 5')
    return rating


def _check_comment(comment: str) -> str:
    if len(comment) > MAX_COMMENT_LENGTH:
        raise RequestValidationError('Comment must be less than 2000 characters')
    return comment


def _get_review(review_id: int, *, for_update: bool = False) -> Review:
    require_positive_id(review_id, 'Review ID')
    queryset = Review.objects.select_related('booking', 'user')
    if for_update:
        queryset = queryset.select_for_update(of=('self',))
    try:
        return queryset.get(pk=review_id)
    except Review.DoesNotExist:
        raise NotFoundError('Review not found')


def create_review(booking_id: int, request: ReviewRequest) -> str:
    require_positive_id(booking_id, 'Booking ID')
    if request is None:
        raise RequestValidationError('Review request cannot be null')

    with DjangoUnitOfWork() as uow:
        booking = get_booking(booking_id, for_update=True)
        if Review.objects.filter(booking_id=booking.pk).exists():
            raise StateConflictError('Review already exists for this booking')
        if booking.status != Booking.Status.COMPLETED:
            raise StateConflictError('Booking must be completed to create a review')
        rating = _check_rating(request.rating)
        comment = _check_comment(request.comment or '')

        try:
            with transaction.atomic():
                review = Review.objects.create(
                    booking=booking,
                    property_id=booking.property_id,
                    user_id=booking.guest_id,
                    rating=rating,
                    comment=comment,
                    review_date=timezone.now(),
                )
        except IntegrityError:
            raise StateConflictError('Review already exists for this booking')

        uow.add_event(ReviewCreated(
            review_id=review.pk,
            booking_id=booking.pk,
            property_id=booking.property_id,
            user_id=booking.guest_id,
            rating=rating,
        ))

    logger.info('review_created', review_id=review.pk, booking_id=booking_id, rating=rating)
    return f'Review created successfully for booking with ID {booking_id}!'


def delete_review(review_id: int) -> str:
    with DjangoUnitOfWork() as uow:
        review = _get_review(review_id, for_update=True)
        booking = review.booking
        booking_id = review.booking_id
        if Booking.review.is_cached(booking):
            Booking.review.related.delete_cached_value(booking)
        review.delete()
        uow.add_event(ReviewDeleted(review_id=review_id, booking_id=booking_id))

    logger.info('review_deleted', review_id=review_id, booking_id=booking_id)
    return f'Review with ID {review_id} deleted successfully!'


def get_review_by_booking_id(booking_id: int) -> Review:
    booking = get_booking(booking_id)
    review = Review.objects.filter(booking_id=booking.pk).select_related('user').first()
    if review is None:
        raise NotFoundError('No reviews found for this booking')
    return review


def update_review(review_id: int, request: ReviewRequest) -> str:
    """Partial update: only the fields set on ``request`` change."""
    require_positive_id(review_id, 'Review ID')
    if request is None:
        raise RequestValidationError('Review request cannot be null')

    with DjangoUnitOfWork() as uow:
        review = _get_review(review_id, for_update=True)
        if request.rating is not None:
            review.rating = _check_rating(request.rating)
        if request.comment is not None:
            review.comment = _check_comment(request.comment)
        review.review_date = timezone.now()
        review.save(update_fields=['rating', 'comment', 'review_date'])
        uow.add_event(ReviewUpdated(review_id=review.pk, rating=review.rating))

    logger.info('review_updated', review_id=review_id)
    return f'Review with review ID {review_id} updated successfully!'


def update_review_comment(review_id: int, comment: str) -> str:
    require_positive_id(review_id, 'Review ID')
    if comment is None:
        raise RequestValidationError('Comment cannot be null')
    _check_comment(comment)

    with DjangoUnitOfWork() as uow:
        review = _get_review(review_id, for_update=True)
        review.comment = comment
        review.review_date = timezone.now()
        review.save(update_fields=['comment', 'review_date'])
        uow.add_event(ReviewUpdated(review_id=review.pk, rating=review.rating))

    logger.info('review_comment_changed', review_id=review_id)
    return f'Review description with review ID {review_id} updated to {comment} successfully!'


def update_review_rating(review_id: int, rating: int) -> str:
    require_positive_id(review_id, 'Review ID')
    _check_rating(rating)

    with DjangoUnitOfWork() as uow:
        review = _get_review(review_id, for_update=True)
        review.rating = rating
        review.review_date = timezone.now()
        review.save(update_fields=['rating', 'review_date'])
        uow.add_event(ReviewUpdated(review_id=review.pk, rating=rating))

    logger.info('review_rating_changed', review_id=review_id, rating=rating)
    return f'Review rating with review ID {review_id} updated to {rating} successfully!'


def is_review_owner(review_id: int, username: str) -> bool:
    require_positive_id(review_id, 'Review ID')
    if not username:
        raise RequestValidationError('Username cannot be empty')
    review = _get_review(review_id)
    return review.user.get_username() == username


def get_reviews_for_user(username: str) -> List[Review]:
    user = get_user_by_username(username)
    reviews = list(Review.objects.filter(user=user))
    if not reviews:
        raise NotFoundError('No reviews found for this user')
    return reviews


def get_reviews_for_property(property_id: int) -> List[Review]:
    get_property(property_id)
    reviews = list(Review.objects.filter(property_id=property_id).select_related('user'))
    if not reviews:
        raise NotFoundError('No reviews found for this property')
    return reviews
