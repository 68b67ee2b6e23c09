from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class ReviewCreated(DomainEvent):
    review_id: int
    booking_id: int
    property_id: int
    user_id: int
    rating: int


@dataclass(kw_only=True)
class ReviewUpdated(DomainEvent):
    review_id: int
    rating: int


@dataclass(kw_only=True)
class ReviewDeleted(DomainEvent):
    review_id: int
    booking_id: int


REVIEW_EVENTS = (ReviewCreated, ReviewUpdated, ReviewDeleted)
