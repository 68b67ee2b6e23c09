from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.db import IntegrityError

from apps.properties.models import Property
from apps.properties.services import get_property, is_property_owner
from apps.users.services import get_user_by_username
from shared.domain.exceptions import NotFoundError, RequestValidationError

User = get_user_model()


@pytest.fixture
def owner(db):
    return User.objects.create_user(username="owner", password="password")


@pytest.fixture
def listing(owner):
    return Property.objects.create(owner=owner, title="Studio", price_per_night=Decimal("80.00"))


def test_get_property(listing):
    found = get_property(listing.pk)

    assert found == listing
    assert found.is_available is True


@pytest.mark.django_db
def test_missing_property():
    with pytest.raises(NotFoundError, match="Property not found"):
        get_property(12345)


def test_property_id_is_validated():
    with pytest.raises(RequestValidationError, match="Property ID cannot be null or negative"):
        get_property(0)


def test_is_property_owner(listing):
    User.objects.create_user(username="guest", password="password")

    assert is_property_owner(listing.pk, "owner")
    assert not is_property_owner(listing.pk, "guest")


def test_negative_price_rejected_by_database(owner):
    with pytest.raises(IntegrityError):
        Property.objects.create(owner=owner, title="Broken", price_per_night=Decimal("-1.00"))


def test_get_user_by_username(owner):
    assert get_user_by_username("owner") == owner
    with pytest.raises(NotFoundError, match="User not found"):
        get_user_by_username("ghost")
    with pytest.raises(RequestValidationError, match="Username cannot be empty"):
        get_user_by_username("")
