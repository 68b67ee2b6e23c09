"""Property lookups used by the booking engine."""

from __future__ import annotations

from shared.domain.exceptions import NotFoundError, require_positive_id

from .models import Property


def get_property(property_id: int, *, for_update: bool = False) -> Property:
    """Return the property or raise ``NotFoundError``.

    With ``for_update`` the row is locked until the surrounding transaction
    ends; callers must already be inside ``transaction.atomic()``.
    """

    require_positive_id(property_id, "Property ID")
    queryset = Property.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=property_id)
    except Property.DoesNotExist:
        raise NotFoundError("Property not found")


def is_property_owner(property_id: int, username: str) -> bool:
    property_obj = get_property(property_id)
    return property_obj.owner.get_username() == username
