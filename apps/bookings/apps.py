from django.apps import AppConfig


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"

    def ready(self) -> None:
        from shared.application.audit import log_event
        from shared.application.message_bus import message_bus

        from .events import BOOKING_EVENTS

        message_bus.register_many(BOOKING_EVENTS, log_event)
