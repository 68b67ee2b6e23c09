from django.apps import AppConfig


class ReviewsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.reviews'

    def ready(self) -> None:
        from shared.application.audit import log_event
        from shared.application.message_bus import message_bus

        from .events import REVIEW_EVENTS

        message_bus.register_many(REVIEW_EVENTS, log_event)
