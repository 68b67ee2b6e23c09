from django.apps import AppConfig


class FinancesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.finances"

    def ready(self) -> None:
        from shared.application.audit import log_event
        from shared.application.message_bus import message_bus

        from .events import PAYMENT_EVENTS

        message_bus.register_many(PAYMENT_EVENTS, log_event)
