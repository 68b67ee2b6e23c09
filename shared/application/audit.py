"""Audit trail for committed domain events."""

import structlog

from shared.domain.base import DomainEvent

logger = structlog.get_logger("audit")


def log_event(event: DomainEvent) -> None:
    payload = event.to_dict()
    event_type = payload.pop('event_type')
    logger.info(event_type, **payload)
