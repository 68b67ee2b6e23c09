"""Message bus dispatch and post-commit publishing through the unit of work."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from shared.application import audit
from shared.application.message_bus import MessageBus, message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class SomethingHappened(DomainEvent):
    subject_id: int
    day: date = date(2025, 10, 1)
    amount: Decimal = Decimal("10.50")


@pytest.fixture
def collected():
    received = []
    message_bus.register_event_handler(SomethingHappened, received.append)
    yield received
    message_bus.unregister_event_handler(SomethingHappened, received.append)


def test_every_handler_receives_the_event():
    bus = MessageBus()
    first, second = [], []
    bus.register_event_handler(SomethingHappened, first.append)
    bus.register_event_handler(SomethingHappened, second.append)

    event = SomethingHappened(subject_id=1)
    bus.publish_events([event])

    assert first == [event]
    assert second == [event]


def test_registration_is_idempotent():
    bus = MessageBus()
    received = []
    bus.register_many([SomethingHappened, SomethingHappened], received.append)

    bus.publish_events([SomethingHappened(subject_id=1)])

    assert len(received) == 1
    assert bus.handlers_for(SomethingHappened) == [received.append]


def test_failing_handler_does_not_stop_others():
    bus = MessageBus()
    received = []

    def broken(event):
        raise RuntimeError("handler failed")

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, received.append)

    bus.publish_events([SomethingHappened(subject_id=2)])

    assert len(received) == 1


def test_event_serialization():
    payload = SomethingHappened(subject_id=3).to_dict()

    assert payload["event_type"] == "SomethingHappened"
    assert payload["subject_id"] == 3
    assert payload["day"] == "2025-10-01"
    assert payload["amount"] == "10.50"
    assert "event_id" in payload and "occurred_at" in payload


@pytest.mark.django_db
def test_events_published_only_after_commit(collected, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork() as uow:
            uow.add_event(SomethingHappened(subject_id=4))
            assert collected == []

    assert [event.subject_id for event in collected] == [4]


@pytest.mark.django_db
def test_events_discarded_on_rollback(collected, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(ValueError):
            with DjangoUnitOfWork() as uow:
                uow.add_event(SomethingHappened(subject_id=5))
                raise ValueError("abort")

    assert callbacks == []
    assert collected == []


def test_audit_handler_logs_event_payload(monkeypatch):
    with capture_logs() as logs:
        # The module logger may already be bound; pick up the capturing config.
        monkeypatch.setattr(audit, "logger", audit.structlog.get_logger("audit"))
        audit.log_event(SomethingHappened(subject_id=6))

    assert logs[0]["event"] == "SomethingHappened"
    assert logs[0]["subject_id"] == 6
    assert logs[0]["log_level"] == "info"
