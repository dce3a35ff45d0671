"""Tests for event publishing after commit."""

from dataclasses import dataclass

import pytest
from django.db import transaction

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    value: int


def test_publishes_to_every_handler():
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, lambda e: seen.append(("a", e.value)))
    bus.register_event_handler(SomethingHappened, lambda e: seen.append(("b", e.value)))

    bus.publish_events([SomethingHappened(value=1)])

    assert seen == [("a", 1), ("b", 1)]


def test_failing_handler_does_not_stop_others():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, lambda e: seen.append(e.value))

    bus.publish_events([SomethingHappened(value=7)])

    assert seen == [7]


def test_duplicate_registration_is_ignored():
    bus = MessageBus()

    def handler(event):
        pass

    bus.register_event_handler(SomethingHappened, handler)
    bus.register_event_handler(SomethingHappened, handler)
    assert bus.handlers_for(SomethingHappened) == [handler]

    bus.unregister_event_handler(SomethingHappened, handler)
    assert bus.handlers_for(SomethingHappened) == []


def test_event_serializes_metadata():
    data = SomethingHappened(value=1).to_dict()

    assert data["event_type"] == "SomethingHappened"
    assert "event_id" in data and "occurred_at" in data


@pytest.mark.django_db(transaction=True)
def test_unit_of_work_publishes_only_after_commit():
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, lambda e: seen.append(e.value))

    with DjangoUnitOfWork(bus=bus) as uow:
        uow.add_event(SomethingHappened(value=1))
        assert seen == []

    assert seen == [1]


@pytest.mark.django_db(transaction=True)
def test_unit_of_work_discards_events_on_error():
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, lambda e: seen.append(e.value))

    with pytest.raises(ValueError):
        with DjangoUnitOfWork(bus=bus) as uow:
            uow.add_event(SomethingHappened(value=1))
            raise ValueError("validation failed")

    assert seen == []
    assert not transaction.get_connection().in_atomic_block
