"""Contacts between physics bodies, turned into physics and sensor events."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass

from rosegame.events import EntityEvent, EntityEventSystem


@dataclass(frozen=True)
class Contact:
    """Two touching bodies' entities and whether each is a sensor."""

    entity_a: Hashable
    entity_b: Hashable
    sensor_a: bool = False
    sensor_b: bool = False


@dataclass(frozen=True)
class PhysicsEvent:
    """A contact that began (begin=True) or ended."""

    contact: Contact
    begin: bool


class ContactListener:
    """Broadcasts physics events and queues sensor events for the entities involved."""

    def __init__(self, events: EntityEventSystem) -> None:
        self._events = events
        self._handlers: list[Callable[[PhysicsEvent], None]] = []

    def subscribe(self, handler: Callable[[PhysicsEvent], None]) -> None:
        self._handlers.append(handler)

    def _emit(self, event: PhysicsEvent) -> None:
        for handler in list(self._handlers):
            handler(event)

    def _sensor_events(self, contact: Contact, toucher: str, touched: str) -> None:
        a, b = contact.entity_a, contact.entity_b
        if contact.sensor_b:
            self._events.queue_event(EntityEvent(a, toucher, target=b))
            self._events.queue_event(EntityEvent(b, touched, target=a))
        if contact.sensor_a:
            self._events.queue_event(EntityEvent(b, toucher, target=a))
            self._events.queue_event(EntityEvent(a, touched, target=b))

    def begin_contact(self, contact: Contact) -> None:
        self._emit(PhysicsEvent(contact, True))
        self._sensor_events(contact, "EnteringSensor", "SensorEntered")

    def end_contact(self, contact: Contact) -> None:
        self._emit(PhysicsEvent(contact, False))
        self._sensor_events(contact, "ExitingSensor", "SensorExited")