"""Turns contacts between hit boxes and hurt boxes of different factions into hits."""

from __future__ import annotations

from rosegame.collision import ContactListener, PhysicsEvent
from rosegame.components import HitBoxComponent, HurtBoxComponent
from rosegame.events import EntityEvent, EntityEventSystem
from rosegame.registry import Registry


class CombatSystem:
    """Queues a "Hit" event on a hurt box touched by another faction's hit box."""

    def __init__(
        self,
        registry: Registry,
        events: EntityEventSystem,
        listener: ContactListener | None = None,
    ) -> None:
        self._registry = registry
        self._events = events
        if listener is not None:
            listener.subscribe(self.on_physics_event)

    def _check(self, hitter, target) -> None:
        hit_box = self._registry.try_get(hitter, HitBoxComponent)
        hurt_box = self._registry.try_get(target, HurtBoxComponent)
        if hit_box is not None and hurt_box is not None and hit_box.faction != hurt_box.faction:
            self._events.queue_event(EntityEvent(target, "Hit"))

    def on_physics_event(self, event: PhysicsEvent) -> None:
        if not event.begin:
            return
        a, b = event.contact.entity_a, event.contact.entity_b
        self._check(a, b)
        self._check(b, a)