"""Events addressed to entities, queued and delivered to their scripts."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Hashable
from dataclasses import dataclass

from rosegame.components import ScriptComponent, SendEventsToParentComponent
from rosegame.registry import Registry
from rosegame.transform import TransformComponent


@dataclass
class EntityEvent:
    """A named event for an entity, optionally naming another entity as target."""

    entity: Hashable
    name: str
    target: Hashable | None = None
    input_key: str = ""
    call_event_from: Hashable | None = None

    def __post_init__(self) -> None:
        if self.call_event_from is None:
            self.call_event_from = self.entity


class EntityEventSystem:
    """Queues entity events and hands them to scripts once per frame."""

    def __init__(
        self,
        registry: Registry,
        dispatch: Callable[[EntityEvent], None] | None = None,
    ) -> None:
        self._registry = registry
        self.dispatch = dispatch
        self.pending: deque[EntityEvent] = deque()

    def queue_event(self, event: EntityEvent) -> None:
        self.pending.append(event)

    def _deliver(self, event: EntityEvent) -> None:
        if self.dispatch is not None:
            self.dispatch(event)

    def update(self) -> None:
        """Deliver every queued event, including ones queued while delivering."""
        registry = self._registry
        while self.pending:
            event = self.pending.popleft()
            if not registry.valid(event.entity):
                continue
            if registry.has(event.entity, ScriptComponent):
                self._deliver(event)
            elif registry.has(event.entity, SendEventsToParentComponent):
                trx = registry.get(event.entity, TransformComponent)
                if trx.parent is not None and registry.has(trx.parent, ScriptComponent):
                    event.call_event_from = trx.parent
                    self._deliver(event)