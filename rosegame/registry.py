"""Entity registry: entity handles, component storage, views and change signals."""

from __future__ import annotations

import itertools
from collections import defaultdict
from collections.abc import Callable, Hashable
from typing import Any

Handler = Callable[["Registry", Hashable], None]


class Signal:
    """Handlers called with (registry, entity) when a component changes."""

    def __init__(self) -> None:
        self._handlers: list[Handler] = []

    def connect(self, handler: Handler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Handler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, registry: Registry, entity: Hashable) -> None:
        for handler in list(self._handlers):
            handler(registry, entity)


class Registry:
    """Owns entities and their components, one component of each type per entity."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._alive: set[int] = set()
        self._storages: dict[type, dict[int, Any]] = {}
        self._construct: defaultdict[type, Signal] = defaultdict(Signal)
        self._destroy: defaultdict[type, Signal] = defaultdict(Signal)
        self._update: defaultdict[type, Signal] = defaultdict(Signal)

    def create(self) -> int:
        """Create a new entity with no components."""
        entity = next(self._ids)
        self._alive.add(entity)
        return entity

    def destroy(self, entity: int) -> None:
        """Remove every component of the entity, then release it."""
        if not self.valid(entity):
            raise ValueError(f"entity {entity!r} is not valid")
        while True:
            kinds = [kind for kind, storage in self._storages.items() if entity in storage]
            if not kinds:
                break
            for kind in kinds:
                self.remove(entity, kind)
        self._alive.discard(entity)

    def valid(self, entity: Any) -> bool:
        return entity in self._alive

    def emplace(self, entity: int, component: Any) -> Any:
        """Attach a component, keyed by its type, and signal its construction."""
        if not self.valid(entity):
            raise ValueError(f"entity {entity!r} is not valid")
        kind = type(component)
        storage = self._storages.setdefault(kind, {})
        if entity in storage:
            raise ValueError(f"entity {entity!r} already has a {kind.__name__}")
        storage[entity] = component
        self._construct[kind].emit(self, entity)
        return component

    def get(self, entity: int, kind: type) -> Any:
        try:
            return self._storages.get(kind, {})[entity]
        except KeyError:
            raise KeyError(f"entity {entity!r} has no {kind.__name__}") from None

    def try_get(self, entity: int, kind: type) -> Any | None:
        return self._storages.get(kind, {}).get(entity)

    def get_or_emplace(self, entity: int, kind: type, *args: Any) -> Any:
        """The entity's component of this type, created from args if missing."""
        component = self.try_get(entity, kind)
        if component is None:
            component = self.emplace(entity, kind(*args))
        return component

    def has(self, entity: int, kind: type) -> bool:
        return entity in self._storages.get(kind, {})

    def remove(self, entity: int, kind: type) -> bool:
        """Detach a component, signalling before it goes; False if there was none."""
        storage = self._storages.get(kind, {})
        if entity not in storage:
            return False
        self._destroy[kind].emit(self, entity)
        storage.pop(entity, None)
        return True

    def patch(self, entity: int, kind: type) -> Any:
        """Signal that the entity's component of this type has changed."""
        component = self.get(entity, kind)
        self._update[kind].emit(self, entity)
        return component

    def view(self, *args: type, exclude: tuple[type, ...] = ()) -> list[int]:
        """Entities having every given type and none excluded, in the first type's order."""
        if not args:
            raise TypeError("view needs at least one component type")
        first, *rest = args
        return [
            entity
            for entity in self._storages.get(first, {})
            if all(entity in self._storages.get(kind, {}) for kind in rest)
            and not any(entity in self._storages.get(kind, {}) for kind in exclude)
        ]

    def sort(self, kind: type, key: Callable[[Any], Any]) -> None:
        """Reorder the storage of a type by a key of its components (stable)."""
        storage = self._storages.get(kind)
        if storage:
            self._storages[kind] = dict(sorted(storage.items(), key=lambda item: key(item[1])))

    def components_of(self, entity: int) -> list[Any]:
        return [storage[entity] for storage in self._storages.values() if entity in storage]

    def on_construct(self, kind: type) -> Signal:
        return self._construct[kind]

    def on_destroy(self, kind: type) -> Signal:
        return self._destroy[kind]

    def on_update(self, kind: type) -> Signal:
        return self._update[kind]