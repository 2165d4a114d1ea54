"""Entity scripts, the functions they may call, and the system that runs them."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import numpy as np

from rosegame.components import (
    AnimationComponent,
    DisableComponent,
    GUIDComponent,
    PhysicsBodyComponent,
    ScriptComponent,
)
from rosegame.disable import DisableSystem
from rosegame.entity import EntitySystem
from rosegame.events import EntityEvent
from rosegame.registry import Registry
from rosegame.transform import TransformComponent


class Script:
    """Behaviour attached to an entity; every hook does nothing unless overridden."""

    def setup(self, api: ScriptApi, owner: int) -> None:
        """Called once, on the frame after the script is attached."""

    def update(self, api: ScriptApi, owner: int, dt: float) -> None:
        """Called every frame the owner is enabled."""

    def on_event(self, api: ScriptApi, owner: int, event: EntityEvent) -> None:
        """Called for every event delivered to the owner."""


class OrbScript(Script):
    """Plays the explosion animation when something enters the orb's sensor."""

    def on_event(self, api: ScriptApi, owner: int, event: EntityEvent) -> None:
        if event.name == "SensorEntered":
            api.play_anim(owner, "OrbExplodeAnim")


class SpawnerScript(Script):
    """Spawns a physics body every few seconds."""

    def __init__(self) -> None:
        self.spawn_delay = 5.0
        self.current_time = 0.0

    def setup(self, api: ScriptApi, owner: int) -> None:
        self.spawn_delay = 5.0
        self.current_time = 0.0

    def update(self, api: ScriptApi, owner: int, dt: float) -> None:
        self.current_time += dt
        if self.current_time > self.spawn_delay:
            self.current_time = 0.0
            entity = api.entities.create_entity()
            api.entities.registry.emplace(entity, TransformComponent())
            api.entities.registry.emplace(entity, PhysicsBodyComponent())


class ScriptApi:
    """The engine functions available to scripts."""

    no_entity = None

    def __init__(self, entities: EntitySystem, disable_system: DisableSystem) -> None:
        self.entities = entities
        self._disable = disable_system
        self.pending_destroy: set[int] = set()

    @property
    def _registry(self) -> Registry:
        return self.entities.registry

    def _parent_transform(self, trx: TransformComponent) -> TransformComponent | None:
        if trx.parent is None:
            return None
        return self._registry.try_get(trx.parent, TransformComponent)

    def get_child(self, entity: int, name: str) -> int | None:
        return self.entities.level_tree.get_child(entity, name)

    def move(self, entity: int, x: Any, y: float | None = None) -> None:
        """Move an entity in world space by (x, y), or by the pair x."""
        if y is None:
            x, y = x
        trx = self._registry.get(entity, TransformComponent)
        trx.global_position = np.asarray(trx.global_position, dtype=float) + np.array(
            [float(x), float(y)]
        )
        trx.update_locals(self._parent_transform(trx))

    def face(self, entity: int, direction: int) -> None:
        """Flip the entity horizontally so it faces the sign of direction."""
        trx = self._registry.get(entity, TransformComponent)
        trx.scale = np.array([abs(float(trx.scale[0])) * direction, float(trx.scale[1])])
        trx.update_globals(self._parent_transform(trx))

    def play_anim(self, entity: int, name: str) -> None:
        if self.entities.entity_exists(entity):
            animation = self._registry.try_get(entity, AnimationComponent)
            if animation is not None:
                animation.play(name)

    def disable(self, entity: int) -> None:
        self._disable.disable(entity)

    def enable(self, entity: int) -> None:
        self._disable.enable(entity)

    def get_name(self, entity: int) -> str:
        return self._registry.get(entity, GUIDComponent).name

    def destroy(self, entity: int) -> None:
        """Destroy the entity at the end of the current script update."""
        self.pending_destroy.add(entity)

    def find(self, name: str) -> int | None:
        return self.entities.level_tree.find_entity(name)

    def get_position(self, entity: int) -> np.ndarray:
        return np.array(self._registry.get(entity, TransformComponent).global_position, dtype=float)


class ScriptSystem:
    """Attaches scripts named by ScriptComponents and runs their hooks."""

    def __init__(
        self,
        entities: EntitySystem,
        disable_system: DisableSystem,
        *,
        time_system: Any = None,
        library: Mapping[str, Callable[[], Script]] | None = None,
    ) -> None:
        self._entities = entities
        self._registry = entities.registry
        self._time = time_system
        self.library: dict[str, Callable[[], Script]] = dict(library or {})
        self.api = ScriptApi(entities, disable_system)
        self._states: dict[int, dict[str, Script]] = {}
        self._setup_next_frame: set[int] = set()
        self._registry.on_construct(ScriptComponent).connect(self._script_created)
        self._registry.on_destroy(ScriptComponent).connect(self._script_destroyed)

    def _load(self, entity: int, name: str) -> None:
        factory = self.library.get(name)
        if factory is not None:
            self.add_script(entity, name, factory())

    def _script_created(self, registry: Registry, entity: int) -> None:
        component = registry.get(entity, ScriptComponent)
        for name in sorted(component.scripts):
            if name:
                self._load(entity, name)
        self._setup_next_frame.add(entity)

    def _script_destroyed(self, registry: Registry, entity: int) -> None:
        self._states.pop(entity, None)

    def _scripts(self, entity: int, names) -> list[Script]:
        states = self._states.get(entity, {})
        return [states[name] for name in sorted(names) if name in states]

    def update(self) -> None:
        """Set up newly attached scripts, update enabled ones, then apply destroys."""
        registry = self._registry
        api = self.api
        pending, self._setup_next_frame = self._setup_next_frame, set()
        for entity in sorted(pending):
            component = registry.try_get(entity, ScriptComponent) if registry.valid(entity) else None
            if component is not None:
                for script in self._scripts(entity, component.scripts):
                    script.setup(api, entity)

        dt = float(self._time.dt) if self._time is not None else 0.0
        for entity in registry.view(ScriptComponent, exclude=(DisableComponent,)):
            if entity in api.pending_destroy:
                continue
            component = registry.try_get(entity, ScriptComponent)
            if component is None:
                continue
            for name in sorted(component.scripts):
                if entity in api.pending_destroy:
                    break
                script = self._states.get(entity, {}).get(name)
                if script is not None:
                    script.update(api, entity, dt)

        doomed, api.pending_destroy = api.pending_destroy, set()
        for entity in sorted(doomed):
            self._entities.destroy_entity(entity)

    def call_event(self, event: EntityEvent) -> None:
        """Hand an event to every script of the entity it is called from."""
        entity = event.call_event_from
        component = self._registry.get(entity, ScriptComponent)
        for script in self._scripts(entity, component.scripts):
            script.on_event(self.api, entity, event)

    def add_script(self, entity: int, name: str, script: Script | type) -> None:
        if isinstance(script, type):
            script = script()
        self._states.setdefault(entity, {})[name] = script

    def refresh_script(self, entity: int) -> None:
        """Attach scripts newly named by the entity's component; set them up next frame."""
        component = self._registry.get(entity, ScriptComponent)
        states = self._states.setdefault(entity, {})
        for name in sorted(component.scripts):
            if name not in states:
                self._load(entity, name)
        self._setup_next_frame.add(entity)

    def remove_script(self, entity: int, name: str) -> None:
        component = self._registry.get(entity, ScriptComponent)
        if name in component.scripts:
            component.scripts.discard(name)
            self._states.get(entity, {}).pop(name, None)