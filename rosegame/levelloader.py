"""Loading and saving levels as YAML lists of entity nodes."""

from __future__ import annotations

from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

import yaml

from rosegame.components import (
    AnimationComponent,
    CameraComponent,
    DisableComponent,
    GUIDComponent,
    HitBoxComponent,
    HurtBoxComponent,
    InputComponent,
    PhysicsBodyComponent,
    ScriptComponent,
    SendEventsToParentComponent,
    SpriteComponent,
)
from rosegame.entity import EntitySystem
from rosegame.transform import TransformComponent

_SERIALIZED = (
    ("Guid", GUIDComponent),
    ("Disabled", DisableComponent),
    ("Transform", TransformComponent),
    ("Sprite", SpriteComponent),
    ("Camera", CameraComponent),
    ("PhysicsBody", PhysicsBodyComponent),
    ("Animation", AnimationComponent),
    ("Script", ScriptComponent),
    ("SendEventsToParent", SendEventsToParentComponent),
    ("Input", InputComponent),
    ("HitBox", HitBoxComponent),
    ("HurtBox", HurtBoxComponent),
)


class LevelLoader:
    """Reads level files into the entity system and writes the current level back out."""

    def __init__(self, entities: EntitySystem) -> None:
        self._entities = entities
        self.current_level_file = ""

    def load_level(self, path: str | PathLike) -> list[int]:
        """Create the entities described in a level file; returns them in file order."""
        path = Path(path)
        with path.open(encoding="utf-8") as stream:
            data = yaml.safe_load(stream)
        created = self.deserialize_level(data)
        self.current_level_file = str(path)
        return created

    def save_level(self, path: str | PathLike) -> None:
        """Write every entity with a transform to a level file."""
        text = yaml.safe_dump(self.serialize_level(), sort_keys=False)
        Path(path).write_text(text, encoding="utf-8")

    def unload_level(self) -> None:
        self._entities.destroy_all_entities()

    def serialize_level(self) -> list[dict]:
        """Entity nodes for every entity with a transform, parents before children."""
        registry = self._entities.registry
        registry.sort(TransformComponent, key=lambda trx: trx.level)
        return [
            self._serialize_entity(entity)
            for entity in registry.view(TransformComponent, GUIDComponent)
        ]

    def _serialize_entity(self, entity: int) -> dict:
        registry = self._entities.registry
        node: dict[str, Any] = {"Type": "Entity"}
        for name, kind in _SERIALIZED:
            component = registry.try_get(entity, kind)
            if component is not None:
                node[name] = component.serialize()
        return node

    def deserialize_level(self, nodes: Any) -> list[int]:
        """Create an entity for every node whose Type is Entity; other nodes are skipped."""
        if isinstance(nodes, Mapping):
            items = nodes.values()
        elif isinstance(nodes, list):
            items = nodes
        else:
            items = ()
        return [
            self._entities.deserialize_entity(node)
            for node in items
            if isinstance(node, Mapping) and node.get("Type") == "Entity"
        ]