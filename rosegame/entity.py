"""Entity lifetime: creation, identifiers, loading from level nodes, copying and destruction."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

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
    new_guid,
)
from rosegame.leveltree import LevelTree
from rosegame.registry import Registry
from rosegame.transform import TransformComponent

_COMPONENTS = (
    ("Disabled", DisableComponent),
    ("Transform", TransformComponent),
    ("PhysicsBody", PhysicsBodyComponent),
    ("Camera", CameraComponent),
    ("Animation", AnimationComponent),
    ("Sprite", SpriteComponent),
    ("Script", ScriptComponent),
    ("SendEventsToParent", SendEventsToParentComponent),
    ("Input", InputComponent),
    ("HitBox", HitBoxComponent),
    ("HurtBox", HurtBoxComponent),
)


def deserialize_components(node: Mapping, registry: Registry, entity: int) -> int:
    """Attach every component named in an entity node, in the engine's fixed order."""
    for name, kind in _COMPONENTS:
        if name in node:
            registry.emplace(entity, kind.from_node(node[name]))
    return entity


class EntitySystem:
    """Creates and destroys entities, tracking their identifiers and hierarchy."""

    def __init__(self) -> None:
        self.registry = Registry()
        self.level_tree = LevelTree(self.registry)
        self._entities: dict[int, int] = {}
        self._guids: dict[int, int] = {}

    def _track(self, entity: int, guid: int) -> None:
        self._entities[guid] = entity
        self._guids[entity] = guid
        self.level_tree.add_entity(entity)

    def create_entity(self) -> int:
        """A new entity with a fresh identifier, placed at the top of the hierarchy."""
        entity = self.registry.create()
        guid = self.registry.emplace(entity, GUIDComponent())
        self._track(entity, guid.id)
        return entity

    def deserialize_entity(self, node: Mapping[str, Any]) -> int:
        """Create an entity from a level node, linking it to an already loaded parent."""
        if "Guid" in node:
            guid_node = node["Guid"]
            guid = new_guid()
            if isinstance(guid_node, Mapping) and "id" in guid_node:
                guid = int(guid_node["id"])
            entity = self.registry.create()
            component = GUIDComponent.from_node(guid_node)
            component.id = guid
            self.registry.emplace(entity, component)
            self._track(entity, guid)
        else:
            entity = self.create_entity()

        parent_id = self.registry.get(entity, GUIDComponent).parent_id
        if self.guid_exists(parent_id):
            self.level_tree.try_set_parent(entity, self.get_entity(parent_id))
        return deserialize_components(node, self.registry, entity)

    def get_entity(self, guid: int) -> int | None:
        if guid == -1:
            return None
        return self._entities.get(guid)

    def get_entity_guid(self, entity: int | None) -> int:
        if entity is None:
            return -1
        return self._guids.get(entity, -1)

    def entity_exists(self, entity: int | None) -> bool:
        return self.registry.valid(entity)

    def guid_exists(self, guid: int) -> bool:
        return guid in self._entities and self.entity_exists(self._entities[guid])

    def destroy_all_entities(self) -> None:
        for entity in list(self._entities.values()):
            if self.registry.valid(entity):
                self.registry.destroy(entity)
        self._entities.clear()
        self._guids.clear()
        self.level_tree.clear()

    def destroy_entity(self, entity: int) -> None:
        """Destroy an entity and, first, all of its descendants."""
        if not self.entity_exists(entity):
            return
        node = self.level_tree.get_node(entity)
        if node is not None:
            for child in node.children:
                self.destroy_entity(child.element)
            self.level_tree.remove_entity(entity)
        guid = self._guids.pop(entity, None)
        if guid is not None:
            self._entities.pop(guid, None)
        self.registry.destroy(entity)

    def copy_entity(self, src: int, parent: int | None = None) -> int:
        """Duplicate an entity with its components and whole subtree; returns the copy."""
        entity = self.create_entity()
        self.registry.get(entity, GUIDComponent).name = self.registry.get(src, GUIDComponent).name
        if parent is not None:
            self.level_tree.try_set_parent(entity, parent)
        for component in self.registry.components_of(src):
            if not self.registry.has(entity, type(component)):
                self.registry.emplace(entity, copy.deepcopy(component))
        node = self.level_tree.get_node(src)
        for child in node.children if node is not None else ():
            self.copy_entity(child.element, entity)
        return entity