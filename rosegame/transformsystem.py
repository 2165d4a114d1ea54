"""Keeps entity transforms in step with the hierarchy and refreshes their world values."""

from __future__ import annotations

import math

import numpy as np

from rosegame.components import GUIDComponent
from rosegame.entity import EntitySystem
from rosegame.registry import Registry
from rosegame.transform import (
    TransformComponent,
    get_position,
    get_rotation,
    get_scale,
    mat3,
)


def move_to_world_space(trx: TransformComponent) -> None:
    """Make the transform's local values equal to its current world values."""
    trx.position = np.array(trx.global_position, dtype=float)
    trx.scale = np.array(trx.global_scale, dtype=float)
    trx.rotation = float(trx.global_rotation)
    trx.update_globals()


def move_to_parent_space(child: TransformComponent, parent: TransformComponent) -> None:
    """Express the child's world placement relative to the parent, keeping it in place."""
    world_to_parent = np.linalg.inv(parent.matrix_l2w)
    child_to_parent = world_to_parent @ child.matrix_l2w
    child.position = get_position(child_to_parent)
    child.scale = get_scale(child_to_parent)
    child.rotation = get_rotation(child_to_parent)
    child.update_globals(parent)


def calc_matrix(trx: TransformComponent) -> np.ndarray:
    """The local matrix of a transform: translation, rotation and scale combined."""
    c = math.cos(math.radians(trx.rotation))
    s = math.sin(math.radians(trx.rotation))
    sx, sy = trx.scale
    px, py = trx.position
    return mat3(c * sx, -s * sy, px, s * sx, c * sy, py, 0, 0, 1)


class TransformSystem:
    """Reacts to new transforms and reparenting, and updates world values each frame."""

    def __init__(self, entities: EntitySystem) -> None:
        self._registry = entities.registry
        self._tree = entities.level_tree
        self._registry.on_construct(TransformComponent).connect(self._transform_created)
        self._registry.on_update(GUIDComponent).connect(self._parent_updated)

    def _parent_transform(self, trx: TransformComponent) -> TransformComponent | None:
        if trx.parent is None:
            return None
        return self._registry.try_get(trx.parent, TransformComponent)

    def _transform_created(self, registry: Registry, entity: int) -> None:
        trx = registry.get(entity, TransformComponent)
        guid = registry.try_get(entity, GUIDComponent)
        trx.parent = guid.parent if guid is not None else None
        parent = self._parent_transform(trx)
        if parent is not None:
            trx.level = parent.level + 1
        trx.update_globals(parent)

    def _parent_updated(self, registry: Registry, entity: int) -> None:
        trx = registry.try_get(entity, TransformComponent)
        if trx is None:
            return
        guid = registry.get(entity, GUIDComponent)
        trx.parent = None
        trx.level = 0
        move_to_world_space(trx)
        trx.parent = guid.parent
        if trx.parent is not None:
            parent = registry.get(trx.parent, TransformComponent)
            trx.level = parent.level + 1
            move_to_parent_space(trx, parent)

    def update(self) -> None:
        """Recompute world values, parents before their children."""
        self._registry.sort(TransformComponent, key=lambda t: t.level)
        for entity in self._registry.view(TransformComponent):
            trx = self._registry.get(entity, TransformComponent)
            trx.update_globals(self._parent_transform(trx))

    def get_child(self, entity: int, name: str) -> int | None:
        return self._tree.get_child(entity, name)