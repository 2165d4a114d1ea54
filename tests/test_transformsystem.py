import numpy as np
import pytest

from rosegame.components import GUIDComponent
from rosegame.entity import EntitySystem
from rosegame.transform import TransformComponent, get_position
from rosegame.transformsystem import (
    TransformSystem,
    calc_matrix,
    move_to_world_space,
)


@pytest.fixture
def world():
    entities = EntitySystem()
    system = TransformSystem(entities)
    return entities, system


def spawn(entities, name="", **kwargs):
    entity = entities.create_entity()
    entities.registry.get(entity, GUIDComponent).name = name
    entities.registry.emplace(entity, TransformComponent(**kwargs))
    return entity


def test_created_transform_has_globals(world):
    entities, _ = world
    e = spawn(entities, position=(1.0, 2.0))
    trx = entities.registry.get(e, TransformComponent)
    assert np.allclose(trx.global_position, [1.0, 2.0])
    assert trx.level == 0


def test_reparent_keeps_world_placement(world):
    entities, _ = world
    parent = spawn(entities, position=(1.0, 2.0), scale=(2.0, 2.0), rotation=90.0)
    child = spawn(entities, position=(3.0, 0.0))
    child_trx = entities.registry.get(child, TransformComponent)
    before = child_trx.matrix_l2w.copy()
    assert entities.level_tree.try_set_parent(child, parent)
    parent_trx = entities.registry.get(parent, TransformComponent)
    assert child_trx.level == parent_trx.level + 1
    assert child_trx.parent == parent
    assert np.allclose(child_trx.matrix_l2w, before)
    assert np.allclose(get_position(parent_trx.matrix_l2w, child_trx.position), child_trx.global_position)


def test_remove_parent_restores_world_values(world):
    entities, _ = world
    parent = spawn(entities, position=(4.0, -1.0), rotation=30.0)
    child = spawn(entities, position=(2.0, 2.0))
    entities.level_tree.try_set_parent(child, parent)
    child_trx = entities.registry.get(child, TransformComponent)
    before = child_trx.global_position.copy()
    entities.level_tree.remove_parent(child)
    assert child_trx.level == 0
    assert child_trx.parent is None
    assert np.allclose(child_trx.position, before)
    assert np.allclose(child_trx.global_position, before)


def test_update_follows_parent(world):
    entities, system = world
    parent = spawn(entities)
    child = spawn(entities, position=(1.0, 0.0))
    entities.level_tree.try_set_parent(child, parent)
    parent_trx = entities.registry.get(parent, TransformComponent)
    child_trx = entities.registry.get(child, TransformComponent)
    parent_trx.position = np.array([5.0, 5.0])
    system.update()
    assert np.allclose(parent_trx.global_position, [5.0, 5.0])
    assert np.allclose(child_trx.global_position, get_position(parent_trx.matrix_l2w, child_trx.position))


def test_calc_matrix_matches_component():
    trx = TransformComponent(position=(1.0, 2.0), scale=(2.0, 3.0), rotation=30.0)
    matrix = calc_matrix(trx)
    trx.calc_matrix()
    assert np.allclose(matrix, trx.matrix_l2w)


def test_move_to_world_space_copies_globals():
    trx = TransformComponent()
    trx.global_position = np.array([4.0, 5.0])
    trx.global_scale = np.array([2.0, 2.0])
    trx.global_rotation = 45.0
    move_to_world_space(trx)
    assert np.allclose(trx.position, [4.0, 5.0])
    assert np.allclose(trx.scale, [2.0, 2.0])
    assert trx.rotation == pytest.approx(45.0)
    assert np.allclose(trx.global_position, [4.0, 5.0])


def test_get_child(world):
    entities, system = world
    parent = spawn(entities, name="parent")
    child = spawn(entities, name="hand")
    entities.level_tree.try_set_parent(child, parent)
    assert system.get_child(parent, "hand") == child
    assert system.get_child(parent, "foot") is None