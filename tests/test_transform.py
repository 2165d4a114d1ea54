import numpy as np
import pytest

from rosegame.transform import (
    TransformComponent,
    get_dir,
    get_position,
    get_rotation,
    get_scale,
    make_rot_matrix,
    make_scale_matrix,
    mat3,
)


def test_mat3_forms():
    assert np.array_equal(mat3(), np.identity(3))
    assert np.array_equal(mat3(0), np.zeros((3, 3)))
    m = mat3(1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert m[0, 2] == 3 and m[2, 0] == 7


def test_mat3_bad_arity():
    with pytest.raises(ValueError):
        mat3(1, 2)


def test_translation_moves_point():
    m = mat3(1, 0, 5, 0, 1, -3, 0, 0, 1)
    assert np.allclose(get_position(m, (1, 1)), [6, -2])
    assert np.allclose(get_dir(m, (1, 1)), [1, 1])


@pytest.mark.parametrize("angle", [0.0, 30.0, 135.0, 270.0])
def test_rotation_round_trip(angle):
    assert get_rotation(make_rot_matrix(angle)) == pytest.approx(angle, abs=1e-9)


def test_rotation_with_extra_angle():
    assert get_rotation(make_rot_matrix(30.0), 45.0) == pytest.approx(
        get_rotation(make_rot_matrix(75.0))
    )


def test_rotation_is_wrapped():
    value = get_rotation(make_rot_matrix(-45.0))
    assert 0.0 <= value < 360.0
    assert value == pytest.approx(get_rotation(make_rot_matrix(315.0)))


def test_scale_round_trip():
    m = make_rot_matrix(40.0) @ make_scale_matrix((2.0, 0.5))
    assert np.allclose(get_scale(m), [2.0, 0.5])


def test_rotation_preserves_direction_length():
    d = get_dir(make_rot_matrix(73.0), (3.0, 4.0))
    assert np.linalg.norm(d) == pytest.approx(5.0)


def test_new_transform_matrix_is_zero():
    t = TransformComponent()
    assert not t.matrix_l2w.any()


def test_update_globals_without_parent():
    t = TransformComponent(position=(3, 4), scale=(2, 2), rotation=30)
    t.update_globals()
    assert np.allclose(t.global_position, [3, 4])
    assert np.allclose(t.global_scale, [2, 2])
    assert t.global_rotation == pytest.approx(30)


def test_rotation_wrapped_by_calc_matrix():
    t = TransformComponent(rotation=-90)
    t.calc_matrix()
    assert 0.0 <= t.rotation < 360.0
    assert t.rotation == pytest.approx(get_rotation(make_rot_matrix(-90)))


def test_child_global_position_follows_parent():
    parent = TransformComponent(position=(10, 0), rotation=90, scale=(2, 2))
    parent.update_globals()
    child = TransformComponent(position=(1, 2))
    child.update_globals(parent)
    assert np.allclose(child.global_position, get_position(parent.matrix_l2w, child.position))


def test_scale_sign_combines_with_parent():
    parent = TransformComponent(scale=(-1, 1))
    parent.update_globals()
    child = TransformComponent(scale=(1, 1))
    child.update_globals(parent)
    assert np.array_equal(child.scale_sign, [-1, 1])


def test_update_locals_without_parent():
    t = TransformComponent()
    t.update_globals()
    t.global_position = np.array([3.0, 4.0])
    t.global_rotation = 90.0
    t.update_locals()
    assert np.allclose(t.position, [3, 4])
    assert t.rotation == pytest.approx(90.0)
    assert np.allclose(t.global_scale, t.scale)


def test_update_locals_with_parent_round_trip():
    parent = TransformComponent(position=(5, -2), rotation=30, scale=(2, 2))
    parent.update_globals()
    child = TransformComponent(position=(1, 1))
    child.update_globals(parent)
    target = child.global_position + np.array([1.0, 0.5])
    child.global_position = target.copy()
    child.update_locals(parent)
    child.update_globals(parent)
    assert np.allclose(child.global_position, target)
    assert np.allclose(child.scale, [1, 1])


def test_serialize_round_trip():
    t = TransformComponent(position=(1.5, -2), scale=(3, 4), rotation=45)
    back = TransformComponent.from_node(t.serialize())
    assert np.allclose(back.position, t.position)
    assert np.allclose(back.scale, t.scale)
    assert back.rotation == t.rotation


def test_from_empty_node_defaults():
    t = TransformComponent.from_node({})
    assert np.array_equal(t.position, [0, 0])
    assert np.array_equal(t.scale, [1, 1])
    assert t.rotation == 0