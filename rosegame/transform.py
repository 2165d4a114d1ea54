"""Transforms: local position, scale and rotation, and their world matrices."""

from __future__ import annotations

import math
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any

import numpy as np


def mat3(*args: float) -> np.ndarray:
    """A 3x3 matrix: identity, a scaled identity, or nine values row by row."""
    if not args:
        return np.identity(3)
    if len(args) == 1:
        return np.identity(3) * float(args[0])
    if len(args) == 9:
        return np.array(args, dtype=float).reshape(3, 3)
    raise ValueError(f"mat3 takes 0, 1 or 9 values, got {len(args)}")


def _wrap_degrees(angle: float) -> float:
    return (angle + 360.0) % 360.0


def get_scale(matrix: np.ndarray) -> np.ndarray:
    """Length of the matrix's two axis columns."""
    m = np.asarray(matrix, dtype=float)
    return np.array([math.hypot(m[0, 0], m[1, 0]), math.hypot(m[0, 1], m[1, 1])])


def get_rotation(matrix: np.ndarray, angle: float | None = None) -> float:
    """Rotation in degrees [0, 360) of the matrix, optionally after a further rotation."""
    m = np.asarray(matrix, dtype=float)
    if angle is not None:
        m = m @ make_rot_matrix(angle)
    return _wrap_degrees(math.degrees(math.atan2(m[1, 0], m[0, 0])))


def get_position(matrix: np.ndarray, local_pos=(0.0, 0.0)) -> np.ndarray:
    """Transform a point by the matrix."""
    point = np.array([local_pos[0], local_pos[1], 1.0])
    return (np.asarray(matrix, dtype=float) @ point)[:2]


def get_dir(matrix: np.ndarray, local_dir) -> np.ndarray:
    """Transform a direction by the matrix, ignoring translation."""
    vector = np.array([local_dir[0], local_dir[1], 0.0])
    return (np.asarray(matrix, dtype=float) @ vector)[:2]


def make_rot_matrix(angle: float) -> np.ndarray:
    """Rotation matrix for an angle in degrees."""
    c = math.cos(math.radians(angle))
    s = math.sin(math.radians(angle))
    return mat3(c, -s, 0, s, c, 0, 0, 0, 1)


def make_scale_matrix(scale) -> np.ndarray:
    """Scale matrix for a pair of axis scales."""
    return mat3(scale[0], 0, 0, 0, scale[1], 0, 0, 0, 1)


def _vec2(value: Any) -> np.ndarray:
    x, y = value
    return np.array([float(x), float(y)])


@dataclass(eq=False)
class TransformComponent:
    """Local transform of an entity plus its cached world-space values."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    scale: np.ndarray = field(default_factory=lambda: np.ones(2))
    rotation: float = 0.0
    parent: Hashable | None = field(default=None, init=False)
    matrix_l2w: np.ndarray = field(default_factory=lambda: mat3(0), init=False, repr=False)
    global_position: np.ndarray = field(default_factory=lambda: np.zeros(2), init=False)
    global_scale: np.ndarray = field(default_factory=lambda: np.zeros(2), init=False)
    scale_sign: np.ndarray = field(default_factory=lambda: np.ones(2), init=False)
    level: int = field(default=0, init=False)
    global_rotation: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.position = _vec2(self.position)
        self.scale = _vec2(self.scale)
        self.rotation = float(self.rotation)

    def calc_matrix(self, parent: TransformComponent | None = None) -> None:
        """Rebuild the local-to-world matrix, composed with the parent's if given."""
        translation = mat3(1, 0, self.position[0], 0, 1, self.position[1], 0, 0, 1)
        self.rotation = _wrap_degrees(self.rotation)
        local = translation @ make_rot_matrix(self.rotation) @ make_scale_matrix(self.scale)
        if parent is not None:
            local = parent.matrix_l2w @ local
        self.matrix_l2w = local

    def update_globals(self, parent: TransformComponent | None = None) -> None:
        """Recompute world position, scale, rotation and scale sign from local values."""
        self.calc_matrix(parent)
        self.global_position = get_position(self.matrix_l2w)
        self.global_scale = get_scale(self.matrix_l2w)
        self.global_rotation = _wrap_degrees(get_rotation(self.matrix_l2w))
        self.scale_sign = np.sign(self.scale)
        if parent is not None:
            self.scale_sign = parent.scale_sign * self.scale_sign

    def update_locals(self, parent: TransformComponent | None = None) -> None:
        """Recompute local values from the world position, rotation and scale."""
        self.global_rotation = _wrap_degrees(self.global_rotation)
        global_rot = make_rot_matrix(self.global_rotation)
        if parent is not None:
            world_to_parent = np.linalg.inv(parent.matrix_l2w)
            self.position = get_position(world_to_parent, self.global_position)
            local_rot = make_scale_matrix(self.scale) @ world_to_parent @ global_rot
            self.rotation = _wrap_degrees(get_rotation(local_rot))
            old_global_scale = get_scale(self.matrix_l2w)
            with np.errstate(divide="ignore", invalid="ignore"):
                self.scale = self.scale * (self.global_scale / old_global_scale)
        else:
            self.position = np.array(self.global_position, dtype=float)
            local_rot = make_scale_matrix(self.scale) @ global_rot
            self.rotation = _wrap_degrees(get_rotation(local_rot))
            self.global_scale = np.array(self.scale, dtype=float)
        self.calc_matrix(parent)

    def serialize(self) -> dict:
        return {
            "position": [float(v) for v in self.position],
            "scale": [float(v) for v in self.scale],
            "rotation": float(self.rotation),
        }

    @classmethod
    def from_node(cls, node: Any) -> TransformComponent:
        node = node if isinstance(node, dict) else {}
        component = cls()
        if "position" in node:
            component.position = _vec2(node["position"])
        if "scale" in node:
            component.scale = _vec2(node["scale"])
        if "rotation" in node:
            component.rotation = float(node["rotation"])
        return component