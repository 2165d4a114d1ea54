"""Camera selection and the world-to-screen projection of sprites."""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable, Mapping
from dataclasses import dataclass

import numpy as np

from rosegame.components import CameraComponent, DisableComponent, SpriteComponent
from rosegame.entity import EntitySystem
from rosegame.transform import TransformComponent, get_position

logger = logging.getLogger(__name__)

QUAD_INDICES = (0, 1, 2, 0, 2, 3)
DEFAULT_TEX_COORDS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
DEFAULT_CAMERA_HEIGHT = 10.0


@dataclass(frozen=True)
class TextureInfo:
    """Pixel size of a texture and how many pixels make one world unit."""

    width: int
    height: int
    ppu: float = 1.0


@dataclass(frozen=True)
class SpriteQuad:
    """A sprite projected to screen space, ready to be drawn as two triangles."""

    entity: Hashable
    texture: str
    layer: int
    positions: tuple[tuple[float, float], ...]
    tex_coords: tuple[tuple[float, float], ...]
    color: tuple[int, int, int, int]
    indices: tuple[int, ...] = QUAD_INDICES


def _color_byte(value: float) -> int:
    return int(max(0.0, min(255.0, value * 255)))


class RendererSystem:
    """Chooses the active camera and projects enabled sprites onto the screen."""

    def __init__(self, entities: EntitySystem, *, editor_mode: bool = False) -> None:
        self._registry = entities.registry
        self.camera: Hashable | None = None
        self.world_to_screen_matrix = np.identity(3)
        self.aspect_ratio = 0.0
        self.editor_mode = editor_mode
        self.editor_view_pos = np.zeros(2)
        self.editor_view_height = DEFAULT_CAMERA_HEIGHT

    def set_camera(self, camera: Hashable | None) -> None:
        self.camera = camera

    def screen_to_world_matrix(self) -> np.ndarray:
        return np.linalg.inv(self.world_to_screen_matrix)

    def _camera_transform(self) -> TransformComponent | None:
        if not self._registry.valid(self.camera):
            return None
        return self._registry.try_get(self.camera, TransformComponent)

    def _camera_component(self) -> CameraComponent | None:
        if not self._registry.valid(self.camera):
            return None
        return self._registry.try_get(self.camera, CameraComponent)

    def _choose_camera(self) -> None:
        registry = self._registry
        cam_trx = self._camera_transform()
        cam = self._camera_component()
        cameras = registry.view(CameraComponent, TransformComponent)
        if cam_trx is None or cam is None or not cam.start_camera:
            for entity in cameras:
                if registry.get(entity, CameraComponent).start_camera:
                    self.set_camera(entity)
                    break
        if cam_trx is None and cameras:
            logger.error("No Starting Camera Assigned")
            self.set_camera(cameras[-1])

    def _camera_to_world(self, cam_trx: TransformComponent) -> np.ndarray:
        if self.editor_mode:
            px, py = (float(v) for v in self.editor_view_pos)
            return np.array([[1.0, 0.0, px], [0.0, 1.0, py], [0.0, 0.0, 1.0]])
        angle = math.radians(float(cam_trx.global_rotation))
        c, s = math.cos(angle), math.sin(angle)
        px, py = (float(v) for v in cam_trx.global_position[:2])
        return np.array([[c, -s, px], [s, c, py], [0.0, 0.0, 1.0]])

    def render(
        self,
        window_size: tuple[float, float],
        textures: Mapping[str, TextureInfo],
    ) -> list[SpriteQuad]:
        """Project every enabled sprite with a known texture, lowest layer first.

        Returns no quads when there is no camera to look through.
        """
        width, height = (float(v) for v in window_size)
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {window_size!r}")
        registry = self._registry
        registry.sort(SpriteComponent, key=lambda sprite: sprite.layer)
        self._choose_camera()

        cam_trx = self._camera_transform()
        cam = self._camera_component()
        if cam_trx is None or cam is None:
            logger.error("No Camera Found")
            return []

        cam_height = float(cam.height)
        if self.editor_mode:
            self.editor_view_height = min(max(self.editor_view_height, 0.01), 50.0)
            cam_height = self.editor_view_height

        world_to_cam = np.linalg.inv(self._camera_to_world(cam_trx))
        self.aspect_ratio = width / height
        cam_width = self.aspect_ratio * cam_height
        translate = np.array(
            [[1.0, 0.0, cam_width / 2], [0.0, -1.0, cam_height / 2], [0.0, 0.0, 1.0]]
        )
        scale = np.diag([width / cam_width, height / cam_height, 1.0])
        world_to_screen = scale @ translate @ world_to_cam
        self.world_to_screen_matrix = world_to_screen

        quads = []
        for entity in registry.view(SpriteComponent, TransformComponent, exclude=(DisableComponent,)):
            sprite = registry.get(entity, SpriteComponent)
            texture = textures.get(sprite.sprite)
            if texture is None:
                continue
            trx = registry.get(entity, TransformComponent)
            rect = sprite.source_rect
            if rect is not None:
                tex_w, tex_h = float(rect[2]), float(rect[3])
            else:
                tex_w, tex_h = float(texture.width), float(texture.height)
            view = world_to_screen @ np.asarray(trx.matrix_l2w, dtype=float)
            ex = tex_w / float(texture.ppu) / 2.0
            ey = tex_h / float(texture.ppu) / 2.0
            corners = ((-ex, ey), (ex, ey), (ex, -ey), (-ex, -ey))
            positions = tuple(
                tuple(float(v) for v in get_position(view, np.array(corner))[:2])
                for corner in corners
            )
            if rect is not None:
                u = rect[0] / texture.width
                v = rect[1] / texture.height
                du = rect[2] / texture.width
                dv = rect[3] / texture.height
                tex_coords = ((u, v), (u + du, v), (u + du, v + dv), (u, v + dv))
            else:
                tex_coords = DEFAULT_TEX_COORDS
            quads.append(
                SpriteQuad(
                    entity=entity,
                    texture=sprite.sprite,
                    layer=sprite.layer,
                    positions=positions,
                    tex_coords=tuple((float(a), float(b)) for a, b in tex_coords),
                    color=tuple(_color_byte(c) for c in sprite.color),
                )
            )
        return quads

    def init_loaded(self) -> None:
        """Look through the first start camera of a freshly loaded level."""
        registry = self._registry
        for entity in registry.view(CameraComponent, TransformComponent):
            camera = registry.get(entity, CameraComponent)
            if camera.start_camera:
                self.set_camera(entity)
                if self.editor_mode:
                    self.editor_view_height = float(camera.height)
                    trx = registry.get(entity, TransformComponent)
                    self.editor_view_pos = np.array(trx.global_position[:2], dtype=float)
                break