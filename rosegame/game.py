"""The game: every engine system wired together and stepped frame by frame."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from os import PathLike

from rosegame.collision import ContactListener
from rosegame.combat import CombatSystem
from rosegame.disable import DisableSystem
from rosegame.entity import EntitySystem
from rosegame.events import EntityEventSystem
from rosegame.inputsystem import InputSystem
from rosegame.levelloader import LevelLoader
from rosegame.renderer import RendererSystem, SpriteQuad, TextureInfo
from rosegame.scripting import Script, ScriptSystem
from rosegame.timesystem import TimeSystem
from rosegame.transformsystem import TransformSystem

logger = logging.getLogger(__name__)


class Game:
    """Owns the engine systems and runs them in the engine's fixed frame order."""

    def __init__(
        self,
        *,
        library: Mapping[str, Callable[[], Script]] | None = None,
        clock: Callable[[], int] | None = None,
        sleep: Callable[[int], None] | None = None,
        cap_frame_rate: bool = False,
        editor_mode: bool = False,
    ) -> None:
        self.entities = EntitySystem()
        registry = self.entities.registry
        self.loader = LevelLoader(self.entities)
        self.disable = DisableSystem(self.entities)
        self.events = EntityEventSystem(registry)
        self.time = TimeSystem(clock=clock, sleep=sleep, cap_frame_rate=cap_frame_rate)
        self.input = InputSystem(registry, self.events)
        self.renderer = RendererSystem(self.entities, editor_mode=editor_mode)
        self.scripts = ScriptSystem(
            self.entities, self.disable, time_system=self.time, library=library
        )
        self.events.dispatch = self.scripts.call_event
        self.transforms = TransformSystem(self.entities)
        self.contact_listener = ContactListener(self.events)
        self.combat = CombatSystem(registry, self.events, self.contact_listener)
        logger.info("Game constructed")

    def load_level(self, path: str | PathLike) -> list[int]:
        """Replace the current level with the one in path and pick its start camera."""
        self.loader.unload_level()
        created = self.loader.load_level(path)
        self.renderer.init_loaded()
        return created

    def update(
        self,
        pressed_keys: Iterable[int] = (),
        mouse_buttons: Iterable[int] = (),
        mouse_position=(0.0, 0.0),
    ) -> None:
        """Advance one frame given the keys and mouse buttons held down now."""
        self.time.update()
        self.transforms.update()
        self.input.update(pressed_keys, mouse_buttons, mouse_position)
        self.events.update()
        self.scripts.update()

    def render(
        self,
        window_size: tuple[float, float],
        textures: Mapping[str, TextureInfo],
    ) -> list[SpriteQuad]:
        return self.renderer.render(window_size, textures)