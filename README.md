# rosegame

`rosegame` is a small 2D game runtime built around an entity-component registry.
It keeps entities, their components and their parent/child hierarchy. It steps them
frame by frame and turns input and contacts into events for Python scripts. It loads
and saves levels as YAML, and projects sprites into screen-space quads that any drawing
library can paint.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Quick start

```python
from rosegame.game import Game
from rosegame.inputkeys import InputKey
from rosegame.renderer import TextureInfo

game = Game()
game.load_level("level.yaml")

# One frame: the keys held down, the mouse buttons held down, the mouse position.
game.update({InputKey.D}, set(), (0, 0))

# Screen-space quads for a 1200x675 window; sprites whose texture is unknown are skipped.
quads = game.render((1200, 675), textures={"block": TextureInfo(32, 32, ppu=32)})
for quad in quads:
    print(quad.entity, quad.texture, quad.positions, quad.tex_coords, quad.color)
```

`Game.update` runs these steps in order:

1. time
2. transforms
3. input
4. entity events, which are delivered to scripts
5. script updates

`Game` takes these keyword options:

- `library`: a mapping from script name to script factory
- `clock`: a function that returns milliseconds
- `sleep`: a function that waits for a number of milliseconds
- `cap_frame_rate`: wait so that frames run at no more than 60 per second
- `editor_mode`: render from a free editor view instead of the camera

## Modules

- `rosegame.registry`:
  - `Registry` creates and destroys entities and stores one component of each type per entity.
  - `view(*types, exclude=...)` lists the entities that have all the given types and none of the excluded ones.
  - `sort` reorders the entities of one component type.
  - `on_construct`, `on_destroy` and `on_update` return the `Signal` for a component type.
- `rosegame.components`: the component classes.
  - `GUIDComponent`, `DisableComponent`, `CameraComponent`, `SpriteComponent`
  - `PhysicsBodyComponent`, `AnimationComponent` (played through an `AnimationClip`)
  - `InputComponent`, `ScriptComponent`, `SendEventsToParentComponent`
  - `HitBoxComponent`, `HurtBoxComponent`

  Each has `serialize()` and `from_node(node)` for plain YAML-ready data.
- `rosegame.transform`:
  - `TransformComponent` holds a local position, scale and rotation (in degrees) and caches its world values.
  - Matrix helpers: `mat3`, `get_position`, `get_dir`, `get_scale`, `get_rotation`, `make_rot_matrix`, `make_scale_matrix`.
- `rosegame.leveltree`: `LevelTree` and `Node` hold the hierarchy.
  - `try_set_parent` refuses a move that would create a cycle.
  - `get_child` and `find_entity` look entities up by name.
- `rosegame.entity`: `EntitySystem` covers the life of an entity.
  - Creates entities and tracks their identifiers.
  - `deserialize_entity` builds an entity from a level node.
  - `copy_entity` copies an entity together with its subtree.
  - `destroy_entity` destroys an entity after its descendants.
- `rosegame.disable`: `DisableSystem` enables and disables entities. When an entity is disabled, its direct children are disabled too.
- `rosegame.transformsystem`: `TransformSystem` keeps transforms in step with reparenting, so an entity keeps its world placement when its parent changes. Each frame it refreshes world values, parents before children.
- `rosegame.timesystem`: `TimeSystem` measures the frame delta in seconds. The delta is capped at four 60 Hz frames.
- `rosegame.inputkeys`: the `InputKey` and `InputMouse` enums, with `key_name`, `mouse_button_name` and `key_scancode`.
- `rosegame.inputsystem`: `InputSystem` tracks whether each key is held, just pressed or just released. It queues these events for enabled entities with an `InputComponent`:
  - `KeyPressed`
  - `KeyReleased`
  - `MousePressed`
  - `MouseReleased`
- `rosegame.events`:
  - `EntityEvent` is an event addressed to an entity.
  - `EntityEventSystem` delivers queued events to entities that have scripts. An entity with a `SendEventsToParentComponent` has its events delivered to its parent's scripts instead.
- `rosegame.collision`: `ContactListener.begin_contact` and `end_contact` take a `Contact`.
  - They broadcast a `PhysicsEvent`.
  - When a sensor is involved, they queue the events `EnteringSensor`, `SensorEntered`, `ExitingSensor` and `SensorExited`.
- `rosegame.combat`: `CombatSystem` queues a `Hit` event on a hurt box when a contact begins with a hit box of another faction.
- `rosegame.levelloader`: `LevelLoader` loads, saves and unloads levels.
- `rosegame.renderer`:
  - `RendererSystem` chooses the start camera and builds the world-to-screen matrix.
  - It returns one `SpriteQuad` for each enabled sprite, from the lowest layer up.
- `rosegame.game`: `Game` wires all of the above together.

## Scripting

A script is a subclass of `rosegame.scripting.Script` that overrides any of its hooks:

- `setup(api, owner)`: runs once, on the frame after the script is attached.
- `update(api, owner, dt)`: runs every frame while the owner is enabled.
- `on_event(api, owner, event)`: runs for each event delivered to the owner.

The names listed in an entity's `ScriptComponent` are looked up in the script library
that was passed to `Game` (or `ScriptSystem`):

```python
from rosegame.game import Game
from rosegame.scripting import OrbScript, Script

class Walker(Script):
    def update(self, api, owner, dt):
        api.move(owner, 1.0 * dt, 0.0)

game = Game(library={"walker": Walker, "orb": OrbScript})
```

The `api` argument is a `ScriptApi` with these methods:

- `move`
- `face`
- `play_anim`
- `find`
- `get_child`
- `get_position`
- `enable`
- `disable`
- `get_name`
- `destroy`

`destroy` does not remove the entity straight away. It is removed at the end of the
script update.

Two scripts are included:

- `OrbScript` plays `OrbExplodeAnim` when its sensor is entered.
- `SpawnerScript` creates a new entity with a transform and a physics body every five seconds.

## Level format

A level is a YAML sequence of maps. A map with `Type: Entity` describes one entity and
holds its components under these keys:

- `Guid`
- `Disabled`
- `Transform`
- `Sprite`
- `Camera`
- `PhysicsBody`
- `Animation`
- `Script`
- `SendEventsToParent`
- `Input`
- `HitBox`
- `HurtBox`

Maps of any other type are skipped. An entity is placed under its parent when the
parent's `Guid` id appears earlier in the file. Saving writes every entity that has both a
transform and a `Guid`, parents first.

```yaml
- Type: Entity
  Guid: {name: Player, id: 1, parentId: -1}
  Transform: {position: [0, 0], scale: [1, 1], rotation: 0}
  Sprite: {sprite: block, layer: 0, color: [1, 1, 1, 1]}
  Input: {inputKeys: [0, 1], inputMouseButtons: []}
- Type: Entity
  Guid: {name: Camera, id: 2, parentId: -1}
  Transform: {position: [0, 0], scale: [1, 1], rotation: 0}
  Camera: {height: 10, startCamera: true}
```

## What the package does not do

- It opens no window and draws nothing. `render` returns quads and leaves painting them to the caller.
- It reads no keyboard or mouse. The caller passes the input state to `update` each frame.
- It has no physics simulation. `PhysicsBodyComponent` only stores body settings, and contacts must be reported to `Game.contact_listener` by the caller.
- It has no asset store or project files. Textures are passed to `render` as `TextureInfo`. Scripts come from the library mapping.
- Animations are not advanced by `Game.update`. The caller calls `AnimationComponent.update(dt, clip)` with an `AnimationClip`.
- There is no command-line program.

## Running the tests

```
pytest
```