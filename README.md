# stagekit

Building blocks for the game-object side of a small 3D arcade game: a
prioritised object registry with update/draw passes and pause handling,
transform-carrying objects, 2D sprites and billboards, screen fades,
particle emitters, keyframed multi-part motion, characters with life and
invincibility frames, obstacles, and collision tests for axis-aligned
boxes and oriented bounding boxes.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `stagekit.geometry` | `Vec3`, `Transform`, `OBB` (separating-axis overlap test) |
| `stagekit.collision` | `boxes_overlap`, `Collision`, `Collision3D`, `Line3D`, `Surface3D`, `Capsule3D`, `Dimension`, `Shape2D`, `Shape3D` |
| `stagekit.objects` | `GameObject`, `ObjectRegistry`, `default_registry` |
| `stagekit.effect_generator` | `EffectGenerator`, an invisible object that dies after its life span |
| `stagekit.sprites` | `Color`, `Quad`, `Sprite2D` |
| `stagekit.models` | `Model`, `ModelRegistry`, `ObjectType`, `ModelObject` |
| `stagekit.billboard` | `Billboard` |
| `stagekit.particles` | `Particle`, `ParticleGenerator` |
| `stagekit.fade` | `FadeType`, `Fade` |
| `stagekit.motion_data` | `parse_motion`, `load_motion` and the parsed script types |
| `stagekit.motion` | `MotionCursor`, `Part`, `MotionObject` |
| `stagekit.character` | `Character` |
| `stagekit.enemy` | `Enemy` |
| `stagekit.obstacles` | `Obstacle`, `HighObstacle`, the `HitTarget` protocol |

## The object registry

Every `GameObject` is added to an `ObjectRegistry` when it is made (the
shared `default_registry()` unless one is passed) and sits in one of its
priority layers, in insertion order. A frame usually runs:

```python
from stagekit.objects import default_registry

registry = default_registry()

registry.update_all(paused=False)   # objects whose flags allow updating in this mode
registry.release_dead()             # drop objects marked dead
registry.draw_all(paused=False)
```

Which objects are updated and drawn is decided by each object's
`update_normally`, `update_when_paused`, `draw_normally` and
`draw_when_paused` flags. Objects call `mark_dead()` (or `release()`) to
be removed on the next `release_dead()`; `release_scene()` removes every
object whose `release_on_scene` is set, and `release_all()` empties the
registry. Removed objects have `uninit()` called.

`calculate_distances(point)` stores each object's squared distance to a
point such as a camera; `sort(sortable)` then orders the objects the
predicate accepts farthest first within each layer, leaving the others
where they are.

## Collision

`boxes_overlap(pos0, size0, pos1, size1)` tests two axis-aligned boxes
given by their centres and full sizes; boxes that only touch do not
overlap:

```python
from stagekit.geometry import Vec3
from stagekit.collision import boxes_overlap

boxes_overlap(Vec3(0, 0, 0), Vec3(2, 2, 2), Vec3(1, 0, 0), Vec3(2, 2, 2))   # True
boxes_overlap(Vec3(0, 0, 0), Vec3(2, 2, 2), Vec3(5, 0, 0), Vec3(2, 2, 2))   # False
```

For rotated boxes, build an `OBB(center, half_widths, rotation)` for each,
where `rotation` is a matrix whose first three rows are the box's local
axes, and call `overlaps(other)`. `vertex(index)` gives the eight corners,
`axis(index)` the three axes and `project_onto_axis(axis)` the box's half
extent along an axis.

`Line3D`, `Surface3D` and `Capsule3D` are data classes describing shapes;
no overlap tests between them are provided.

## Sprites, billboards and models

`Sprite2D.create(pos, size)` makes a screen-space rectangle whose `quad`
(corner positions, colour, UVs) follows every change of its transform or
colour; `set_uv(up, left, down, right)` maps part of a texture onto it.

`Billboard.create(pos, size)` makes a quad that faces the camera; set its
`view_matrix` and `draw()` returns the world matrix to render it with.
`set_tex_uv` and `add_tex_uv` set and shift its texture coordinates.

`ModelRegistry.load(path)` reads a text-format X model file once and
returns its id; it records each material's texture file name. A
`ModelObject` refers to a model by id and its `draw()` returns the world
matrix built from its rotation and position.

## Motion scripts

`parse_motion(text)` reads a motion script (a model file list, a
`CHARACTERSET` block of parts and one `MOTIONSET` block per motion with
its keyframes) and returns a `MotionScript`; `load_motion(path)` does the
same for a file. It raises `ValueError` on unreadable numbers, truncated
input or more `KEYSET` blocks than `NUM_KEY` declares.

```python
from stagekit.motion_data import parse_motion

script = parse_motion("""
NUM_MODEL = 1
MODEL_FILENAME = body.x

CHARACTERSET
    NUM_PARTS = 1
    PARTSSET
        INDEX = 0
        PARENT = -1
        POS = 0.0 10.0 0.0
        ROT = 0.0 0.0 0.0
    END_PARTSSET
END_CHARACTERSET

MOTIONSET
    LOOP = 1
    NUM_KEY = 1
    KEYSET
        FRAME = 40
        KEY
            POS = 0.0 0.0 0.0
            ROT = 0.0 0.0 0.0
        END_KEY
    END_KEYSET
END_MOTIONSET
""")
```

A `MotionObject` plays such a script: `apply_script(script)` (or
`load(path)`, or `MotionObject.create(path)`) makes one `Part` per part,
loading its model file. On each update every part moves toward its next
key pose over the key's frame count, and when a motion ends it either
loops or falls through to `next_motion()`. `set_motion(motion)` blends
every part into another motion over 10 frames. `draw()` returns each
part's world matrix, computed relative to its parent.

## Characters, enemies and obstacles

`Character` adds `life`, `invincible` frames, `attack`, `defense`,
`speed`, a `collision` box and a `move` transform that is added to the
position and rotation each update and damped by `attenuate_move()`.
`hit(damage, invincible=0, shock=None)` lands only while the character is
not invincible, and returns whether it did. `Enemy.hit(invincible,
damage)` takes the same two values in the other order.

`HighObstacle.create(pos, rot)` loads the obstacle model from
`data/MODEL/Obstacles/Obstacles_High/000/Obstacles_High_000.x` and places
an obstacle. Its `hit_test()`, run on every update, hits for 1 damage each
object in the registry that satisfies the `HitTarget` protocol (`pos`,
`collision_size`, `is_sliding()`, `hit(damage)`), overlaps it on the x-z
plane and is not sliding, and returns those objects.

## Effects

`Fade.create(fade_type, frames)` makes a full-screen sprite whose alpha
ramps from clear to opaque (`WHITE_OUT`, `BLACK_OUT`) or from opaque to
clear (`WHITE_IN`, `BLACK_IN`) over `frames` updates, then marks itself
dead.

`ParticleGenerator.create(direction, length, diffusion, color,
particle_life, spawn_interval, life)` emits a `Particle` every
`spawn_interval` frames, moving `length` per frame along `direction`
spread randomly within `diffusion` degrees. Pass your own
`random.Random` as `rng` for reproducible output. Each particle drifts by
its `move` and dies when its `life` runs out.

## What the package does not do

stagekit keeps the state a renderer needs (transforms, quads, colours,
texture file names, world matrices) but draws nothing itself: it has no
window, graphics device, texture loading, input, sound, scene manager or
game loop, and no player character. A host program supplies those and
drives `update_all`, `release_dead` and `draw_all` each frame.