"""Keyframed multi-part models: parts, their motion cursors and the object driving them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .billboard import IDENTITY, Matrix4, _mul4
from .geometry import Transform, Vec3
from .models import ModelObject, ModelRegistry, ObjectType, _world_matrix
from .motion_data import Motion, MotionScript, load_motion
from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry

PART_PRIORITY = 4
BLEND_FRAMES = 10


def zero_transform() -> Transform:
    """A transform whose position, rotation and scale are all zero."""
    return Transform(Vec3(), Vec3(), Vec3())


def _wrap(angle: float) -> float:
    if angle > math.pi:
        return angle - 2.0 * math.pi
    if angle < -math.pi:
        return angle + 2.0 * math.pi
    return angle


@dataclass
class MotionCursor:
    """Where a part is in its motions: motion index, key index and frames left in the key."""

    motion: int = 0
    key: int = 0
    frame: int = 0


class Part(ModelObject):
    """One model of a jointed character.

    Its transform is its rest pose (``basic``) plus the animated ``offset``,
    which moves by ``move`` each frame. It is updated and drawn by its owner,
    never by the registry directly.
    """

    def __init__(
        self,
        priority: int = PART_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.object_type = ObjectType.MOTION_PARTS
        self.basic = Transform()
        self.offset = zero_transform()
        self.move = zero_transform()
        self.parent = -1
        self.parent_matrix: Matrix4 = IDENTITY
        self.display = False
        self.do_motion = True
        self.cursor = MotionCursor()
        self.update_normally = False

    def init(self) -> None:
        self.update_normally = False
        self.update_when_paused = False
        self.draw_normally = False
        self.draw_when_paused = False
        super().init()

    def update(self) -> None:
        self.offset = self.offset + self.move
        self.transform = self.offset + self.basic
        super().update()

    def draw(self) -> Matrix4:
        """World matrix of the part: its own rotation and position, then the parent's matrix."""
        local = super().draw()
        self.world_matrix = _mul4(local, self.parent_matrix)
        return self.world_matrix

    def set_motion(self, motion: int) -> None:
        """Start a motion from its first key."""
        self.cursor.motion = motion
        self.cursor.key = 0
        self.cursor.frame = 0

    def set_move(self, pos: Vec3, rot: Vec3, scl: Vec3, frames: int) -> None:
        """Head for a target pose over a number of frames, turning the short way round."""
        if frames == 0:
            raise ValueError("a move needs a non-zero number of frames")
        delta_pos = pos - self.offset.pos
        delta_rot = Vec3(*(_wrap(c) for c in rot - self.offset.rot))
        delta_scl = scl - self.offset.scl
        self.move = Transform(delta_pos / frames, delta_rot / frames, delta_scl / frames)
        self.cursor.frame = frames


class MotionObject(GameObject):
    """A character made of parts animated by keyframed motions."""

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        self.parts: list[Part] = []
        super().__init__(priority, registry)
        self.models: Optional[ModelRegistry] = None
        self.model_count = 0
        self.motions: list[Motion] = []
        self.now_motion = 0
        self.world_matrix: Matrix4 = IDENTITY
        self.motion_enabled = True

    @property
    def release_on_scene(self) -> bool:
        return self._release_on_scene

    @release_on_scene.setter
    def release_on_scene(self, value: bool) -> None:
        self._release_on_scene = value
        for part in self.parts:
            part.release_on_scene = value

    def init(self) -> None:
        """Put every part into the first key of the next motion."""
        if not self.motions:
            return
        key = self.motions[self.next_motion()].keys[0]
        for index, part in enumerate(self.parts):
            pose = key.poses[index]
            part.offset = Transform(pose.pos, pose.rot, pose.scl)
            part.set_move(pose.pos, pose.rot, pose.scl, key.frame)

    def uninit(self) -> None:
        for part in self.parts:
            part.uninit()
            part.mark_dead()
        self.mark_dead()

    def update(self) -> None:
        if not self.motion_enabled:
            return
        self.world_matrix = _world_matrix(self.transform)
        for index, part in enumerate(self.parts):
            cursor = part.cursor
            current = self.motions[cursor.motion]
            cursor.frame -= 1
            if cursor.frame <= 0:
                cursor.key += 1
                if cursor.key >= current.num_keys:
                    cursor.key = 0
                    if not current.loop:
                        cursor.motion = self.next_motion()
                target = self.motions[cursor.motion]
                pose = target.keys[cursor.key].poses[index]
                part.set_move(pose.pos, pose.rot, pose.scl, target.keys[0].frame)
            part.update()

    def draw(self) -> list[Matrix4]:
        """Draw the parts in order, each relative to its parent; return their world matrices."""
        matrices = []
        for part in self.parts:
            if part.parent == -1:
                part.parent_matrix = self.world_matrix
            else:
                part.parent_matrix = self.parts[part.parent].world_matrix
            matrices.append(part.draw())
        return matrices

    def next_motion(self) -> int:
        """The motion to fall back to when a non-looping motion ends."""
        return 0

    def set_motion(self, motion: int) -> None:
        """Blend every part that is not already in the motion into its first key."""
        self.now_motion = motion
        first = self.motions[motion].keys[0]
        for index, part in enumerate(self.parts):
            if part.cursor.motion != motion:
                part.set_motion(motion)
                pose = first.poses[index]
                part.set_move(pose.pos, pose.rot, pose.scl, BLEND_FRAMES)

    def load(self, path: Union[str, Path]) -> None:
        """Read a motion script file and build the character from it."""
        self.apply_script(load_motion(path))

    def apply_script(self, script: MotionScript) -> None:
        """Create the parts and take over the motions a script describes."""
        for setup in script.parts:
            if not 0 <= setup.model_index < len(script.model_files):
                raise ValueError(f"no model file with index {setup.model_index}")
        self.model_count = script.model_count
        for setup in script.parts:
            part = Part(PART_PRIORITY, self.registry)
            part.init()
            if self.models is not None:
                part.models = self.models
            part.model_id = part.models.load(script.model_files[setup.model_index])
            part.parent = setup.parent
            part.basic = Transform(setup.pos, setup.rot, setup.scl)
            part.release_on_scene = self.release_on_scene
            self.parts.append(part)
        self.motions.extend(script.motions)

    @classmethod
    def create(
        cls,
        path: Union[str, Path],
        models: Optional[ModelRegistry] = None,
        registry: Optional[ObjectRegistry] = None,
    ) -> MotionObject:
        """Make a character from a motion script file."""
        obj = cls(DEFAULT_PRIORITY, registry)
        obj.models = models
        obj.init()
        obj.load(path)
        return obj