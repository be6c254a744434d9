"""Characters: animated objects with stats, invincibility frames and momentum."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .geometry import Vec3
from .motion import MotionObject, zero_transform
from .objects import DEFAULT_PRIORITY, ObjectRegistry

BASE_RESISTANCE = 0.01
ROTATION_RESISTANCE = 0.025


class Character(MotionObject):
    """A motion object that moves by its momentum and takes damage.

    ``move`` holds the per-frame change of position, rotation and scale;
    ``collision`` holds the hit box, its scale being the box size.
    """

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.life = 0
        self.invincible = 0
        self.attack = 0
        self.defense = 0
        self.speed = 0
        self.collision = zero_transform()
        self.move = zero_transform()
        self.jumping = False

    @property
    def collision_size(self) -> Vec3:
        return self.collision.scl

    @collision_size.setter
    def collision_size(self, value: Vec3) -> None:
        self.collision = replace(self.collision, scl=value)

    def update(self) -> None:
        self.add_pos(self.move.pos)
        self.add_rot(self.move.rot)
        self.attenuate_move()
        super().update()
        if self.invincible > 0:
            self.invincible -= 1

    def hit(self, damage: int, invincible: int = 0, shock: Optional[Vec3] = None) -> bool:
        """Take damage unless invincible; return whether the hit landed.

        A landed hit starts ``invincible`` frames of invincibility and adds
        ``shock`` to the momentum.
        """
        if self.invincible > 0:
            return False
        self.life -= damage
        self.invincible = invincible
        if shock is not None:
            self.move = replace(self.move, pos=self.move.pos + shock)
        return True

    def attenuate_move(self) -> None:
        """Let horizontal momentum and spin about the vertical axis decay toward zero."""
        pos, rot = self.move.pos, self.move.rot
        self.move = replace(
            self.move,
            pos=Vec3(
                pos.x + (0.0 - pos.x) * BASE_RESISTANCE,
                pos.y,
                pos.z + (0.0 - pos.z) * BASE_RESISTANCE,
            ),
            rot=Vec3(rot.x, rot.y + (0.0 - rot.y) * ROTATION_RESISTANCE, rot.z),
        )