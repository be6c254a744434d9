"""Collision shape descriptions and axis-aligned box overlap."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .geometry import Vec3


class Dimension(Enum):
    """Whether a collision shape lives in 2D or 3D space."""

    TWO_D = 0
    THREE_D = 1


class Shape2D(Enum):
    """Kinds of 2D collision shape."""

    LINE = 0
    SURFACE = 1
    CIRCLE = 2


class Shape3D(Enum):
    """Kinds of 3D collision shape."""

    LINE = 0
    SURFACE = 1
    BOX = 2
    SPHERE = 3
    CAPSULE = 4


@dataclass
class Collision:
    """Base description of a collision volume."""

    dimension: Dimension = Dimension.TWO_D


@dataclass
class Collision3D(Collision):
    """A collision volume in 3D space."""

    dimension: Dimension = field(default=Dimension.THREE_D, init=False)
    shape: Shape3D = Shape3D.BOX


@dataclass
class Line3D(Collision3D):
    """A line segment between a start and an end point."""

    shape: Shape3D = field(default=Shape3D.LINE, init=False)
    start: Vec3 = field(default_factory=Vec3)
    end: Vec3 = field(default_factory=Vec3)


@dataclass
class Surface3D(Collision3D):
    """A quadrilateral surface given by four corners."""

    shape: Shape3D = field(default=Shape3D.SURFACE, init=False)
    p0: Vec3 = field(default_factory=Vec3)
    p1: Vec3 = field(default_factory=Vec3)
    p2: Vec3 = field(default_factory=Vec3)
    p3: Vec3 = field(default_factory=Vec3)

    @property
    def corners(self) -> tuple[Vec3, Vec3, Vec3, Vec3]:
        return (self.p0, self.p1, self.p2, self.p3)


@dataclass
class Capsule3D(Collision3D):
    """A capsule-shaped collision volume."""

    shape: Shape3D = field(default=Shape3D.CAPSULE, init=False)


def boxes_overlap(pos0: Vec3, size0: Vec3, pos1: Vec3, size1: Vec3) -> bool:
    """Strict overlap test of two axis-aligned boxes given by centre and full size.

    Boxes that only touch along a face do not count as overlapping.
    """
    for c0, s0, c1, s1 in zip(pos0, size0, pos1, size1):
        if not (c0 + s0 * 0.5 > c1 - s1 * 0.5 and c0 - s0 * 0.5 < c1 + s1 * 0.5):
            return False
    return True