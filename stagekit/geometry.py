"""Vector, transform and oriented bounding box primitives."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

_AXIS_EPSILON = 0.0001


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        """Scalar product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Vector product with another vector."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_sq())

    def length_sq(self) -> float:
        """Squared Euclidean length."""
        return self.dot(self)

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vec3()
        return self / length


def _ones() -> Vec3:
    return Vec3(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Transform:
    """Position, rotation (Euler angles) and scale of an object."""

    pos: Vec3 = field(default_factory=Vec3)
    rot: Vec3 = field(default_factory=Vec3)
    scl: Vec3 = field(default_factory=_ones)

    def __add__(self, other: Transform) -> Transform:
        return Transform(self.pos + other.pos, self.rot + other.rot, self.scl + other.scl)


def _as_vec3(values: Iterable[float]) -> Vec3:
    components = tuple(values)[:3]
    if len(components) < 3:
        raise ValueError("a rotation row needs at least three components")
    return Vec3(*(float(c) for c in components))


class OBB:
    """An oriented bounding box described by its centre, half widths and local axes."""

    def __init__(
        self,
        center: Vec3,
        half_widths: Vec3,
        rotation: Sequence[Iterable[float]],
    ) -> None:
        rows = [_as_vec3(row) for row in rotation]
        if len(rows) < 3:
            raise ValueError("a rotation matrix needs at least three rows")
        self.center = center
        self.half_widths = half_widths
        self.axes: tuple[Vec3, Vec3, Vec3] = (rows[0], rows[1], rows[2])

    def __repr__(self) -> str:
        return f"OBB(center={self.center!r}, half_widths={self.half_widths!r}, axes={self.axes!r})"

    def axis(self, index: int) -> Vec3:
        """Local axis 0 (x), 1 (y) or 2 (z)."""
        return self.axes[index]

    def vertex(self, index: int) -> Vec3:
        """Corner 0..7; bits 0, 1 and 2 of the index pick the +x, +y and +z sides."""
        if not 0 <= index < 8:
            raise IndexError(f"vertex index out of range: {index}")
        sign_x = 1 if index & 1 else -1
        sign_y = 1 if index & 2 else -1
        sign_z = 1 if index & 4 else -1
        return (
            self.center
            + self.axes[0] * (sign_x * self.half_widths.x)
            + self.axes[1] * (sign_y * self.half_widths.y)
            + self.axes[2] * (sign_z * self.half_widths.z)
        )

    def project_onto_axis(self, axis: Vec3) -> float:
        """Half extent of the box projected onto the given axis."""
        return (
            abs(self.axes[0].dot(axis) * self.half_widths.x)
            + abs(self.axes[1].dot(axis) * self.half_widths.y)
            + abs(self.axes[2].dot(axis) * self.half_widths.z)
        )

    def _separating_axes(self, other: OBB) -> Iterator[Vec3]:
        for mine, theirs in zip(self.axes, other.axes):
            yield mine
            yield theirs
        for mine in self.axes:
            for theirs in other.axes:
                crossed = mine.cross(theirs)
                if crossed.length() > _AXIS_EPSILON:
                    yield crossed

    def overlaps(self, other: OBB) -> bool:
        """True unless a separating axis between the two boxes exists."""
        offset = other.center - self.center
        for axis in self._separating_axes(other):
            unit = axis.normalized()
            reach = self.project_onto_axis(unit) + other.project_onto_axis(unit)
            if abs(offset.dot(unit)) > reach:
                return False
        return True