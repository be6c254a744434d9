"""Screen-space textured quads."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .geometry import Transform, Vec3
from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry

Vec2 = tuple[float, float]
Corners = tuple[Vec3, Vec3, Vec3, Vec3]
UVs = tuple[Vec2, Vec2, Vec2, Vec2]

DEFAULT_UVS: UVs = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0))


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in the range 0..1."""

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0


@dataclass(frozen=True)
class Quad:
    """Four vertices of a screen-space triangle strip.

    Corners run top-left, top-right, bottom-left, bottom-right.
    """

    positions: Corners
    color: Color = field(default_factory=Color)
    uvs: UVs = DEFAULT_UVS
    rhw: float = 1.0


def _corners(transform: Transform, size: Vec3) -> Corners:
    half_w = size.x * transform.scl.x * 0.5
    half_h = size.y * transform.scl.y * 0.5
    x, y = transform.pos.x, transform.pos.y
    return (
        Vec3(x - half_w, y - half_h, 0.0),
        Vec3(x + half_w, y - half_h, 0.0),
        Vec3(x - half_w, y + half_h, 0.0),
        Vec3(x + half_w, y + half_h, 0.0),
    )


class Sprite2D(GameObject):
    """A rectangle centred on the object's position, sized by ``size`` times scale.

    The vertex quad exists between ``init`` and ``uninit``; while it exists,
    every change of the transform or colour is reflected in it at once.
    """

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        self._quad: Optional[Quad] = None
        self._color = Color()
        self.size = Vec3()
        self.texture: Optional[str] = None
        super().__init__(priority, registry)

    @property
    def transform(self) -> Transform:
        return self._transform

    @transform.setter
    def transform(self, value: Transform) -> None:
        self._transform = value
        if self._quad is not None:
            self._quad = replace(self._quad, positions=_corners(value, self.size))

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        self._color = value
        if self._quad is not None:
            self._quad = replace(self._quad, color=value)

    @property
    def quad(self) -> Optional[Quad]:
        """The current vertices, or None before ``init`` and after ``uninit``."""
        return self._quad

    def _require_quad(self) -> Quad:
        if self._quad is None:
            raise RuntimeError("the sprite has not been initialised")
        return self._quad

    def init(self) -> None:
        self._quad = Quad(_corners(self.transform, self.size), self._color)

    def uninit(self) -> None:
        self.texture = None
        self._quad = None

    def draw(self) -> Quad:
        """Return the quad to render with the sprite's texture."""
        return self._require_quad()

    def set_uv(self, up: float, left: float, down: float, right: float) -> None:
        """Map the texture rectangle bounded by the given edges onto the quad."""
        quad = self._require_quad()
        self._quad = replace(
            quad, uvs=((left, up), (right, up), (left, down), (right, down))
        )

    @classmethod
    def create(
        cls,
        pos: Vec3,
        size: Vec3,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> Sprite2D:
        """Make, place and initialise a sprite."""
        sprite = cls(priority, registry)
        sprite.pos = pos
        sprite.size = size
        sprite.init()
        return sprite