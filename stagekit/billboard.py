"""Camera-facing textured quads placed in 3D space."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .geometry import Vec3
from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry
from .sprites import DEFAULT_UVS, Color

Vec2 = tuple[float, float]
Matrix4 = tuple[tuple[float, float, float, float], ...]

NORMAL = Vec3(0.0, 1.0, 0.0)

IDENTITY: Matrix4 = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

_SINGULAR_EPSILON = 1e-12


@dataclass(frozen=True)
class _Quad3D:
    """Four vertices of a triangle strip: top-left, top-right, bottom-left, bottom-right."""

    positions: tuple[Vec3, Vec3, Vec3, Vec3]
    color: Color = Color()
    uvs: tuple[Vec2, Vec2, Vec2, Vec2] = DEFAULT_UVS
    normal: Vec3 = NORMAL


def _mul4(a: Matrix4, b: Matrix4) -> Matrix4:
    return tuple(
        tuple(sum(a[row][k] * b[k][col] for k in range(4)) for col in range(4))
        for row in range(4)
    )


def _inverse4(matrix: Matrix4) -> Optional[Matrix4]:
    """Gauss-Jordan inverse; None when the matrix is singular."""
    rows = [list(map(float, row)) + [1.0 if i == j else 0.0 for j in range(4)]
            for i, row in enumerate(matrix)]
    for col in range(4):
        pivot = max(range(col, 4), key=lambda r: abs(rows[r][col]))
        if abs(rows[pivot][col]) < _SINGULAR_EPSILON:
            return None
        rows[col], rows[pivot] = rows[pivot], rows[col]
        lead = rows[col][col]
        rows[col] = [value / lead for value in rows[col]]
        for other, row in enumerate(rows):
            if other != col and row[col] != 0.0:
                factor = row[col]
                rows[other] = [v - factor * p for v, p in zip(row, rows[col])]
    return tuple(tuple(row[4:]) for row in rows)


def _translation(pos: Vec3) -> Matrix4:
    return (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (pos.x, pos.y, pos.z, 1.0),
    )


class Billboard(GameObject):
    """A quad standing on the object's position that always faces the camera.

    Its width and height are the x and y of the scale at the time of ``init``.
    The camera is given through ``view_matrix``.
    """

    additive_blend = False

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self._quad: Optional[_Quad3D] = None
        self._color = Color()
        self.texture: Optional[str] = None
        self.view_matrix: Matrix4 = IDENTITY
        self.world_matrix: Matrix4 = IDENTITY

    @property
    def quad(self) -> Optional[_Quad3D]:
        """The current vertices, or None before ``init`` and after ``uninit``."""
        return self._quad

    def _require_quad(self) -> _Quad3D:
        if self._quad is None:
            raise RuntimeError("the billboard has not been initialised")
        return self._quad

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        quad = self._require_quad()
        self._color = value
        self._quad = replace(quad, color=value)

    def init(self) -> None:
        half = self.scl.x * 0.5
        height = self.scl.y
        self._quad = _Quad3D(
            (
                Vec3(-half, height, 0.0),
                Vec3(half, height, 0.0),
                Vec3(-half, 0.0, 0.0),
                Vec3(half, 0.0, 0.0),
            )
        )

    def uninit(self) -> None:
        self._quad = None
        self.texture = None

    def draw(self) -> Optional[Matrix4]:
        """Compute the world matrix that turns the quad towards the camera.

        Returns None, leaving the previous world matrix, when the view matrix
        cannot be inverted.
        """
        inverse = _inverse4(self.view_matrix)
        if inverse is None:
            return None
        facing = (inverse[0], inverse[1], inverse[2], (0.0, 0.0, 0.0, inverse[3][3]))
        self.world_matrix = _mul4(facing, _translation(self.pos))
        return self.world_matrix

    def set_tex_uv(self, tex0: Vec2, tex1: Vec2) -> None:
        """Map the texture rectangle from top-left ``tex0`` to bottom-right ``tex1``."""
        quad = self._require_quad()
        (u0, v0), (u1, v1) = tex0, tex1
        self._quad = replace(quad, uvs=((u0, v0), (u1, v0), (u0, v1), (u1, v1)))

    def add_tex_uv(self, tex0: Vec2, tex1: Vec2) -> None:
        """Shift the texture coordinates, for scrolling or animation."""
        quad = self._require_quad()
        (u0, v0), (u1, v1) = tex0, tex1
        deltas = ((u0, v0), (u1, v0), (u0, v1), (u1, v1))
        self._quad = replace(
            quad,
            uvs=tuple((u + du, v + dv) for (u, v), (du, dv) in zip(quad.uvs, deltas)),
        )

    @classmethod
    def create(
        cls,
        pos: Vec3,
        size: Vec3,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> Billboard:
        """Make, place, size and initialise a billboard."""
        billboard = cls(priority, registry)
        billboard.pos = pos
        billboard.scl = size
        billboard.init()
        return billboard