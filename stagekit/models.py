"""Loaded mesh models and objects that draw them."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .geometry import Transform
from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry

MAX_TEXTURES = 8

Matrix3 = tuple[tuple[float, float, float], ...]
Matrix4 = tuple[tuple[float, float, float, float], ...]

_MATERIAL = re.compile(r"(?<!template )\bMaterial\b(?:[ \t]+\w+)?\s*\{")
_BRACE = re.compile(r"[{}]")
_TEXTURE = re.compile(r'\bTextureFilename\b\s*(?:\w+\s*)?\{\s*"([^"]*)"')


@dataclass(frozen=True)
class Model:
    """A mesh file and the texture of each of its materials."""

    path: str
    material_count: int = 0
    textures: tuple[Optional[str], ...] = ()

    def texture(self, index: int) -> Optional[str]:
        """Texture file of a material, or None when it has none."""
        return self.textures[index]


def _block_end(text: str, start: int) -> int:
    depth = 1
    for brace in _BRACE.finditer(text, start):
        depth += 1 if brace.group() == "{" else -1
        if depth == 0:
            return brace.start()
    raise ValueError("unterminated Material block")


def _material_textures(text: str) -> list[Optional[str]]:
    textures: list[Optional[str]] = []
    position = 0
    while (match := _MATERIAL.search(text, position)) is not None:
        end = _block_end(text, match.end())
        found = _TEXTURE.search(text, match.end(), end)
        textures.append(found.group(1) if found else None)
        position = end + 1
    return textures


def _read_model(path: str) -> Model:
    data = Path(path).read_bytes()
    if not data.startswith(b"xof "):
        raise ValueError(f"not an X model file: {path}")
    if data[8:12] != b"txt ":
        return Model(path)
    textures = _material_textures(data.decode("latin-1"))
    if len(textures) > MAX_TEXTURES:
        raise ValueError(f"a model may have at most {MAX_TEXTURES} materials: {path}")
    return Model(path, len(textures), tuple(textures))


class ModelRegistry:
    """Models identified by the order in which they were first loaded."""

    def __init__(self) -> None:
        self._models: list[Model] = []

    def __len__(self) -> int:
        return len(self._models)

    def load(self, path: Union[str, Path]) -> int:
        """Load a model file once and return its id.

        Raises OSError when the file cannot be read and ValueError when it is
        not a model file.
        """
        key = str(Path(path))
        for model_id, model in enumerate(self._models):
            if model.path == key:
                return model_id
        self._models.append(_read_model(key))
        return len(self._models) - 1

    def get(self, model_id: int) -> Optional[Model]:
        """The model with the given id, or None if there is none."""
        if 0 <= model_id < len(self._models):
            return self._models[model_id]
        return None

    def release_all(self) -> None:
        """Forget every loaded model."""
        self._models.clear()


_shared: Optional[ModelRegistry] = None


def _shared_models() -> ModelRegistry:
    global _shared
    if _shared is None:
        _shared = ModelRegistry()
    return _shared


class ObjectType(Enum):
    """What role a model object plays in the scene."""

    NONE = 0
    MOTION_PARTS = 1
    OBSTACLES = 2


def _mul3(a: Matrix3, b: Matrix3) -> Matrix3:
    return tuple(
        tuple(sum(a[row][k] * b[k][col] for k in range(3)) for col in range(3))
        for row in range(3)
    )


def _rotation_yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> Matrix3:
    cy, sy = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cr, sr = math.cos(roll), math.sin(roll)
    rz = ((cr, sr, 0.0), (-sr, cr, 0.0), (0.0, 0.0, 1.0))
    rx = ((1.0, 0.0, 0.0), (0.0, cp, sp), (0.0, -sp, cp))
    ry = ((cy, 0.0, -sy), (0.0, 1.0, 0.0), (sy, 0.0, cy))
    return _mul3(_mul3(rz, rx), ry)


def _world_matrix(transform: Transform) -> Matrix4:
    rotation = _rotation_yaw_pitch_roll(transform.rot.y, transform.rot.x, transform.rot.z)
    pos = transform.pos
    return (
        (*rotation[0], 0.0),
        (*rotation[1], 0.0),
        (*rotation[2], 0.0),
        (pos.x, pos.y, pos.z, 1.0),
    )


class ModelObject(GameObject):
    """An object drawn with a model from a model registry."""

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.object_type = ObjectType.NONE
        self.models = _shared_models()
        self.model_id: Optional[int] = None
        self.world_matrix: Matrix4 = _world_matrix(Transform())

    @property
    def model(self) -> Optional[Model]:
        if self.model_id is None:
            return None
        return self.models.get(self.model_id)

    def draw(self) -> Matrix4:
        """Compute the world matrix (rotation, then translation) to draw the model with."""
        if self.model is None:
            raise LookupError(f"no model with id {self.model_id}")
        self.world_matrix = _world_matrix(self.transform)
        return self.world_matrix

    @classmethod
    def create(
        cls,
        path: Union[str, Path],
        models: Optional[ModelRegistry] = None,
        registry: Optional[ObjectRegistry] = None,
    ) -> ModelObject:
        """Load a model and make an object that draws it."""
        obj = cls(DEFAULT_PRIORITY, registry)
        if models is not None:
            obj.models = models
        obj.model_id = obj.models.load(path)
        obj.init()
        return obj