"""Obstacles placed on the course that hurt runners touching them."""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from .geometry import Vec3
from .models import ModelObject, ModelRegistry, ObjectType
from .objects import DEFAULT_PRIORITY, ObjectRegistry

HIGH_MODEL_PATH = "data/MODEL/Obstacles/Obstacles_High/000/Obstacles_High_000.x"
HIGH_OBSTACLE_DAMAGE = 1


@runtime_checkable
class HitTarget(Protocol):
    """A runner an obstacle can hit."""

    pos: Vec3
    collision_size: Vec3

    def is_sliding(self) -> bool:
        """True while the runner slides along the ground."""

    def hit(self, damage: int) -> None:
        """Take damage."""


class Obstacle(ModelObject, metaclass=ABCMeta):
    """A model on the course that tests for hits every frame."""

    COLLISION = Vec3(20.0, 50.0, 20.0)

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.object_type = ObjectType.OBSTACLES

    def update(self) -> None:
        super().update()
        self.hit_test()

    @abstractmethod
    def hit_test(self) -> list[HitTarget]:
        """Hit whatever touches the obstacle and return what was hit."""


def _overlaps_ground(target: HitTarget, pos: Vec3, size: Vec3) -> bool:
    """Strict overlap of the footprints on the x-z plane."""
    mine, theirs = target.pos, target.collision_size
    return all(
        tc + ts * 0.5 > oc - os * 0.5 and tc - ts * 0.5 < oc + os * 0.5
        for tc, ts, oc, os in (
            (mine.z, theirs.z, pos.z, size.z),
            (mine.x, theirs.x, pos.x, size.x),
        )
    )


class HighObstacle(Obstacle):
    """An overhead obstacle: runners passing under it must slide to avoid a hit."""

    def hit_test(self) -> list[HitTarget]:
        hit: list[HitTarget] = []
        for obj in self.registry.all_objects():
            if not isinstance(obj, HitTarget):
                continue
            if _overlaps_ground(obj, self.pos, self.COLLISION) and not obj.is_sliding():
                obj.hit(HIGH_OBSTACLE_DAMAGE)
                hit.append(obj)
        return hit

    @classmethod
    def create(
        cls,
        pos: Vec3,
        rot: Optional[Vec3] = None,
        models: Optional[ModelRegistry] = None,
        registry: Optional[ObjectRegistry] = None,
    ) -> HighObstacle:
        """Load the obstacle model and place an obstacle; raises OSError if it is missing."""
        obstacle = cls(DEFAULT_PRIORITY, registry)
        if models is not None:
            obstacle.models = models
        obstacle.model_id = obstacle.models.load(Path(HIGH_MODEL_PATH))
        obstacle.pos = pos
        if rot is not None:
            obstacle.rot = rot
        obstacle.init()
        return obstacle


def obstacle_model_path() -> Union[str, Path]:
    """Where the overhead obstacle's model is read from, relative to the working directory."""
    return HIGH_MODEL_PATH