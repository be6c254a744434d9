"""Game objects and the per-priority registry that updates, draws and releases them."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterator, Optional

from .geometry import Transform, Vec3

MAX_PRIORITY = 8
DEFAULT_PRIORITY = 3


class GameObject:
    """Something living in the scene: a transform, a few flags and a priority layer."""

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        self.priority = priority
        self.transform = Transform()
        self.distance = 0.0

        self.update_normally = True
        self.update_when_paused = False
        self.draw_normally = True
        self.draw_when_paused = True
        self.release_on_scene = True

        self._dead = False
        self.registry = registry if registry is not None else default_registry()
        self.registry.add(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority}, transform={self.transform!r})"

    def init(self) -> None:
        """Prepare the object after its attributes have been set."""

    def uninit(self) -> None:
        """Let go of what the object holds before it leaves the registry."""

    def update(self) -> None:
        """Advance the object by one frame."""

    def draw(self) -> None:
        """Render the object."""

    @property
    def dead(self) -> bool:
        return self._dead

    def release(self) -> None:
        """Ask for the object to be removed at the next release of dead objects."""
        self._dead = True

    def mark_dead(self) -> None:
        """Flag the object as dead."""
        self._dead = True

    @property
    def pos(self) -> Vec3:
        return self.transform.pos

    @pos.setter
    def pos(self, value: Vec3) -> None:
        self.transform = replace(self.transform, pos=value)

    @property
    def rot(self) -> Vec3:
        return self.transform.rot

    @rot.setter
    def rot(self, value: Vec3) -> None:
        self.transform = replace(self.transform, rot=value)

    @property
    def scl(self) -> Vec3:
        return self.transform.scl

    @scl.setter
    def scl(self, value: Vec3) -> None:
        self.transform = replace(self.transform, scl=value)

    def add_pos(self, delta: Vec3) -> None:
        self.pos = self.pos + delta

    def add_rot(self, delta: Vec3) -> None:
        self.rot = self.rot + delta

    def add_scl(self, delta: Vec3) -> None:
        self.scl = self.scl + delta

    def calculate_distance(self, point: Vec3) -> float:
        """Store and return the squared distance from the object to a point."""
        self.distance = (self.pos - point).length_sq()
        return self.distance


class ObjectRegistry:
    """Objects kept in insertion order within each priority layer."""

    def __init__(self, levels: int = MAX_PRIORITY) -> None:
        if levels <= 0:
            raise ValueError("a registry needs at least one priority level")
        self._layers: list[list[GameObject]] = [[] for _ in range(levels)]

    @property
    def levels(self) -> int:
        return len(self._layers)

    def __len__(self) -> int:
        return sum(len(layer) for layer in self._layers)

    def __contains__(self, obj: object) -> bool:
        return any(obj in layer for layer in self._layers)

    def add(self, obj: GameObject) -> None:
        """Append an object to the end of its priority layer."""
        if not 0 <= obj.priority < len(self._layers):
            raise ValueError(f"priority out of range: {obj.priority}")
        self._layers[obj.priority].append(obj)

    def objects(self, priority: int) -> list[GameObject]:
        """The objects of one priority layer, in order."""
        if not 0 <= priority < len(self._layers):
            raise ValueError(f"priority out of range: {priority}")
        return list(self._layers[priority])

    def all_objects(self) -> Iterator[GameObject]:
        """Every object, lowest priority first."""
        for layer in self._layers:
            yield from list(layer)

    def _release(self, condition: Callable[[GameObject], bool]) -> None:
        for index, layer in enumerate(self._layers):
            removed = [obj for obj in layer if condition(obj)]
            if not removed:
                continue
            self._layers[index] = [obj for obj in layer if not condition(obj)]
            for obj in removed:
                obj.uninit()

    def release_scene(self) -> None:
        """Remove every object that is released on a scene change."""
        self._release(lambda obj: obj.release_on_scene)

    def release_all(self) -> None:
        """Remove every object."""
        self._release(lambda obj: True)

    def release_dead(self) -> None:
        """Remove every object flagged as dead."""
        self._release(lambda obj: obj.dead)

    def update_all(self, paused: bool = False) -> None:
        """Update the objects whose flags allow it in the current pause state."""
        for obj in self.all_objects():
            if obj.update_when_paused if paused else obj.update_normally:
                obj.update()

    def draw_all(self, paused: bool = False) -> None:
        """Draw the objects whose flags allow it in the current pause state."""
        for obj in self.all_objects():
            if obj.draw_when_paused if paused else obj.draw_normally:
                obj.draw()

    def sort(self, sortable: Optional[Callable[[GameObject], bool]] = None) -> None:
        """Order the sortable objects of each layer farthest first.

        Objects the predicate rejects keep their places; the sortable ones are
        rearranged among the slots they occupy.
        """
        for layer in self._layers:
            slots = [i for i, obj in enumerate(layer) if sortable is None or sortable(obj)]
            ordered = sorted(
                (layer[i] for i in slots), key=lambda obj: obj.distance, reverse=True
            )
            for slot, obj in zip(slots, ordered):
                layer[slot] = obj

    def calculate_distances(self, point: Vec3) -> None:
        """Refresh every object's squared distance to a point such as a camera."""
        for obj in self.all_objects():
            obj.calculate_distance(point)


_default: Optional[ObjectRegistry] = None


def default_registry() -> ObjectRegistry:
    """The registry shared by objects created without an explicit one."""
    global _default
    if _default is None:
        _default = ObjectRegistry()
    return _default