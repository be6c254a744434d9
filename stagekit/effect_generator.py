"""Base for invisible objects that spawn effects over a limited lifetime."""

from __future__ import annotations

from typing import Optional

from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry

INFINITE_LIFE = -1


class EffectGenerator(GameObject):
    """Counts frames and marks itself dead once its life span has passed.

    A life span of ``INFINITE_LIFE`` keeps the generator alive forever.
    """

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.life_span = INFINITE_LIFE
        self.elapsed = 0
        self.draw_normally = False
        self.draw_when_paused = False

    def update(self) -> None:
        self.elapsed += 1
        if self.life_span != INFINITE_LIFE and self.elapsed >= self.life_span:
            self.mark_dead()