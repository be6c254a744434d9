"""Enemy characters."""

from __future__ import annotations

from typing import Optional

from .character import Character
from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry


class Enemy(Character):
    """A character that may have spotted a target."""

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.searched = False
        self.target: Optional[GameObject] = None

    def hit(self, invincible: int, damage: int) -> bool:  # type: ignore[override]
        """Take damage and start invincibility; return whether the hit landed."""
        return super().hit(damage, invincible)