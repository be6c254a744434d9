"""Full-screen fades in and out of white or black."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Optional

from .geometry import Vec3
from .objects import ObjectRegistry, default_registry
from .sprites import Color, Sprite2D

SCREEN_WIDTH = 1280.0
SCREEN_HEIGHT = 720.0


class FadeType(Enum):
    """Colour and direction of a fade."""

    WHITE_OUT = 0
    WHITE_IN = 1
    BLACK_OUT = 2
    BLACK_IN = 3


_START_COLORS = {
    FadeType.WHITE_OUT: Color(1.0, 1.0, 1.0, 0.0),
    FadeType.WHITE_IN: Color(1.0, 1.0, 1.0, 1.0),
    FadeType.BLACK_OUT: Color(0.0, 0.0, 0.0, 0.0),
    FadeType.BLACK_IN: Color(0.0, 0.0, 0.0, 1.0),
}

_FADING_OUT = (FadeType.WHITE_OUT, FadeType.BLACK_OUT)


class Fade(Sprite2D):
    """A screen-covering sprite whose opacity ramps over a number of frames.

    An "out" fade goes from clear to opaque, an "in" fade from opaque to clear.
    The fade marks itself dead on the frame after it finishes.
    """

    def __init__(
        self,
        priority: Optional[int] = None,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        target = registry if registry is not None else default_registry()
        if priority is None:
            priority = target.levels - 1
        super().__init__(priority, target)
        self.elapsed = 0
        self.frames = 0
        self.fade_type = FadeType.WHITE_OUT

    def uninit(self) -> None:
        """A fade keeps its quad until it is discarded."""

    def update(self) -> None:
        if self.elapsed < self.frames:
            self.elapsed += 1
        else:
            self.mark_dead()
        step = (1.0 / self.frames) * self.elapsed
        alpha = step if self.fade_type in _FADING_OUT else 1.0 - step
        self.color = replace(self.color, a=alpha)
        super().update()

    @classmethod
    def create(
        cls,
        fade_type: FadeType,
        frames: int,
        priority: Optional[int] = None,
        registry: Optional[ObjectRegistry] = None,
    ) -> Fade:
        """Make a fade covering the screen that lasts ``frames`` frames."""
        if frames <= 0:
            raise ValueError(f"a fade needs at least one frame, got {frames}")
        fade = cls(priority, registry)
        fade.frames = frames
        fade.fade_type = fade_type
        fade.color = _START_COLORS[fade_type]
        fade.size = Vec3(SCREEN_WIDTH, SCREEN_HEIGHT, 0.0)
        fade.pos = Vec3(SCREEN_WIDTH * 0.5, SCREEN_HEIGHT * 0.5, 0.0)
        fade.init()
        return fade