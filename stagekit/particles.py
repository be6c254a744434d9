"""Short-lived moving billboards and the generator that emits them."""

from __future__ import annotations

import math
import random
from typing import Optional

from .billboard import Billboard
from .effect_generator import INFINITE_LIFE, EffectGenerator
from .geometry import Vec3
from .objects import DEFAULT_PRIORITY, GameObject, ObjectRegistry
from .sprites import Color

DEFAULT_TEXTURE = "data/TEXTURE/shadow000.jpg"
_SPREAD_SCALE = 1000.0


class Particle(Billboard):
    """A billboard that drifts by ``move`` each frame and dies when its life runs out."""

    additive_blend = True

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.move = Vec3()
        self.life = 0

    def update(self) -> None:
        super().update()
        self.add_pos(self.move)
        self.life -= 1
        if self.life <= 0:
            self.mark_dead()

    @classmethod
    def create(
        cls,
        pos: Vec3,
        move: Vec3,
        color: Color,
        texture: Optional[str],
        life: int,
        registry: Optional[ObjectRegistry] = None,
    ) -> Particle:
        """Make and initialise a particle."""
        particle = cls(DEFAULT_PRIORITY, registry)
        particle.pos = pos
        particle.init()
        particle.color = color
        particle.texture = texture
        particle.move = move
        particle.life = life
        return particle


class ParticleGenerator(EffectGenerator):
    """Emits a particle every ``spawn_interval`` frames.

    Each particle travels ``length`` per frame along ``direction`` deflected by a
    random offset of up to ``diffusion`` (radians) on every axis.
    """

    def __init__(
        self,
        priority: int = DEFAULT_PRIORITY,
        registry: Optional[ObjectRegistry] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(priority, registry)
        self.direction = Vec3()
        self.length = 0.0
        self.diffusion = 0.0
        self.color = Color(0.0, 0.0, 0.0, 0.0)
        self.particle_life = 0
        self._texture = DEFAULT_TEXTURE
        self.spawn_interval = 0
        self.countdown = 0
        self.rng = rng if rng is not None else random.Random()

    @property
    def texture(self) -> str:
        return self._texture

    def set_texture(self, path: str) -> None:
        """Change the particles' texture; ignored once the generator is dead."""
        if not self.dead:
            self._texture = path

    def _offset(self) -> float:
        modulus = int(self.diffusion * 2.0 * _SPREAD_SCALE)
        drawn = self.rng.randrange(modulus) if modulus > 0 else 0
        return (drawn - self.diffusion * _SPREAD_SCALE) / _SPREAD_SCALE

    def _spawn(self) -> Particle:
        spread = Vec3(self._offset(), self._offset(), self._offset()) + self.direction
        move = spread.normalized() * self.length
        return Particle.create(
            self.pos, move, self.color, self._texture, self.particle_life, self.registry
        )

    def update(self) -> None:
        if self.dead:
            return
        super().update()
        self.countdown -= 1
        if self.countdown <= 0:
            self.countdown = self.spawn_interval
            self._spawn()

    @classmethod
    def create(
        cls,
        direction: Vec3,
        length: float,
        diffusion: float,
        color: Color,
        particle_life: int,
        spawn_interval: int,
        life: int = INFINITE_LIFE,
        registry: Optional[ObjectRegistry] = None,
        rng: Optional[random.Random] = None,
    ) -> ParticleGenerator:
        """Make a generator; ``diffusion`` is given in degrees."""
        generator = cls(DEFAULT_PRIORITY, registry, rng)
        generator.init()
        generator.direction = direction.normalized()
        generator.length = length
        generator.diffusion = math.radians(diffusion)
        generator.color = color
        generator.particle_life = particle_life
        generator.spawn_interval = spawn_interval
        generator.life_span = life
        return generator


def particles_in(registry: ObjectRegistry) -> list[GameObject]:
    """The particles currently held by a registry."""
    return [obj for obj in registry.all_objects() if isinstance(obj, Particle)]