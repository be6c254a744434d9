import math
import random

import pytest

from stagekit.geometry import Vec3
from stagekit.objects import ObjectRegistry
from stagekit.particles import DEFAULT_TEXTURE, Particle, ParticleGenerator, particles_in
from stagekit.sprites import Color


@pytest.fixture
def registry():
    return ObjectRegistry()


def test_particle_create(registry):
    color = Color(0.1, 0.2, 0.3, 0.4)
    particle = Particle.create(Vec3(1.0, 2.0, 3.0), Vec3(0.5, 0.0, 0.0), color, "p.png", 3, registry)
    assert particle in registry
    assert particle.pos == Vec3(1.0, 2.0, 3.0)
    assert particle.quad.color == color
    assert particle.texture == "p.png"
    assert particle.life == 3
    assert particle.additive_blend is True


def test_particle_moves_and_dies(registry):
    particle = Particle.create(Vec3(), Vec3(1.0, 0.0, -2.0), Color(), None, 3, registry)
    particle.update()
    particle.update()
    assert particle.pos == Vec3(2.0, 0.0, -4.0)
    assert not particle.dead
    particle.update()
    assert particle.dead
    registry.release_dead()
    assert particle not in registry


def test_particle_life_one_dies_after_one_frame(registry):
    particle = Particle.create(Vec3(), Vec3(), Color(), None, 1, registry)
    particle.update()
    assert particle.dead


def test_generator_create_normalizes_and_converts(registry):
    gen = ParticleGenerator.create(Vec3(0.0, 3.0, 0.0), 2.0, 180.0, Color(), 5, 1, registry=registry)
    assert gen.direction == Vec3(0.0, 1.0, 0.0)
    assert math.isclose(gen.diffusion, math.pi)
    assert gen.life_span == -1
    assert gen.texture == DEFAULT_TEXTURE


def test_generator_spawn_interval(registry):
    gen = ParticleGenerator.create(Vec3(1.0, 0.0, 0.0), 1.0, 0.0, Color(), 100, 3, registry=registry)
    counts = []
    for _ in range(4):
        gen.update()
        counts.append(len(particles_in(registry)))
    assert counts == [1, 1, 1, 2]


def test_generator_without_diffusion_follows_direction(registry):
    gen = ParticleGenerator.create(Vec3(0.0, 0.0, 2.0), 5.0, 0.0, Color(), 10, 1, registry=registry)
    gen.pos = Vec3(7.0, 8.0, 9.0)
    gen.update()
    (particle,) = particles_in(registry)
    assert particle.move == Vec3(0.0, 0.0, 5.0)
    assert particle.pos == Vec3(7.0, 8.0, 9.0)
    assert particle.life == 10
    assert particle.texture == DEFAULT_TEXTURE


def test_generator_spread_keeps_speed(registry):
    gen = ParticleGenerator.create(
        Vec3(1.0, 0.0, 0.0), 3.0, 30.0, Color(), 10, 1,
        registry=registry, rng=random.Random(42),
    )
    for _ in range(10):
        gen.update()
    particles = particles_in(registry)
    assert len(particles) == 10
    for particle in particles:
        assert particle.move.length() == pytest.approx(3.0)


def test_generator_life_ends_spawning(registry):
    gen = ParticleGenerator.create(Vec3(1.0, 0.0, 0.0), 1.0, 0.0, Color(), 100, 1, 2, registry=registry)
    gen.update()
    assert not gen.dead
    gen.update()
    assert gen.dead
    spawned = len(particles_in(registry))
    gen.update()
    assert len(particles_in(registry)) == spawned


def test_set_texture_ignored_when_dead(registry):
    gen = ParticleGenerator.create(Vec3(1.0, 0.0, 0.0), 1.0, 0.0, Color(), 1, 1, registry=registry)
    gen.set_texture("spark.png")
    assert gen.texture == "spark.png"
    gen.mark_dead()
    gen.set_texture("other.png")
    assert gen.texture == "spark.png"