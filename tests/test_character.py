from stagekit.character import Character
from stagekit.geometry import Transform, Vec3
from stagekit.objects import ObjectRegistry


def _character():
    return Character(registry=ObjectRegistry())


def test_hit_takes_life_and_starts_invincibility():
    c = _character()
    c.life = 5
    assert c.hit(2, 30) is True
    assert c.life == 3
    assert c.invincible == 30


def test_hit_ignored_while_invincible():
    c = _character()
    c.life = 5
    c.hit(2, 30)
    assert c.hit(2, 30) is False
    assert c.life == 3


def test_hit_without_invincibility_allows_next_hit():
    c = _character()
    c.life = 5
    c.hit(1)
    assert c.invincible == 0
    assert c.hit(1) is True
    assert c.life == 3


def test_shock_pushes_momentum():
    c = _character()
    assert c.hit(1, 10, Vec3(0.0, 0.0, 7.0))
    assert c.move.pos == Vec3(0.0, 0.0, 7.0)


def test_shock_ignored_while_invincible():
    c = _character()
    c.invincible = 5
    c.hit(1, 10, Vec3(4.0, 0.0, 0.0))
    assert c.move.pos == Vec3()
    assert c.life == 0


def test_update_counts_invincibility_down_to_zero():
    c = _character()
    c.invincible = 2
    c.update()
    c.update()
    assert c.invincible == 0
    c.update()
    assert c.invincible == 0


def test_update_applies_momentum():
    c = _character()
    c.move = Transform(Vec3(3.0, 0.0, 0.0), Vec3(0.0, 0.5, 0.0), Vec3())
    c.update()
    assert c.pos == Vec3(3.0, 0.0, 0.0)
    assert c.rot == Vec3(0.0, 0.5, 0.0)


def test_attenuation_shrinks_horizontal_momentum():
    c = _character()
    c.move = Transform(Vec3(100.0, 7.0, -100.0), Vec3(0.2, 1.0, 0.3), Vec3())
    c.attenuate_move()
    assert 0.0 < c.move.pos.x < 100.0
    assert -100.0 < c.move.pos.z < 0.0
    assert c.move.pos.y == 7.0
    assert c.move.rot.x == 0.2
    assert c.move.rot.z == 0.3
    assert 0.0 < c.move.rot.y < 1.0


def test_attenuation_converges():
    c = _character()
    c.move = Transform(Vec3(100.0, 0.0, 100.0), Vec3(0.0, 1.0, 0.0), Vec3())
    for _ in range(2000):
        c.attenuate_move()
    assert abs(c.move.pos.x) < 1.0
    assert abs(c.move.rot.y) < 0.01


def test_collision_size_round_trip():
    c = _character()
    c.collision_size = Vec3(1.0, 2.0, 3.0)
    assert c.collision.scl == Vec3(1.0, 2.0, 3.0)
    assert c.collision_size == Vec3(1.0, 2.0, 3.0)