import math

import pytest

from stagekit.billboard import IDENTITY, Billboard
from stagekit.geometry import Vec3
from stagekit.objects import ObjectRegistry
from stagekit.sprites import DEFAULT_UVS, Color


@pytest.fixture
def registry():
    return ObjectRegistry()


def test_create_registers_and_builds_quad(registry):
    board = Billboard.create(Vec3(1.0, 2.0, 3.0), Vec3(2.0, 4.0, 1.0), registry=registry)
    assert board in registry
    assert board.pos == Vec3(1.0, 2.0, 3.0)
    assert board.quad.positions == (
        Vec3(-1.0, 4.0, 0.0),
        Vec3(1.0, 4.0, 0.0),
        Vec3(-1.0, 0.0, 0.0),
        Vec3(1.0, 0.0, 0.0),
    )
    assert board.quad.uvs == DEFAULT_UVS
    assert board.quad.normal == Vec3(0.0, 1.0, 0.0)


def test_color_updates_quad(registry):
    board = Billboard.create(Vec3(), Vec3(1.0, 1.0, 1.0), registry=registry)
    board.color = Color(0.5, 0.25, 0.0, 0.75)
    assert board.quad.color == Color(0.5, 0.25, 0.0, 0.75)
    assert board.color == Color(0.5, 0.25, 0.0, 0.75)


def test_color_before_init_raises(registry):
    board = Billboard(registry=registry)
    with pytest.raises(RuntimeError):
        board.color = Color()


def test_set_tex_uv(registry):
    board = Billboard.create(Vec3(), Vec3(1.0, 1.0, 1.0), registry=registry)
    board.set_tex_uv((0.25, 0.5), (0.75, 1.0))
    assert board.quad.uvs == ((0.25, 0.5), (0.75, 0.5), (0.25, 1.0), (0.75, 1.0))


def test_add_tex_uv_zero_keeps_and_shift_moves(registry):
    board = Billboard.create(Vec3(), Vec3(1.0, 1.0, 1.0), registry=registry)
    board.add_tex_uv((0.0, 0.0), (0.0, 0.0))
    assert board.quad.uvs == DEFAULT_UVS
    board.add_tex_uv((0.5, 0.0), (0.5, 0.0))
    board.add_tex_uv((-0.5, 0.0), (-0.5, 0.0))
    assert board.quad.uvs == DEFAULT_UVS


def test_uv_before_init_raises(registry):
    board = Billboard(registry=registry)
    with pytest.raises(RuntimeError):
        board.set_tex_uv((0.0, 0.0), (1.0, 1.0))


def test_draw_identity_view_places_at_position(registry):
    board = Billboard.create(Vec3(4.0, 5.0, 6.0), Vec3(1.0, 1.0, 1.0), registry=registry)
    world = board.draw()
    assert world[3] == (4.0, 5.0, 6.0, 1.0)
    assert world[:3] == IDENTITY[:3]
    assert board.world_matrix == world


def test_draw_ignores_camera_translation(registry):
    board = Billboard.create(Vec3(1.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0), registry=registry)
    board.view_matrix = (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (10.0, -20.0, 30.0, 1.0),
    )
    world = board.draw()
    assert world[3] == pytest.approx((1.0, 0.0, 0.0, 1.0))
    for row in range(3):
        assert world[row] == pytest.approx(IDENTITY[row])


def test_draw_faces_rotated_camera(registry):
    board = Billboard.create(Vec3(), Vec3(1.0, 1.0, 1.0), registry=registry)
    c, s = math.cos(0.7), math.sin(0.7)
    view = ((c, 0.0, -s, 0.0), (0.0, 1.0, 0.0, 0.0), (s, 0.0, c, 0.0), (0.0, 0.0, 0.0, 1.0))
    board.view_matrix = view
    world = board.draw()
    for i in range(3):
        for j in range(3):
            assert world[i][j] == pytest.approx(view[j][i])


def test_draw_singular_view_returns_none(registry):
    board = Billboard.create(Vec3(1.0, 1.0, 1.0), Vec3(1.0, 1.0, 1.0), registry=registry)
    board.view_matrix = tuple((0.0, 0.0, 0.0, 0.0) for _ in range(4))
    assert board.draw() is None
    assert board.world_matrix == IDENTITY


def test_uninit_clears(registry):
    board = Billboard.create(Vec3(), Vec3(1.0, 1.0, 1.0), registry=registry)
    board.texture = "tex.png"
    board.uninit()
    assert board.quad is None
    assert board.texture is None