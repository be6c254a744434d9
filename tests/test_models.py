import math

import pytest

from stagekit.geometry import Vec3
from stagekit.models import ModelObject, ModelRegistry, ObjectType
from stagekit.objects import ObjectRegistry

MESH = """xof 0302txt 0064
template Material {
 <3D82AB4D-62DA-11cf-AB39-0020AF71E433>
 ColorRGBA faceColor;
}
Mesh Box {
 4;
 0.0;0.0;0.0;,
 1.0;0.0;0.0;,
 0.0;1.0;0.0;,
 1.0;1.0;0.0;;
 1;
 4;0,1,3,2;;
 MeshMaterialList {
  2;
  1;
  0;;
  Material {
   1.0;1.0;1.0;1.0;;
   5.0;
   0.0;0.0;0.0;;
   0.0;0.0;0.0;;
   TextureFilename {
    "wood.png";
   }
  }
  Material Plain {
   0.5;0.5;0.5;1.0;;
   5.0;
   0.0;0.0;0.0;;
   0.0;0.0;0.0;;
  }
 }
}
"""


@pytest.fixture
def mesh_file(tmp_path):
    path = tmp_path / "box.x"
    path.write_text(MESH)
    return path


@pytest.fixture
def registry():
    return ObjectRegistry()


def test_load_reads_materials(mesh_file):
    models = ModelRegistry()
    model_id = models.load(mesh_file)
    model = models.get(model_id)
    assert model_id == 0
    assert model.path == str(mesh_file)
    assert model.material_count == 2
    assert model.textures == ("wood.png", None)
    assert model.texture(0) == "wood.png"


def test_same_file_loads_once(mesh_file, tmp_path):
    models = ModelRegistry()
    first = models.load(mesh_file)
    assert models.load(str(mesh_file)) == first
    other = tmp_path / "other.x"
    other.write_text(MESH)
    assert models.load(other) == first + 1
    assert len(models) == 2


def test_binary_file_has_no_materials(tmp_path):
    path = tmp_path / "bin.x"
    path.write_bytes(b"xof 0302bin 0032\x00\x01\x02")
    models = ModelRegistry()
    model = models.get(models.load(path))
    assert model.material_count == 0
    assert model.textures == ()


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        ModelRegistry().load(tmp_path / "missing.x")


def test_not_a_model_raises(tmp_path):
    path = tmp_path / "note.x"
    path.write_text("hello")
    with pytest.raises(ValueError):
        ModelRegistry().load(path)


def test_get_unknown_id_is_none(mesh_file):
    models = ModelRegistry()
    models.load(mesh_file)
    assert models.get(1) is None
    assert models.get(-1) is None


def test_release_all_forgets_models(mesh_file):
    models = ModelRegistry()
    models.load(mesh_file)
    models.release_all()
    assert len(models) == 0
    assert models.get(0) is None


def test_create_object(mesh_file, registry):
    models = ModelRegistry()
    obj = ModelObject.create(mesh_file, models, registry)
    assert obj.model_id == 0
    assert obj.model is models.get(0)
    assert obj.object_type is ObjectType.NONE
    assert obj in registry


def test_draw_without_rotation_is_translation(mesh_file, registry):
    obj = ModelObject.create(mesh_file, ModelRegistry(), registry)
    obj.pos = Vec3(1.0, 2.0, 3.0)
    matrix = obj.draw()
    assert matrix == (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (1.0, 2.0, 3.0, 1.0),
    )
    assert obj.world_matrix == matrix


def test_draw_rotation_is_orthonormal(mesh_file, registry):
    obj = ModelObject.create(mesh_file, ModelRegistry(), registry)
    obj.rot = Vec3(0.3, 1.1, -0.7)
    matrix = obj.draw()
    rows = [Vec3(*row[:3]) for row in matrix[:3]]
    for i, row in enumerate(rows):
        assert math.isclose(row.length(), 1.0, rel_tol=1e-9)
        for other in rows[i + 1:]:
            assert abs(row.dot(other)) < 1e-9
    assert matrix[3] == (0.0, 0.0, 0.0, 1.0)


def test_draw_without_model_raises(registry):
    obj = ModelObject(registry=registry)
    obj.models = ModelRegistry()
    with pytest.raises(LookupError):
        obj.draw()


def test_draw_after_release_raises(mesh_file, registry):
    models = ModelRegistry()
    obj = ModelObject.create(mesh_file, models, registry)
    models.release_all()
    with pytest.raises(LookupError):
        obj.draw()