import logging
import logging
import numpy as np
import numpy as np
import pytest
import pytest
from unified_scene.core.config import LoaderOptions
from unified_scene.core.config import LoaderOptions
from unified_scene.core.errors import ParserFailure
from unified_scene.core.errors import ParserFailure
from unified_scene.scene.pbrt_adapter import PbrtAdapter, instance_transform
from unified_scene.scene.pbrt_adapter import PbrtAdapter, instance_transform
from unified_scene.scene.pbrt_types import PbrtInstance, PbrtObject, PbrtShape, PbrtWorld, ShapeKind
from unified_scene.scene.pbrt_types import PbrtInstance, PbrtObject, PbrtShape, PbrtWorld, ShapeKind
from unified_scene.scene.scene_builder import load_scene
from unified_scene.scene.scene_builder import load_scene

def triangle_shape(name: str = "tri") -> PbrtShape:
    return PbrtShape(
#   return PbrtShape(
        ShapeKind.TRIANGLE_MESH,
#       ShapeKind.TRIANGLE_MESH,
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
#       vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
        indices=[(0, 1, 2), (0, 2, 3)],
#       indices=[(0, 1, 2), (0, 2, 3)],
        texcoords=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
#       texcoords=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
        name=name,
#       name=name,
    )
#   )

class FakePbrtScene:
    def __init__(self, world: PbrtWorld) -> None:
#   def __init__(self, world: PbrtWorld) -> None:
        self.world: PbrtWorld = world
#       self.world: PbrtWorld = world
        self.flattened: bool = False
#       self.flattened: bool = False

    def make_single_level(self) -> None:
#   def make_single_level(self) -> None:
        self.flattened = True
#       self.flattened = True

class FakeImporter:
    def __init__(self, world: PbrtWorld | None) -> None:
#   def __init__(self, world: PbrtWorld | None) -> None:
        self.scene: FakePbrtScene | None = FakePbrtScene(world) if world is not None else None
#       self.scene: FakePbrtScene | None = FakePbrtScene(world) if world is not None else None
        self.calls: list[str] = []
#       self.calls: list[str] = []

    def import_pbrt(self, path: str) -> FakePbrtScene | None:
#   def import_pbrt(self, path: str) -> FakePbrtScene | None:
        self.calls.append("pbrt")
#       self.calls.append("pbrt")
        return self.scene
#       return self.scene

    def load_binary(self, path: str) -> FakePbrtScene | None:
#   def load_binary(self, path: str) -> FakePbrtScene | None:
        self.calls.append("pbf")
#       self.calls.append("pbf")
        return self.scene
#       return self.scene

class FailingImporter(FakeImporter):
    def import_pbrt(self, path: str) -> FakePbrtScene | None:
#   def import_pbrt(self, path: str) -> FakePbrtScene | None:
        raise RuntimeError("syntax error at line 3")
#       raise RuntimeError("syntax error at line 3")

def make_world() -> PbrtWorld:
    tree = PbrtObject("tree", shapes=[triangle_shape("trunk"), PbrtShape(ShapeKind.QUAD_MESH, name="leaves")])
#   tree = PbrtObject("tree", shapes=[triangle_shape("trunk"), PbrtShape(ShapeKind.QUAD_MESH, name="leaves")])
    rock = PbrtObject("rock", shapes=[PbrtShape(ShapeKind.QUAD_MESH), PbrtShape(ShapeKind.OTHER, name="sphere")])
#   rock = PbrtObject("rock", shapes=[PbrtShape(ShapeKind.QUAD_MESH), PbrtShape(ShapeKind.OTHER, name="sphere")])
    linear = [(2.0, 0.0, 0.0), (0.0, 3.0, 0.0), (0.0, 0.0, 4.0)]
#   linear = [(2.0, 0.0, 0.0), (0.0, 3.0, 0.0), (0.0, 0.0, 4.0)]
    return PbrtWorld(
#   return PbrtWorld(
        shapes=[triangle_shape("ground"), PbrtShape(ShapeKind.QUAD_MESH, name="wall")],
#       shapes=[triangle_shape("ground"), PbrtShape(ShapeKind.QUAD_MESH, name="wall")],
        instances=[
#       instances=[
            PbrtInstance(tree),
#           PbrtInstance(tree),
            PbrtInstance(rock),
#           PbrtInstance(rock),
            PbrtInstance(tree, linear=linear, translation=(5.0, 6.0, 7.0)),
#           PbrtInstance(tree, linear=linear, translation=(5.0, 6.0, 7.0)),
        ],
#       ],
    )
#   )

def test_objects_are_converted_once_and_instanced() -> None:
    importer = FakeImporter(make_world())
#   importer = FakeImporter(make_world())
    scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=importer))
#   scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=importer))
    scene.validate()
#   scene.validate()
    assert importer.calls == ["pbrt"]
#   assert importer.calls == ["pbrt"]
    assert importer.scene is not None and importer.scene.flattened
#   assert importer.scene is not None and importer.scene.flattened
    # The rock only has unsupported shapes, so it and its instance are dropped
#   # The rock only has unsupported shapes, so it and its instance are dropped
    assert len(scene.meshes) == 1
#   assert len(scene.meshes) == 1
    assert len(scene.meshes[0].geometries) == 1
#   assert len(scene.meshes[0].geometries) == 1
    assert [instance.mesh_id for instance in scene.instances] == [0, 0]
#   assert [instance.mesh_id for instance in scene.instances] == [0, 0]
    assert scene.unique_tris() == 2
#   assert scene.unique_tris() == 2
    assert scene.total_tris() == 4
#   assert scene.total_tris() == 4

def test_root_level_shapes_are_not_converted(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
#   with caplog.at_level(logging.INFO):
        scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
#       scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
    assert "root level triangle mesh" in caplog.text
#   assert "root level triangle mesh" in caplog.text
    assert "root level quad mesh" in caplog.text
#   assert "root level quad mesh" in caplog.text
    assert scene.num_geometries() == 1
#   assert scene.num_geometries() == 1

def test_triangle_mesh_attributes_are_copied() -> None:
    scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
#   scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
    geometry = scene.meshes[0].geometries[0]
#   geometry = scene.meshes[0].geometries[0]
    assert geometry.vertices.dtype == np.float32
#   assert geometry.vertices.dtype == np.float32
    assert geometry.indices.dtype == np.uint32
#   assert geometry.indices.dtype == np.uint32
    assert geometry.indices.tolist() == [[0, 1, 2], [0, 2, 3]]
#   assert geometry.indices.tolist() == [[0, 1, 2], [0, 2, 3]]
    np.testing.assert_allclose(geometry.uvs[2], [1.0, 1.0])
#   np.testing.assert_allclose(geometry.uvs[2], [1.0, 1.0])

def test_instance_transform_columns() -> None:
    scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
#   scene = load_scene("forest.pbrt", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
    np.testing.assert_array_equal(scene.instances[0].transform, np.eye(4))
#   np.testing.assert_array_equal(scene.instances[0].transform, np.eye(4))
    transform = scene.instances[1].transform
#   transform = scene.instances[1].transform
    np.testing.assert_allclose(np.diag(transform), [2.0, 3.0, 4.0, 1.0])
#   np.testing.assert_allclose(np.diag(transform), [2.0, 3.0, 4.0, 1.0])
    np.testing.assert_allclose(transform[:3, 3], [5.0, 6.0, 7.0])
#   np.testing.assert_allclose(transform[:3, 3], [5.0, 6.0, 7.0])

def test_linear_part_rows_become_matrix_columns() -> None:
    instance = PbrtInstance(PbrtObject("o"), linear=[(1.0, 2.0, 3.0), (4.0, 5.0, 6.0), (7.0, 8.0, 9.0)])
#   instance = PbrtInstance(PbrtObject("o"), linear=[(1.0, 2.0, 3.0), (4.0, 5.0, 6.0), (7.0, 8.0, 9.0)])
    transform = instance_transform(instance)
#   transform = instance_transform(instance)
    np.testing.assert_allclose(transform[:3, 0], [1.0, 2.0, 3.0])
#   np.testing.assert_allclose(transform[:3, 0], [1.0, 2.0, 3.0])
    np.testing.assert_allclose(transform[:3, 2], [7.0, 8.0, 9.0])
#   np.testing.assert_allclose(transform[:3, 2], [7.0, 8.0, 9.0])
    np.testing.assert_allclose(transform[3], [0.0, 0.0, 0.0, 1.0])
#   np.testing.assert_allclose(transform[3], [0.0, 0.0, 0.0, 1.0])

def test_default_material_and_light() -> None:
    scene = load_scene("forest.pbf", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
#   scene = load_scene("forest.pbf", LoaderOptions(pbrt_importer=FakeImporter(make_world())))
    assert len(scene.materials) == 1
#   assert len(scene.materials) == 1
    assert scene.meshes[0].geometries[0].material_id == 0
#   assert scene.meshes[0].geometries[0].material_id == 0
    assert len(scene.lights) == 1
#   assert len(scene.lights) == 1
    assert scene.lights[0]["emission"] == (5.0, 5.0, 5.0, 5.0)
#   assert scene.lights[0]["emission"] == (5.0, 5.0, 5.0, 5.0)

def test_binary_scene_uses_binary_loader() -> None:
    importer = FakeImporter(make_world())
#   importer = FakeImporter(make_world())
    load_scene("forest.pbf", LoaderOptions(pbrt_importer=importer))
#   load_scene("forest.pbf", LoaderOptions(pbrt_importer=importer))
    assert importer.calls == ["pbf"]
#   assert importer.calls == ["pbf"]

def test_importer_errors_are_parser_failures() -> None:
    with pytest.raises(ParserFailure, match="syntax error"):
#   with pytest.raises(ParserFailure, match="syntax error"):
        PbrtAdapter(FailingImporter(make_world())).load("broken.pbrt")
#       PbrtAdapter(FailingImporter(make_world())).load("broken.pbrt")
    with pytest.raises(ParserFailure):
#   with pytest.raises(ParserFailure):
        PbrtAdapter(FakeImporter(None)).load("empty.pbrt")
#       PbrtAdapter(FakeImporter(None)).load("empty.pbrt")

def test_pbrt_without_importer_is_parser_failure() -> None:
    with pytest.raises(ParserFailure, match="importer"):
#   with pytest.raises(ParserFailure, match="importer"):
        load_scene("forest.pbrt")
#       load_scene("forest.pbrt")

def instanced_world(shape: PbrtShape) -> PbrtWorld:
    return PbrtWorld(instances=[PbrtInstance(PbrtObject("obj", shapes=[shape]))])
#   return PbrtWorld(instances=[PbrtInstance(PbrtObject("obj", shapes=[shape]))])

@pytest.mark.parametrize("bad_index", [7, 3, -1])
def test_out_of_range_index_is_parser_failure(bad_index: int) -> None:
    shape = PbrtShape(ShapeKind.TRIANGLE_MESH, vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)], indices=[(0, 1, bad_index)], name="broken")
#   shape = PbrtShape(ShapeKind.TRIANGLE_MESH, vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)], indices=[(0, 1, bad_index)], name="broken")
    with pytest.raises(ParserFailure, match="out of range") as excinfo:
#   with pytest.raises(ParserFailure, match="out of range") as excinfo:
        load_scene("bad.pbrt", LoaderOptions(pbrt_importer=FakeImporter(instanced_world(shape))))
#       load_scene("bad.pbrt", LoaderOptions(pbrt_importer=FakeImporter(instanced_world(shape))))
    assert "broken" in str(excinfo.value)
#   assert "broken" in str(excinfo.value)
    assert "bad.pbrt" in str(excinfo.value)
#   assert "bad.pbrt" in str(excinfo.value)

def test_mismatched_texcoords_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    shape = triangle_shape()
#   shape = triangle_shape()
    shape.texcoords = [(0.0, 0.0), (1.0, 0.0)]
#   shape.texcoords = [(0.0, 0.0), (1.0, 0.0)]
    with caplog.at_level(logging.WARNING):
#   with caplog.at_level(logging.WARNING):
        scene = load_scene("uv.pbrt", LoaderOptions(pbrt_importer=FakeImporter(instanced_world(shape))))
#       scene = load_scene("uv.pbrt", LoaderOptions(pbrt_importer=FakeImporter(instanced_world(shape))))
    scene.validate()
#   scene.validate()
    assert len(scene.meshes[0].geometries[0].uvs) == 0
#   assert len(scene.meshes[0].geometries[0].uvs) == 0
    assert "texture coordinates" in caplog.text
#   assert "texture coordinates" in caplog.text

def test_default_material_without_meshes() -> None:
    scene = load_scene("empty.pbrt", LoaderOptions(pbrt_importer=FakeImporter(PbrtWorld())))
#   scene = load_scene("empty.pbrt", LoaderOptions(pbrt_importer=FakeImporter(PbrtWorld())))
    assert len(scene.meshes) == 0
#   assert len(scene.meshes) == 0
    assert len(scene.materials) == 1
#   assert len(scene.materials) == 1
    assert len(scene.lights) == 1
#   assert len(scene.lights) == 1
