import logging
import logging
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from unified_scene.core.common_types import Geometry, Instance, Mesh, default_material
from unified_scene.core.common_types import Geometry, Instance, Mesh, default_material
from unified_scene.core.errors import ParserFailure
from unified_scene.core.errors import ParserFailure
from unified_scene.scene.pbrt_types import PbrtImporter, PbrtInstance, PbrtObject, PbrtScene, PbrtShape, ShapeKind
from unified_scene.scene.pbrt_types import PbrtImporter, PbrtInstance, PbrtObject, PbrtScene, PbrtShape, ShapeKind
from unified_scene.scene.scene import Scene
from unified_scene.scene.scene import Scene

logger: logging.Logger = logging.getLogger(__name__)

def instance_transform(instance: PbrtInstance) -> npt.NDArray[np.float32]:
    # Columns 0..2 are vx, vy, vz of the linear map, column 3 the translation
#   # Columns 0..2 are vx, vy, vz of the linear map, column 3 the translation
    transform: npt.NDArray[np.float32] = np.eye(4, dtype=np.float32)
#   transform: npt.NDArray[np.float32] = np.eye(4, dtype=np.float32)
    transform[:3, :3] = instance.linear.T
#   transform[:3, :3] = instance.linear.T
    transform[:3, 3] = instance.translation
#   transform[:3, 3] = instance.translation
    return transform
#   return transform

class PbrtAdapter:
    """
    Converts a single-level PBRT scene into instanced meshes.
#   Converts a single-level PBRT scene into instanced meshes.
    Each PBRT object becomes one Mesh the first time an instance references it; later
#   Each PBRT object becomes one Mesh the first time an instance references it; later
    instances reuse the cached mesh index. Only triangle meshes are converted.
#   instances reuse the cached mesh index. Only triangle meshes are converted.
    """
    def __init__(self, importer: PbrtImporter) -> None:
#   def __init__(self, importer: PbrtImporter) -> None:
        self.importer: PbrtImporter = importer
#       self.importer: PbrtImporter = importer
        self.path: str = ""
#       self.path: str = ""
        # PBRT materials are not converted, every geometry shares one default material
#       # PBRT materials are not converted, every geometry shares one default material
        self.material_id: int = 0
#       self.material_id: int = 0

    def parse(self, path: str) -> PbrtScene:
#   def parse(self, path: str) -> PbrtScene:
        try:
#       try:
            if path.rsplit(".", 1)[-1] == "pbrt":
#           if path.rsplit(".", 1)[-1] == "pbrt":
                pbrt_scene: PbrtScene | None = self.importer.import_pbrt(path)
#               pbrt_scene: PbrtScene | None = self.importer.import_pbrt(path)
            else:
#           else:
                pbrt_scene = self.importer.load_binary(path)
#               pbrt_scene = self.importer.load_binary(path)
            if pbrt_scene is None:
#           if pbrt_scene is None:
                raise ParserFailure("Failed to load PBRT scene", file=path)
#               raise ParserFailure("Failed to load PBRT scene", file=path)
            pbrt_scene.make_single_level()
#           pbrt_scene.make_single_level()
        except ParserFailure:
#       except ParserFailure:
            raise
#           raise
        except Exception as e:
#       except Exception as e:
            raise ParserFailure(f"PBRT importer error: {e}", file=path) from e
#           raise ParserFailure(f"PBRT importer error: {e}", file=path) from e
        return pbrt_scene
#       return pbrt_scene

    def log_root_shape(self, shape: PbrtShape) -> None:
#   def log_root_shape(self, shape: PbrtShape) -> None:
        # Root level shapes are only reported, they are not converted
#       # Root level shapes are only reported, they are not converted
        if shape.material:
#       if shape.material:
            logger.info(f"Root level shape material: {shape.material}")
#           logger.info(f"Root level shape material: {shape.material}")
        if shape.area_light:
#       if shape.area_light:
            logger.info("Encountered area light")
#           logger.info("Encountered area light")
        match shape.kind:
#       match shape.kind:
            case ShapeKind.TRIANGLE_MESH:
#           case ShapeKind.TRIANGLE_MESH:
                logger.info(f"Found root level triangle mesh with {len(np.asarray(shape.indices).reshape(-1, 3))} triangles: {shape.describe()}")
#               logger.info(f"Found root level triangle mesh with {len(np.asarray(shape.indices).reshape(-1, 3))} triangles: {shape.describe()}")
            case ShapeKind.QUAD_MESH:
#           case ShapeKind.QUAD_MESH:
                logger.warning(f"Encountered root level quad mesh (unsupported type): {shape.describe()}")
#               logger.warning(f"Encountered root level quad mesh (unsupported type): {shape.describe()}")
            case _:
#           case _:
                logger.warning(f"Unhandled root level geometry type: {shape.describe()}")
#               logger.warning(f"Unhandled root level geometry type: {shape.describe()}")

    def build_geometry(self, shape: PbrtShape) -> Geometry | None:
#   def build_geometry(self, shape: PbrtShape) -> Geometry | None:
        match shape.kind:
#       match shape.kind:
            case ShapeKind.TRIANGLE_MESH:
#           case ShapeKind.TRIANGLE_MESH:
                vertices: npt.NDArray[np.float32] = np.asarray(shape.vertices, dtype=np.float32).reshape(-1, 3)
#               vertices: npt.NDArray[np.float32] = np.asarray(shape.vertices, dtype=np.float32).reshape(-1, 3)
                indices: npt.NDArray[np.int64] = np.asarray(shape.indices, dtype=np.int64).reshape(-1, 3)
#               indices: npt.NDArray[np.int64] = np.asarray(shape.indices, dtype=np.int64).reshape(-1, 3)
                # Negative indices would wrap around once narrowed to uint32
#               # Negative indices would wrap around once narrowed to uint32
                out_of_range: npt.NDArray[np.int64] = indices[(indices < 0) | (indices >= len(vertices))]
#               out_of_range: npt.NDArray[np.int64] = indices[(indices < 0) | (indices >= len(vertices))]
                if len(out_of_range) > 0:
#               if len(out_of_range) > 0:
                    raise ParserFailure(f"Index {int(out_of_range[0])} out of range for {len(vertices)} vertices", file=self.path, item=shape.name or shape.kind.value)
#                   raise ParserFailure(f"Index {int(out_of_range[0])} out of range for {len(vertices)} vertices", file=self.path, item=shape.name or shape.kind.value)
                uvs: npt.NDArray[np.float32] = np.asarray(shape.texcoords, dtype=np.float32).reshape(-1, 2)
#               uvs: npt.NDArray[np.float32] = np.asarray(shape.texcoords, dtype=np.float32).reshape(-1, 2)
                if len(uvs) not in (0, len(vertices)):
#               if len(uvs) not in (0, len(vertices)):
                    logger.warning(f"{shape.describe()}: {len(uvs)} texture coordinates for {len(vertices)} vertices, dropping them")
#                   logger.warning(f"{shape.describe()}: {len(uvs)} texture coordinates for {len(vertices)} vertices, dropping them")
                    uvs = uvs[:0]
#                   uvs = uvs[:0]
                geometry: Geometry = Geometry(vertices=vertices, indices=indices.astype(np.uint32), uvs=uvs, material_id=self.material_id)
#               geometry: Geometry = Geometry(vertices=vertices, indices=indices.astype(np.uint32), uvs=uvs, material_id=self.material_id)
                logger.debug(f"Object triangle mesh with {geometry.num_tris()} triangles: {shape.describe()}")
#               logger.debug(f"Object triangle mesh with {geometry.num_tris()} triangles: {shape.describe()}")
                return geometry
#               return geometry
            case ShapeKind.QUAD_MESH:
#           case ShapeKind.QUAD_MESH:
                logger.warning(f"Encountered instanced quad mesh (unsupported type): {shape.describe()}")
#               logger.warning(f"Encountered instanced quad mesh (unsupported type): {shape.describe()}")
                return None
#               return None
            case _:
#           case _:
                logger.warning(f"Unhandled instanced geometry type: {shape.describe()}")
#               logger.warning(f"Unhandled instanced geometry type: {shape.describe()}")
                return None
#               return None

    def build_mesh(self, pbrt_object: PbrtObject) -> Mesh | None:
#   def build_mesh(self, pbrt_object: PbrtObject) -> Mesh | None:
        logger.info(f"Loading newly encountered instanced object '{pbrt_object.name}'")
#       logger.info(f"Loading newly encountered instanced object '{pbrt_object.name}'")
        geometries: list[Geometry] = []
#       geometries: list[Geometry] = []
        for shape in pbrt_object.shapes:
#       for shape in pbrt_object.shapes:
            geometry: Geometry | None = self.build_geometry(shape)
#           geometry: Geometry | None = self.build_geometry(shape)
            if geometry is not None:
#           if geometry is not None:
                geometries.append(geometry)
#               geometries.append(geometry)
        if pbrt_object.instances:
#       if pbrt_object.instances:
            logger.warning(f"Object '{pbrt_object.name}' still has nested instances after flattening")
#           logger.warning(f"Object '{pbrt_object.name}' still has nested instances after flattening")
        if not geometries:
#       if not geometries:
            return None
#           return None
        return Mesh(geometries)
#       return Mesh(geometries)

    def load(self, path: str) -> Scene:
#   def load(self, path: str) -> Scene:
        logger.info(f"Loading PBRT: {path}")
#       logger.info(f"Loading PBRT: {path}")
        self.path = path
#       self.path = path
        pbrt_scene: PbrtScene = self.parse(path)
#       pbrt_scene: PbrtScene = self.parse(path)
        scene: Scene = Scene()
#       scene: Scene = Scene()
        self.material_id = len(scene.materials)
#       self.material_id = len(scene.materials)
        scene.materials.append(default_material())
#       scene.materials.append(default_material())

        for shape in pbrt_scene.world.shapes:
#       for shape in pbrt_scene.world.shapes:
            self.log_root_shape(shape)
#           self.log_root_shape(shape)

        # Object name -> mesh index, None marks objects with only unsupported shapes
#       # Object name -> mesh index, None marks objects with only unsupported shapes
        pbrt_objects: dict[str, int | None] = {}
#       pbrt_objects: dict[str, int | None] = {}
        for instance in pbrt_scene.world.instances:
#       for instance in pbrt_scene.world.instances:
            name: str = instance.object.name
#           name: str = instance.object.name
            if name not in pbrt_objects:
#           if name not in pbrt_objects:
                mesh: Mesh | None = self.build_mesh(instance.object)
#               mesh: Mesh | None = self.build_mesh(instance.object)
                if mesh is None:
#               if mesh is None:
                    logger.warning(f"Object '{name}' contains only unsupported geometries, skipping")
#                   logger.warning(f"Object '{name}' contains only unsupported geometries, skipping")
                    pbrt_objects[name] = None
#                   pbrt_objects[name] = None
                else:
#               else:
                    pbrt_objects[name] = len(scene.meshes)
#                   pbrt_objects[name] = len(scene.meshes)
                    scene.meshes.append(mesh)
#                   scene.meshes.append(mesh)
            mesh_id: int | None = pbrt_objects[name]
#           mesh_id: int | None = pbrt_objects[name]
            if mesh_id is None:
#           if mesh_id is None:
                continue
#               continue
            scene.instances.append(Instance(instance_transform(instance), mesh_id))
#           scene.instances.append(Instance(instance_transform(instance), mesh_id))

        logger.info(f"Loaded {len(scene.meshes)} meshes, {len(scene.instances)} instances from '{path}'")
#       logger.info(f"Loaded {len(scene.meshes)} meshes, {len(scene.instances)} instances from '{path}'")
        return scene
#       return scene
