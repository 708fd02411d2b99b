import logging
import logging
import os
import os
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import typing
import typing
import tinyobjloader # type: ignore[import-untyped]
import tinyobjloader
from unified_scene.core import config
from unified_scene.core import config
from unified_scene.core.common_types import INVALID_ID, ColorSpace, DisneyMaterial, Geometry, Instance, Mesh, Texture, default_material
from unified_scene.core.common_types import INVALID_ID, ColorSpace, DisneyMaterial, Geometry, Instance, Mesh, Texture, default_material
from unified_scene.core.errors import NonTriangularFace, ParserFailure
from unified_scene.core.errors import NonTriangularFace, ParserFailure
from unified_scene.scene.image_io import load_image
from unified_scene.scene.image_io import load_image
from unified_scene.scene.scene import Scene
from unified_scene.scene.scene import Scene
from unified_scene.scene.texture_registry import TextureRegistry
from unified_scene.scene.texture_registry import TextureRegistry
from unified_scene.scene.vertex_deduper import VertexDeduper
from unified_scene.scene.vertex_deduper import VertexDeduper

logger: logging.Logger = logging.getLogger(__name__)

def canonicalize_path(path: str) -> str:
    # MTL files written on Windows use backslashes
#   # MTL files written on Windows use backslashes
    return path.replace("\\", "/")
#   return path.replace("\\", "/")

def convert_material(obj_material: typing.Any, base_dir: str, registry: TextureRegistry) -> DisneyMaterial:
    """
    Maps an MTL material onto the Disney parameters:
#   Maps an MTL material onto the Disney parameters:
        specular = clamp(Ns / 500, 0, 1), roughness = 1 - specular,
#       specular = clamp(Ns / 500, 0, 1), roughness = 1 - specular,
        specular_transmission = clamp(1 - d, 0, 1).
#       specular_transmission = clamp(1 - d, 0, 1).
    The diffuse map becomes the base color texture, shared between materials naming the same file.
#   The diffuse map becomes the base color texture, shared between materials naming the same file.
    """
    material: DisneyMaterial = default_material()
#   material: DisneyMaterial = default_material()
    diffuse: list[float] = list(obj_material.diffuse)
#   diffuse: list[float] = list(obj_material.diffuse)
    material["base_color"] = (float(diffuse[0]), float(diffuse[1]), float(diffuse[2]))
#   material["base_color"] = (float(diffuse[0]), float(diffuse[1]), float(diffuse[2]))
    material["specular"] = float(np.clip(obj_material.shininess / config.OBJ_SHININESS_SCALE, 0.0, 1.0))
#   material["specular"] = float(np.clip(obj_material.shininess / config.OBJ_SHININESS_SCALE, 0.0, 1.0))
    material["roughness"] = 1.0 - material["specular"]
#   material["roughness"] = 1.0 - material["specular"]
    material["specular_transmission"] = float(np.clip(1.0 - obj_material.dissolve, 0.0, 1.0))
#   material["specular_transmission"] = float(np.clip(1.0 - obj_material.dissolve, 0.0, 1.0))

    texture_name: str = obj_material.diffuse_texname
#   texture_name: str = obj_material.diffuse_texname
    if texture_name:
#   if texture_name:
        texture_path: str = os.path.join(base_dir, canonicalize_path(texture_name))
#       texture_path: str = os.path.join(base_dir, canonicalize_path(texture_name))

        def load_color_map() -> Texture:
#       def load_color_map() -> Texture:
            return load_image(texture_path, name=texture_name, color_space=ColorSpace.SRGB)
#           return load_image(texture_path, name=texture_name, color_space=ColorSpace.SRGB)

        material["color_tex_id"] = registry.get_or_create(texture_name, load_color_map)
#       material["color_tex_id"] = registry.get_or_create(texture_name, load_color_map)
        registry.promote_to_srgb(material["color_tex_id"])
#       registry.promote_to_srgb(material["color_tex_id"])
    return material
#   return material

class ObjAdapter:
    def __init__(self, triangulate: bool = True) -> None:
#   def __init__(self, triangulate: bool = True) -> None:
        self.triangulate: bool = triangulate
#       self.triangulate: bool = triangulate

    def parse(self, path: str) -> typing.Any:
#   def parse(self, path: str) -> typing.Any:
        # MTL files are searched next to the OBJ when no search path is configured
#       # MTL files are searched next to the OBJ when no search path is configured
        reader: typing.Any = tinyobjloader.ObjReader()
#       reader: typing.Any = tinyobjloader.ObjReader()
        reader_config: typing.Any = tinyobjloader.ObjReaderConfig()
#       reader_config: typing.Any = tinyobjloader.ObjReaderConfig()
        reader_config.triangulate = self.triangulate
#       reader_config.triangulate = self.triangulate
        ret: bool = reader.ParseFromFile(path, reader_config)
#       ret: bool = reader.ParseFromFile(path, reader_config)
        warning: str = reader.Warning()
#       warning: str = reader.Warning()
        if warning:
#       if warning:
            logger.warning(f"TinyOBJ loading '{path}': {warning.strip()}")
#           logger.warning(f"TinyOBJ loading '{path}': {warning.strip()}")
        error: str = reader.Error()
#       error: str = reader.Error()
        if not ret or error:
#       if not ret or error:
            raise ParserFailure(f"TinyOBJ error: {error.strip() or 'parse failed'}", file=path)
#           raise ParserFailure(f"TinyOBJ error: {error.strip() or 'parse failed'}", file=path)
        return reader
#       return reader

    def build_geometry(self, path: str, shape: typing.Any, positions: npt.NDArray[np.float32], normals: npt.NDArray[np.float32], texcoords: npt.NDArray[np.float32]) -> Geometry | None:
#   def build_geometry(self, path: str, shape: typing.Any, positions: npt.NDArray[np.float32], normals: npt.NDArray[np.float32], texcoords: npt.NDArray[np.float32]) -> Geometry | None:
        """
        Remaps one shape from tinyobjloader's three independent per-corner indices
#       Remaps one shape from tinyobjloader's three independent per-corner indices
        to a single index per distinct (position, normal, uv) tuple.
#       to a single index per distinct (position, normal, uv) tuple.
        """
        obj_mesh: typing.Any = shape.mesh
#       obj_mesh: typing.Any = shape.mesh
        num_face_vertices: list[int] = list(obj_mesh.num_face_vertices)
#       num_face_vertices: list[int] = list(obj_mesh.num_face_vertices)
        if not num_face_vertices:
#       if not num_face_vertices:
            logger.warning(f"Shape '{shape.name}' in '{path}' has no faces, skipping")
#           logger.warning(f"Shape '{shape.name}' in '{path}' has no faces, skipping")
            return None
#           return None
        material_ids: list[int] = list(obj_mesh.material_ids)
#       material_ids: list[int] = list(obj_mesh.material_ids)
        if min(material_ids) != max(material_ids):
#       if min(material_ids) != max(material_ids):
            logger.warning(
#           logger.warning(
                f"Shape '{shape.name}': per-face material IDs are not supported, materials may look wrong. "
#               f"Shape '{shape.name}': per-face material IDs are not supported, materials may look wrong. "
                "Please re-export your mesh with each material group as an OBJ group"
#               "Please re-export your mesh with each material group as an OBJ group"
            )
#           )

        deduper: VertexDeduper = VertexDeduper()
#       deduper: VertexDeduper = VertexDeduper()
        vertices: list[npt.NDArray[np.float32]] = []
#       vertices: list[npt.NDArray[np.float32]] = []
        vertex_normals: list[npt.NDArray[np.float32]] = []
#       vertex_normals: list[npt.NDArray[np.float32]] = []
        vertex_uvs: list[npt.NDArray[np.float32]] = []
#       vertex_uvs: list[npt.NDArray[np.float32]] = []
        triangles: list[tuple[int, int, int]] = []
#       triangles: list[tuple[int, int, int]] = []

        corners: list[typing.Any] = list(obj_mesh.indices)
#       corners: list[typing.Any] = list(obj_mesh.indices)
        offset: int = 0
#       offset: int = 0
        for face_vertex_count in num_face_vertices:
#       for face_vertex_count in num_face_vertices:
            if face_vertex_count != 3:
#           if face_vertex_count != 3:
                raise NonTriangularFace(f"Non-triangle face with {face_vertex_count} vertices found", file=path, item=shape.name)
#               raise NonTriangularFace(f"Non-triangle face with {face_vertex_count} vertices found", file=path, item=shape.name)
            triangle: list[int] = []
#           triangle: list[int] = []
            for corner in corners[offset:offset + 3]:
#           for corner in corners[offset:offset + 3]:
                vertex_index, is_new = deduper.lookup_or_insert(corner.vertex_index, corner.normal_index, corner.texcoord_index)
#               vertex_index, is_new = deduper.lookup_or_insert(corner.vertex_index, corner.normal_index, corner.texcoord_index)
                if is_new:
#               if is_new:
                    vertices.append(positions[corner.vertex_index])
#                   vertices.append(positions[corner.vertex_index])
                    if corner.normal_index != -1:
#                   if corner.normal_index != -1:
                        normal: npt.NDArray[np.float32] = normals[corner.normal_index]
#                       normal: npt.NDArray[np.float32] = normals[corner.normal_index]
                        length: float = float(np.linalg.norm(normal))
#                       length: float = float(np.linalg.norm(normal))
                        vertex_normals.append(normal / length if length > 1e-12 else normal)
#                       vertex_normals.append(normal / length if length > 1e-12 else normal)
                    if corner.texcoord_index != -1:
#                   if corner.texcoord_index != -1:
                        vertex_uvs.append(texcoords[corner.texcoord_index])
#                       vertex_uvs.append(texcoords[corner.texcoord_index])
                triangle.append(vertex_index)
#               triangle.append(vertex_index)
            triangles.append((triangle[0], triangle[1], triangle[2]))
#           triangles.append((triangle[0], triangle[1], triangle[2]))
            offset += face_vertex_count
#           offset += face_vertex_count

        # A shape mixing corners with and without normals/uvs cannot keep parallel arrays, drop the attribute
#       # A shape mixing corners with and without normals/uvs cannot keep parallel arrays, drop the attribute
        if vertex_normals and len(vertex_normals) != len(vertices):
#       if vertex_normals and len(vertex_normals) != len(vertices):
            logger.warning(f"Shape '{shape.name}' has normals on only some corners, dropping normals")
#           logger.warning(f"Shape '{shape.name}' has normals on only some corners, dropping normals")
            vertex_normals = []
#           vertex_normals = []
        if vertex_uvs and len(vertex_uvs) != len(vertices):
#       if vertex_uvs and len(vertex_uvs) != len(vertices):
            logger.warning(f"Shape '{shape.name}' has texture coordinates on only some corners, dropping them")
#           logger.warning(f"Shape '{shape.name}' has texture coordinates on only some corners, dropping them")
            vertex_uvs = []
#           vertex_uvs = []

        return Geometry(
#       return Geometry(
            vertices=np.array(vertices, dtype=np.float32),
#           vertices=np.array(vertices, dtype=np.float32),
            indices=np.array(triangles, dtype=np.uint32),
#           indices=np.array(triangles, dtype=np.uint32),
            normals=np.array(vertex_normals, dtype=np.float32) if vertex_normals else None,
#           normals=np.array(vertex_normals, dtype=np.float32) if vertex_normals else None,
            uvs=np.array(vertex_uvs, dtype=np.float32) if vertex_uvs else None,
#           uvs=np.array(vertex_uvs, dtype=np.float32) if vertex_uvs else None,
            # Per-face materials are not supported, the first face decides
#           # Per-face materials are not supported, the first face decides
            material_id=int(material_ids[0]) if material_ids[0] >= 0 else INVALID_ID,
#           material_id=int(material_ids[0]) if material_ids[0] >= 0 else INVALID_ID,
        )
#       )

    def load(self, path: str) -> Scene:
#   def load(self, path: str) -> Scene:
        logger.info(f"Loading OBJ: {path}")
#       logger.info(f"Loading OBJ: {path}")
        reader: typing.Any = self.parse(path)
#       reader: typing.Any = self.parse(path)
        base_dir: str = os.path.dirname(os.path.abspath(path))
#       base_dir: str = os.path.dirname(os.path.abspath(path))
        scene: Scene = Scene()
#       scene: Scene = Scene()

        # pybind returns a fresh list on every attribute access, convert each once
#       # pybind returns a fresh list on every attribute access, convert each once
        attrib: typing.Any = reader.GetAttrib()
#       attrib: typing.Any = reader.GetAttrib()
        positions: npt.NDArray[np.float32] = np.asarray(attrib.vertices, dtype=np.float32).reshape(-1, 3)
#       positions: npt.NDArray[np.float32] = np.asarray(attrib.vertices, dtype=np.float32).reshape(-1, 3)
        normals: npt.NDArray[np.float32] = np.asarray(attrib.normals, dtype=np.float32).reshape(-1, 3)
#       normals: npt.NDArray[np.float32] = np.asarray(attrib.normals, dtype=np.float32).reshape(-1, 3)
        texcoords: npt.NDArray[np.float32] = np.asarray(attrib.texcoords, dtype=np.float32).reshape(-1, 2)
#       texcoords: npt.NDArray[np.float32] = np.asarray(attrib.texcoords, dtype=np.float32).reshape(-1, 2)

        # All OBJ groups are dumped into a single mesh
#       # All OBJ groups are dumped into a single mesh
        mesh: Mesh = Mesh()
#       mesh: Mesh = Mesh()
        for shape in reader.GetShapes():
#       for shape in reader.GetShapes():
            geometry: Geometry | None = self.build_geometry(path, shape, positions, normals, texcoords)
#           geometry: Geometry | None = self.build_geometry(path, shape, positions, normals, texcoords)
            if geometry is not None:
#           if geometry is not None:
                mesh.geometries.append(geometry)
#               mesh.geometries.append(geometry)

        if mesh.geometries:
#       if mesh.geometries:
            scene.meshes.append(mesh)
#           scene.meshes.append(mesh)
            # OBJ has a single instance
#           # OBJ has a single instance
            scene.instances.append(Instance(np.eye(4, dtype=np.float32), 0))
#           scene.instances.append(Instance(np.eye(4, dtype=np.float32), 0))
        else:
#       else:
            logger.warning(f"'{path}' contains no triangles")
#           logger.warning(f"'{path}' contains no triangles")

        for obj_material in reader.GetMaterials():
#       for obj_material in reader.GetMaterials():
            scene.materials.append(convert_material(obj_material, base_dir, scene.texture_registry))
#           scene.materials.append(convert_material(obj_material, base_dir, scene.texture_registry))

        logger.info(f"Loaded {scene.num_geometries()} geometries, {len(scene.materials)} materials, {len(scene.textures)} textures from '{path}'")
#       logger.info(f"Loaded {scene.num_geometries()} geometries, {len(scene.materials)} materials, {len(scene.textures)} textures from '{path}'")
        return scene
#       return scene
