import base64
import base64
import logging
import logging
import os
import os
import urllib.parse
import urllib.parse
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import typing
import typing
import pygltflib # type: ignore[import-untyped]
import pygltflib
from unified_scene.core.common_types import INVALID_ID, ColorSpace, DisneyMaterial, Geometry, Instance, Mesh, Texture, default_material
from unified_scene.core.common_types import INVALID_ID, ColorSpace, DisneyMaterial, Geometry, Instance, Mesh, Texture, default_material
from unified_scene.core.errors import ParserFailure, UnsupportedIndexType, UnsupportedPrimitiveMode
from unified_scene.core.errors import ParserFailure, UnsupportedIndexType, UnsupportedPrimitiveMode
from unified_scene.scene.accessor import UNSIGNED_INT, UNSIGNED_SHORT, AttributeAccessor
from unified_scene.scene.accessor import UNSIGNED_INT, UNSIGNED_SHORT, AttributeAccessor
from unified_scene.scene.gltf_flatten import flatten_scene_nodes
from unified_scene.scene.gltf_flatten import flatten_scene_nodes
from unified_scene.scene.image_io import decode_image
from unified_scene.scene.image_io import decode_image
from unified_scene.scene.scene import Scene
from unified_scene.scene.scene import Scene

logger: logging.Logger = logging.getLogger(__name__)

MODE_TRIANGLES: int = 4

class GltfAdapter:
    """
    Converts a glTF 2.0 document into meshes, instances, materials and textures.
#   Converts a glTF 2.0 document into meshes, instances, materials and textures.
    One glTF mesh maps to one Mesh, each primitive to one Geometry, every image to one Texture,
#   One glTF mesh maps to one Mesh, each primitive to one Geometry, every image to one Texture,
    and every node of the default scene that carries a mesh to one Instance with its world transform.
#   and every node of the default scene that carries a mesh to one Instance with its world transform.
    """
    def __init__(self) -> None:
#   def __init__(self) -> None:
        self.path: str = ""
#       self.path: str = ""
        self.base_dir: str = ""
#       self.base_dir: str = ""
        self.gltf: typing.Any = None
#       self.gltf: typing.Any = None
        self.buffers: list[bytes] = []
#       self.buffers: list[bytes] = []

    def parse(self, path: str) -> typing.Any:
#   def parse(self, path: str) -> typing.Any:
        binary: bool = path.rsplit(".", 1)[-1] == "glb"
#       binary: bool = path.rsplit(".", 1)[-1] == "glb"
        try:
#       try:
            if binary:
#           if binary:
                gltf: typing.Any = pygltflib.GLTF2().load_binary(path)
#               gltf: typing.Any = pygltflib.GLTF2().load_binary(path)
            else:
#           else:
                gltf = pygltflib.GLTF2().load_json(path)
#               gltf = pygltflib.GLTF2().load_json(path)
        except Exception as e:
#       except Exception as e:
            raise ParserFailure(f"glTF parser error: {e}", file=path) from e
#           raise ParserFailure(f"glTF parser error: {e}", file=path) from e
        if gltf is None:
#       if gltf is None:
            raise ParserFailure("glTF parser returned no document", file=path)
#           raise ParserFailure("glTF parser returned no document", file=path)
        return gltf
#       return gltf

    def read_uri(self, uri: str) -> bytes:
#   def read_uri(self, uri: str) -> bytes:
        if uri.startswith("data:"):
#       if uri.startswith("data:"):
            # data:[<mediatype>][;base64],<data>
#           # data:[<mediatype>][;base64],<data>
            header, _, payload = uri.partition(",")
#           header, _, payload = uri.partition(",")
            if header.endswith(";base64"):
#           if header.endswith(";base64"):
                return base64.b64decode(payload)
#               return base64.b64decode(payload)
            return urllib.parse.unquote_to_bytes(payload)
#           return urllib.parse.unquote_to_bytes(payload)
        file_path: str = os.path.join(self.base_dir, urllib.parse.unquote(uri))
#       file_path: str = os.path.join(self.base_dir, urllib.parse.unquote(uri))
        try:
#       try:
            with open(file_path, "rb") as f:
#           with open(file_path, "rb") as f:
                return f.read()
#               return f.read()
        except OSError as e:
#       except OSError as e:
            raise ParserFailure(f"Cannot read external resource: {e}", file=self.path, item=uri) from e
#           raise ParserFailure(f"Cannot read external resource: {e}", file=self.path, item=uri) from e

    def resolve_buffers(self) -> list[bytes]:
#   def resolve_buffers(self) -> list[bytes]:
        buffers: list[bytes] = []
#       buffers: list[bytes] = []
        for buffer_index, buffer in enumerate(self.gltf.buffers or []):
#       for buffer_index, buffer in enumerate(self.gltf.buffers or []):
            if buffer.uri:
#           if buffer.uri:
                data: bytes = self.read_uri(buffer.uri)
#               data: bytes = self.read_uri(buffer.uri)
            else:
#           else:
                # GLB binary chunk
#               # GLB binary chunk
                blob: bytes | None = self.gltf.binary_blob()
#               blob: bytes | None = self.gltf.binary_blob()
                if blob is None:
#               if blob is None:
                    raise ParserFailure("Buffer has no uri and the file has no binary chunk", file=self.path, item=f"buffer {buffer_index}")
#                   raise ParserFailure("Buffer has no uri and the file has no binary chunk", file=self.path, item=f"buffer {buffer_index}")
                data = bytes(blob)
#               data = bytes(blob)
            if len(data) < buffer.byteLength:
#           if len(data) < buffer.byteLength:
                raise ParserFailure(f"Buffer holds {len(data)} bytes, {buffer.byteLength} declared", file=self.path, item=f"buffer {buffer_index}")
#               raise ParserFailure(f"Buffer holds {len(data)} bytes, {buffer.byteLength} declared", file=self.path, item=f"buffer {buffer_index}")
            buffers.append(data)
#           buffers.append(data)
        return buffers
#       return buffers

    def accessor(self, accessor_index: int) -> AttributeAccessor:
#   def accessor(self, accessor_index: int) -> AttributeAccessor:
        return AttributeAccessor.from_gltf(self.gltf, accessor_index, self.buffers)
#       return AttributeAccessor.from_gltf(self.gltf, accessor_index, self.buffers)

    def read_indices(self, primitive: typing.Any, vertex_count: int, item: str) -> npt.NDArray[np.uint32]:
#   def read_indices(self, primitive: typing.Any, vertex_count: int, item: str) -> npt.NDArray[np.uint32]:
        if primitive.indices is None:
#       if primitive.indices is None:
            # Non-indexed primitive, consecutive vertices form the triangles
#           # Non-indexed primitive, consecutive vertices form the triangles
            flat: npt.NDArray[np.uint32] = np.arange(vertex_count, dtype=np.uint32)
#           flat: npt.NDArray[np.uint32] = np.arange(vertex_count, dtype=np.uint32)
        else:
#       else:
            component_type: int = self.gltf.accessors[primitive.indices].componentType
#           component_type: int = self.gltf.accessors[primitive.indices].componentType
            if component_type not in (UNSIGNED_SHORT, UNSIGNED_INT):
#           if component_type not in (UNSIGNED_SHORT, UNSIGNED_INT):
                raise UnsupportedIndexType(component_type, file=self.path, item=item)
#               raise UnsupportedIndexType(component_type, file=self.path, item=item)
            flat = self.accessor(primitive.indices).to_array(np.uint32).reshape(-1)
#           flat = self.accessor(primitive.indices).to_array(np.uint32).reshape(-1)

        remainder: int = len(flat) % 3
#       remainder: int = len(flat) % 3
        if remainder:
#       if remainder:
            logger.warning(f"{item}: index count {len(flat)} is not a multiple of 3, dropping the trailing partial triangle")
#           logger.warning(f"{item}: index count {len(flat)} is not a multiple of 3, dropping the trailing partial triangle")
            flat = flat[:len(flat) - remainder]
#           flat = flat[:len(flat) - remainder]
        if len(flat) > 0 and int(flat.max()) >= vertex_count:
#       if len(flat) > 0 and int(flat.max()) >= vertex_count:
            raise ParserFailure(f"Index {int(flat.max())} out of range for {vertex_count} vertices", file=self.path, item=item)
#           raise ParserFailure(f"Index {int(flat.max())} out of range for {vertex_count} vertices", file=self.path, item=item)
        return flat.reshape(-1, 3)
#       return flat.reshape(-1, 3)

    def build_geometry(self, primitive: typing.Any, item: str) -> Geometry:
#   def build_geometry(self, primitive: typing.Any, item: str) -> Geometry:
        mode: int = primitive.mode if primitive.mode is not None else MODE_TRIANGLES
#       mode: int = primitive.mode if primitive.mode is not None else MODE_TRIANGLES
        if mode != MODE_TRIANGLES:
#       if mode != MODE_TRIANGLES:
            raise UnsupportedPrimitiveMode(mode, file=self.path, item=item)
#           raise UnsupportedPrimitiveMode(mode, file=self.path, item=item)

        attributes: typing.Any = primitive.attributes
#       attributes: typing.Any = primitive.attributes
        if attributes.POSITION is None:
#       if attributes.POSITION is None:
            raise ParserFailure("Primitive has no POSITION attribute", file=self.path, item=item)
#           raise ParserFailure("Primitive has no POSITION attribute", file=self.path, item=item)
        vertices: npt.NDArray[np.float32] = self.accessor(attributes.POSITION).to_array(np.float32)
#       vertices: npt.NDArray[np.float32] = self.accessor(attributes.POSITION).to_array(np.float32)

        uvs: npt.NDArray[np.float32] | None = None
#       uvs: npt.NDArray[np.float32] | None = None
        if getattr(attributes, "TEXCOORD_0", None) is not None:
#       if getattr(attributes, "TEXCOORD_0", None) is not None:
            uvs = self.accessor(attributes.TEXCOORD_0).to_array(np.float32)
#           uvs = self.accessor(attributes.TEXCOORD_0).to_array(np.float32)
        if getattr(attributes, "TEXCOORD_1", None) is not None:
#       if getattr(attributes, "TEXCOORD_1", None) is not None:
            logger.warning(f"{item}: multiple texture coordinate sets are not supported, only TEXCOORD_0 is used")
#           logger.warning(f"{item}: multiple texture coordinate sets are not supported, only TEXCOORD_0 is used")
        if getattr(attributes, "NORMAL", None) is not None:
#       if getattr(attributes, "NORMAL", None) is not None:
            logger.debug(f"{item}: NORMAL attribute present but normals are not loaded")
#           logger.debug(f"{item}: NORMAL attribute present but normals are not loaded")

        return Geometry(
#       return Geometry(
            vertices=vertices,
#           vertices=vertices,
            indices=self.read_indices(primitive, len(vertices), item),
#           indices=self.read_indices(primitive, len(vertices), item),
            uvs=uvs,
#           uvs=uvs,
            material_id=primitive.material if primitive.material is not None else INVALID_ID,
#           material_id=primitive.material if primitive.material is not None else INVALID_ID,
        )
#       )

    def load_meshes(self, scene: Scene) -> dict[int, int]:
#   def load_meshes(self, scene: Scene) -> dict[int, int]:
        # glTF mesh index -> scene mesh index, meshes without primitives are left out
#       # glTF mesh index -> scene mesh index, meshes without primitives are left out
        mesh_ids: dict[int, int] = {}
#       mesh_ids: dict[int, int] = {}
        for gltf_mesh_index, gltf_mesh in enumerate(self.gltf.meshes or []):
#       for gltf_mesh_index, gltf_mesh in enumerate(self.gltf.meshes or []):
            mesh_name: str = gltf_mesh.name or f"mesh {gltf_mesh_index}"
#           mesh_name: str = gltf_mesh.name or f"mesh {gltf_mesh_index}"
            mesh: Mesh = Mesh()
#           mesh: Mesh = Mesh()
            for primitive_index, primitive in enumerate(gltf_mesh.primitives or []):
#           for primitive_index, primitive in enumerate(gltf_mesh.primitives or []):
                mesh.geometries.append(self.build_geometry(primitive, f"{mesh_name} primitive {primitive_index}"))
#               mesh.geometries.append(self.build_geometry(primitive, f"{mesh_name} primitive {primitive_index}"))
            if not mesh.geometries:
#           if not mesh.geometries:
                logger.warning(f"'{mesh_name}' has no primitives, skipping")
#               logger.warning(f"'{mesh_name}' has no primitives, skipping")
                continue
#               continue
            mesh_ids[gltf_mesh_index] = len(scene.meshes)
#           mesh_ids[gltf_mesh_index] = len(scene.meshes)
            scene.meshes.append(mesh)
#           scene.meshes.append(mesh)
        return mesh_ids
#       return mesh_ids

    def image_bytes(self, image: typing.Any, item: str) -> bytes:
#   def image_bytes(self, image: typing.Any, item: str) -> bytes:
        if image.uri:
#       if image.uri:
            return self.read_uri(image.uri)
#           return self.read_uri(image.uri)
        if image.bufferView is None:
#       if image.bufferView is None:
            raise ParserFailure("Image has neither a uri nor a buffer view", file=self.path, item=item)
#           raise ParserFailure("Image has neither a uri nor a buffer view", file=self.path, item=item)
        buffer_view: typing.Any = self.gltf.bufferViews[image.bufferView]
#       buffer_view: typing.Any = self.gltf.bufferViews[image.bufferView]
        start: int = buffer_view.byteOffset or 0
#       start: int = buffer_view.byteOffset or 0
        return self.buffers[buffer_view.buffer][start:start + buffer_view.byteLength]
#       return self.buffers[buffer_view.buffer][start:start + buffer_view.byteLength]

    def load_images(self, scene: Scene) -> list[int]:
#   def load_images(self, scene: Scene) -> list[int]:
        # glTF image index -> texture id
#       # glTF image index -> texture id
        image_texture_ids: list[int] = []
#       image_texture_ids: list[int] = []
        for image_index, image in enumerate(self.gltf.images or []):
#       for image_index, image in enumerate(self.gltf.images or []):
            name: str = image.name or image.uri or f"image {image_index}"
#           name: str = image.name or image.uri or f"image {image_index}"
            external: bool = bool(image.uri) and not image.uri.startswith("data:")
#           external: bool = bool(image.uri) and not image.uri.startswith("data:")
            key: str = image.uri if external else f"{self.path}#image{image_index}"
#           key: str = image.uri if external else f"{self.path}#image{image_index}"
            source_path: str | None = os.path.join(self.base_dir, urllib.parse.unquote(image.uri)) if external else None
#           source_path: str | None = os.path.join(self.base_dir, urllib.parse.unquote(image.uri)) if external else None

            def decode(image: typing.Any = image, name: str = name, source_path: str | None = source_path) -> Texture:
#           def decode(image: typing.Any = image, name: str = name, source_path: str | None = source_path) -> Texture:
                # Assume linear until the image is found used as a color texture
#               # Assume linear until the image is found used as a color texture
                texture: Texture = decode_image(self.image_bytes(image, name), name=name, color_space=ColorSpace.LINEAR, source=self.path)
#               texture: Texture = decode_image(self.image_bytes(image, name), name=name, color_space=ColorSpace.LINEAR, source=self.path)
                texture.path = source_path
#               texture.path = source_path
                if texture.channels != 4:
#               if texture.channels != 4:
                    logger.info(f"Image '{name}' has {texture.channels} components")
#                   logger.info(f"Image '{name}' has {texture.channels} components")
                return texture
#               return texture

            image_texture_ids.append(scene.texture_registry.get_or_create(key, decode))
#           image_texture_ids.append(scene.texture_registry.get_or_create(key, decode))
        return image_texture_ids
#       return image_texture_ids

    def convert_material(self, gltf_material: typing.Any, image_texture_ids: list[int], scene: Scene) -> DisneyMaterial:
#   def convert_material(self, gltf_material: typing.Any, image_texture_ids: list[int], scene: Scene) -> DisneyMaterial:
        material: DisneyMaterial = default_material()
#       material: DisneyMaterial = default_material()
        pbr: typing.Any = gltf_material.pbrMetallicRoughness
#       pbr: typing.Any = gltf_material.pbrMetallicRoughness
        if pbr is None:
#       if pbr is None:
            pbr = pygltflib.PbrMetallicRoughness()
#           pbr = pygltflib.PbrMetallicRoughness()
        base_color: list[float] = pbr.baseColorFactor if pbr.baseColorFactor is not None else [1.0, 1.0, 1.0, 1.0]
#       base_color: list[float] = pbr.baseColorFactor if pbr.baseColorFactor is not None else [1.0, 1.0, 1.0, 1.0]
        material["base_color"] = (float(base_color[0]), float(base_color[1]), float(base_color[2]))
#       material["base_color"] = (float(base_color[0]), float(base_color[1]), float(base_color[2]))
        material["metallic"] = float(pbr.metallicFactor if pbr.metallicFactor is not None else 1.0)
#       material["metallic"] = float(pbr.metallicFactor if pbr.metallicFactor is not None else 1.0)
        material["roughness"] = float(pbr.roughnessFactor if pbr.roughnessFactor is not None else 1.0)
#       material["roughness"] = float(pbr.roughnessFactor if pbr.roughnessFactor is not None else 1.0)

        if pbr.baseColorTexture is not None and pbr.baseColorTexture.index is not None:
#       if pbr.baseColorTexture is not None and pbr.baseColorTexture.index is not None:
            source: int | None = self.gltf.textures[pbr.baseColorTexture.index].source
#           source: int | None = self.gltf.textures[pbr.baseColorTexture.index].source
            if source is None:
#           if source is None:
                logger.warning(f"Material '{gltf_material.name}': base color texture has no image source")
#               logger.warning(f"Material '{gltf_material.name}': base color texture has no image source")
            else:
#           else:
                material["color_tex_id"] = image_texture_ids[source]
#               material["color_tex_id"] = image_texture_ids[source]
                # Used as a color texture, so it must be sRGB
#               # Used as a color texture, so it must be sRGB
                scene.texture_registry.promote_to_srgb(material["color_tex_id"])
#               scene.texture_registry.promote_to_srgb(material["color_tex_id"])

        logger.debug(
#       logger.debug(
            f"Material '{gltf_material.name}': base color {material['base_color']}, metallic {material['metallic']}, "
#           f"Material '{gltf_material.name}': base color {material['base_color']}, metallic {material['metallic']}, "
            f"roughness {material['roughness']}, color texture {material['color_tex_id']}"
#           f"roughness {material['roughness']}, color texture {material['color_tex_id']}"
        )
#       )
        return material
#       return material

    def load(self, path: str) -> Scene:
#   def load(self, path: str) -> Scene:
        logger.info(f"Loading glTF: {path}")
#       logger.info(f"Loading glTF: {path}")
        self.path = path
#       self.path = path
        self.base_dir = os.path.dirname(os.path.abspath(path))
#       self.base_dir = os.path.dirname(os.path.abspath(path))
        self.gltf = self.parse(path)
#       self.gltf = self.parse(path)
        if not self.gltf.scenes:
#       if not self.gltf.scenes:
            raise ParserFailure("glTF file declares no scenes", file=path)
#           raise ParserFailure("glTF file declares no scenes", file=path)
        self.buffers = self.resolve_buffers()
#       self.buffers = self.resolve_buffers()
        scene: Scene = Scene()
#       scene: Scene = Scene()

        mesh_ids: dict[int, int] = self.load_meshes(scene)
#       mesh_ids: dict[int, int] = self.load_meshes(scene)
        image_texture_ids: list[int] = self.load_images(scene)
#       image_texture_ids: list[int] = self.load_images(scene)
        for gltf_material in self.gltf.materials or []:
#       for gltf_material in self.gltf.materials or []:
            scene.materials.append(self.convert_material(gltf_material, image_texture_ids, scene))
#           scene.materials.append(self.convert_material(gltf_material, image_texture_ids, scene))

        scene_index: int = self.gltf.scene if self.gltf.scene is not None else 0
#       scene_index: int = self.gltf.scene if self.gltf.scene is not None else 0
        if not 0 <= scene_index < len(self.gltf.scenes):
#       if not 0 <= scene_index < len(self.gltf.scenes):
            raise ParserFailure(f"Default scene {scene_index} does not exist", file=path)
#           raise ParserFailure(f"Default scene {scene_index} does not exist", file=path)
        logger.debug(f"Default scene: {scene_index} of {len(self.gltf.scenes)}")
#       logger.debug(f"Default scene: {scene_index} of {len(self.gltf.scenes)}")
        for node_index, world_transform in flatten_scene_nodes(self.gltf, scene_index):
#       for node_index, world_transform in flatten_scene_nodes(self.gltf, scene_index):
            gltf_mesh_index: int = self.gltf.nodes[node_index].mesh
#           gltf_mesh_index: int = self.gltf.nodes[node_index].mesh
            if gltf_mesh_index not in mesh_ids:
#           if gltf_mesh_index not in mesh_ids:
                continue
#               continue
            scene.instances.append(Instance(world_transform, mesh_ids[gltf_mesh_index]))
#           scene.instances.append(Instance(world_transform, mesh_ids[gltf_mesh_index]))

        logger.info(f"Loaded {len(scene.meshes)} meshes, {len(scene.instances)} instances, {len(scene.materials)} materials, {len(scene.textures)} textures from '{path}'")
#       logger.info(f"Loaded {len(scene.meshes)} meshes, {len(scene.instances)} instances, {len(scene.materials)} materials, {len(scene.textures)} textures from '{path}'")
        return scene
#       return scene
