import logging
import logging
from unified_scene.core.common_types import INVALID_ID, DisneyMaterial, Geometry, Instance, Mesh, QuadLight, Texture, default_material
from unified_scene.core.common_types import INVALID_ID, DisneyMaterial, Geometry, Instance, Mesh, QuadLight, Texture, default_material
from unified_scene.scene.light_synthesizer import synthesize_quad_light
from unified_scene.scene.light_synthesizer import synthesize_quad_light
from unified_scene.scene.texture_registry import TextureRegistry
from unified_scene.scene.texture_registry import TextureRegistry

logger: logging.Logger = logging.getLogger(__name__)

class Scene:
    # Flat, index-linked aggregate handed to the renderer:
#   # Flat, index-linked aggregate handed to the renderer:
    # instances point at meshes, geometries at materials, materials at textures, all by list index.
#   # instances point at meshes, geometries at materials, materials at textures, all by list index.
    def __init__(self) -> None:
#   def __init__(self) -> None:
        self.meshes: list[Mesh] = []
#       self.meshes: list[Mesh] = []
        self.instances: list[Instance] = []
#       self.instances: list[Instance] = []
        self.materials: list[DisneyMaterial] = []
#       self.materials: list[DisneyMaterial] = []
        self.texture_registry: TextureRegistry = TextureRegistry()
#       self.texture_registry: TextureRegistry = TextureRegistry()
        self.lights: list[QuadLight] = []
#       self.lights: list[QuadLight] = []

    @property
#   @property
    def textures(self) -> list[Texture]:
#   def textures(self) -> list[Texture]:
        return self.texture_registry.textures
#       return self.texture_registry.textures

    def unique_tris(self) -> int:
#   def unique_tris(self) -> int:
        return sum(mesh.num_tris() for mesh in self.meshes)
#       return sum(mesh.num_tris() for mesh in self.meshes)

    def total_tris(self) -> int:
#   def total_tris(self) -> int:
        return sum(self.meshes[instance.mesh_id].num_tris() for instance in self.instances)
#       return sum(self.meshes[instance.mesh_id].num_tris() for instance in self.instances)

    def num_geometries(self) -> int:
#   def num_geometries(self) -> int:
        return sum(len(mesh.geometries) for mesh in self.meshes)
#       return sum(len(mesh.geometries) for mesh in self.meshes)

    def iter_geometries(self) -> list[Geometry]:
#   def iter_geometries(self) -> list[Geometry]:
        return [geometry for mesh in self.meshes for geometry in mesh.geometries]
#       return [geometry for mesh in self.meshes for geometry in mesh.geometries]

    def assign_default_material(self) -> int | None:
#   def assign_default_material(self) -> int | None:
        """
        Appends one neutral material and points every geometry without a material at it.
#       Appends one neutral material and points every geometry without a material at it.
        Returns the default material index, or None when every geometry already had a material.
#       Returns the default material index, or None when every geometry already had a material.
        """
        unassigned: list[Geometry] = [geometry for geometry in self.iter_geometries() if geometry.material_id == INVALID_ID]
#       unassigned: list[Geometry] = [geometry for geometry in self.iter_geometries() if geometry.material_id == INVALID_ID]
        if not unassigned:
#       if not unassigned:
            return None
#           return None
        logger.info(f"No materials assigned for {len(unassigned)} geometries, generating a default material")
#       logger.info(f"No materials assigned for {len(unassigned)} geometries, generating a default material")
        default_material_id: int = len(self.materials)
#       default_material_id: int = len(self.materials)
        self.materials.append(default_material())
#       self.materials.append(default_material())
        for geometry in unassigned:
#       for geometry in unassigned:
            geometry.material_id = default_material_id
#           geometry.material_id = default_material_id
        return default_material_id
#       return default_material_id

    def ensure_light(self) -> None:
#   def ensure_light(self) -> None:
        if self.lights:
#       if self.lights:
            return
#           return
        logger.info("Scene has no lights, generating a quad light")
#       logger.info("Scene has no lights, generating a quad light")
        self.lights.append(synthesize_quad_light())
#       self.lights.append(synthesize_quad_light())

    def finalize(self) -> "Scene":
#   def finalize(self) -> "Scene":
        # Post-pass run after every adapter
#       # Post-pass run after every adapter
        self.assign_default_material()
#       self.assign_default_material()
        self.ensure_light()
#       self.ensure_light()
        return self
#       return self

    def validate(self) -> None:
#   def validate(self) -> None:
        """
        Checks the cross-reference invariants of the aggregate and raises ValueError on the first violation.
#       Checks the cross-reference invariants of the aggregate and raises ValueError on the first violation.
        """
        for mesh_id, mesh in enumerate(self.meshes):
#       for mesh_id, mesh in enumerate(self.meshes):
            if not mesh.geometries:
#           if not mesh.geometries:
                raise ValueError(f"Mesh {mesh_id} has no geometries")
#               raise ValueError(f"Mesh {mesh_id} has no geometries")
            for geometry_id, geometry in enumerate(mesh.geometries):
#           for geometry_id, geometry in enumerate(mesh.geometries):
                where: str = f"mesh {mesh_id} geometry {geometry_id}"
#               where: str = f"mesh {mesh_id} geometry {geometry_id}"
                if len(geometry.indices) > 0 and int(geometry.indices.max()) >= geometry.num_vertices():
#               if len(geometry.indices) > 0 and int(geometry.indices.max()) >= geometry.num_vertices():
                    raise ValueError(f"{where} references vertex {int(geometry.indices.max())} of {geometry.num_vertices()}")
#                   raise ValueError(f"{where} references vertex {int(geometry.indices.max())} of {geometry.num_vertices()}")
                if len(geometry.normals) not in (0, geometry.num_vertices()):
#               if len(geometry.normals) not in (0, geometry.num_vertices()):
                    raise ValueError(f"{where} has {len(geometry.normals)} normals for {geometry.num_vertices()} vertices")
#                   raise ValueError(f"{where} has {len(geometry.normals)} normals for {geometry.num_vertices()} vertices")
                if len(geometry.uvs) not in (0, geometry.num_vertices()):
#               if len(geometry.uvs) not in (0, geometry.num_vertices()):
                    raise ValueError(f"{where} has {len(geometry.uvs)} uvs for {geometry.num_vertices()} vertices")
#                   raise ValueError(f"{where} has {len(geometry.uvs)} uvs for {geometry.num_vertices()} vertices")
                if not 0 <= geometry.material_id < len(self.materials):
#               if not 0 <= geometry.material_id < len(self.materials):
                    raise ValueError(f"{where} references material {geometry.material_id} of {len(self.materials)}")
#                   raise ValueError(f"{where} references material {geometry.material_id} of {len(self.materials)}")
        for instance_id, instance in enumerate(self.instances):
#       for instance_id, instance in enumerate(self.instances):
            if not 0 <= instance.mesh_id < len(self.meshes):
#           if not 0 <= instance.mesh_id < len(self.meshes):
                raise ValueError(f"Instance {instance_id} references mesh {instance.mesh_id} of {len(self.meshes)}")
#               raise ValueError(f"Instance {instance_id} references mesh {instance.mesh_id} of {len(self.meshes)}")
        for material_id, material in enumerate(self.materials):
#       for material_id, material in enumerate(self.materials):
            color_tex_id: int = material["color_tex_id"]
#           color_tex_id: int = material["color_tex_id"]
            if color_tex_id != INVALID_ID and not 0 <= color_tex_id < len(self.textures):
#           if color_tex_id != INVALID_ID and not 0 <= color_tex_id < len(self.textures):
                raise ValueError(f"Material {material_id} references texture {color_tex_id} of {len(self.textures)}")
#               raise ValueError(f"Material {material_id} references texture {color_tex_id} of {len(self.textures)}")

    def summary(self) -> str:
#   def summary(self) -> str:
        return (
#       return (
            f"{len(self.meshes)} meshes, {self.num_geometries()} geometries, {len(self.instances)} instances, "
#           f"{len(self.meshes)} meshes, {self.num_geometries()} geometries, {len(self.instances)} instances, "
            f"{len(self.materials)} materials, {len(self.textures)} textures, {len(self.lights)} lights, "
#           f"{len(self.materials)} materials, {len(self.textures)} textures, {len(self.lights)} lights, "
            f"{self.unique_tris()} unique triangles, {self.total_tris()} total triangles"
#           f"{self.unique_tris()} unique triangles, {self.total_tris()} total triangles"
        )
#       )
