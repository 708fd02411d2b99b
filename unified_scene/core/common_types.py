import enum
import enum
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt

vec2f32: typing.TypeAlias = tuple[float, float]
vec3f32: typing.TypeAlias = tuple[float, float, float]
vec4f32: typing.TypeAlias = tuple[float, float, float, float]
vec3i32: typing.TypeAlias = tuple[int, int, int]

# Sentinel used by every adapter for "no material" / "no texture"
INVALID_ID: int = -1

class ColorSpace(enum.Enum):
    LINEAR = 0
#   LINEAR = 0
    SRGB = 1
#   SRGB = 1

class DisneyMaterial(typing.TypedDict):
    # Parametric material shared by every source format.
#   # Parametric material shared by every source format.
    # Only base_color, metallic, roughness, specular, specular_transmission and color_tex_id
#   # Only base_color, metallic, roughness, specular, specular_transmission and color_tex_id
    # are filled from source files, the remaining lobes stay at their neutral defaults.
#   # are filled from source files, the remaining lobes stay at their neutral defaults.
    base_color: vec3f32
#   base_color: vec3f32
    metallic: float
#   metallic: float
    specular: float
#   specular: float
    roughness: float
#   roughness: float
    specular_tint: float
#   specular_tint: float
    anisotropy: float
#   anisotropy: float
    sheen: float
#   sheen: float
    sheen_tint: float
#   sheen_tint: float
    clearcoat: float
#   clearcoat: float
    clearcoat_gloss: float
#   clearcoat_gloss: float
    ior: float
#   ior: float
    specular_transmission: float
#   specular_transmission: float
    color_tex_id: int
#   color_tex_id: int

class QuadLight(typing.TypedDict):
    # Planar rectangular emitter, the only light kind the renderer consumes.
#   # Planar rectangular emitter, the only light kind the renderer consumes.
    # Vectors are padded to 4 components to match the GPU side struct.
#   # Vectors are padded to 4 components to match the GPU side struct.
    emission: vec4f32
#   emission: vec4f32
    position: vec4f32
#   position: vec4f32
    normal: vec4f32
#   normal: vec4f32
    v_x: vec4f32
#   v_x: vec4f32
    v_y: vec4f32
#   v_y: vec4f32
    width: float
#   width: float
    height: float
#   height: float

def default_material() -> DisneyMaterial:
    return DisneyMaterial(
#   return DisneyMaterial(
        base_color=(0.9, 0.9, 0.9),
#       base_color=(0.9, 0.9, 0.9),
        metallic=0.0,
#       metallic=0.0,
        specular=0.0,
#       specular=0.0,
        roughness=1.0,
#       roughness=1.0,
        specular_tint=0.0,
#       specular_tint=0.0,
        anisotropy=0.0,
#       anisotropy=0.0,
        sheen=0.0,
#       sheen=0.0,
        sheen_tint=0.0,
#       sheen_tint=0.0,
        clearcoat=0.0,
#       clearcoat=0.0,
        clearcoat_gloss=0.0,
#       clearcoat_gloss=0.0,
        ior=1.5,
#       ior=1.5,
        specular_transmission=0.0,
#       specular_transmission=0.0,
        color_tex_id=INVALID_ID,
#       color_tex_id=INVALID_ID,
    )
#   )

class Geometry:
    def __init__(
#   def __init__(
        self,
#       self,
        vertices: npt.NDArray[np.float32] | None = None,
#       vertices: npt.NDArray[np.float32] | None = None,
        indices: npt.NDArray[np.uint32] | None = None,
#       indices: npt.NDArray[np.uint32] | None = None,
        normals: npt.NDArray[np.float32] | None = None,
#       normals: npt.NDArray[np.float32] | None = None,
        uvs: npt.NDArray[np.float32] | None = None,
#       uvs: npt.NDArray[np.float32] | None = None,
        material_id: int = INVALID_ID,
#       material_id: int = INVALID_ID,
    ) -> None:
#   ) -> None:
        # All arrays are row-per-element: vertices (N, 3), normals (N, 3) or (0, 3), uvs (N, 2) or (0, 2), indices (M, 3)
#       # All arrays are row-per-element: vertices (N, 3), normals (N, 3) or (0, 3), uvs (N, 2) or (0, 2), indices (M, 3)
        self.vertices: npt.NDArray[np.float32] = np.zeros((0, 3), dtype=np.float32) if vertices is None else np.asarray(vertices, dtype=np.float32).reshape(-1, 3)
#       self.vertices: npt.NDArray[np.float32] = np.zeros((0, 3), dtype=np.float32) if vertices is None else np.asarray(vertices, dtype=np.float32).reshape(-1, 3)
        self.indices: npt.NDArray[np.uint32] = np.zeros((0, 3), dtype=np.uint32) if indices is None else np.asarray(indices, dtype=np.uint32).reshape(-1, 3)
#       self.indices: npt.NDArray[np.uint32] = np.zeros((0, 3), dtype=np.uint32) if indices is None else np.asarray(indices, dtype=np.uint32).reshape(-1, 3)
        self.normals: npt.NDArray[np.float32] = np.zeros((0, 3), dtype=np.float32) if normals is None else np.asarray(normals, dtype=np.float32).reshape(-1, 3)
#       self.normals: npt.NDArray[np.float32] = np.zeros((0, 3), dtype=np.float32) if normals is None else np.asarray(normals, dtype=np.float32).reshape(-1, 3)
        self.uvs: npt.NDArray[np.float32] = np.zeros((0, 2), dtype=np.float32) if uvs is None else np.asarray(uvs, dtype=np.float32).reshape(-1, 2)
#       self.uvs: npt.NDArray[np.float32] = np.zeros((0, 2), dtype=np.float32) if uvs is None else np.asarray(uvs, dtype=np.float32).reshape(-1, 2)
        self.material_id: int = material_id
#       self.material_id: int = material_id

    def num_tris(self) -> int:
#   def num_tris(self) -> int:
        return len(self.indices)
#       return len(self.indices)

    def num_vertices(self) -> int:
#   def num_vertices(self) -> int:
        return len(self.vertices)
#       return len(self.vertices)

class Mesh:
    def __init__(self, geometries: list[Geometry] | None = None) -> None:
#   def __init__(self, geometries: list[Geometry] | None = None) -> None:
        self.geometries: list[Geometry] = geometries if geometries is not None else []
#       self.geometries: list[Geometry] = geometries if geometries is not None else []

    def num_tris(self) -> int:
#   def num_tris(self) -> int:
        return sum(geometry.num_tris() for geometry in self.geometries)
#       return sum(geometry.num_tris() for geometry in self.geometries)

class Instance:
    def __init__(self, transform: npt.NDArray[np.float32], mesh_id: int) -> None:
#   def __init__(self, transform: npt.NDArray[np.float32], mesh_id: int) -> None:
        # Column-vector convention: translation lives in transform[:3, 3]
#       # Column-vector convention: translation lives in transform[:3, 3]
        self.transform: npt.NDArray[np.float32] = np.asarray(transform, dtype=np.float32).reshape(4, 4)
#       self.transform: npt.NDArray[np.float32] = np.asarray(transform, dtype=np.float32).reshape(4, 4)
        self.mesh_id: int = mesh_id
#       self.mesh_id: int = mesh_id

class Texture:
    def __init__(self, name: str, width: int, height: int, channels: int, pixels: bytes, color_space: ColorSpace = ColorSpace.LINEAR, path: str | None = None) -> None:
#   def __init__(self, name: str, width: int, height: int, channels: int, pixels: bytes, color_space: ColorSpace = ColorSpace.LINEAR, path: str | None = None) -> None:
        self.name: str = name
#       self.name: str = name
        self.width: int = width
#       self.width: int = width
        self.height: int = height
#       self.height: int = height
        self.channels: int = channels
#       self.channels: int = channels
        self.pixels: bytes = pixels
#       self.pixels: bytes = pixels
        self.color_space: ColorSpace = color_space
#       self.color_space: ColorSpace = color_space
        # Resolved file the pixels came from, None for images embedded in the scene file
#       # Resolved file the pixels came from, None for images embedded in the scene file
        self.path: str | None = path
#       self.path: str | None = path
