"""
Input model consumed by the PBRT adapter.
A PBRT importer (there is no PBRT parser distributed for Python, so one is injected by the caller)
translates its own shape hierarchy into these records; the adapter only ever sees the tagged
ShapeKind variant, never the importer's classes.
"""
import enum
import enum
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt

class ShapeKind(enum.Enum):
    TRIANGLE_MESH = "trianglemesh"
#   TRIANGLE_MESH = "trianglemesh"
    QUAD_MESH = "quadmesh"
#   QUAD_MESH = "quadmesh"
    OTHER = "other"
#   OTHER = "other"

class PbrtShape:
    def __init__(
#   def __init__(
        self,
#       self,
        kind: ShapeKind,
#       kind: ShapeKind,
        vertices: npt.ArrayLike | None = None,
#       vertices: npt.ArrayLike | None = None,
        indices: npt.ArrayLike | None = None,
#       indices: npt.ArrayLike | None = None,
        texcoords: npt.ArrayLike | None = None,
#       texcoords: npt.ArrayLike | None = None,
        name: str = "",
#       name: str = "",
        material: str | None = None,
#       material: str | None = None,
        area_light: bool = False,
#       area_light: bool = False,
    ) -> None:
#   ) -> None:
        self.kind: ShapeKind = kind
#       self.kind: ShapeKind = kind
        # Triangle/quad meshes only: (N, 3) positions, (M, 3) or (M, 4) indices, (N, 2) texcoords
#       # Triangle/quad meshes only: (N, 3) positions, (M, 3) or (M, 4) indices, (N, 2) texcoords
        self.vertices: npt.ArrayLike = vertices if vertices is not None else np.zeros((0, 3), dtype=np.float32)
#       self.vertices: npt.ArrayLike = vertices if vertices is not None else np.zeros((0, 3), dtype=np.float32)
        self.indices: npt.ArrayLike = indices if indices is not None else np.zeros((0, 3), dtype=np.int32)
#       self.indices: npt.ArrayLike = indices if indices is not None else np.zeros((0, 3), dtype=np.int32)
        self.texcoords: npt.ArrayLike = texcoords if texcoords is not None else np.zeros((0, 2), dtype=np.float32)
#       self.texcoords: npt.ArrayLike = texcoords if texcoords is not None else np.zeros((0, 2), dtype=np.float32)
        self.name: str = name
#       self.name: str = name
        self.material: str | None = material
#       self.material: str | None = material
        self.area_light: bool = area_light
#       self.area_light: bool = area_light

    def describe(self) -> str:
#   def describe(self) -> str:
        return f"{self.kind.value} '{self.name}'" if self.name else self.kind.value
#       return f"{self.kind.value} '{self.name}'" if self.name else self.kind.value

class PbrtObject:
    def __init__(self, name: str, shapes: list[PbrtShape] | None = None, instances: list["PbrtInstance"] | None = None) -> None:
#   def __init__(self, name: str, shapes: list[PbrtShape] | None = None, instances: list["PbrtInstance"] | None = None) -> None:
        self.name: str = name
#       self.name: str = name
        self.shapes: list[PbrtShape] = shapes if shapes is not None else []
#       self.shapes: list[PbrtShape] = shapes if shapes is not None else []
        # Nested instances, expected to be empty once the scene is single level
#       # Nested instances, expected to be empty once the scene is single level
        self.instances: list[PbrtInstance] = instances if instances is not None else []
#       self.instances: list[PbrtInstance] = instances if instances is not None else []

class PbrtInstance:
    def __init__(self, object: PbrtObject, linear: npt.ArrayLike | None = None, translation: npt.ArrayLike | None = None) -> None:
#   def __init__(self, object: PbrtObject, linear: npt.ArrayLike | None = None, translation: npt.ArrayLike | None = None) -> None:
        self.object: PbrtObject = object
#       self.object: PbrtObject = object
        # Rows are the images of the x, y and z axes (vx, vy, vz) of the affine map
#       # Rows are the images of the x, y and z axes (vx, vy, vz) of the affine map
        self.linear: npt.NDArray[np.float32] = np.eye(3, dtype=np.float32) if linear is None else np.asarray(linear, dtype=np.float32).reshape(3, 3)
#       self.linear: npt.NDArray[np.float32] = np.eye(3, dtype=np.float32) if linear is None else np.asarray(linear, dtype=np.float32).reshape(3, 3)
        self.translation: npt.NDArray[np.float32] = np.zeros(3, dtype=np.float32) if translation is None else np.asarray(translation, dtype=np.float32).reshape(3)
#       self.translation: npt.NDArray[np.float32] = np.zeros(3, dtype=np.float32) if translation is None else np.asarray(translation, dtype=np.float32).reshape(3)

class PbrtWorld:
    def __init__(self, shapes: list[PbrtShape] | None = None, instances: list[PbrtInstance] | None = None) -> None:
#   def __init__(self, shapes: list[PbrtShape] | None = None, instances: list[PbrtInstance] | None = None) -> None:
        self.shapes: list[PbrtShape] = shapes if shapes is not None else []
#       self.shapes: list[PbrtShape] = shapes if shapes is not None else []
        self.instances: list[PbrtInstance] = instances if instances is not None else []
#       self.instances: list[PbrtInstance] = instances if instances is not None else []

class PbrtScene(typing.Protocol):
    world: PbrtWorld
#   world: PbrtWorld

    def make_single_level(self) -> None: ...
#   def make_single_level(self) -> None: ...

class PbrtImporter(typing.Protocol):
    def import_pbrt(self, path: str) -> PbrtScene | None: ...
#   def import_pbrt(self, path: str) -> PbrtScene | None: ...

    def load_binary(self, path: str) -> PbrtScene | None: ...
#   def load_binary(self, path: str) -> PbrtScene | None: ...
