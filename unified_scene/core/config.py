"""
Loader constants and options.
Every tunable the adapters share lives here so the format code never hardcodes them.
"""
import logging
import logging
import os
import os
import typing
import typing
from unified_scene.core.common_types import vec3f32
from unified_scene.core.common_types import vec3f32

if typing.TYPE_CHECKING:
    from unified_scene.scene.pbrt_types import PbrtImporter
#   from unified_scene.scene.pbrt_types import PbrtImporter

# Fallback quad light placed when the source format carries no light data
LIGHT_EMISSION: float = 5.0
LIGHT_DIRECTION: vec3f32 = (0.5, -0.8, -0.5)
LIGHT_DISTANCE: float = 10.0
LIGHT_SIZE: float = 5.0

# MTL "Ns" is mapped onto the [0, 1] Disney specular lobe by this divisor
OBJ_SHININESS_SCALE: float = 500.0

OBJ_EXTENSIONS: tuple[str, ...] = ("obj",)
GLTF_EXTENSIONS: tuple[str, ...] = ("gltf", "glb")
PBRT_EXTENSIONS: tuple[str, ...] = ("pbrt", "pbf")

LOG_LEVEL_ENV: str = "UNIFIED_SCENE_LOG_LEVEL"

class LoaderOptions:
    def __init__(self, obj_triangulate: bool = True, pbrt_importer: "PbrtImporter | None" = None) -> None:
#   def __init__(self, obj_triangulate: bool = True, pbrt_importer: "PbrtImporter | None" = None) -> None:
        # tinyobjloader fan-triangulates polygons when set, otherwise non-triangle faces are rejected
#       # tinyobjloader fan-triangulates polygons when set, otherwise non-triangle faces are rejected
        self.obj_triangulate: bool = obj_triangulate
#       self.obj_triangulate: bool = obj_triangulate
        # PBRT has no Python parser distribution, the caller supplies one
#       # PBRT has no Python parser distribution, the caller supplies one
        self.pbrt_importer: "PbrtImporter | None" = pbrt_importer
#       self.pbrt_importer: "PbrtImporter | None" = pbrt_importer

def get_log_level(default: int = logging.INFO) -> int:
    """
    Reads the log level name from the environment, e.g. UNIFIED_SCENE_LOG_LEVEL=DEBUG.
#   Reads the log level name from the environment, e.g. UNIFIED_SCENE_LOG_LEVEL=DEBUG.
    Unknown names fall back to the default.
#   Unknown names fall back to the default.
    """
    name: str = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
#   name: str = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
#   if not name:
        return default
#       return default
    level: typing.Any = logging.getLevelName(name)
#   level: typing.Any = logging.getLevelName(name)
    return level if isinstance(level, int) else default
#   return level if isinstance(level, int) else default
