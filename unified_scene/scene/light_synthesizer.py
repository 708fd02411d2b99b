import logging
import logging
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
from unified_scene.core import config
from unified_scene.core import config
from unified_scene.core.common_types import QuadLight, vec3f32, vec4f32
from unified_scene.core.common_types import QuadLight, vec3f32, vec4f32

logger: logging.Logger = logging.getLogger(__name__)

def ortho_basis(normal: vec3f32 | npt.NDArray[np.float32]) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]:
    """
    Builds two unit vectors spanning the plane orthogonal to `normal`.
#   Builds two unit vectors spanning the plane orthogonal to `normal`.
    The helper axis is the first world axis the normal is not nearly parallel to,
#   The helper axis is the first world axis the normal is not nearly parallel to,
    then two cross products give a right-handed (v_x, v_y, normal) frame.
#   then two cross products give a right-handed (v_x, v_y, normal) frame.
    """
    n: npt.NDArray[np.float32] = np.asarray(normal, dtype=np.float32)
#   n: npt.NDArray[np.float32] = np.asarray(normal, dtype=np.float32)
    helper: npt.NDArray[np.float32] = np.zeros(3, dtype=np.float32)
#   helper: npt.NDArray[np.float32] = np.zeros(3, dtype=np.float32)
    if -0.6 < n[0] < 0.6:
#   if -0.6 < n[0] < 0.6:
        helper[0] = 1.0
#       helper[0] = 1.0
    elif -0.6 < n[1] < 0.6:
#   elif -0.6 < n[1] < 0.6:
        helper[1] = 1.0
#       helper[1] = 1.0
    elif -0.6 < n[2] < 0.6:
#   elif -0.6 < n[2] < 0.6:
        helper[2] = 1.0
#       helper[2] = 1.0
    else:
#   else:
        helper[0] = 1.0
#       helper[0] = 1.0
    v_x: npt.NDArray[np.float32] = rr.vector.normalize(rr.vector3.cross(helper, n)).astype(np.float32)
#   v_x: npt.NDArray[np.float32] = rr.vector.normalize(rr.vector3.cross(helper, n)).astype(np.float32)
    v_y: npt.NDArray[np.float32] = rr.vector.normalize(rr.vector3.cross(n, v_x)).astype(np.float32)
#   v_y: npt.NDArray[np.float32] = rr.vector.normalize(rr.vector3.cross(n, v_x)).astype(np.float32)
    return v_x, v_y
#   return v_x, v_y

def _vec4(v: npt.NDArray[np.float32], w: float) -> vec4f32:
    return (float(v[0]), float(v[1]), float(v[2]), w)
#   return (float(v[0]), float(v[1]), float(v[2]), w)

def synthesize_quad_light(
    emission: float = config.LIGHT_EMISSION,
#   emission: float = config.LIGHT_EMISSION,
    direction: vec3f32 = config.LIGHT_DIRECTION,
#   direction: vec3f32 = config.LIGHT_DIRECTION,
    distance: float = config.LIGHT_DISTANCE,
#   distance: float = config.LIGHT_DISTANCE,
    size: float = config.LIGHT_SIZE,
#   size: float = config.LIGHT_SIZE,
) -> QuadLight:
    # Deterministic emitter for formats whose lights are not extracted, so the renderer always has one
#   # Deterministic emitter for formats whose lights are not extracted, so the renderer always has one
    normal: npt.NDArray[np.float32] = rr.vector.normalize(np.array(direction, dtype=np.float32)).astype(np.float32)
#   normal: npt.NDArray[np.float32] = rr.vector.normalize(np.array(direction, dtype=np.float32)).astype(np.float32)
    position: npt.NDArray[np.float32] = -distance * normal
#   position: npt.NDArray[np.float32] = -distance * normal
    v_x, v_y = ortho_basis(normal)
#   v_x, v_y = ortho_basis(normal)
    return QuadLight(
#   return QuadLight(
        emission=(emission, emission, emission, emission),
#       emission=(emission, emission, emission, emission),
        position=_vec4(position, 0.0),
#       position=_vec4(position, 0.0),
        normal=_vec4(normal, 0.0),
#       normal=_vec4(normal, 0.0),
        v_x=_vec4(v_x, 0.0),
#       v_x=_vec4(v_x, 0.0),
        v_y=_vec4(v_y, 0.0),
#       v_y=_vec4(v_y, 0.0),
        width=size,
#       width=size,
        height=size,
#       height=size,
    )
#   )
