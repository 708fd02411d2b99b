import os
import os
os.environ.setdefault("OPENCV_IO_ENABLE_OPENEXR", "1")
import cv2
import cv2
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import typing
import typing
from unified_scene.core.common_types import ColorSpace, Texture
from unified_scene.core.common_types import ColorSpace, Texture
from unified_scene.core.errors import ParserFailure, UnsupportedPixelType
from unified_scene.core.errors import ParserFailure, UnsupportedPixelType

def texture_from_pixels(pixels: npt.NDArray[typing.Any], name: str, color_space: ColorSpace, path: str | None = None, source: str | None = None) -> Texture:
    """
    Wraps decoded OpenCV pixels into a Texture.
#   Wraps decoded OpenCV pixels into a Texture.
    OpenCV hands back BGR(A) channel order, the renderer expects RGB(A), so the channels are swapped here.
#   OpenCV hands back BGR(A) channel order, the renderer expects RGB(A), so the channels are swapped here.
    Only 8 bit per channel images are accepted.
#   Only 8 bit per channel images are accepted.
    """
    if pixels.dtype != np.uint8:
#   if pixels.dtype != np.uint8:
        raise UnsupportedPixelType(str(pixels.dtype), file=source, item=name)
#       raise UnsupportedPixelType(str(pixels.dtype), file=source, item=name)

    if pixels.ndim == 2:
#   if pixels.ndim == 2:
        channels: int = 1
#       channels: int = 1
    else:
#   else:
        channels = pixels.shape[2]
#       channels = pixels.shape[2]
        if channels == 3:
#       if channels == 3:
            pixels = cv2.cvtColor(pixels, cv2.COLOR_BGR2RGB)
#           pixels = cv2.cvtColor(pixels, cv2.COLOR_BGR2RGB)
        elif channels == 4:
#       elif channels == 4:
            pixels = cv2.cvtColor(pixels, cv2.COLOR_BGRA2RGBA)
#           pixels = cv2.cvtColor(pixels, cv2.COLOR_BGRA2RGBA)

    height, width = pixels.shape[:2]
#   height, width = pixels.shape[:2]
    return Texture(
#   return Texture(
        name=name,
#       name=name,
        width=int(width),
#       width=int(width),
        height=int(height),
#       height=int(height),
        channels=channels,
#       channels=channels,
        pixels=np.ascontiguousarray(pixels).tobytes(),
#       pixels=np.ascontiguousarray(pixels).tobytes(),
        color_space=color_space,
#       color_space=color_space,
        path=path,
#       path=path,
    )
#   )

def load_image(path: str, name: str, color_space: ColorSpace = ColorSpace.LINEAR) -> Texture:
    if not os.path.exists(path):
#   if not os.path.exists(path):
        raise ParserFailure("Texture not found", file=path, item=name)
#       raise ParserFailure("Texture not found", file=path, item=name)
    loaded_data: npt.NDArray[typing.Any] | None = cv2.imread(path, cv2.IMREAD_UNCHANGED)
#   loaded_data: npt.NDArray[typing.Any] | None = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if loaded_data is None:
#   if loaded_data is None:
        raise ParserFailure("Failed to decode texture", file=path, item=name)
#       raise ParserFailure("Failed to decode texture", file=path, item=name)
    return texture_from_pixels(loaded_data, name=name, color_space=color_space, path=path, source=path)
#   return texture_from_pixels(loaded_data, name=name, color_space=color_space, path=path, source=path)

def decode_image(encoded: bytes, name: str, color_space: ColorSpace = ColorSpace.LINEAR, source: str | None = None) -> Texture:
    # For images embedded in a scene file (data URIs, GLB buffer views)
#   # For images embedded in a scene file (data URIs, GLB buffer views)
    raw: npt.NDArray[np.uint8] = np.frombuffer(encoded, dtype=np.uint8)
#   raw: npt.NDArray[np.uint8] = np.frombuffer(encoded, dtype=np.uint8)
    loaded_data: npt.NDArray[typing.Any] | None = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED)
#   loaded_data: npt.NDArray[typing.Any] | None = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED)
    if loaded_data is None:
#   if loaded_data is None:
        raise ParserFailure("Failed to decode embedded image", file=source, item=name)
#       raise ParserFailure("Failed to decode embedded image", file=source, item=name)
    return texture_from_pixels(loaded_data, name=name, color_space=color_space, source=source)
#   return texture_from_pixels(loaded_data, name=name, color_space=color_space, source=source)
