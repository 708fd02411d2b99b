import logging
import logging
import typing
import typing
from unified_scene.core.common_types import ColorSpace, Texture
from unified_scene.core.common_types import ColorSpace, Texture

logger: logging.Logger = logging.getLogger(__name__)

class TextureRegistry:
    """
    Owns the texture list of one load.
#   Owns the texture list of one load.
    Textures are deduplicated by the raw name they are referenced with (not by resolved path),
#   Textures are deduplicated by the raw name they are referenced with (not by resolved path),
    so the first reference decides the canonical path. get_or_create and promote_to_srgb are
#   so the first reference decides the canonical path. get_or_create and promote_to_srgb are
    the only operations that mutate the registry.
#   the only operations that mutate the registry.
    """
    def __init__(self) -> None:
#   def __init__(self) -> None:
        self.textures: list[Texture] = []
#       self.textures: list[Texture] = []
        self.texture_ids: dict[str, int] = {}
#       self.texture_ids: dict[str, int] = {}

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return len(self.textures)
#       return len(self.textures)

    def __getitem__(self, texture_id: int) -> Texture:
#   def __getitem__(self, texture_id: int) -> Texture:
        return self.textures[texture_id]
#       return self.textures[texture_id]

    def index_of(self, key: str) -> int | None:
#   def index_of(self, key: str) -> int | None:
        return self.texture_ids.get(key)
#       return self.texture_ids.get(key)

    def get_or_create(self, key: str, factory: typing.Callable[[], Texture]) -> int:
#   def get_or_create(self, key: str, factory: typing.Callable[[], Texture]) -> int:
        # The factory only runs on the first reference to `key`
#       # The factory only runs on the first reference to `key`
        texture_id: int | None = self.texture_ids.get(key)
#       texture_id: int | None = self.texture_ids.get(key)
        if texture_id is not None:
#       if texture_id is not None:
            return texture_id
#           return texture_id
        texture: Texture = factory()
#       texture: Texture = factory()
        texture_id = len(self.textures)
#       texture_id = len(self.textures)
        self.textures.append(texture)
#       self.textures.append(texture)
        self.texture_ids[key] = texture_id
#       self.texture_ids[key] = texture_id
        logger.debug(f"Registered texture {texture_id} '{key}' ({texture.width}x{texture.height}, {texture.channels} channels, {texture.color_space.name})")
#       logger.debug(f"Registered texture {texture_id} '{key}' ({texture.width}x{texture.height}, {texture.channels} channels, {texture.color_space.name})")
        return texture_id
#       return texture_id

    def promote_to_srgb(self, texture_id: int) -> None:
#   def promote_to_srgb(self, texture_id: int) -> None:
        # Used as a color map, so the bytes must be gamma encoded. Never demoted afterwards.
#       # Used as a color map, so the bytes must be gamma encoded. Never demoted afterwards.
        texture: Texture = self.textures[texture_id]
#       texture: Texture = self.textures[texture_id]
        if texture.color_space is not ColorSpace.SRGB:
#       if texture.color_space is not ColorSpace.SRGB:
            logger.debug(f"Texture {texture_id} '{texture.name}' is used as a color map, switching to SRGB")
#           logger.debug(f"Texture {texture_id} '{texture.name}' is used as a color map, switching to SRGB")
            texture.color_space = ColorSpace.SRGB
#           texture.color_space = ColorSpace.SRGB
