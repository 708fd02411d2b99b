import logging
import logging
import os
import os
from unified_scene.core import config
from unified_scene.core import config
from unified_scene.core.errors import ParserFailure, UnsupportedFormat
from unified_scene.core.errors import ParserFailure, UnsupportedFormat
from unified_scene.scene.gltf_adapter import GltfAdapter
from unified_scene.scene.gltf_adapter import GltfAdapter
from unified_scene.scene.obj_adapter import ObjAdapter
from unified_scene.scene.obj_adapter import ObjAdapter
from unified_scene.scene.pbrt_adapter import PbrtAdapter
from unified_scene.scene.pbrt_adapter import PbrtAdapter
from unified_scene.scene.scene import Scene
from unified_scene.scene.scene import Scene

logger: logging.Logger = logging.getLogger(__name__)

def get_file_extension(path: str) -> str:
    # Everything after the last dot of the file name, case preserved
#   # Everything after the last dot of the file name, case preserved
    name: str = os.path.basename(path)
#   name: str = os.path.basename(path)
    return name.rsplit(".", 1)[-1] if "." in name else ""
#   return name.rsplit(".", 1)[-1] if "." in name else ""

class SceneBuilder:
    # Central entry point: picks the adapter for a file, runs it to completion,
#   # Central entry point: picks the adapter for a file, runs it to completion,
    # then applies the shared post-pass (default material, fallback light).
#   # then applies the shared post-pass (default material, fallback light).
    # Nothing is kept between builds, every call produces an independent Scene.
#   # Nothing is kept between builds, every call produces an independent Scene.
    def __init__(self, options: config.LoaderOptions | None = None) -> None:
#   def __init__(self, options: config.LoaderOptions | None = None) -> None:
        self.options: config.LoaderOptions = options if options is not None else config.LoaderOptions()
#       self.options: config.LoaderOptions = options if options is not None else config.LoaderOptions()

    def build(self, path: str) -> Scene:
#   def build(self, path: str) -> Scene:
        extension: str = get_file_extension(path)
#       extension: str = get_file_extension(path)
        if extension in config.OBJ_EXTENSIONS:
#       if extension in config.OBJ_EXTENSIONS:
            scene: Scene = ObjAdapter(triangulate=self.options.obj_triangulate).load(path)
#           scene: Scene = ObjAdapter(triangulate=self.options.obj_triangulate).load(path)
        elif extension in config.GLTF_EXTENSIONS:
#       elif extension in config.GLTF_EXTENSIONS:
            scene = GltfAdapter().load(path)
#           scene = GltfAdapter().load(path)
        elif extension in config.PBRT_EXTENSIONS:
#       elif extension in config.PBRT_EXTENSIONS:
            if self.options.pbrt_importer is None:
#           if self.options.pbrt_importer is None:
                raise ParserFailure("PBRT support needs an importer, none is configured", file=path)
#               raise ParserFailure("PBRT support needs an importer, none is configured", file=path)
            scene = PbrtAdapter(self.options.pbrt_importer).load(path)
#           scene = PbrtAdapter(self.options.pbrt_importer).load(path)
        else:
#       else:
            logger.error(f"Unsupported file type '{extension}'")
#           logger.error(f"Unsupported file type '{extension}'")
            raise UnsupportedFormat(extension, file=path)
#           raise UnsupportedFormat(extension, file=path)

        scene.finalize()
#       scene.finalize()
        logger.info(f"Scene '{path}': {scene.summary()}")
#       logger.info(f"Scene '{path}': {scene.summary()}")
        return scene
#       return scene

def load_scene(path: str, options: config.LoaderOptions | None = None) -> Scene:
    return SceneBuilder(options).build(path)
#   return SceneBuilder(options).build(path)
