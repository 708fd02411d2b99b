import sys
import sys
import os
import os
from unified_scene.core.errors import SceneLoadError
from unified_scene.core.errors import SceneLoadError
from unified_scene.core.logging_config import setup_logging
from unified_scene.core.logging_config import setup_logging
from unified_scene.scene.scene import Scene
from unified_scene.scene.scene import Scene
from unified_scene.scene.scene_builder import load_scene
from unified_scene.scene.scene_builder import load_scene

def inspect(path: str) -> int:
    if not os.path.exists(path):
#   if not os.path.exists(path):
        print(f"Error: File {path} not found.")
#       print(f"Error: File {path} not found.")
        return 1
#       return 1

    print(f"Inspecting {path}...")
#   print(f"Inspecting {path}...")

    try:
#   try:
        scene: Scene = load_scene(path)
#       scene: Scene = load_scene(path)
    except SceneLoadError as e:
#   except SceneLoadError as e:
        print(f"Failed to load scene: {e}")
#       print(f"Failed to load scene: {e}")
        return 1
#       return 1

    # Print Materials
#   # Print Materials
    print(f"Materials ({len(scene.materials)}):")
#   print(f"Materials ({len(scene.materials)}):")
    for i, material in enumerate(scene.materials):
#   for i, material in enumerate(scene.materials):
        print(f"  [{i}] Base Color: {material['base_color']} | Roughness: {material['roughness']:.3f} | Texture: {material['color_tex_id']}")
#       print(f"  [{i}] Base Color: {material['base_color']} | Roughness: {material['roughness']:.3f} | Texture: {material['color_tex_id']}")

    # Print Textures
#   # Print Textures
    print(f"Textures ({len(scene.textures)}):")
#   print(f"Textures ({len(scene.textures)}):")
    for i, texture in enumerate(scene.textures):
#   for i, texture in enumerate(scene.textures):
        print(f"  [{i}] {texture.name} | {texture.width}x{texture.height}x{texture.channels} | {texture.color_space.name}")
#       print(f"  [{i}] {texture.name} | {texture.width}x{texture.height}x{texture.channels} | {texture.color_space.name}")

    # Print Meshes
#   # Print Meshes
    print(f"Meshes ({len(scene.meshes)}):")
#   print(f"Meshes ({len(scene.meshes)}):")
    for i, mesh in enumerate(scene.meshes):
#   for i, mesh in enumerate(scene.meshes):
        for j, geometry in enumerate(mesh.geometries):
#       for j, geometry in enumerate(mesh.geometries):
            print(f"  [{i}.{j}] Material Index: {geometry.material_id} | Vertices: {geometry.num_vertices()} | Triangles: {geometry.num_tris()}")
#           print(f"  [{i}.{j}] Material Index: {geometry.material_id} | Vertices: {geometry.num_vertices()} | Triangles: {geometry.num_tris()}")

    print(f"Instances: {len(scene.instances)} | Lights: {len(scene.lights)}")
#   print(f"Instances: {len(scene.instances)} | Lights: {len(scene.lights)}")
    print(f"Unique triangles: {scene.unique_tris()} | Total triangles: {scene.total_tris()}")
#   print(f"Unique triangles: {scene.unique_tris()} | Total triangles: {scene.total_tris()}")
    return 0
#   return 0

if __name__ == "__main__":
    if len(sys.argv) < 2:
#   if len(sys.argv) < 2:
        print("Usage: python inspect_scene.py <path_to_scene>")
#       print("Usage: python inspect_scene.py <path_to_scene>")
    else:
#   else:
        setup_logging()
#       setup_logging()
        sys.exit(inspect(sys.argv[1]))
#       sys.exit(inspect(sys.argv[1]))
