import logging
import logging
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
import typing
import typing

logger: logging.Logger = logging.getLogger(__name__)

def read_node_transform(node: typing.Any) -> npt.NDArray[np.float32]:
    """
    Local transform of a glTF node as a column-vector 4x4 matrix (translation in the last column).
#   Local transform of a glTF node as a column-vector 4x4 matrix (translation in the last column).
    pyrr builds row-vector matrices, so the composed S * R * T product is transposed into T * R * S.
#   pyrr builds row-vector matrices, so the composed S * R * T product is transposed into T * R * S.
    """
    if node.matrix is not None and len(node.matrix) == 16:
#   if node.matrix is not None and len(node.matrix) == 16:
        # glTF stores matrices column-major
#       # glTF stores matrices column-major
        return np.array(node.matrix, dtype=np.float32).reshape(4, 4).T
#       return np.array(node.matrix, dtype=np.float32).reshape(4, 4).T

    matrix: npt.NDArray[np.float32] = np.eye(4, dtype=np.float32)
#   matrix: npt.NDArray[np.float32] = np.eye(4, dtype=np.float32)
    if node.scale is not None:
#   if node.scale is not None:
        matrix = matrix @ rr.matrix44.create_from_scale(node.scale, dtype=np.float32)
#       matrix = matrix @ rr.matrix44.create_from_scale(node.scale, dtype=np.float32)
    if node.rotation is not None:
#   if node.rotation is not None:
        # glTF and pyrr both order quaternions as (x, y, z, w)
#       # glTF and pyrr both order quaternions as (x, y, z, w)
        matrix = matrix @ rr.matrix44.create_from_quaternion(np.array(node.rotation, dtype=np.float32), dtype=np.float32)
#       matrix = matrix @ rr.matrix44.create_from_quaternion(np.array(node.rotation, dtype=np.float32), dtype=np.float32)
    if node.translation is not None:
#   if node.translation is not None:
        matrix = matrix @ rr.matrix44.create_from_translation(node.translation, dtype=np.float32)
#       matrix = matrix @ rr.matrix44.create_from_translation(node.translation, dtype=np.float32)
    return np.ascontiguousarray(matrix.T, dtype=np.float32)
#   return np.ascontiguousarray(matrix.T, dtype=np.float32)

def flatten_scene_nodes(gltf: typing.Any, scene_index: int) -> list[tuple[int, npt.NDArray[np.float32]]]:
    """
    Collapses the node hierarchy of one scene into (node index, world transform) pairs
#   Collapses the node hierarchy of one scene into (node index, world transform) pairs
    for every node carrying a mesh, in depth-first order.
#   for every node carrying a mesh, in depth-first order.
    """
    flattened: list[tuple[int, npt.NDArray[np.float32]]] = []
#   flattened: list[tuple[int, npt.NDArray[np.float32]]] = []
    visiting: set[int] = set()
#   visiting: set[int] = set()

    def visit(node_index: int, parent_transform: npt.NDArray[np.float32]) -> None:
#   def visit(node_index: int, parent_transform: npt.NDArray[np.float32]) -> None:
        if node_index in visiting:
#       if node_index in visiting:
            logger.warning(f"Node {node_index} is its own ancestor, skipping the cycle")
#           logger.warning(f"Node {node_index} is its own ancestor, skipping the cycle")
            return
#           return
        visiting.add(node_index)
#       visiting.add(node_index)
        node: typing.Any = gltf.nodes[node_index]
#       node: typing.Any = gltf.nodes[node_index]
        world_transform: npt.NDArray[np.float32] = parent_transform @ read_node_transform(node)
#       world_transform: npt.NDArray[np.float32] = parent_transform @ read_node_transform(node)
        if node.mesh is not None:
#       if node.mesh is not None:
            flattened.append((node_index, world_transform))
#           flattened.append((node_index, world_transform))
        for child_index in node.children or []:
#       for child_index in node.children or []:
            visit(child_index, world_transform)
#           visit(child_index, world_transform)
        visiting.discard(node_index)
#       visiting.discard(node_index)

    for root_index in gltf.scenes[scene_index].nodes or []:
#   for root_index in gltf.scenes[scene_index].nodes or []:
        visit(root_index, np.eye(4, dtype=np.float32))
#       visit(root_index, np.eye(4, dtype=np.float32))
    return flattened
#   return flattened
