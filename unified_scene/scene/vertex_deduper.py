from unified_scene.core.common_types import vec3i32
from unified_scene.core.common_types import vec3i32

# tinyobjloader reports a missing normal/texcoord index as -1
MISSING_INDEX: int = -1

class VertexDeduper:
    """
    Collapses OBJ's independent (position, normal, uv) corner indices into one index per distinct tuple.
#   Collapses OBJ's independent (position, normal, uv) corner indices into one index per distinct tuple.
    The first occurrence of a tuple gets the next sequential output index, repeats get the stored one.
#   The first occurrence of a tuple gets the next sequential output index, repeats get the stored one.
    """
    def __init__(self) -> None:
#   def __init__(self) -> None:
        self.index_mapping: dict[vec3i32, int] = {}
#       self.index_mapping: dict[vec3i32, int] = {}

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return len(self.index_mapping)
#       return len(self.index_mapping)

    def __contains__(self, key: vec3i32) -> bool:
#   def __contains__(self, key: vec3i32) -> bool:
        return key in self.index_mapping
#       return key in self.index_mapping

    def lookup_or_insert(self, position_index: int, normal_index: int = MISSING_INDEX, uv_index: int = MISSING_INDEX) -> tuple[int, bool]:
#   def lookup_or_insert(self, position_index: int, normal_index: int = MISSING_INDEX, uv_index: int = MISSING_INDEX) -> tuple[int, bool]:
        # Returns (output index, True if the tuple was seen for the first time)
#       # Returns (output index, True if the tuple was seen for the first time)
        key: vec3i32 = (int(position_index), int(normal_index), int(uv_index))
#       key: vec3i32 = (int(position_index), int(normal_index), int(uv_index))
        found: int | None = self.index_mapping.get(key)
#       found: int | None = self.index_mapping.get(key)
        if found is not None:
#       if found is not None:
            return found, False
#           return found, False
        vertex_index: int = len(self.index_mapping)
#       vertex_index: int = len(self.index_mapping)
        self.index_mapping[key] = vertex_index
#       self.index_mapping[key] = vertex_index
        return vertex_index, True
#       return vertex_index, True
