import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import typing
import typing
from unified_scene.core.errors import ParserFailure
from unified_scene.core.errors import ParserFailure

# glTF componentType codes
BYTE: int = 5120
UNSIGNED_BYTE: int = 5121
SHORT: int = 5122
UNSIGNED_SHORT: int = 5123
UNSIGNED_INT: int = 5125
FLOAT: int = 5126

COMPONENT_DTYPES: dict[int, type[np.generic]] = {
    BYTE: np.int8,
#   BYTE: np.int8,
    UNSIGNED_BYTE: np.uint8,
#   UNSIGNED_BYTE: np.uint8,
    SHORT: np.int16,
#   SHORT: np.int16,
    UNSIGNED_SHORT: np.uint16,
#   UNSIGNED_SHORT: np.uint16,
    UNSIGNED_INT: np.uint32,
#   UNSIGNED_INT: np.uint32,
    FLOAT: np.float32,
#   FLOAT: np.float32,
}

COMPONENT_COUNTS: dict[str, int] = {
    "SCALAR": 1,
#   "SCALAR": 1,
    "VEC2": 2,
#   "VEC2": 2,
    "VEC3": 3,
#   "VEC3": 3,
    "VEC4": 4,
#   "VEC4": 4,
    "MAT2": 4,
#   "MAT2": 4,
    "MAT3": 9,
#   "MAT3": 9,
    "MAT4": 16,
#   "MAT4": 16,
}

class AttributeAccessor:
    """
    Read-only typed view over a strided region of a raw buffer.
#   Read-only typed view over a strided region of a raw buffer.
    The view borrows the backing storage (no copy) and is bounds-checked once, at construction,
#   The view borrows the backing storage (no copy) and is bounds-checked once, at construction,
    so element reads never have to re-check.
#   so element reads never have to re-check.
    """
    def __init__(self, buffer: bytes | bytearray | memoryview, dtype: npt.DTypeLike, components: int, count: int, offset: int = 0, stride: int = 0, name: str | None = None, normalized: bool = False) -> None:
#   def __init__(self, buffer: bytes | bytearray | memoryview, dtype: npt.DTypeLike, components: int, count: int, offset: int = 0, stride: int = 0, name: str | None = None, normalized: bool = False) -> None:
        # glTF buffers are little-endian regardless of the host
#       # glTF buffers are little-endian regardless of the host
        self.dtype: np.dtype[typing.Any] = np.dtype(dtype).newbyteorder("<")
#       self.dtype: np.dtype[typing.Any] = np.dtype(dtype).newbyteorder("<")
        self.components: int = components
#       self.components: int = components
        self.count: int = count
#       self.count: int = count
        self.element_size: int = self.dtype.itemsize * components
#       self.element_size: int = self.dtype.itemsize * components
        # A stride of 0 means tightly packed elements
#       # A stride of 0 means tightly packed elements
        self.stride: int = stride if stride else self.element_size
#       self.stride: int = stride if stride else self.element_size
        self.offset: int = offset
#       self.offset: int = offset
        # Normalized integers map onto [0, 1] (unsigned) or [-1, 1] (signed) when read as floats
#       # Normalized integers map onto [0, 1] (unsigned) or [-1, 1] (signed) when read as floats
        self.normalized: bool = normalized and np.issubdtype(self.dtype, np.integer)
#       self.normalized: bool = normalized and np.issubdtype(self.dtype, np.integer)

        if count < 0 or offset < 0:
#       if count < 0 or offset < 0:
            raise ParserFailure(f"Invalid accessor range (offset {offset}, count {count})", item=name)
#           raise ParserFailure(f"Invalid accessor range (offset {offset}, count {count})", item=name)
        if self.stride < self.element_size:
#       if self.stride < self.element_size:
            raise ParserFailure(f"Accessor stride {self.stride} is smaller than its element size {self.element_size}", item=name)
#           raise ParserFailure(f"Accessor stride {self.stride} is smaller than its element size {self.element_size}", item=name)
        view: memoryview = memoryview(buffer).cast("B")
#       view: memoryview = memoryview(buffer).cast("B")
        required: int = offset + (count - 1) * self.stride + self.element_size if count > 0 else offset
#       required: int = offset + (count - 1) * self.stride + self.element_size if count > 0 else offset
        if required > len(view):
#       if required > len(view):
            raise ParserFailure(f"Accessor reads {required} bytes but its buffer holds only {len(view)}", item=name)
#           raise ParserFailure(f"Accessor reads {required} bytes but its buffer holds only {len(view)}", item=name)

        if count == 0:
#       if count == 0:
            self.data: npt.NDArray[typing.Any] = np.zeros((0, components), dtype=self.dtype)
#           self.data: npt.NDArray[typing.Any] = np.zeros((0, components), dtype=self.dtype)
        else:
#       else:
            # Zero-copy strided view: rows step by the byte stride, columns by the component width
#           # Zero-copy strided view: rows step by the byte stride, columns by the component width
            self.data = np.ndarray(
#           self.data = np.ndarray(
                shape=(count, components),
#               shape=(count, components),
                dtype=self.dtype,
#               dtype=self.dtype,
                buffer=view,
#               buffer=view,
                offset=offset,
#               offset=offset,
                strides=(self.stride, self.dtype.itemsize),
#               strides=(self.stride, self.dtype.itemsize),
            )
#           )
        self.data.flags.writeable = False
#       self.data.flags.writeable = False

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return self.count
#       return self.count

    def __getitem__(self, index: int) -> npt.NDArray[typing.Any]:
#   def __getitem__(self, index: int) -> npt.NDArray[typing.Any]:
        if index < 0 or index >= self.count:
#       if index < 0 or index >= self.count:
            raise IndexError(f"Accessor index {index} out of range for {self.count} elements")
#           raise IndexError(f"Accessor index {index} out of range for {self.count} elements")
        return self.data[index]
#       return self.data[index]

    def to_array(self, dtype: npt.DTypeLike | None = None) -> npt.NDArray[typing.Any]:
#   def to_array(self, dtype: npt.DTypeLike | None = None) -> npt.NDArray[typing.Any]:
        # Materializes the view into a compact array owned by the caller
#       # Materializes the view into a compact array owned by the caller
        if self.normalized and dtype is not None and np.issubdtype(np.dtype(dtype), np.floating):
#       if self.normalized and dtype is not None and np.issubdtype(np.dtype(dtype), np.floating):
            values: npt.NDArray[np.float64] = self.data.astype(np.float64) / np.iinfo(self.dtype).max
#           values: npt.NDArray[np.float64] = self.data.astype(np.float64) / np.iinfo(self.dtype).max
            if np.issubdtype(self.dtype, np.signedinteger):
#           if np.issubdtype(self.dtype, np.signedinteger):
                # The most negative value would land below -1
#               # The most negative value would land below -1
                values = np.maximum(values, -1.0)
#               values = np.maximum(values, -1.0)
            return values.astype(dtype)
#           return values.astype(dtype)
        return np.array(self.data, dtype=dtype if dtype is not None else self.dtype)
#       return np.array(self.data, dtype=dtype if dtype is not None else self.dtype)

    @classmethod
#   @classmethod
    def from_gltf(cls, gltf: typing.Any, accessor_index: int, buffers: list[bytes]) -> "AttributeAccessor":
#   def from_gltf(cls, gltf: typing.Any, accessor_index: int, buffers: list[bytes]) -> "AttributeAccessor":
        """
        Builds a view for glTF accessor `accessor_index` over the resolved buffer blobs.
#       Builds a view for glTF accessor `accessor_index` over the resolved buffer blobs.
        Sparse accessors are not supported.
#       Sparse accessors are not supported.
        """
        accessor: typing.Any = gltf.accessors[accessor_index]
#       accessor: typing.Any = gltf.accessors[accessor_index]
        if accessor.sparse is not None:
#       if accessor.sparse is not None:
            raise ParserFailure("Sparse accessors are not supported", item=f"accessor {accessor_index}")
#           raise ParserFailure("Sparse accessors are not supported", item=f"accessor {accessor_index}")
        if accessor.componentType not in COMPONENT_DTYPES:
#       if accessor.componentType not in COMPONENT_DTYPES:
            raise ParserFailure(f"Unknown accessor component type {accessor.componentType}", item=f"accessor {accessor_index}")
#           raise ParserFailure(f"Unknown accessor component type {accessor.componentType}", item=f"accessor {accessor_index}")
        if accessor.type not in COMPONENT_COUNTS:
#       if accessor.type not in COMPONENT_COUNTS:
            raise ParserFailure(f"Unknown accessor type {accessor.type}", item=f"accessor {accessor_index}")
#           raise ParserFailure(f"Unknown accessor type {accessor.type}", item=f"accessor {accessor_index}")
        if accessor.bufferView is None:
#       if accessor.bufferView is None:
            raise ParserFailure("Accessors without a buffer view are not supported", item=f"accessor {accessor_index}")
#           raise ParserFailure("Accessors without a buffer view are not supported", item=f"accessor {accessor_index}")
        buffer_view: typing.Any = gltf.bufferViews[accessor.bufferView]
#       buffer_view: typing.Any = gltf.bufferViews[accessor.bufferView]
        buffer: bytes = buffers[buffer_view.buffer]
#       buffer: bytes = buffers[buffer_view.buffer]
        offset: int = (buffer_view.byteOffset or 0) + (accessor.byteOffset or 0)
#       offset: int = (buffer_view.byteOffset or 0) + (accessor.byteOffset or 0)
        # Restrict the view to its buffer view so a bad accessor cannot read a neighbour's bytes
#       # Restrict the view to its buffer view so a bad accessor cannot read a neighbour's bytes
        region_end: int = (buffer_view.byteOffset or 0) + buffer_view.byteLength
#       region_end: int = (buffer_view.byteOffset or 0) + buffer_view.byteLength
        if region_end > len(buffer):
#       if region_end > len(buffer):
            raise ParserFailure(f"Buffer view ends at byte {region_end} past its buffer of {len(buffer)} bytes", item=f"accessor {accessor_index}")
#           raise ParserFailure(f"Buffer view ends at byte {region_end} past its buffer of {len(buffer)} bytes", item=f"accessor {accessor_index}")
        return cls(
#       return cls(
            buffer=memoryview(buffer)[:region_end],
#           buffer=memoryview(buffer)[:region_end],
            dtype=COMPONENT_DTYPES[accessor.componentType],
#           dtype=COMPONENT_DTYPES[accessor.componentType],
            components=COMPONENT_COUNTS[accessor.type],
#           components=COMPONENT_COUNTS[accessor.type],
            count=accessor.count,
#           count=accessor.count,
            offset=offset,
#           offset=offset,
            stride=buffer_view.byteStride or 0,
#           stride=buffer_view.byteStride or 0,
            name=f"accessor {accessor_index}",
#           name=f"accessor {accessor_index}",
            normalized=bool(accessor.normalized),
#           normalized=bool(accessor.normalized),
        )
#       )
