import base64
import base64
import json
import json
import pathlib as pl
import pathlib as pl
import struct
import struct
import typing
import typing
import cv2
import cv2
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pytest
import pytest

QUAD_OBJ: str = (
    "v 0 0 0\n"
#   "v 0 0 0\n"
    "v 1 0 0\n"
#   "v 1 0 0\n"
    "v 1 1 0\n"
#   "v 1 1 0\n"
    "v 0 1 0\n"
#   "v 0 1 0\n"
    "vt 0 0\n"
#   "vt 0 0\n"
    "vt 1 0\n"
#   "vt 1 0\n"
    "vt 1 1\n"
#   "vt 1 1\n"
    "vt 0 1\n"
#   "vt 0 1\n"
    "vn 0 0 2\n"
#   "vn 0 0 2\n"
    "o quad\n"
#   "o quad\n"
    "f 1/1/1 2/2/1 3/3/1\n"
#   "f 1/1/1 2/2/1 3/3/1\n"
    "f 1/1/1 3/3/1 4/4/1\n"
#   "f 1/1/1 3/3/1 4/4/1\n"
)

def png_bytes(pixels: npt.NDArray[typing.Any]) -> bytes:
    ok, encoded = cv2.imencode(".png", pixels)
#   ok, encoded = cv2.imencode(".png", pixels)
    assert ok
#   assert ok
    return encoded.tobytes()
#   return encoded.tobytes()

def data_uri(data: bytes, mime: str = "application/octet-stream") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
#   return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"

class GltfBuilder:
    """
    Assembles a minimal glTF document: one buffer, tightly packed buffer views,
#   Assembles a minimal glTF document: one buffer, tightly packed buffer views,
    a quad mesh (4 positions, 4 uvs, 6 uint16 indices) unless the test overrides pieces.
#   a quad mesh (4 positions, 4 uvs, 6 uint16 indices) unless the test overrides pieces.
    """
    def __init__(self) -> None:
#   def __init__(self) -> None:
        self.blob: bytearray = bytearray()
#       self.blob: bytearray = bytearray()
        self.document: dict[str, typing.Any] = {
#       self.document: dict[str, typing.Any] = {
            "asset": {"version": "2.0"},
#           "asset": {"version": "2.0"},
            "scene": 0,
#           "scene": 0,
            "scenes": [{"nodes": []}],
#           "scenes": [{"nodes": []}],
            "nodes": [],
#           "nodes": [],
            "meshes": [],
#           "meshes": [],
            "accessors": [],
#           "accessors": [],
            "bufferViews": [],
#           "bufferViews": [],
            "buffers": [],
#           "buffers": [],
        }
#       }

    def add_accessor(self, array: npt.NDArray[typing.Any], component_type: int, accessor_type: str, normalized: bool = False) -> int:
#   def add_accessor(self, array: npt.NDArray[typing.Any], component_type: int, accessor_type: str, normalized: bool = False) -> int:
        # 4-byte align every view
#       # 4-byte align every view
        while len(self.blob) % 4:
#       while len(self.blob) % 4:
            self.blob.append(0)
#           self.blob.append(0)
        data: bytes = np.ascontiguousarray(array).astype(array.dtype.newbyteorder("<")).tobytes()
#       data: bytes = np.ascontiguousarray(array).astype(array.dtype.newbyteorder("<")).tobytes()
        self.document["bufferViews"].append({"buffer": 0, "byteOffset": len(self.blob), "byteLength": len(data)})
#       self.document["bufferViews"].append({"buffer": 0, "byteOffset": len(self.blob), "byteLength": len(data)})
        self.blob.extend(data)
#       self.blob.extend(data)
        count: int = len(array) if array.ndim > 1 else array.size
#       count: int = len(array) if array.ndim > 1 else array.size
        self.document["accessors"].append({
#       self.document["accessors"].append({
            "bufferView": len(self.document["bufferViews"]) - 1,
#           "bufferView": len(self.document["bufferViews"]) - 1,
            "componentType": component_type,
#           "componentType": component_type,
            "count": count,
#           "count": count,
            "type": accessor_type,
#           "type": accessor_type,
        })
#       })
        if normalized:
#       if normalized:
            self.document["accessors"][-1]["normalized"] = True
#           self.document["accessors"][-1]["normalized"] = True
        return len(self.document["accessors"]) - 1
#       return len(self.document["accessors"]) - 1

    def add_quad_mesh(self, material: int | None = 0, mode: int | None = None, indices: npt.NDArray[typing.Any] | None = None, index_component_type: int = 5123, uvs: npt.NDArray[typing.Any] | None = None, uv_component_type: int = 5126) -> int:
#   def add_quad_mesh(self, material: int | None = 0, mode: int | None = None, indices: npt.NDArray[typing.Any] | None = None, index_component_type: int = 5123, uvs: npt.NDArray[typing.Any] | None = None, uv_component_type: int = 5126) -> int:
        positions: npt.NDArray[np.float32] = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=np.float32)
#       positions: npt.NDArray[np.float32] = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=np.float32)
        if uvs is None:
#       if uvs is None:
            uvs = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=np.float32)
#           uvs = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=np.float32)
        if indices is None:
#       if indices is None:
            indices = np.array([0, 1, 2, 0, 2, 3], dtype=np.uint16)
#           indices = np.array([0, 1, 2, 0, 2, 3], dtype=np.uint16)
        primitive: dict[str, typing.Any] = {
#       primitive: dict[str, typing.Any] = {
            "attributes": {
#           "attributes": {
                "POSITION": self.add_accessor(positions, 5126, "VEC3"),
#               "POSITION": self.add_accessor(positions, 5126, "VEC3"),
                "TEXCOORD_0": self.add_accessor(uvs, uv_component_type, "VEC2", normalized=uv_component_type != 5126),
#               "TEXCOORD_0": self.add_accessor(uvs, uv_component_type, "VEC2", normalized=uv_component_type != 5126),
            },
#           },
            "indices": self.add_accessor(indices, index_component_type, "SCALAR"),
#           "indices": self.add_accessor(indices, index_component_type, "SCALAR"),
        }
#       }
        if material is not None:
#       if material is not None:
            primitive["material"] = material
#           primitive["material"] = material
        if mode is not None:
#       if mode is not None:
            primitive["mode"] = mode
#           primitive["mode"] = mode
        self.document["meshes"].append({"name": f"quad{len(self.document['meshes'])}", "primitives": [primitive]})
#       self.document["meshes"].append({"name": f"quad{len(self.document['meshes'])}", "primitives": [primitive]})
        return len(self.document["meshes"]) - 1
#       return len(self.document["meshes"]) - 1

    def add_node(self, root: bool = True, **node: typing.Any) -> int:
#   def add_node(self, root: bool = True, **node: typing.Any) -> int:
        self.document["nodes"].append(node)
#       self.document["nodes"].append(node)
        node_index: int = len(self.document["nodes"]) - 1
#       node_index: int = len(self.document["nodes"]) - 1
        if root:
#       if root:
            self.document["scenes"][0]["nodes"].append(node_index)
#           self.document["scenes"][0]["nodes"].append(node_index)
        return node_index
#       return node_index

    def add_textured_material(self, image: bytes, name: str = "checker") -> int:
#   def add_textured_material(self, image: bytes, name: str = "checker") -> int:
        self.document.setdefault("images", []).append({"uri": data_uri(image, "image/png"), "name": name})
#       self.document.setdefault("images", []).append({"uri": data_uri(image, "image/png"), "name": name})
        self.document.setdefault("textures", []).append({"source": len(self.document["images"]) - 1})
#       self.document.setdefault("textures", []).append({"source": len(self.document["images"]) - 1})
        self.document.setdefault("materials", []).append({
#       self.document.setdefault("materials", []).append({
            "name": "textured",
#           "name": "textured",
            "pbrMetallicRoughness": {
#           "pbrMetallicRoughness": {
                "baseColorFactor": [0.5, 0.25, 1.0, 1.0],
#               "baseColorFactor": [0.5, 0.25, 1.0, 1.0],
                "metallicFactor": 0.3,
#               "metallicFactor": 0.3,
                "roughnessFactor": 0.7,
#               "roughnessFactor": 0.7,
                "baseColorTexture": {"index": len(self.document["textures"]) - 1},
#               "baseColorTexture": {"index": len(self.document["textures"]) - 1},
            },
#           },
        })
#       })
        return len(self.document["materials"]) - 1
#       return len(self.document["materials"]) - 1

    def write_gltf(self, path: pl.Path) -> pl.Path:
#   def write_gltf(self, path: pl.Path) -> pl.Path:
        document: dict[str, typing.Any] = dict(self.document)
#       document: dict[str, typing.Any] = dict(self.document)
        document["buffers"] = [{"byteLength": len(self.blob), "uri": data_uri(bytes(self.blob))}]
#       document["buffers"] = [{"byteLength": len(self.blob), "uri": data_uri(bytes(self.blob))}]
        path.write_text(json.dumps(document))
#       path.write_text(json.dumps(document))
        return path
#       return path

    def write_glb(self, path: pl.Path) -> pl.Path:
#   def write_glb(self, path: pl.Path) -> pl.Path:
        document: dict[str, typing.Any] = dict(self.document)
#       document: dict[str, typing.Any] = dict(self.document)
        document["buffers"] = [{"byteLength": len(self.blob)}]
#       document["buffers"] = [{"byteLength": len(self.blob)}]
        json_chunk: bytes = json.dumps(document).encode("utf-8")
#       json_chunk: bytes = json.dumps(document).encode("utf-8")
        json_chunk += b" " * (-len(json_chunk) % 4)
#       json_chunk += b" " * (-len(json_chunk) % 4)
        bin_chunk: bytes = bytes(self.blob) + b"\x00" * (-len(self.blob) % 4)
#       bin_chunk: bytes = bytes(self.blob) + b"\x00" * (-len(self.blob) % 4)
        total_length: int = 12 + 8 + len(json_chunk) + 8 + len(bin_chunk)
#       total_length: int = 12 + 8 + len(json_chunk) + 8 + len(bin_chunk)
        with open(path, "wb") as f:
#       with open(path, "wb") as f:
            f.write(struct.pack("<4sII", b"glTF", 2, total_length))
#           f.write(struct.pack("<4sII", b"glTF", 2, total_length))
            f.write(struct.pack("<I4s", len(json_chunk), b"JSON"))
#           f.write(struct.pack("<I4s", len(json_chunk), b"JSON"))
            f.write(json_chunk)
#           f.write(json_chunk)
            f.write(struct.pack("<I4s", len(bin_chunk), b"BIN\x00"))
#           f.write(struct.pack("<I4s", len(bin_chunk), b"BIN\x00"))
            f.write(bin_chunk)
#           f.write(bin_chunk)
        return path
#       return path

@pytest.fixture
def gltf_builder() -> GltfBuilder:
    return GltfBuilder()
#   return GltfBuilder()

@pytest.fixture
def quad_obj(tmp_path: pl.Path) -> pl.Path:
    path: pl.Path = tmp_path / "quad.obj"
#   path: pl.Path = tmp_path / "quad.obj"
    path.write_text(QUAD_OBJ)
#   path.write_text(QUAD_OBJ)
    return path
#   return path

@pytest.fixture
def checker_pixels() -> npt.NDArray[np.uint8]:
    # 2 wide, 3 tall, BGR order as OpenCV stores it; the first pixel is pure blue
#   # 2 wide, 3 tall, BGR order as OpenCV stores it; the first pixel is pure blue
    pixels: npt.NDArray[np.uint8] = np.zeros((3, 2, 3), dtype=np.uint8)
#   pixels: npt.NDArray[np.uint8] = np.zeros((3, 2, 3), dtype=np.uint8)
    pixels[0, 0] = (255, 0, 0)
#   pixels[0, 0] = (255, 0, 0)
    pixels[2, 1] = (0, 0, 255)
#   pixels[2, 1] = (0, 0, 255)
    return pixels
#   return pixels
