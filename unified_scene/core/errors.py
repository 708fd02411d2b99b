class SceneLoadError(RuntimeError):
    """
    Base class for every failure that aborts a scene load.
#   Base class for every failure that aborts a scene load.
    The offending file and, when known, the shape/node/mesh name are kept on the instance
#   The offending file and, when known, the shape/node/mesh name are kept on the instance
    and rendered into the message so callers can report them without parsing text.
#   and rendered into the message so callers can report them without parsing text.
    """
    def __init__(self, message: str, file: str | None = None, item: str | None = None) -> None:
#   def __init__(self, message: str, file: str | None = None, item: str | None = None) -> None:
        self.file: str | None = file
#       self.file: str | None = file
        self.item: str | None = item
#       self.item: str | None = item
        details: list[str] = []
#       details: list[str] = []
        if file is not None:
#       if file is not None:
            details.append(f"file '{file}'")
#           details.append(f"file '{file}'")
        if item is not None:
#       if item is not None:
            details.append(f"'{item}'")
#           details.append(f"'{item}'")
        if details:
#       if details:
            message = f"{message} ({', '.join(details)})"
#           message = f"{message} ({', '.join(details)})"
        super().__init__(message)
#       super().__init__(message)

class UnsupportedFormat(SceneLoadError):
    def __init__(self, extension: str, file: str | None = None) -> None:
#   def __init__(self, extension: str, file: str | None = None) -> None:
        self.extension: str = extension
#       self.extension: str = extension
        super().__init__(f"Unsupported file type '{extension}'", file=file)
#       super().__init__(f"Unsupported file type '{extension}'", file=file)

class ParserFailure(SceneLoadError):
    pass
#   pass

class NonTriangularFace(SceneLoadError):
    pass
#   pass

class UnsupportedPrimitiveMode(SceneLoadError):
    def __init__(self, mode: int, file: str | None = None, item: str | None = None) -> None:
#   def __init__(self, mode: int, file: str | None = None, item: str | None = None) -> None:
        self.mode: int = mode
#       self.mode: int = mode
        super().__init__(f"Unsupported primitive mode {mode}, only triangles are supported", file=file, item=item)
#       super().__init__(f"Unsupported primitive mode {mode}, only triangles are supported", file=file, item=item)

class UnsupportedIndexType(SceneLoadError):
    def __init__(self, component_type: int, file: str | None = None, item: str | None = None) -> None:
#   def __init__(self, component_type: int, file: str | None = None, item: str | None = None) -> None:
        self.component_type: int = component_type
#       self.component_type: int = component_type
        super().__init__(f"Unsupported index component type {component_type}", file=file, item=item)
#       super().__init__(f"Unsupported index component type {component_type}", file=file, item=item)

class UnsupportedPixelType(SceneLoadError):
    def __init__(self, pixel_type: str, file: str | None = None, item: str | None = None) -> None:
#   def __init__(self, pixel_type: str, file: str | None = None, item: str | None = None) -> None:
        self.pixel_type: str = pixel_type
#       self.pixel_type: str = pixel_type
        super().__init__(f"Unsupported image pixel type {pixel_type}, only 8 bit images are supported", file=file, item=item)
#       super().__init__(f"Unsupported image pixel type {pixel_type}, only 8 bit images are supported", file=file, item=item)
