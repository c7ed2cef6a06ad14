from .mesh import (
    Mesh,
    MeshError,
    MeshFormatError,
    PolygonNotFoundError,
    Selection,
    SelectionItem,
)

__all__ = [
    "Mesh",
    "MeshError",
    "MeshFormatError",
    "PolygonNotFoundError",
    "Selection",
    "SelectionItem",
]
