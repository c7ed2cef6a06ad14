import logging

import numpy as np
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


class MeshError(Exception):
    """Базовая ошибка работы с сеткой"""


class MeshFormatError(MeshError, ValueError):
    """Файл сетки не удалось разобрать"""


class PolygonNotFoundError(MeshError, LookupError):
    """Идентификатор полигона не найден в сетке"""

    def __init__(self, polygon_id, mesh_name: str = ""):
        self.polygon_id = polygon_id
        self.mesh_name = mesh_name
        super().__init__(f"Polygon {polygon_id} not found in mesh '{mesh_name}'")


class Mesh:
    """
    Снимок полигональной сетки.

    vertices  — массив (N, 3) координат вершин
    polygons  — {id полигона: индексы вершин в порядке обхода}
    """

    def __init__(self, vertices, polygons, name: str = "mesh"):
        self.name = name
        self.vertices = np.asarray(vertices, dtype=float).reshape(-1, 3)

        if isinstance(polygons, dict):
            items = polygons.items()
        else:
            items = enumerate(polygons)

        self.polygons: Dict[int, Tuple[int, ...]] = {}
        for polygon_id, indices in items:
            indices = tuple(int(i) for i in indices)
            if len(indices) < 3:
                raise MeshFormatError(f"Polygon {polygon_id} has {len(indices)} vertices, at least 3 required")
            for i in indices:
                if i < 0 or i >= len(self.vertices):
                    raise MeshFormatError(f"Polygon {polygon_id} references missing vertex {i}")
            self.polygons[int(polygon_id)] = indices

    @classmethod
    def from_obj(cls, path, name: Optional[str] = None) -> "Mesh":
        """Чтение Wavefront OBJ: учитываются только записи v и f"""
        path = Path(path)
        vertices = []
        polygons = []

        with path.open("r", encoding="utf-8") as f:
            try:
                lines = list(f)
            except UnicodeDecodeError as e:
                raise MeshFormatError(f"{path}: not a UTF-8 text file ({e})") from e

        for line_no, line in enumerate(lines, start=1):
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            tokens = line.split()
            if tokens[0] == "v":
                if len(tokens) < 4:
                    raise MeshFormatError(f"{path}:{line_no}: vertex needs 3 coordinates")
                try:
                    vertices.append([float(t) for t in tokens[1:4]])
                except ValueError as e:
                    raise MeshFormatError(f"{path}:{line_no}: {e}") from e
            elif tokens[0] == "f":
                indices = []
                for token in tokens[1:]:
                    try:
                        index = int(token.split("/")[0])
                    except ValueError as e:
                        raise MeshFormatError(f"{path}:{line_no}: bad face index '{token}'") from e
                    # отрицательные индексы считаются от последней прочитанной вершины
                    if index < 0:
                        index = len(vertices) + index
                    elif index > 0:
                        index -= 1
                    else:
                        raise MeshFormatError(f"{path}:{line_no}: face index 0 is not allowed")
                    indices.append(index)
                polygons.append(indices)

        logging.debug("Read %s: %s vertices, %s polygons", path, len(vertices), len(polygons))
        return cls(vertices, polygons, name=name or path.stem)

    @property
    def polygon_count(self) -> int:
        return len(self.polygons)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def has_polygon(self, polygon_id) -> bool:
        return polygon_id in self.polygons

    def vertex_loop(self, polygon_id) -> np.ndarray:
        """Копия координат вершин полигона в порядке обхода"""
        try:
            indices = self.polygons[polygon_id]
        except (KeyError, TypeError):
            raise PolygonNotFoundError(polygon_id, self.name) from None
        return self.vertices[list(indices)].copy()

    def all_polygon_ids(self, selection: Optional[Iterable[int]] = None) -> List[int]:
        if selection is None:
            return list(self.polygons)
        ids = []
        for polygon_id in selection:
            if polygon_id not in self.polygons:
                raise PolygonNotFoundError(polygon_id, self.name)
            ids.append(polygon_id)
        # один id — один лист дерева
        return list(dict.fromkeys(ids))

    def polygon_sizes(self) -> Dict[int, int]:
        return {polygon_id: len(indices) for polygon_id, indices in self.polygons.items()}

    def __repr__(self):
        return f"Mesh(name={self.name!r}, vertices={self.vertex_count}, polygons={self.polygon_count})"


@dataclass
class SelectionItem:
    mesh: Mesh
    # None — выбран весь объект
    polygon_ids: Optional[Sequence[int]] = None


@dataclass
class Selection:
    """Текущее выделение: список (сетка, выбранные полигоны)"""
    items: List[SelectionItem] = field(default_factory=list)

    def add(self, mesh: Mesh, polygon_ids: Optional[Sequence[int]] = None) -> "Selection":
        self.items.append(SelectionItem(mesh, polygon_ids))
        return self

    def clear(self):
        self.items.clear()

    def meshes(self) -> List[Mesh]:
        return [item.mesh for item in self.items]

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)
