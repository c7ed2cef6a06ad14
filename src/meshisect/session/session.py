import logging
import time

from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from meshisect.bvh import build_bvh_tree, find_intersecting_polygons
from meshisect.extract_mesh import Mesh, Selection


@dataclass
class SessionConfig:
    color_set_name: str = "IntersectSetColor"
    highlight_color: Tuple[float, float, float] = (1.0, 0.0, 0.0)
    event_name: str = "SelectionChanged"
    # не передавать в предикат лист самого запрашиваемого полигона
    skip_self: bool = True


class FacePainter:
    """Подсветка граней: набор цветов на каждую сетку"""

    def __init__(self, color_set_name: str = "IntersectSetColor", color=(1.0, 0.0, 0.0)):
        self.color_set_name = color_set_name
        self.color = tuple(color)
        # id(mesh) -> {имя набора: {id полигона: цвет}}
        self._color_sets: Dict[int, Dict[str, Dict[int, Tuple[float, float, float]]]] = {}

    def has_color_set(self, mesh: Mesh) -> bool:
        return self.color_set_name in self._color_sets.get(id(mesh), {})

    def paint(self, mesh: Mesh, polygon_ids):
        color_sets = self._color_sets.setdefault(id(mesh), {})
        if self.color_set_name not in color_sets:
            color_sets[self.color_set_name] = {}
            logging.info("Color set '%s' created for mesh '%s'", self.color_set_name, mesh.name)

        colors = color_sets[self.color_set_name]
        for polygon_id in polygon_ids:
            colors[polygon_id] = self.color

    def reset(self, mesh: Mesh) -> bool:
        color_sets = self._color_sets.get(id(mesh), {})
        return color_sets.pop(self.color_set_name, None) is not None

    def colored_polygons(self, mesh: Mesh) -> Set[int]:
        return set(self._color_sets.get(id(mesh), {}).get(self.color_set_name, {}))


class EventHub:
    """Реестр обработчиков событий приложения"""

    def __init__(self):
        self._ids = count(1)
        self._callbacks: Dict[int, Tuple[str, Callable]] = {}

    def add_callback(self, event_name: str, func: Callable) -> int:
        callback_id = next(self._ids)
        self._callbacks[callback_id] = (event_name, func)
        return callback_id

    def remove_callback(self, callback_id: int):
        if callback_id not in self._callbacks:
            raise KeyError(f"Unknown callback id: {callback_id}")
        del self._callbacks[callback_id]

    def callbacks(self, event_name: str) -> List[Callable]:
        return [func for name, func in self._callbacks.values() if name == event_name]

    def emit(self, event_name: str):
        for func in self.callbacks(event_name):
            func()


class IntersectSession:
    """
    Подсветка самопересечений выделенных сеток.

    initialize() подписывает on_selection_changed на событие смены выделения,
    shutdown() снимает подписку и убирает подсветку.
    """

    def __init__(self,
                 events: EventHub,
                 painter: Optional[FacePainter] = None,
                 selection_provider: Optional[Callable[[], Selection]] = None,
                 config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        self.events = events
        self.painter = painter or FacePainter(self.config.color_set_name, self.config.highlight_color)
        self.selection_provider = selection_provider or Selection
        self.callback_id: Optional[int] = None
        self.last_results: Dict[Mesh, Dict[int, List[int]]] = {}

    @property
    def active(self) -> bool:
        return self.callback_id is not None

    def initialize(self) -> bool:
        if self.active:
            logging.error("Callback is already registered")
            return False
        self.callback_id = self.events.add_callback(self.config.event_name, self.on_selection_changed)
        logging.info("Callback registered for '%s'", self.config.event_name)
        return True

    def shutdown(self) -> bool:
        if not self.active:
            logging.error("Callback is not registered, nothing to remove")
            return False
        self.events.remove_callback(self.callback_id)
        self.callback_id = None
        logging.info("Callback removed")
        self.reset_colors()
        return True

    def reset_colors(self):
        for item in self.selection_provider():
            self.painter.reset(item.mesh)

    def on_selection_changed(self):
        self.reset_colors()
        if not self.active:
            return

        self.last_results = {}
        for item in self.selection_provider():
            if item.polygon_ids is not None and len(item.polygon_ids) == 0:
                continue
            self.last_results[item.mesh] = self.run_pass(item.mesh, item.polygon_ids)

    def run_pass(self, mesh: Mesh, polygon_ids: Optional[Sequence[int]] = None) -> Dict[int, List[int]]:
        """
        Один проход: дерево строится один раз, затем запрос по каждому полигону.
        Возвращает {id полигона: список пересекающих его полигонов}.
        """
        ids = mesh.all_polygon_ids(polygon_ids)
        if len(ids) < 2:
            logging.debug("Mesh '%s': %s polygon(s) selected, nothing to check", mesh.name, len(ids))
            return {}

        start = time.time()
        root = build_bvh_tree(ids, mesh)

        results = {}
        intersect_poly: List[int] = []
        for polygon_id in ids:
            intersect_poly.clear()
            find_intersecting_polygons(
                mesh,
                root,
                mesh.vertex_loop(polygon_id),
                result=intersect_poly,
                skip_polygon_id=polygon_id if self.config.skip_self else None,
            )
            results[polygon_id] = list(intersect_poly)
            if intersect_poly:
                self.painter.paint(mesh, intersect_poly)

        found = sum(1 for hits in results.values() if hits)
        logging.info("Mesh '%s': %s polygons checked, %s with intersections (%.6fs)",
                     mesh.name, len(ids), found, time.time() - start)
        return results


def find_self_intersections(mesh: Mesh, polygon_ids: Optional[Sequence[int]] = None) -> Set[int]:
    """Множество полигонов сетки, которые пересекают другие её полигоны"""
    ids = mesh.all_polygon_ids(polygon_ids)
    root = build_bvh_tree(ids, mesh)
    found = set()
    for polygon_id in ids:
        found.update(find_intersecting_polygons(mesh, root, mesh.vertex_loop(polygon_id), skip_polygon_id=polygon_id))
    return found
