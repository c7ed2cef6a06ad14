from __future__ import annotations

import networkx as nx
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

from meshisect.extract_mesh import Mesh
from meshisect.geometry import AABB
from meshisect.intersection import faces_intersect


@dataclass
class BVHNode:
    # ограничивающий объем AABB (объединение всех полигонов ниже узла)
    aabb: AABB
    # ссылка на левую/правую ноды, у листа обе None
    left: Optional[BVHNode] = None
    right: Optional[BVHNode] = None
    # id полигона, только у листа
    polygon_id: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def polygon_aabb(mesh: Mesh, polygon_id: int) -> AABB:
    """AABB полигона по его вершинам. PolygonNotFoundError, если id нет в сетке"""
    return AABB.from_points(mesh.vertex_loop(polygon_id))


def build_bvh_tree(polygon_ids: Sequence[int], mesh: Mesh, depth: int = 0) -> Optional[BVHNode]:
    """
    Строит BVH по списку полигонов.

    На каждом уровне полигоны сортируются по центру своего AABB вдоль оси
    depth % 3 (0 — x, 1 — y, 2 — z) и делятся пополам по индексу len // 2.
    Пустой список — пустое дерево (None).
    """
    polygon_ids = list(polygon_ids)
    if not polygon_ids:
        return None
    boxes = {polygon_id: polygon_aabb(mesh, polygon_id) for polygon_id in polygon_ids}
    return _build_node(polygon_ids, boxes, depth)


def _build_node(polygon_ids: List[int], boxes: dict, depth: int) -> Optional[BVHNode]:
    if not polygon_ids:
        return None

    node = BVHNode(aabb=AABB())

    # бокс со всеми тремя нулевыми размерами перезаписывается, а не расширяется,
    # поэтому вырожденный (точечный) первый бокс теряется
    for polygon_id in polygon_ids:
        if node.aabb.is_degenerate():
            node.aabb = boxes[polygon_id].copy()
        else:
            node.aabb.expand(boxes[polygon_id])

    if len(polygon_ids) == 1:
        node.polygon_id = polygon_ids[0]
        return node

    axis = depth % 3
    sorted_ids = sorted(polygon_ids, key=lambda polygon_id: boxes[polygon_id].center()[axis])
    mid = len(sorted_ids) // 2

    node.left = _build_node(sorted_ids[:mid], boxes, depth + 1)
    node.right = _build_node(sorted_ids[mid:], boxes, depth + 1)
    return node


def find_intersecting_polygons(mesh: Mesh,
                               node: Optional[BVHNode],
                               vertices,
                               result: Optional[List[int]] = None,
                               skip_polygon_id: Optional[int] = None,
                               judge: Callable = faces_intersect) -> List[int]:
    """
    Ищет в дереве полигоны, пересекающие грань vertices.

    Ветки, чей AABB не пересекает AABB грани, отсекаются. В листе вызывается
    judge(вершины листа, vertices). Найденные id добавляются в result.
    """
    if result is None:
        result = []
    if node is None:
        return result

    query_box = AABB.from_points(vertices)
    _search(mesh, node, query_box, vertices, result, skip_polygon_id, judge)
    return result


def _search(mesh, node, query_box, vertices, result, skip_polygon_id, judge):
    if not node.aabb.intersects(query_box):
        return

    if node.is_leaf:
        if node.polygon_id == skip_polygon_id:
            return
        if judge(mesh.vertex_loop(node.polygon_id), vertices):
            result.append(node.polygon_id)
        return

    _search(mesh, node.left, query_box, vertices, result, skip_polygon_id, judge)
    _search(mesh, node.right, query_box, vertices, result, skip_polygon_id, judge)


def iter_leaves(node: Optional[BVHNode]) -> Iterator[BVHNode]:
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_leaf:
            yield current
            continue
        # правый кладём первым, чтобы листья шли слева направо
        stack.append(current.right)
        stack.append(current.left)


def count_nodes(node: Optional[BVHNode]) -> int:
    if node is None:
        return 0
    return 1 + count_nodes(node.left) + count_nodes(node.right)


def tree_depth(node: Optional[BVHNode]) -> int:
    if node is None:
        return 0
    return 1 + max(tree_depth(node.left), tree_depth(node.right))


def build_graph(node: Optional[BVHNode], graph=None, counter=None):
    """Граф структуры дерева для визуализации"""
    if graph is None:
        graph = nx.DiGraph()
    if counter is None:
        counter = [0]
    if node is None:
        return graph

    node_id = counter[0]
    counter[0] += 1

    # подпись узла
    if node.is_leaf:
        node_label = f"Leaf\nID:{node_id}\nPoly:{node.polygon_id}"
    else:
        node_label = f"Node\nID:{node_id}"
    graph.add_node(node_id, label=node_label, is_leaf=node.is_leaf, polygon_id=node.polygon_id)

    for child in (node.left, node.right):
        if child is not None:
            child_id = counter[0]
            build_graph(child, graph, counter)
            graph.add_edge(node_id, child_id)

    return graph
