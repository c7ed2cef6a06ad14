import pytest

from conftest import TRI_XY, TRI_XZ, mesh_from_loops, shifted
from meshisect.bvh import (
    build_bvh_tree,
    build_graph,
    count_nodes,
    find_intersecting_polygons,
    iter_leaves,
    polygon_aabb,
    tree_depth,
)
from meshisect.extract_mesh import Mesh, PolygonNotFoundError
from meshisect.geometry import AABB


SMALL = [(0, 0, 0), (0.5, 0, 0), (0, 0.5, 0)]


def row_mesh(offsets):
    """Треугольники вдоль оси X, i-й полигон сдвинут на offsets[i]"""
    return mesh_from_loops([shifted(SMALL, dx=dx) for dx in offsets], name="row")


def collect(node, result):
    if node is None:
        return result
    result.append(node)
    collect(node.left, result)
    collect(node.right, result)
    return result


def test_polygon_aabb(crossing_mesh):
    assert polygon_aabb(crossing_mesh, 0) == AABB((-1, -1, 0), (1, 1, 0))


def test_empty_tree(crossing_mesh):
    assert build_bvh_tree([], crossing_mesh) is None
    assert find_intersecting_polygons(crossing_mesh, None, TRI_XY) == []
    assert count_nodes(None) == 0
    assert list(iter_leaves(None)) == []


def test_single_polygon_is_a_leaf(crossing_mesh):
    root = build_bvh_tree([1], crossing_mesh)
    assert root.is_leaf
    assert root.polygon_id == 1
    assert root.aabb == polygon_aabb(crossing_mesh, 1)


@pytest.mark.parametrize("count", [2, 3, 5, 8, 13])
def test_leaf_invariant(count):
    mesh = row_mesh(range(count))
    root = build_bvh_tree(mesh.all_polygon_ids(), mesh)
    nodes = collect(root, [])
    leaves = [node for node in nodes if node.is_leaf]

    assert len(leaves) == count
    assert sorted(leaf.polygon_id for leaf in leaves) == list(range(count))
    assert count_nodes(root) == 2 * count - 1
    for node in nodes:
        if node.is_leaf:
            assert node.left is None and node.right is None
            assert node.aabb == polygon_aabb(mesh, node.polygon_id)
        else:
            assert node.left is not None and node.right is not None
            assert node.polygon_id is None
            assert node.aabb.contains(node.left.aabb)
            assert node.aabb.contains(node.right.aabb)


def test_root_box_is_union_of_polygon_boxes(cube_mesh):
    ids = cube_mesh.all_polygon_ids()
    expected = AABB()
    for polygon_id in ids:
        expected.expand(polygon_aabb(cube_mesh, polygon_id))

    assert build_bvh_tree(ids, cube_mesh).aabb == expected
    assert build_bvh_tree(list(reversed(ids)), cube_mesh).aabb == expected


def test_split_by_x_then_y():
    mesh = row_mesh([3, 0, 2, 1])
    root = build_bvh_tree([0, 1, 2, 3], mesh)
    assert [leaf.polygon_id for leaf in iter_leaves(root)] == [1, 3, 2, 0]
    assert tree_depth(root) == 3


def test_odd_split_puts_smaller_half_left():
    mesh = row_mesh([0, 1, 2])
    root = build_bvh_tree([0, 1, 2], mesh)
    assert root.left.is_leaf
    assert root.left.polygon_id == 0
    assert [leaf.polygon_id for leaf in iter_leaves(root.right)] == [1, 2]


def test_input_list_is_not_modified():
    mesh = row_mesh([3, 0, 2, 1])
    ids = [0, 1, 2, 3]
    build_bvh_tree(ids, mesh)
    assert ids == [0, 1, 2, 3]


def test_degenerate_first_box_is_overwritten():
    # полигон-точка первым в списке не попадает в бокс узла
    mesh = Mesh([(5, 5, 5), (0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 0, 0), (1, 2, 3)])
    root = build_bvh_tree([0, 1], mesh)
    assert root.aabb == AABB((0, 0, 0), (1, 1, 0))


def test_unknown_polygon_aborts_build(crossing_mesh):
    with pytest.raises(PolygonNotFoundError):
        build_bvh_tree([0, 1, 99], crossing_mesh)


def test_query_finds_crossing_polygon(crossing_mesh):
    root = build_bvh_tree(crossing_mesh.all_polygon_ids(), crossing_mesh)
    assert find_intersecting_polygons(crossing_mesh, root, crossing_mesh.vertex_loop(0)) == [1]
    assert find_intersecting_polygons(crossing_mesh, root, crossing_mesh.vertex_loop(1)) == [0]
    assert find_intersecting_polygons(crossing_mesh, root, crossing_mesh.vertex_loop(2)) == []


def test_query_appends_to_collector(crossing_mesh):
    root = build_bvh_tree(crossing_mesh.all_polygon_ids(), crossing_mesh)
    collector = []
    result = find_intersecting_polygons(crossing_mesh, root, crossing_mesh.vertex_loop(0), result=collector)
    assert result is collector
    assert collector == [1]


def test_disjoint_polygon_is_pruned(crossing_mesh):
    root = build_bvh_tree(crossing_mesh.all_polygon_ids(), crossing_mesh)
    calls = []

    def judge(leaf_vertices, query_vertices):
        calls.append(leaf_vertices)
        return True

    found = find_intersecting_polygons(crossing_mesh, root, shifted(TRI_XY, dx=100), judge=judge)
    assert found == []
    assert calls == []


def test_self_match_is_skipped(crossing_mesh):
    root = build_bvh_tree(crossing_mesh.all_polygon_ids(), crossing_mesh)
    visited = []

    def judge(leaf_vertices, query_vertices):
        visited.append(tuple(map(tuple, leaf_vertices)))
        return True

    found = find_intersecting_polygons(crossing_mesh, root, crossing_mesh.vertex_loop(0), skip_polygon_id=0, judge=judge)
    assert found == [1]
    assert len(visited) == 1


def test_self_match_is_not_reported_by_the_predicate(crossing_mesh):
    root = build_bvh_tree(crossing_mesh.all_polygon_ids(), crossing_mesh)
    found = find_intersecting_polygons(crossing_mesh, root, crossing_mesh.vertex_loop(0))
    assert 0 not in found


def test_nested_boxes_are_reached():
    big = [(-10, -10, 0), (10, -10, 0), (0, 10, 0)]
    inner = [(0, 0, -0.1), (0.1, 0, 0.1), (0, 0.1, 0.1)]
    others = [shifted(SMALL, dx=20 + i) for i in range(6)]
    mesh = mesh_from_loops([big, inner] + others)
    root = build_bvh_tree(mesh.all_polygon_ids(), mesh)
    visited = set()
    leaf_ids = {tuple(map(tuple, mesh.vertex_loop(i))): i for i in mesh.all_polygon_ids()}

    def judge(leaf_vertices, query_vertices):
        visited.add(leaf_ids[tuple(map(tuple, leaf_vertices))])
        return False

    find_intersecting_polygons(mesh, root, shifted(inner, dx=0.01), judge=judge)
    assert visited == {0, 1}


def test_build_graph(crossing_mesh):
    root = build_bvh_tree(crossing_mesh.all_polygon_ids(), crossing_mesh)
    graph = build_graph(root)
    assert graph.number_of_nodes() == 5
    assert graph.number_of_edges() == 4
    leaves = sorted(pid for _, pid in graph.nodes(data="polygon_id") if pid is not None)
    assert leaves == [0, 1, 2]
    assert graph.nodes[0]["label"].startswith("Node")


def test_rebuild_is_idempotent(cube_mesh):
    ids = cube_mesh.all_polygon_ids()
    first = build_bvh_tree(ids, cube_mesh)
    second = build_bvh_tree(ids, cube_mesh)
    assert [leaf.polygon_id for leaf in iter_leaves(first)] == [leaf.polygon_id for leaf in iter_leaves(second)]
