from .tree import (
    BVHNode,
    build_bvh_tree,
    build_graph,
    count_nodes,
    find_intersecting_polygons,
    iter_leaves,
    polygon_aabb,
    tree_depth,
)

__all__ = [
    "BVHNode",
    "build_bvh_tree",
    "build_graph",
    "count_nodes",
    "find_intersecting_polygons",
    "iter_leaves",
    "polygon_aabb",
    "tree_depth",
]
