import argparse
import logging
import sys
import time

from yaspin import yaspin
from yaspin.spinners import Spinners

from meshisect.bvh import build_bvh_tree, build_graph, count_nodes, find_intersecting_polygons, tree_depth
from meshisect.extract_mesh import Mesh, MeshError


def measure_time(func, *args, **kwargs):
    """
    Измеряет время выполнения функции.

    Параметры:
        func: callable — функция для вызова
        *args, **kwargs — аргументы для функции

    Возвращает:
        tuple(result, elapsed_time)
    """
    start = time.time()
    result = func(*args, **kwargs)
    elapsed = time.time() - start
    return result, elapsed


def query_all(mesh: Mesh, root):
    results = {}
    for polygon_id in mesh.all_polygon_ids():
        results[polygon_id] = find_intersecting_polygons(mesh, root, mesh.vertex_loop(polygon_id), skip_polygon_id=polygon_id)
    return results


def alg(mesh: Mesh, plot_enable: bool = False, graph_enable: bool = False, edge_enable: bool = True, aabb_enable: bool = False):
    times = {}

    # --- build_tree ---
    with yaspin(Spinners.arc, text="Building BVH...") as sp:
        root, times["build_time"] = measure_time(build_bvh_tree, mesh.all_polygon_ids(), mesh)
        sp.ok("DONE")

    # --- traversal ---
    with yaspin(Spinners.arc, text="Searching intersections...") as sp:
        results, times["traversal_time"] = measure_time(query_all, mesh, root)
        sp.ok("DONE")

    intersecting = {polygon_id for polygon_id, found in results.items() if found}
    for found in results.values():
        intersecting.update(found)

    # --- Вывод результатов ---
    logging.info("=== Self-intersection results ===")
    logging.info("Mesh: %s", mesh)
    logging.info("BVH nodes: %s, depth: %s", count_nodes(root), tree_depth(root))
    logging.info("Intersecting polygons: %s", len(intersecting))
    if intersecting:
        logging.info("Polygon ids: %s", sorted(intersecting))

    for name, t in times.items():
        logging.info(f"{name:<20} {t:>10.6f} s")

    if graph_enable:
        from meshisect.visualization_mesh import visualize_bvh_tree_graph
        visualize_bvh_tree_graph(build_graph(root))
    if plot_enable:
        from meshisect.mesh_plotter import mesh_plotter
        mesh_plotter(mesh, highlighted=intersecting, edge_enable=edge_enable, aabb_enable=aabb_enable)

    return results


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Highlight self-intersecting polygons of a mesh")
    parser.add_argument("mesh", help="path to a Wavefront OBJ file")
    parser.add_argument("--plot", action="store_true", help="show the mesh with intersecting polygons in red")
    parser.add_argument("--aabb", action="store_true", help="draw bounding boxes of intersecting polygons")
    parser.add_argument("--graph", action="store_true", help="show the BVH tree structure")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    try:
        with yaspin(Spinners.arc, text="Reading mesh...") as sp:
            mesh, load_time = measure_time(Mesh.from_obj, args.mesh)
            sp.ok("DONE")
        logging.info(f"{'load_time':<20} {load_time:>10.6f} s")
        alg(mesh, plot_enable=args.plot, graph_enable=args.graph, aabb_enable=args.aabb)
    except (MeshError, OSError) as e:
        logging.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
