import logging

from meshisect.extract_mesh import Mesh


def mesh_statistics(mesh: Mesh, results=None):
    sizes = list(mesh.polygon_sizes().values())
    info = {
            "polygons_count": mesh.polygon_count,
            "vertices_count": mesh.vertex_count,
            "triangles_count": sum(1 for s in sizes if s == 3),
            "quads_count": sum(1 for s in sizes if s == 4),
    }
    if results is not None:
        hits = set()
        for polygon_id, found in results.items():
            if found:
                hits.add(polygon_id)
                hits.update(found)
        info["intersecting_count"] = len(hits)

    logging.info("Mesh summary '%s':", mesh.name)
    for key, value in info.items():
        logging.info("  %s: %s", key, value)
    return info
