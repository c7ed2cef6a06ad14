import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from meshisect.bvh import polygon_aabb
from meshisect.extract_mesh import Mesh
from meshisect.mesh_statistics import mesh_statistics


# рёбра бокса: пары индексов вершин
AABB_EDGES = [
    [0, 1], [1, 2], [2, 3], [3, 0],  # нижняя грань
    [4, 5], [5, 6], [6, 7], [7, 4],  # верхняя грань
    [0, 4], [1, 5], [2, 6], [3, 7],  # вертикальные рёбра
]


def draw_face(ax,
              faces_coord=(),
              colors=(),
              default_color="blue",
              edge_enable=False,
              alpha=0.3):
    poly_collection = Poly3DCollection(
            faces_coord,
            alpha=alpha,
            facecolors=colors if colors else default_color,
            edgecolors="k" if edge_enable else "none",
            linewidths=0.3 if edge_enable else 0.0
    )
    ax.add_collection3d(poly_collection)
    return poly_collection


def draw_aabb(ax, box, color="red", linewidth=0.5):
    mn, mx = box.min, box.max
    # 8 вершин бокса
    corners = np.array([
        [mn[0], mn[1], mn[2]],
        [mx[0], mn[1], mn[2]],
        [mx[0], mx[1], mn[2]],
        [mn[0], mx[1], mn[2]],
        [mn[0], mn[1], mx[2]],
        [mx[0], mn[1], mx[2]],
        [mx[0], mx[1], mx[2]],
        [mn[0], mx[1], mx[2]],
    ])
    for e in AABB_EDGES:
        ax.plot(*zip(corners[e[0]], corners[e[1]]), color=color, linewidth=linewidth)


def mesh_plotter(mesh: Mesh,
                 highlighted=(),
                 highlight_color="red",
                 default_color="lightgray",
                 edge_enable=False,
                 aabb_enable=False,
                 table_enable=False,
                 alpha=0.3,
                 show=True):
    """
    Рисует сетку; полигоны из highlighted закрашиваются highlight_color.
    При show=False возвращает figure без вывода на экран.
    """
    highlighted = set(highlighted)

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111, projection='3d')

    polys = []
    colors = []
    for polygon_id in mesh.all_polygon_ids():
        polys.append(mesh.vertex_loop(polygon_id))
        colors.append(highlight_color if polygon_id in highlighted else default_color)

    if polys:
        draw_face(ax=ax, faces_coord=polys, colors=colors, alpha=alpha, edge_enable=edge_enable)

    if aabb_enable:
        for polygon_id in highlighted:
            draw_aabb(ax, polygon_aabb(mesh, polygon_id))

    if mesh.vertex_count:
        ax.auto_scale_xyz(mesh.vertices[:, 0], mesh.vertices[:, 1], mesh.vertices[:, 2])

    # Оси и подпись
    ax.set_title(mesh.name)

    if table_enable:
        data = [[k, v] for k, v in mesh_statistics(mesh).items()]
        table = ax.table(
            cellText=data,
            loc="bottom",
            cellLoc="center",
        )
        table.scale(1, 1.2)
        table.auto_set_font_size(False)
        table.set_fontsize(10)

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    plt.tight_layout()
    if show:
        plt.show()
    return fig
