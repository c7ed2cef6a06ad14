from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

from meshisect.extract_mesh import Mesh


EXAMPLES = Path(__file__).parent / "examples"

# треугольник в плоскости XY поперёк оси X
TRI_XY = [(-1, -1, 0), (1, -1, 0), (0, 1, 0)]
# треугольник в плоскости XZ поперёк оси X
TRI_XZ = [(-1, 0, -1), (1, 0, -1), (0, 0, 1)]
QUAD_XY = [(-1, -1, 0), (1, -1, 0), (1, 1, 0), (-1, 1, 0)]
QUAD_XZ = [(-1, 0, -1), (1, 0, -1), (1, 0, 1), (-1, 0, 1)]


def mesh_from_loops(loops, name="loops"):
    vertices = []
    polygons = []
    for loop in loops:
        polygons.append(list(range(len(vertices), len(vertices) + len(loop))))
        vertices.extend(loop)
    return Mesh(vertices, polygons, name=name)


def shifted(loop, dx=0.0, dy=0.0, dz=0.0):
    return [(x + dx, y + dy, z + dz) for x, y, z in loop]


@pytest.fixture
def examples_dir():
    return EXAMPLES


@pytest.fixture
def crossing_mesh():
    return Mesh.from_obj(EXAMPLES / "crossing.obj")


@pytest.fixture
def cube_mesh():
    return Mesh.from_obj(EXAMPLES / "cube.obj")
