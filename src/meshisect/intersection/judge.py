from functools import reduce
from typing import Optional, Sequence, Tuple

import numpy as np

from meshisect.geometry import cross, dot


# пары вершин, по которым сравниваются знаки
TRIANGLE_PAIRS = ((0, 1), (0, 2), (1, 2))
QUAD_PAIRS = ((0, 1), (0, 2), (0, 3), (1, 2))


def plane_normal(vertices) -> np.ndarray:
    """Нормаль плоскости грани по первым двум рёбрам из вершины 0 (без нормировки)"""
    v = np.asarray(vertices, dtype=float)
    return cross(v[1] - v[0], v[2] - v[0])


def intersection_line(vertices1, vertices2) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """
    Линия пересечения плоскостей двух граней.

    Возвращает (точка на линии, направляющий вектор) или None, если
    плоскости параллельны (совпадают) либо система 2x2 вырождена.
    Сравнения с нулём точные, без eps.
    """
    v1 = np.asarray(vertices1, dtype=float)
    v2 = np.asarray(vertices2, dtype=float)
    n1 = plane_normal(v1)
    n2 = plane_normal(v2)

    direction = cross(n1, n2)
    if direction[0] == 0 and direction[1] == 0 and direction[2] == 0:
        return None

    # n·x = d для каждой плоскости
    d1 = dot(n1, v1[0])
    d2 = dot(n2, v2[0])
    det_xz = n1[0] * n2[2] - n1[2] * n2[0]
    det_yz = n1[1] * n2[2] - n1[2] * n2[1]

    point = np.zeros(3)
    if det_xz == 0:
        if det_yz == 0:
            return None
        point[0] = 0.0
        point[1] = (d1 * n2[2] - d2 * n1[2]) / det_yz
    else:
        point[0] = (d1 * n2[2] - d2 * n1[2]) / det_xz
        point[1] = 0.0

    if n1[2] != 0:
        point[2] = (d1 - n1[0] * point[0] - n1[1] * point[1]) / n1[2]
    elif n2[2] != 0:
        point[2] = (d2 - n2[0] * point[0] - n2[1] * point[1]) / n2[2]
    else:
        point[2] = 0.0

    return point, direction


def _side_products(vertices, point, direction, pairs) -> list:
    w = [cross(point - v, direction) for v in vertices]
    return [dot(w[i], w[j]) for i, j in pairs]


def _not_crossed(products, zero_rule: bool) -> bool:
    """
    True — линия пересечения не проходит через внутренность грани:
    все произведения одного знака (или, при zero_rule, линия касается вершины).
    """
    same_side = all(p > 0 for p in products) or all(p < 0 for p in products)
    if same_side:
        return True
    if zero_rule:
        return reduce(lambda a, b: a * b, products) == 0
    return False


def faces_intersect(vertices1: Sequence, vertices2: Sequence) -> bool:
    """
    Пересекаются ли две плоские грани (треугольники или четырёхугольники).

    Ветка выбирается по числу вершин первой грани. В ветке треугольника
    правило нулевого произведения применяется только к первой грани,
    а от второй берутся первые три вершины. В ветке четырёхугольника
    правило применяется к обеим граням.
    """
    line = intersection_line(vertices1, vertices2)
    if line is None:
        return False
    point, direction = line

    v1 = np.asarray(vertices1, dtype=float)
    v2 = np.asarray(vertices2, dtype=float)

    if len(v1) == 3:
        flag1 = _not_crossed(_side_products(v1, point, direction, TRIANGLE_PAIRS), zero_rule=True)
        flag2 = _not_crossed(_side_products(v2[:3], point, direction, TRIANGLE_PAIRS), zero_rule=False)
    else:
        flag1 = _not_crossed(_side_products(v1[:4], point, direction, QUAD_PAIRS), zero_rule=True)
        if len(v2) >= 4:
            flag2 = _not_crossed(_side_products(v2[:4], point, direction, QUAD_PAIRS), zero_rule=True)
        else:
            flag2 = _not_crossed(_side_products(v2, point, direction, TRIANGLE_PAIRS), zero_rule=True)

    return not flag1 and not flag2
