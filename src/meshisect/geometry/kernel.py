import numpy as np
from typing import Iterable, Optional


def cross(a, b) -> np.ndarray:
    """
    Векторное произведение двух 3D векторов.

    Покомпонентно, а не через np.cross: предикат сравнивает результат с нулём
    точно, поэтому порядок вычислений фиксирован.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ])


def dot(a, b) -> float:
    """Скалярное произведение двух 3D векторов, слагаемые по порядку x, y, z"""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


class AABB:
    """
    Axis-aligned bounding box.

    Пустой бокс не содержит ни одной точки: width/height/depth равны 0,
    центр в начале координат. expand() только растит бокс.
    """

    def __init__(self, min_corner: Optional[Iterable[float]] = None, max_corner: Optional[Iterable[float]] = None):
        if min_corner is None or max_corner is None:
            self.min = None
            self.max = None
        else:
            self.min = np.array(min_corner, dtype=float)
            self.max = np.array(max_corner, dtype=float)
            self.min, self.max = np.minimum(self.min, self.max), np.maximum(self.min, self.max)

    @classmethod
    def from_points(cls, points) -> "AABB":
        box = cls()
        for p in points:
            box.expand(p)
        return box

    @property
    def is_empty(self) -> bool:
        return self.min is None

    def expand(self, other):
        """Расширяет бокс до точки или до другого бокса"""
        if isinstance(other, AABB):
            if other.is_empty:
                return self
            lo, hi = other.min, other.max
        else:
            lo = hi = np.asarray(other, dtype=float)

        if self.is_empty:
            self.min = np.array(lo, dtype=float)
            self.max = np.array(hi, dtype=float)
        else:
            self.min = np.minimum(self.min, lo)
            self.max = np.maximum(self.max, hi)
        return self

    def extent(self) -> np.ndarray:
        if self.is_empty:
            return np.zeros(3)
        return self.max - self.min

    def width(self) -> float:
        return float(self.extent()[0])

    def height(self) -> float:
        return float(self.extent()[1])

    def depth(self) -> float:
        return float(self.extent()[2])

    def is_degenerate(self) -> bool:
        # нулевая протяжённость сразу по трём осям (в том числе пустой бокс)
        return self.width() == 0 and self.height() == 0 and self.depth() == 0

    def center(self) -> np.ndarray:
        if self.is_empty:
            return np.zeros(3)
        return (self.min + self.max) * 0.5

    def intersects(self, other: "AABB") -> bool:
        # касание тоже считается пересечением
        if self.is_empty or other.is_empty:
            return False
        for i in range(3):
            if self.max[i] < other.min[i] or other.max[i] < self.min[i]:
                return False
        return True

    def contains(self, other: "AABB") -> bool:
        if other.is_empty:
            return True
        if self.is_empty:
            return False
        return bool(np.all(self.min <= other.min) and np.all(other.max <= self.max))

    def copy(self) -> "AABB":
        if self.is_empty:
            return AABB()
        return AABB(self.min.copy(), self.max.copy())

    def __eq__(self, other):
        if not isinstance(other, AABB):
            return NotImplemented
        if self.is_empty or other.is_empty:
            return self.is_empty and other.is_empty
        return bool(np.array_equal(self.min, other.min) and np.array_equal(self.max, other.max))

    def __repr__(self):
        if self.is_empty:
            return "AABB(empty)"
        return f"AABB(min={self.min.tolist()}, max={self.max.tolist()})"
