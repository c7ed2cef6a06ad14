from .judge import faces_intersect, intersection_line, plane_normal

__all__ = ["faces_intersect", "intersection_line", "plane_normal"]
