from .kernel import AABB, cross, dot

__all__ = ["AABB", "cross", "dot"]
