from .statistics import mesh_statistics

__all__ = ["mesh_statistics"]
