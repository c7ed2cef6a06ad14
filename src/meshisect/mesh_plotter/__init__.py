from .plotter import draw_aabb, draw_face, mesh_plotter

__all__ = ["draw_aabb", "draw_face", "mesh_plotter"]
