from .main import visualize_bvh_tree_graph

__all__ = ["visualize_bvh_tree_graph"]
