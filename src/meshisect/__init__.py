from meshisect.extract_mesh import Mesh, MeshError, MeshFormatError, PolygonNotFoundError, Selection
from meshisect.bvh import BVHNode, build_bvh_tree, find_intersecting_polygons
from meshisect.intersection import faces_intersect
from meshisect.session import EventHub, FacePainter, IntersectSession, SessionConfig, find_self_intersections

__version__ = "0.1.0"
