from .session import (
    EventHub,
    FacePainter,
    IntersectSession,
    SessionConfig,
    find_self_intersections,
)

__all__ = [
    "EventHub",
    "FacePainter",
    "IntersectSession",
    "SessionConfig",
    "find_self_intersections",
]
