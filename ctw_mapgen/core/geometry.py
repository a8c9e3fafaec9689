"""Distance, nearest-neighbour search and rigid transforms."""

import math
from typing import Iterable, Optional

from .models import Node, Point, SymmetryMode


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def find_nearest(target: Point, candidates: Iterable[Node]) -> Optional[Node]:
    """
    Return the candidate closest to target, or None if there are none.

    Ties go to the candidate that comes first in iteration order: a later
    candidate replaces the current best only when strictly closer. Callers
    rely on this, since layouts must be reproducible for a given seed.
    """
    best = None
    best_distance = math.inf
    for node in candidates:
        d = distance(node.pos, target)
        if best is None or d < best_distance:
            best = node
            best_distance = d
    return best


def midpoint(a: Point, b: Point) -> Point:
    return Point(a.x + (b.x - a.x) * 0.5, a.y + (b.y - a.y) * 0.5)


def mirror_across_y(p: Point, axis_y: float) -> Point:
    """Reflect p across the horizontal line y = axis_y."""
    return Point(p.x, 2 * axis_y - p.y)


def transform_point(p: Point, mode: SymmetryMode, total_width: float, total_height: float) -> Point:
    """
    Map a point of the reference team onto the opposing team.

    MIRROR reflects across the vertical center line; ROTATION turns the map
    by 180 degrees about its center.
    """
    if mode == SymmetryMode.MIRROR:
        return Point(total_width - p.x, p.y)
    return Point(total_width - p.x, total_height - p.y)


def rotate_point(p: Point, angle: float, center: Point) -> Point:
    """Rotate p by angle degrees about center (y axis pointing down)."""
    rad = angle * (math.pi / 180)
    dx = p.x - center.x
    dy = p.y - center.y
    rx = dx * math.cos(rad) - dy * math.sin(rad)
    ry = dx * math.sin(rad) + dy * math.cos(rad)
    return Point(rx + center.x, ry + center.y)
