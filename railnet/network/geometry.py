"""Distance helpers for map coordinates."""

import math

from railnet.network.models import Coord, Distance


def euclidean_distance(a: Coord, b: Coord) -> float:
    """Calculate straight-line distance between two coordinates in metres."""
    return math.hypot(a.x - b.x, a.y - b.y)


def whole_metres(distance: float) -> Distance:
    """Truncate a distance to whole metres."""
    return int(distance)


def distance_from_origin(coord: Coord) -> float:
    """Distance of a coordinate from (0, 0)."""
    return math.hypot(coord.x, coord.y)
