"""Station orderings and coordinate lookups."""

import heapq
import logging

from railnet.network.geometry import distance_from_origin, euclidean_distance
from railnet.network.models import NO_STATION, Coord, StationID
from railnet.network.registry import EntityRegistry

logger = logging.getLogger(__name__)


def stations_alphabetically(registry: EntityRegistry) -> list[StationID]:
    """Station ids sorted by name, ties broken by id."""
    stations = sorted(registry.stations.values(), key=lambda s: (s.name, s.station_id))
    return [station.station_id for station in stations]


def stations_distance_increasing(registry: EntityRegistry) -> list[StationID]:
    """Station ids sorted by distance from the origin, then by coordinate and id."""
    stations = sorted(
        registry.stations.values(),
        key=lambda s: (distance_from_origin(s.coord), s.coord, s.station_id),
    )
    return [station.station_id for station in stations]


def find_station_with_coord(registry: EntityRegistry, coord: Coord) -> StationID:
    """First station located exactly at the coordinate."""
    for station in registry.stations.values():
        if station.coord == coord:
            return station.station_id
    return NO_STATION


def stations_closest_to(registry: EntityRegistry, coord: Coord, limit: int = 3) -> list[StationID]:
    """
    Up to ``limit`` stations nearest to a coordinate.

    Uses a bounded heap; equally distant stations are ordered by id.
    """
    closest = heapq.nsmallest(
        limit,
        registry.stations.values(),
        key=lambda s: (euclidean_distance(s.coord, coord), s.station_id),
    )
    logger.debug(f"Closest {len(closest)} stations to {coord}")
    return [station.station_id for station in closest]
