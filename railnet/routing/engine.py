"""Route queries over the timed train network."""

import logging

from railnet.network.geometry import whole_metres
from railnet.network.models import (
    NO_DISTANCE,
    NO_STATION,
    NO_TIME,
    Distance,
    StationID,
    Time,
)
from railnet.network.registry import EntityRegistry
from railnet.routing.scratch import ScratchTable
from railnet.routing.search import (
    FifoFrontier,
    PriorityFrontier,
    arrival_relaxation,
    assign_departures,
    discovery_relaxation,
    distance_relaxation,
    explore,
    find_cycle,
)

logger = logging.getLogger(__name__)

DistanceRoute = list[tuple[StationID, Distance]]
TimedRoute = list[tuple[StationID, Time]]


class RouteEngine:
    """Answer route queries against the edges stored in a registry."""

    def __init__(self, registry: EntityRegistry) -> None:
        """Initialize engine with the registry to search."""
        self.registry = registry

    def route_any(self, from_id: StationID, to_id: StationID) -> DistanceRoute:
        """Any route between two stations, found breadth-first."""
        return self._breadth_first_route(from_id, to_id)

    def route_least_stations(self, from_id: StationID, to_id: StationID) -> DistanceRoute:
        """Route with the fewest hops between two stations."""
        return self._breadth_first_route(from_id, to_id)

    def route_shortest_distance(self, from_id: StationID, to_id: StationID) -> DistanceRoute:
        """Route with the shortest travelled distance, found with A*."""
        if not self._endpoints_exist(from_id, to_id):
            return [(NO_STATION, NO_DISTANCE)]
        if from_id == to_id:
            return [(from_id, 0)]

        table = self._new_table()
        table[from_id].distance = 0.0

        relax = distance_relaxation(self.registry, table, to_id)
        if not explore(self.registry, table, from_id, to_id, PriorityFrontier(), relax):
            logger.debug(f"No route from {from_id} to {to_id}")
            return []

        return self._with_distances(table, table.path_to(from_id, to_id))

    def route_earliest_arrival(
        self, from_id: StationID, to_id: StationID, start_time: Time
    ) -> TimedRoute:
        """
        Route reaching the destination as early as possible.

        The first entry carries the start time, intermediate entries the time
        the route departs from them, and the last entry the arrival time.
        """
        if not self._endpoints_exist(from_id, to_id):
            return [(NO_STATION, NO_TIME)]
        if from_id == to_id:
            return [(from_id, start_time)]

        table = self._new_table()
        table[from_id].distance = start_time

        relax = arrival_relaxation(table)
        if not explore(self.registry, table, from_id, to_id, PriorityFrontier(), relax):
            logger.debug(f"No route from {from_id} to {to_id} after {start_time}")
            return []

        path = table.path_to(from_id, to_id)
        if not path:
            return []

        legs = assign_departures(self.registry, table, path)
        route: TimedRoute = [(from_id, start_time)]
        for station_id, leg in zip(path[1:-1], legs[1:]):
            route.append((station_id, leg.departure_time))
        route.append((to_id, legs[-1].arrival_time))

        logger.debug(f"Earliest arrival at {to_id} from {from_id}: {route[-1][1]}")
        return route

    def route_with_cycle(self, from_id: StationID) -> list[StationID]:
        """Route from a station that runs into a station it already visited."""
        if not self.registry.has_station(from_id):
            return [NO_STATION]

        table = self._new_table()
        return find_cycle(self.registry, table, from_id)

    def _breadth_first_route(self, from_id: StationID, to_id: StationID) -> DistanceRoute:
        if not self._endpoints_exist(from_id, to_id):
            return [(NO_STATION, NO_DISTANCE)]
        if from_id == to_id:
            return [(from_id, 0)]

        table = self._new_table()
        table[from_id].distance = 0.0

        relax = discovery_relaxation(self.registry, table)
        found = explore(
            self.registry, table, from_id, to_id, FifoFrontier(), relax, stop_on_discovery=True
        )
        if not found:
            logger.debug(f"No route from {from_id} to {to_id}")
            return []

        return self._with_distances(table, table.path_to(from_id, to_id))

    def _with_distances(self, table: ScratchTable, path: list[StationID]) -> DistanceRoute:
        return [(station_id, whole_metres(table[station_id].distance)) for station_id in path]

    def _endpoints_exist(self, from_id: StationID, to_id: StationID) -> bool:
        return self.registry.has_station(from_id) and self.registry.has_station(to_id)

    def _new_table(self) -> ScratchTable:
        return ScratchTable(self.registry.stations)
