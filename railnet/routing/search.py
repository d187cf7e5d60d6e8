"""Graph traversals shared by the route queries."""

import heapq
import itertools
import logging
from collections import deque
from collections.abc import Callable
from typing import Protocol

from railnet.network.geometry import euclidean_distance
from railnet.network.models import Edge, StationID
from railnet.network.registry import EntityRegistry
from railnet.routing.scratch import Color, ScratchTable

logger = logging.getLogger(__name__)

# Updates the destination of an edge; returns its frontier priority, or None
# if the edge brought no improvement.
Relaxation = Callable[[StationID, Edge], float | None]


class Frontier(Protocol):
    """Container of discovered stations waiting to be expanded."""

    def push(self, station_id: StationID, priority: float) -> None: ...

    def pop(self) -> StationID: ...

    def __bool__(self) -> bool: ...


class FifoFrontier:
    """First-in first-out frontier; priorities are ignored."""

    def __init__(self) -> None:
        self._queue: deque[StationID] = deque()

    def push(self, station_id: StationID, priority: float) -> None:
        self._queue.append(station_id)

    def pop(self) -> StationID:
        return self._queue.popleft()

    def __bool__(self) -> bool:
        return bool(self._queue)


class PriorityFrontier:
    """Lowest-priority-first frontier, ties in insertion order."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, StationID]] = []
        self._counter = itertools.count()

    def push(self, station_id: StationID, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), station_id))

    def pop(self) -> StationID:
        return heapq.heappop(self._heap)[2]

    def __bool__(self) -> bool:
        return bool(self._heap)


def explore(
    registry: EntityRegistry,
    table: ScratchTable,
    origin: StationID,
    target: StationID,
    frontier: Frontier,
    relax: Relaxation,
    stop_on_discovery: bool = False,
) -> bool:
    """
    Expand stations from the origin until the target is reached.

    Stations are finished (black) when popped; stale frontier entries for
    finished stations are skipped. Edges to stations that no longer exist
    are ignored.

    Args:
        registry: Registry holding stations and edges
        table: Fresh scratch table with the origin's state initialized
        origin: Start station
        target: Station to reach
        frontier: Discipline deciding which station to expand next
        relax: Edge relaxation for the query
        stop_on_discovery: Stop as soon as the target is discovered instead
            of when it is popped

    Returns:
        True if the target was reached
    """
    table[origin].color = Color.GRAY
    frontier.push(origin, 0.0)

    while frontier:
        station_id = frontier.pop()
        state = table[station_id]
        if state.color is Color.BLACK:
            continue
        if station_id == target:
            return True
        state.color = Color.BLACK

        for edge in registry.edges_from(station_id):
            destination = edge.destination
            if destination not in table or table[destination].color is Color.BLACK:
                continue

            priority = relax(station_id, edge)
            if priority is None:
                continue

            table[destination].color = Color.GRAY
            frontier.push(destination, priority)
            if stop_on_discovery and destination == target:
                return True

    return False


def hop_distance(registry: EntityRegistry, source: StationID, destination: StationID) -> float:
    """Straight-line length of a hop between two stations."""
    return euclidean_distance(
        registry.stations[source].coord, registry.stations[destination].coord
    )


def discovery_relaxation(registry: EntityRegistry, table: ScratchTable) -> Relaxation:
    """Accept each station once, counting hops and accumulated distance."""

    def relax(station_id: StationID, edge: Edge) -> float | None:
        state = table[edge.destination]
        if state.color is not Color.WHITE:
            return None

        source = table[station_id]
        state.predecessor = station_id
        state.hops = source.hops + 1
        state.distance = source.distance + hop_distance(registry, station_id, edge.destination)
        return state.hops

    return relax


def distance_relaxation(
    registry: EntityRegistry, table: ScratchTable, target: StationID
) -> Relaxation:
    """A* relaxation with the straight-line distance to the target as heuristic."""
    goal = registry.stations[target].coord

    def relax(station_id: StationID, edge: Edge) -> float | None:
        state = table[edge.destination]
        tentative = table[station_id].distance + hop_distance(
            registry, station_id, edge.destination
        )
        if tentative >= state.distance:
            return None

        state.distance = tentative
        state.estimate = tentative + euclidean_distance(
            registry.stations[edge.destination].coord, goal
        )
        state.predecessor = station_id
        return state.estimate

    return relax


def arrival_relaxation(table: ScratchTable) -> Relaxation:
    """Earliest-arrival relaxation; distances hold arrival times."""

    def relax(station_id: StationID, edge: Edge) -> float | None:
        # The train must leave after we got to the station
        if edge.departure_time < table[station_id].distance:
            return None

        state = table[edge.destination]
        if edge.arrival_time >= state.distance:
            return None

        state.distance = edge.arrival_time
        state.predecessor = station_id
        return edge.arrival_time

    return relax


def find_cycle(registry: EntityRegistry, table: ScratchTable, origin: StationID) -> list[StationID]:
    """
    Depth-first search for the first edge back into the current path.

    Returns the path from the origin to the station closing the cycle,
    followed by the repeated station, or an empty list if no cycle is
    reachable.
    """
    table[origin].color = Color.GRAY
    stack = [(origin, iter(registry.edges_from(origin)))]

    while stack:
        station_id, edges = stack[-1]
        for edge in edges:
            destination = edge.destination
            if destination not in table:
                continue

            state = table[destination]
            if state.color is Color.GRAY:
                logger.debug(f"Edge {station_id} -> {destination} closes a cycle")
                return table.path_to(origin, station_id) + [destination]
            if state.color is Color.WHITE:
                state.color = Color.GRAY
                state.predecessor = station_id
                stack.append((destination, iter(registry.edges_from(destination))))
                break
        else:
            table[station_id].color = Color.BLACK
            stack.pop()

    return []


def assign_departures(
    registry: EntityRegistry, table: ScratchTable, path: list[StationID]
) -> list[Edge]:
    """
    Pick the edge actually ridden on each hop of an earliest-arrival path.

    Walks the path backwards: each hop takes the latest departure that still
    arrives in time for the next hop and does not leave before the earliest
    arrival at its source.
    """
    legs: list[Edge] = []
    required = table[path[-1]].distance

    for source, destination in reversed(list(zip(path, path[1:]))):
        earliest = table[source].distance
        candidates = [
            edge
            for edge in registry.edges_from(source)
            if edge.destination == destination
            and earliest <= edge.departure_time
            and edge.arrival_time <= required
        ]
        leg = max(candidates, key=lambda edge: (edge.departure_time, -edge.arrival_time))
        legs.append(leg)
        required = leg.departure_time

    legs.reverse()
    return legs
