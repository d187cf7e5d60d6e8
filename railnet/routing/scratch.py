"""Per-query search state."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from railnet.network.models import NO_STATION, StationID


class Color(Enum):
    """Visitation mark of a station during one search."""

    WHITE = 0  # not discovered
    GRAY = 1  # discovered, or on the depth-first stack
    BLACK = 2  # finished


@dataclass
class NodeState:
    """Scratch fields for one station."""

    color: Color = Color.WHITE
    distance: float = math.inf
    estimate: float = math.inf
    hops: int = 0
    predecessor: StationID = NO_STATION


class ScratchTable:
    """Search state keyed by station id, allocated fresh for every query."""

    def __init__(self, station_ids: Iterable[StationID]) -> None:
        """Initialize every station as undiscovered."""
        self._states: dict[StationID, NodeState] = {
            station_id: NodeState() for station_id in station_ids
        }

    def __getitem__(self, station_id: StationID) -> NodeState:
        return self._states[station_id]

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def path_to(self, origin: StationID, target: StationID) -> list[StationID]:
        """
        Follow predecessor ids back from target to origin.

        Returns the path origin-first, or an empty list if the chain does not
        lead back to the origin.
        """
        path = [target]
        current = target
        while current != origin:
            current = self._states[current].predecessor
            if current == NO_STATION or current not in self._states or len(path) > len(self):
                return []
            path.append(current)

        path.reverse()
        return path
