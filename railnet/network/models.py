"""Data models for the railway network."""

from dataclasses import dataclass, field

StationID = str
TrainID = str
RegionID = int
Name = str
Time = int
Distance = int

# Returned when the requested thing was not found
NO_STATION: StationID = "---"
NO_TRAIN: TrainID = "---"
NO_REGION: RegionID = -1
NO_NAME: Name = "!NO_NAME!"
NO_TIME: Time = 9999
NO_VALUE: int = -(2**31)
NO_DISTANCE: Distance = NO_VALUE


@dataclass(frozen=True)
class Coord:
    """Integer map coordinate, ordered by y and then x."""

    x: int = NO_VALUE
    y: int = NO_VALUE

    def __lt__(self, other: "Coord") -> bool:
        return (self.y, self.x) < (other.y, other.x)


NO_COORD = Coord(NO_VALUE, NO_VALUE)


@dataclass(frozen=True)
class Edge:
    """Directed hop produced by two consecutive stops of a train."""

    departure_time: Time
    arrival_time: Time
    destination: StationID


@dataclass
class Station:
    """Station with its departures and outgoing edges."""

    station_id: StationID
    name: Name
    coord: Coord
    region: RegionID = NO_REGION
    departures: dict[Time, set[TrainID]] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)


@dataclass
class Region:
    """Region with at most one parent and any number of subregions."""

    region_id: RegionID
    name: Name
    polygon: list[Coord] = field(default_factory=list)
    parent: RegionID = NO_REGION
    children: set[RegionID] = field(default_factory=set)


@dataclass(frozen=True)
class Train:
    """Immutable itinerary of (station, departure time) stops."""

    train_id: TrainID
    stops: tuple[tuple[StationID, Time], ...]


@dataclass
class ValidationReport:
    """Report from network validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)


@dataclass
class NetworkConfig:
    """Configuration for network behaviour."""

    prevent_region_cycles: bool = True
    require_ordered_times: bool = True
    closest_limit: int = 3
