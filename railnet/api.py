"""Public API for railnet."""

import logging

from railnet.network import ordering
from railnet.network.models import (
    Coord,
    Distance,
    Name,
    NetworkConfig,
    RegionID,
    StationID,
    Time,
    TrainID,
    ValidationReport,
)
from railnet.network.registry import EntityRegistry
from railnet.network.validator import NetworkValidator
from railnet.regions.hierarchy import RegionHierarchy
from railnet.routing.engine import RouteEngine
from railnet.transform import trains

logger = logging.getLogger(__name__)


class RailNetwork:
    """
    In-memory railway network with region hierarchy and route queries.

    Domain failures are reported through return values: False for rejected
    mutations and sentinel values (NO_STATION, NO_NAME, ...) for lookups on
    unknown identifiers. The network is not safe for concurrent use.
    """

    def __init__(self, config: NetworkConfig | None = None) -> None:
        """
        Create an empty network.

        Args:
            config: Optional network configuration
        """
        self.config = config if config is not None else NetworkConfig()
        self.registry = EntityRegistry()
        self.regions = RegionHierarchy(
            self.registry, prevent_cycles=self.config.prevent_region_cycles
        )
        self.routes = RouteEngine(self.registry)
        logger.debug(f"Created network with {self.config}")

    # Global

    def station_count(self) -> int:
        return self.registry.station_count()

    def clear_all(self) -> None:
        """Drop every station, region and train."""
        self.registry.clear_all()

    def validate(self) -> ValidationReport:
        """Check the network for dangling references and broken invariants."""
        return NetworkValidator(self.registry).validate()

    # Stations

    def add_station(self, station_id: StationID, name: Name, coord: Coord) -> bool:
        return self.registry.add_station(station_id, name, coord)

    def get_station_name(self, station_id: StationID) -> Name:
        return self.registry.get_station_name(station_id)

    def get_station_coordinates(self, station_id: StationID) -> Coord:
        return self.registry.get_station_coordinates(station_id)

    def all_stations(self) -> list[StationID]:
        return self.registry.all_stations()

    def stations_alphabetically(self) -> list[StationID]:
        return ordering.stations_alphabetically(self.registry)

    def stations_distance_increasing(self) -> list[StationID]:
        return ordering.stations_distance_increasing(self.registry)

    def find_station_with_coord(self, coord: Coord) -> StationID:
        return ordering.find_station_with_coord(self.registry, coord)

    def set_station_coordinates(self, station_id: StationID, coord: Coord) -> bool:
        return self.registry.set_station_coordinates(station_id, coord)

    def remove_station(self, station_id: StationID) -> bool:
        return self.registry.remove_station(station_id)

    def stations_closest_to(self, coord: Coord) -> list[StationID]:
        return ordering.stations_closest_to(self.registry, coord, self.config.closest_limit)

    # Departures

    def add_departure(self, station_id: StationID, train_id: TrainID, time: Time) -> bool:
        return self.registry.add_departure(station_id, train_id, time)

    def remove_departure(self, station_id: StationID, train_id: TrainID, time: Time) -> bool:
        return self.registry.remove_departure(station_id, train_id, time)

    def departures_after(self, station_id: StationID, time: Time) -> list[tuple[Time, TrainID]]:
        return self.registry.departures_after(station_id, time)

    # Regions

    def add_region(self, region_id: RegionID, name: Name, polygon: list[Coord]) -> bool:
        return self.registry.add_region(region_id, name, polygon)

    def all_regions(self) -> list[RegionID]:
        return self.registry.all_regions()

    def get_region_name(self, region_id: RegionID) -> Name:
        return self.registry.get_region_name(region_id)

    def get_region_polygon(self, region_id: RegionID) -> list[Coord]:
        return self.registry.get_region_polygon(region_id)

    def add_subregion_to_region(self, region_id: RegionID, parent_id: RegionID) -> bool:
        return self.regions.add_subregion_to_region(region_id, parent_id)

    def assign_station_to_region(self, station_id: StationID, region_id: RegionID) -> bool:
        return self.regions.assign_station_to_region(station_id, region_id)

    def station_in_regions(self, station_id: StationID) -> list[RegionID]:
        return self.regions.station_in_regions(station_id)

    def all_subregions_of_region(self, region_id: RegionID) -> list[RegionID]:
        return self.regions.all_subregions_of_region(region_id)

    def common_parent_of_regions(self, first_id: RegionID, second_id: RegionID) -> RegionID:
        return self.regions.common_parent_of_regions(first_id, second_id)

    # Trains

    def add_train(self, train_id: TrainID, stops: list[tuple[StationID, Time]]) -> bool:
        """Add a train; all-or-nothing."""
        return trains.add_train(
            self.registry,
            train_id,
            stops,
            require_ordered_times=self.config.require_ordered_times,
        )

    def next_stations_from(self, station_id: StationID) -> list[StationID]:
        return trains.next_stations_from(self.registry, station_id)

    def stations_after(self, station_id: StationID, train_id: TrainID) -> list[StationID]:
        return trains.stations_after(self.registry, station_id, train_id)

    def clear_trains(self) -> None:
        trains.clear_trains(self.registry)

    # Routes

    def route_any(self, from_id: StationID, to_id: StationID) -> list[tuple[StationID, Distance]]:
        return self.routes.route_any(from_id, to_id)

    def route_least_stations(
        self, from_id: StationID, to_id: StationID
    ) -> list[tuple[StationID, Distance]]:
        return self.routes.route_least_stations(from_id, to_id)

    def route_shortest_distance(
        self, from_id: StationID, to_id: StationID
    ) -> list[tuple[StationID, Distance]]:
        return self.routes.route_shortest_distance(from_id, to_id)

    def route_earliest_arrival(
        self, from_id: StationID, to_id: StationID, start_time: Time
    ) -> list[tuple[StationID, Time]]:
        return self.routes.route_earliest_arrival(from_id, to_id, start_time)

    def route_with_cycle(self, from_id: StationID) -> list[StationID]:
        return self.routes.route_with_cycle(from_id)
