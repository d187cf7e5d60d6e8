"""Entity registry for stations, regions and trains."""

import logging

from railnet.network.models import (
    NO_COORD,
    NO_NAME,
    NO_REGION,
    NO_STATION,
    NO_TIME,
    NO_TRAIN,
    Coord,
    Edge,
    Name,
    Region,
    RegionID,
    Station,
    StationID,
    Time,
    Train,
    TrainID,
)

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Own the canonical station, region and train records."""

    def __init__(self) -> None:
        """Initialize empty registries."""
        self.stations: dict[StationID, Station] = {}
        self.regions: dict[RegionID, Region] = {}
        self.trains: dict[TrainID, Train] = {}

    # Stations

    def add_station(self, station_id: StationID, name: Name, coord: Coord) -> bool:
        """Add a station unless the id is taken or any field is a sentinel."""
        if station_id in self.stations:
            logger.warning(f"Station {station_id} already exists")
            return False
        if station_id == NO_STATION or name == NO_NAME or coord == NO_COORD:
            logger.warning(f"Station {station_id!r} has missing fields, rejecting")
            return False

        self.stations[station_id] = Station(station_id=station_id, name=name, coord=coord)
        logger.debug(f"Added station {station_id} ({name}) at {coord}")
        return True

    def get_station(self, station_id: StationID) -> Station | None:
        """Look up a station record."""
        return self.stations.get(station_id)

    def has_station(self, station_id: StationID) -> bool:
        return station_id in self.stations

    def get_station_name(self, station_id: StationID) -> Name:
        station = self.stations.get(station_id)
        return station.name if station is not None else NO_NAME

    def get_station_coordinates(self, station_id: StationID) -> Coord:
        station = self.stations.get(station_id)
        return station.coord if station is not None else NO_COORD

    def set_station_coordinates(self, station_id: StationID, coord: Coord) -> bool:
        """Move an existing station."""
        station = self.stations.get(station_id)
        if station is None:
            return False

        station.coord = coord
        return True

    def remove_station(self, station_id: StationID) -> bool:
        """
        Remove a station.

        Edges at other stations that lead here are left in place and become
        dangling; searches skip them and the validator reports them.
        """
        if station_id not in self.stations:
            return False

        del self.stations[station_id]
        logger.debug(f"Removed station {station_id}")
        return True

    def all_stations(self) -> list[StationID]:
        return list(self.stations)

    def station_count(self) -> int:
        return len(self.stations)

    def edges_from(self, station_id: StationID) -> list[Edge]:
        """Outgoing edges of a station, empty for unknown stations."""
        station = self.stations.get(station_id)
        return station.edges if station is not None else []

    # Departures

    def add_departure(self, station_id: StationID, train_id: TrainID, time: Time) -> bool:
        """Register a train departing from a station at a time."""
        station = self.stations.get(station_id)
        if station is None:
            return False

        trains_at_time = station.departures.setdefault(time, set())
        if train_id in trains_at_time:
            return False

        trains_at_time.add(train_id)
        return True

    def remove_departure(self, station_id: StationID, train_id: TrainID, time: Time) -> bool:
        """Remove a departure, dropping the time slot once it is empty."""
        station = self.stations.get(station_id)
        if station is None:
            return False

        trains_at_time = station.departures.get(time)
        if trains_at_time is None or train_id not in trains_at_time:
            return False

        trains_at_time.remove(train_id)
        if not trains_at_time:
            del station.departures[time]
        return True

    def departures_after(self, station_id: StationID, time: Time) -> list[tuple[Time, TrainID]]:
        """Departures at or after a time, sorted by time and then train id."""
        station = self.stations.get(station_id)
        if station is None:
            return [(NO_TIME, NO_TRAIN)]

        return sorted(
            (departure_time, train_id)
            for departure_time, train_ids in station.departures.items()
            if departure_time >= time
            for train_id in train_ids
        )

    # Regions

    def add_region(self, region_id: RegionID, name: Name, polygon: list[Coord]) -> bool:
        """Add a region unless the id is taken or a sentinel."""
        if region_id in self.regions:
            logger.warning(f"Region {region_id} already exists")
            return False
        if region_id == NO_REGION or name == NO_NAME:
            logger.warning(f"Region {region_id!r} has missing fields, rejecting")
            return False

        self.regions[region_id] = Region(region_id=region_id, name=name, polygon=list(polygon))
        logger.debug(f"Added region {region_id} ({name}) with {len(polygon)} corners")
        return True

    def get_region(self, region_id: RegionID) -> Region | None:
        """Look up a region record."""
        return self.regions.get(region_id)

    def has_region(self, region_id: RegionID) -> bool:
        return region_id in self.regions

    def get_region_name(self, region_id: RegionID) -> Name:
        region = self.regions.get(region_id)
        return region.name if region is not None else NO_NAME

    def get_region_polygon(self, region_id: RegionID) -> list[Coord]:
        region = self.regions.get(region_id)
        return list(region.polygon) if region is not None else [NO_COORD]

    def all_regions(self) -> list[RegionID]:
        return list(self.regions)

    # Trains

    def get_train(self, train_id: TrainID) -> Train | None:
        return self.trains.get(train_id)

    def has_train(self, train_id: TrainID) -> bool:
        return train_id in self.trains

    def clear_all(self) -> None:
        """Drop every station, region and train."""
        logger.info(
            f"Clearing {len(self.stations)} stations, {len(self.regions)} regions "
            f"and {len(self.trains)} trains"
        )
        self.stations.clear()
        self.regions.clear()
        self.trains.clear()
