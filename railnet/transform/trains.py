"""Train insertion and the timed edges it derives."""

import logging

from railnet.network.models import NO_STATION, NO_TRAIN, Edge, StationID, Time, Train, TrainID
from railnet.network.registry import EntityRegistry

logger = logging.getLogger(__name__)


def add_train(
    registry: EntityRegistry,
    train_id: TrainID,
    stops: list[tuple[StationID, Time]],
    require_ordered_times: bool = True,
) -> bool:
    """
    Store a train and materialize its departures and edges.

    Every check runs before anything is written, so a rejected train leaves
    no train record, departure or edge behind.

    Args:
        registry: Registry holding the stations
        train_id: Identifier of the new train
        stops: Ordered (station, departure time) pairs
        require_ordered_times: Reject stop lists whose times decrease

    Returns:
        True if the train was added
    """
    if train_id == NO_TRAIN or registry.has_train(train_id):
        logger.warning(f"Train {train_id} already exists or is invalid, rejecting")
        return False

    for station_id, _ in stops:
        if not registry.has_station(station_id):
            logger.warning(f"Train {train_id} references unknown station {station_id}, rejecting")
            return False

    if require_ordered_times:
        for (_, time), (station_id, next_time) in zip(stops, stops[1:]):
            if next_time < time:
                logger.warning(
                    f"Train {train_id} arrives at {station_id} at {next_time}, "
                    f"before leaving the previous stop at {time}, rejecting"
                )
                return False

    registry.trains[train_id] = Train(train_id=train_id, stops=tuple(stops))

    for (station_id, time), (next_station_id, next_time) in zip(stops, stops[1:]):
        registry.add_departure(station_id, train_id, time)
        edge = Edge(departure_time=time, arrival_time=next_time, destination=next_station_id)
        registry.stations[station_id].edges.append(edge)

    logger.debug(f"Added train {train_id} with {len(stops)} stops")
    return True


def next_stations_from(registry: EntityRegistry, station_id: StationID) -> list[StationID]:
    """Distinct stations reachable by one hop, in edge order."""
    station = registry.get_station(station_id)
    if station is None:
        return [NO_STATION]

    return list(dict.fromkeys(edge.destination for edge in station.edges))


def stations_after(
    registry: EntityRegistry, station_id: StationID, train_id: TrainID
) -> list[StationID]:
    """
    Stations a train visits after departing from the given station.

    Only stops whose departure event is still registered at the station
    count as departures.
    """
    station = registry.get_station(station_id)
    train = registry.get_train(train_id)
    if station is None or train is None:
        return [NO_STATION]

    for index, (stop_station, time) in enumerate(train.stops[:-1]):
        if stop_station == station_id and train_id in station.departures.get(time, ()):
            return [next_station for next_station, _ in train.stops[index + 1 :]]

    return [NO_STATION]


def clear_trains(registry: EntityRegistry) -> None:
    """Drop every train along with the edges and departures it created."""
    logger.info(f"Clearing {len(registry.trains)} trains")

    for train in registry.trains.values():
        for station_id, time in train.stops[:-1]:
            registry.remove_departure(station_id, train.train_id, time)

    for station in registry.stations.values():
        station.edges.clear()

    registry.trains.clear()
