"""Pytest configuration and fixtures."""

import pytest

from railnet import Coord, NetworkConfig, RailNetwork

COUNTRY, STATE, OTHER_STATE, CITY, OTHER_CITY, FAR_CITY = 1, 2, 5, 3, 4, 6


@pytest.fixture
def network() -> RailNetwork:
    """Empty network with the default configuration."""
    return RailNetwork()


@pytest.fixture
def line_network() -> RailNetwork:
    """Three stations on a straight line served by one train."""
    net = RailNetwork()
    net.add_station("S1", "First", Coord(0, 0))
    net.add_station("S2", "Second", Coord(3, 4))
    net.add_station("S3", "Third", Coord(6, 8))
    net.add_train("T1", [("S1", 100), ("S2", 110), ("S3", 130)])
    return net


@pytest.fixture
def region_network() -> RailNetwork:
    """
    Country with two states; the first state has two cities, the second one.

    Station "C1" lies in CITY.
    """
    net = RailNetwork()
    square = [Coord(0, 0), Coord(0, 10), Coord(10, 10), Coord(10, 0)]
    net.add_region(COUNTRY, "Country", square)
    net.add_region(STATE, "State", square)
    net.add_region(OTHER_STATE, "Other state", square)
    net.add_region(CITY, "City", square)
    net.add_region(OTHER_CITY, "Other city", square)
    net.add_region(FAR_CITY, "Far city", square)
    net.add_subregion_to_region(STATE, COUNTRY)
    net.add_subregion_to_region(OTHER_STATE, COUNTRY)
    net.add_subregion_to_region(CITY, STATE)
    net.add_subregion_to_region(OTHER_CITY, STATE)
    net.add_subregion_to_region(FAR_CITY, OTHER_STATE)
    net.add_station("C1", "City station", Coord(1, 1))
    net.assign_station_to_region("C1", CITY)
    return net


@pytest.fixture
def lenient_network() -> RailNetwork:
    """Empty network that accepts region cycles and unordered train times."""
    return RailNetwork(
        NetworkConfig(prevent_region_cycles=False, require_ordered_times=False)
    )


@pytest.fixture
def mesh_network() -> RailNetwork:
    """Seven stations joined by six overlapping trains."""
    net = RailNetwork()
    coords = {
        "A": Coord(0, 0),
        "B": Coord(3, 4),
        "C": Coord(6, 0),
        "D": Coord(10, 0),
        "E": Coord(5, -5),
        "F": Coord(8, 6),
        "G": Coord(12, 3),
    }
    for station_id, coord in coords.items():
        net.add_station(station_id, f"Station {station_id}", coord)

    net.add_train("T1", [("A", 0), ("B", 10), ("F", 20), ("G", 30)])
    net.add_train("T2", [("A", 0), ("E", 10), ("D", 20), ("G", 40)])
    net.add_train("T3", [("B", 5), ("C", 10), ("D", 15)])
    net.add_train("T4", [("C", 0), ("G", 10)])
    net.add_train("T5", [("E", 0), ("C", 5)])
    net.add_train("T6", [("F", 0), ("D", 5)])
    net.add_train("T7", [("A", 20), ("C", 35), ("G", 45)])
    return net
