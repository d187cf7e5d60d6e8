"""Tests for the route engine."""

import math

import pytest

from railnet import NO_DISTANCE, NO_STATION, NO_TIME, Coord, RailNetwork
from railnet.network.models import Edge


def _simple_paths(network: RailNetwork, start: str, goal: str) -> list[list[str]]:
    """Every simple path between two stations, by brute force."""
    paths: list[list[str]] = []

    def extend(path: list[str]) -> None:
        if path[-1] == goal:
            paths.append(path)
            return
        for station_id in network.next_stations_from(path[-1]):
            if station_id not in path:
                extend(path + [station_id])

    extend([start])
    return paths


def _path_length(network: RailNetwork, path: list[str]) -> float:
    total = 0.0
    for a, b in zip(path, path[1:]):
        ca = network.get_station_coordinates(a)
        cb = network.get_station_coordinates(b)
        total += math.hypot(ca.x - cb.x, ca.y - cb.y)
    return total


def _has_edge(network: RailNetwork, source: str, destination: str) -> bool:
    return any(edge.destination == destination for edge in network.registry.edges_from(source))


def _detour_network() -> RailNetwork:
    """Few long hops versus many short hops."""
    net = RailNetwork()
    net.add_station("A", "A", Coord(0, 0))
    net.add_station("B", "B", Coord(1, 0))
    net.add_station("C", "C", Coord(2, 0))
    net.add_station("D", "D", Coord(3, 0))
    net.add_station("E", "E", Coord(0, 10))
    net.add_train("Slow", [("A", 10), ("B", 20), ("C", 30), ("D", 40)])
    net.add_train("Detour", [("A", 10), ("E", 20), ("D", 30)])
    return net


# Shared outcomes


@pytest.mark.parametrize(
    "query", ["route_any", "route_least_stations", "route_shortest_distance"]
)
def test_distance_routes_unknown_endpoint(line_network: RailNetwork, query: str) -> None:
    """Test unknown endpoints give the sentinel pair."""
    route = getattr(line_network, query)
    assert route("S1", "nope") == [(NO_STATION, NO_DISTANCE)]
    assert route("nope", "S1") == [(NO_STATION, NO_DISTANCE)]


@pytest.mark.parametrize(
    "query", ["route_any", "route_least_stations", "route_shortest_distance"]
)
def test_distance_routes_no_path(line_network: RailNetwork, query: str) -> None:
    """Test known endpoints without a route give an empty result."""
    route = getattr(line_network, query)
    assert route("S3", "S1") == []


@pytest.mark.parametrize(
    "query", ["route_any", "route_least_stations", "route_shortest_distance"]
)
def test_distance_routes_same_station(line_network: RailNetwork, query: str) -> None:
    """Test a route to the start station itself."""
    assert getattr(line_network, query)("S2", "S2") == [("S2", 0)]


@pytest.mark.parametrize(
    "query", ["route_any", "route_least_stations", "route_shortest_distance"]
)
def test_distance_routes_on_line(line_network: RailNetwork, query: str) -> None:
    """Test cumulative distances along a single line."""
    assert getattr(line_network, query)("S1", "S3") == [("S1", 0), ("S2", 5), ("S3", 10)]


# Breadth-first routes


@pytest.mark.parametrize("query", ["route_any", "route_least_stations"])
def test_breadth_first_routes_follow_edges(mesh_network: RailNetwork, query: str) -> None:
    """Test every hop of a route is served by a train."""
    for start in "ABCDEFG":
        for goal in "ABCDEFG":
            route = getattr(mesh_network, query)(start, goal)
            stations = [station_id for station_id, _ in route]
            for a, b in zip(stations, stations[1:]):
                assert _has_edge(mesh_network, a, b)


def test_least_stations_beats_every_path(mesh_network: RailNetwork) -> None:
    """Test the hop count matches the brute-force minimum."""
    for start in "ABCDEFG":
        for goal in "ABCDEFG":
            if start == goal:
                continue
            paths = _simple_paths(mesh_network, start, goal)
            route = mesh_network.route_least_stations(start, goal)
            if not paths:
                assert route == []
                continue
            assert len(route) == min(len(path) for path in paths)
            assert route[0] == (start, 0)
            assert route[-1][0] == goal


def test_least_stations_prefers_fewer_hops() -> None:
    """Test fewest hops wins over distance."""
    net = _detour_network()

    # 10 + hypot(3, 10) = 20.44
    assert net.route_least_stations("A", "D") == [("A", 0), ("E", 10), ("D", 20)]


# Shortest distance


def test_shortest_distance_prefers_short_hops() -> None:
    """Test distance wins over hop count."""
    net = _detour_network()

    assert net.route_shortest_distance("A", "D") == [("A", 0), ("B", 1), ("C", 2), ("D", 3)]


def test_shortest_distance_matches_brute_force(mesh_network: RailNetwork) -> None:
    """Test A* agrees with enumerating every simple path."""
    for start in "ABCDEFG":
        for goal in "ABCDEFG":
            if start == goal:
                continue
            paths = _simple_paths(mesh_network, start, goal)
            route = mesh_network.route_shortest_distance(start, goal)
            if not paths:
                assert route == []
                continue

            best = min(_path_length(mesh_network, path) for path in paths)
            stations = [station_id for station_id, _ in route]
            assert route[-1][1] == int(best)
            assert _path_length(mesh_network, stations) == pytest.approx(best)


def test_shortest_distance_reports_accumulated_distance(mesh_network: RailNetwork) -> None:
    """Test each entry holds the distance travelled so far."""
    route = mesh_network.route_shortest_distance("A", "G")
    stations = [station_id for station_id, _ in route]

    for i, (_, distance) in enumerate(route):
        assert distance == int(_path_length(mesh_network, stations[: i + 1]))


# Earliest arrival


def _timed_network() -> RailNetwork:
    net = RailNetwork()
    net.add_station("X", "X", Coord(0, 0))
    net.add_station("Y", "Y", Coord(1, 0))
    net.add_station("Z", "Z", Coord(2, 0))
    net.add_train("TA", [("X", 100), ("Y", 120), ("Z", 200)])
    net.add_train("TB", [("Y", 130), ("Z", 150)])
    net.add_train("TC", [("X", 90), ("Z", 400)])
    return net


def test_earliest_arrival_on_line(line_network: RailNetwork) -> None:
    """Test a single train, boarded after waiting at the start."""
    assert line_network.route_earliest_arrival("S1", "S3", 90) == [
        ("S1", 90),
        ("S2", 110),
        ("S3", 130),
    ]


def test_earliest_arrival_changes_trains() -> None:
    """Test a change of train beats staying on board."""
    net = _timed_network()

    assert net.route_earliest_arrival("X", "Z", 95) == [("X", 95), ("Y", 130), ("Z", 150)]


def test_earliest_arrival_uses_only_later_departures() -> None:
    """Test trains that already left are not used."""
    net = _timed_network()

    assert net.route_earliest_arrival("X", "Z", 80) == [("X", 80), ("Y", 130), ("Z", 150)]
    assert net.route_earliest_arrival("X", "Z", 101) == []
    assert net.route_earliest_arrival("Y", "Z", 131) == []


def test_earliest_arrival_takes_latest_fitting_departure() -> None:
    """Test the ridden departure is the latest that still makes the connection."""
    net = RailNetwork()
    net.add_station("X", "X", Coord(0, 0))
    net.add_station("Y", "Y", Coord(1, 0))
    net.add_station("Z", "Z", Coord(2, 0))
    net.add_train("Feeder", [("X", 100), ("Y", 110)])
    net.add_train("Slow", [("Y", 112), ("Z", 150)])
    net.add_train("Fast", [("Y", 130), ("Z", 150)])

    assert net.route_earliest_arrival("X", "Z", 90) == [("X", 90), ("Y", 130), ("Z", 150)]


def test_earliest_arrival_reports_departure_at_change() -> None:
    """Test a station where the route waits reports when it leaves, not when it arrived."""
    net = _timed_network()

    route = net.route_earliest_arrival("X", "Z", 95)

    # arrives at Y at 120 on TA, leaves on TB at 130
    assert route[1] == ("Y", 130)


def test_earliest_arrival_sentinels(line_network: RailNetwork) -> None:
    """Test unknown endpoints and trivial routes."""
    assert line_network.route_earliest_arrival("S1", "nope", 0) == [(NO_STATION, NO_TIME)]
    assert line_network.route_earliest_arrival("S1", "S1", 42) == [("S1", 42)]
    assert line_network.route_earliest_arrival("S3", "S1", 0) == []


def test_earliest_arrival_respects_timetable(mesh_network: RailNetwork) -> None:
    """Test every hop leaves after arriving and the arrival is the earliest possible."""
    for start in "ABCDEFG":
        for goal in "ABCDEFG":
            if start == goal:
                continue
            route = mesh_network.route_earliest_arrival(start, goal, 0)
            best = _brute_force_arrival(mesh_network, start, goal, 0)
            if best is None:
                assert route == []
                continue

            assert route[-1][1] == best
            last_hop = len(route) - 2
            for hop, ((a, at_a), (b, at_b)) in enumerate(zip(route, route[1:])):
                assert any(
                    edge.destination == b
                    and (edge.departure_time >= at_a if hop == 0 else edge.departure_time == at_a)
                    and (edge.arrival_time == at_b if hop == last_hop else edge.arrival_time <= at_b)
                    for edge in mesh_network.registry.edges_from(a)
                )


def _brute_force_arrival(network: RailNetwork, start: str, goal: str, time: int) -> int | None:
    best: int | None = None
    for path in _simple_paths(network, start, goal):
        now: float = time
        for a, b in zip(path, path[1:]):
            arrivals = [
                edge.arrival_time
                for edge in network.registry.edges_from(a)
                if edge.destination == b and edge.departure_time >= now
            ]
            now = min(arrivals, default=math.inf)
        if now != math.inf and (best is None or now < best):
            best = int(now)
    return best


# Cycles


def _cycle_network(*trains: list[tuple[str, int]]) -> RailNetwork:
    net = RailNetwork()
    for i, station_id in enumerate("SABCD"):
        net.add_station(station_id, station_id, Coord(i, i))
    for i, stops in enumerate(trains):
        net.add_train(f"T{i}", stops)
    return net


def test_route_with_cycle_triangle() -> None:
    """Test a loop back to the start."""
    net = _cycle_network([("A", 0), ("B", 1), ("C", 2), ("A", 3)])

    assert net.route_with_cycle("A") == ["A", "B", "C", "A"]


def test_route_with_cycle_away_from_start() -> None:
    """Test a loop reachable from, but not through, the start."""
    net = _cycle_network([("S", 0), ("A", 1), ("B", 2), ("C", 3), ("A", 4)])

    assert net.route_with_cycle("S") == ["S", "A", "B", "C", "A"]


def test_route_with_cycle_self_loop() -> None:
    """Test a train standing at one station twice."""
    net = _cycle_network([("A", 0), ("A", 5)])

    assert net.route_with_cycle("A") == ["A", "A"]


def test_route_with_cycle_diamond_has_no_cycle() -> None:
    """Test two branches meeting again is not a cycle."""
    net = _cycle_network(
        [("A", 0), ("B", 1), ("D", 2)],
        [("A", 0), ("C", 1), ("D", 2)],
    )

    assert net.route_with_cycle("A") == []


def test_route_with_cycle_outcomes(line_network: RailNetwork) -> None:
    """Test unknown start and acyclic network."""
    assert line_network.route_with_cycle("nope") == [NO_STATION]
    assert line_network.route_with_cycle("S1") == []


def test_route_with_cycle_result_shape() -> None:
    """Test the last station repeats one earlier in the route and is joined by edges."""
    net = _cycle_network(
        [("S", 0), ("A", 1), ("B", 2)],
        [("B", 3), ("C", 4), ("D", 5), ("B", 6)],
    )

    route = net.route_with_cycle("S")

    assert route[0] == "S"
    assert route[-1] in route[:-1]
    assert len(set(route[:-1])) == len(route) - 1
    for a, b in zip(route, route[1:]):
        assert _has_edge(net, a, b)


# Query isolation and removed stations


def test_queries_are_independent(mesh_network: RailNetwork) -> None:
    """Test earlier queries do not change later results."""
    fresh_distance = mesh_network.route_shortest_distance("A", "G")
    fresh_any = mesh_network.route_any("B", "G")

    mesh_network.route_earliest_arrival("A", "G", 0)
    mesh_network.route_with_cycle("A")
    mesh_network.route_least_stations("E", "G")

    assert mesh_network.route_shortest_distance("A", "G") == fresh_distance
    assert mesh_network.route_any("B", "G") == fresh_any


def test_removed_station_edges_are_skipped(line_network: RailNetwork) -> None:
    """Test dangling edges after a removal do not break searches."""
    assert line_network.remove_station("S2")

    assert line_network.registry.edges_from("S1") == [Edge(100, 110, "S2")]
    assert line_network.route_any("S1", "S3") == []
    assert line_network.route_shortest_distance("S1", "S3") == []
    assert line_network.route_earliest_arrival("S1", "S3", 0) == []
    assert line_network.route_with_cycle("S1") == []
    assert line_network.route_any("S1", "S2") == [(NO_STATION, NO_DISTANCE)]
