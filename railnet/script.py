"""Command script runner for building and querying a network from text."""

import logging
import shlex
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TextIO

from railnet.api import RailNetwork
from railnet.network.models import Coord, StationID, Time

logger = logging.getLogger(__name__)

Handler = Callable[[list[str]], Any]


def _to_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid {what}: {value!r}") from None


def _to_stop(value: str) -> tuple[StationID, Time]:
    station_id, sep, time = value.rpartition(":")
    if not sep or not station_id:
        raise ValueError(f"Invalid stop {value!r}, expected STATION:TIME")
    return station_id, _to_int(time, "time")


class ScriptRunner:
    """
    Execute network commands, one per line.

    Lines are split like a shell command line and ``#`` starts a comment.
    Mutations print ``ok`` or ``failed``; queries print one result per line.
    Malformed lines raise ValueError naming the line number.
    """

    def __init__(self, network: RailNetwork, output: TextIO | None = None) -> None:
        """Initialize runner for a network, printing to output (stdout by default)."""
        self.network = network
        self.output = output if output is not None else sys.stdout

        # name -> (minimum args, maximum args or None, handler)
        self._commands: dict[str, tuple[int, int | None, Handler]] = {
            "station": (4, 4, self._station),
            "move_station": (3, 3, self._move_station),
            "remove_station": (1, 1, lambda a: self.network.remove_station(a[0])),
            "station_info": (1, 1, self._station_info),
            "stations": (0, 0, lambda a: self.network.stations_alphabetically()),
            "stations_by_distance": (0, 0, lambda a: self.network.stations_distance_increasing()),
            "find_station": (2, 2, lambda a: self.network.find_station_with_coord(self._coord(a))),
            "closest": (2, 2, lambda a: self.network.stations_closest_to(self._coord(a))),
            "departure": (3, 3, self._departure),
            "remove_departure": (3, 3, self._remove_departure),
            "departures": (2, 2, self._departures),
            "region": (4, None, self._region),
            "subregion": (2, 2, self._subregion),
            "station_region": (2, 2, self._station_region),
            "regions_of": (1, 1, lambda a: self.network.station_in_regions(a[0])),
            "subregions": (
                1,
                1,
                lambda a: self.network.all_subregions_of_region(_to_int(a[0], "region id")),
            ),
            "common_parent": (2, 2, self._common_parent),
            "train": (1, None, self._train),
            "next_stations": (1, 1, lambda a: self.network.next_stations_from(a[0])),
            "stations_after": (2, 2, lambda a: self.network.stations_after(a[0], a[1])),
            "clear_trains": (0, 0, lambda a: self.network.clear_trains()),
            "clear_all": (0, 0, lambda a: self.network.clear_all()),
            "count": (0, 0, lambda a: self.network.station_count()),
            "route_any": (2, 2, lambda a: self.network.route_any(a[0], a[1])),
            "route_least_stations": (2, 2, lambda a: self.network.route_least_stations(a[0], a[1])),
            "route_shortest_distance": (
                2,
                2,
                lambda a: self.network.route_shortest_distance(a[0], a[1]),
            ),
            "route_earliest_arrival": (3, 3, self._route_earliest_arrival),
            "route_with_cycle": (1, 1, lambda a: self.network.route_with_cycle(a[0])),
            "validate": (0, 0, self._validate),
        }

    def run_file(self, script_path: str) -> int:
        """Run every command in a script file; returns the number of commands run."""
        path = Path(script_path)
        if not path.is_file():
            raise ValueError(f"Script not found: {script_path}")

        logger.info(f"Running script {path}")
        with open(path, encoding="utf-8") as f:
            return self.run_lines(f)

    def run_lines(self, lines: Iterable[str]) -> int:
        """Run commands from lines of text; returns the number of commands run."""
        executed = 0
        for line_number, line in enumerate(lines, start=1):
            try:
                tokens = shlex.split(line, comments=True)
                if not tokens:
                    continue
                self.execute(tokens)
            except ValueError as e:
                raise ValueError(f"Line {line_number}: {e}") from e
            executed += 1

        logger.info(f"Executed {executed} commands")
        return executed

    def execute(self, tokens: list[str]) -> None:
        """Run one tokenized command and print its result."""
        name, args = tokens[0], tokens[1:]
        if name not in self._commands:
            raise ValueError(f"Unknown command: {name}")

        min_args, max_args, handler = self._commands[name]
        if len(args) < min_args or (max_args is not None and len(args) > max_args):
            raise ValueError(f"Wrong number of arguments for {name}: {len(args)}")

        logger.debug(f"Executing {name} {args}")
        self._print_result(handler(args))

    def _print_result(self, result: Any) -> None:
        if result is None:
            return
        if isinstance(result, bool):
            print("ok" if result else "failed", file=self.output)
        elif isinstance(result, list):
            if not result:
                print("(none)", file=self.output)
            for item in result:
                print(self._format(item), file=self.output)
        else:
            print(self._format(result), file=self.output)

    def _format(self, item: Any) -> str:
        if isinstance(item, tuple):
            return " ".join(self._format(part) for part in item)
        if isinstance(item, Coord):
            return f"({item.x},{item.y})"
        return str(item)

    def _coord(self, args: list[str]) -> Coord:
        return Coord(_to_int(args[0], "x coordinate"), _to_int(args[1], "y coordinate"))

    def _station(self, args: list[str]) -> bool:
        return self.network.add_station(args[0], args[1], self._coord(args[2:4]))

    def _move_station(self, args: list[str]) -> bool:
        return self.network.set_station_coordinates(args[0], self._coord(args[1:3]))

    def _station_info(self, args: list[str]) -> tuple[str, Coord]:
        station_id = args[0]
        return (
            self.network.get_station_name(station_id),
            self.network.get_station_coordinates(station_id),
        )

    def _departure(self, args: list[str]) -> bool:
        return self.network.add_departure(args[0], args[1], _to_int(args[2], "time"))

    def _remove_departure(self, args: list[str]) -> bool:
        return self.network.remove_departure(args[0], args[1], _to_int(args[2], "time"))

    def _departures(self, args: list[str]) -> list[tuple[Time, str]]:
        return self.network.departures_after(args[0], _to_int(args[1], "time"))

    def _region(self, args: list[str]) -> bool:
        region_id = _to_int(args[0], "region id")
        corners = args[2:]
        if len(corners) % 2:
            raise ValueError("Region polygon needs an x and y for every corner")
        polygon = [self._coord(corners[i : i + 2]) for i in range(0, len(corners), 2)]
        return self.network.add_region(region_id, args[1], polygon)

    def _subregion(self, args: list[str]) -> bool:
        return self.network.add_subregion_to_region(
            _to_int(args[0], "region id"), _to_int(args[1], "region id")
        )

    def _station_region(self, args: list[str]) -> bool:
        return self.network.assign_station_to_region(args[0], _to_int(args[1], "region id"))

    def _common_parent(self, args: list[str]) -> int:
        return self.network.common_parent_of_regions(
            _to_int(args[0], "region id"), _to_int(args[1], "region id")
        )

    def _train(self, args: list[str]) -> bool:
        stops = [_to_stop(value) for value in args[1:]]
        return self.network.add_train(args[0], stops)

    def _route_earliest_arrival(self, args: list[str]) -> list[tuple[StationID, Time]]:
        return self.network.route_earliest_arrival(args[0], args[1], _to_int(args[2], "time"))

    def _validate(self, args: list[str]) -> list[str]:
        report = self.network.validate()
        lines = [f"valid {report.valid}"]
        lines.extend(f"error {error}" for error in report.errors)
        lines.extend(f"warning {warning}" for warning in report.warnings)
        return lines
