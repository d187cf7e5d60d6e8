"""Network consistency validator."""

import logging

from railnet.network.models import NO_REGION, ValidationReport
from railnet.network.registry import EntityRegistry

logger = logging.getLogger(__name__)


class NetworkValidator:
    """Validate a registry for dangling references and broken invariants."""

    def __init__(self, registry: EntityRegistry) -> None:
        """Initialize validator with the registry to inspect."""
        self.registry = registry
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self) -> ValidationReport:
        """Run all validation checks."""
        logger.info("Validating network")

        self._validate_edges()
        self._validate_trains()
        self._validate_station_regions()
        self._validate_region_links()

        valid = len(self.errors) == 0

        stats = {
            "stations": len(self.registry.stations),
            "regions": len(self.registry.regions),
            "trains": len(self.registry.trains),
            "edges": sum(len(station.edges) for station in self.registry.stations.values()),
        }

        report = ValidationReport(
            valid=valid,
            errors=self.errors.copy(),
            warnings=self.warnings.copy(),
            stats=stats,
        )

        if not valid:
            logger.error(f"Validation failed with {len(self.errors)} errors")
        elif self.warnings:
            logger.warning(f"Validation passed with {len(self.warnings)} warnings")
        else:
            logger.info("Validation passed")

        return report

    def _validate_edges(self) -> None:
        """Edges must lead to existing stations and never go back in time."""
        for station in self.registry.stations.values():
            for edge in station.edges:
                if edge.destination not in self.registry.stations:
                    self.errors.append(
                        f"Edge {station.station_id} -> {edge.destination} "
                        f"leads to a removed station"
                    )
                if edge.arrival_time < edge.departure_time:
                    self.warnings.append(
                        f"Edge {station.station_id} -> {edge.destination} arrives at "
                        f"{edge.arrival_time} before departing at {edge.departure_time}"
                    )

    def _validate_trains(self) -> None:
        """Train stops should still exist."""
        for train in self.registry.trains.values():
            for station_id, _ in train.stops:
                if station_id not in self.registry.stations:
                    self.warnings.append(
                        f"Train {train.train_id} stops at removed station {station_id}"
                    )

    def _validate_station_regions(self) -> None:
        for station in self.registry.stations.values():
            if station.region != NO_REGION and station.region not in self.registry.regions:
                self.errors.append(
                    f"Station {station.station_id} belongs to unknown region {station.region}"
                )

    def _validate_region_links(self) -> None:
        """Parent and child links must agree and never loop."""
        regions = self.registry.regions

        for region in regions.values():
            if region.parent != NO_REGION:
                parent = regions.get(region.parent)
                if parent is None:
                    self.errors.append(
                        f"Region {region.region_id} has unknown parent {region.parent}"
                    )
                elif region.region_id not in parent.children:
                    self.errors.append(
                        f"Region {region.parent} does not list child {region.region_id}"
                    )

            seen = {region.region_id}
            parent_id = region.parent
            while parent_id in regions:
                if parent_id in seen:
                    self.errors.append(f"Region {region.region_id} is inside a parent cycle")
                    break
                seen.add(parent_id)
                parent_id = regions[parent_id].parent
