"""Region containment hierarchy."""

import logging

from railnet.network.models import NO_REGION, Region, RegionID, StationID
from railnet.network.registry import EntityRegistry

logger = logging.getLogger(__name__)


class RegionHierarchy:
    """Tree operations over the regions of a registry."""

    def __init__(self, registry: EntityRegistry, prevent_cycles: bool = True) -> None:
        """
        Initialize hierarchy over a registry.

        Args:
            registry: Registry holding the regions and stations
            prevent_cycles: Reject links that would make a region its own ancestor.
                When off, only the "child already has a parent" check applies and
                callers are responsible for keeping the hierarchy acyclic.
        """
        self.registry = registry
        self.prevent_cycles = prevent_cycles

    def add_subregion_to_region(self, region_id: RegionID, parent_id: RegionID) -> bool:
        """Make one region a subregion of another."""
        region = self.registry.get_region(region_id)
        parent = self.registry.get_region(parent_id)
        if region is None or parent is None or region.parent != NO_REGION:
            return False

        if self.prevent_cycles and region_id in self._containment_chain(parent):
            logger.warning(
                f"Region {parent_id} is inside region {region_id}, "
                f"refusing to make it the parent"
            )
            return False

        parent.children.add(region_id)
        region.parent = parent_id
        logger.debug(f"Region {region_id} is now a subregion of {parent_id}")
        return True

    def assign_station_to_region(self, station_id: StationID, region_id: RegionID) -> bool:
        """Place a station inside a region, once."""
        station = self.registry.get_station(station_id)
        if station is None or not self.registry.has_region(region_id):
            return False
        if station.region != NO_REGION:
            return False

        station.region = region_id
        return True

    def station_in_regions(self, station_id: StationID) -> list[RegionID]:
        """Every region containing a station, nearest first."""
        station = self.registry.get_station(station_id)
        if station is None:
            return [NO_REGION]

        region = self.registry.get_region(station.region)
        if region is None:
            return []

        return self._containment_chain(region)

    def all_subregions_of_region(self, region_id: RegionID) -> list[RegionID]:
        """Every descendant of a region in depth-first pre-order."""
        region = self.registry.get_region(region_id)
        if region is None:
            return [NO_REGION]

        result: list[RegionID] = []
        seen = {region_id}
        stack = sorted(region.children, reverse=True)
        while stack:
            child_id = stack.pop()
            if child_id in seen:
                continue
            seen.add(child_id)
            result.append(child_id)
            child = self.registry.get_region(child_id)
            if child is not None:
                stack.extend(sorted(child.children, reverse=True))

        return result

    def common_parent_of_regions(self, first_id: RegionID, second_id: RegionID) -> RegionID:
        """
        Nearest region containing both regions.

        A region counts as containing itself, so when one region lies inside
        the other the outer one is returned.
        """
        first = self.registry.get_region(first_id)
        second = self.registry.get_region(second_id)
        if first is None or second is None:
            return NO_REGION

        if first.parent == second.parent:
            return first.parent

        second_chain = set(self._containment_chain(second))
        for region_id in self._containment_chain(first):
            if region_id in second_chain:
                return region_id

        return NO_REGION

    def _containment_chain(self, region: Region) -> list[RegionID]:
        """The region followed by its ancestors, nearest first."""
        chain = [region.region_id]
        seen = {region.region_id}
        parent = self.registry.get_region(region.parent)
        while parent is not None and parent.region_id not in seen:
            chain.append(parent.region_id)
            seen.add(parent.region_id)
            parent = self.registry.get_region(parent.parent)
        return chain
