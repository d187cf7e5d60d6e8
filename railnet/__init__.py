"""Railnet - In-memory railway network with region hierarchy and route queries."""

from railnet.api import RailNetwork
from railnet.network.models import (
    NO_COORD,
    NO_DISTANCE,
    NO_NAME,
    NO_REGION,
    NO_STATION,
    NO_TIME,
    NO_TRAIN,
    Coord,
    NetworkConfig,
)
from railnet.version import VERSION

__version__ = VERSION
__all__ = [
    "NO_COORD",
    "NO_DISTANCE",
    "NO_NAME",
    "NO_REGION",
    "NO_STATION",
    "NO_TIME",
    "NO_TRAIN",
    "VERSION",
    "Coord",
    "NetworkConfig",
    "RailNetwork",
]
