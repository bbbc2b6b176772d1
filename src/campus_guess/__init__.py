"""Campus landmark guessing game: round engine and geo scoring."""

from .engine import RoundEngine
from .errors import ConfigurationError, InvalidCoordinateError
from .geo import TierThresholds, classify_distance, distance_km, is_within_bounds
from .models import BoundingBox, DistanceTier, GeoCoordinate, Landmark, RoundPhase, RoundState

__all__ = [
    "BoundingBox",
    "ConfigurationError",
    "DistanceTier",
    "GeoCoordinate",
    "InvalidCoordinateError",
    "Landmark",
    "RoundEngine",
    "RoundPhase",
    "RoundState",
    "TierThresholds",
    "classify_distance",
    "distance_km",
    "is_within_bounds",
]
