"""Great-circle distance, bounds tests and distance tiers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import ConfigurationError, InvalidCoordinateError
from .models import BoundingBox, DistanceTier, GeoCoordinate

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True, slots=True)
class TierThresholds:
    """Upper bounds (exclusive) of the close and medium tiers, in kilometers."""

    close_km: float = 0.2
    medium_km: float = 0.5

    def __post_init__(self) -> None:
        if not (math.isfinite(self.close_km) and math.isfinite(self.medium_km)):
            raise ConfigurationError("Tier thresholds must be finite")
        if not 0 <= self.close_km <= self.medium_km:
            raise ConfigurationError(
                f"Tier thresholds must satisfy 0 <= close ({self.close_km}) <= medium ({self.medium_km})"
            )


def as_coordinate(value: GeoCoordinate | Sequence[float]) -> GeoCoordinate:
    """Accept either a coordinate or a ``(lat, lng)`` pair."""
    if isinstance(value, GeoCoordinate):
        return value
    try:
        return GeoCoordinate.from_pair(value)
    except TypeError as exc:
        raise InvalidCoordinateError(f"Cannot interpret {value!r} as a coordinate") from exc


def distance_km(a: GeoCoordinate | Sequence[float], b: GeoCoordinate | Sequence[float]) -> float:
    """
    Haversine distance in kilometers between two points on a spherical earth.
    """
    a = as_coordinate(a)
    b = as_coordinate(b)
    if a == b:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlng = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # rounding can push h just past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def is_within_bounds(point: GeoCoordinate | Sequence[float], box: BoundingBox) -> bool:
    """Inclusive rectangle test. Boxes crossing the antimeridian are not supported."""
    point = as_coordinate(point)
    return (
        box.south_west.latitude <= point.latitude <= box.north_east.latitude
        and box.south_west.longitude <= point.longitude <= box.north_east.longitude
    )


def classify_distance(km: float, thresholds: TierThresholds | None = None) -> DistanceTier:
    thresholds = thresholds or TierThresholds()
    if not math.isfinite(km) or km < 0:
        raise ValueError(f"Distance must be a finite non-negative number, got {km!r}")
    if km < thresholds.close_km:
        return DistanceTier.CLOSE
    if km < thresholds.medium_km:
        return DistanceTier.MEDIUM
    return DistanceTier.FAR
