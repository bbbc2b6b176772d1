from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError, InvalidCoordinateError


class RoundPhase(str, Enum):
    """Lifecycle states of a single play round."""

    IDLE = "idle"
    AWAITING_GUESS = "awaiting_guess"
    GUESSED = "guessed"
    ANSWER_REVEALED = "answer_revealed"


class DistanceTier(str, Enum):
    """Coarse feedback bucket for a scored guess, ordered close < medium < far."""

    CLOSE = "close"
    MEDIUM = "medium"
    FAR = "far"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {DistanceTier.CLOSE: 0, DistanceTier.MEDIUM: 1, DistanceTier.FAR: 2}


def _checked_degrees(value: object, *, name: str, limit: float) -> float:
    if isinstance(value, bool):
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}")
    try:
        degrees = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(degrees):
        raise InvalidCoordinateError(f"{name} must be finite, got {degrees!r}")
    if not -limit <= degrees <= limit:
        raise InvalidCoordinateError(f"{name} {degrees} is outside [-{limit:g}, {limit:g}]")
    return degrees


@dataclass(frozen=True, slots=True)
class GeoCoordinate:
    """A WGS84 point in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", _checked_degrees(self.latitude, name="latitude", limit=90.0))
        object.__setattr__(self, "longitude", _checked_degrees(self.longitude, name="longitude", limit=180.0))

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> GeoCoordinate:
        """Build a coordinate from a ``(lat, lng)`` pair as delivered by map click events."""
        if isinstance(pair, (str, bytes)) or len(pair) != 2:
            raise InvalidCoordinateError(f"Expected a (latitude, longitude) pair, got {pair!r}")
        return cls(latitude=pair[0], longitude=pair[1])

    def as_pair(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Rectangular region constraining where guesses may be placed."""

    south_west: GeoCoordinate
    north_east: GeoCoordinate

    def __post_init__(self) -> None:
        if not (
            self.south_west.latitude < self.north_east.latitude
            and self.south_west.longitude < self.north_east.longitude
        ):
            raise ConfigurationError(
                f"Degenerate bounding box: south-west {self.south_west.as_pair()} "
                f"must be strictly below and left of north-east {self.north_east.as_pair()}"
            )


@dataclass(frozen=True, slots=True)
class Landmark:
    """Catalog entry pairing a display asset with its true location."""

    id: str
    image_ref: str
    true_position: GeoCoordinate
    name: str | None = None


@dataclass(slots=True)
class RoundState:
    """Mutable state of the round currently in play."""

    phase: RoundPhase = RoundPhase.IDLE
    active_landmark: Landmark | None = None
    guess: GeoCoordinate | None = None
    distance_km: float | None = None
