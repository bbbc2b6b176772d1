"""CLI-side handler wrapper and render snapshots for the terminal game."""

from __future__ import annotations

from dataclasses import dataclass

from campus_guess.engine import RoundEngine
from campus_guess.errors import InvalidCoordinateError
from campus_guess.geo import as_coordinate
from campus_guess.models import DistanceTier, GeoCoordinate, RoundPhase

TIER_COLORS: dict[DistanceTier | None, str] = {
    None: "#9ca3af",
    DistanceTier.CLOSE: "#4CAF50",
    DistanceTier.MEDIUM: "#FFC107",
    DistanceTier.FAR: "#F44336",
}

START_HINT = "Start a round to reveal a landmark image."
GUESS_HINT = "Click anywhere on the map to place your guess!"


@dataclass(slots=True)
class RoundView:
    """Everything a presentation layer needs to draw the current round."""

    phase: RoundPhase
    image_ref: str | None
    guess: GeoCoordinate | None
    distance_km: float | None
    tier: DistanceTier | None
    color: str
    true_position: GeoCoordinate | None
    can_reveal: bool
    message: str


def parse_guess(text: str) -> GeoCoordinate:
    """Parse ``"lat, lng"`` (comma or whitespace separated) into a coordinate."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise InvalidCoordinateError(f"Expected 'latitude, longitude', got {text!r}")
    try:
        values = [float(part) for part in parts]
    except ValueError as exc:
        raise InvalidCoordinateError(f"Expected numeric latitude and longitude, got {text!r}") from exc
    return as_coordinate(values)


class CliRoundHandler:
    """Simple text-command facade over a round engine."""

    def __init__(self, engine: RoundEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> RoundEngine:
        return self._engine

    def new_round(self) -> RoundView:
        self._engine.start_round()
        return self.view()

    def guess(self, text: str) -> RoundView:
        self._engine.submit_guess(parse_guess(text))
        return self.view()

    def reveal(self) -> RoundView:
        self._engine.reveal_answer()
        return self.view()

    def view(self) -> RoundView:
        engine = self._engine
        phase = engine.current_phase()
        distance = engine.current_distance_km()
        tier = engine.current_tier()

        if phase is RoundPhase.IDLE:
            message = START_HINT
        elif distance is None:
            message = GUESS_HINT
        else:
            message = f"Distance from actual location: {distance} km"

        return RoundView(
            phase=phase,
            image_ref=engine.current_landmark_image(),
            guess=engine.current_guess(),
            distance_km=distance,
            tier=tier,
            color=TIER_COLORS[tier],
            true_position=engine.revealed_position(),
            can_reveal=phase is RoundPhase.GUESSED,
            message=message,
        )
