"""Round state machine: landmark selection, guess scoring and answer reveal."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from .errors import ConfigurationError
from .geo import TierThresholds, as_coordinate, classify_distance, distance_km, is_within_bounds
from .models import BoundingBox, DistanceTier, GeoCoordinate, Landmark, RoundPhase, RoundState


class RoundEngine:
    """Owns the state of one player's session and drives it through each round.

    Operations called in a phase where they do not apply are no-ops, so a
    presentation layer can forward every click and button press without
    checking the phase first.
    """

    def __init__(
        self,
        catalog: Sequence[Landmark],
        bounds: BoundingBox,
        *,
        thresholds: TierThresholds | None = None,
        distance_precision: int = 3,
        allow_multiple_guesses: bool = False,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        landmarks = tuple(catalog)
        if not landmarks:
            raise ConfigurationError("Landmark catalog must contain at least one entry")
        seen: set[str] = set()
        for landmark in landmarks:
            if landmark.id in seen:
                raise ConfigurationError(f"Duplicate landmark id in catalog: {landmark.id}")
            seen.add(landmark.id)
        if distance_precision < 0:
            raise ConfigurationError(f"distance_precision must be >= 0, got {distance_precision}")

        self._catalog = landmarks
        self._bounds = bounds
        self._thresholds = thresholds or TierThresholds()
        self._distance_precision = distance_precision
        self._allow_multiple_guesses = allow_multiple_guesses
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger("campus_guess.engine")
        self._state = RoundState()

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def catalog(self) -> tuple[Landmark, ...]:
        return self._catalog

    @property
    def bounds(self) -> BoundingBox:
        return self._bounds

    @property
    def thresholds(self) -> TierThresholds:
        return self._thresholds

    def start_round(self, seed: int | None = None) -> Landmark:
        """Pick a landmark at random and wait for a guess, discarding any round in progress."""
        rng = random.Random(seed) if seed is not None else self._rng
        landmark = self._catalog[rng.randrange(len(self._catalog))]

        previous = self._state.phase
        self._state.active_landmark = landmark
        self._state.guess = None
        self._state.distance_km = None
        self._state.phase = RoundPhase.AWAITING_GUESS
        self._logger.info(
            "round_started",
            extra={"landmark_id": landmark.id, "previous_phase": previous.value},
        )
        return landmark

    def submit_guess(self, point: GeoCoordinate | Sequence[float]) -> bool:
        """Record and score a guess. Returns False when the guess was ignored."""
        guess = as_coordinate(point)

        landmark = self._state.active_landmark
        if landmark is None or not self._accepts_guess():
            self._logger.debug("guess_ignored", extra={"phase": self._state.phase.value})
            return False

        if not is_within_bounds(guess, self._bounds):
            self._logger.warning(
                "guess_out_of_bounds",
                extra={"latitude": guess.latitude, "longitude": guess.longitude},
            )

        km = round(distance_km(guess, landmark.true_position), self._distance_precision)
        self._state.guess = guess
        self._state.distance_km = km
        self._state.phase = RoundPhase.GUESSED
        self._logger.info(
            "guess_scored",
            extra={
                "landmark_id": landmark.id,
                "distance_km": km,
                "tier": classify_distance(km, self._thresholds).value,
            },
        )
        return True

    def reveal_answer(self) -> GeoCoordinate | None:
        """Expose the true position once a guess exists; otherwise do nothing."""
        landmark = self._state.active_landmark
        if landmark is None or self._state.phase is not RoundPhase.GUESSED or self._state.guess is None:
            self._logger.debug("reveal_ignored", extra={"phase": self._state.phase.value})
            return None

        self._state.phase = RoundPhase.ANSWER_REVEALED
        self._logger.info(
            "answer_revealed",
            extra={"landmark_id": landmark.id, "distance_km": self._state.distance_km},
        )
        return landmark.true_position

    def current_phase(self) -> RoundPhase:
        return self._state.phase

    def current_landmark_image(self) -> str | None:
        landmark = self._state.active_landmark
        return landmark.image_ref if landmark else None

    def current_guess(self) -> GeoCoordinate | None:
        return self._state.guess

    def current_distance_km(self) -> float | None:
        return self._state.distance_km

    def current_tier(self) -> DistanceTier | None:
        if self._state.distance_km is None:
            return None
        return classify_distance(self._state.distance_km, self._thresholds)

    def revealed_position(self) -> GeoCoordinate | None:
        """True position of the active landmark, available only after the reveal."""
        if self._state.phase is not RoundPhase.ANSWER_REVEALED or self._state.active_landmark is None:
            return None
        return self._state.active_landmark.true_position

    def guess_within_bounds(self) -> bool | None:
        if self._state.guess is None:
            return None
        return is_within_bounds(self._state.guess, self._bounds)

    def _accepts_guess(self) -> bool:
        if self._state.phase is RoundPhase.AWAITING_GUESS:
            return True
        return self._allow_multiple_guesses and self._state.phase is RoundPhase.GUESSED
