import pytest

from campus_guess.engine import RoundEngine
from campus_guess.models import BoundingBox, GeoCoordinate, Landmark, RoundPhase
from campus_guess.session import SessionRegistry

CAMPUS = BoundingBox(south_west=GeoCoordinate(40.4040, -86.9600), north_east=GeoCoordinate(40.4645, -86.8850))
UNION = Landmark(id="union", image_ref="/Union.jpg", true_position=GeoCoordinate(40.4231, -86.9215))


def _factory() -> RoundEngine:
    return RoundEngine([UNION], CAMPUS)


def test_sessions_do_not_share_round_state() -> None:
    registry = SessionRegistry(_factory)
    first = registry.open()
    second = registry.open()

    registry.get(first).start_round()
    registry.get(first).submit_guess(UNION.true_position)

    assert registry.get(first).current_phase() == RoundPhase.GUESSED
    assert registry.get(second).current_phase() == RoundPhase.IDLE
    assert registry.get(first) is not registry.get(second)
    assert len(registry) == 2


def test_get_or_create_reuses_engine_for_key() -> None:
    registry = SessionRegistry(_factory)

    engine = registry.get_or_create("player-1")

    assert registry.get_or_create("player-1") is engine
    assert "player-1" in registry


def test_close_and_unknown_keys() -> None:
    registry = SessionRegistry(_factory)
    key = registry.open()

    assert registry.close(key) is True
    assert registry.close(key) is False
    assert key not in registry
    with pytest.raises(KeyError):
        registry.get(key)
