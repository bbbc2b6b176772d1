from __future__ import annotations

from pathlib import Path

import pytest

from campus_guess.cli import GUESS_HINT, START_HINT, CliRoundHandler, parse_guess
from campus_guess.engine import RoundEngine
from campus_guess.errors import InvalidCoordinateError
from campus_guess.models import BoundingBox, DistanceTier, GeoCoordinate, Landmark, RoundPhase

CAMPUS = BoundingBox(south_west=GeoCoordinate(40.4040, -86.9600), north_east=GeoCoordinate(40.4645, -86.8850))
ARCH = Landmark(id="arch", image_ref="/NewPurdueArch.jpg", true_position=GeoCoordinate(40.4311, -86.9164))


def test_help_lists_game_commands() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app

    result = typer_testing.CliRunner().invoke(app, ["--help"], env={"COLUMNS": "240"})

    assert result.exit_code == 0
    for command in ("start", "catalog", "distance", "play"):
        assert command in result.stdout


def test_parse_guess_accepts_comma_or_space() -> None:
    assert parse_guess("40.43, -86.92") == GeoCoordinate(40.43, -86.92)
    assert parse_guess(" 40.43 -86.92 ") == GeoCoordinate(40.43, -86.92)

    with pytest.raises(InvalidCoordinateError):
        parse_guess("40.43")
    with pytest.raises(InvalidCoordinateError):
        parse_guess("north, west")
    with pytest.raises(InvalidCoordinateError):
        parse_guess("91, 0")


def test_handler_views_follow_the_round() -> None:
    handler = CliRoundHandler(RoundEngine([ARCH], CAMPUS))

    idle = handler.view()
    assert idle.phase == RoundPhase.IDLE
    assert idle.message == START_HINT
    assert idle.color == "#9ca3af"

    awaiting = handler.new_round()
    assert awaiting.image_ref == "/NewPurdueArch.jpg"
    assert awaiting.message == GUESS_HINT
    assert awaiting.can_reveal is False

    guessed = handler.guess("40.42864, -86.91379")
    assert guessed.tier == DistanceTier.MEDIUM
    assert guessed.color == "#FFC107"
    assert guessed.message.startswith("Distance from actual location: 0.35")
    assert guessed.can_reveal is True
    assert guessed.true_position is None

    revealed = handler.reveal()
    assert revealed.phase == RoundPhase.ANSWER_REVEALED
    assert revealed.true_position == ARCH.true_position
    assert revealed.guess == GeoCoordinate(40.42864, -86.91379)


def test_cli_catalog_lists_builtin_landmarks() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app

    result = typer_testing.CliRunner().invoke(app, ["catalog"])

    assert result.exit_code == 0
    assert "purdue-arch" in result.stdout
    assert "engineering-fountain" in result.stdout


def test_cli_catalog_reports_bad_catalog_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app, settings

    monkeypatch.setattr(settings, "catalog_path", str(tmp_path / "missing.json"))

    result = typer_testing.CliRunner().invoke(app, ["catalog"], env={"COLUMNS": "240"})

    assert result.exit_code == 1
    assert "does not exist" in result.stdout


def test_cli_distance_between_points() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        [
            "distance",
            "--from-lat=40.4311",
            "--from-lng=-86.9164",
            "--to-lat=40.42864",
            "--to-lng=-86.91379",
        ],
    )

    assert result.exit_code == 0
    assert "0.35" in result.stdout
    assert "medium" in result.stdout


def test_cli_distance_rejects_invalid_latitude() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        ["distance", "--from-lat=95", "--from-lng=0", "--to-lat=0", "--to-lng=0"],
    )

    assert result.exit_code == 1
    assert "latitude" in result.stdout


def test_cli_play_round(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app, settings

    catalog = tmp_path / "catalog.json"
    catalog.write_text(
        '{"landmarks": [{"id": "arch", "image": "/NewPurdueArch.jpg", "lat": 40.4311, "lng": -86.9164}]}',
        encoding="utf-8",
    )
    monkeypatch.setattr(settings, "catalog_path", str(catalog))

    result = typer_testing.CliRunner().invoke(
        app,
        ["play", "--seed", "4"],
        input="r\nsomewhere\n40.4311, -86.9164\nr\nq\n",
    )

    assert result.exit_code == 0
    assert "/NewPurdueArch.jpg" in result.stdout
    assert "Expected" in result.stdout
    assert "Distance from actual location: 0.0 km" in result.stdout
    assert "answer_revealed" in result.stdout
    assert "stopped" in result.stdout


def test_cli_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from campus_guess.main import app, settings

    runner = typer_testing.CliRunner()
    from_option = runner.invoke(app, ["--log-level", "loud", "catalog"], env={"COLUMNS": "240"})

    monkeypatch.setattr(settings, "log_level", "verbose")
    from_settings = runner.invoke(app, ["catalog"], env={"COLUMNS": "240"})

    assert from_option.exit_code == 1
    assert "Unknown log level 'LOUD'" in from_option.stdout
    assert from_settings.exit_code == 1
    assert "Unknown log level 'VERBOSE'" in from_settings.stdout
