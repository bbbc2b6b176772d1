"""CLI startup entrypoint for Campus Guess."""

from __future__ import annotations

import logging

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler

from campus_guess.cli import CliRoundHandler, RoundView
from campus_guess.config import LOG_LEVELS, build_catalog, build_engine, settings
from campus_guess.errors import ConfigurationError, InvalidCoordinateError
from campus_guess.geo import TierThresholds, classify_distance, distance_km, is_within_bounds
from campus_guess.models import GeoCoordinate

app = typer.Typer(help="Campus Guess: find the landmark on the campus map")

_PROMPT = "Guess 'lat, lng' | r = reveal answer | n = new round | q = quit"


@app.callback()
def configure(log_level: str = typer.Option(None, help="Override CAMPUS_GUESS_LOG_LEVEL")) -> None:
    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        print({"error": f"Unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}"})
        raise typer.Exit(code=1)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _render(view: RoundView) -> None:
    print(
        {
            "phase": view.phase.value,
            "image": view.image_ref,
            "guess": view.guess.as_pair() if view.guess else None,
            "distance_km": view.distance_km,
            "tier": view.tier.value if view.tier else None,
            "answer": view.true_position.as_pair() if view.true_position else None,
        }
    )
    print(f"[{view.color}]{view.message}[/]")


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "catalog_path": settings.catalog_path or "built-in",
            "close_threshold_km": settings.close_threshold_km,
            "medium_threshold_km": settings.medium_threshold_km,
            "distance_precision": settings.distance_precision,
            "allow_multiple_guesses": settings.allow_multiple_guesses,
        }
    )


@app.command("catalog")
def list_catalog() -> None:
    """List the landmarks and the legal guess region."""
    try:
        catalog = build_catalog(settings)
    except ConfigurationError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    print(
        {
            "bounds": {
                "south_west": catalog.bounds.south_west.as_pair(),
                "north_east": catalog.bounds.north_east.as_pair(),
            },
            "landmarks": [
                {"id": item.id, "name": item.name, "image": item.image_ref} for item in catalog.landmarks
            ],
        }
    )


@app.command()
def distance(
    from_lat: float = typer.Option(..., help="Latitude of the first point"),
    from_lng: float = typer.Option(..., help="Longitude of the first point"),
    to_lat: float = typer.Option(..., help="Latitude of the second point"),
    to_lng: float = typer.Option(..., help="Longitude of the second point"),
) -> None:
    """Great-circle distance and feedback tier between two points."""
    try:
        thresholds = TierThresholds(close_km=settings.close_threshold_km, medium_km=settings.medium_threshold_km)
        a = GeoCoordinate(from_lat, from_lng)
        b = GeoCoordinate(to_lat, to_lng)
        catalog = build_catalog(settings)
    except (ConfigurationError, InvalidCoordinateError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    km = round(distance_km(a, b), settings.distance_precision)
    print(
        {
            "distance_km": km,
            "tier": classify_distance(km, thresholds).value,
            "within_bounds": [is_within_bounds(a, catalog.bounds), is_within_bounds(b, catalog.bounds)],
        }
    )


@app.command()
def play(seed: int = typer.Option(None, help="Seed for reproducible landmark selection")) -> None:
    """Play rounds interactively in the terminal."""
    if seed is not None:
        settings_for_run = settings.model_copy(update={"rng_seed": seed})
    else:
        settings_for_run = settings
    try:
        engine = build_engine(settings_for_run)
    except ConfigurationError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    handler = CliRoundHandler(engine)
    _render(handler.new_round())

    while True:
        answer = typer.prompt(_PROMPT).strip().lower()
        if answer in ("q", "quit"):
            print({"game": "stopped"})
            break
        if answer in ("n", "new"):
            view = handler.new_round()
        elif answer in ("r", "reveal"):
            view = handler.reveal()
        else:
            try:
                view = handler.guess(answer)
            except InvalidCoordinateError as exc:
                print({"error": str(exc)})
                continue
        _render(view)


if __name__ == "__main__":
    app()
