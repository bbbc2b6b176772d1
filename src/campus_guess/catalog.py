"""Landmark catalogs: the built-in campus set and JSON catalog files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError, InvalidCoordinateError
from .models import BoundingBox, GeoCoordinate, Landmark

DEFAULT_MAP_CENTER = GeoCoordinate(40.4237, -86.9212)

DEFAULT_CAMPUS_BOUNDS = BoundingBox(
    south_west=GeoCoordinate(40.4040, -86.9600),
    north_east=GeoCoordinate(40.4645, -86.8850),
)

DEFAULT_LANDMARKS: tuple[Landmark, ...] = (
    Landmark(
        id="purdue-arch",
        image_ref="/NewPurdueArch.jpg",
        true_position=GeoCoordinate(40.4311, -86.9164),
        name="Purdue Arch",
    ),
    Landmark(
        id="engineering-fountain",
        image_ref="/EngineeringFountain.jpg",
        true_position=GeoCoordinate(40.42864, -86.91379),
        name="Engineering Fountain",
    ),
)


@dataclass(frozen=True, slots=True)
class CampusCatalog:
    landmarks: tuple[Landmark, ...]
    bounds: BoundingBox


def default_catalog() -> CampusCatalog:
    return CampusCatalog(landmarks=DEFAULT_LANDMARKS, bounds=DEFAULT_CAMPUS_BOUNDS)


def _parse_pair(raw: object, *, field: str) -> GeoCoordinate:
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(f"{field} must be a [latitude, longitude] pair")
    try:
        return GeoCoordinate.from_pair(raw)
    except InvalidCoordinateError as exc:
        raise ConfigurationError(f"{field}: {exc}") from exc


def _parse_landmark(index: int, raw: object) -> Landmark:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"landmarks[{index}] must be an object")
    missing = [key for key in ("id", "image", "lat", "lng") if key not in raw]
    if missing:
        raise ConfigurationError(f"landmarks[{index}] is missing: {', '.join(missing)}")
    try:
        position = GeoCoordinate(raw["lat"], raw["lng"])
    except InvalidCoordinateError as exc:
        raise ConfigurationError(f"landmarks[{index}]: {exc}") from exc
    return Landmark(
        id=str(raw["id"]),
        image_ref=str(raw["image"]),
        true_position=position,
        name=raw.get("name"),
    )


def parse_catalog(payload: object) -> CampusCatalog:
    """Build a catalog from a decoded JSON document."""
    if not isinstance(payload, dict):
        raise ConfigurationError("Catalog document must be a JSON object")

    raw_landmarks = payload.get("landmarks")
    if not isinstance(raw_landmarks, list) or not raw_landmarks:
        raise ConfigurationError("Catalog must contain a non-empty 'landmarks' list")
    landmarks = tuple(_parse_landmark(index, raw) for index, raw in enumerate(raw_landmarks))
    seen: set[str] = set()
    for landmark in landmarks:
        if landmark.id in seen:
            raise ConfigurationError(f"Duplicate landmark id in catalog: {landmark.id}")
        seen.add(landmark.id)

    raw_bounds = payload.get("bounds")
    if raw_bounds is None:
        bounds = DEFAULT_CAMPUS_BOUNDS
    elif isinstance(raw_bounds, dict):
        bounds = BoundingBox(
            south_west=_parse_pair(raw_bounds.get("south_west"), field="bounds.south_west"),
            north_east=_parse_pair(raw_bounds.get("north_east"), field="bounds.north_east"),
        )
    else:
        raise ConfigurationError("'bounds' must be an object with south_west and north_east")

    return CampusCatalog(landmarks=landmarks, bounds=bounds)


def load_catalog(path: str | Path) -> CampusCatalog:
    catalog_path = Path(path).expanduser()
    if not catalog_path.exists():
        raise ConfigurationError(f"Catalog file does not exist: {catalog_path}")
    try:
        text = catalog_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Catalog file cannot be read: {catalog_path} ({exc})") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Catalog file is not valid JSON: {catalog_path} ({exc})") from exc
    return parse_catalog(payload)
