"""Runtime configuration for Campus Guess."""

from __future__ import annotations

import random

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog import CampusCatalog, default_catalog, load_catalog
from .engine import RoundEngine
from .geo import TierThresholds


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="CAMPUS_GUESS_", env_file=".env", extra="ignore")

    app_name: str = "campus-guess"
    log_level: str = "WARNING"
    catalog_path: str | None = Field(
        default=None,
        description="JSON landmark catalog; the built-in campus catalog is used when unset.",
    )
    close_threshold_km: float = Field(default=0.2, ge=0)
    medium_threshold_km: float = Field(default=0.5, ge=0)
    distance_precision: int = Field(default=3, ge=0)
    allow_multiple_guesses: bool = False
    rng_seed: int | None = None


def build_catalog(config: Settings) -> CampusCatalog:
    if config.catalog_path:
        return load_catalog(config.catalog_path)
    return default_catalog()


def build_engine(config: Settings, catalog: CampusCatalog | None = None) -> RoundEngine:
    catalog = catalog or build_catalog(config)
    return RoundEngine(
        catalog.landmarks,
        catalog.bounds,
        thresholds=TierThresholds(close_km=config.close_threshold_km, medium_km=config.medium_threshold_km),
        distance_precision=config.distance_precision,
        allow_multiple_guesses=config.allow_multiple_guesses,
        rng=random.Random(config.rng_seed),
    )


settings = Settings()
