"""Error types raised by the game core."""


class ConfigurationError(ValueError):
    """Raised at construction time when the catalog, bounds or scoring setup is unusable."""


class InvalidCoordinateError(ValueError):
    """Raised when a latitude/longitude is not finite or falls outside its valid range."""
