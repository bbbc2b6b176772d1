"""Per-session engine isolation for hosts serving several players."""

from __future__ import annotations

import logging
from typing import Callable
from uuid import uuid4

from .engine import RoundEngine


class SessionRegistry:
    """Keeps one independent ``RoundEngine`` per session key."""

    def __init__(self, factory: Callable[[], RoundEngine], *, logger: logging.Logger | None = None) -> None:
        self._factory = factory
        self._engines: dict[str, RoundEngine] = {}
        self._logger = logger or logging.getLogger("campus_guess.session")

    def open(self) -> str:
        """Create a session with a fresh engine and return its key."""
        key = uuid4().hex
        self._engines[key] = self._factory()
        self._logger.info("session_opened", extra={"session_key": key, "sessions": len(self._engines)})
        return key

    def get(self, key: str) -> RoundEngine:
        if key not in self._engines:
            raise KeyError(f"Unknown session key: {key}")
        return self._engines[key]

    def get_or_create(self, key: str) -> RoundEngine:
        if key not in self._engines:
            self._engines[key] = self._factory()
            self._logger.info("session_opened", extra={"session_key": key, "sessions": len(self._engines)})
        return self._engines[key]

    def close(self, key: str) -> bool:
        if self._engines.pop(key, None) is None:
            return False
        self._logger.info("session_closed", extra={"session_key": key, "sessions": len(self._engines)})
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._engines

    def __len__(self) -> int:
        return len(self._engines)
