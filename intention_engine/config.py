"""Engine settings with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Mapping, Optional

_ENV_PREFIX = "INTENTION_ENGINE_"
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class EngineSettings:
    """Knobs shared by the report builder and the CLI.

    ``tz=None`` buckets events in the process's local timezone.
    """

    top_limit: int = 5
    similarity_threshold: float = 0.4
    from_timestamp: Optional[int] = None
    tz: Optional[tzinfo] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.top_limit < 0:
            raise ValueError("top_limit must be >= 0")
        if not 0.0 < self.similarity_threshold <= 1.0:
            raise ValueError("similarity_threshold must be in (0, 1]")
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(f"invalid log_level '{self.log_level}'")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Build settings from ``INTENTION_ENGINE_*`` variables."""

        env = os.environ if environ is None else environ
        kwargs: dict = {}

        raw_limit = env.get(f"{_ENV_PREFIX}TOP_LIMIT")
        if raw_limit:
            try:
                kwargs["top_limit"] = int(raw_limit)
            except ValueError as exc:
                raise ValueError(f"{_ENV_PREFIX}TOP_LIMIT must be an integer") from exc

        raw_threshold = env.get(f"{_ENV_PREFIX}SIMILARITY_THRESHOLD")
        if raw_threshold:
            try:
                kwargs["similarity_threshold"] = float(raw_threshold)
            except ValueError as exc:
                raise ValueError(f"{_ENV_PREFIX}SIMILARITY_THRESHOLD must be a number") from exc

        raw_tz = env.get(f"{_ENV_PREFIX}TZ")
        if raw_tz:
            kwargs["tz"] = parse_tz(raw_tz)

        raw_level = env.get(f"{_ENV_PREFIX}LOG_LEVEL")
        if raw_level:
            kwargs["log_level"] = raw_level.upper()

        return cls(**kwargs)


def parse_tz(value: str) -> Optional[tzinfo]:
    """Map ``local`` to None (process timezone) and ``utc`` to UTC."""

    normalized = value.strip().lower()
    if normalized == "local":
        return None
    if normalized == "utc":
        return timezone.utc
    raise ValueError(f"unsupported timezone '{value}', expected 'local' or 'utc'")
