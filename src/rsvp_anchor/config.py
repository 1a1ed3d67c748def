from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

logger = logging.getLogger(__name__)


class InvalidConfigurationError(ValueError):
    """Raised when a playback configuration cannot be applied."""


@dataclass(slots=True)
class RsvpConfig:
    """Configuration options for the playback scheduler."""

    chunk_size: int = 1
    initial_rate: float = 300.0
    min_rate: float = 60.0
    max_rate: float = 1200.0
    acceleration_per_word: float = 0.5

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def validate_config(config: RsvpConfig) -> RsvpConfig:
    """
    Return a validated copy of ``config``.

    Structural problems are rejected; an initial rate outside the allowed
    range is clamped into it.
    """
    chunk_size = config.chunk_size
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise InvalidConfigurationError(
            f"chunk_size must be a positive integer, got {chunk_size!r}"
        )
    for name in ("initial_rate", "min_rate", "max_rate", "acceleration_per_word"):
        if not _is_finite(getattr(config, name)):
            raise InvalidConfigurationError(
                f"{name} must be a finite number, got {getattr(config, name)!r}"
            )

    min_rate = float(config.min_rate)
    max_rate = float(config.max_rate)
    acceleration = float(config.acceleration_per_word)
    if min_rate <= 0:
        raise InvalidConfigurationError(f"min_rate must be positive, got {min_rate}")
    if max_rate < min_rate:
        raise InvalidConfigurationError(
            f"max_rate {max_rate} is below min_rate {min_rate}"
        )
    if acceleration < 0:
        raise InvalidConfigurationError(
            f"acceleration_per_word must be zero or positive, got {acceleration}"
        )

    requested = float(config.initial_rate)
    initial_rate = min(max(requested, min_rate), max_rate)
    if initial_rate != requested:
        logger.warning(
            "initial_rate %.1f outside [%.1f, %.1f]; clamped to %.1f",
            requested,
            min_rate,
            max_rate,
            initial_rate,
        )
    return replace(
        config,
        initial_rate=initial_rate,
        min_rate=min_rate,
        max_rate=max_rate,
        acceleration_per_word=acceleration,
    )


def config_from_dict(data: Mapping[str, Any] | None) -> RsvpConfig:
    """Build an RsvpConfig from a dictionary-like input."""
    if data is None:
        return RsvpConfig()
    allowed = {item.name for item in fields(RsvpConfig)}
    return RsvpConfig(**{key: data[key] for key in data if key in allowed})


def config_from_yaml(path: str | Path) -> RsvpConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> RsvpConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return RsvpConfig()
    return config_from_yaml(path)


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False
