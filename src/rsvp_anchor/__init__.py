"""
rsvp_anchor package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analytics import compute_analytics
from .config import (
    InvalidConfigurationError,
    RsvpConfig,
    config_from_dict,
    config_from_yaml,
    load_config,
)
from .driver import PlaybackDriver
from .models import PivotResult, SessionAnalytics, SessionComplete, SessionSample, Tick
from .pivot import PivotEngine
from .scheduler import PlaybackScheduler
from .timing import compute_delay
from .tokenization import split_words

__all__ = [
    "InvalidConfigurationError",
    "RsvpConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "PivotEngine",
    "PivotResult",
    "PlaybackScheduler",
    "PlaybackDriver",
    "SessionAnalytics",
    "SessionComplete",
    "SessionSample",
    "Tick",
    "compute_analytics",
    "compute_delay",
    "split_words",
]

__version__ = "0.1.0"
