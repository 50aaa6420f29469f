#!/usr/bin/env python3
"""
Report Settings
Reads the server-stats tunables from the environment (or a .env file).
"""

import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULTS = {
    "command_timeout": 10,
    "cpu_sample_interval": 0.5,
    "log_level": "WARNING",
    "log_file": None,
}

ENV_VARS = {
    "command_timeout": ("SERVER_STATS_COMMAND_TIMEOUT", int),
    "cpu_sample_interval": ("SERVER_STATS_CPU_SAMPLE_INTERVAL", float),
    "log_level": ("SERVER_STATS_LOG_LEVEL", str),
    "log_file": ("SERVER_STATS_LOG_FILE", str),
}


class StatsConfig:
    """Settings for one report run"""

    def __init__(self, **overrides):
        self.settings = dict(DEFAULTS)
        self.settings.update(overrides)

    @classmethod
    def from_env(cls, environ=None, dotenv=True):
        """Build settings from environment variables, env values take precedence over defaults"""
        if dotenv:
            load_dotenv()
        environ = os.environ if environ is None else environ

        overrides = {}
        for key, (var, cast) in ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except ValueError:
                logger.warning(f"Ignoring invalid {var}={raw!r}, using {DEFAULTS[key]!r}")
                continue
            if cast in (int, float) and value <= 0:
                logger.warning(f"Ignoring non-positive {var}={raw!r}, using {DEFAULTS[key]!r}")
                continue
            overrides[key] = value
        return cls(**overrides)

    def __getattr__(self, name):
        try:
            return self.__dict__["settings"][name]
        except KeyError:
            raise AttributeError(name) from None

    def resolved_log_level(self):
        """Resolve the configured level name, falling back to WARNING."""
        level = logging.getLevelName(str(self.settings["log_level"]).upper())
        return level if isinstance(level, int) else logging.WARNING
