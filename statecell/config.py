"""
Runtime settings read from the environment.

Environment Variables:
    STATECELL_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) - default: INFO
    STATECELL_LOG_FORMAT: Log format (json, text) - default: json
    STATECELL_WARN_UNEXPECTED_KEYS: Warn about state keys with no reducer (true/false) - default: true
"""

import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings snapshot.

    Fields:
        log_level: Root log level name
        log_format: "json" or "text"
        warn_unexpected_keys: combine_reducers() warns about unknown state keys
    """
    log_level: str = "INFO"
    log_format: str = "json"
    warn_unexpected_keys: bool = True


def _env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    val = val.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return default


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Unknown values fall back to the defaults.
    """
    log_level = os.getenv("STATECELL_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    log_format = os.getenv("STATECELL_LOG_FORMAT", "json").lower()
    if log_format not in LOG_FORMATS:
        log_format = "json"

    return Settings(
        log_level=log_level,
        log_format=log_format,
        warn_unexpected_keys=_env_bool("STATECELL_WARN_UNEXPECTED_KEYS", True),
    )
