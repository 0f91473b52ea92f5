"""
Application configuration.

The configuration file is small JSON under the data root. Loading is tolerant:
a missing or unreadable file yields defaults, and each invalid field falls back
to its default independently.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .logs_center import get_logger

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """
    Persisted application configuration.

    Attributes
    ----------
    log_level:
        One of ``LOG_LEVELS``.
    user_prefs_file:
        Preferences file, or None for ``<data_root>/preferences.json``.
    log_file:
        Optional log file. Relative paths are resolved against the data root.
    """

    log_level: str = "INFO"
    user_prefs_file: Path | None = None
    log_file: Path | None = None


def load_config(path: Path) -> AppConfig:
    """
    Load configuration from disk.

    Parameters
    ----------
    path:
        Configuration file.

    Returns
    -------
    AppConfig
        Loaded configuration, or defaults if missing/unreadable.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return AppConfig()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Config file %s could not be read (%s); using defaults.", path, exc)
        return AppConfig()
    if not isinstance(payload, dict):
        logger.warning("Config file %s is not a JSON object; using defaults.", path)
        return AppConfig()

    def _p(v: object) -> Path | None:
        if isinstance(v, str) and v.strip():
            return Path(v)
        return None

    log_level = str(payload.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return AppConfig(
        log_level=log_level,
        user_prefs_file=_p(payload.get("user_prefs_file")),
        log_file=_p(payload.get("log_file")),
    )


def save_config(path: Path, config: AppConfig) -> None:
    """Write configuration to disk, creating the parent directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "log_level": config.log_level,
        "user_prefs_file": str(config.user_prefs_file) if config.user_prefs_file else None,
        "log_file": str(config.log_file) if config.log_file else None,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
