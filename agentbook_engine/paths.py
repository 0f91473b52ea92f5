"""
Filesystem locations for AgentBook runtime data.

Everything AgentBook writes by default lives under a single data root:

- ``config.json``: application configuration,
- ``preferences.json``: user preferences,
- ``data/``: the client and seller address books,
- ``logs/``: optional log files.

Book paths stored in the preferences may be relative; they are resolved against
the data root.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path

APP_DIR_NAME = "agentbook"


@dataclass(frozen=True, slots=True)
class AppPaths:
    """
    Concrete resolved paths for AgentBook.

    Attributes
    ----------
    data_root:
        Root directory for all AgentBook runtime data.
    config_file:
        Application configuration file.
    user_prefs_file:
        Default user preferences file.
    books_root:
        Default directory for the address book files.
    logs_root:
        Default directory for log files.
    """

    data_root: Path
    config_file: Path
    user_prefs_file: Path
    books_root: Path
    logs_root: Path


def default_data_root() -> Path:
    """
    Resolve the default AgentBook data root.

    Preference order:
    1) %LOCALAPPDATA% if set
    2) %APPDATA% (Roaming)
    3) $XDG_DATA_HOME
    4) ~/.local/share
    """
    for var in ("LOCALAPPDATA", "APPDATA", "XDG_DATA_HOME"):
        value = os.environ.get(var)
        if value:
            return Path(value) / APP_DIR_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME


def resolve_app_paths(data_root: Path | None = None) -> AppPaths:
    """
    Resolve all AgentBook paths.

    Parameters
    ----------
    data_root:
        Optional override for the data root.

    Returns
    -------
    AppPaths
        Resolved paths. Nothing is created on disk.
    """
    root = (data_root or default_data_root()).expanduser().resolve()
    return AppPaths(
        data_root=root,
        config_file=root / "config.json",
        user_prefs_file=root / "preferences.json",
        books_root=root / "data",
        logs_root=root / "logs",
    )


def resolve_data_file(data_root: Path, path: Path) -> Path:
    """Return ``path`` as-is if absolute, otherwise relative to ``data_root``."""
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return (data_root / path).resolve()


def app_paths_as_text(paths: AppPaths) -> str:
    """Render AppPaths as a readable multi-line string."""
    items = asdict(paths)
    return "\n".join(
        f"{key}: {items[key]}"
        for key in ("data_root", "config_file", "user_prefs_file", "books_root", "logs_root")
    )
