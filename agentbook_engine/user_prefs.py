"""
User preferences.

Preferences hold the GUI window geometry and the locations of the two address
book files. Relative file paths are resolved against the data root by
:mod:`agentbook_engine.bootstrap`, not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Protocol, Self

from .checks import require_non_null
from .errors import InvalidArgumentError

DEFAULT_WINDOW_WIDTH = 740
DEFAULT_WINDOW_HEIGHT = 600
DEFAULT_ADDRESS_BOOK_FILE = Path("data") / "addressbook.json"
DEFAULT_SELLER_ADDRESS_BOOK_FILE = Path("data") / "sellerbook.json"


@dataclass(frozen=True, slots=True)
class GuiSettings:
    """
    Persisted main window geometry.

    Attributes
    ----------
    window_width, window_height:
        Window size in pixels.
    window_x, window_y:
        Window position, or None to let the window manager place it.
    """

    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT
    window_x: int | None = None
    window_y: int | None = None

    def __post_init__(self) -> None:
        if self.window_width <= 0 or self.window_height <= 0:
            raise InvalidArgumentError("Window size must be positive.")
        if (self.window_x is None) != (self.window_y is None):
            raise InvalidArgumentError("Window position needs both x and y, or neither.")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct :class:`GuiSettings` from a mapping, defaulting missing keys."""

        def _opt_int(v: object) -> int | None:
            return None if v is None else int(v)  # type: ignore[arg-type]

        return cls(
            window_width=int(payload.get("window_width", DEFAULT_WINDOW_WIDTH)),
            window_height=int(payload.get("window_height", DEFAULT_WINDOW_HEIGHT)),
            window_x=_opt_int(payload.get("window_x")),
            window_y=_opt_int(payload.get("window_y")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "window_width": self.window_width,
            "window_height": self.window_height,
            "window_x": self.window_x,
            "window_y": self.window_y,
        }


class ReadOnlyUserPrefs(Protocol):
    """Read-only access to user preferences."""

    @property
    def gui_settings(self) -> GuiSettings: ...

    @property
    def address_book_file_path(self) -> Path: ...

    @property
    def seller_address_book_file_path(self) -> Path: ...


class UserPrefs:
    """Mutable user preferences record."""

    def __init__(self, snapshot: ReadOnlyUserPrefs | None = None) -> None:
        self._gui_settings = GuiSettings()
        self._address_book_file_path = DEFAULT_ADDRESS_BOOK_FILE
        self._seller_address_book_file_path = DEFAULT_SELLER_ADDRESS_BOOK_FILE
        if snapshot is not None:
            self.reset_data(snapshot)

    def reset_data(self, snapshot: ReadOnlyUserPrefs) -> None:
        """Replace every field with the values from ``snapshot``."""
        require_non_null(snapshot)
        self.gui_settings = snapshot.gui_settings
        self.address_book_file_path = snapshot.address_book_file_path
        self.seller_address_book_file_path = snapshot.seller_address_book_file_path

    @property
    def gui_settings(self) -> GuiSettings:
        return self._gui_settings

    @gui_settings.setter
    def gui_settings(self, value: GuiSettings) -> None:
        require_non_null(value)
        self._gui_settings = value

    @property
    def address_book_file_path(self) -> Path:
        return self._address_book_file_path

    @address_book_file_path.setter
    def address_book_file_path(self, value: Path) -> None:
        require_non_null(value)
        self._address_book_file_path = Path(value)

    @property
    def seller_address_book_file_path(self) -> Path:
        return self._seller_address_book_file_path

    @seller_address_book_file_path.setter
    def seller_address_book_file_path(self, value: Path) -> None:
        require_non_null(value)
        self._seller_address_book_file_path = Path(value)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct :class:`UserPrefs` from a mapping, defaulting missing keys."""
        prefs = cls()
        gui = payload.get("gui_settings")
        if gui is not None:
            if not isinstance(gui, Mapping):
                raise ValueError("gui_settings must be an object")
            prefs.gui_settings = GuiSettings.from_dict(gui)
        if payload.get("address_book_file_path"):
            prefs.address_book_file_path = Path(str(payload["address_book_file_path"]))
        if payload.get("seller_address_book_file_path"):
            prefs.seller_address_book_file_path = Path(
                str(payload["seller_address_book_file_path"])
            )
        return prefs

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict. Paths use '/' separators."""
        return {
            "gui_settings": self._gui_settings.to_dict(),
            "address_book_file_path": self._address_book_file_path.as_posix(),
            "seller_address_book_file_path": self._seller_address_book_file_path.as_posix(),
        }

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, UserPrefs):
            return NotImplemented
        return (
            self._gui_settings == other._gui_settings
            and self._address_book_file_path == other._address_book_file_path
            and self._seller_address_book_file_path == other._seller_address_book_file_path
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"UserPrefs(gui_settings={self._gui_settings!r}, "
            f"address_book_file_path={self._address_book_file_path!s}, "
            f"seller_address_book_file_path={self._seller_address_book_file_path!s})"
        )
