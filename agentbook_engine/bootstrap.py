"""
Application startup wiring shared by the CLI and the GUI.

Startup order:
1) resolve paths under the data root,
2) load configuration and configure logging,
3) load user preferences (defaults if missing or unreadable),
4) build a StorageManager from the preference paths,
5) build the ModelManager from whatever books could be loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .address_book import AddressBook, SellerAddressBook
from .config import AppConfig, load_config
from .errors import DataLoadingError
from .logs_center import get_logger, init_logging
from .model_manager import ModelManager
from .paths import AppPaths, resolve_app_paths, resolve_data_file
from .storage import StorageManager, read_user_prefs
from .user_prefs import UserPrefs

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AppContext:
    """Everything a front end needs after startup."""

    paths: AppPaths
    config: AppConfig
    storage: StorageManager
    model: ModelManager

    def save_all(self) -> None:
        """Persist both books and the preferences."""
        self.storage.save_address_book(self.model.get_address_book())
        self.storage.save_seller_address_book(self.model.get_seller_address_book())
        self.storage.save_user_prefs(self.model.get_user_prefs())


def init_model(storage: StorageManager, user_prefs: UserPrefs) -> ModelManager:
    """
    Build a ModelManager from storage.

    Missing book files start empty. A book that fails to load is logged and
    replaced with an empty book, so the application can still start.
    """
    try:
        address_book = storage.read_address_book()
        if address_book is None:
            logger.info("Client data file not found. Starting with an empty address book.")
            address_book = AddressBook()
    except DataLoadingError as exc:
        logger.warning(
            "Client data could not be loaded (%s). Starting with an empty address book.", exc
        )
        address_book = AddressBook()

    try:
        seller_book = storage.read_seller_address_book()
        if seller_book is None:
            logger.info("Seller data file not found. Starting with an empty seller book.")
            seller_book = SellerAddressBook()
    except DataLoadingError as exc:
        logger.warning(
            "Seller data could not be loaded (%s). Starting with an empty seller book.", exc
        )
        seller_book = SellerAddressBook()

    return ModelManager(address_book, user_prefs, seller_book)


def _load_user_prefs(path: Path) -> UserPrefs:
    try:
        prefs = read_user_prefs(path)
    except DataLoadingError as exc:
        logger.warning("Preferences could not be loaded (%s). Using defaults.", exc)
        return UserPrefs()
    return prefs if prefs is not None else UserPrefs()


def init_app(data_root: Path | None = None) -> AppContext:
    """
    Run the startup sequence.

    Parameters
    ----------
    data_root:
        Optional override for the data root.

    Returns
    -------
    AppContext
        Resolved paths, configuration, storage and model.
    """
    paths = resolve_app_paths(data_root)
    config = load_config(paths.config_file)

    log_file = resolve_data_file(paths.data_root, config.log_file) if config.log_file else None
    init_logging(config.log_level, log_file)

    prefs_path = (
        resolve_data_file(paths.data_root, config.user_prefs_file)
        if config.user_prefs_file
        else paths.user_prefs_file
    )
    user_prefs = _load_user_prefs(prefs_path)

    storage = StorageManager(
        address_book_path=resolve_data_file(paths.data_root, user_prefs.address_book_file_path),
        seller_address_book_path=resolve_data_file(
            paths.data_root, user_prefs.seller_address_book_file_path
        ),
        user_prefs_path=prefs_path,
    )
    logger.info("Using data root %s", paths.data_root)
    model = init_model(storage, user_prefs)
    return AppContext(paths=paths, config=config, storage=storage, model=model)
