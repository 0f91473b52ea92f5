"""
JSON persistence for address books and user preferences.

Design constraints
------------------
- Writes are atomic (temp file + replace).
- Serialization is deterministic for a given in-memory object.
- Readers return None for a missing file and raise DataLoadingError for a file
  that exists but cannot be turned into valid entities.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

from .address_book import (
    AddressBook,
    ReadOnlyAddressBook,
    ReadOnlySellerAddressBook,
    SellerAddressBook,
)
from .data_models import Client, Seller
from .errors import AgentBookError, DataLoadingError
from .logs_center import get_logger
from .user_prefs import ReadOnlyUserPrefs, UserPrefs

logger = get_logger(__name__)

T = TypeVar("T")


def _read_json(path: Path) -> Any | None:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("Data file %s not found.", path)
        return None
    except OSError as exc:
        raise DataLoadingError(f"Failed to read data file: {path}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadingError(f"Invalid JSON in data file: {path}") from exc


def write_json_atomic(json_path: Path, payload: Mapping[str, Any]) -> None:
    """
    Write JSON atomically to disk.

    Raises
    ------
    OSError
        If the file cannot be written. The temp file is removed first.
    """
    json_path = json_path.expanduser()
    json_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = json_path.with_suffix(json_path.suffix + ".tmp")
    try:
        with temp_path.open("w", encoding="utf-8", newline="\n") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True, ensure_ascii=False)
            handle.write("\n")
        os.replace(temp_path, json_path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def _decode_entities(
    payload: Any, key: str, decode: Callable[[Mapping[str, Any]], T], path: Path
) -> list[T]:
    if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
        raise DataLoadingError(f"Expected an object with a {key!r} list in {path}")
    out: list[T] = []
    for idx, raw in enumerate(payload[key]):
        if not isinstance(raw, dict):
            raise DataLoadingError(f"Entry {idx} in {path} is not an object")
        try:
            out.append(decode(raw))
        except (ValueError, TypeError, AgentBookError) as exc:
            raise DataLoadingError(f"Entry {idx} in {path} is invalid: {exc}") from exc
    return out


def read_address_book(path: Path) -> AddressBook | None:
    """
    Read a client address book.

    Returns
    -------
    AddressBook | None
        The book, or None if the file does not exist.

    Raises
    ------
    DataLoadingError
        If the file is unreadable, malformed, or holds duplicate clients.
    """
    payload = _read_json(path)
    if payload is None:
        return None
    clients = _decode_entities(payload, "clients", Client.from_dict, path)
    book = AddressBook()
    try:
        book.set_clients(clients)
    except AgentBookError as exc:
        raise DataLoadingError(f"{path}: {exc}") from exc
    logger.info("Loaded %d clients from %s", len(book), path)
    return book


def write_address_book(path: Path, book: ReadOnlyAddressBook) -> None:
    """Atomically write a client address book."""
    write_json_atomic(path, {"clients": [c.to_dict() for c in book.client_list]})
    logger.info("Saved %d clients to %s", len(book.client_list), path)


def read_seller_address_book(path: Path) -> SellerAddressBook | None:
    """
    Read a seller address book.

    Returns
    -------
    SellerAddressBook | None
        The book, or None if the file does not exist.

    Raises
    ------
    DataLoadingError
        If the file is unreadable, malformed, or holds duplicate sellers.
    """
    payload = _read_json(path)
    if payload is None:
        return None
    sellers = _decode_entities(payload, "sellers", Seller.from_dict, path)
    book = SellerAddressBook()
    try:
        book.set_sellers(sellers)
    except AgentBookError as exc:
        raise DataLoadingError(f"{path}: {exc}") from exc
    logger.info("Loaded %d sellers from %s", len(book), path)
    return book


def write_seller_address_book(path: Path, book: ReadOnlySellerAddressBook) -> None:
    """Atomically write a seller address book."""
    write_json_atomic(path, {"sellers": [s.to_dict() for s in book.seller_list]})
    logger.info("Saved %d sellers to %s", len(book.seller_list), path)


def read_user_prefs(path: Path) -> UserPrefs | None:
    """
    Read user preferences.

    Raises
    ------
    DataLoadingError
        If the file exists but is not a valid preferences object.
    """
    payload = _read_json(path)
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise DataLoadingError(f"Expected a JSON object in {path}")
    try:
        return UserPrefs.from_dict(payload)
    except (ValueError, TypeError, AgentBookError) as exc:
        raise DataLoadingError(f"Invalid preferences in {path}: {exc}") from exc


def write_user_prefs(path: Path, prefs: ReadOnlyUserPrefs) -> None:
    """Atomically write user preferences."""
    snapshot = prefs if isinstance(prefs, UserPrefs) else UserPrefs(prefs)
    write_json_atomic(path, snapshot.to_dict())


@dataclass(frozen=True, slots=True)
class StorageManager:
    """
    Bundles the three data file locations.

    Attributes
    ----------
    address_book_path:
        Client book file.
    seller_address_book_path:
        Seller book file.
    user_prefs_path:
        Preferences file.
    """

    address_book_path: Path
    seller_address_book_path: Path
    user_prefs_path: Path

    def read_address_book(self) -> AddressBook | None:
        return read_address_book(self.address_book_path)

    def save_address_book(self, book: ReadOnlyAddressBook) -> None:
        write_address_book(self.address_book_path, book)

    def read_seller_address_book(self) -> SellerAddressBook | None:
        return read_seller_address_book(self.seller_address_book_path)

    def save_seller_address_book(self, book: ReadOnlySellerAddressBook) -> None:
        write_seller_address_book(self.seller_address_book_path, book)

    def read_user_prefs(self) -> UserPrefs | None:
        return read_user_prefs(self.user_prefs_path)

    def save_user_prefs(self, prefs: ReadOnlyUserPrefs) -> None:
        write_user_prefs(self.user_prefs_path, prefs)
