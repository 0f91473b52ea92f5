"""
In-memory model of the address book data.

:class:`ModelManager` is the only mutation and query surface for the two address
books and the user preferences. The CLI and GUI call into it; storage hands it
snapshots at startup and reads its books back when saving.

Invariants
----------
- The manager owns independent copies of the snapshots it was built from.
- The filtered views returned by :meth:`ModelManager.get_filtered_client_list`
  and :meth:`ModelManager.get_filtered_seller_list` are created once and stay
  live for the manager's lifetime, including across ``set_address_book``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .address_book import (
    AddressBook,
    ReadOnlyAddressBook,
    ReadOnlySellerAddressBook,
    SellerAddressBook,
)
from .checks import require_non_null
from .data_models import Client, Seller
from .filtered_view import FilteredView
from .logs_center import get_logger
from .predicates import show_all
from .user_prefs import GuiSettings, ReadOnlyUserPrefs, UserPrefs

logger = get_logger(__name__)

PREDICATE_SHOW_ALL_CLIENTS: Callable[[Client], bool] = show_all
PREDICATE_SHOW_ALL_SELLERS: Callable[[Seller], bool] = show_all


class ModelManager:
    """
    Composes the client book, the seller book and the user preferences.

    Parameters
    ----------
    address_book:
        Client snapshot to copy in. Defaults to an empty book.
    user_prefs:
        Preferences snapshot to copy in. Defaults to default preferences.
    seller_address_book:
        Seller snapshot to copy in. Defaults to an empty book.
    """

    def __init__(
        self,
        address_book: ReadOnlyAddressBook | None = None,
        user_prefs: ReadOnlyUserPrefs | None = None,
        seller_address_book: ReadOnlySellerAddressBook | None = None,
    ) -> None:
        logger.debug(
            "Initializing with address book: %r, user prefs: %r, seller address book: %r",
            address_book,
            user_prefs,
            seller_address_book,
        )
        self._address_book = AddressBook(address_book)
        self._user_prefs = UserPrefs(user_prefs)
        self._seller_address_book = SellerAddressBook(seller_address_book)
        self._filtered_clients: FilteredView[Client] = FilteredView(self._address_book.clients)
        self._filtered_sellers: FilteredView[Seller] = FilteredView(
            self._seller_address_book.sellers
        )

    # ----- user prefs -------------------------------------------------------

    def set_user_prefs(self, user_prefs: ReadOnlyUserPrefs) -> None:
        require_non_null(user_prefs)
        self._user_prefs.reset_data(user_prefs)

    def get_user_prefs(self) -> ReadOnlyUserPrefs:
        return self._user_prefs

    def get_gui_settings(self) -> GuiSettings:
        return self._user_prefs.gui_settings

    def set_gui_settings(self, gui_settings: GuiSettings) -> None:
        require_non_null(gui_settings)
        self._user_prefs.gui_settings = gui_settings

    def get_address_book_file_path(self) -> Path:
        return self._user_prefs.address_book_file_path

    def set_address_book_file_path(self, path: Path) -> None:
        require_non_null(path)
        self._user_prefs.address_book_file_path = path

    def get_seller_address_book_file_path(self) -> Path:
        return self._user_prefs.seller_address_book_file_path

    def set_seller_address_book_file_path(self, path: Path) -> None:
        require_non_null(path)
        self._user_prefs.seller_address_book_file_path = path

    # ----- client book ------------------------------------------------------

    def set_address_book(self, address_book: ReadOnlyAddressBook) -> None:
        """Replace every client with the contents of ``address_book``."""
        require_non_null(address_book)
        self._address_book.reset_data(address_book)

    def get_address_book(self) -> ReadOnlyAddressBook:
        """Read-only view of the client book. Mutate it through this manager."""
        return self._address_book

    def has_client(self, client: Client) -> bool:
        require_non_null(client)
        return self._address_book.has_client(client)

    def add_client(self, client: Client) -> None:
        """
        Add ``client`` and reset the client filter to show everything.

        Raises
        ------
        DuplicateEntityError
            If the same client is already present.
        """
        require_non_null(client)
        self._address_book.add_client(client)
        self.update_filtered_client_list(PREDICATE_SHOW_ALL_CLIENTS)

    def delete_client(self, target: Client) -> None:
        """
        Raises
        ------
        EntityNotFoundError
            If ``target`` is not present.
        """
        require_non_null(target)
        self._address_book.remove_client(target)

    def set_client(self, target: Client, edited: Client) -> None:
        """
        Replace ``target`` with ``edited``, keeping its position.

        Raises
        ------
        EntityNotFoundError
            If ``target`` is not present.
        DuplicateEntityError
            If ``edited`` is the same client as a different entry.
        """
        require_non_null(target, edited)
        self._address_book.set_client(target, edited)

    def add_buyer(self, buyer: Client) -> None:
        """Add a buyer-role client and reset the client filter to show everything."""
        require_non_null(buyer)
        self._address_book.add_buyer(buyer)
        self.update_filtered_client_list(PREDICATE_SHOW_ALL_CLIENTS)

    def has_buyer(self, buyer: Client) -> bool:
        require_non_null(buyer)
        return self._address_book.has_buyer(buyer)

    # ----- seller book ------------------------------------------------------

    def set_seller_address_book(self, seller_address_book: ReadOnlySellerAddressBook) -> None:
        require_non_null(seller_address_book)
        self._seller_address_book.reset_data(seller_address_book)

    def get_seller_address_book(self) -> ReadOnlySellerAddressBook:
        return self._seller_address_book

    def has_seller(self, seller: Seller) -> bool:
        require_non_null(seller)
        return self._seller_address_book.has_seller(seller)

    def add_seller(self, seller: Seller) -> None:
        require_non_null(seller)
        self._seller_address_book.add_seller(seller)
        self.update_filtered_seller_list(PREDICATE_SHOW_ALL_SELLERS)

    def delete_seller(self, target: Seller) -> None:
        require_non_null(target)
        self._seller_address_book.remove_seller(target)

    def set_seller(self, target: Seller, edited: Seller) -> None:
        require_non_null(target, edited)
        self._seller_address_book.set_seller(target, edited)

    # ----- filtered views ---------------------------------------------------

    def get_filtered_client_list(self) -> FilteredView[Client]:
        """Return the live, read-only view of clients under the current predicate."""
        return self._filtered_clients

    def update_filtered_client_list(self, predicate: Callable[[Client], bool]) -> None:
        require_non_null(predicate)
        self._filtered_clients.set_predicate(predicate)

    def sort_filtered_client_list(self) -> None:
        """Sort the backing client list by name; the filtered view follows."""
        self._address_book.sort_clients()

    def get_filtered_seller_list(self) -> FilteredView[Seller]:
        """Return the live, read-only view of sellers under the current predicate."""
        return self._filtered_sellers

    def update_filtered_seller_list(self, predicate: Callable[[Seller], bool]) -> None:
        require_non_null(predicate)
        self._filtered_sellers.set_predicate(predicate)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, ModelManager):
            return NotImplemented
        return (
            self._address_book == other._address_book
            and self._user_prefs == other._user_prefs
            and self._filtered_clients == other._filtered_clients
        )

    __hash__ = None  # type: ignore[assignment]
