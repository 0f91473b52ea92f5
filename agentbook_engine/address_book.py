"""
Entity collections.

Both address books are thin wrappers over :class:`UniqueEntityList`, an ordered
list that refuses to hold two entries with the same domain identity.

Invariants
----------
- No two entries in one list are the same entity (per the list's identity rule).
- ``version`` increases on every mutation. Filtered views use it to decide when
  to recompute; it is never reset.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, Protocol, Sequence, TypeVar

from .checks import require_non_null
from .data_models import Client, Seller, name_sort_key
from .errors import DuplicateEntityError, EntityNotFoundError, InvalidArgumentError

T = TypeVar("T")

Listener = Callable[[], None]


class UniqueEntityList(Generic[T]):
    """
    Ordered list of entities with no two entries sharing an identity.

    Parameters
    ----------
    is_same:
        Domain identity rule, called as ``is_same(existing, candidate)``.
    kind:
        Entity name used in error messages.
    """

    def __init__(self, is_same: Callable[[T, T], bool], *, kind: str) -> None:
        self._is_same = is_same
        self._kind = kind
        self._items: list[T] = []
        self._version = 0
        self._listeners: list[Listener] = []

    @property
    def version(self) -> int:
        return self._version

    def as_tuple(self) -> tuple[T, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def add_listener(self, listener: Listener) -> None:
        """Register a callback run after every mutation."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            listener()

    def _index_of(self, entity: T) -> int:
        for idx, existing in enumerate(self._items):
            if self._is_same(existing, entity):
                return idx
        return -1

    def contains(self, entity: T) -> bool:
        """Return True if an entry with the same identity is present."""
        require_non_null(entity)
        return self._index_of(entity) >= 0

    def add(self, entity: T) -> None:
        """
        Append an entity.

        Raises
        ------
        DuplicateEntityError
            If an entry with the same identity is already present.
        """
        require_non_null(entity)
        if self.contains(entity):
            raise DuplicateEntityError(f"This {self._kind} already exists in the address book.")
        self._items.append(entity)
        self._changed()

    def set_entity(self, target: T, edited: T) -> None:
        """
        Replace ``target`` with ``edited`` in the same position.

        Raises
        ------
        EntityNotFoundError
            If ``target`` is not present.
        DuplicateEntityError
            If ``edited`` has the identity of a different entry.
        """
        require_non_null(target, edited)
        idx = self._index_of(target)
        if idx < 0:
            raise EntityNotFoundError(f"The {self._kind} to edit is not in the address book.")
        clash = self._index_of(edited)
        if clash >= 0 and clash != idx:
            raise DuplicateEntityError(f"This {self._kind} already exists in the address book.")
        self._items[idx] = edited
        self._changed()

    def remove(self, entity: T) -> None:
        """
        Remove the entry with the same identity as ``entity``.

        Raises
        ------
        EntityNotFoundError
            If no such entry exists.
        """
        require_non_null(entity)
        idx = self._index_of(entity)
        if idx < 0:
            raise EntityNotFoundError(f"The {self._kind} to delete is not in the address book.")
        del self._items[idx]
        self._changed()

    def set_entities(self, entities: Iterable[T]) -> None:
        """
        Replace all entries.

        Raises
        ------
        DuplicateEntityError
            If ``entities`` holds two entries with the same identity. The list is
            left unchanged in that case.
        """
        require_non_null(entities)
        incoming = list(entities)
        for i, left in enumerate(incoming):
            require_non_null(left)
            for right in incoming[i + 1 :]:
                if self._is_same(left, right):
                    raise DuplicateEntityError(
                        f"{self._kind.capitalize()} list contains duplicates."
                    )
        self._items = incoming
        self._changed()

    def sort(self, key: Callable[[T], object]) -> None:
        """Reorder entries by ``key`` (stable)."""
        self._items.sort(key=key)
        self._changed()

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, UniqueEntityList):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"UniqueEntityList({self._items!r})"


class ReadOnlyAddressBook(Protocol):
    """Read-only view of a client address book."""

    @property
    def client_list(self) -> Sequence[Client]:
        """Clients (buyers included) in stored order."""
        ...

    def __len__(self) -> int: ...


class ReadOnlySellerAddressBook(Protocol):
    """Read-only view of a seller address book."""

    @property
    def seller_list(self) -> Sequence[Seller]:
        """Sellers in stored order."""
        ...

    def __len__(self) -> int: ...


def _same_client(existing: Client, candidate: Client) -> bool:
    return existing.is_same_client(candidate)


def _same_seller(existing: Seller, candidate: Seller) -> bool:
    return existing.is_same_seller(candidate)


class AddressBook:
    """
    Client address book. Buyers are stored here alongside plain clients.

    Parameters
    ----------
    snapshot:
        Optional book to copy entries from. The new book never aliases it.
    """

    def __init__(self, snapshot: ReadOnlyAddressBook | None = None) -> None:
        self._clients: UniqueEntityList[Client] = UniqueEntityList(_same_client, kind="client")
        if snapshot is not None:
            self.reset_data(snapshot)

    @property
    def clients(self) -> UniqueEntityList[Client]:
        """Backing list; filtered views observe it."""
        return self._clients

    @property
    def client_list(self) -> tuple[Client, ...]:
        return self._clients.as_tuple()

    def reset_data(self, snapshot: ReadOnlyAddressBook) -> None:
        require_non_null(snapshot)
        self.set_clients(snapshot.client_list)

    def set_clients(self, clients: Iterable[Client]) -> None:
        self._clients.set_entities(clients)

    def has_client(self, client: Client) -> bool:
        return self._clients.contains(client)

    def has_buyer(self, buyer: Client) -> bool:
        """Return True if a buyer-role entry has the same identity as ``buyer``."""
        require_non_null(buyer)
        return any(c.is_buyer and c.is_same_client(buyer) for c in self._clients)

    def add_client(self, client: Client) -> None:
        self._clients.add(client)

    def add_buyer(self, buyer: Client) -> None:
        require_non_null(buyer)
        if not buyer.is_buyer:
            raise InvalidArgumentError(f"{buyer.name} is not tagged as a buyer.")
        self._clients.add(buyer)

    def set_client(self, target: Client, edited: Client) -> None:
        self._clients.set_entity(target, edited)

    def remove_client(self, client: Client) -> None:
        self._clients.remove(client)

    def sort_clients(self) -> None:
        self._clients.sort(key=name_sort_key)

    def __len__(self) -> int:
        return len(self._clients)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self._clients == other._clients

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AddressBook({len(self._clients)} clients)"


class SellerAddressBook:
    """
    Seller address book.

    Parameters
    ----------
    snapshot:
        Optional book to copy entries from. The new book never aliases it.
    """

    def __init__(self, snapshot: ReadOnlySellerAddressBook | None = None) -> None:
        self._sellers: UniqueEntityList[Seller] = UniqueEntityList(_same_seller, kind="seller")
        if snapshot is not None:
            self.reset_data(snapshot)

    @property
    def sellers(self) -> UniqueEntityList[Seller]:
        return self._sellers

    @property
    def seller_list(self) -> tuple[Seller, ...]:
        return self._sellers.as_tuple()

    def reset_data(self, snapshot: ReadOnlySellerAddressBook) -> None:
        require_non_null(snapshot)
        self.set_sellers(snapshot.seller_list)

    def set_sellers(self, sellers: Iterable[Seller]) -> None:
        self._sellers.set_entities(sellers)

    def has_seller(self, seller: Seller) -> bool:
        return self._sellers.contains(seller)

    def add_seller(self, seller: Seller) -> None:
        self._sellers.add(seller)

    def set_seller(self, target: Seller, edited: Seller) -> None:
        self._sellers.set_entity(target, edited)

    def remove_seller(self, seller: Seller) -> None:
        self._sellers.remove(seller)

    def __len__(self) -> int:
        return len(self._sellers)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, SellerAddressBook):
            return NotImplemented
        return self._sellers == other._sellers

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SellerAddressBook({len(self._sellers)} sellers)"
