from __future__ import annotations

from dataclasses import replace

import pytest

from agentbook_engine.address_book import AddressBook, SellerAddressBook, UniqueEntityList
from agentbook_engine.errors import DuplicateEntityError, EntityNotFoundError, InvalidArgumentError
from typical_entities import (
    ALICE,
    BENSON,
    CARL,
    DANIEL,
    ELLE,
    FIONA,
    typical_address_book,
    typical_seller_address_book,
)


def _names(items: object) -> list[str]:
    return [e.name for e in items]  # type: ignore[attr-defined]


def test_unique_list_rejects_duplicate_and_keeps_size() -> None:
    book = AddressBook()
    book.add_client(ALICE)
    with pytest.raises(DuplicateEntityError):
        book.add_client(replace(ALICE, phone="000"))
    assert len(book) == 1


def test_remove_absent_raises_and_leaves_book_unchanged() -> None:
    book = typical_address_book()
    before = book.client_list
    with pytest.raises(EntityNotFoundError):
        book.remove_client(replace(ALICE, name="Nobody Here"))
    assert book.client_list == before


def test_set_client_preserves_position() -> None:
    book = typical_address_book()
    edited = replace(BENSON, name="Bob Stone")
    book.set_client(BENSON, edited)
    assert _names(book.client_list) == ["Alice Pauline", "Bob Stone", "Carl Kurz", "Daniel Meier"]


def test_set_client_same_identity_different_fields_is_allowed() -> None:
    book = typical_address_book()
    edited = replace(ALICE, phone="11111111")
    book.set_client(ALICE, edited)
    assert book.client_list[0] == edited


def test_set_client_collision_with_other_entry_is_rejected() -> None:
    book = typical_address_book()
    with pytest.raises(DuplicateEntityError):
        book.set_client(ALICE, replace(ALICE, name=BENSON.name))
    assert book.client_list[0] == ALICE


def test_set_client_missing_target_is_rejected() -> None:
    book = AddressBook()
    with pytest.raises(EntityNotFoundError):
        book.set_client(ALICE, ALICE)


def test_buyer_satisfies_client_and_buyer_membership() -> None:
    book = AddressBook()
    book.add_buyer(CARL)
    assert book.has_client(CARL)
    assert book.has_buyer(CARL)


def test_plain_client_does_not_satisfy_buyer_membership() -> None:
    book = AddressBook()
    book.add_client(ALICE)
    assert book.has_client(ALICE)
    assert not book.has_buyer(replace(ALICE, role="buyer"))


def test_add_buyer_requires_buyer_role() -> None:
    with pytest.raises(InvalidArgumentError):
        AddressBook().add_buyer(ALICE)


def test_add_buyer_rejects_existing_client_with_same_name() -> None:
    book = AddressBook()
    book.add_client(replace(CARL, role="client"))
    with pytest.raises(DuplicateEntityError):
        book.add_buyer(CARL)


def test_snapshot_is_copied_not_aliased() -> None:
    original = typical_address_book()
    copy = AddressBook(original)
    copy.remove_client(ALICE)
    assert original.has_client(ALICE)
    assert not copy.has_client(ALICE)


def test_reset_data_with_duplicates_is_rejected_atomically() -> None:
    book = typical_address_book()

    class _Snapshot:
        client_list = (DANIEL, replace(DANIEL, phone="123"))

    with pytest.raises(DuplicateEntityError):
        book.reset_data(_Snapshot())
    assert len(book) == 4


def test_sort_orders_by_name() -> None:
    book = AddressBook()
    for c in (DANIEL, BENSON, ALICE):
        book.add_client(c)
    book.sort_clients()
    assert _names(book.client_list) == ["Alice Pauline", "Benson Meier", "Daniel Meier"]


def test_version_moves_on_every_mutation() -> None:
    items: UniqueEntityList[str] = UniqueEntityList(lambda a, b: a == b, kind="word")
    seen = [items.version]
    items.add("a")
    seen.append(items.version)
    items.set_entity("a", "b")
    seen.append(items.version)
    items.remove("b")
    seen.append(items.version)
    assert seen == sorted(set(seen))


def test_listeners_run_after_mutation() -> None:
    book = AddressBook()
    calls: list[int] = []
    book.clients.add_listener(lambda: calls.append(len(book)))
    book.add_client(ALICE)
    book.remove_client(ALICE)
    assert calls == [1, 0]


def test_none_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        AddressBook().has_client(None)  # type: ignore[arg-type]


def test_seller_book_symmetry() -> None:
    book = typical_seller_address_book()
    assert book.has_seller(ELLE)
    with pytest.raises(DuplicateEntityError):
        book.add_seller(replace(ELLE, phone="555"))
    book.set_seller(FIONA, replace(FIONA, address="Orchard"))
    assert book.seller_list[1].address == "Orchard"
    book.remove_seller(ELLE)
    assert _names(book.seller_list) == ["Fiona Kunz"]
    with pytest.raises(EntityNotFoundError):
        book.remove_seller(ELLE)


def test_books_compare_by_content() -> None:
    assert typical_address_book() == typical_address_book()
    assert typical_seller_address_book() == SellerAddressBook(typical_seller_address_book())
    assert AddressBook() != typical_address_book()


def test_has_client_matches_buyer_variant_by_name() -> None:
    book = AddressBook()
    book.add_client(ALICE)
    assert book.has_client(replace(ALICE, role="buyer"))
    assert CARL not in book.client_list
