from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from agentbook_engine.address_book import AddressBook, SellerAddressBook
from agentbook_engine.data_models import Client
from agentbook_engine.errors import DuplicateEntityError, EntityNotFoundError, InvalidArgumentError
from agentbook_engine.model_manager import PREDICATE_SHOW_ALL_CLIENTS, ModelManager
from agentbook_engine.predicates import NameContainsKeywordsPredicate
from agentbook_engine.user_prefs import GuiSettings, UserPrefs
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


def _person(name: str) -> Client:
    return Client(name=name, phone="12345678", email="x@example.com", address="somewhere")


def test_default_constructor_is_empty() -> None:
    model = ModelManager()
    assert model.get_user_prefs() == UserPrefs()
    assert model.get_address_book() == AddressBook()
    assert model.get_seller_address_book() == SellerAddressBook()
    assert list(model.get_filtered_client_list()) == []


def test_constructor_rejects_nothing_but_copies_snapshots() -> None:
    book = typical_address_book()
    sellers = typical_seller_address_book()
    prefs = UserPrefs()
    model = ModelManager(book, prefs, sellers)

    assert model.get_address_book() == book
    assert model.get_address_book() is not book
    assert model.get_seller_address_book() == sellers
    assert model.get_seller_address_book() is not sellers

    model.delete_client(ALICE)
    model.delete_seller(ELLE)
    model.set_gui_settings(GuiSettings(window_width=1, window_height=2))
    assert book.has_client(ALICE)
    assert sellers.has_seller(ELLE)
    assert prefs.gui_settings == GuiSettings()


def test_add_then_has_and_visible() -> None:
    model = ModelManager()
    model.add_client(ALICE)
    assert model.has_client(ALICE)
    assert ALICE in model.get_filtered_client_list()


def test_add_resets_filter_to_show_all() -> None:
    model = ModelManager(typical_address_book())
    model.update_filtered_client_list(NameContainsKeywordsPredicate(("Kurz",)))
    assert list(model.get_filtered_client_list()) == [CARL]
    model.add_client(_person("Zed"))
    assert len(model.get_filtered_client_list()) == 5


def test_duplicate_add_fails_and_size_unchanged() -> None:
    model = ModelManager()
    model.add_client(ALICE)
    with pytest.raises(DuplicateEntityError):
        model.add_client(replace(ALICE, phone="000"))
    assert len(model.get_address_book()) == 1


def test_delete_absent_fails_and_collection_unchanged() -> None:
    model = ModelManager(typical_address_book())
    with pytest.raises(EntityNotFoundError):
        model.delete_client(_person("Ghost"))
    assert model.get_address_book() == typical_address_book()


def test_set_client_preserves_size_and_slot() -> None:
    model = ModelManager(typical_address_book())
    edited = replace(BENSON, name="Bobby Tables")
    model.set_client(BENSON, edited)
    view = model.get_filtered_client_list()
    assert len(view) == 4
    assert view[1] == edited


def test_set_client_errors() -> None:
    model = ModelManager(typical_address_book())
    with pytest.raises(EntityNotFoundError):
        model.set_client(_person("Ghost"), _person("Ghost"))
    with pytest.raises(DuplicateEntityError):
        model.set_client(ALICE, replace(ALICE, name=DANIEL.name))


def test_predicate_yields_backing_subsequence_in_order() -> None:
    model = ModelManager(typical_address_book())
    model.update_filtered_client_list(lambda c: c.name.endswith("Meier"))
    assert list(model.get_filtered_client_list()) == [BENSON, DANIEL]


def test_alice_bob_scenario() -> None:
    model = ModelManager()
    alice, bob = _person("Alice"), _person("Bob")
    model.add_client(alice)
    model.add_client(bob)
    model.update_filtered_client_list(lambda c: c.name == "Alice")
    assert model.get_filtered_client_list() == [alice]
    model.update_filtered_client_list(PREDICATE_SHOW_ALL_CLIENTS)
    assert model.get_filtered_client_list() == [alice, bob]


def test_filtered_view_is_live_and_stable() -> None:
    model = ModelManager()
    view = model.get_filtered_client_list()
    model.add_client(ALICE)
    assert list(view) == [ALICE]
    model.set_address_book(typical_address_book())
    assert view is model.get_filtered_client_list()
    assert len(view) == 4


def test_buyer_operations() -> None:
    model = ModelManager()
    model.add_buyer(CARL)
    assert model.has_buyer(CARL)
    assert model.has_client(CARL)
    with pytest.raises(DuplicateEntityError):
        model.add_client(replace(CARL, role="client"))
    with pytest.raises(InvalidArgumentError):
        model.add_buyer(ALICE)


def test_sort_reorders_backing_and_view() -> None:
    model = ModelManager()
    for c in (DANIEL, CARL, ALICE):
        model.add_client(c)
    model.update_filtered_client_list(lambda c: c.name != CARL.name)
    model.sort_filtered_client_list()
    assert list(model.get_filtered_client_list()) == [ALICE, DANIEL]
    assert model.get_address_book().client_list == (ALICE, CARL, DANIEL)


def test_seller_operations() -> None:
    model = ModelManager()
    model.add_seller(ELLE)
    model.add_seller(FIONA)
    assert model.has_seller(ELLE)
    with pytest.raises(DuplicateEntityError):
        model.add_seller(ELLE)

    model.update_filtered_seller_list(NameContainsKeywordsPredicate(("fiona",)))
    assert list(model.get_filtered_seller_list()) == [FIONA]

    model.set_seller(FIONA, replace(FIONA, phone="123"))
    assert model.get_filtered_seller_list()[0].phone == "123"

    model.delete_seller(ELLE)
    with pytest.raises(EntityNotFoundError):
        model.delete_seller(ELLE)

    model.set_seller_address_book(typical_seller_address_book())
    model.add_seller(replace(ELLE, name="Gina"))
    assert len(model.get_filtered_seller_list()) == 3


@pytest.mark.parametrize(
    "call",
    [
        lambda m: m.has_client(None),
        lambda m: m.add_client(None),
        lambda m: m.delete_client(None),
        lambda m: m.set_client(None, ALICE),
        lambda m: m.set_client(ALICE, None),
        lambda m: m.add_buyer(None),
        lambda m: m.has_buyer(None),
        lambda m: m.add_seller(None),
        lambda m: m.has_seller(None),
        lambda m: m.set_seller(ELLE, None),
        lambda m: m.update_filtered_client_list(None),
        lambda m: m.update_filtered_seller_list(None),
        lambda m: m.set_user_prefs(None),
        lambda m: m.set_gui_settings(None),
        lambda m: m.set_address_book_file_path(None),
        lambda m: m.set_seller_address_book_file_path(None),
        lambda m: m.set_address_book(None),
        lambda m: m.set_seller_address_book(None),
    ],
)
def test_none_arguments_are_rejected(call) -> None:
    with pytest.raises(InvalidArgumentError):
        call(ModelManager())


def test_user_prefs_accessors() -> None:
    model = ModelManager()
    model.set_address_book_file_path(Path("a/b.json"))
    model.set_seller_address_book_file_path(Path("c/d.json"))
    settings = GuiSettings(window_width=800, window_height=500, window_x=10, window_y=20)
    model.set_gui_settings(settings)
    assert model.get_address_book_file_path() == Path("a/b.json")
    assert model.get_seller_address_book_file_path() == Path("c/d.json")
    assert model.get_gui_settings() == settings

    replacement = UserPrefs()
    model.set_user_prefs(replacement)
    assert model.get_user_prefs() == replacement
    assert model.get_user_prefs() is not replacement


def test_equality() -> None:
    book = typical_address_book()
    prefs = UserPrefs()
    a = ModelManager(book, prefs, SellerAddressBook())
    b = ModelManager(book, prefs, SellerAddressBook())
    assert a == b
    assert a != ModelManager()
    assert a != "model"

    b.update_filtered_client_list(NameContainsKeywordsPredicate(("Alice",)))
    assert a != b
    b.update_filtered_client_list(PREDICATE_SHOW_ALL_CLIENTS)
    assert a == b

    other_prefs = UserPrefs()
    other_prefs.address_book_file_path = Path("different.json")
    assert a != ModelManager(book, other_prefs, SellerAddressBook())


def test_set_seller_rejects_absent_target_and_collisions() -> None:
    model = ModelManager(seller_address_book=typical_seller_address_book())
    with pytest.raises(EntityNotFoundError):
        model.set_seller(replace(ELLE, name="Nobody"), ELLE)
    with pytest.raises(DuplicateEntityError):
        model.set_seller(ELLE, replace(ELLE, name=FIONA.name))
    assert model.get_seller_address_book() == typical_seller_address_book()

    model.set_seller(ELLE, replace(ELLE, name="Elle Meyer", phone="555"))
    assert model.get_filtered_seller_list()[0].phone == "555"


def test_exposed_books_support_the_read_only_interface() -> None:
    model = ModelManager(typical_address_book(), UserPrefs(), typical_seller_address_book())
    book = model.get_address_book()
    sellers = model.get_seller_address_book()
    assert len(book) == len(book.client_list) == 4
    assert len(sellers) == len(sellers.seller_list) == 2
