from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtCore")

from PySide6.QtCore import QModelIndex, Qt  # noqa: E402

from agentbook_engine.model_manager import ModelManager  # noqa: E402
from agentbook_engine.predicates import NameContainsKeywordsPredicate  # noqa: E402
from gui.adapters.entity_list_model import EntityListModel, EntityRole, display_text  # noqa: E402
from typical_entities import ALICE, CARL, ELLE, typical_address_book  # noqa: E402


def test_model_mirrors_filtered_view() -> None:
    manager = ModelManager(typical_address_book())
    model = EntityListModel(manager.get_filtered_client_list())
    assert model.rowCount() == 4
    first = model.index(0, 0)
    assert model.data(first) == "1. Alice Pauline (client)"
    assert model.data(first, EntityRole) == ALICE
    assert "alice@example.com" in model.data(first, Qt.ItemDataRole.ToolTipRole)


def test_model_resets_when_predicate_changes() -> None:
    manager = ModelManager(typical_address_book())
    model = EntityListModel(manager.get_filtered_client_list())
    resets: list[int] = []
    model.modelReset.connect(lambda: resets.append(model.rowCount()))

    manager.update_filtered_client_list(NameContainsKeywordsPredicate(("kurz",)))
    assert resets == [1]
    assert model.entity_at(0) == CARL
    assert model.data(model.index(0, 0)) == "1. Carl Kurz (buyer)"


def test_model_resets_when_backing_list_changes() -> None:
    manager = ModelManager()
    model = EntityListModel(manager.get_filtered_seller_list())
    resets: list[int] = []
    model.modelReset.connect(lambda: resets.append(model.rowCount()))
    manager.add_seller(ELLE)
    assert resets[-1] == 1
    assert display_text(1, ELLE) == "1. Elle Meyer"


def test_detach_stops_following() -> None:
    manager = ModelManager()
    model = EntityListModel(manager.get_filtered_client_list())
    resets: list[int] = []
    model.modelReset.connect(lambda: resets.append(1))
    model.detach()
    manager.add_client(ALICE)
    assert resets == []


def test_out_of_range_rows_are_empty() -> None:
    model = EntityListModel(ModelManager().get_filtered_client_list())
    assert model.rowCount(QModelIndex()) == 0
    assert model.entity_at(3) is None
    assert model.data(model.index(0, 0)) is None
