"""Qt list model over an engine FilteredView.

Threading model
---------------
The model and the FilteredView it wraps live on the GUI thread. The view calls
back synchronously after every change; the adapter answers with a model reset,
so attached QListViews always show the current visible entries.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt

from agentbook_engine.data_models import Client, Seller
from agentbook_engine.filtered_view import FilteredView

EntityRole = int(Qt.ItemDataRole.UserRole) + 1


def display_text(position: int, entity: Client | Seller) -> str:
    """Return the one-line label shown for an entity."""
    if isinstance(entity, Client):
        return f"{position}. {entity.name} ({entity.role.value})"
    return f"{position}. {entity.name}"


def tooltip_text(entity: Client | Seller) -> str:
    tags = ", ".join(sorted(entity.tags)) or "none"
    return f"{entity.phone}\n{entity.email}\n{entity.address}\nTags: {tags}"


class EntityListModel(QAbstractListModel):
    """Read-only item model that mirrors a FilteredView."""

    def __init__(self, view: FilteredView[Any], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._view = view
        self._view.add_listener(self._on_view_changed)

    def detach(self) -> None:
        """Stop following the view."""
        self._view.remove_listener(self._on_view_changed)

    def _on_view_changed(self) -> None:
        self.beginResetModel()
        self.endResetModel()

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._view)

    def data(  # type: ignore[override]
        self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole
    ) -> Any:
        if not index.isValid() or not 0 <= index.row() < len(self._view):
            return None
        entity = self._view[index.row()]
        if role == Qt.ItemDataRole.DisplayRole:
            return display_text(index.row() + 1, entity)
        if role == Qt.ItemDataRole.ToolTipRole:
            return tooltip_text(entity)
        if role == EntityRole:
            return entity
        return None

    def entity_at(self, row: int) -> Client | Seller | None:
        if 0 <= row < len(self._view):
            return self._view[row]
        return None
