"""
AgentBook GUI app.

Two panes backed by the engine's live filtered views: clients (buyers included)
and sellers. Each pane has a find box that installs a name predicate and a
delete button for the selected entry.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListView,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from agentbook_engine.bootstrap import AppContext, init_app
from agentbook_engine.errors import AgentBookError
from agentbook_engine.filtered_view import FilteredView
from agentbook_engine.logs_center import get_logger
from agentbook_engine.predicates import NameContainsKeywordsPredicate, show_all
from agentbook_engine.user_prefs import GuiSettings
from gui.adapters.entity_list_model import EntityListModel

logger = get_logger(__name__)


class EntityPane(QWidget):
    """
    One list pane: title, find box, list and delete button.

    Parameters
    ----------
    title:
        Pane heading.
    view:
        Live filtered view to display.
    apply_predicate:
        Installs a predicate on the model manager for this view.
    delete_entity:
        Deletes one entity through the model manager.
    """

    def __init__(
        self,
        title: str,
        view: FilteredView,
        apply_predicate: Callable[[Callable[[object], bool]], None],
        delete_entity: Callable[[object], None],
    ) -> None:
        super().__init__()
        self._apply_predicate = apply_predicate
        self._delete_entity = delete_entity

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        heading = QLabel(title)
        f = heading.font()
        f.setBold(True)
        heading.setFont(f)
        layout.addWidget(heading)

        self.find_edit = QLineEdit()
        self.find_edit.setPlaceholderText("Find by name (blank = show all)")
        self.find_edit.textChanged.connect(self._on_find_changed)
        layout.addWidget(self.find_edit)

        self.model = EntityListModel(view, parent=self)
        self.list_view = QListView()
        self.list_view.setModel(self.model)
        layout.addWidget(self.list_view, 1)

        row = QHBoxLayout()
        row.addStretch(1)
        self.btn_delete = QPushButton("Delete")
        self.btn_delete.clicked.connect(self._on_delete)
        row.addWidget(self.btn_delete)
        layout.addLayout(row)

    def _on_find_changed(self, text: str) -> None:
        keywords = tuple(text.split())
        self._apply_predicate(NameContainsKeywordsPredicate(keywords) if keywords else show_all)

    def _on_delete(self) -> None:
        current = self.list_view.currentIndex()
        entity = self.model.entity_at(current.row()) if current.isValid() else None
        if entity is None:
            return
        try:
            self._delete_entity(entity)
        except AgentBookError as exc:
            QMessageBox.warning(self, "AgentBook", str(exc))


class AppWindow(QWidget):
    """
    Main window for the AgentBook GUI.

    Responsibilities
    ----------------
    - Host the client and seller panes
    - Restore and persist window geometry through the user preferences
    - Save both books and the preferences on close
    """

    def __init__(self, ctx: AppContext) -> None:
        super().__init__()
        self._ctx = ctx
        model = ctx.model
        self.setWindowTitle("AgentBook")

        settings = model.get_gui_settings()
        self.resize(settings.window_width, settings.window_height)
        if settings.window_x is not None and settings.window_y is not None:
            self.move(settings.window_x, settings.window_y)

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        self.client_pane = EntityPane(
            "Clients",
            model.get_filtered_client_list(),
            model.update_filtered_client_list,
            model.delete_client,  # type: ignore[arg-type]
        )
        self.seller_pane = EntityPane(
            "Sellers",
            model.get_filtered_seller_list(),
            model.update_filtered_seller_list,
            model.delete_seller,  # type: ignore[arg-type]
        )
        root.addWidget(self.client_pane, 1)
        root.addWidget(self.seller_pane, 1)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """
        Handle window close by persisting geometry and data.

        Parameters
        ----------
        event:
            Qt close event.
        """
        try:
            geo = self.geometry()
            self._ctx.model.set_gui_settings(
                GuiSettings(
                    window_width=max(geo.width(), 1),
                    window_height=max(geo.height(), 1),
                    window_x=geo.x(),
                    window_y=geo.y(),
                )
            )
            self._ctx.save_all()
        except OSError as exc:
            logger.error("Could not save data on exit: %s", exc)
            QMessageBox.critical(self, "AgentBook", f"Could not save data: {exc}")
        finally:
            self.client_pane.model.detach()
            self.seller_pane.model.detach()
            super().closeEvent(event)


def main(argv: list[str] | None = None) -> int:
    """
    Run the AgentBook GUI application.

    Parameters
    ----------
    argv:
        Optional argument vector; an optional first argument overrides the data root.

    Returns
    -------
    int
        Qt application exit code.
    """
    args = sys.argv if argv is None else argv
    data_root = Path(args[1]) if len(args) > 1 else None
    ctx = init_app(data_root)
    app = QApplication(args)
    w = AppWindow(ctx)
    w.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
