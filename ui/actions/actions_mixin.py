from __future__ import annotations

import logging
from typing import List

from PyQt6.QtWidgets import QMessageBox

from core.app_identity import AppIdentity
from core.discovery import DiscoveryService
from core.edit_flow import PrefsEditor, editable
from core.errors import ParseFailure, PrefsError
from core.prefs_store import open_default_store
from core.substrate import select_reader

logger = logging.getLogger("ui")


class ActionsMixin:
    """MainWindow mixin for toolbar / button handlers.

    Expects the window to provide ``table_model``, ``proxy``, ``view``,
    ``settings`` and the add-form widgets built in ``_build_ui``.
    """

    # ---------------------------
    # Logging
    # ---------------------------

    def _msg(self, s: str) -> None:
        """Log a line and echo it in the status bar."""
        logger.info(s)
        try:
            self.statusBar().showMessage(str(s), 5000)
        except RuntimeError:
            pass

    def _error(self, title: str, e: Exception) -> None:
        QMessageBox.warning(self, title, str(e))
        self._msg(f"{title}: {e}")

    def _confirm(self, title: str, message: str) -> bool:
        ans = QMessageBox.question(
            self,
            title,
            message,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return ans == QMessageBox.StandardButton.Yes

    # ---------------------------
    # Project
    # ---------------------------

    def open_identity(self, identity: AppIdentity) -> None:
        """Point the editor at another company/product and reload."""
        store = open_default_store(identity)
        discovery = DiscoveryService(select_reader(identity), store)
        self.identity = identity
        self.editor = PrefsEditor(store, discovery)
        self.settings.remember(identity)
        self.setWindowTitle(f"PlayerPrefs Editor - {identity.label()}")
        self._msg(f"Project set: {identity.label()}")
        self.on_refresh()

    def on_apply_identity(self) -> None:
        company = self.company_edit.text().strip()
        product = self.product_edit.text().strip()
        if not company or not product:
            QMessageBox.warning(self, "Missing project", "Company and product names are required.")
            return
        scope = "player" if self.scope_combo.currentText() == "player" else "editor"
        self.open_identity(AppIdentity(company=company, product=product, scope=scope))

    # ---------------------------
    # Listing
    # ---------------------------

    def on_refresh(self) -> None:
        try:
            items = self.editor.refresh()
        except (PrefsError, OSError, ValueError, TypeError) as e:
            self._error("Refresh failed", e)
            items = []
        self.table_model.set_items(items)
        self._update_empty_hint()
        self._msg(f"Loaded {len(items)} PlayerPref(s).")

    def _selected_rows(self) -> List[int]:
        rows = set()
        for idx in self.view.selectionModel().selectedRows():
            rows.add(self.proxy.mapToSource(idx).row())
        return sorted(rows)

    # ---------------------------
    # Save / delete
    # ---------------------------

    def _save_row(self, row: int) -> bool:
        item = self.table_model.item_at(row)
        if item is None:
            return False
        try:
            self.editor.save(item)
        except ParseFailure as e:
            # save() already restored the text buffer
            self.table_model.row_changed(row)
            self._error("Save failed", e)
            return False
        except (PrefsError, OSError, ValueError) as e:
            self._error("Save failed", e)
            return False
        self.table_model.row_changed(row)
        self._msg(f"PlayerPref '{item.key}' saved.")
        return True

    def on_save_selected(self) -> None:
        for row in self._selected_rows():
            self._save_row(row)

    def on_save_all(self) -> None:
        n = 0
        for row, item in enumerate(self.table_model.items()):
            if item.dirty and self._save_row(row):
                n += 1
        self._msg(f"Saved {n} PlayerPref(s).")

    def on_delete_selected(self) -> None:
        keys = [self.table_model.item_at(r).key for r in self._selected_rows()]
        for key in keys:
            try:
                if self.editor.delete(key, self._confirm):
                    self.table_model.remove_key(key)
                    self._msg(f"PlayerPref '{key}' deleted.")
            except (PrefsError, OSError) as e:
                self._error("Delete failed", e)
        self._update_empty_hint()

    def on_delete_all(self) -> None:
        try:
            if not self.editor.delete_all(self._confirm):
                return
        except (PrefsError, OSError) as e:
            self._error("Delete failed", e)
            return
        self.on_refresh()

    # ---------------------------
    # Add
    # ---------------------------

    def on_add(self) -> None:
        key = self.new_key_edit.text()
        kind = self.new_type_combo.currentText()
        text = self.new_value_edit.text()
        try:
            entry = self.editor.add(key, kind, text)  # type: ignore[arg-type]
        except (PrefsError, OSError, ValueError) as e:
            self._error("Add failed", e)
            return
        self.table_model.add_item(editable(entry))
        self.new_key_edit.clear()
        self.new_value_edit.clear()
        self._update_empty_hint()
        self._msg(f"PlayerPref '{entry.key}' added.")

    def on_load_key(self) -> None:
        """Show an existing key typed into the add form (no discovery needed)."""
        key = self.new_key_edit.text()
        try:
            entry = self.editor.lookup(key)
        except (PrefsError, OSError, ValueError, TypeError) as e:
            self._error("Load failed", e)
            return
        if entry is None:
            QMessageBox.information(self, "Not found", f"Key '{key}' is not stored.")
            return
        if self.table_model.row_for_key(key) < 0:
            self.table_model.add_item(editable(entry))
        self._update_empty_hint()
        self._msg(f"PlayerPref '{key}' loaded.")
