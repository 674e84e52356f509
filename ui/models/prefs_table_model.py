from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PyQt6.QtGui import QFont

from core.model import EditableEntry


class PrefsTableModel(QAbstractTableModel):
    """Model for the PlayerPrefs table.

    Column 2 (Value) is editable. Edits only change the row's text buffer;
    nothing reaches the store until the row is saved.
    """

    HEADERS = ["Key", "Type", "Value"]
    COL_KEY = 0
    COL_TYPE = 1
    COL_VALUE = 2

    def __init__(self):
        super().__init__()
        self._rows: List[EditableEntry] = []

    def set_items(self, items: List[EditableEntry]) -> None:
        self.beginResetModel()
        self._rows = list(items)
        self.endResetModel()

    def items(self) -> List[EditableEntry]:
        return list(self._rows)

    def item_at(self, row: int) -> Optional[EditableEntry]:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def row_for_key(self, key: str) -> int:
        for i, it in enumerate(self._rows):
            if it.key == key:
                return i
        return -1

    def add_item(self, item: EditableEntry) -> None:
        """Insert keeping the rows sorted by key."""
        pos = 0
        while pos < len(self._rows) and self._rows[pos].key < item.key:
            pos += 1
        self.beginInsertRows(QModelIndex(), pos, pos)
        self._rows.insert(pos, item)
        self.endInsertRows()

    def remove_key(self, key: str) -> None:
        r = self.row_for_key(key)
        if r < 0:
            return
        self.beginRemoveRows(QModelIndex(), r, r)
        del self._rows[r]
        self.endRemoveRows()

    def row_changed(self, row: int) -> None:
        if 0 <= row < len(self._rows):
            self.dataChanged.emit(self.index(row, 0), self.index(row, len(self.HEADERS) - 1))

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        return 0 if parent.isValid() else len(self.HEADERS)

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):  # noqa: N802
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal and 0 <= section < len(self.HEADERS):
            return self.HEADERS[section]
        return None

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # noqa: N802
        if not index.isValid():
            return None
        item = self.item_at(index.row())
        if item is None:
            return None
        c = index.column()

        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.EditRole):
            if c == self.COL_KEY:
                return item.key
            if c == self.COL_TYPE:
                return item.kind
            if c == self.COL_VALUE:
                return item.text
        if role == Qt.ItemDataRole.ToolTipRole and c == self.COL_KEY:
            return item.key
        if role == Qt.ItemDataRole.FontRole and c == self.COL_VALUE and item.dirty:
            # unsaved
            f = QFont()
            f.setItalic(True)
            return f
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        f = Qt.ItemFlag.ItemIsSelectable | Qt.ItemFlag.ItemIsEnabled
        if index.column() == self.COL_VALUE:
            f |= Qt.ItemFlag.ItemIsEditable
        return f

    def setData(self, index: QModelIndex, value, role: int = Qt.ItemDataRole.EditRole):  # noqa: N802
        if role != Qt.ItemDataRole.EditRole or not index.isValid():
            return False
        if index.column() != self.COL_VALUE:
            return False
        item = self.item_at(index.row())
        if item is None:
            return False
        item.text = "" if value is None else str(value)
        self.row_changed(index.row())
        return True
