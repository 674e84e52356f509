from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QSortFilterProxyModel, Qt
from PyQt6.QtGui import QAction, QColor, QPalette
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTableView,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from core.app_identity import AppIdentity
from core.editor_settings import EditorSettings
from core.model import PREF_TYPES
from core.substrate import is_windows

from ui.actions.actions_mixin import ActionsMixin
from ui.models.prefs_table_model import PrefsTableModel

DARK_STYLESHEET = """
    QGroupBox {
        border: 1px solid rgba(255,255,255,0.12);
        border-radius: 10px;
        margin-top: 12px;
        padding: 10px;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 6px;
    }
    QPushButton {
        padding: 7px 12px;
        border-radius: 10px;
        border: 1px solid rgba(255,255,255,0.18);
    }
    QPushButton:hover {
        border-color: rgba(255,255,255,0.35);
    }
    QPushButton#dangerButton {
        background: rgba(200,60,60,0.35);
    }
    QPushButton#addButton {
        background: rgba(60,170,90,0.30);
    }
    QLineEdit, QComboBox {
        padding: 6px 8px;
        border-radius: 10px;
        border: 1px solid rgba(255,255,255,0.15);
        background: rgba(0,0,0,0.30);
    }
"""


def apply_dark_theme(app: QApplication) -> None:
    app.setStyle("Fusion")

    pal = QPalette()
    pal.setColor(QPalette.ColorRole.Window, QColor(24, 24, 27))
    pal.setColor(QPalette.ColorRole.WindowText, QColor(235, 235, 240))
    pal.setColor(QPalette.ColorRole.Base, QColor(18, 18, 20))
    pal.setColor(QPalette.ColorRole.AlternateBase, QColor(28, 28, 32))
    pal.setColor(QPalette.ColorRole.Text, QColor(235, 235, 240))
    pal.setColor(QPalette.ColorRole.Button, QColor(32, 32, 36))
    pal.setColor(QPalette.ColorRole.ButtonText, QColor(235, 235, 240))
    pal.setColor(QPalette.ColorRole.Highlight, QColor(90, 120, 255))
    pal.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
    pal.setColor(QPalette.ColorRole.PlaceholderText, QColor(140, 140, 150))
    app.setPalette(pal)
    app.setStyleSheet(DARK_STYLESHEET)


def apply_light_theme(app: QApplication) -> None:
    app.setStyle("Fusion")
    app.setPalette(app.style().standardPalette())
    app.setStyleSheet("")


class MainWindow(ActionsMixin, QMainWindow):
    """PlayerPrefs editor window.

    Layout and theming live here; button handlers are in ``ActionsMixin``.
    """

    def __init__(self, *, settings: EditorSettings, identity: Optional[AppIdentity] = None):
        super().__init__()
        self.settings = settings
        self.identity: Optional[AppIdentity] = None
        self.editor = None

        self._build_ui()
        self._build_actions_bar()
        self.on_dark_mode_toggled(self.settings.dark_mode)

        self.open_identity(identity or self.settings.identity())

    # ---------------------------
    # Theme
    # ---------------------------

    def on_dark_mode_toggled(self, enabled: bool) -> None:
        app = QApplication.instance()
        if app is None:
            return
        if enabled:
            apply_dark_theme(app)
        else:
            apply_light_theme(app)
        if self.settings.dark_mode != bool(enabled):
            self.settings.dark_mode = bool(enabled)
            self.settings.save()

    # ---------------------------
    # UI layout
    # ---------------------------

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)

        root.addWidget(self._build_project_group())

        # ---- Filter ----
        top = QHBoxLayout()
        top.addWidget(QLabel("Filter:"))
        self.filter_edit = QLineEdit()
        self.filter_edit.setPlaceholderText("key contains…")
        top.addWidget(self.filter_edit, 1)
        self.chk_dark_mode = QCheckBox("Dark mode")
        self.chk_dark_mode.setChecked(self.settings.dark_mode)
        self.chk_dark_mode.toggled.connect(self.on_dark_mode_toggled)
        top.addWidget(self.chk_dark_mode)
        root.addLayout(top)

        # ---- Table ----
        self.table_model = PrefsTableModel()
        self.proxy = QSortFilterProxyModel(self)
        self.proxy.setSourceModel(self.table_model)
        self.proxy.setFilterKeyColumn(PrefsTableModel.COL_KEY)
        self.proxy.setFilterCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
        self.filter_edit.textChanged.connect(self.proxy.setFilterFixedString)

        self.view = QTableView()
        self.view.setModel(self.proxy)
        self.view.verticalHeader().setVisible(False)
        self.view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.view.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.view.setAlternatingRowColors(True)
        hdr = self.view.horizontalHeader()
        hdr.setSectionResizeMode(PrefsTableModel.COL_KEY, QHeaderView.ResizeMode.Stretch)
        hdr.setSectionResizeMode(PrefsTableModel.COL_TYPE, QHeaderView.ResizeMode.ResizeToContents)
        hdr.setSectionResizeMode(PrefsTableModel.COL_VALUE, QHeaderView.ResizeMode.Stretch)
        root.addWidget(self.view, 1)

        self.empty_hint = QLabel(self._empty_hint_text())
        self.empty_hint.setWordWrap(True)
        self.empty_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self.empty_hint)

        row_btns = QHBoxLayout()
        btn_save = QPushButton("Save")
        btn_save.clicked.connect(self.on_save_selected)
        btn_delete = QPushButton("Delete")
        btn_delete.clicked.connect(self.on_delete_selected)
        row_btns.addStretch(1)
        row_btns.addWidget(btn_save)
        row_btns.addWidget(btn_delete)
        root.addLayout(row_btns)

        root.addWidget(self._build_add_group())

    def _build_project_group(self) -> QGroupBox:
        g = QGroupBox("Project")
        row = QHBoxLayout(g)

        self.company_edit = QLineEdit(self.settings.company)
        self.company_edit.setPlaceholderText("Company name")
        self.product_edit = QLineEdit(self.settings.product)
        self.product_edit.setPlaceholderText("Product name")
        self.scope_combo = QComboBox()
        self.scope_combo.addItems(["editor", "player"])
        self.scope_combo.setCurrentText(self.settings.scope)

        btn_open = QPushButton("Open")
        btn_open.clicked.connect(self.on_apply_identity)

        row.addWidget(QLabel("Company:"))
        row.addWidget(self.company_edit, 1)
        row.addWidget(QLabel("Product:"))
        row.addWidget(self.product_edit, 1)
        row.addWidget(self.scope_combo)
        row.addWidget(btn_open)
        return g

    def _build_add_group(self) -> QGroupBox:
        g = QGroupBox("Add new PlayerPref")
        form = QFormLayout(g)

        self.new_key_edit = QLineEdit()
        self.new_type_combo = QComboBox()
        self.new_type_combo.addItems(list(PREF_TYPES))
        self.new_value_edit = QLineEdit()
        self.new_value_edit.returnPressed.connect(self.on_add)

        btn_load = QPushButton("Load existing key")
        btn_load.clicked.connect(self.on_load_key)

        btn_add = QPushButton("Add and save")
        btn_add.setObjectName("addButton")
        btn_add.clicked.connect(self.on_add)

        form.addRow("Key", self.new_key_edit)
        form.addRow("Type", self.new_type_combo)
        form.addRow("Value", self.new_value_edit)
        buttons = QHBoxLayout()
        buttons.addWidget(btn_load)
        buttons.addWidget(btn_add, 1)
        form.addRow(buttons)
        return g

    def _build_actions_bar(self) -> None:
        act_refresh = QAction("Refresh", self)
        act_refresh.setShortcut("F5")
        act_refresh.triggered.connect(self.on_refresh)

        act_save_all = QAction("Save all", self)
        act_save_all.setShortcut("Ctrl+S")
        act_save_all.triggered.connect(self.on_save_all)

        act_delete_all = QAction("Delete all", self)
        act_delete_all.triggered.connect(self.on_delete_all)

        tb = QToolBar("Main", self)
        tb.setMovable(False)
        self.addToolBar(tb)
        tb.addAction(act_refresh)
        tb.addAction(act_save_all)
        tb.addSeparator()
        tb.addAction(act_delete_all)
        btn = tb.widgetForAction(act_delete_all)
        if btn is not None:
            btn.setObjectName("dangerButton")

    @staticmethod
    def _empty_hint_text() -> str:
        if is_windows():
            return "No PlayerPrefs are saved for this project."
        return (
            "No PlayerPrefs listed.\n"
            "Keys are only discovered automatically on Windows; "
            "use the form below to add or edit keys by name."
        )

    def _update_empty_hint(self) -> None:
        self.empty_hint.setVisible(self.table_model.rowCount() == 0)
