"""ContrastGridWindow

Main window: two text areas (foreground / background entries), the contrast
grid and a small toolbar (clear, randomize, dark mode). Columns are
foreground entries, rows are background entries.

Header sections are movable; a section move is replayed through
DragReorderController so the grid state is the single source of order.
Clicking a header swatch toggles the color picker for that entry; a mouse
press anywhere else in the application closes it (application event filter).
Alt+Up/Down/Home/End move the current row, Alt+Left/Right the current column.

Text areas are rewritten to their canonical form after every edit; the
cursor is carried over the rewrite so typing continues where it was.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QEvent, Qt, QTimer
from PyQt6.QtGui import QColor, QGuiApplication
from PyQt6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from contrastgrid.app.preferences import ThemePreferenceStore
from contrastgrid.design.color_model import CanonicalColor, parse_color
from contrastgrid.design.contrast import format_ratio
from contrastgrid.models import Axis, ColorEntry
from contrastgrid.services.entry_parser import remap_cursor
from contrastgrid.services.event_bus import GridEvent
from contrastgrid.viewmodels.color_picker_viewmodel import ColorPickerViewModel
from contrastgrid.viewmodels.contrast_grid_viewmodel import GridState
from contrastgrid.viewmodels.drag_reorder import DragReorderController
from contrastgrid.views.color_picker_dialog import ColorPickerDialog

__all__ = ["ContrastGridWindow"]

LEVEL_BADGES = {"AAA": "AAA", "AA": "AA", "FAIL": "✕"}

DARK_QSS = "QWidget { background: #1E1E1E; color: #EEEEEE; }"

# Alt+key reorders the current row (background) or column (foreground)
_ROW_KEYS = {
    Qt.Key.Key_Up: "alt+up",
    Qt.Key.Key_Down: "alt+down",
    Qt.Key.Key_Home: "ctrl+home",
    Qt.Key.Key_End: "ctrl+end",
}
_COLUMN_KEYS = {
    Qt.Key.Key_Left: "up",
    Qt.Key.Key_Right: "down",
}


def _platform_prefers_dark() -> bool:
    try:
        scheme = QGuiApplication.styleHints().colorScheme()
        return scheme == Qt.ColorScheme.Dark
    except AttributeError:  # Qt < 6.5 has no colorScheme()
        return False


def _header_text(entry: ColorEntry) -> str:
    label = (entry.label or "").strip()
    return f"{entry.color}\n{label}" if label else entry.color


class ContrastGridWindow(QMainWindow):  # pragma: no cover - interactive GUI, logic tested via viewmodels
    def __init__(
        self,
        grid: GridState,
        theme_store: ThemePreferenceStore,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Contrast Grid Editor")
        self.grid = grid
        self.theme_store = theme_store
        self.picker = ColorPickerViewModel(grid)
        self.drag = DragReorderController(grid)
        self._syncing_text = False
        self._build_ui()
        self.grid.bus.subscribe(GridEvent.AXIS_CHANGED, lambda _e: self._refresh())
        self.grid.bus.subscribe(GridEvent.GRID_CLEARED, lambda _e: self._refresh())
        self.grid.bus.subscribe(GridEvent.GRID_RANDOMIZED, lambda _e: self._refresh())
        self.grid.bus.subscribe(GridEvent.PERSISTENCE_FAILED, self._on_persist_failed)
        self._dark = self.theme_store.load(platform_dark=_platform_prefers_dark())
        self.chk_dark.setChecked(self._dark)
        self._apply_theme()
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)
        self._refresh()

    def _build_ui(self):
        central = QWidget()
        root = QVBoxLayout(central)

        toolbar = QHBoxLayout()
        btn_clear = QPushButton("Clear")
        btn_clear.clicked.connect(self.grid.clear)  # type: ignore
        toolbar.addWidget(btn_clear)
        btn_random = QPushButton("Randomize")
        btn_random.clicked.connect(lambda: self.grid.randomize())  # type: ignore
        toolbar.addWidget(btn_random)
        toolbar.addStretch(1)
        self.chk_dark = QCheckBox("Dark mode")
        self.chk_dark.toggled.connect(self._on_dark_toggled)  # type: ignore
        toolbar.addWidget(self.chk_dark)
        root.addLayout(toolbar)

        inputs = QHBoxLayout()
        self.text_edits = {}
        for axis, title in ((Axis.FOREGROUND, "Foreground Colors:"), (Axis.BACKGROUND, "Background Colors:")):
            col = QVBoxLayout()
            col.addWidget(QLabel(title))
            edit = QPlainTextEdit()
            edit.setPlaceholderText("Enter colors (one per line), optionally followed by a label")
            edit.textChanged.connect(lambda a=axis: self._on_text_changed(a))  # type: ignore
            self.text_edits[axis] = edit
            col.addWidget(edit)
            inputs.addLayout(col)
        root.addLayout(inputs)

        self.table = QTableWidget(0, 0)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        for header, axis in (
            (self.table.horizontalHeader(), Axis.FOREGROUND),
            (self.table.verticalHeader(), Axis.BACKGROUND),
        ):
            header.setSectionsMovable(True)
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.sectionMoved.connect(  # type: ignore
                lambda _logical, old, new, a=axis: self._on_section_moved(a, old, new)
            )
            header.sectionClicked.connect(lambda index, a=axis: self._on_swatch_clicked(a, index))  # type: ignore
        root.addWidget(self.table, 1)

        legend = QLabel("AAA: ratio ≥ 7.0    AA: ratio ≥ 4.5    ✕: failed contrast ratio")
        root.addWidget(legend)
        self.status = QLabel("")
        root.addWidget(self.status)
        self.setCentralWidget(central)

        self.picker_dialog = ColorPickerDialog(self.picker, self)
        self.picker_dialog.hide()

    # Rendering ------------------------------------------------------------
    def _refresh(self):
        self._sync_text()
        self._populate_table()
        if self.picker.is_open and self.picker_dialog.isVisible():
            self.picker_dialog.sync_from_viewmodel()

    def _sync_text(self):
        self._syncing_text = True
        try:
            for axis, edit in self.text_edits.items():
                canonical = self.grid.axis_text(axis)
                current = edit.toPlainText()
                if current != canonical:
                    position = remap_cursor(current, canonical, edit.textCursor().position())
                    edit.setPlainText(canonical)
                    cursor = edit.textCursor()
                    cursor.setPosition(position)
                    edit.setTextCursor(cursor)
        finally:
            self._syncing_text = False

    def _populate_table(self):
        rows = self.grid.rows()
        cols = self.grid.columns()
        # Dropping to zero resets any visual section order left by a drag
        self.table.setRowCount(0)
        self.table.setColumnCount(0)
        self.table.setRowCount(len(rows))
        self.table.setColumnCount(len(cols))
        self.table.setHorizontalHeaderLabels([_header_text(e) for e in cols])
        self.table.setVerticalHeaderLabels([_header_text(e) for e in rows])
        for r, row_entry in enumerate(rows):
            bg = parse_color(row_entry.color)
            for c, col_entry in enumerate(cols):
                fg = parse_color(col_entry.color)
                result = self.grid.cell_ratio(r, c)
                item = QTableWidgetItem(f"{format_ratio(result.ratio)} {LEVEL_BADGES[result.level.value]}")
                item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                if isinstance(bg, CanonicalColor):
                    item.setBackground(QColor(bg.hex))
                if isinstance(fg, CanonicalColor):
                    item.setForeground(QColor(fg.hex))
                item.setToolTip(result.level.value)
                self.table.setItem(r, c, item)

    def _apply_theme(self):
        self.setStyleSheet(DARK_QSS if self._dark else "")

    # Handlers -------------------------------------------------------------
    def _on_text_changed(self, axis: Axis):
        if self._syncing_text:
            return
        self.grid.set_axis_text(axis, self.text_edits[axis].toPlainText())

    def _on_section_moved(self, axis: Axis, old_visual: int, new_visual: int):
        # Rebuilding the header inside its own signal is unsafe; replay on the next tick
        QTimer.singleShot(0, lambda: self._replay_move(axis, old_visual, new_visual))

    def _replay_move(self, axis: Axis, old_visual: int, new_visual: int):
        self.drag.begin(axis, old_visual)
        if not self.drag.over(new_visual):
            self._populate_table()
        self.drag.end()

    def _on_swatch_clicked(self, axis: Axis, index: int):
        self.picker.click_swatch(axis, index)
        if self.picker.is_open:
            self.picker_dialog.sync_from_viewmodel()
            self.picker_dialog.show()
            self.picker_dialog.raise_()
        else:
            self.picker_dialog.hide()

    def _on_dark_toggled(self, checked: bool):
        if checked == self._dark:
            return
        self._dark = self.theme_store.toggle(self._dark)
        self._apply_theme()
        self.grid.bus.publish(GridEvent.THEME_CHANGED, {"dark": self._dark})

    def _on_persist_failed(self, event):
        self.status.setText(f"Changes are not being saved: {event.payload}")

    def _on_table_key(self, event) -> bool:
        if not event.modifiers() & Qt.KeyboardModifier.AltModifier:
            return False
        row, col = self.table.currentRow(), self.table.currentColumn()
        key = event.key()
        if key in _ROW_KEYS:
            axis, index, command = Axis.BACKGROUND, row, _ROW_KEYS[key]
        elif key in _COLUMN_KEYS:
            axis, index, command = Axis.FOREGROUND, col, _COLUMN_KEYS[key]
        else:
            return False
        if index < 0:
            return False
        result = self.grid.move(axis, index, command)
        if result.changed:
            if axis is Axis.BACKGROUND:
                self.table.setCurrentCell(result.focus_index, max(col, 0))
            else:
                self.table.setCurrentCell(max(row, 0), result.focus_index)
        self.status.setText(result.announcement)
        return True

    def _on_picker_surface(self, widget: QWidget) -> bool:
        # Header swatches toggle the picker themselves
        for surface in (self.picker_dialog, self.table.horizontalHeader(), self.table.verticalHeader()):
            if widget is surface or surface.isAncestorOf(widget):
                return True
        return False

    def _close_picker(self):
        self.picker.click_outside()
        self.picker_dialog.hide()

    def eventFilter(self, obj, event):  # type: ignore
        etype = event.type()
        if etype == QEvent.Type.KeyPress and obj is self.table:
            return self._on_table_key(event)
        if (
            etype == QEvent.Type.MouseButtonPress
            and self.picker.is_open
            and isinstance(obj, QWidget)
            and not self._on_picker_surface(obj)
        ):
            self._close_picker()
        return super().eventFilter(obj, event)

    def closeEvent(self, event):  # type: ignore
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self._close_picker()
        super().closeEvent(event)
