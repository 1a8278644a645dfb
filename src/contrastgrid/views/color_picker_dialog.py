"""ColorPickerDialog

Small tool window with HSL sliders, RGB spin boxes and a hex field. All
state lives in `ColorPickerViewModel`; the dialog only mirrors it and forwards
edits. Positioning next to the clicked swatch is left to the caller.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from contrastgrid.viewmodels.color_picker_viewmodel import ColorPickerViewModel

__all__ = ["ColorPickerDialog"]


class ColorPickerDialog(QFrame):  # pragma: no cover - interactive GUI, logic tested via viewmodel
    def __init__(self, viewmodel: ColorPickerViewModel, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("ColorPickerDialog")
        self.setWindowFlags(Qt.WindowType.Tool)
        self.viewmodel = viewmodel
        self._syncing = False
        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)
        self.swatch = QLabel()
        self.swatch.setFixedHeight(32)
        root.addWidget(self.swatch)

        form = QFormLayout()
        self.sliders = {}
        for key, maximum in (("h", 360), ("s", 100), ("l", 100)):
            slider = QSlider(Qt.Orientation.Horizontal)
            slider.setRange(0, maximum)
            slider.valueChanged.connect(lambda v, k=key: self._on_hsl(k, v))  # type: ignore
            self.sliders[key] = slider
            form.addRow(key.upper(), slider)
        root.addLayout(form)

        rgb_row = QHBoxLayout()
        self.spins = {}
        for key in ("r", "g", "b"):
            spin = QSpinBox()
            spin.setRange(0, 255)
            spin.setPrefix(f"{key.upper()} ")
            spin.valueChanged.connect(lambda v, k=key: self._on_rgb(k, v))  # type: ignore
            self.spins[key] = spin
            rgb_row.addWidget(spin)
        root.addLayout(rgb_row)

        hex_row = QHBoxLayout()
        self.hex_edit = QLineEdit()
        self.hex_edit.setMaxLength(32)
        self.hex_edit.editingFinished.connect(self._on_hex)  # type: ignore
        hex_row.addWidget(self.hex_edit)
        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self._on_close)  # type: ignore
        hex_row.addWidget(btn_close)
        root.addLayout(hex_row)

    # Sync -----------------------------------------------------------------
    def sync_from_viewmodel(self):
        vm = self.viewmodel
        self._syncing = True
        try:
            for key, value in zip(("h", "s", "l"), vm.hsl):
                self.sliders[key].setValue(value)
            for key, value in zip(("r", "g", "b"), vm.rgb):
                self.spins[key].setValue(value)
            self.hex_edit.setText(vm.hex)
            self.swatch.setStyleSheet(f"background: {vm.hex}; border: 1px solid #888;")
        finally:
            self._syncing = False

    # Handlers -------------------------------------------------------------
    def _on_hsl(self, key: str, value: int):
        if self._syncing:
            return
        self.viewmodel.set_hsl(**{key: value})
        self.sync_from_viewmodel()

    def _on_rgb(self, key: str, value: int):
        if self._syncing:
            return
        self.viewmodel.set_rgb(**{key: value})
        self.sync_from_viewmodel()

    def _on_hex(self):
        if self._syncing:
            return
        self.viewmodel.set_hex(self.hex_edit.text())
        self.sync_from_viewmodel()

    def _on_close(self):
        self.viewmodel.close()
        self.hide()

    def hideEvent(self, event):  # type: ignore
        # Closed through the window manager
        self.viewmodel.click_outside()
        super().hideEvent(event)
