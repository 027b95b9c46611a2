"""
Orbimol Toolbar
Barra horizontal con la notación y los controles de visualización.
"""
from __future__ import annotations

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QLabel,
    QLineEdit,
    QToolBar,
)
from PyQt6.QtGui import QAction
from PyQt6.QtCore import pyqtSignal, QSize

from core.model import DisplayMode, ViewSettings


DISPLAY_MODE_LABELS = {
    DisplayMode.BALL_AND_STICK: "Bolas y varillas",
    DisplayMode.SPACE_FILLING: "Relleno espacial",
    DisplayMode.WIREFRAME: "Alambre",
}


class ViewerToolbar(QToolBar):
    """
    Toolbar del visor: notación, modo de representación y conmutadores.
    """

    notation_submitted = pyqtSignal(str)
    display_mode_changed = pyqtSignal(object)
    charges_toggled = pyqtSignal(bool)
    labels_toggled = pyqtSignal(bool)
    auto_rotate_toggled = pyqtSignal(bool)
    zoom_in_requested = pyqtSignal()
    zoom_out_requested = pyqtSignal()

    def __init__(self, parent=None) -> None:
        super().__init__("Controles del visor", parent)
        self.setMovable(False)
        self.setFloatable(False)
        self.setIconSize(QSize(20, 20))

        self.addWidget(QLabel("Notación "))
        self.notation_edit = QLineEdit()
        self.notation_edit.setPlaceholderText("p. ej. CC(=O)OC1=CC=CC=C1C(=O)O")
        self.notation_edit.setMinimumWidth(260)
        self.notation_edit.returnPressed.connect(self._emit_notation)
        self.addWidget(self.notation_edit)

        self.action_generate = QAction("Generar", self)
        self.action_generate.triggered.connect(self._emit_notation)
        self.addAction(self.action_generate)
        self.addSeparator()

        self.mode_combo = QComboBox()
        for mode, label in DISPLAY_MODE_LABELS.items():
            self.mode_combo.addItem(label, mode.value)
        self.mode_combo.currentIndexChanged.connect(self._emit_display_mode)
        self.addWidget(self.mode_combo)

        self.charges_check = QCheckBox("Cargas")
        self.charges_check.toggled.connect(self.charges_toggled)
        self.addWidget(self.charges_check)
        self.addSeparator()

        self.action_zoom_out = QAction("Zoom -", self)
        self.action_zoom_out.setToolTip("Alejar")
        self.action_zoom_out.triggered.connect(self.zoom_out_requested)
        self.addAction(self.action_zoom_out)

        self.action_zoom_in = QAction("Zoom +", self)
        self.action_zoom_in.setToolTip("Acercar")
        self.action_zoom_in.triggered.connect(self.zoom_in_requested)
        self.addAction(self.action_zoom_in)

        self.action_auto_rotate = QAction("Rotar", self)
        self.action_auto_rotate.setCheckable(True)
        self.action_auto_rotate.setToolTip("Rotación automática")
        self.action_auto_rotate.toggled.connect(self.auto_rotate_toggled)
        self.addAction(self.action_auto_rotate)

        self.action_labels = QAction("Etiquetas", self)
        self.action_labels.setCheckable(True)
        self.action_labels.setToolTip("Mostrar etiquetas de átomos")
        self.action_labels.toggled.connect(self.labels_toggled)
        self.addAction(self.action_labels)

    def sync_from_settings(self, settings: ViewSettings) -> None:
        """Refleja las preferencias en los controles sin emitir señales."""
        widgets = (self.mode_combo, self.charges_check, self.action_auto_rotate, self.action_labels)
        for widget in widgets:
            widget.blockSignals(True)
        index = self.mode_combo.findData(settings.display_mode.value)
        if index >= 0:
            self.mode_combo.setCurrentIndex(index)
        self.charges_check.setChecked(settings.show_charges)
        self.action_auto_rotate.setChecked(settings.auto_rotate)
        self.action_labels.setChecked(settings.show_labels)
        for widget in widgets:
            widget.blockSignals(False)

    def set_notation(self, notation: str) -> None:
        self.notation_edit.setText(notation)

    def _emit_notation(self) -> None:
        self.notation_submitted.emit(self.notation_edit.text())

    def _emit_display_mode(self) -> None:
        mode = self.mode_combo.currentData()
        if mode is not None:
            self.display_mode_changed.emit(DisplayMode(mode))
