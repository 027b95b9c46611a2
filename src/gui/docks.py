"""
Orbimol Dock Widgets
Panel de inspección del átomo seleccionado y resumen de la molécula.
"""
from typing import Optional

from PyQt6.QtWidgets import (
    QDockWidget,
    QWidget,
    QVBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QHeaderView,
)
from PyQt6.QtCore import Qt

from scene.composer import AtomInfo, SELECTION_HINT, charge_sign


class InspectorDock(QDockWidget):
    """
    Dock widget displaying properties of the selected atom.
    """

    def __init__(self, parent=None):
        super().__init__("Inspector", parent)
        self.setAllowedAreas(Qt.DockWidgetArea.LeftDockWidgetArea | Qt.DockWidgetArea.RightDockWidgetArea)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)

        self.summary_label = QLabel("0 átomos · 0 enlaces")
        self.summary_label.setStyleSheet("font-weight: 600; padding: 8px 10px;")
        layout.addWidget(self.summary_label)

        self.info_label = QLabel(SELECTION_HINT)
        self.info_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.info_label.setWordWrap(True)
        self.info_label.setStyleSheet("color: #666666; font-style: italic; padding: 10px;")
        layout.addWidget(self.info_label)

        self.prop_table = QTableWidget(0, 2)
        self.prop_table.setHorizontalHeaderLabels(["Propiedad", "Valor"])
        self.prop_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.prop_table.verticalHeader().setVisible(False)
        self.prop_table.setAlternatingRowColors(True)
        self.prop_table.setVisible(False)
        layout.addWidget(self.prop_table)

        layout.addStretch()
        self.setWidget(container)

    def set_summary(self, atom_count: int, bond_count: int) -> None:
        self.summary_label.setText(f"{atom_count} átomos · {bond_count} enlaces")

    def set_atom_info(self, info: Optional[AtomInfo]) -> None:
        """Update the inspector with the selected atom, or clear it."""
        if info is None:
            self.info_label.setText(SELECTION_HINT)
            self.info_label.setVisible(True)
            self.prop_table.setVisible(False)
            return

        self.info_label.setVisible(False)
        self.prop_table.setVisible(True)

        data = [
            ("Índice", str(info.atom_idx)),
            ("Elemento", info.element),
        ]
        if info.charge is not None:
            data.append(("Carga", f"{charge_sign(info.charge)}{abs(info.charge)}"))
        data.append(("Enlaces", str(info.bond_count)))

        self.prop_table.setRowCount(len(data))
        for i, (key, val) in enumerate(data):
            self.prop_table.setItem(i, 0, QTableWidgetItem(key))
            self.prop_table.setItem(i, 1, QTableWidgetItem(val))

    def rows(self) -> list[tuple[str, str]]:
        """Contenido visible de la tabla como pares (propiedad, valor)."""
        result = []
        for i in range(self.prop_table.rowCount()):
            result.append((self.prop_table.item(i, 0).text(), self.prop_table.item(i, 1).text()))
        return result
