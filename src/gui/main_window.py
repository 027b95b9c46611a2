"""
Orbimol Main Window
Visor molecular 3D con menú, barra de controles, visor central e inspector.
"""
import logging

from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QMainWindow,
    QMessageBox,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence

from gui.viewport import MoleculeViewport
from gui.toolbar import ViewerToolbar
from gui.docks import InspectorDock
from gui.styles import MAIN_STYLESHEET
from chemio.persistence import PersistenceManager, ViewerDocument
from chemio import rdkit_io
from core.errors import OrbimolError
from core.generator import DEFAULT_SEED

logger = logging.getLogger(__name__)

# Ácido acetilsalicílico
DEFAULT_NOTATION = "CC(=O)OC1=CC=CC=C1C(=O)O"

ORBM_FILTER = "Archivo Orbimol (*.orbm);;Todos los archivos (*.*)"


class OrbimolWindow(QMainWindow):
    """
    Main window for the Orbimol viewer.
    Hosts the notation toolbar, the 3D viewport and the atom inspector.
    """
    def __init__(self, notation: str = DEFAULT_NOTATION) -> None:
        super().__init__()
        self.setWindowTitle("Orbimol - Visor Molecular 3D")
        self.resize(1100, 760)
        self.setStyleSheet(MAIN_STYLESHEET)

        # === CENTRAL VIEWPORT ===
        self.viewport = MoleculeViewport(self)
        self.setCentralWidget(self.viewport)

        # === DOCK WIDGETS ===
        self.inspector_dock = InspectorDock(self)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.inspector_dock)

        # === ACTIONS, MENU AND TOOLBAR ===
        self.toolbar = ViewerToolbar(self)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, self.toolbar)
        self._create_actions()
        self._create_menu_bar()

        # === SIGNAL CONNECTIONS ===
        self.toolbar.notation_submitted.connect(self.load_notation)
        self.toolbar.display_mode_changed.connect(self.viewport.set_display_mode)
        self.toolbar.charges_toggled.connect(self.viewport.set_show_charges)
        self.toolbar.labels_toggled.connect(self.viewport.set_show_labels)
        self.toolbar.auto_rotate_toggled.connect(self._on_auto_rotate_toggled)
        self.toolbar.zoom_in_requested.connect(self.viewport.zoom_in)
        self.toolbar.zoom_out_requested.connect(self.viewport.zoom_out)

        self.viewport.selection_changed.connect(self.inspector_dock.set_atom_info)
        self.viewport.graph_changed.connect(self._on_graph_changed)
        self.viewport.zoom_changed.connect(self._on_zoom_changed)

        self.toolbar.sync_from_settings(self.viewport.settings)
        self.load_notation(notation)

    def _create_actions(self) -> None:
        """Create all QActions for menus."""
        # --- File Actions ---
        self.action_open = QAction("Abrir...", self)
        self.action_open.setShortcut(QKeySequence.StandardKey.Open)
        self.action_open.triggered.connect(self._on_file_open)

        self.action_save = QAction("Guardar...", self)
        self.action_save.setShortcut(QKeySequence.StandardKey.Save)
        self.action_save.triggered.connect(self._on_file_save)

        self.action_export_molfile = QAction("Molfile...", self)
        self.action_export_molfile.triggered.connect(self._on_export_molfile)

        self.action_export_smiles = QAction("SMILES...", self)
        self.action_export_smiles.triggered.connect(self._on_export_smiles)

        self.action_quit = QAction("Salir", self)
        self.action_quit.setShortcut(QKeySequence.StandardKey.Quit)
        self.action_quit.triggered.connect(self.close)

        # --- View Actions ---
        self.action_zoom_in = QAction("Zoom +", self)
        self.action_zoom_in.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self.action_zoom_in.triggered.connect(self.viewport.zoom_in)

        self.action_zoom_out = QAction("Zoom -", self)
        self.action_zoom_out.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self.action_zoom_out.triggered.connect(self.viewport.zoom_out)

        self.action_reset_view = QAction("Restablecer vista", self)
        self.action_reset_view.setShortcut(QKeySequence("Ctrl+0"))
        self.action_reset_view.triggered.connect(self.viewport.reset_view)

        self.action_clear_selection = QAction("Quitar selección", self)
        self.action_clear_selection.setShortcut(QKeySequence("Esc"))
        self.action_clear_selection.triggered.connect(self._on_clear_selection)

    def _create_menu_bar(self) -> None:
        """Create the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("Archivo")
        file_menu.addAction(self.action_open)
        file_menu.addAction(self.action_save)
        export_menu = file_menu.addMenu("Exportar como")
        export_menu.addAction(self.action_export_molfile)
        export_menu.addAction(self.action_export_smiles)
        file_menu.addSeparator()
        file_menu.addAction(self.action_quit)

        view_menu = menubar.addMenu("Ver")
        view_menu.addAction(self.action_zoom_in)
        view_menu.addAction(self.action_zoom_out)
        view_menu.addAction(self.action_reset_view)
        view_menu.addSeparator()
        view_menu.addAction(self.toolbar.action_auto_rotate)
        view_menu.addAction(self.toolbar.action_labels)
        view_menu.addAction(self.action_clear_selection)
        view_menu.addSeparator()
        view_menu.addAction(self.inspector_dock.toggleViewAction())

        help_menu = menubar.addMenu("Ayuda")
        self.action_about = QAction("Acerca de Orbimol...", self)
        self.action_about.triggered.connect(self._on_about)
        help_menu.addAction(self.action_about)

    # -------------------------------------------------------------------------
    # Molecule
    # -------------------------------------------------------------------------
    def load_notation(self, notation: str) -> None:
        """Genera y muestra la molécula de una notación.

        Una notación vacía vuelve a la molécula por defecto.
        """
        if not notation:
            notation = DEFAULT_NOTATION
        self.toolbar.set_notation(notation)
        self.viewport.set_notation(notation)
        self._update_status()

    def _on_graph_changed(self, atom_count: int, bond_count: int) -> None:
        self.inspector_dock.set_summary(atom_count, bond_count)

    def _on_zoom_changed(self, value: float) -> None:
        self.statusBar().showMessage(f"Zoom: {value:.1f}x", 2000)

    def _on_auto_rotate_toggled(self, enabled: bool) -> None:
        self.viewport.set_auto_rotate(enabled)

    def _on_clear_selection(self) -> None:
        self.viewport.composer.clear_selection()
        self.inspector_dock.set_atom_info(None)
        self.viewport.update()

    def _update_status(self) -> None:
        graph = self.viewport.composer.graph
        notation = self.viewport.composer.notation
        message = f"{graph.atom_count} átomos, {graph.bond_count} enlaces"
        if rdkit_io.rdkit_available() and notation:
            if rdkit_io.is_parsable_smiles(notation):
                message += " · SMILES válido según RDKit"
            else:
                message += " · RDKit no reconoce la notación"
        self.statusBar().showMessage(message)

    # -------------------------------------------------------------------------
    # File Menu Handlers
    # -------------------------------------------------------------------------
    def _on_file_open(self) -> None:
        """Open an Orbimol document."""
        filepath, _ = QFileDialog.getOpenFileName(self, "Abrir archivo", "", ORBM_FILTER)
        if filepath:
            self.open_document(filepath)

    def open_document(self, filepath: str) -> None:
        try:
            document = PersistenceManager.load_from_file(filepath)
        except (OSError, ValueError, TypeError, KeyError, OrbimolError) as e:
            logger.exception("No se pudo abrir %s", filepath)
            QMessageBox.warning(self, "Error", f"No se pudo abrir el archivo:\n{e}")
            return
        self.viewport.set_graph(document.graph, document.notation)
        self.viewport.apply_settings(document.settings)
        self.toolbar.set_notation(document.notation)
        self.toolbar.sync_from_settings(document.settings)
        self._update_status()
        self.statusBar().showMessage(f"Abierto: {filepath}")

    def _on_file_save(self) -> None:
        """Save the current view as an Orbimol document."""
        filepath, _ = QFileDialog.getSaveFileName(self, "Guardar archivo", "", ORBM_FILTER)
        if filepath:
            self.save_document(filepath)

    def save_document(self, filepath: str) -> None:
        composer = self.viewport.composer
        document = ViewerDocument(
            notation=composer.notation,
            graph=composer.graph,
            settings=composer.settings,
            seed=DEFAULT_SEED,
        )
        try:
            PersistenceManager.save_to_file(filepath, document)
        except OSError as e:
            logger.exception("No se pudo guardar %s", filepath)
            QMessageBox.warning(self, "Error", f"No se pudo guardar:\n{e}")
            return
        self.statusBar().showMessage(f"Guardado: {filepath}")

    def _on_export_molfile(self) -> None:
        """Export the current molecule as a MolBlock."""
        filepath, _ = QFileDialog.getSaveFileName(self, "Exportar Molfile", "", "Archivo MOL (*.mol)")
        if not filepath:
            return
        try:
            molfile = rdkit_io.molgraph_to_molfile(self.viewport.composer.graph)
            with open(filepath, "w") as f:
                f.write(molfile)
        except (OSError, RuntimeError) as e:
            logger.exception("No se pudo exportar el Molfile")
            QMessageBox.warning(self, "Error", f"No se pudo exportar Molfile:\n{e}")
            return
        self.statusBar().showMessage(f"Exportado: {filepath}")

    def _on_export_smiles(self) -> None:
        """Export the current molecule as SMILES and copy it to the clipboard."""
        try:
            smiles = rdkit_io.molgraph_to_smiles(self.viewport.composer.graph)
        except RuntimeError as e:
            logger.exception("No se pudo exportar SMILES")
            QMessageBox.warning(self, "Error", f"No se pudo exportar SMILES:\n{e}")
            return
        QApplication.clipboard().setText(smiles)
        QMessageBox.information(self, "SMILES", smiles)

    # -------------------------------------------------------------------------
    # Help Menu Handlers
    # -------------------------------------------------------------------------
    def _on_about(self) -> None:
        """Show about dialog."""
        QMessageBox.about(
            self,
            "Acerca de Orbimol",
            "<h2>Orbimol</h2>"
            "<p>Visor Molecular 3D</p>"
            f"<p>Versión {PersistenceManager.VERSION}</p>"
            "<p>Genera un modelo de bolas y varillas a partir de una notación "
            "tipo SMILES y permite explorarlo en tres dimensiones.</p>",
        )
