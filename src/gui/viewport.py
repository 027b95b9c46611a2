"""
Orbimol Viewport
Superficie de dibujo 3D basada en QPainter con bucle de animación por QTimer.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetrics,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPen,
    QRadialGradient,
    QWheelEvent,
)
from PyQt6.QtWidgets import QWidget

from core.camera import CameraController, ElapsedClock
from core.model import DisplayMode, MolGraph, ViewSettings
from scene.composer import AtomInfo, SceneComposer, SceneFrame
from scene.projection import Projector, pick_atom
from scene.style import style_for
from gui.styles import BADGE_BG, BADGE_BORDER, BG_VIEWPORT, INFO_BG, LABEL_BG, TEXT_PRIMARY

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
# Radianes de órbita por píxel arrastrado.
ORBIT_SENSITIVITY = 0.01
# Píxeles de arrastre a partir de los cuales un clic deja de ser selección.
DRAG_THRESHOLD_PX = 3.0
INFO_OFFSET = 0.5


class MoleculeViewport(QWidget):
    """
    Visor 3D de la molécula activa.
    Compone la escena en cada fotograma y la dibuja con proyección en perspectiva.
    """

    selection_changed = pyqtSignal(object)
    graph_changed = pyqtSignal(int, int)
    zoom_changed = pyqtSignal(float)

    def __init__(self, parent=None, clock: Optional[ElapsedClock] = None) -> None:
        super().__init__(parent)
        self.composer = SceneComposer()
        self.camera = CameraController(settings=self.composer.settings)
        self.clock = clock or ElapsedClock()

        self._last_frame: Optional[SceneFrame] = None
        self._press_pos: Optional[QPointF] = None
        self._last_drag_pos: Optional[QPointF] = None
        self._dragging = False

        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self.update)

        self.setMinimumSize(320, 240)
        self.setMouseTracking(False)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def settings(self):
        return self.composer.settings

    def set_notation(self, notation: str) -> MolGraph:
        graph = self.composer.set_notation(notation)
        self._after_graph_swap()
        return graph

    def set_graph(self, graph: MolGraph, notation: str = "") -> None:
        self.composer.set_graph(graph)
        self.composer.notation = notation
        self._after_graph_swap()

    def apply_settings(self, settings: ViewSettings) -> None:
        """Adopta preferencias completas (por ejemplo, las de un archivo)."""
        self.composer.settings = settings
        self.camera.settings = settings
        self.set_auto_rotate(settings.auto_rotate)
        self.zoom_changed.emit(self.camera.zoom)
        self.selection_changed.emit(self.composer.selected_atom_info())

    def set_display_mode(self, mode: DisplayMode) -> None:
        self.settings.display_mode = DisplayMode(mode)
        self.update()

    def set_show_charges(self, visible: bool) -> None:
        self.settings.show_charges = visible
        self.selection_changed.emit(self.composer.selected_atom_info())
        self.update()

    def set_show_labels(self, visible: bool) -> None:
        self.settings.show_labels = visible
        self.update()

    def set_auto_rotate(self, enabled: bool) -> None:
        self.settings.auto_rotate = enabled
        self.camera.set_auto_rotate(enabled)
        if enabled:
            self._timer.start()
        else:
            self._timer.stop()
        self.update()

    def zoom_in(self) -> None:
        self._apply_zoom(self.camera.zoom_in())

    def zoom_out(self) -> None:
        self._apply_zoom(self.camera.zoom_out())

    def reset_view(self) -> None:
        logger.debug("Vista restablecida")
        self.camera.reset_view()
        self._apply_zoom(self.camera.reset_zoom())

    def current_frame(self) -> SceneFrame:
        """Avanza la cámara con el reloj y compone el fotograma actual."""
        pose = self.camera.update(self.clock.elapsed())
        return self.composer.compose(pose, self.camera.zoom)

    def pick_at(self, x: float, y: float) -> Optional[AtomInfo]:
        """Selecciona el átomo bajo el punto de vista `(x, y)`."""
        # Con autorrotación se usa el fotograma ya dibujado, no el del instante del clic.
        if self.camera.auto_rotate and self._last_frame is not None:
            frame = self._last_frame
        else:
            frame = self.current_frame()
        projector = Projector(frame.camera, self.width(), self.height())
        atom_idx = pick_atom(projector, frame.atoms, x, y)
        if atom_idx is None:
            return self.composer.selected_atom_info()
        self.composer.pick(atom_idx)
        info = self.composer.selected_atom_info()
        self.selection_changed.emit(info)
        self.update()
        return info

    # ------------------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position()
            self._last_drag_pos = event.position()
            self._dragging = False
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._press_pos is None or self._last_drag_pos is None:
            return
        pos = event.position()
        if not self._dragging:
            moved = pos - self._press_pos
            if abs(moved.x()) + abs(moved.y()) < DRAG_THRESHOLD_PX:
                return
            self._dragging = True
        delta = pos - self._last_drag_pos
        self._last_drag_pos = pos
        self.camera.orbit(-delta.x() * ORBIT_SENSITIVITY, delta.y() * ORBIT_SENSITIVITY)
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self._press_pos is not None:
            if not self._dragging:
                pos = event.position()
                self.pick_at(pos.x(), pos.y())
            self._press_pos = None
            self._last_drag_pos = None
            self._dragging = False
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        step = event.angleDelta().y()
        if step > 0:
            self.zoom_in()
        elif step < 0:
            self.zoom_out()

    def paintEvent(self, event: QPaintEvent) -> None:
        frame = self.current_frame()
        self._last_frame = frame
        projector = Projector(frame.camera, self.width(), self.height())

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.fillRect(self.rect(), QColor(BG_VIEWPORT))

        if frame.is_empty:
            painter.setPen(QColor("#90A4AE"))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Sin molécula")
        else:
            self._draw_bonds(painter, projector, frame)
            self._draw_atoms(painter, projector, frame)
            self._draw_labels(painter, projector, frame)
            self._draw_info(painter, projector, frame)
            self._draw_badges(painter, frame)
        painter.end()

    # ------------------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------------------

    def _draw_bonds(self, painter: QPainter, projector: Projector, frame: SceneFrame) -> None:
        for bond in frame.bonds:
            p0 = projector.project(bond.start)
            p1 = projector.project(bond.end)
            if p0 is None or p1 is None:
                continue
            depth = (p0.depth + p1.depth) / 2.0
            width = max(1.0, 2.0 * projector.project_radius(bond.radius, depth))
            color = QColor(bond.color)
            color.setAlphaF(bond.opacity)
            pen = QPen(color, width)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            if bond.dashed:
                pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.drawLine(QPointF(p0.x, p0.y), QPointF(p1.x, p1.y))

    def _draw_atoms(self, painter: QPainter, projector: Projector, frame: SceneFrame) -> None:
        projected = []
        for atom in frame.atoms:
            screen = projector.project(atom.center)
            if screen is not None:
                projected.append((screen, atom))
        # Del más lejano al más cercano.
        projected.sort(key=lambda item: item[0].depth, reverse=True)
        style = style_for(self.settings.display_mode)
        # Superficies lisas brillan más; las metálicas oscurecen el borde.
        highlight = int(100 + 90 * (1.0 - style.roughness))
        shade = int(150 + 60 * style.metalness)
        for screen, atom in projected:
            radius = projector.project_radius(atom.radius, screen.depth)
            if radius <= 0.0:
                continue
            base = QColor(atom.color)
            if atom.emissive:
                base = _blend(base, QColor(atom.emissive), atom.emissive_intensity)
            center = QPointF(screen.x, screen.y)
            gradient = QRadialGradient(center - QPointF(radius * 0.35, radius * 0.35), radius * 1.3)
            gradient.setColorAt(0.0, base.lighter(highlight))
            gradient.setColorAt(0.6, base)
            gradient.setColorAt(1.0, base.darker(shade))
            painter.setBrush(QBrush(gradient))
            if atom.selected:
                painter.setPen(QPen(QColor(atom.emissive or "#FFFF00"), 2.0))
            else:
                painter.setPen(Qt.PenStyle.NoPen)
            painter.drawEllipse(center, radius, radius)

    def _draw_labels(self, painter: QPainter, projector: Projector, frame: SceneFrame) -> None:
        if not frame.labels:
            return
        font = QFont()
        font.setPointSize(8)
        font.setBold(True)
        painter.setFont(font)
        metrics = QFontMetrics(font)
        for label in frame.labels:
            screen = projector.project(label.anchor)
            if screen is None:
                continue
            text_w = metrics.horizontalAdvance(label.text) + 8
            text_h = metrics.height() + 2
            rect = QRectF(screen.x - text_w / 2.0, screen.y - text_h / 2.0, text_w, text_h)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(LABEL_BG))
            painter.drawRoundedRect(rect, text_h / 2.0, text_h / 2.0)
            painter.setPen(QColor("#FFFFFF"))
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, label.text)

    def _draw_info(self, painter: QPainter, projector: Projector, frame: SceneFrame) -> None:
        info = frame.selected
        if info is None:
            return
        atom = next((a for a in frame.atoms if a.atom_idx == info.atom_idx), None)
        if atom is None:
            return
        x, y, z = atom.center
        screen = projector.project((x, y + INFO_OFFSET * frame.zoom, z))
        if screen is None:
            return
        font = QFont()
        font.setPointSize(8)
        painter.setFont(font)
        metrics = QFontMetrics(font)
        lines = info.lines()
        width = max(metrics.horizontalAdvance(line) for line in lines) + 12
        height = metrics.height() * len(lines) + 10
        rect = QRectF(screen.x, screen.y - height, width, height)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(INFO_BG))
        painter.drawRoundedRect(rect, 4, 4)
        painter.setPen(QColor("#FFFFFF"))
        for row, line in enumerate(lines):
            painter.drawText(
                QPointF(rect.left() + 6, rect.top() + 5 + metrics.ascent() + row * metrics.height()),
                line,
            )

    def _draw_badges(self, painter: QPainter, frame: SceneFrame) -> None:
        font = QFont()
        font.setPointSize(8)
        painter.setFont(font)
        metrics = QFontMetrics(font)
        texts = [f"{frame.atom_count} átomos", f"{frame.bond_count} enlaces"]
        x = 8.0
        y = self.height() - 8.0 - 2 * (metrics.height() + 6)
        for text in texts:
            w = metrics.horizontalAdvance(text) + 10
            rect = QRectF(x, y, w, metrics.height() + 4)
            painter.setPen(QPen(QColor(BADGE_BORDER), 1))
            painter.setBrush(QColor(BADGE_BG))
            painter.drawRoundedRect(rect, 6, 6)
            painter.setPen(QColor(TEXT_PRIMARY))
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, text)
            x += w + 4
        painter.setPen(QColor("#B0BEC5"))
        painter.drawText(QPointF(8.0, self.height() - 10.0), frame.hint)

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _after_graph_swap(self) -> None:
        self._last_frame = None
        graph = self.composer.graph
        self.graph_changed.emit(graph.atom_count, graph.bond_count)
        self.selection_changed.emit(None)
        self.update()

    def _apply_zoom(self, value: float) -> None:
        self.zoom_changed.emit(value)
        self.update()


def _blend(base: QColor, tint: QColor, amount: float) -> QColor:
    """Mezcla lineal de dos colores (0 = base, 1 = tinte)."""
    amount = max(0.0, min(1.0, amount))
    return QColor(
        int(base.red() + (tint.red() - base.red()) * amount),
        int(base.green() + (tint.green() - base.green()) * amount),
        int(base.blue() + (tint.blue() - base.blue()) * amount),
    )
