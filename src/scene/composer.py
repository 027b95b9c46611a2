"""Composición de escena del visor molecular.

Convierte el grafo activo, las preferencias de visualización y la
selección en un `SceneFrame` inmutable: la lista plana de primitivas
(cilindros de enlace, esferas de átomo y etiquetas) en coordenadas del
mundo que la superficie de dibujo consume en cada fotograma.

Los enlaces se componen antes que los átomos para que las esferas tapen
el interior de los cilindros en sus extremos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.camera import CameraPose
from core.generator import DEFAULT_SEED, generate
from core.model import MolGraph, SelectionState, Vec3, ViewSettings
from scene.bond_geometry import BOND_SPACING, resolve
from scene.geom3d import UP, Transform, scale
from scene.style import (
    SELECTION_EMISSIVE,
    SELECTION_EMISSIVE_INTENSITY,
    DisplayStyle,
    base_atom_radius,
    element_color,
    style_for,
)

logger = logging.getLogger(__name__)

SELECTION_HINT = "Haz clic en un átomo para ver sus detalles"


@dataclass(frozen=True)
class AtomDrawable:
    """Esfera de un átomo ya transformada al mundo."""
    atom_idx: int
    element: str
    center: Vec3
    radius: float
    color: str
    selected: bool = False
    emissive: Optional[str] = None
    emissive_intensity: float = 0.0


@dataclass(frozen=True)
class BondDrawable:
    """Cilindro de un segmento de enlace ya transformado al mundo."""
    bond_idx: int
    start: Vec3
    end: Vec3
    radius: float
    color: str
    dashed: bool
    opacity: float


@dataclass(frozen=True)
class LabelDrawable:
    atom_idx: int
    anchor: Vec3
    text: str


@dataclass(frozen=True)
class AtomInfo:
    """Datos del panel de información del átomo seleccionado."""
    atom_idx: int
    element: str
    charge: Optional[int]
    bond_count: int

    def lines(self) -> List[str]:
        rows = [f"Elemento: {self.element}"]
        if self.charge is not None:
            rows.append(f"Carga: {charge_sign(self.charge)}{abs(self.charge)}")
        rows.append(f"Enlaces: {self.bond_count}")
        return rows


@dataclass(frozen=True)
class SceneFrame:
    """Instantánea de solo lectura de un fotograma."""
    bonds: Tuple[BondDrawable, ...]
    atoms: Tuple[AtomDrawable, ...]
    labels: Tuple[LabelDrawable, ...]
    camera: CameraPose
    zoom: float
    selected: Optional[AtomInfo]
    atom_count: int
    bond_count: int
    hint: str = SELECTION_HINT

    @property
    def is_empty(self) -> bool:
        return self.atom_count == 0


def charge_sign(charge: Optional[int]) -> str:
    """Signo de una carga: "+", "-" o cadena vacía si es neutra o ausente."""
    if not charge:
        return ""
    return "+" if charge > 0 else "-"


def atom_label(element: str, charge: Optional[int], show_charges: bool) -> str:
    """Texto de etiqueta: símbolo más signo de carga (sin magnitud)."""
    if show_charges:
        return f"{element}{charge_sign(charge)}"
    return element


class SceneComposer:
    """Dueño del grafo activo, las preferencias y la selección.

    El grafo se reemplaza entero con `set_graph`/`set_notation`; la
    selección se limpia en el mismo paso para que nunca se dibuje un
    índice obsoleto.
    """

    def __init__(
        self,
        graph: Optional[MolGraph] = None,
        settings: Optional[ViewSettings] = None,
        spacing: float = BOND_SPACING,
    ) -> None:
        self._graph = graph if graph is not None else MolGraph.empty()
        self.settings = settings if settings is not None else ViewSettings()
        self.selection = SelectionState()
        self.spacing = spacing
        self.notation = ""

    @property
    def graph(self) -> MolGraph:
        return self._graph

    def set_graph(self, graph: MolGraph) -> None:
        """Reemplaza el grafo y descarta la selección."""
        self.selection = SelectionState()
        self._graph = graph
        logger.info("Grafo reemplazado: %d átomos, %d enlaces", graph.atom_count, graph.bond_count)

    def set_notation(self, notation: str, seed: Optional[int] = DEFAULT_SEED) -> MolGraph:
        """Genera el grafo de una notación y lo activa."""
        graph = generate(notation, seed=seed)
        self.notation = notation
        self.set_graph(graph)
        return graph

    # ------------------------------------------------------------------
    # Selección
    # ------------------------------------------------------------------

    def pick(self, atom_idx: Optional[int]) -> Optional[int]:
        """Selecciona el átomo indicado (el último clic gana).

        Volver a elegir el átomo ya seleccionado no cambia nada. Un índice
        que no existe en el grafo deja la selección vacía.
        """
        if atom_idx is None or not self._graph.has_atom(atom_idx):
            self.selection.clear()
        else:
            self.selection.select(atom_idx)
        logger.debug("Selección: %s", self.selection.atom_idx)
        return self.selection.atom_idx

    def clear_selection(self) -> None:
        self.selection.clear()

    @property
    def selected_index(self) -> Optional[int]:
        return self.selection.resolve(self._graph)

    def selected_atom_info(self) -> Optional[AtomInfo]:
        """Información del átomo seleccionado, recalculada desde el grafo."""
        graph = self._graph
        idx = self.selection.resolve(graph)
        if idx is None:
            return None
        atom = graph.atoms[idx]
        charge = None
        if self.settings.show_charges and atom.effective_charge != 0:
            charge = atom.effective_charge
        return AtomInfo(
            atom_idx=idx,
            element=atom.element,
            charge=charge,
            bond_count=graph.degree(idx),
        )

    # ------------------------------------------------------------------
    # Composición
    # ------------------------------------------------------------------

    def compose(self, camera: Optional[CameraPose] = None, zoom: Optional[float] = None) -> SceneFrame:
        """Aplana el grafo en primitivas del mundo para un fotograma.

        Args:
            camera: Pose de cámara que acompaña al fotograma.
            zoom: Escala del grupo raíz; por defecto `settings.zoom`.

        Returns:
            `SceneFrame` con enlaces, átomos y etiquetas en ese orden.
        """
        graph = self._graph
        settings = self.settings
        style = style_for(settings.display_mode)
        zoom_value = settings.zoom if zoom is None else zoom
        root = Transform(scale=zoom_value)
        selected_idx = self.selection.resolve(graph)

        bonds = self._compose_bonds(graph, style, root)
        atoms = self._compose_atoms(graph, style, root, selected_idx)
        labels: Tuple[LabelDrawable, ...] = ()
        if settings.show_labels:
            labels = tuple(
                LabelDrawable(
                    atom_idx=drawable.atom_idx,
                    anchor=drawable.center,
                    text=atom_label(
                        graph.atoms[drawable.atom_idx].element,
                        graph.atoms[drawable.atom_idx].charge,
                        settings.show_charges,
                    ),
                )
                for drawable in atoms
            )

        return SceneFrame(
            bonds=bonds,
            atoms=atoms,
            labels=labels,
            camera=camera or CameraPose(),
            zoom=zoom_value,
            selected=self.selected_atom_info(),
            atom_count=graph.atom_count,
            bond_count=graph.bond_count,
        )

    def _compose_bonds(
        self, graph: MolGraph, style: DisplayStyle, root: Transform
    ) -> Tuple[BondDrawable, ...]:
        if not style.draw_bonds:
            return ()
        drawables: List[BondDrawable] = []
        for bond_idx, bond in enumerate(graph.bonds):
            geometry = resolve(
                bond.bond_type,
                graph.atoms[bond.a1_idx].position,
                graph.atoms[bond.a2_idx].position,
                spacing=self.spacing,
            )
            group = root.compose(geometry.transform)
            half_axis = scale(UP, geometry.length / 2.0)
            for segment in geometry.segments:
                world = group.compose(segment.local_transform)
                drawables.append(
                    BondDrawable(
                        bond_idx=bond_idx,
                        start=world.apply((-half_axis[0], -half_axis[1], -half_axis[2])),
                        end=world.apply(half_axis),
                        radius=style.bond_radius * world.scale,
                        color=style.bond_color,
                        dashed=segment.dashed,
                        opacity=style.dashed_opacity if segment.dashed else style.bond_opacity,
                    )
                )
        return tuple(drawables)

    def _compose_atoms(
        self,
        graph: MolGraph,
        style: DisplayStyle,
        root: Transform,
        selected_idx: Optional[int],
    ) -> Tuple[AtomDrawable, ...]:
        drawables = []
        for atom_idx, atom in enumerate(graph.atoms):
            selected = atom_idx == selected_idx
            drawables.append(
                AtomDrawable(
                    atom_idx=atom_idx,
                    element=atom.element,
                    center=root.apply(atom.position),
                    radius=base_atom_radius(atom.element) * style.atom_scale * root.scale,
                    color=element_color(atom.element),
                    selected=selected,
                    emissive=SELECTION_EMISSIVE if selected else None,
                    emissive_intensity=SELECTION_EMISSIVE_INTENSITY if selected else 0.0,
                )
            )
        return tuple(drawables)
