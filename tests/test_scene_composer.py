"""Pruebas unitarias para la composición de escena."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.camera import CameraPose
from core.generator import generate
from core.model import BondType, DisplayMode, MolGraphBuilder, ViewSettings
from scene.bond_geometry import BOND_SPACING
from scene.composer import SELECTION_HINT, SceneComposer, atom_label, charge_sign
from scene.style import (
    ATOM_RADIUS,
    DEFAULT_ELEMENT_COLOR,
    ELEMENT_COLORS,
    HYDROGEN_RADIUS,
    SELECTION_EMISSIVE,
)

ASPIRIN = "CC(=O)OC1=CC=CC=C1C(=O)O"


def _assert_vec_close(testcase, a, b, tol=1e-9):
    for x, y in zip(a, b):
        testcase.assertAlmostEqual(x, y, delta=tol)


def _small_graph():
    """C-N(+1)=H y un átomo sin estilo propio (Xe) unido por enlace aromático."""
    builder = MolGraphBuilder()
    c = builder.add_atom("C", (0.0, 0.0, 0.0))
    n = builder.add_atom("N", (0.0, 2.0, 0.0), charge=1)
    h = builder.add_atom("H", (1.0, 2.0, 0.0), charge=0)
    xe = builder.add_atom("Xe", (1.0, 2.0, 3.0), charge=-1)
    builder.add_bond(c, n, BondType.SINGLE)
    builder.add_bond(n, h, BondType.DOUBLE)
    builder.add_bond(h, xe, BondType.AROMATIC)
    return builder.build()


class SceneComposerTest(unittest.TestCase):
    """Casos de prueba para SceneComposer."""
    def setUp(self):
        self.composer = SceneComposer(_small_graph())

    def test_atom_radii_and_colors(self):
        """Verifica radio y color por elemento en bolas y varillas."""
        atoms = self.composer.compose().atoms
        self.assertEqual(atoms[0].radius, ATOM_RADIUS)
        self.assertEqual(atoms[2].radius, HYDROGEN_RADIUS)
        self.assertEqual(atoms[0].color, ELEMENT_COLORS["C"])
        self.assertEqual(atoms[1].color, ELEMENT_COLORS["N"])
        self.assertEqual(atoms[3].color, DEFAULT_ELEMENT_COLOR)

    def test_bonds_before_atoms(self):
        """Verifica que el fotograma enumere enlaces y luego átomos."""
        frame = self.composer.compose()
        self.assertEqual(len(frame.bonds), 1 + 2 + 1)
        self.assertEqual(len(frame.atoms), 4)
        self.assertEqual([b.bond_idx for b in frame.bonds], [0, 1, 1, 2])

    def test_single_bond_spans_atoms(self):
        """Verifica que el cilindro simple vaya de átomo a átomo."""
        bond = self.composer.compose().bonds[0]
        _assert_vec_close(self, bond.start, (0.0, 0.0, 0.0))
        _assert_vec_close(self, bond.end, (0.0, 2.0, 0.0))
        self.assertFalse(bond.dashed)

    def test_double_bond_cylinders_are_offset(self):
        """Verifica que los cilindros dobles queden paralelos y separados."""
        frame = self.composer.compose()
        first, second = frame.bonds[1], frame.bonds[2]
        gap = [a - b for a, b in zip(first.start, second.start)]
        self.assertAlmostEqual(sum(g * g for g in gap) ** 0.5, 2 * BOND_SPACING)
        midpoint = [(a + b) / 2.0 for a, b in zip(first.start, second.start)]
        _assert_vec_close(self, midpoint, (0.0, 2.0, 0.0))

    def test_aromatic_bond_is_dashed_and_translucent(self):
        """Verifica el estilo del enlace aromático."""
        bond = self.composer.compose().bonds[-1]
        self.assertTrue(bond.dashed)
        self.assertLess(bond.opacity, 1.0)

    def test_general_direction_bond_endpoints(self):
        """Verifica la composición de transformaciones en una dirección arbitraria."""
        frame = self.composer.compose()
        bond = frame.bonds[-1]
        _assert_vec_close(self, bond.start, (1.0, 2.0, 0.0))
        _assert_vec_close(self, bond.end, (1.0, 2.0, 3.0))

    def test_zoom_scales_scene(self):
        """Verifica que el zoom escale posiciones y radios."""
        frame = self.composer.compose(zoom=2.0)
        self.assertEqual(frame.zoom, 2.0)
        _assert_vec_close(self, frame.atoms[1].center, (0.0, 4.0, 0.0))
        self.assertAlmostEqual(frame.atoms[0].radius, ATOM_RADIUS * 2.0)
        _assert_vec_close(self, frame.bonds[0].end, (0.0, 4.0, 0.0))

    def test_pick_highlights_atom(self):
        """Verifica el resaltado emisivo del átomo seleccionado."""
        self.composer.pick(1)
        atoms = self.composer.compose().atoms
        self.assertTrue(atoms[1].selected)
        self.assertEqual(atoms[1].emissive, SELECTION_EMISSIVE)
        self.assertEqual(atoms[1].emissive_intensity, 0.5)
        self.assertFalse(atoms[0].selected)
        self.assertIsNone(atoms[0].emissive)

    def test_repick_is_idempotent(self):
        """Verifica que volver a elegir el mismo átomo no cambie la escena."""
        self.composer.pick(2)
        before = self.composer.compose()
        self.composer.pick(2)
        self.assertEqual(self.composer.compose(), before)

    def test_last_pick_wins(self):
        """Verifica que un nuevo clic reemplace la selección."""
        self.composer.pick(0)
        self.composer.pick(3)
        self.assertEqual(self.composer.selected_index, 3)
        self.assertEqual(sum(1 for a in self.composer.compose().atoms if a.selected), 1)

    def test_invalid_pick_clears_selection(self):
        """Verifica que un índice inexistente deje la selección vacía."""
        self.composer.pick(1)
        self.composer.pick(99)
        self.assertIsNone(self.composer.selected_index)
        self.assertIsNone(self.composer.selected_atom_info())

    def test_selected_atom_info(self):
        """Verifica los datos del panel de información."""
        self.composer.pick(1)
        info = self.composer.selected_atom_info()
        self.assertEqual(info.element, "N")
        self.assertEqual(info.charge, 1)
        self.assertEqual(info.bond_count, 2)
        self.assertEqual(info.lines(), ["Elemento: N", "Carga: +1", "Enlaces: 2"])

    def test_info_hides_zero_charge(self):
        """Verifica que una carga cero no aparezca en el panel."""
        self.composer.pick(2)
        self.assertIsNone(self.composer.selected_atom_info().charge)
        self.assertEqual(self.composer.selected_atom_info().lines(), ["Elemento: H", "Enlaces: 2"])

    def test_info_hides_charge_when_disabled(self):
        """Verifica que la carga se oculte con show_charges desactivado."""
        self.composer.settings.show_charges = False
        self.composer.pick(3)
        self.assertIsNone(self.composer.selected_atom_info().charge)

    def test_labels_follow_charge_toggle(self):
        """Verifica las etiquetas con y sin signo de carga."""
        texts = [label.text for label in self.composer.compose().labels]
        self.assertEqual(texts, ["C", "N+", "H", "Xe-"])
        self.composer.settings.show_charges = False
        texts = [label.text for label in self.composer.compose().labels]
        self.assertEqual(texts, ["C", "N", "H", "Xe"])

    def test_labels_can_be_hidden(self):
        """Verifica que las etiquetas se puedan desactivar."""
        self.composer.settings.show_labels = False
        self.assertEqual(self.composer.compose().labels, ())

    def test_frame_summary(self):
        """Verifica el resumen y la pista del fotograma."""
        pose = CameraPose(position=(1.0, 2.0, 3.0))
        frame = self.composer.compose(camera=pose)
        self.assertEqual(frame.atom_count, 4)
        self.assertEqual(frame.bond_count, 3)
        self.assertEqual(frame.camera, pose)
        self.assertEqual(frame.hint, SELECTION_HINT)
        self.assertFalse(frame.is_empty)


class DisplayModeTest(unittest.TestCase):
    """Casos de prueba para los modos de representación."""
    def test_space_filling_enlarges_atoms_and_hides_bonds(self):
        """Verifica el modo de relleno espacial."""
        composer = SceneComposer(_small_graph(), ViewSettings(display_mode=DisplayMode.SPACE_FILLING))
        frame = composer.compose()
        self.assertAlmostEqual(frame.atoms[0].radius, ATOM_RADIUS * 2.5)
        self.assertEqual(frame.bonds, ())

    def test_wireframe_thin_bonds(self):
        """Verifica el modo alambre."""
        composer = SceneComposer(_small_graph(), ViewSettings(display_mode=DisplayMode.WIREFRAME))
        frame = composer.compose()
        self.assertAlmostEqual(frame.atoms[0].radius, ATOM_RADIUS * 0.3)
        self.assertEqual(len(frame.bonds), 4)
        self.assertTrue(all(b.radius < 0.05 for b in frame.bonds))

    def test_mode_switch_leaves_graph_untouched(self):
        """Verifica que cambiar de modo no modifique el grafo ni la selección."""
        composer = SceneComposer(_small_graph())
        composer.pick(1)
        graph = composer.graph
        for mode in DisplayMode:
            composer.settings.display_mode = mode
            composer.compose()
        self.assertIs(composer.graph, graph)
        self.assertEqual(composer.selected_index, 1)


class GraphSwapTest(unittest.TestCase):
    """Casos de prueba para el reemplazo del grafo."""
    def test_new_notation_clears_selection(self):
        """Verifica que una notación nueva descarte la selección."""
        composer = SceneComposer()
        composer.set_notation(ASPIRIN)
        composer.pick(15)
        composer.set_notation("CCO")
        self.assertIsNone(composer.selected_index)
        frame = composer.compose()
        self.assertEqual(frame.atom_count, 3)
        self.assertFalse(any(a.selected for a in frame.atoms))
        self.assertEqual(composer.notation, "CCO")

    def test_empty_notation_composes_empty_frame(self):
        """Verifica el fotograma vacío."""
        composer = SceneComposer()
        composer.set_notation("")
        frame = composer.compose()
        self.assertTrue(frame.is_empty)
        self.assertEqual(frame.atoms, ())
        self.assertEqual(frame.bonds, ())
        self.assertIsNone(frame.selected)

    def test_aspirin_scene(self):
        """Verifica la escena de la aspirina."""
        composer = SceneComposer()
        graph = composer.set_notation(ASPIRIN)
        self.assertEqual(graph, generate(ASPIRIN))
        frame = composer.compose()
        self.assertEqual(frame.atom_count, 20)
        self.assertEqual(frame.bond_count, 24)
        # 20 enlaces simples y 4 dobles.
        self.assertEqual(len(frame.bonds), 20 + 4 * 2)


def test_charge_sign():
    """Verifica el signo de carga."""
    assert charge_sign(1) == "+"
    assert charge_sign(-2) == "-"
    assert charge_sign(0) == ""
    assert charge_sign(None) == ""


def test_atom_label():
    """Verifica la etiqueta sin magnitud de carga."""
    assert atom_label("O", -1, True) == "O-"
    assert atom_label("O", -1, False) == "O"
    assert atom_label("C", None, True) == "C"
