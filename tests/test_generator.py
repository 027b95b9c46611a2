"""Pruebas unitarias para el generador de estructuras."""

import math
import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.generator import MAX_ATOMS, bond_type_for, element_for, generate, spiral_position
from core.model import BondType
from scene.geom3d import distance

ASPIRIN = "CC(=O)OC1=CC=CC=C1C(=O)O"


class GeneratorTest(unittest.TestCase):
    """Casos de prueba para generate."""
    def test_empty_notation(self):
        """Verifica que la notación vacía produzca un grafo vacío."""
        graph = generate("")
        self.assertEqual(graph.atom_count, 0)
        self.assertEqual(graph.bond_count, 0)

    def test_single_character(self):
        """Verifica un solo átomo sin enlaces."""
        graph = generate("N")
        self.assertEqual(graph.atom_count, 1)
        self.assertEqual(graph.bond_count, 0)
        self.assertEqual(graph.atoms[0].element, "N")

    def test_short_chain_has_no_cross_links(self):
        """Verifica que con cuatro átomos solo haya enlaces consecutivos."""
        graph = generate("CCCC")
        self.assertEqual(graph.bond_count, 3)
        pairs = [(b.a1_idx, b.a2_idx) for b in graph.bonds]
        self.assertEqual(pairs, [(0, 1), (1, 2), (2, 3)])

    def test_aspirin_counts(self):
        """Verifica la aspirina: 20 átomos, 19 consecutivos y 5 entrecruzados."""
        graph = generate(ASPIRIN)
        self.assertEqual(graph.atom_count, MAX_ATOMS)
        self.assertEqual(graph.bond_count, 19 + 5)

    def test_aspirin_bond_types(self):
        """Verifica que el carácter `=` marque el enlace que llega al átomo."""
        graph = generate(ASPIRIN)
        third = graph.bonds[2]
        self.assertEqual((third.a1_idx, third.a2_idx), (2, 3))
        self.assertEqual(third.bond_type, BondType.DOUBLE)
        double_targets = sorted(
            b.a2_idx for b in graph.bonds if b.bond_type == BondType.DOUBLE
        )
        self.assertEqual(double_targets, [3, 9, 12, 15])

    def test_aspirin_cross_links(self):
        """Verifica los enlaces (i, i-3) para i múltiplo de 3 mayor que 3."""
        graph = generate(ASPIRIN)
        cross = [
            (b.a1_idx, b.a2_idx)
            for b in graph.bonds
            if b.a1_idx - b.a2_idx == 3
        ]
        self.assertEqual(cross, [(6, 3), (9, 6), (12, 9), (15, 12), (18, 15)])
        for bond in graph.bonds:
            if (bond.a1_idx, bond.a2_idx) in cross:
                self.assertEqual(bond.bond_type, BondType.SINGLE)

    def test_aspirin_elements(self):
        """Verifica que solo las posiciones `O` sean oxígeno."""
        graph = generate(ASPIRIN)
        oxygens = [i for i, atom in enumerate(graph.atoms) if atom.element == "O"]
        self.assertEqual(oxygens, [4, 6])
        self.assertEqual(graph.atoms[2].element, "C")

    def test_cross_linked_atom_degree(self):
        """Verifica el grado de ambos extremos de los enlaces entrecruzados."""
        graph = generate(ASPIRIN)
        # (5,6), (6,7), (6,3) y (9,6)
        self.assertEqual(graph.degree(6), 4)
        # (2,3), (3,4) y (6,3)
        self.assertEqual(graph.degree(3), 3)
        self.assertEqual(graph.degree(0), 1)

    def test_same_seed_is_reproducible(self):
        """Verifica que la misma semilla reproduzca las cargas."""
        self.assertEqual(generate(ASPIRIN, seed=7), generate(ASPIRIN, seed=7))
        self.assertEqual(generate(ASPIRIN), generate(ASPIRIN))

    def test_charges_are_small_integers(self):
        """Verifica que las cargas estén en {-1, 0, +1}."""
        for seed in range(10):
            graph = generate(ASPIRIN, seed=seed)
            for atom in graph.atoms:
                self.assertIn(atom.charge, (-1, 0, 1))

    def test_unseeded_generation_keeps_topology(self):
        """Verifica que sin semilla la topología no cambie."""
        graph = generate(ASPIRIN, seed=None)
        reference = generate(ASPIRIN)
        self.assertEqual(graph.bonds, reference.bonds)
        self.assertEqual(
            [a.position for a in graph.atoms],
            [a.position for a in reference.atoms],
        )


class HeuristicsTest(unittest.TestCase):
    """Casos de prueba para las heurísticas por carácter."""
    def test_element_symbols(self):
        """Verifica los símbolos reconocidos sin distinguir mayúsculas."""
        self.assertEqual(element_for("o", 0), "O")
        self.assertEqual(element_for("S", 0), "S")
        self.assertEqual(element_for("(", 0), "C")
        self.assertEqual(element_for("1", 0), "C")

    def test_chlorine_heuristic(self):
        """Verifica que `L` seguida de `C` sea cloro."""
        self.assertEqual(element_for("LC", 0), "Cl")
        self.assertEqual(element_for("L", 0), "C")
        self.assertEqual(generate("CLC").atoms[1].element, "Cl")

    def test_bond_symbols(self):
        """Verifica los caracteres de tipo de enlace."""
        self.assertEqual(bond_type_for("="), BondType.DOUBLE)
        self.assertEqual(bond_type_for("#"), BondType.TRIPLE)
        self.assertEqual(bond_type_for(":"), BondType.AROMATIC)
        self.assertEqual(bond_type_for("C"), BondType.SINGLE)


def test_spiral_positions():
    """Verifica la espiral: radio creciente y altura ascendente."""
    x, y, z = spiral_position(0)
    assert (x, y, z) == (1.5, 0.0, 0.0)
    x, y, z = spiral_position(5)
    assert math.isclose(x, -2.0)
    assert math.isclose(y, 0.0, abs_tol=1e-9)
    assert math.isclose(z, 1.0)


def test_positions_never_coincide():
    """Verifica que dos átomos nunca compartan posición."""
    graph = generate("C" * 40)
    positions = [atom.position for atom in graph.atoms]
    for i, p in enumerate(positions):
        for q in positions[i + 1:]:
            assert distance(p, q) > 0.1
