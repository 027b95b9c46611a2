"""Pruebas unitarias para la geometría de enlaces."""

import math
import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.model import BondType
from scene.bond_geometry import BOND_SPACING, resolve
from scene.geom3d import UP, add, dot, length, quat_from_unit_vectors, quat_rotate, scale


def _assert_vec_close(testcase, a, b, tol=1e-9):
    for x, y in zip(a, b):
        testcase.assertAlmostEqual(x, y, delta=tol)


class BondGeometryTest(unittest.TestCase):
    """Casos de prueba para resolve."""
    def test_segment_counts(self):
        """Verifica 1, 2, 3 y 1 cilindros para simple, doble, triple y aromático."""
        start, end = (0.0, 0.0, 0.0), (1.0, 1.0, 0.0)
        counts = {
            bond_type: len(resolve(bond_type, start, end).segments)
            for bond_type in BondType
        }
        self.assertEqual(
            counts,
            {
                BondType.SINGLE: 1,
                BondType.DOUBLE: 2,
                BondType.TRIPLE: 3,
                BondType.AROMATIC: 1,
            },
        )

    def test_offsets_are_symmetric(self):
        """Verifica que los desplazamientos laterales sumen cero."""
        for bond_type in BondType:
            geometry = resolve(bond_type, (0.3, -1.0, 2.0), (1.5, 0.4, -0.7))
            total = (0.0, 0.0, 0.0)
            for segment in geometry.segments:
                total = add(total, segment.offset)
            _assert_vec_close(self, total, (0.0, 0.0, 0.0))

    def test_offsets_are_perpendicular(self):
        """Verifica que los cilindros paralelos se separen en perpendicular."""
        geometry = resolve(BondType.TRIPLE, (0.3, -1.0, 2.0), (1.5, 0.4, -0.7))
        for segment in geometry.segments:
            self.assertAlmostEqual(dot(segment.offset, geometry.direction), 0.0, delta=1e-9)
            self.assertAlmostEqual(length(segment.offset), abs(segment.lateral), delta=1e-9)

    def test_double_bond_along_up(self):
        """Verifica los desplazamientos de un enlace doble vertical."""
        geometry = resolve(BondType.DOUBLE, (0.0, 0.0, 0.0), (0.0, 2.0, 0.0))
        self.assertEqual(geometry.length, 2.0)
        _assert_vec_close(self, geometry.midpoint, (0.0, 1.0, 0.0))
        offsets = [segment.offset for segment in geometry.segments]
        _assert_vec_close(self, offsets[0], (BOND_SPACING, 0.0, 0.0))
        _assert_vec_close(self, offsets[1], (-BOND_SPACING, 0.0, 0.0))
        _assert_vec_close(self, geometry.segments[0].start, (BOND_SPACING, 0.0, 0.0))
        _assert_vec_close(self, geometry.segments[0].end, (BOND_SPACING, 2.0, 0.0))

    def test_triple_bond_keeps_center_segment(self):
        """Verifica que el enlace triple conserve un cilindro central."""
        geometry = resolve(BondType.TRIPLE, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        self.assertEqual([s.lateral for s in geometry.segments], [0.0, BOND_SPACING, -BOND_SPACING])

    def test_rotation_aligns_up_with_bond(self):
        """Verifica que la rotación lleve el eje canónico sobre el enlace."""
        start, end = (1.0, 2.0, 3.0), (-2.0, 0.5, 4.0)
        geometry = resolve(BondType.SINGLE, start, end)
        rotated = quat_rotate(geometry.rotation, UP)
        _assert_vec_close(self, rotated, geometry.direction)
        tip = add(geometry.midpoint, scale(rotated, geometry.length / 2.0))
        _assert_vec_close(self, tip, end)

    def test_direction_opposite_to_up(self):
        """Verifica el caso de un enlace que apunta hacia -Y."""
        geometry = resolve(BondType.DOUBLE, (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))
        _assert_vec_close(self, quat_rotate(geometry.rotation, UP), (0.0, -1.0, 0.0))
        for segment in geometry.segments:
            self.assertAlmostEqual(dot(segment.offset, geometry.direction), 0.0, delta=1e-9)
            self.assertAlmostEqual(length(segment.offset), BOND_SPACING, delta=1e-9)

    def test_coincident_endpoints(self):
        """Verifica que extremos coincidentes no produzcan NaN."""
        geometry = resolve(BondType.DOUBLE, (1.0, 1.0, 1.0), (1.0, 1.0, 1.0))
        self.assertEqual(geometry.length, 0.0)
        self.assertEqual(geometry.direction, UP)
        for segment in geometry.segments:
            self.assertFalse(any(math.isnan(c) for c in segment.offset))

    def test_only_aromatic_is_dashed(self):
        """Verifica que solo el enlace aromático sea discontinuo."""
        for bond_type in BondType:
            geometry = resolve(bond_type, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
            expected = bond_type == BondType.AROMATIC
            self.assertTrue(all(s.dashed == expected for s in geometry.segments))

    def test_custom_spacing(self):
        """Verifica que la separación sea configurable."""
        geometry = resolve(BondType.DOUBLE, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), spacing=0.2)
        self.assertAlmostEqual(length(geometry.segments[0].offset), 0.2)


def test_quat_from_identical_vectors_is_identity():
    """Verifica que dos vectores iguales den la rotación nula."""
    q = quat_from_unit_vectors(UP, UP)
    assert q == (0.0, 0.0, 0.0, 1.0)
