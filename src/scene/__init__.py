"""Preparación de escena 3D de Orbimol (sin dependencias de Qt)."""

from scene.bond_geometry import BondGeometry, BondSegment, resolve
from scene.composer import AtomInfo, SceneComposer, SceneFrame

__all__ = ["AtomInfo", "BondGeometry", "BondSegment", "SceneComposer", "SceneFrame", "resolve"]
