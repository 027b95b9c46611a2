"""API pública del núcleo molecular de Orbimol.

Reexpone el modelo, el generador de estructuras y el control de cámara
para facilitar importaciones.
"""

from core.camera import CameraController, CameraPose, ElapsedClock
from core.errors import GraphConsistencyError, OrbimolError
from core.generator import generate
from core.model import (
    Atom,
    Bond,
    BondType,
    DisplayMode,
    MolGraph,
    MolGraphBuilder,
    SelectionState,
    ViewSettings,
)

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "CameraController",
    "CameraPose",
    "DisplayMode",
    "ElapsedClock",
    "GraphConsistencyError",
    "MolGraph",
    "MolGraphBuilder",
    "OrbimolError",
    "SelectionState",
    "ViewSettings",
    "generate",
]
