"""
Drawing style presets for Orbimol.
"""
from __future__ import annotations

from dataclasses import dataclass

from core.model import DisplayMode


# Colores de elementos (esquema CPK).
ELEMENT_COLORS = {
    'H': '#FFFFFF',   # Hydrogen - white
    'C': '#909090',   # Carbon - grey
    'N': '#3050F8',   # Nitrogen - blue
    'O': '#FF0D0D',   # Oxygen - red
    'F': '#90E050',   # Fluorine - light green
    'P': '#FF8000',   # Phosphorus - orange
    'S': '#FFFF30',   # Sulfur - yellow
    'Cl': '#1FF01F',  # Chlorine - green
    'Br': '#A62929',  # Bromine - brown
    'I': '#940094',   # Iodine - purple
}
DEFAULT_ELEMENT_COLOR = '#FFD3D3'

HYDROGEN_RADIUS = 0.2
ATOM_RADIUS = 0.3

SELECTION_EMISSIVE = '#FFFF00'
SELECTION_EMISSIVE_INTENSITY = 0.5


def element_color(element: str) -> str:
    """Color CPK del elemento, o el rosa por defecto si no está en la tabla."""
    return ELEMENT_COLORS.get(element, DEFAULT_ELEMENT_COLOR)


def base_atom_radius(element: str) -> float:
    return HYDROGEN_RADIUS if element == 'H' else ATOM_RADIUS


@dataclass(frozen=True)
class DisplayStyle:
    atom_scale: float
    bond_radius: float
    bond_color: str
    draw_bonds: bool
    bond_opacity: float
    dashed_opacity: float
    roughness: float
    metalness: float


BALL_AND_STICK = DisplayStyle(
    atom_scale=1.0,
    bond_radius=0.05,
    bond_color="#808080",
    draw_bonds=True,
    bond_opacity=1.0,
    dashed_opacity=0.7,
    roughness=0.3,
    metalness=0.2,
)

SPACE_FILLING = DisplayStyle(
    atom_scale=2.5,
    bond_radius=0.0,
    bond_color="#808080",
    draw_bonds=False,
    bond_opacity=1.0,
    dashed_opacity=0.7,
    roughness=0.3,
    metalness=0.2,
)

WIREFRAME = DisplayStyle(
    atom_scale=0.3,
    bond_radius=0.015,
    bond_color="#B0B0B0",
    draw_bonds=True,
    bond_opacity=1.0,
    dashed_opacity=0.7,
    roughness=0.6,
    metalness=0.0,
)

DISPLAY_STYLES = {
    DisplayMode.BALL_AND_STICK: BALL_AND_STICK,
    DisplayMode.SPACE_FILLING: SPACE_FILLING,
    DisplayMode.WIREFRAME: WIREFRAME,
}


def style_for(mode: DisplayMode) -> DisplayStyle:
    return DISPLAY_STYLES[DisplayMode(mode)]
