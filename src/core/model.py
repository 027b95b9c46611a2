"""Modelos de datos base del visor molecular Orbimol.

Este módulo concentra las estructuras que representan el grafo molecular
(átomos y enlaces con posiciones 3D), el estado de selección y las
preferencias de visualización. El grafo es inmutable una vez construido:
cuando cambia la notación se reemplaza completo, nunca se edita en sitio.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

from core.errors import GraphConsistencyError

Vec3 = Tuple[float, float, float]

# Elementos con color y radio propios; cualquier otro símbolo usa los
# valores por defecto del compositor.
ELEMENT_SYMBOLS = ("H", "C", "N", "O", "F", "P", "S", "Cl", "Br", "I")

ZOOM_MIN = 0.5
ZOOM_MAX = 2.5


class BondType(IntEnum):
    """Multiplicidad de un enlace (ordinal 1-4)."""
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4


class DisplayMode(str, Enum):
    """Estilos de representación de la escena 3D."""
    BALL_AND_STICK = "ball-and-stick"
    SPACE_FILLING = "space-filling"
    WIREFRAME = "wireframe"


def is_listed_element(symbol: str) -> bool:
    """Indica si el símbolo pertenece al conjunto de elementos conocidos."""
    return symbol in ELEMENT_SYMBOLS


@dataclass(frozen=True)
class Atom:
    """Representa un átomo del grafo.

    La identidad de un átomo es su índice dentro de `MolGraph.atoms`.
    `charge` en `None` significa "sin carga indicada", que se dibuja como
    neutra pero se distingue de un 0 explícito.
    """
    element: str
    position: Vec3
    charge: Optional[int] = None

    @property
    def effective_charge(self) -> int:
        return 0 if self.charge is None else self.charge


@dataclass(frozen=True)
class Bond:
    """Enlace no dirigido entre dos índices de átomo del mismo grafo."""
    a1_idx: int
    a2_idx: int
    bond_type: BondType = BondType.SINGLE

    def involves(self, atom_idx: int) -> bool:
        return self.a1_idx == atom_idx or self.a2_idx == atom_idx


@dataclass(frozen=True)
class MolGraph:
    """Grafo molecular inmutable.

    Los átomos y enlaces se guardan como tuplas en orden de inserción. La
    construcción valida que ningún enlace quede colgando.
    """
    atoms: Tuple[Atom, ...] = ()
    bonds: Tuple[Bond, ...] = ()

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def empty(cls) -> "MolGraph":
        """Devuelve un grafo sin átomos ni enlaces."""
        return cls()

    @property
    def atom_count(self) -> int:
        return len(self.atoms)

    @property
    def bond_count(self) -> int:
        return len(self.bonds)

    @property
    def is_empty(self) -> bool:
        return not self.atoms

    def has_atom(self, atom_idx: int) -> bool:
        return 0 <= atom_idx < len(self.atoms)

    def get_atom(self, atom_idx: int) -> Atom:
        """Obtiene un átomo por índice.

        Raises:
            IndexError: Si el índice no pertenece al grafo.
        """
        if not self.has_atom(atom_idx):
            raise IndexError(f"Átomo {atom_idx} fuera de rango")
        return self.atoms[atom_idx]

    def incident_bonds(self, atom_idx: int) -> List[Bond]:
        """Enlaces cuyo extremo `a1_idx` o `a2_idx` es el átomo dado."""
        return [bond for bond in self.bonds if bond.involves(atom_idx)]

    def degree(self, atom_idx: int) -> int:
        """Número de enlaces incidentes, recalculado desde los enlaces."""
        return sum(1 for bond in self.bonds if bond.involves(atom_idx))

    def find_bond_between(self, a1_idx: int, a2_idx: int) -> Optional[Bond]:
        """Busca un enlace entre dos átomos sin importar su orientación."""
        for bond in self.bonds:
            if {bond.a1_idx, bond.a2_idx} == {a1_idx, a2_idx}:
                return bond
        return None

    def validate(self) -> None:
        """Comprueba que cada enlace apunte a dos átomos distintos y válidos.

        Raises:
            GraphConsistencyError: Ante un índice fuera de rango o un
                enlace de un átomo consigo mismo.
        """
        count = len(self.atoms)
        for position, bond in enumerate(self.bonds):
            for idx in (bond.a1_idx, bond.a2_idx):
                if not 0 <= idx < count:
                    raise GraphConsistencyError(
                        f"Enlace {position} referencia el átomo {idx} "
                        f"(el grafo tiene {count} átomos)"
                    )
            if bond.a1_idx == bond.a2_idx:
                raise GraphConsistencyError(
                    f"Enlace {position} une el átomo {bond.a1_idx} consigo mismo"
                )


class MolGraphBuilder:
    """Etapa mutable previa a la construcción atómica de un `MolGraph`."""

    def __init__(self) -> None:
        self._atoms: List[Atom] = []
        self._bonds: List[Bond] = []

    def add_atom(
        self,
        element: str,
        position: Vec3,
        charge: Optional[int] = None,
    ) -> int:
        """Registra un átomo y devuelve su índice.

        Args:
            element: Símbolo del elemento químico (p. ej., "C", "Cl").
            position: Coordenadas 3D; se fijan aquí y no cambian después.
            charge: Carga formal o `None` si no se indica.

        Returns:
            Índice del átomo dentro de la secuencia ordenada.
        """
        x, y, z = position
        self._atoms.append(
            Atom(element=element, position=(float(x), float(y), float(z)), charge=charge)
        )
        return len(self._atoms) - 1

    def add_bond(
        self,
        a1_idx: int,
        a2_idx: int,
        bond_type: BondType = BondType.SINGLE,
    ) -> Bond:
        """Registra un enlace entre dos índices de átomo.

        La validez de los índices se comprueba en `build`.
        """
        bond = Bond(a1_idx=a1_idx, a2_idx=a2_idx, bond_type=BondType(bond_type))
        self._bonds.append(bond)
        return bond

    @property
    def atom_count(self) -> int:
        return len(self._atoms)

    def build(self) -> MolGraph:
        """Congela los átomos y enlaces acumulados en un grafo validado."""
        return MolGraph(atoms=tuple(self._atoms), bonds=tuple(self._bonds))


@dataclass
class SelectionState:
    """Selección simple: como mucho un índice de átomo."""
    atom_idx: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.atom_idx is None

    def select(self, atom_idx: int) -> None:
        self.atom_idx = atom_idx

    def clear(self) -> None:
        self.atom_idx = None

    def resolve(self, graph: MolGraph) -> Optional[int]:
        """Devuelve el índice seleccionado solo si sigue existiendo en `graph`."""
        if self.atom_idx is None or not graph.has_atom(self.atom_idx):
            return None
        return self.atom_idx


@dataclass
class ViewSettings:
    """Preferencias de visualización activas en el visor."""
    display_mode: DisplayMode = DisplayMode.BALL_AND_STICK
    show_charges: bool = True
    show_labels: bool = True
    auto_rotate: bool = False
    zoom: float = 1.0

    def __post_init__(self) -> None:
        self.display_mode = DisplayMode(self.display_mode)
        self.zoom = clamp_zoom(self.zoom)


def clamp_zoom(value: float) -> float:
    """Limita un factor de zoom al rango [ZOOM_MIN, ZOOM_MAX]."""
    return min(max(float(value), ZOOM_MIN), ZOOM_MAX)
