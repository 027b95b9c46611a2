"""Generador de estructuras de marcador a partir de una notación lineal.

No es un analizador químico: no aplica reglas de valencia, aromaticidad
ni estereoquímica. Convierte cada carácter de la notación en un átomo
colocado sobre una espiral ascendente y usa heurísticas simples para
elegir elemento, carga y tipo de enlace. Cualquier cadena es válida,
incluida la vacía, que produce un grafo vacío.

Se puede sustituir por un analizador real respetando la firma
`generate(notation) -> MolGraph`.
"""
from __future__ import annotations

import logging
import math
import random
from typing import Optional

from core.model import BondType, MolGraph, MolGraphBuilder, Vec3

logger = logging.getLogger(__name__)

# Tope de átomos para acotar el coste de dibujo.
MAX_ATOMS = 20
DEFAULT_SEED = 0

ATOMS_PER_TURN = 10
BASE_RADIUS = 1.5
RADIUS_STEP = 0.1
RISE_PER_ATOM = 0.2

# Probabilidad de que un átomo reciba carga distinta de cero.
CHARGE_PROBABILITY = 0.2
CROSS_LINK_PERIOD = 3

SYMBOL_ELEMENTS = {"N", "O", "S", "P", "F"}
BOND_SYMBOLS = {
    "=": BondType.DOUBLE,
    "#": BondType.TRIPLE,
    ":": BondType.AROMATIC,
}


def spiral_position(index: int) -> Vec3:
    """Posición del átomo `index` sobre la espiral.

    El radio crece y la altura sube con cada átomo, así dos átomos nunca
    coinciden.
    """
    angle = index * 2.0 * math.pi / ATOMS_PER_TURN
    radius = BASE_RADIUS + index * RADIUS_STEP
    return (math.cos(angle) * radius, math.sin(angle) * radius, index * RISE_PER_ATOM)


def element_for(notation: str, index: int) -> str:
    """Elige el elemento del átomo `index` según la notación.

    Los símbolos N, O, S, P y F (sin distinguir mayúsculas) se usan tal
    cual; una `L` seguida de `C` se interpreta como cloro. El resto es
    carbono.
    """
    char = notation[index].upper()
    if char in SYMBOL_ELEMENTS:
        return char
    if char == "L" and index + 1 < len(notation) and notation[index + 1].upper() == "C":
        return "Cl"
    return "C"


def bond_type_for(char: str) -> BondType:
    """Tipo de enlace que indica un carácter de la notación."""
    return BOND_SYMBOLS.get(char, BondType.SINGLE)


def _draw_charge(rng: random.Random) -> int:
    if rng.random() >= CHARGE_PROBABILITY:
        return 0
    return 1 if rng.random() < 0.5 else -1


def generate(notation: str, seed: Optional[int] = DEFAULT_SEED) -> MolGraph:
    """Construye el grafo molecular de marcador de una notación.

    Args:
        notation: Cadena de notación lineal; no se valida su gramática.
        seed: Semilla del sorteo de cargas. Con `None` el sorteo no es
            reproducible entre llamadas.

    Returns:
        Grafo con `min(len(notation), MAX_ATOMS)` átomos, un enlace entre
        cada par de átomos consecutivos y un enlace simple extra `(i, i-3)`
        para cada `i > 3` múltiplo de 3.
    """
    rng = random.Random(seed)
    builder = MolGraphBuilder()
    count = min(len(notation), MAX_ATOMS)

    for i in range(count):
        builder.add_atom(element_for(notation, i), spiral_position(i), charge=_draw_charge(rng))
        if i > 0:
            builder.add_bond(i - 1, i, bond_type_for(notation[i]))
        if i > CROSS_LINK_PERIOD and i % CROSS_LINK_PERIOD == 0:
            builder.add_bond(i, i - CROSS_LINK_PERIOD, BondType.SINGLE)

    graph = builder.build()
    logger.debug(
        "Notación de %d caracteres -> %d átomos, %d enlaces",
        len(notation),
        graph.atom_count,
        graph.bond_count,
    )
    return graph
