"""
Geometría de enlaces según su multiplicidad.

Cada enlace se dibuja como uno o varios cilindros delgados que parten del
punto medio del enlace, rotados para alinear el eje "arriba" canónico con
la dirección del enlace. Los enlaces dobles y triples desplazan cilindros
paralelos en direcciones opuestas perpendiculares al eje.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from core.model import BondType
from scene.geom3d import (
    UP,
    Quat,
    Transform,
    Vec3,
    distance,
    midpoint,
    normalize,
    quat_from_unit_vectors,
    quat_rotate,
    sub,
    add,
)

# Separación lateral entre cilindros de enlaces múltiples.
BOND_SPACING = 0.05

# Desplazamientos laterales (en unidades de `spacing`) por tipo de enlace.
LATERAL_PATTERNS = {
    BondType.SINGLE: (0.0,),
    BondType.AROMATIC: (0.0,),
    BondType.DOUBLE: (1.0, -1.0),
    BondType.TRIPLE: (0.0, 1.0, -1.0),
}


@dataclass(frozen=True)
class BondSegment:
    """Un cilindro de un enlace.

    `lateral` es el desplazamiento con signo sobre el eje X local del
    enlace; `offset` es ese desplazamiento ya en coordenadas del mundo.
    """
    lateral: float
    offset: Vec3
    start: Vec3
    end: Vec3
    dashed: bool = False

    @property
    def local_transform(self) -> Transform:
        return Transform(translation=(self.lateral, 0.0, 0.0))


@dataclass(frozen=True)
class BondGeometry:
    """Resultado de resolver un enlace: marco local y segmentos a dibujar."""
    midpoint: Vec3
    direction: Vec3
    length: float
    rotation: Quat
    segments: Tuple[BondSegment, ...]

    @property
    def transform(self) -> Transform:
        """Transformación del grupo del enlace (centrado en el punto medio)."""
        return Transform(translation=self.midpoint, rotation=self.rotation)


def resolve(
    bond_type: BondType,
    start: Vec3,
    end: Vec3,
    spacing: float = BOND_SPACING,
) -> BondGeometry:
    """Calcula los segmentos que representan un enlace.

    Args:
        bond_type: Multiplicidad del enlace.
        start: Posición del primer átomo.
        end: Posición del segundo átomo.
        spacing: Separación lateral de los cilindros paralelos.

    Returns:
        `BondGeometry` con 1, 1, 2 o 3 segmentos para simple, aromático,
        doble y triple. Los desplazamientos son simétricos respecto al eje.
    """
    bond_type = BondType(bond_type)
    seg_length = distance(start, end)
    direction = normalize(sub(end, start))
    if seg_length <= 1e-9:
        # Extremos coincidentes: sin dirección definida, se usa la canónica.
        direction = UP
    rotation = quat_from_unit_vectors(UP, direction)
    center = midpoint(start, end)
    dashed = bond_type == BondType.AROMATIC

    segments = []
    for factor in LATERAL_PATTERNS[bond_type]:
        lateral = factor * spacing
        offset = quat_rotate(rotation, (lateral, 0.0, 0.0))
        segments.append(
            BondSegment(
                lateral=lateral,
                offset=offset,
                start=add(start, offset),
                end=add(end, offset),
                dashed=dashed,
            )
        )

    return BondGeometry(
        midpoint=center,
        direction=direction,
        length=seg_length,
        rotation=rotation,
        segments=tuple(segments),
    )

