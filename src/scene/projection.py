"""
Proyección de la escena 3D a la superficie de dibujo 2D.

Incluye la cámara en perspectiva que mira a su objetivo y la selección de
átomos bajo un punto de pantalla.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from core.camera import CameraPose
from scene.composer import AtomDrawable
from scene.geom3d import UP, Vec3, cross, dot, length, normalize, sub

DEFAULT_FOV_DEG = 50.0
NEAR_PLANE = 0.1
# Holgura en píxeles para acertar átomos pequeños.
PICK_TOLERANCE_PX = 3.0


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float
    depth: float


class Projector:
    """Proyección en perspectiva para una pose de cámara y un tamaño de vista."""

    def __init__(
        self,
        pose: CameraPose,
        width: float,
        height: float,
        fov_deg: float = DEFAULT_FOV_DEG,
    ) -> None:
        self.pose = pose
        self.width = float(width)
        self.height = float(height)
        self.focal = (self.height / 2.0) / math.tan(math.radians(fov_deg) / 2.0)
        self.forward, self.right, self.up = self._basis(pose)

    @staticmethod
    def _basis(pose: CameraPose) -> Tuple[Vec3, Vec3, Vec3]:
        forward = normalize(sub(pose.target, pose.position))
        right = cross(forward, UP)
        if length(right) <= 1e-9:
            # Cámara alineada con el eje vertical.
            right = (1.0, 0.0, 0.0)
        right = normalize(right)
        up = cross(right, forward)
        return forward, right, up

    def project(self, point: Vec3) -> Optional[ScreenPoint]:
        """Coordenadas de pantalla del punto o `None` si queda detrás de la cámara."""
        rel = sub(point, self.pose.position)
        z = dot(rel, self.forward)
        if z <= NEAR_PLANE:
            return None
        x = dot(rel, self.right)
        y = dot(rel, self.up)
        return ScreenPoint(
            x=self.width / 2.0 + x / z * self.focal,
            y=self.height / 2.0 - y / z * self.focal,
            depth=z,
        )

    def project_radius(self, radius: float, depth: float) -> float:
        if depth <= NEAR_PLANE:
            return 0.0
        return radius / depth * self.focal


def pick_atom(
    projector: Projector,
    atoms: Iterable[AtomDrawable],
    x: float,
    y: float,
    tolerance: float = PICK_TOLERANCE_PX,
) -> Optional[int]:
    """Devuelve el índice del átomo más cercano a la cámara bajo `(x, y)`."""
    best_idx = None
    best_depth = math.inf
    for atom in atoms:
        screen = projector.project(atom.center)
        if screen is None:
            continue
        radius = projector.project_radius(atom.radius, screen.depth) + tolerance
        if math.hypot(screen.x - x, screen.y - y) <= radius and screen.depth < best_depth:
            best_idx = atom.atom_idx
            best_depth = screen.depth
    return best_idx
