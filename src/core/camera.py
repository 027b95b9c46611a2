"""Control de cámara del visor: órbita manual, autorrotación y zoom.

La autorrotación es una función pura del tiempo transcurrido, de modo que
llamar a `update` más o menos veces por fotograma no acumula deriva.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional

from core.model import ZOOM_MAX, ZOOM_MIN, Vec3, ViewSettings, clamp_zoom

logger = logging.getLogger(__name__)

DEFAULT_ROTATION_SPEED = 0.5
DEFAULT_ORBIT_RADIUS = 5.0
DEFAULT_CAMERA_POSITION: Vec3 = (0.0, 0.0, 5.0)
ORIGIN: Vec3 = (0.0, 0.0, 0.0)
ZOOM_STEP = 0.2
# Margen para no alinear la cámara con el vector "arriba".
MAX_ELEVATION_RAD = math.radians(89.0)


@dataclass(frozen=True)
class CameraPose:
    """Posición de la cámara y punto al que mira."""
    position: Vec3 = DEFAULT_CAMERA_POSITION
    target: Vec3 = ORIGIN


class ElapsedClock:
    """Reloj de tiempo transcurrido desde su creación, en segundos."""

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._time_source = time_source
        self._start = time_source()

    def elapsed(self) -> float:
        return self._time_source() - self._start


class CameraController:
    """Estado de la cámara con dos subestados ortogonales.

    La órbita manual está siempre disponible; la autorrotación recalcula
    la posición a partir del reloj mientras está activa y, al apagarse,
    deja la cámara congelada en la última pose calculada.
    """

    def __init__(
        self,
        speed: float = DEFAULT_ROTATION_SPEED,
        radius: float = DEFAULT_ORBIT_RADIUS,
        pose: Optional[CameraPose] = None,
        settings: Optional[ViewSettings] = None,
    ) -> None:
        self.speed = speed
        self.radius = radius
        self.pose = pose or CameraPose()
        self.auto_rotate = False
        # El zoom vive en las preferencias compartidas con el compositor.
        self.settings = settings if settings is not None else ViewSettings()

    # ------------------------------------------------------------------
    # Autorrotación
    # ------------------------------------------------------------------

    def pose_at(self, t: float) -> CameraPose:
        """Pose de autorrotación en el instante `t` (sin efectos laterales).

        `x = cos(t*speed)*R`, `z = sin(t*speed)*R`; la altura `y` se
        conserva y la cámara mira siempre al origen.
        """
        angle = t * self.speed
        y = self.pose.position[1]
        return CameraPose(
            position=(math.cos(angle) * self.radius, y, math.sin(angle) * self.radius),
            target=ORIGIN,
        )

    def set_auto_rotate(self, enabled: bool) -> None:
        """Activa o desactiva la autorrotación sin reiniciar el reloj."""
        if enabled != self.auto_rotate:
            logger.debug("Autorrotación %s", "activada" if enabled else "desactivada")
        self.auto_rotate = enabled

    def update(self, t: float) -> CameraPose:
        """Avanza la cámara al instante `t` si la autorrotación está activa."""
        if self.auto_rotate:
            self.pose = self.pose_at(t)
        return self.pose

    # ------------------------------------------------------------------
    # Órbita manual
    # ------------------------------------------------------------------

    def orbit(self, d_azimuth: float, d_elevation: float) -> CameraPose:
        """Gira la cámara alrededor de su objetivo conservando la distancia.

        Args:
            d_azimuth: Incremento de azimut en radianes (giro sobre Y).
            d_elevation: Incremento de elevación en radianes.

        Returns:
            La nueva pose.
        """
        px, py, pz = self.pose.position
        tx, ty, tz = self.pose.target
        dx, dy, dz = px - tx, py - ty, pz - tz
        distance = math.sqrt(dx * dx + dy * dy + dz * dz)
        if distance <= 1e-9:
            return self.pose
        azimuth = math.atan2(dx, dz) + d_azimuth
        elevation = math.asin(max(-1.0, min(1.0, dy / distance))) + d_elevation
        elevation = max(-MAX_ELEVATION_RAD, min(MAX_ELEVATION_RAD, elevation))
        horizontal = math.cos(elevation) * distance
        self.pose = replace(
            self.pose,
            position=(
                tx + math.sin(azimuth) * horizontal,
                ty + math.sin(elevation) * distance,
                tz + math.cos(azimuth) * horizontal,
            ),
        )
        return self.pose

    def reset_view(self) -> None:
        self.pose = CameraPose()

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------

    @property
    def zoom(self) -> float:
        return clamp_zoom(self.settings.zoom)

    @zoom.setter
    def zoom(self, value: float) -> None:
        self.settings.zoom = clamp_zoom(value)

    def zoom_in(self) -> float:
        """Aumenta el zoom un paso fijo, sin pasar de `ZOOM_MAX`."""
        return self._step_zoom(ZOOM_STEP)

    def zoom_out(self) -> float:
        """Reduce el zoom un paso fijo, sin bajar de `ZOOM_MIN`."""
        return self._step_zoom(-ZOOM_STEP)

    def reset_zoom(self) -> float:
        self.settings.zoom = 1.0
        return self.settings.zoom

    def _step_zoom(self, delta: float) -> float:
        # Redondeo para que los pasos no acumulen error de coma flotante.
        value = round(self.zoom + delta, 6)
        self.settings.zoom = min(max(value, ZOOM_MIN), ZOOM_MAX)
        logger.debug("Zoom: %.2f", self.settings.zoom)
        return self.settings.zoom
