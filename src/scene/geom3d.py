"""
Utilidades geométricas 3D para la composición de escena.

Funciones puras sobre tuplas `(x, y, z)` y cuaterniones `(x, y, z, w)`,
más una transformación afín simple (escala uniforme, rotación y
traslación) que se compone de padre a hijo.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Vec3 = Tuple[float, float, float]
Quat = Tuple[float, float, float, float]

UP: Vec3 = (0.0, 1.0, 0.0)
IDENTITY_QUAT: Quat = (0.0, 0.0, 0.0, 1.0)
EPS = 1e-9


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Vec3, k: float) -> Vec3:
    return (a[0] * k, a[1] * k, a[2] * k)


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(a: Vec3) -> float:
    return math.sqrt(dot(a, a))


def distance(a: Vec3, b: Vec3) -> float:
    return length(sub(b, a))


def normalize(a: Vec3) -> Vec3:
    """Vector unitario; el vector nulo se devuelve sin cambios."""
    n = length(a)
    if n <= EPS:
        return a
    return (a[0] / n, a[1] / n, a[2] / n)


def midpoint(a: Vec3, b: Vec3) -> Vec3:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0, (a[2] + b[2]) / 2.0)


def quat_normalize(q: Quat) -> Quat:
    n = math.sqrt(q[0] * q[0] + q[1] * q[1] + q[2] * q[2] + q[3] * q[3])
    if n <= EPS:
        return IDENTITY_QUAT
    return (q[0] / n, q[1] / n, q[2] / n, q[3] / n)


def quat_from_unit_vectors(v_from: Vec3, v_to: Vec3) -> Quat:
    """Rotación de arco mínimo que lleva `v_from` sobre `v_to`.

    Ambos vectores deben ser unitarios. Si son opuestos se gira 180°
    alrededor de un eje perpendicular a `v_from`.
    """
    r = dot(v_from, v_to) + 1.0
    if r < 1e-6:
        if abs(v_from[0]) > abs(v_from[2]):
            q = (-v_from[1], v_from[0], 0.0, 0.0)
        else:
            q = (0.0, -v_from[2], v_from[1], 0.0)
    else:
        c = cross(v_from, v_to)
        q = (c[0], c[1], c[2], r)
    return quat_normalize(q)


def quat_multiply(a: Quat, b: Quat) -> Quat:
    """Producto de Hamilton `a * b` (aplica primero `b`)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def quat_rotate(q: Quat, v: Vec3) -> Vec3:
    """Aplica la rotación `q` al vector `v`."""
    qx, qy, qz, qw = q
    u = (qx, qy, qz)
    t = scale(cross(u, v), 2.0)
    return add(add(v, scale(t, qw)), cross(u, t))


@dataclass(frozen=True)
class Transform:
    """Transformación de nodo: escala uniforme, luego rotación, luego traslación."""
    translation: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = IDENTITY_QUAT
    scale: float = 1.0

    def apply(self, point: Vec3) -> Vec3:
        return add(quat_rotate(self.rotation, (
            point[0] * self.scale,
            point[1] * self.scale,
            point[2] * self.scale,
        )), self.translation)

    def compose(self, child: "Transform") -> "Transform":
        """Transformación mundial de un hijo con transformación local `child`."""
        return Transform(
            translation=self.apply(child.translation),
            rotation=quat_multiply(self.rotation, child.rotation),
            scale=self.scale * child.scale,
        )
