"""Quaternion type and roll/pitch/yaw helpers.

Axis order follows the ZYX (yaw-pitch-roll) convention.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion with scalar part ``w``."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        if not isinstance(other, Quaternion):
            return NotImplemented
        a, b = self, other
        return Quaternion(
            a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
            a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
            a.w * b.y + a.y * b.w + a.z * b.x - a.x * b.z,
            a.w * b.z + a.z * b.w + a.x * b.y - a.y * b.x,
        )

    def inverse(self) -> "Quaternion":
        """Return the multiplicative inverse."""
        n2 = self.w**2 + self.x**2 + self.y**2 + self.z**2
        if n2 == 0.0:
            raise ValueError("zero quaternion has no inverse")
        return Quaternion(self.w / n2, -self.x / n2, -self.y / n2, -self.z / n2)

    def rotation_matrix(self) -> np.ndarray:
        """Return the 3x3 rotation matrix of a unit quaternion."""
        w, x, y, z = self.w, self.x, self.y, self.z
        return np.array(
            [
                [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
                [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
                [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
            ]
        )

    def rotate(self, vec: Iterable[float]) -> np.ndarray:
        """Rotate a 3-vector by this quaternion."""
        v = np.asarray(vec, dtype=float)
        if v.shape != (3,):
            raise ValueError("expected a 3-vector")
        return self.rotation_matrix() @ v


def _from_angle_axis(angle: float, axis: tuple[float, float, float]) -> Quaternion:
    s = math.sin(angle / 2.0)
    return Quaternion(math.cos(angle / 2.0), s * axis[0], s * axis[1], s * axis[2])


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> Quaternion:
    """Build a quaternion from roll, pitch and yaw (radians), ZYX order."""
    return (
        _from_angle_axis(yaw, (0.0, 0.0, 1.0))
        * _from_angle_axis(pitch, (0.0, 1.0, 0.0))
        * _from_angle_axis(roll, (1.0, 0.0, 0.0))
    )


def quaternion_to_rpy(q: Quaternion) -> tuple[float, float, float]:
    """Return (roll, pitch, yaw); yaw lies in [0, pi], the others in [-pi, pi]."""
    m = q.rotation_matrix()
    yaw = math.atan2(m[1, 0], m[0, 0])
    c2 = math.hypot(m[2, 2], m[2, 1])
    if yaw < 0.0:
        yaw += math.pi
        pitch = math.atan2(-m[2, 0], -c2)
    else:
        pitch = math.atan2(-m[2, 0], c2)
    s1 = math.sin(yaw)
    c1 = math.cos(yaw)
    roll = math.atan2(s1 * m[0, 2] - c1 * m[1, 2], c1 * m[1, 1] - s1 * m[0, 1])
    return (roll, pitch, yaw)


def quaternion_get_yaw(q: Quaternion) -> float:
    """Return the yaw angle of a quaternion, in [-pi, pi]."""
    return math.atan2(2.0 * (q.w * q.z + q.x * q.y), 1.0 - 2.0 * (q.y * q.y + q.z * q.z))


def quaternion_to_mavlink(q: Quaternion) -> tuple[float, float, float, float]:
    """Return the single-precision (w, x, y, z) array used by MAVLink."""
    arr = np.array([q.w, q.x, q.y, q.z], dtype=np.float32)
    return tuple(float(v) for v in arr)