"""Conversions between NED/ENU and aircraft/base_link frames."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

import numpy as np

from uaslink.quaternion import Quaternion, quaternion_from_rpy


class StaticTransform(Enum):
    """Known fixed transforms between frames."""

    NED_TO_ENU = "ned_to_enu"
    ENU_TO_NED = "enu_to_ned"
    AIRCRAFT_TO_BASELINK = "aircraft_to_baselink"
    BASELINK_TO_AIRCRAFT = "baselink_to_aircraft"


# +PI about X followed by +PI/2 about Z maps NED onto ENU (and back).
_NED_ENU_Q = quaternion_from_rpy(math.pi, 0.0, math.pi / 2)
# +PI about X maps Forward-Right-Down onto Forward-Left-Up.
_AIRCRAFT_BASELINK_Q = quaternion_from_rpy(math.pi, 0.0, 0.0)

_NED_ENU_GROUP = (StaticTransform.NED_TO_ENU, StaticTransform.ENU_TO_NED)
_AIRCRAFT_GROUP = (StaticTransform.AIRCRAFT_TO_BASELINK, StaticTransform.BASELINK_TO_AIRCRAFT)


def _static_quaternion(transform: StaticTransform) -> Quaternion:
    if transform in _NED_ENU_GROUP:
        return _NED_ENU_Q
    if transform in _AIRCRAFT_GROUP:
        return _AIRCRAFT_BASELINK_Q
    raise ValueError(f"unknown static transform: {transform!r}")


def _transform_covariance(cov, rotation: np.ndarray) -> np.ndarray:
    arr = np.asarray(cov, dtype=float)
    if arr.size != 9:
        raise ValueError("only 3x3 covariance matrices are supported")
    return (arr.reshape(3, 3) @ rotation).reshape(arr.shape)


def transform_orientation(q: Quaternion, transform: StaticTransform) -> Quaternion:
    """Express an orientation in another frame."""
    if transform in _NED_ENU_GROUP:
        return _NED_ENU_Q * q
    if transform in _AIRCRAFT_GROUP:
        return q * _AIRCRAFT_BASELINK_Q
    raise ValueError(f"unknown static transform: {transform!r}")


def transform_static_frame(vec: Iterable[float], transform: StaticTransform) -> np.ndarray:
    """Rotate a 3-vector by a static frame transform."""
    return _static_quaternion(transform).rotate(vec)


def transform_static_covariance(cov, transform: StaticTransform) -> np.ndarray:
    """Transform a 3x3 covariance (flat row-major or 3x3) by a static transform."""
    return _transform_covariance(cov, _static_quaternion(transform).rotation_matrix())


def transform_frame(vec: Iterable[float], q: Quaternion) -> np.ndarray:
    """Rotate a 3-vector by an arbitrary quaternion."""
    return q.rotate(vec)


def transform_frame_covariance(cov, q: Quaternion) -> np.ndarray:
    """Transform a 3x3 covariance (flat row-major or 3x3) by a quaternion."""
    return _transform_covariance(cov, q.rotation_matrix())