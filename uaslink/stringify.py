"""Human-readable names for MAVLink enums and autopilot custom modes."""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from typing import Mapping

_log = logging.getLogger(__name__)


class MavType(IntEnum):
    """MAV_TYPE values."""

    GENERIC = 0
    FIXED_WING = 1
    QUADROTOR = 2
    COAXIAL = 3
    HELICOPTER = 4
    ANTENNA_TRACKER = 5
    GCS = 6
    AIRSHIP = 7
    FREE_BALLOON = 8
    ROCKET = 9
    GROUND_ROVER = 10
    SURFACE_BOAT = 11
    SUBMARINE = 12
    HEXAROTOR = 13
    OCTOROTOR = 14
    TRICOPTER = 15
    FLAPPING_WING = 16
    KITE = 17
    ONBOARD_CONTROLLER = 18
    VTOL_DUOROTOR = 19
    VTOL_QUADROTOR = 20
    VTOL_TILTROTOR = 21
    VTOL_RESERVED2 = 22
    VTOL_RESERVED3 = 23
    VTOL_RESERVED4 = 24
    VTOL_RESERVED5 = 25
    GIMBAL = 26
    ADSB = 27


class MavAutopilot(IntEnum):
    """MAV_AUTOPILOT values."""

    GENERIC = 0
    PIXHAWK = 1
    SLUGS = 2
    ARDUPILOTMEGA = 3
    OPENPILOT = 4
    GENERIC_WAYPOINTS_ONLY = 5
    GENERIC_WAYPOINTS_AND_SIMPLE_NAVIGATION_ONLY = 6
    GENERIC_MISSION_FULL = 7
    INVALID = 8
    PPZ = 9
    UDB = 10
    FP = 11
    PX4 = 12
    SMACCMPILOT = 13
    AUTOQUAD = 14
    ARMAZILA = 15
    AEROB = 16
    ASLUAV = 17


_ARDUPLANE_MODES: Mapping[int, str] = {
    0: "MANUAL",
    1: "CIRCLE",
    2: "STABILIZE",
    3: "TRAINING",
    4: "ACRO",
    5: "FBWA",
    6: "FBWB",
    7: "CRUISE",
    8: "AUTOTUNE",
    10: "AUTO",
    11: "RTL",
    12: "LOITER",
    14: "LAND",
    15: "GUIDED",
    16: "INITIALISING",
    17: "QSTABILIZE",
    18: "QHOVER",
    19: "QLOITER",
    20: "QLAND",
}

_ARDUCOPTER_MODES: Mapping[int, str] = {
    0: "STABILIZE",
    1: "ACRO",
    2: "ALT_HOLD",
    3: "AUTO",
    4: "GUIDED",
    5: "LOITER",
    6: "RTL",
    7: "CIRCLE",
    8: "POSITION",
    9: "LAND",
    10: "OF_LOITER",
    11: "DRIFT",
    13: "SPORT",
    14: "FLIP",
    15: "AUTOTUNE",
    16: "POSHOLD",
    17: "BRAKE",
}

_APMROVER2_MODES: Mapping[int, str] = {
    0: "MANUAL",
    2: "LEARNING",
    3: "STEERING",
    4: "HOLD",
    10: "AUTO",
    11: "RTL",
    15: "GUIDED",
    16: "INITIALISING",
}

# PX4 custom mode word: bits 0..15 reserved, 16..23 main mode, 24..31 sub mode.
_PX4_MAIN_MANUAL = 1
_PX4_MAIN_ALTCTL = 2
_PX4_MAIN_POSCTL = 3
_PX4_MAIN_AUTO = 4
_PX4_MAIN_ACRO = 5
_PX4_MAIN_OFFBOARD = 6
_PX4_MAIN_STABILIZED = 7
_PX4_MAIN_RATTITUDE = 8

_PX4_SUB_AUTO_READY = 1
_PX4_SUB_AUTO_TAKEOFF = 2
_PX4_SUB_AUTO_LOITER = 3
_PX4_SUB_AUTO_MISSION = 4
_PX4_SUB_AUTO_RTL = 5
_PX4_SUB_AUTO_LAND = 6
_PX4_SUB_AUTO_RTGS = 7


def _px4_mode(main_mode: int, sub_mode: int = 0) -> int:
    return (main_mode & 0xFF) << 16 | (sub_mode & 0xFF) << 24


def _px4_mode_auto(sub_mode: int) -> int:
    return _px4_mode(_PX4_MAIN_AUTO, sub_mode)


_PX4_MODES: Mapping[int, str] = {
    _px4_mode(_PX4_MAIN_MANUAL): "MANUAL",
    _px4_mode(_PX4_MAIN_ACRO): "ACRO",
    _px4_mode(_PX4_MAIN_ALTCTL): "ALTCTL",
    _px4_mode(_PX4_MAIN_POSCTL): "POSCTL",
    _px4_mode(_PX4_MAIN_OFFBOARD): "OFFBOARD",
    _px4_mode(_PX4_MAIN_STABILIZED): "STABILIZED",
    _px4_mode(_PX4_MAIN_RATTITUDE): "RATTITUDE",
    _px4_mode_auto(_PX4_SUB_AUTO_MISSION): "AUTO.MISSION",
    _px4_mode_auto(_PX4_SUB_AUTO_LOITER): "AUTO.LOITER",
    _px4_mode_auto(_PX4_SUB_AUTO_RTL): "AUTO.RTL",
    _px4_mode_auto(_PX4_SUB_AUTO_LAND): "AUTO.LAND",
    _px4_mode_auto(_PX4_SUB_AUTO_RTGS): "AUTO.RTGS",
    _px4_mode_auto(_PX4_SUB_AUTO_READY): "AUTO.READY",
    _px4_mode_auto(_PX4_SUB_AUTO_TAKEOFF): "AUTO.TAKEOFF",
}

_APM_COPTER_TYPES = frozenset(
    {
        MavType.QUADROTOR,
        MavType.HEXAROTOR,
        MavType.OCTOROTOR,
        MavType.TRICOPTER,
        MavType.COAXIAL,
    }
)

_AUTOPILOT_STRINGS = (
    "Generic",
    "PIXHAWK",
    "SLUGS",
    "ArduPilotMega",
    "OpenPilot",
    "Generic-WP-Only",
    "Generic-WP-Simple-Nav",
    "Generic-Mission-Full",
    "INVALID",
    "Paparazzi",
    "UDB",
    "FlexiPilot",
    "PX4",
    "SMACCMPILOT",
    "AUTOQUAD",
    "ARMAZILA",
    "AEROB",
    "ASLUAV",
)

_TYPE_STRINGS = (
    "Generic",
    "Fixed-Wing",
    "Quadrotor",
    "Coaxial-Heli",
    "Helicopter",
    "Antenna-Tracker",
    "GCS",
    "Airship",
    "Free-Balloon",
    "Rocket",
    "Ground-Rover",
    "Surface-Boat",
    "Submarine",
    "Hexarotor",
    "Octorotor",
    "Tricopter",
    "Flapping-Wing",
    "Kite",
    "Onboard-Controller",
    "VTOL-Duorotor",
    "VTOL-Quadrotor",
    "VTOL-Tiltrotor",
    "VTOL-RESERVED2",
    "VTOL-RESERVED3",
    "VTOL-RESERVED4",
    "VTOL-RESERVED5",
    "Gimbal",
    "ADS-B",
)

_STATE_STRINGS = (
    "Uninit",
    "Boot",
    "Calibrating",
    "Standby",
    "Active",
    "Critical",
    "Emergency",
    "Poweroff",
)

# Leading integer with automatic base: 0x.. hex, 0.. octal, otherwise decimal.
_INT_PREFIX = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _str_base_mode(base_mode: int) -> str:
    return f"MODE(0x{base_mode:X})"


def _str_custom_mode(custom_mode: int) -> str:
    return f"CMODE({custom_mode})"


def _str_mode_cmap(cmap: Mapping[int, str], custom_mode: int) -> str:
    return cmap.get(custom_mode, _str_custom_mode(custom_mode))


def _str_mode_px4(custom_mode: int) -> str:
    main_mode = (custom_mode >> 16) & 0xFF
    sub_mode = (custom_mode >> 24) & 0xFF
    if main_mode != _PX4_MAIN_AUTO:
        if sub_mode != 0:
            _log.warning("PX4: Unknown sub-mode %d.%d", main_mode, sub_mode)
        sub_mode = 0
    return _str_mode_cmap(_PX4_MODES, _px4_mode(main_mode, sub_mode))


def _apm_mode_map(vehicle_type: int) -> Mapping[int, str] | None:
    if vehicle_type in _APM_COPTER_TYPES or vehicle_type == MavType.SUBMARINE:
        return _ARDUCOPTER_MODES
    if vehicle_type == MavType.FIXED_WING:
        return _ARDUPLANE_MODES
    if vehicle_type == MavType.GROUND_ROVER:
        return _APMROVER2_MODES
    return None


def _parse_int(text: str) -> int | None:
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits, 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits, 10)
    return -value if sign == "-" else value


def _cmode_find_cmap(cmap: Mapping[int, str], cmode_str: str) -> int:
    for mode, name in cmap.items():
        if name == cmode_str:
            return mode

    number = _parse_int(cmode_str)
    if number is not None:
        if not _INT32_MIN <= number <= _INT32_MAX:
            raise ValueError(f"MODE: numeric mode out of range: {cmode_str}")
        return number & 0xFFFFFFFF

    _log.error("MODE: Unknown mode: %s", cmode_str)
    _log.info("MODE: Known modes are: %s", " ".join(cmap.values()))
    raise ValueError(f"MODE: Unknown mode: {cmode_str}")


def str_mode_v10(base_mode: int, custom_mode: int, vehicle_type: int, autopilot: int) -> str:
    """Return the name of a flight mode given the vehicle type and autopilot."""
    # Any non-zero base mode is treated as carrying a custom mode.
    if not base_mode:
        return _str_base_mode(base_mode)

    if autopilot == MavAutopilot.ARDUPILOTMEGA:
        cmap = _apm_mode_map(vehicle_type)
        if cmap is None:
            _log.warning("MODE: Unknown APM based FCU! Type: %d", vehicle_type)
            return _str_custom_mode(custom_mode)
        return _str_mode_cmap(cmap, custom_mode)
    if autopilot == MavAutopilot.PX4:
        return _str_mode_px4(custom_mode)
    return _str_custom_mode(custom_mode)


def cmode_from_str(cmode_str: str, vehicle_type: int, autopilot: int) -> int:
    """Return the custom mode number for a mode name (case-insensitive) or number.

    Raises ValueError for an unknown mode or an unsupported autopilot.
    """
    cmode_str = cmode_str.upper()

    if autopilot == MavAutopilot.ARDUPILOTMEGA:
        cmap = _apm_mode_map(vehicle_type)
        if cmap is not None:
            return _cmode_find_cmap(cmap, cmode_str)
    elif autopilot == MavAutopilot.PX4:
        return _cmode_find_cmap(_PX4_MODES, cmode_str)

    _log.error("MODE: Unsupported FCU")
    raise ValueError("MODE: Unsupported FCU")


def _lookup(table: tuple[str, ...], value: int) -> str:
    idx = int(value)
    if 0 <= idx < len(table):
        return table[idx]
    return str(idx)


def str_autopilot(autopilot: int) -> str:
    """Return the name of a MAV_AUTOPILOT value, or the number if unknown."""
    return _lookup(_AUTOPILOT_STRINGS, autopilot)


def str_type(vehicle_type: int) -> str:
    """Return the name of a MAV_TYPE value, or the number if unknown."""
    return _lookup(_TYPE_STRINGS, vehicle_type)


def str_system_status(state: int) -> str:
    """Return the name of a MAV_STATE value, or the number if unknown."""
    return _lookup(_STATE_STRINGS, state)