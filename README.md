# uaslink

Helpers for software that talks to MAVLink-speaking vehicles (autopilots such
as PX4 and ArduPilot).

## What is in the package

- **Quaternions** (`uaslink.quaternion`): the frozen dataclass `Quaternion`
  (`w`, `x`, `y`, `z`, with `*`, `inverse()`, `rotation_matrix()` and
  `rotate(vec)`), plus `quaternion_from_rpy(roll, pitch, yaw)` (ZYX order),
  `quaternion_to_rpy(q)`, `quaternion_get_yaw(q)` and
  `quaternion_to_mavlink(q)`, which rounds to single precision.
- **Frame conversions** (`uaslink.frames`): the enum `StaticTransform`
  (`NED_TO_ENU`, `ENU_TO_NED`, `AIRCRAFT_TO_BASELINK`, `BASELINK_TO_AIRCRAFT`)
  and `transform_orientation`, `transform_static_frame`,
  `transform_static_covariance`, `transform_frame` and
  `transform_frame_covariance`. Covariance functions accept a 3x3 matrix,
  flat (9 values, row-major) or shaped; other sizes raise `ValueError`.
- **Mode and enum strings** (`uaslink.stringify`): the enums `MavType` and
  `MavAutopilot`; `str_mode_v10(base_mode, custom_mode, vehicle_type,
  autopilot)` names ArduPilot (copter, plane, rover, submarine) and PX4 modes;
  `cmode_from_str(cmode_str, vehicle_type, autopilot)` turns a name
  (case-insensitive) or a number back into a custom mode and raises
  `ValueError` for unknown modes or unsupported autopilots; `str_autopilot`,
  `str_type` and `str_system_status` name enum values and fall back to the
  number.
- **Link types** (`uaslink.links`): `DeviceError`, the summable `IOStat` and
  `LinkStatus` records, `MsgBuffer` (an outgoing buffer of 1 to
  `MsgBuffer.MAX_SIZE - 1` bytes with `remaining()`, `pending()` and
  `advance(n)`) and the thread-safe `IOStatCounter` (`tx_add`, `rx_add`,
  `snapshot()` giving totals and speeds since the last snapshot).
- **Frame conversion for a message bus** (`uaslink.convert`):
  `MavlinkMessage`, `RosMavlink`, `to_ros(mmsg)` (keeps only the payload words
  in use) and `from_ros(rmsg)` (raises `ValueError` for an oversized payload).
- **Diagnostics** (`uaslink.diag`): `DiagnosticStatus` collects a level
  (`OK`, `WARN`, `ERROR`), a message and ordered details. `MavlinkDiag`
  reports the status and I/O statistics of any object with `get_status()` and
  `get_iostat()`, holding it only by weak reference. `RadioDiag` records
  3DR radio status reports as `RadioStatus` (with dBm values) and rates the
  signal against a `low_rssi` threshold (default 40).
- **Plugin filtering** (`uaslink.plugin_filter`): `pattern_match`,
  `prepare_lists`, `is_blacklisted` and `select_plugins` apply case-insensitive
  glob patterns; `px4_usb_quirk_sequence()` returns the byte chunks that start
  MAVLink on a PX4 USB console.

## Installation

```
pip install .
```

## Examples

Attitude and frames:

```python
from uaslink.quaternion import quaternion_from_rpy, quaternion_get_yaw
from uaslink.frames import StaticTransform, transform_static_frame

q = quaternion_from_rpy(0.1, 0.2, 0.3)
print(quaternion_get_yaw(q))          # 0.3 (within rounding)

print(transform_static_frame((1, 2, 3), StaticTransform.ENU_TO_NED))
# approximately [2, 1, -3]
```

Flight modes:

```python
from uaslink.stringify import MavAutopilot, MavType, cmode_from_str, str_mode_v10

print(str_mode_v10(1, 4, MavType.QUADROTOR, MavAutopilot.ARDUPILOTMEGA))     # GUIDED
print(cmode_from_str("guided", MavType.QUADROTOR, MavAutopilot.ARDUPILOTMEGA))  # 4
```

Choosing which plugins to load:

```python
from uaslink.plugin_filter import select_plugins

print(select_plugins(["sys_status", "command", "altitude"], [], ["sys_*"]))
# ['sys_status']
```

A whitelist given without a blacklist acts as if the blacklist were `["*"]`.
Names that match a whitelist pattern are kept even when a blacklist pattern
also matches them.

## What the package does not do

- It opens no connections: there are no serial, UDP or TCP links, and nothing
  reads or writes bytes. `MsgBuffer`, `IOStatCounter` and `DeviceError` are
  building blocks for such links, not links themselves.
- It does not encode or decode MAVLink payloads or compute checksums; message
  frames are carried as given.
- It keeps no vehicle state (heartbeat, IMU, GPS, time offset) and sends no
  commands to a vehicle.
- It has no table of sensor mounting orientations.
- It provides no command-line program.

## Running the tests

```
pip install .[test]
pytest
```