"""Conversion between raw MAVLink messages and their bus message form."""

from __future__ import annotations

from dataclasses import dataclass, field

MAVLINK_STX = 0xFE
MAVLINK_MAX_PAYLOAD_LEN = 255
# Payload storage in 64-bit words, including checksum and padding.
PAYLOAD64_WORDS = (MAVLINK_MAX_PAYLOAD_LEN + 2 + 7) // 8


@dataclass
class MavlinkMessage:
    """A decoded MAVLink v1.0 frame with its payload stored as 64-bit words."""

    length: int = 0
    seq: int = 0
    sysid: int = 0
    compid: int = 0
    msgid: int = 0
    checksum: int = 0
    magic: int = MAVLINK_STX
    payload64: list[int] = field(default_factory=lambda: [0] * PAYLOAD64_WORDS)


@dataclass
class RosMavlink:
    """MAVLink frame as carried over the message bus."""

    length: int = 0
    seq: int = 0
    sysid: int = 0
    compid: int = 0
    msgid: int = 0
    checksum: int = 0
    is_valid: bool = False
    payload64: list[int] = field(default_factory=list)


def from_ros(rmsg: RosMavlink) -> MavlinkMessage:
    """Build a MAVLink frame from its bus form.

    Raises ValueError if the payload does not fit a MAVLink frame.
    """
    if len(rmsg.payload64) > PAYLOAD64_WORDS:
        raise ValueError("illegal payload64 size")
    payload = list(rmsg.payload64) + [0] * (PAYLOAD64_WORDS - len(rmsg.payload64))
    return MavlinkMessage(
        length=rmsg.length,
        seq=rmsg.seq,
        sysid=rmsg.sysid,
        compid=rmsg.compid,
        msgid=rmsg.msgid,
        checksum=rmsg.checksum,
        magic=MAVLINK_STX,
        payload64=payload,
    )


def to_ros(mmsg: MavlinkMessage) -> RosMavlink:
    """Build the bus form of a MAVLink frame, keeping only the used payload words."""
    words = (mmsg.length + 7) // 8
    return RosMavlink(
        length=mmsg.length,
        seq=mmsg.seq,
        sysid=mmsg.sysid,
        compid=mmsg.compid,
        msgid=mmsg.msgid,
        checksum=mmsg.checksum,
        is_valid=True,
        payload64=list(mmsg.payload64[:words]),
    )