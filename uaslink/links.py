"""Link-level types: device errors, transmit buffers and I/O statistics."""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass, fields
from typing import Callable

# MAVLink v1.0 maximum packet length, CRC bytes and alignment padding.
MAVLINK_MAX_PACKET_LEN = 263
_CRC_LEN = 2
_ALIGN_PADDING = 7


class DeviceError(RuntimeError):
    """Communication error raised by a link.

    ``msg`` may be a description string, an errno number or another exception.
    """

    def __init__(self, module: str, msg: str | int | BaseException) -> None:
        self.module = module
        self.detail = self._msg_to_string(msg)
        super().__init__(f"DeviceError:{module}:{self.detail}")

    @staticmethod
    def _msg_to_string(msg: str | int | BaseException) -> str:
        if isinstance(msg, bool):
            return str(msg)
        if isinstance(msg, int):
            return os.strerror(msg)
        return str(msg)


@dataclass(frozen=True)
class IOStat:
    """Byte counters and current speeds [B/s] of a link."""

    tx_total_bytes: int = 0
    rx_total_bytes: int = 0
    tx_speed: float = 0.0
    rx_speed: float = 0.0

    def __add__(self, other: "IOStat") -> "IOStat":
        if not isinstance(other, IOStat):
            return NotImplemented
        return IOStat(
            self.tx_total_bytes + other.tx_total_bytes,
            self.rx_total_bytes + other.rx_total_bytes,
            self.tx_speed + other.tx_speed,
            self.rx_speed + other.rx_speed,
        )


@dataclass(frozen=True)
class LinkStatus:
    """Parser status counters of a link."""

    packet_rx_success_count: int = 0
    packet_rx_drop_count: int = 0
    buffer_overrun: int = 0
    parse_error: int = 0
    current_rx_seq: int = 0
    current_tx_seq: int = 0

    def __add__(self, other: "LinkStatus") -> "LinkStatus":
        """Sum the counters; sequence numbers are not meaningful in a sum and stay 0."""
        if not isinstance(other, LinkStatus):
            return NotImplemented
        return LinkStatus(
            self.packet_rx_success_count + other.packet_rx_success_count,
            self.packet_rx_drop_count + other.packet_rx_drop_count,
            self.buffer_overrun + other.buffer_overrun,
            self.parse_error + other.parse_error,
        )


class MsgBuffer:
    """Outgoing byte buffer that tracks how much has already been written."""

    MAX_SIZE = MAVLINK_MAX_PACKET_LEN + _CRC_LEN + _ALIGN_PADDING

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if not 0 < len(data) < self.MAX_SIZE:
            raise ValueError(
                f"buffer size must be between 1 and {self.MAX_SIZE - 1}, got {len(data)}"
            )
        self.data = data
        self.pos = 0

    def __len__(self) -> int:
        return len(self.data)

    def remaining(self) -> bytes:
        """Return the bytes not yet written."""
        return self.data[self.pos :]

    def pending(self) -> int:
        """Return the number of bytes not yet written."""
        return len(self.data) - self.pos

    def advance(self, nbytes: int) -> None:
        """Mark ``nbytes`` more bytes as written."""
        if nbytes < 0 or nbytes > self.pending():
            raise ValueError(f"cannot advance by {nbytes}, {self.pending()} pending")
        self.pos += nbytes


class IOStatCounter:
    """Thread-safe byte counters with speed computed between snapshots."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._tx_total = 0
        self._rx_total = 0
        self._last_tx_total = 0
        self._last_rx_total = 0
        self._last_time = clock()

    def tx_add(self, nbytes: int) -> None:
        """Count transmitted bytes."""
        with self._lock:
            self._tx_total += nbytes

    def rx_add(self, nbytes: int) -> None:
        """Count received bytes."""
        with self._lock:
            self._rx_total += nbytes

    def snapshot(self) -> IOStat:
        """Return totals and the speeds since the previous snapshot."""
        with self._lock:
            now = self._clock()
            dt = now - self._last_time
            tx_total, rx_total = self._tx_total, self._rx_total
            if dt > 0:
                tx_speed = (tx_total - self._last_tx_total) / dt
                rx_speed = (rx_total - self._last_rx_total) / dt
            else:
                tx_speed = rx_speed = 0.0
            self._last_tx_total = tx_total
            self._last_rx_total = rx_total
            self._last_time = now
            return IOStat(tx_total, rx_total, float(tx_speed), float(rx_speed))


def _field_names(cls: type) -> tuple[str, ...]:
    return tuple(f.name for f in fields(cls))