"""Diagnostic reports for a MAVLink link and for a 3DR radio modem."""

from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass, field
from typing import Any

_log = logging.getLogger(__name__)

OK = 0
WARN = 1
ERROR = 2

# System and component ids used by 3DR modems ('3', 'D').
_RADIO_SYSID = ord("3")
_RADIO_COMPID = ord("D")


@dataclass
class DiagnosticStatus:
    """Summary level and message plus ordered key/value details."""

    name: str = ""
    level: int = OK
    message: str = ""
    values: list[tuple[str, str]] = field(default_factory=list)

    def summary(self, level: int, message: str) -> None:
        """Set the overall level and message."""
        self.level = level
        self.message = message

    def add(self, key: str, value: Any) -> None:
        """Append a detail entry."""
        self.values.append((key, str(value)))

    def as_dict(self) -> dict[str, str]:
        """Return the details as a mapping."""
        return dict(self.values)


class MavlinkDiag:
    """Diagnostic task reporting parser and I/O statistics of a link.

    The link needs ``get_status()`` returning a LinkStatus and ``get_iostat()``
    returning an IOStat. Only a weak reference to it is kept.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._link_ref: weakref.ReferenceType | None = None
        self._last_drop_count = 0
        self._connected = False

    def set_mavconn(self, link: Any) -> None:
        """Set the link to report on."""
        self._link_ref = weakref.ref(link)

    def set_connection_status(self, connected: bool) -> None:
        """Record whether the remote end is connected."""
        self._connected = connected

    def run(self, stat: DiagnosticStatus) -> None:
        """Fill ``stat`` with the current state of the link."""
        link = self._link_ref() if self._link_ref is not None else None
        if link is None:
            stat.summary(ERROR, "not connected")
            return

        status = link.get_status()
        iostat = link.get_iostat()

        stat.add("Received packets:", int(status.packet_rx_success_count))
        stat.add("Dropped packets:", int(status.packet_rx_drop_count))
        stat.add("Buffer overruns:", int(status.buffer_overrun))
        stat.add("Parse errors:", int(status.parse_error))
        stat.add("Rx sequence number:", int(status.current_rx_seq))
        stat.add("Tx sequence number:", int(status.current_tx_seq))

        stat.add("Rx total bytes:", int(iostat.rx_total_bytes))
        stat.add("Tx total bytes:", int(iostat.tx_total_bytes))
        stat.add("Rx speed:", f"{iostat.rx_speed:f}")
        stat.add("Tx speed:", f"{iostat.tx_speed:f}")

        drops = status.packet_rx_drop_count
        if drops > self._last_drop_count:
            stat.summary(WARN, f"{drops - self._last_drop_count} packages dropped since last report")
        elif self._connected:
            stat.summary(OK, "connected")
        else:
            stat.summary(WARN, "not connected")

        self._last_drop_count = drops


@dataclass(frozen=True)
class RadioStatus:
    """RADIO_STATUS report with signal levels converted to dBm."""

    rssi: int
    remrssi: int
    txbuf: int
    noise: int
    remnoise: int
    rxerrors: int
    fixed: int
    rssi_dbm: float
    remrssi_dbm: float


def _to_dbm(raw: int) -> float:
    # Valid for 3DR modems.
    return raw / 1.9 - 127


class RadioDiag:
    """Tracks 3DR radio status reports and rates signal quality."""

    def __init__(self, low_rssi: int = 40) -> None:
        self.low_rssi = low_rssi
        self._lock = threading.Lock()
        self._last: RadioStatus | None = None

    @property
    def last_status(self) -> RadioStatus | None:
        """The most recent report, or None."""
        with self._lock:
            return self._last

    def handle_status(self, rst: Any, sysid: int, compid: int) -> RadioStatus:
        """Record a RADIO_STATUS report (any object with its fields) and return it."""
        if sysid != _RADIO_SYSID or compid != _RADIO_COMPID:
            _log.warning("RADIO_STATUS not from 3DR modem?")
        status = RadioStatus(
            rssi=rst.rssi,
            remrssi=rst.remrssi,
            txbuf=rst.txbuf,
            noise=rst.noise,
            remnoise=rst.remnoise,
            rxerrors=rst.rxerrors,
            fixed=rst.fixed,
            rssi_dbm=_to_dbm(rst.rssi),
            remrssi_dbm=_to_dbm(rst.remrssi),
        )
        with self._lock:
            self._last = status
        return status

    def run(self, stat: DiagnosticStatus) -> None:
        """Fill ``stat`` with the state of the radio link."""
        with self._lock:
            last = self._last

        if last is None:
            stat.summary(ERROR, "No data")
            return
        if last.rssi < self.low_rssi:
            stat.summary(WARN, "Low RSSI")
        elif last.remrssi < self.low_rssi:
            stat.summary(WARN, "Low remote RSSI")
        else:
            stat.summary(OK, "Normal")

        stat.add("RSSI", int(last.rssi))
        stat.add("RSSI (dBm)", f"{last.rssi_dbm:.1f}")
        stat.add("Remote RSSI", int(last.remrssi))
        stat.add("Remote RSSI (dBm)", f"{last.remrssi_dbm:.1f}")
        stat.add("Tx buffer (%)", int(last.txbuf))
        stat.add("Noise level", int(last.noise))
        stat.add("Remote noise level", int(last.remnoise))
        stat.add("Rx errors", int(last.rxerrors))
        stat.add("Fixed", int(last.fixed))

    def reset(self) -> None:
        """Forget the last report, e.g. when the connection state changes."""
        with self._lock:
            self._last = None