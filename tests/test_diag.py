import gc
from types import SimpleNamespace

from uaslink.diag import ERROR, OK, WARN, DiagnosticStatus, MavlinkDiag, RadioDiag
from uaslink.links import IOStat, LinkStatus


class FakeLink:
    def __init__(self, status=None, iostat=None):
        self.status = status or LinkStatus()
        self.iostat = iostat or IOStat()

    def get_status(self):
        return self.status

    def get_iostat(self):
        return self.iostat


def _radio(rssi=100, remrssi=100):
    return SimpleNamespace(
        rssi=rssi, remrssi=remrssi, txbuf=100, noise=10, remnoise=12, rxerrors=1, fixed=2
    )


def test_diagnostic_status_records_values():
    stat = DiagnosticStatus()
    stat.summary(WARN, "msg")
    stat.add("a", 1)
    stat.add("b", "x")
    assert (stat.level, stat.message) == (WARN, "msg")
    assert stat.values == [("a", "1"), ("b", "x")]
    assert stat.as_dict() == {"a": "1", "b": "x"}


def test_mavlink_diag_without_link():
    diag = MavlinkDiag("FCU connection")
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (ERROR, "not connected")
    assert stat.values == []


def test_mavlink_diag_connected_reports_counters():
    link = FakeLink(LinkStatus(packet_rx_success_count=5), IOStat(rx_total_bytes=64))
    diag = MavlinkDiag("FCU connection")
    diag.set_mavconn(link)
    diag.set_connection_status(True)
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (OK, "connected")
    values = stat.as_dict()
    assert values["Received packets:"] == "5"
    assert values["Rx total bytes:"] == "64"
    assert values["Rx speed:"] == f"{0.0:f}"


def test_mavlink_diag_operational_but_not_connected():
    link = FakeLink()
    diag = MavlinkDiag("GCS bridge")
    diag.set_mavconn(link)
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (WARN, "not connected")


def test_mavlink_diag_reports_drops_once():
    link = FakeLink(LinkStatus(packet_rx_drop_count=3))
    diag = MavlinkDiag("FCU connection")
    diag.set_mavconn(link)
    diag.set_connection_status(True)

    first = DiagnosticStatus()
    diag.run(first)
    assert first.level == WARN
    assert first.message.startswith("3 ")

    second = DiagnosticStatus()
    diag.run(second)
    assert (second.level, second.message) == (OK, "connected")


def test_mavlink_diag_link_gone():
    link = FakeLink()
    diag = MavlinkDiag("FCU connection")
    diag.set_mavconn(link)
    diag.set_connection_status(True)
    del link
    gc.collect()
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (ERROR, "not connected")


def test_radio_no_data():
    stat = DiagnosticStatus()
    RadioDiag().run(stat)
    assert (stat.level, stat.message) == (ERROR, "No data")


def test_radio_dbm_conversion():
    status = RadioDiag().handle_status(_radio(rssi=0, remrssi=0), ord("3"), ord("D"))
    assert status.rssi_dbm == -127
    assert status.remrssi_dbm == status.rssi_dbm


def test_radio_normal_and_values():
    diag = RadioDiag()
    status = diag.handle_status(_radio(), ord("3"), ord("D"))
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (OK, "Normal")
    values = stat.as_dict()
    assert values["RSSI"] == "100"
    assert values["RSSI (dBm)"] == f"{status.rssi_dbm:.1f}"
    assert values["Rx errors"] == "1"
    assert diag.last_status == status


def test_radio_low_rssi():
    diag = RadioDiag(low_rssi=40)
    diag.handle_status(_radio(rssi=39, remrssi=10), 1, 1)
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (WARN, "Low RSSI")


def test_radio_low_remote_rssi():
    diag = RadioDiag(low_rssi=40)
    diag.handle_status(_radio(rssi=40, remrssi=39), ord("3"), ord("D"))
    stat = DiagnosticStatus()
    diag.run(stat)
    assert (stat.level, stat.message) == (WARN, "Low remote RSSI")


def test_radio_reset_forgets_status():
    diag = RadioDiag()
    diag.handle_status(_radio(), ord("3"), ord("D"))
    diag.reset()
    stat = DiagnosticStatus()
    diag.run(stat)
    assert diag.last_status is None
    assert (stat.level, stat.message) == (ERROR, "No data")