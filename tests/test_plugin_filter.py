import pytest

from uaslink.plugin_filter import (
    is_blacklisted,
    pattern_match,
    prepare_lists,
    px4_usb_quirk_sequence,
    select_plugins,
)


@pytest.mark.parametrize(
    "pattern,name,expected",
    [
        ("*", "sys_status", True),
        ("sys_*", "SYS_STATUS", True),
        ("SYS_*", "sys_time", True),
        ("sys_?ime", "sys_time", True),
        ("command", "command_int", False),
        ("gps", "global_position", False),
    ],
)
def test_pattern_match(pattern, name, expected):
    assert pattern_match(pattern, name) is expected


def test_prepare_lists_whitelist_only_blocks_all():
    black, white = prepare_lists([], ["sys_*"])
    assert black == ["*"]
    assert white == ["sys_*"]


def test_prepare_lists_keeps_explicit_blacklist():
    black, white = prepare_lists(["dummy"], ["sys_*"])
    assert black == ["dummy"]
    assert white == ["sys_*"]


def test_prepare_lists_empty():
    assert prepare_lists([], []) == ([], [])


def test_is_blacklisted_rules():
    assert is_blacklisted("dummy", ["dummy"], []) is True
    assert is_blacklisted("command", ["dummy"], []) is False
    assert is_blacklisted("sys_status", ["*"], ["sys_*"]) is False
    assert is_blacklisted("command", ["*"], ["sys_*"]) is True
    assert is_blacklisted("anything", [], []) is False


def test_select_plugins_load_all_when_lists_empty():
    names = ["command", "dummy", "sys_status"]
    assert select_plugins(names, [], []) == names


def test_select_plugins_whitelist_only():
    names = ["command", "dummy", "sys_status", "sys_time"]
    assert select_plugins(names, [], ["SYS_*"]) == ["sys_status", "sys_time"]


def test_select_plugins_blacklist_with_override():
    names = ["command", "dummy", "sys_status", "sys_time"]
    assert select_plugins(names, ["sys_*", "dummy"], ["sys_status"]) == ["command", "sys_status"]


def test_px4_usb_quirk_sequence():
    chunks = px4_usb_quirk_sequence()
    assert chunks[0] == b"\r\r\r"
    assert chunks[1] == b"sh /etc/init.d/rc.usb\n"
    assert chunks[2] == b"\r\r\r\x00"
    assert len(chunks) == 3