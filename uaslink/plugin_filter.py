"""Plugin selection by case-insensitive blacklist and whitelist patterns."""

from __future__ import annotations

import fnmatch
from typing import Iterable, Sequence

# Bytes that switch a PX4 USB console into MAVLink mode.
_PX4_INIT = b"\r\r\r\x00"
_PX4_NSH = b"sh /etc/init.d/rc.usb\n"


def pattern_match(pattern: str, name: str) -> bool:
    """Return True if ``name`` matches the shell-style ``pattern``, ignoring case."""
    return fnmatch.fnmatchcase(name.casefold(), pattern.casefold())


def prepare_lists(
    blacklist: Iterable[str], whitelist: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Return the lists to filter with.

    A whitelist given without a blacklist means every plugin not whitelisted
    is excluded, so the blacklist becomes ``["*"]``.
    """
    black = list(blacklist)
    white = list(whitelist)
    if not black and white:
        black.append("*")
    return black, white


def is_blacklisted(name: str, blacklist: Sequence[str], whitelist: Sequence[str]) -> bool:
    """Return True if ``name`` is matched by the blacklist and not rescued by the whitelist."""
    for bl_pattern in blacklist:
        if pattern_match(bl_pattern, name):
            return not any(pattern_match(wl_pattern, name) for wl_pattern in whitelist)
    return False


def select_plugins(
    names: Iterable[str], blacklist: Iterable[str], whitelist: Iterable[str]
) -> list[str]:
    """Return the names to load, in their original order."""
    black, white = prepare_lists(blacklist, whitelist)
    return [name for name in names if not is_blacklisted(name, black, white)]


def px4_usb_quirk_sequence() -> list[bytes]:
    """Return the chunks to write to start MAVLink on a PX4 USB console."""
    return [_PX4_INIT[:3], _PX4_NSH, _PX4_INIT]