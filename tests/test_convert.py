import pytest

from uaslink.convert import (
    PAYLOAD64_WORDS,
    MavlinkMessage,
    RosMavlink,
    from_ros,
    to_ros,
)


def _sample_message(length):
    payload = list(range(1, PAYLOAD64_WORDS + 1))
    return MavlinkMessage(
        length=length, seq=7, sysid=42, compid=200, msgid=0, checksum=0xBEEF,
        payload64=payload,
    )


def test_from_ros_sets_mavlink_v1_marker():
    mmsg = from_ros(RosMavlink(payload64=[1]))
    assert mmsg.magic == 0xFE


def test_to_ros_copies_header_fields():
    mmsg = _sample_message(9)
    rmsg = to_ros(mmsg)
    assert rmsg.is_valid is True
    assert (rmsg.length, rmsg.seq, rmsg.sysid, rmsg.compid, rmsg.msgid, rmsg.checksum) == (
        9, 7, 42, 200, 0, 0xBEEF,
    )


@pytest.mark.parametrize("length", [0, 1, 8, 9, 16, 255])
def test_to_ros_trims_payload(length):
    mmsg = _sample_message(length)
    rmsg = to_ros(mmsg)
    assert len(rmsg.payload64) * 8 >= length
    assert len(rmsg.payload64) * 8 < length + 8
    assert rmsg.payload64 == mmsg.payload64[: len(rmsg.payload64)]


def test_round_trip_preserves_used_payload():
    mmsg = _sample_message(17)
    back = from_ros(to_ros(mmsg))
    assert back.magic == 0xFE
    assert back.length == mmsg.length
    assert back.checksum == mmsg.checksum
    used = len(to_ros(mmsg).payload64)
    assert back.payload64[:used] == mmsg.payload64[:used]
    assert back.payload64[used:] == [0] * (PAYLOAD64_WORDS - used)


def test_from_ros_sets_magic_and_pads():
    rmsg = RosMavlink(length=3, seq=1, sysid=2, compid=3, msgid=4, checksum=5, payload64=[99])
    mmsg = from_ros(rmsg)
    assert mmsg.magic == 0xFE
    assert len(mmsg.payload64) == PAYLOAD64_WORDS
    assert mmsg.payload64[0] == 99
    assert to_ros(mmsg).payload64 == [99]


def test_from_ros_rejects_oversized_payload():
    rmsg = RosMavlink(payload64=[0] * (PAYLOAD64_WORDS + 1))
    with pytest.raises(ValueError):
        from_ros(rmsg)


def test_from_ros_accepts_full_payload():
    rmsg = RosMavlink(length=255, payload64=list(range(PAYLOAD64_WORDS)))
    mmsg = from_ros(rmsg)
    assert mmsg.payload64 == list(range(PAYLOAD64_WORDS))