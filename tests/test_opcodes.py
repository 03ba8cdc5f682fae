from __future__ import annotations

import pytest

from akkoctl.core.opcodes import KnownOpcode, UnknownOpcode, opcode_from_byte


def test_byte_round_trip_for_every_value() -> None:
    for value in range(256):
        assert int(opcode_from_byte(value)) == value


def test_catalog_has_fifteen_named_opcodes() -> None:
    assert len(KnownOpcode) == 15
    assert opcode_from_byte(0x8F) is KnownOpcode.HANDSHAKE
    assert opcode_from_byte(0xF0) is KnownOpcode.GET_PROFILE_COUNT
    assert opcode_from_byte(0x07) is KnownOpcode.SET_RGB_SETTINGS
    assert opcode_from_byte(0x9D) is KnownOpcode.GET_BATTERY_STATUS


def test_unknown_bytes_keep_their_value() -> None:
    op = opcode_from_byte(0x42)
    assert isinstance(op, UnknownOpcode)
    assert op.value == 0x42
    assert op.label == "Unknown"


def test_names() -> None:
    assert KnownOpcode.HANDSHAKE.label == "Handshake"
    assert KnownOpcode.GET_FN_LOCK_STATUS.label == "GetFnLockStatus"


def test_out_of_range_rejected() -> None:
    with pytest.raises(ValueError):
        opcode_from_byte(256)
    with pytest.raises(ValueError):
        UnknownOpcode(-1)


def test_unknown_cannot_shadow_known_opcode() -> None:
    with pytest.raises(ValueError):
        UnknownOpcode(0x8F)
