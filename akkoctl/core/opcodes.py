"""Opcode catalog.

Known commands are members of :class:`KnownOpcode`. Any other byte becomes an
:class:`UnknownOpcode` that keeps the raw value, so ``int(opcode_from_byte(b))``
returns ``b`` for every byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class KnownOpcode(IntEnum):
    SET_RGB_SETTINGS = 0x07
    GET_DEVICE_INFO = 0x80
    GET_FN_LOCK_STATUS = 0x84
    GET_LAYOUT_INFO = 0x85
    GET_CUSTOM_RGB = 0x86
    GET_RGB_SETTINGS = 0x87
    GET_RGB_MODE = 0x88
    HANDSHAKE = 0x8F
    GET_INDICATOR_LED = 0x91
    GET_PERFORMANCE = 0x92
    GET_SLEEP_SETTINGS = 0x97
    GET_BATTERY_STATUS = 0x9D
    GET_MACRO_DATA = 0xAD
    GET_MACRO_STATUS = 0xAE
    GET_PROFILE_COUNT = 0xF0

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    KnownOpcode.SET_RGB_SETTINGS: "SetRgbSettings",
    KnownOpcode.GET_DEVICE_INFO: "GetDeviceInfo",
    KnownOpcode.GET_FN_LOCK_STATUS: "GetFnLockStatus",
    KnownOpcode.GET_LAYOUT_INFO: "GetLayoutInfo",
    KnownOpcode.GET_CUSTOM_RGB: "GetCustomRgb",
    KnownOpcode.GET_RGB_SETTINGS: "GetRgbSettings",
    KnownOpcode.GET_RGB_MODE: "GetRgbMode",
    KnownOpcode.HANDSHAKE: "Handshake",
    KnownOpcode.GET_INDICATOR_LED: "GetIndicatorLed",
    KnownOpcode.GET_PERFORMANCE: "GetPerformance",
    KnownOpcode.GET_SLEEP_SETTINGS: "GetSleepSettings",
    KnownOpcode.GET_BATTERY_STATUS: "GetBatteryStatus",
    KnownOpcode.GET_MACRO_DATA: "GetMacroData",
    KnownOpcode.GET_MACRO_STATUS: "GetMacroStatus",
    KnownOpcode.GET_PROFILE_COUNT: "GetProfileCount",
}

_BY_VALUE = {int(op): op for op in KnownOpcode}


@dataclass(frozen=True)
class UnknownOpcode:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"opcode must be a byte, got {self.value}")
        if self.value in _BY_VALUE:
            raise ValueError(f"0x{self.value:02X} is a catalogued opcode; use opcode_from_byte()")

    @property
    def label(self) -> str:
        return "Unknown"

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value


Opcode = Union[KnownOpcode, UnknownOpcode]


def opcode_from_byte(value: int) -> Opcode:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"opcode must be a byte, got {value}")
    known = _BY_VALUE.get(value)
    if known is not None:
        return known
    return UnknownOpcode(value)
