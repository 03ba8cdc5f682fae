"""High-level keyboard commands built on the executor.

These functions expect a handle on which the handshake has already been
sent; :mod:`akkoctl.core.service` takes care of that for every session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from akkoctl.core.device import DeviceHandle
from akkoctl.core.errors import TransportIoError
from akkoctl.core.executor import execute, send_packet
from akkoctl.core.model import CommandResult
from akkoctl.core.opcodes import KnownOpcode
from akkoctl.core.packet import RGB_MODE_DAZZLE, build_set_rgb

LOGGER = logging.getLogger(__name__)

RUN_ALL_SEQUENCE = (
    KnownOpcode.HANDSHAKE,
    KnownOpcode.GET_PROFILE_COUNT,
    KnownOpcode.GET_DEVICE_INFO,
    KnownOpcode.GET_RGB_SETTINGS,
    KnownOpcode.GET_RGB_MODE,
    KnownOpcode.GET_PERFORMANCE,
    KnownOpcode.GET_FN_LOCK_STATUS,
    KnownOpcode.GET_INDICATOR_LED,
    KnownOpcode.GET_SLEEP_SETTINGS,
    KnownOpcode.GET_MACRO_STATUS,
)


def cmd_handshake(device: DeviceHandle) -> CommandResult:
    result = execute(device, KnownOpcode.HANDSHAKE)
    if not result.success:
        LOGGER.warning("Handshake reply carried no data: %s", result.hex_preview)
    return result


def cmd_get_profile_count(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_PROFILE_COUNT)


def cmd_get_device_info(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_DEVICE_INFO)


def cmd_get_rgb_settings(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_RGB_SETTINGS)


def cmd_get_rgb_mode(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_RGB_MODE)


def cmd_get_performance(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_PERFORMANCE)


def cmd_get_fn_lock(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_FN_LOCK_STATUS)


def cmd_get_indicator_led(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_INDICATOR_LED)


def cmd_get_sleep_settings(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_SLEEP_SETTINGS)


def cmd_get_custom_rgb(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_CUSTOM_RGB)


def cmd_get_macro_status(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_MACRO_STATUS)


def cmd_get_macro_data(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_MACRO_DATA)


def cmd_get_layout_info(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_LAYOUT_INFO)


def cmd_get_battery_status(device: DeviceHandle) -> CommandResult:
    return execute(device, KnownOpcode.GET_BATTERY_STATUS)


def cmd_set_rgb_settings(
    device: DeviceHandle,
    brightness: int,
    speed: int,
    direction: int,
    color: tuple[int, int, int],
) -> CommandResult:
    return cmd_set_rgb_settings_with_mode(device, brightness, speed, direction, color, RGB_MODE_DAZZLE)


def cmd_set_rgb_settings_with_mode(
    device: DeviceHandle,
    brightness: int,
    speed: int,
    direction: int,
    color: tuple[int, int, int],
    mode: int,
) -> CommandResult:
    packet = build_set_rgb(brightness, speed, direction, color, mode)
    LOGGER.info(
        "Set RGB: brightness=%d, speed=%d (wire=%d), dir=%d, mode=0x%02X, color=%s",
        brightness,
        speed,
        packet.data[2],
        direction,
        mode,
        color,
    )
    return send_packet(device, KnownOpcode.SET_RGB_SETTINGS, packet)


GET_COMMANDS: dict[str, Callable[[DeviceHandle], CommandResult]] = {
    "profile-count": cmd_get_profile_count,
    "device-info": cmd_get_device_info,
    "rgb-settings": cmd_get_rgb_settings,
    "rgb-mode": cmd_get_rgb_mode,
    "custom-rgb": cmd_get_custom_rgb,
    "performance": cmd_get_performance,
    "fn-lock": cmd_get_fn_lock,
    "indicator-led": cmd_get_indicator_led,
    "sleep-settings": cmd_get_sleep_settings,
    "layout-info": cmd_get_layout_info,
    "battery-status": cmd_get_battery_status,
    "macro-status": cmd_get_macro_status,
    "macro-data": cmd_get_macro_data,
}

_COMMANDS_BY_OPCODE: dict[KnownOpcode, Callable[[DeviceHandle], CommandResult]] = {
    KnownOpcode.HANDSHAKE: cmd_handshake,
    KnownOpcode.GET_PROFILE_COUNT: cmd_get_profile_count,
    KnownOpcode.GET_DEVICE_INFO: cmd_get_device_info,
    KnownOpcode.GET_RGB_SETTINGS: cmd_get_rgb_settings,
    KnownOpcode.GET_RGB_MODE: cmd_get_rgb_mode,
    KnownOpcode.GET_CUSTOM_RGB: cmd_get_custom_rgb,
    KnownOpcode.GET_PERFORMANCE: cmd_get_performance,
    KnownOpcode.GET_FN_LOCK_STATUS: cmd_get_fn_lock,
    KnownOpcode.GET_INDICATOR_LED: cmd_get_indicator_led,
    KnownOpcode.GET_SLEEP_SETTINGS: cmd_get_sleep_settings,
    KnownOpcode.GET_LAYOUT_INFO: cmd_get_layout_info,
    KnownOpcode.GET_BATTERY_STATUS: cmd_get_battery_status,
    KnownOpcode.GET_MACRO_STATUS: cmd_get_macro_status,
    KnownOpcode.GET_MACRO_DATA: cmd_get_macro_data,
}


def run_all_commands(device: DeviceHandle) -> list[CommandResult]:
    results: list[CommandResult] = []
    for opcode in RUN_ALL_SEQUENCE:
        try:
            results.append(_COMMANDS_BY_OPCODE[opcode](device))
        except TransportIoError as exc:
            LOGGER.warning("%s failed: %s", opcode.label, exc)
    return results
