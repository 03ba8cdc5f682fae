"""Service layer used by the public API, the CLI and GUI front ends.

Every operation opens its own device handle, runs the handshake, performs
one command and closes the handle. Calls against the same physical device
are not serialised; callers that use threads must do that themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

from akkoctl.core import commands
from akkoctl.core.device import DeviceHandle
from akkoctl.core.discovery import detect_models, open_device
from akkoctl.core.errors import InvalidParameterError, ModelResolutionError, UnsupportedPacketSize
from akkoctl.core.model import CommandResult, DeviceModel, ProbeReport, ProbeResult
from akkoctl.core.model_loader import load_models
from akkoctl.core.packet import PACKET_SIZE
from akkoctl.core.prober import probe_one, probe_range
from akkoctl.transports.base import HidBackend
from akkoctl.transports.hidapi import HidapiBackend

LOGGER = logging.getLogger(__name__)
T = TypeVar("T")


def _check_byte(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise InvalidParameterError(f"{name} must be an integer in 0..255, got {value!r}")
    return value


def _coerce_packet(packet: bytes | Sequence[int]) -> bytes:
    if isinstance(packet, (bytes, bytearray)):
        return bytes(packet)
    if isinstance(packet, (str, int)) or not isinstance(packet, Sequence):
        raise InvalidParameterError(f"packet must be bytes or a sequence of ints, got {type(packet).__name__}")
    return bytes(_check_byte(f"packet[{i}]", value) for i, value in enumerate(packet))


class KeyboardService:
    def __init__(self, *, backend: HidBackend | None = None) -> None:
        loaded = load_models()
        self.models = loaded.models
        self.load_warnings = loaded.warnings
        self.backend = backend or HidapiBackend()

    def list_models(self) -> list[DeviceModel]:
        return sorted(self.models.values(), key=lambda m: m.id)

    def resolve_model(self, name: str) -> DeviceModel:
        for model in self.models.values():
            if model.matches(name):
                return model
        known = ", ".join(sorted(self.models))
        raise ModelResolutionError(f"Unknown Akko model: {name}. Known models: {known}")

    def detect_models(self) -> list[str]:
        LOGGER.info("Detecting connected keyboards")
        return [m.name for m in detect_models(self.backend, self.list_models())]

    @contextmanager
    def session(self, model: str, *, handshake: bool = True) -> Iterator[DeviceHandle]:
        descriptor = self.resolve_model(model)
        with open_device(self.backend, descriptor.vendor_id, descriptor.product_id) as device:
            if handshake:
                commands.cmd_handshake(device)
            yield device

    def _run(self, model: str, command: Callable[[DeviceHandle], T]) -> T:
        with self.session(model) as device:
            return command(device)

    def handshake(self, model: str) -> bytes:
        LOGGER.info("Starting handshake with %s", model)
        with self.session(model, handshake=False) as device:
            result = commands.cmd_handshake(device)
        LOGGER.info("Handshake complete: %s", result.hex_preview)
        return result.response

    def send_raw(self, model: str, packet: bytes | Sequence[int]) -> bytes:
        data = _coerce_packet(packet)
        if len(data) != PACKET_SIZE:
            raise UnsupportedPacketSize(f"Packet must be {PACKET_SIZE} bytes, got {len(data)}")
        LOGGER.info("Sending raw packet to %s", model)
        return self._run(model, lambda device: device.exchange(data))

    def probe_opcode(self, model: str, opcode: int) -> ProbeResult:
        _check_byte("opcode", opcode)
        LOGGER.info("Probing opcode 0x%02X on %s", opcode, model)
        return self._run(model, lambda device: probe_one(device, opcode))

    def probe_range(self, model: str, start: int = 0x00, end: int = 0xFF) -> ProbeReport:
        _check_byte("start", start)
        _check_byte("end", end)
        LOGGER.info("Probing opcodes 0x%02X-0x%02X on %s", start, end, model)
        return self._run(model, lambda device: probe_range(device, start, end))

    def run_all(self, model: str) -> list[CommandResult]:
        LOGGER.info("Running all commands on %s", model)
        with self.session(model, handshake=False) as device:
            return commands.run_all_commands(device)

    def get_profile_count(self, model: str) -> CommandResult:
        return self._run(model, commands.cmd_get_profile_count)

    def get_device_info(self, model: str) -> CommandResult:
        return self._run(model, commands.cmd_get_device_info)

    def get_rgb_settings(self, model: str) -> CommandResult:
        return self._run(model, commands.cmd_get_rgb_settings)

    def get_rgb_mode(self, model: str) -> CommandResult:
        return self._run(model, commands.cmd_get_rgb_mode)

    def get_performance(self, model: str) -> CommandResult:
        return self._run(model, commands.cmd_get_performance)

    def get_setting(self, model: str, setting: str) -> CommandResult:
        """Run the read command registered under ``setting``, e.g. ``fn-lock``."""
        command = commands.GET_COMMANDS.get(setting)
        if command is None:
            known = ", ".join(commands.GET_COMMANDS)
            raise InvalidParameterError(f"Unknown setting: {setting}. Known settings: {known}")
        return self._run(model, command)

    def set_rgb(
        self,
        model: str,
        brightness: int,
        speed: int,
        direction: int,
        color: tuple[int, int, int],
        mode: int | None = None,
    ) -> CommandResult:
        _check_byte("brightness", brightness)
        _check_byte("speed", speed)
        _check_byte("direction", direction)
        if len(color) != 3:
            raise InvalidParameterError(f"color must be an (r, g, b) triple, got {color!r}")
        for channel, value in zip("rgb", color):
            _check_byte(channel, value)
        if mode is None:
            return self._run(
                model,
                lambda device: commands.cmd_set_rgb_settings(device, brightness, speed, direction, tuple(color)),
            )
        _check_byte("mode", mode)
        return self._run(
            model,
            lambda device: commands.cmd_set_rgb_settings_with_mode(
                device, brightness, speed, direction, tuple(color), mode
            ),
        )
