"""Stable public API for building tooling on top of akkoctl.

This module is the supported integration surface for GUI command layers and
scripts. Every method takes primitive arguments and either returns a typed
value or raises an :class:`AkkoctlError` whose message is suitable for
showing to the user.
"""

from __future__ import annotations

from akkoctl.core.errors import (
    AkkoctlError,
    DeviceError,
    DeviceNotFound,
    InterfaceOpenFailure,
    InvalidParameterError,
    ModelCatalogError,
    ModelLoadError,
    ModelResolutionError,
    ModelValidationError,
    TransportIoError,
    UnsupportedPacketSize,
)
from akkoctl.core.model import (
    CommandResult,
    DeviceModel,
    HidEndpoint,
    PerformanceSettings,
    ProbeReport,
    ProbeResult,
    ProfileInfo,
    RgbSettings,
)
from akkoctl.core.opcodes import KnownOpcode, UnknownOpcode, opcode_from_byte
from akkoctl.core.packet import RGB_MODE_DAZZLE, RGB_MODE_STATIC, Packet
from akkoctl.core.service import KeyboardService
from akkoctl.transports.base import HidBackend

__all__ = [
    "AkkoctlError",
    "DeviceError",
    "DeviceNotFound",
    "InterfaceOpenFailure",
    "InvalidParameterError",
    "ModelCatalogError",
    "ModelLoadError",
    "ModelResolutionError",
    "ModelValidationError",
    "TransportIoError",
    "UnsupportedPacketSize",
    "CommandResult",
    "DeviceModel",
    "HidEndpoint",
    "PerformanceSettings",
    "ProbeReport",
    "ProbeResult",
    "ProfileInfo",
    "RgbSettings",
    "KnownOpcode",
    "UnknownOpcode",
    "opcode_from_byte",
    "Packet",
    "RGB_MODE_DAZZLE",
    "RGB_MODE_STATIC",
    "HidBackend",
    "Client",
]


class Client:
    """Public client for talking to Akko keyboards.

    A `Client` instance wraps the model table, device discovery and the
    per-call command cycle behind a stable API. Each call opens and closes
    its own device handle; concurrent calls against one keyboard must be
    serialised by the caller.
    """

    def __init__(self, *, backend: HidBackend | None = None) -> None:
        self._service = KeyboardService(backend=backend)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_models(self) -> list[DeviceModel]:
        return self._service.list_models()

    def detect_devices(self) -> list[str]:
        return self._service.detect_models()

    def handshake(self, model: str) -> bytes:
        return self._service.handshake(model)

    def send_raw(self, model: str, packet: bytes | list[int]) -> bytes:
        return self._service.send_raw(model, packet)

    def probe_opcode(self, model: str, opcode: int) -> ProbeResult:
        return self._service.probe_opcode(model, opcode)

    def probe_range(self, model: str, start: int = 0x00, end: int = 0xFF) -> ProbeReport:
        return self._service.probe_range(model, start, end)

    def run_all(self, model: str) -> list[CommandResult]:
        return self._service.run_all(model)

    def get_profile_count(self, model: str) -> CommandResult:
        return self._service.get_profile_count(model)

    def get_profile_info(self, model: str) -> ProfileInfo | None:
        return ProfileInfo.from_response(self._service.get_profile_count(model).response)

    def get_device_info(self, model: str) -> CommandResult:
        return self._service.get_device_info(model)

    def get_rgb_settings(self, model: str) -> CommandResult:
        return self._service.get_rgb_settings(model)

    def get_parsed_rgb_settings(self, model: str) -> RgbSettings | None:
        return RgbSettings.from_response(self._service.get_rgb_settings(model).response)

    def get_rgb_mode(self, model: str) -> CommandResult:
        return self._service.get_rgb_mode(model)

    def get_performance(self, model: str) -> CommandResult:
        return self._service.get_performance(model)

    def get_performance_settings(self, model: str) -> PerformanceSettings | None:
        return PerformanceSettings.from_response(self._service.get_performance(model).response)

    def get_setting(self, model: str, setting: str) -> CommandResult:
        return self._service.get_setting(model, setting)

    def set_rgb_settings(
        self,
        model: str,
        *,
        brightness: int,
        speed: int,
        direction: int,
        color: tuple[int, int, int],
    ) -> CommandResult:
        return self._service.set_rgb(model, brightness, speed, direction, color)

    def set_rgb_with_mode(
        self,
        model: str,
        *,
        brightness: int,
        speed: int,
        direction: int,
        color: tuple[int, int, int],
        mode: int,
    ) -> CommandResult:
        return self._service.set_rgb(model, brightness, speed, direction, color, mode=mode)
