"""Core data models used across discovery, commands, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceModel:
    id: str
    name: str
    vendor_id: int
    product_id: int
    aliases: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        wanted = name.strip().lower()
        return wanted in {self.id.lower(), self.name.lower(), *(a.lower() for a in self.aliases)}


@dataclass(frozen=True)
class HidEndpoint:
    """One logical HID interface as reported by enumeration."""

    path: bytes
    vendor_id: int
    product_id: int
    interface_number: int = -1
    usage_page: int = 0
    usage: int = 0
    product: str = ""


@dataclass(frozen=True)
class CommandResult:
    success: bool
    opcode: int
    opcode_name: str
    response: bytes
    hex_preview: str


@dataclass(frozen=True)
class ProbeResult:
    opcode: int
    opcode_name: str
    responded: bool
    has_data: bool
    hex_preview: str


@dataclass(frozen=True)
class ProbeReport:
    results: tuple[ProbeResult, ...]

    @property
    def with_data(self) -> tuple[ProbeResult, ...]:
        return tuple(r for r in self.results if r.has_data)

    @property
    def data_count(self) -> int:
        return len(self.with_data)


@dataclass(frozen=True)
class RgbSettings:
    mode: int
    speed: int
    direction: int
    color: tuple[int, int, int]

    @classmethod
    def from_response(cls, data: bytes) -> RgbSettings | None:
        if len(data) < 8 or data[0] != 0x87:
            return None
        return cls(mode=data[1], speed=data[2], direction=data[3], color=(data[5], data[6], data[7]))


@dataclass(frozen=True)
class PerformanceSettings:
    debounce_down: int
    debounce_up: int

    @classmethod
    def from_response(cls, data: bytes) -> PerformanceSettings | None:
        if len(data) < 4 or data[0] != 0x92:
            return None
        return cls(debounce_down=data[1], debounce_up=data[3])


@dataclass(frozen=True)
class ProfileInfo:
    count: int
    active: int

    @classmethod
    def from_response(cls, data: bytes) -> ProfileInfo | None:
        if len(data) < 3 or data[0] != 0xF0:
            return None
        return cls(count=data[1], active=data[2])
