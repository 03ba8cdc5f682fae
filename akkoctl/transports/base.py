"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol

from akkoctl.core.model import HidEndpoint


class RawHidDevice(Protocol):
    def send_feature_report(self, data: bytes) -> int:
        """Write a feature report; ``data[0]`` is the report id."""

    def get_feature_report(self, report_id: int, length: int) -> bytes:
        """Read a feature report of up to ``length`` bytes, report id first."""

    def close(self) -> None:
        """Release the OS handle."""


class HidBackend(Protocol):
    def enumerate(self, vendor_id: int, product_id: int) -> list[HidEndpoint]:
        """List endpoints matching the vendor/product pair, in OS order."""

    def open(self, endpoint: HidEndpoint) -> RawHidDevice:
        """Open one endpoint. Raises ``OSError`` when the OS refuses."""
