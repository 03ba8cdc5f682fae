"""Device handle: one open interface, report-id framing, hex logging.

On the wire every feature report is 65 bytes: a report id (always 0, the
keyboards do not use report ids) followed by the 64-byte packet. The id is
added on write and stripped on read, so callers only see 64-byte frames.
"""

from __future__ import annotations

import logging

from akkoctl.core.errors import TransportIoError
from akkoctl.core.model import HidEndpoint
from akkoctl.core.packet import PACKET_SIZE, Packet
from akkoctl.transports.base import RawHidDevice

REPORT_ID = 0x00
BUFFER_SIZE = PACKET_SIZE + 1
LOGGER = logging.getLogger(__name__)


class DeviceHandle:
    """Exclusive owner of one opened HID interface.

    Use as a context manager; the handle is closed on exit and must not be
    shared between operations.
    """

    def __init__(self, device: RawHidDevice, endpoint: HidEndpoint) -> None:
        self._device = device
        self.endpoint = endpoint
        self._closed = False

    def __enter__(self) -> DeviceHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._device.close()
        except OSError as exc:
            LOGGER.warning("Closing %r failed: %s", self.endpoint.path, exc)

    def exchange(self, packet: Packet | bytes) -> bytes:
        """Write one frame and read the 64-byte reply."""
        data = bytes(packet)
        if len(data) != PACKET_SIZE:
            raise ValueError(f"frame must be {PACKET_SIZE} bytes, got {len(data)}")
        self.write_frame(data)
        return self.read_frame()

    def write_frame(self, data: bytes) -> None:
        if self._closed:
            raise TransportIoError("Device handle is closed")
        LOGGER.debug("[SEND] %s", _hex(data))
        try:
            self._device.send_feature_report(bytes([REPORT_ID]) + data)
        except (OSError, ValueError) as exc:
            raise TransportIoError(
                f"send_feature_report failed: {exc} (expected {BUFFER_SIZE}-byte buffer)"
            ) from exc

    def read_frame(self) -> bytes:
        if self._closed:
            raise TransportIoError("Device handle is closed")
        try:
            raw = self._device.get_feature_report(REPORT_ID, BUFFER_SIZE)
        except (OSError, ValueError) as exc:
            raise TransportIoError(f"get_feature_report failed: {exc}") from exc

        LOGGER.debug("Received %d bytes (including report id)", len(raw))
        if len(raw) > 1:
            payload = bytes(raw[1:BUFFER_SIZE]).ljust(PACKET_SIZE, b"\x00")
        else:
            payload = bytes(PACKET_SIZE)
        LOGGER.debug("[RECV] %s", _hex(payload))
        return payload


def _hex(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)
