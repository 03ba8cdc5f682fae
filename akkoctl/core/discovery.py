"""HID endpoint discovery and feature-report interface selection."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from akkoctl.core.device import BUFFER_SIZE, REPORT_ID, DeviceHandle
from akkoctl.core.errors import DeviceNotFound, InterfaceOpenFailure
from akkoctl.core.model import DeviceModel, HidEndpoint
from akkoctl.transports.base import HidBackend, RawHidDevice

LOGGER = logging.getLogger(__name__)


def find_endpoints(backend: HidBackend, vendor_id: int, product_id: int) -> list[HidEndpoint]:
    endpoints = [
        e
        for e in backend.enumerate(vendor_id, product_id)
        if e.vendor_id == vendor_id and e.product_id == product_id
    ]
    if not endpoints:
        raise DeviceNotFound(f"No device found with VID: 0x{vendor_id:04X}, PID: 0x{product_id:04X}")
    return endpoints


def _supports_feature_reports(device: RawHidDevice) -> bool:
    # Some host stacks need the report-id slot even though the device has none.
    try:
        device.get_feature_report(REPORT_ID, BUFFER_SIZE)
    except (OSError, ValueError):
        return False
    return True


def open_device(backend: HidBackend, vendor_id: int, product_id: int) -> DeviceHandle:
    """Open the interface of a device that answers Feature Report reads.

    Keyboards expose several HID interfaces (keyboard, consumer control,
    vendor); only one of them takes feature reports. Each candidate is opened
    and probed in enumeration order. When none passes the probe, the first
    candidate is opened without verification.
    """
    LOGGER.info("Opening device VID: 0x%04X, PID: 0x%04X", vendor_id, product_id)
    endpoints = find_endpoints(backend, vendor_id, product_id)
    LOGGER.info("Found %d interface(s) for device", len(endpoints))

    for idx, endpoint in enumerate(endpoints):
        LOGGER.info(
            "Trying interface %d (%s, interface %d): path=%r, usage_page=0x%04X, usage=0x%04X",
            idx,
            endpoint.product or "unnamed",
            endpoint.interface_number,
            endpoint.path,
            endpoint.usage_page,
            endpoint.usage,
        )
        try:
            device = backend.open(endpoint)
        except (OSError, ValueError) as exc:
            LOGGER.warning("Failed to open interface %d: %s", idx, exc)
            continue

        if _supports_feature_reports(device):
            LOGGER.info("Interface %d supports Feature Reports", idx)
            return DeviceHandle(device, endpoint)

        LOGGER.warning("Interface %d does not support Feature Reports, trying next...", idx)
        DeviceHandle(device, endpoint).close()

    first = endpoints[0]
    LOGGER.warning("No interface answered the feature-report probe; falling back to %r", first.path)
    try:
        device = backend.open(first)
    except (OSError, ValueError) as exc:
        raise InterfaceOpenFailure(f"Failed to open device: {exc}") from exc
    return DeviceHandle(device, first)


def detect_models(backend: HidBackend, models: Iterable[DeviceModel]) -> list[DeviceModel]:
    """Return the models with at least one enumerated endpoint."""
    found: list[DeviceModel] = []
    for model in models:
        try:
            find_endpoints(backend, model.vendor_id, model.product_id)
        except DeviceNotFound:
            continue
        found.append(model)
    return found
