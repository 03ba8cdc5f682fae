"""HID transport implementation using the hidapi bindings."""

from __future__ import annotations

import hid

from akkoctl.core.model import HidEndpoint


class HidapiDevice:
    def __init__(self, device: hid.device) -> None:
        self._device = device

    def send_feature_report(self, data: bytes) -> int:
        written = self._device.send_feature_report(data)
        if written < 0:
            raise OSError(f"send_feature_report returned {written}")
        return written

    def get_feature_report(self, report_id: int, length: int) -> bytes:
        return bytes(self._device.get_feature_report(report_id, length))

    def close(self) -> None:
        self._device.close()


class HidapiBackend:
    def enumerate(self, vendor_id: int, product_id: int) -> list[HidEndpoint]:
        endpoints: list[HidEndpoint] = []
        for item in hid.enumerate(vendor_id, product_id):
            path = item["path"]
            endpoints.append(
                HidEndpoint(
                    path=path.encode() if isinstance(path, str) else path,
                    vendor_id=item["vendor_id"],
                    product_id=item["product_id"],
                    interface_number=item.get("interface_number", -1),
                    usage_page=item.get("usage_page") or 0,
                    usage=item.get("usage") or 0,
                    product=item.get("product_string") or "",
                )
            )
        return endpoints

    def open(self, endpoint: HidEndpoint) -> HidapiDevice:
        device = hid.device()
        device.open_path(endpoint.path)
        return HidapiDevice(device)
