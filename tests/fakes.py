from __future__ import annotations

from collections.abc import Callable

from akkoctl.core.model import HidEndpoint

MOD007B_VID = 0x3151
MOD007B_PID = 0x5009


def echo_reply(packet: bytes) -> bytes:
    """Reply with the request opcode and two data bytes, report id first."""
    return bytes([0x00, packet[0], 0x01, 0x02]) + bytes(61)


class FakeHidDevice:
    def __init__(
        self,
        *,
        reply: Callable[[bytes], bytes] = echo_reply,
        fail_probe: bool = False,
        fail_send: bool = False,
        fail_read: bool = False,
    ) -> None:
        self.reply = reply
        self.fail_probe = fail_probe
        self.fail_send = fail_send
        self.fail_read = fail_read
        self.sent: list[bytes] = []
        self.probes = 0
        self.closed = False

    def send_feature_report(self, data: bytes) -> int:
        if self.fail_send:
            raise OSError("write error")
        self.sent.append(bytes(data))
        return len(data)

    def get_feature_report(self, report_id: int, length: int) -> bytes:
        if not self.sent:
            self.probes += 1
            if self.fail_probe:
                raise OSError("feature report not supported")
            return bytes(length)
        if self.fail_read:
            raise OSError("read error")
        return self.reply(self.sent[-1][1:])

    def close(self) -> None:
        self.closed = True

    @property
    def opcodes(self) -> list[int]:
        return [frame[1] for frame in self.sent]


class FakeBackend:
    def __init__(
        self,
        devices: list[FakeHidDevice] | None = None,
        *,
        vendor_id: int = MOD007B_VID,
        product_id: int = MOD007B_PID,
        open_errors: tuple[int, ...] = (),
    ) -> None:
        self.devices = devices if devices is not None else [FakeHidDevice()]
        self.endpoints = [
            HidEndpoint(
                path=f"/dev/hidraw{idx}".encode(),
                vendor_id=vendor_id,
                product_id=product_id,
                interface_number=idx,
                product="MOD007B",
            )
            for idx in range(len(self.devices))
        ]
        self.open_errors = open_errors
        self.enumerated: list[tuple[int, int]] = []
        self.opened: list[bytes] = []

    def enumerate(self, vendor_id: int, product_id: int) -> list[HidEndpoint]:
        self.enumerated.append((vendor_id, product_id))
        return [e for e in self.endpoints if e.vendor_id == vendor_id and e.product_id == product_id]

    def open(self, endpoint: HidEndpoint) -> FakeHidDevice:
        self.opened.append(endpoint.path)
        idx = self.endpoints.index(endpoint)
        if idx in self.open_errors:
            raise OSError(f"open failed for {endpoint.path!r}")
        return self.devices[idx]
