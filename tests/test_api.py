from __future__ import annotations

import pytest

from akkoctl.api import AkkoctlError, Client, ProfileInfo, RgbSettings, UnsupportedPacketSize
from tests.fakes import FakeBackend, FakeHidDevice


def _reply(packet: bytes) -> bytes:
    if packet[0] == 0xF0:
        return bytes([0x00, 0xF0, 0x03, 0x01]) + bytes(61)
    if packet[0] == 0x87:
        return bytes([0x00, 0x87, 0x08, 0x03, 0x01, 0x00, 0xFF, 0x80, 0x00]) + bytes(56)
    if packet[0] == 0x92:
        return bytes([0x00, 0x92, 0x05, 0x00, 0x02]) + bytes(60)
    return bytes([0x00, packet[0], 0x01]) + bytes(62)


def _client() -> tuple[Client, FakeHidDevice]:
    device = FakeHidDevice(reply=_reply)
    return Client(backend=FakeBackend([device])), device


def test_public_client_lists_models() -> None:
    client, _ = _client()
    assert [m.id for m in client.list_models()] == ["akko24g_wireless", "mod007b"]
    assert client.detect_devices() == ["MOD007B"]


def test_public_client_parsed_settings() -> None:
    client, _ = _client()
    assert client.get_profile_info("mod007b") == ProfileInfo(count=3, active=1)
    assert client.get_parsed_rgb_settings("mod007b") == RgbSettings(
        mode=0x08, speed=0x03, direction=0x01, color=(0xFF, 0x80, 0x00)
    )
    performance = client.get_performance_settings("mod007b")
    assert performance is not None
    assert (performance.debounce_down, performance.debounce_up) == (5, 2)


def test_public_client_set_rgb() -> None:
    client, device = _client()
    result = client.set_rgb_settings("MOD007B", brightness=3, speed=1, direction=0, color=(0, 255, 0))
    assert result.opcode == 0x07
    assert list(device.sent[-1][1:9]) == [0x07, 0x00, 0x04, 0x03, 0x07, 0x00, 0xFF, 0x00]

    client.set_rgb_with_mode("mod007b", brightness=3, speed=1, direction=0, color=(0, 255, 0), mode=0x08)
    assert device.sent[-1][1 + 4] == 0x08


def test_public_client_rejects_bad_raw_packet() -> None:
    client, device = _client()
    with pytest.raises(UnsupportedPacketSize):
        client.send_raw("mod007b", [0] * 63)
    assert device.sent == []
    with pytest.raises(AkkoctlError):
        client.send_raw("mod007b", [0x80, 0x100] + [0] * 62)
    assert device.sent == []


def test_public_client_reads_named_setting() -> None:
    client, device = _client()
    result = client.get_setting("mod007b", "sleep-settings")
    assert result.opcode == 0x97
    assert device.opcodes == [0x8F, 0x97]
