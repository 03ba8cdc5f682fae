from __future__ import annotations

import logging

import pytest

from akkoctl.core.discovery import detect_models, find_endpoints, open_device
from akkoctl.core.errors import DeviceNotFound, InterfaceOpenFailure
from akkoctl.core.model import DeviceModel
from tests.fakes import MOD007B_PID, MOD007B_VID, FakeBackend, FakeHidDevice


def test_unknown_pair_raises_without_opening() -> None:
    backend = FakeBackend()
    with pytest.raises(DeviceNotFound):
        open_device(backend, 0x1234, 0x5678)
    assert backend.opened == []
    assert backend.devices[0].sent == []


def test_first_interface_answering_probe_is_selected() -> None:
    keyboard = FakeHidDevice(fail_probe=True)
    consumer = FakeHidDevice(fail_probe=True)
    vendor = FakeHidDevice()
    backend = FakeBackend([keyboard, consumer, vendor])

    handle = open_device(backend, MOD007B_VID, MOD007B_PID)

    assert handle.endpoint.path == b"/dev/hidraw2"
    assert keyboard.closed and consumer.closed
    assert not vendor.closed
    assert [d.probes for d in backend.devices] == [1, 1, 1]


def test_interfaces_that_fail_to_open_are_skipped() -> None:
    backend = FakeBackend([FakeHidDevice(), FakeHidDevice()], open_errors=(0,))
    handle = open_device(backend, MOD007B_VID, MOD007B_PID)
    assert handle.endpoint.path == b"/dev/hidraw1"


def test_falls_back_to_first_interface_when_no_probe_succeeds() -> None:
    backend = FakeBackend([FakeHidDevice(fail_probe=True), FakeHidDevice(fail_probe=True)])

    handle = open_device(backend, MOD007B_VID, MOD007B_PID)

    assert handle.endpoint.path == b"/dev/hidraw0"
    assert backend.opened == [b"/dev/hidraw0", b"/dev/hidraw1", b"/dev/hidraw0"]


def test_fallback_open_failure_raises() -> None:
    backend = FakeBackend(
        [FakeHidDevice(fail_probe=True), FakeHidDevice(fail_probe=True)],
        open_errors=(0,),
    )
    with pytest.raises(InterfaceOpenFailure):
        open_device(backend, MOD007B_VID, MOD007B_PID)


def test_find_endpoints_filters_on_pair() -> None:
    backend = FakeBackend([FakeHidDevice(), FakeHidDevice()])
    assert len(find_endpoints(backend, MOD007B_VID, MOD007B_PID)) == 2


def test_detect_models_only_reports_present_ones() -> None:
    backend = FakeBackend()
    present = DeviceModel(id="mod007b", name="MOD007B", vendor_id=MOD007B_VID, product_id=MOD007B_PID)
    absent = DeviceModel(id="akko24g_wireless", name="Akko 2.4G Wireless Keyboard", vendor_id=0x3151, product_id=0x4011)

    assert detect_models(backend, [present, absent]) == [present]
    assert backend.opened == []


def test_interface_attempts_are_logged_with_product_and_number(caplog: pytest.LogCaptureFixture) -> None:
    backend = FakeBackend([FakeHidDevice(fail_probe=True), FakeHidDevice()])
    with caplog.at_level(logging.INFO, logger="akkoctl.core.discovery"):
        open_device(backend, MOD007B_VID, MOD007B_PID)
    assert "Trying interface 0 (MOD007B, interface 0)" in caplog.text
    assert "Trying interface 1 (MOD007B, interface 1)" in caplog.text
