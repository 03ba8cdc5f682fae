"""Opcode probing for undocumented firmware commands.

A failed exchange on one opcode is recorded as a non-responsive result and
the scan moves on.
"""

from __future__ import annotations

import logging

from akkoctl.core.device import DeviceHandle
from akkoctl.core.errors import TransportIoError
from akkoctl.core.model import ProbeReport, ProbeResult
from akkoctl.core.opcodes import opcode_from_byte
from akkoctl.core.packet import Packet

LOGGER = logging.getLogger(__name__)


def probe_one(device: DeviceHandle, opcode: int) -> ProbeResult:
    op = opcode_from_byte(opcode)
    LOGGER.info("Probing: 0x%02X (%s)", opcode, op.label)

    try:
        response = device.exchange(Packet.with_opcode(op))
    except TransportIoError as exc:
        LOGGER.warning("  -> 0x%02X: ERROR - %s", opcode, exc)
        return ProbeResult(
            opcode=opcode,
            opcode_name=op.label,
            responded=False,
            has_data=False,
            hex_preview="",
        )

    reply = Packet.from_bytes(response)
    has_data = reply.has_data()
    if has_data:
        LOGGER.info("  -> 0x%02X: DATA - %s", opcode, reply.to_hex_short())
    else:
        LOGGER.debug("  -> 0x%02X: EMPTY", opcode)

    return ProbeResult(
        opcode=opcode,
        opcode_name=op.label,
        responded=True,
        has_data=has_data,
        hex_preview=reply.to_hex_short(),
    )


def probe_range(device: DeviceHandle, start: int, end: int) -> ProbeReport:
    """Probe every opcode in ``[start, end]`` in ascending order."""
    LOGGER.info("Probing range: 0x%02X - 0x%02X", start, end)
    results = tuple(probe_one(device, opcode) for opcode in range(start, end + 1))
    report = ProbeReport(results=results)
    LOGGER.info("Probe complete: %d/%d with data", report.data_count, len(results))
    return report
