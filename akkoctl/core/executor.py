"""Single request/response exchange over an open device handle."""

from __future__ import annotations

import logging

from akkoctl.core.device import DeviceHandle
from akkoctl.core.model import CommandResult
from akkoctl.core.opcodes import Opcode
from akkoctl.core.packet import Packet

LOGGER = logging.getLogger(__name__)


def is_successful_response(opcode: int, response: Packet) -> bool:
    """Best-effort classifier inferred from captured traffic.

    A reply counts as a success when bytes 1-6 carry data or when the device
    echoed the request opcode.
    """
    return response.has_data() or response.data[0] == opcode


def result_from_response(opcode: Opcode, response: bytes) -> CommandResult:
    packet = Packet.from_bytes(response)
    return CommandResult(
        success=is_successful_response(int(opcode), packet),
        opcode=int(opcode),
        opcode_name=opcode.label,
        response=packet.data,
        hex_preview=packet.to_hex_short(),
    )


def send_packet(device: DeviceHandle, opcode: Opcode, packet: Packet) -> CommandResult:
    LOGGER.debug("TX: %s", packet.to_hex())
    response = device.exchange(packet)
    return result_from_response(opcode, response)


def execute(device: DeviceHandle, opcode: Opcode) -> CommandResult:
    LOGGER.info("Executing: %s (0x%02X)", opcode.label, int(opcode))
    return send_packet(device, opcode, Packet.with_opcode(opcode))


def execute_with_params(device: DeviceHandle, opcode: Opcode, param1: int, param2: int) -> CommandResult:
    LOGGER.info("Executing: %s (0x%02X) params=(%d, %d)", opcode.label, int(opcode), param1, param2)
    return send_packet(device, opcode, Packet.with_opcode_params(opcode, param1, param2))
