"""Fixed 64-byte frame codec.

Generic layout::

    0      opcode
    1-2    parameters
    3-6    reserved / command-specific
    7      checksum = 0xFF - opcode
    8-63   payload

The RGB-set command uses its own layout and checksum, see :func:`build_set_rgb`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from akkoctl.core.opcodes import KnownOpcode, Opcode, opcode_from_byte

PACKET_SIZE = 64
PAYLOAD_OFFSET = 8
CHECKSUM_OFFSET = 7

RGB_MODE_DAZZLE = 0x07
RGB_MODE_STATIC = 0x08
_MAX_RGB_LEVEL = 4


def calc_checksum(opcode: int) -> int:
    return (0xFF - opcode) & 0xFF


def calc_sum_checksum(prefix: Iterable[int]) -> int:
    return (0xFF - (sum(prefix) & 0xFF)) & 0xFF


def _hex(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)


@dataclass(frozen=True)
class Packet:
    data: bytes = bytes(PACKET_SIZE)

    def __post_init__(self) -> None:
        if len(self.data) != PACKET_SIZE:
            raise ValueError(f"packet must be {PACKET_SIZE} bytes, got {len(self.data)}")

    @classmethod
    def with_opcode(cls, opcode: Opcode | int) -> Packet:
        op = int(opcode)
        data = bytearray(PACKET_SIZE)
        data[0] = op
        data[CHECKSUM_OFFSET] = calc_checksum(op)
        return cls(bytes(data))

    @classmethod
    def with_opcode_params(cls, opcode: Opcode | int, param1: int, param2: int) -> Packet:
        data = bytearray(cls.with_opcode(opcode).data)
        data[1] = param1
        data[2] = param2
        return cls(bytes(data))

    @classmethod
    def from_bytes(cls, raw: bytes | bytearray | Iterable[int]) -> Packet:
        """Copy up to 64 bytes, zero-padding short input."""
        chunk = bytes(raw)[:PACKET_SIZE]
        return cls(chunk.ljust(PACKET_SIZE, b"\x00"))

    def with_payload(self, payload: bytes) -> Packet:
        body = bytes(payload)[: PACKET_SIZE - PAYLOAD_OFFSET]
        data = bytearray(self.data)
        data[PAYLOAD_OFFSET : PAYLOAD_OFFSET + len(body)] = body
        return Packet(bytes(data))

    @property
    def opcode(self) -> Opcode:
        return opcode_from_byte(self.data[0])

    @property
    def params(self) -> tuple[int, int]:
        return self.data[1], self.data[2]

    @property
    def checksum(self) -> int:
        return self.data[CHECKSUM_OFFSET]

    @property
    def payload(self) -> bytes:
        return self.data[PAYLOAD_OFFSET:]

    def is_checksum_valid(self) -> bool:
        return self.data[CHECKSUM_OFFSET] == calc_checksum(self.data[0])

    def has_data(self) -> bool:
        """True when any of bytes 1-6 is non-zero."""
        return any(self.data[1:7])

    def to_hex(self) -> str:
        return _hex(self.data)

    def to_hex_short(self) -> str:
        return _hex(self.data[:16])

    def __bytes__(self) -> bytes:
        return self.data


def build_set_rgb(
    brightness: int,
    speed: int,
    direction: int,
    color: tuple[int, int, int],
    mode: int = RGB_MODE_DAZZLE,
) -> Packet:
    """Build the RGB-set frame.

    Layout from captured traffic, e.g. ``07 01 05 04 07 FF 00 00 E8`` for Dazzle::

        0      0x07
        1      direction
        2      speed, inverted: 5 - min(speed, 4)
        3      brightness, min(brightness, 4)
        4      mode
        5-7    R, G, B
        8      0xFF - (sum(bytes 0-7) mod 256)

    Byte 7 holds blue here, so the generic checksum does not apply.
    """
    red, green, blue = color
    head = bytes(
        [
            int(KnownOpcode.SET_RGB_SETTINGS),
            direction,
            5 - min(speed, _MAX_RGB_LEVEL),
            min(brightness, _MAX_RGB_LEVEL),
            mode,
            red,
            green,
            blue,
        ]
    )
    frame = head + bytes([calc_sum_checksum(head)])
    return Packet.from_bytes(frame)
