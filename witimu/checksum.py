"""Checksums used on the sensor's wire protocols."""

from __future__ import annotations

from collections.abc import Iterable


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC_TABLE = _build_table()


def crc16(data: Iterable[int]) -> int:
    """Modbus CRC-16 of *data*, arranged so the high byte is sent first.

    Writing the result big-endian after the message gives the frame as it
    travels on the wire.
    """
    crc = 0xFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _CRC_TABLE[(crc ^ byte) & 0xFF]
    return ((crc & 0xFF) << 8) | (crc >> 8)


def checksum8(data: Iterable[int]) -> int:
    """Sum of the bytes of *data*, modulo 256."""
    return sum(bytes(data)) & 0xFF