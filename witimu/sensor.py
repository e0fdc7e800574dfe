"""Protocol engine for WIT motion sensors over serial, Modbus, CAN and I2C."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from enum import IntEnum

from witimu.checksum import checksum8, crc16
from witimu.registers import REGISTER_COUNT, OutputHead, Register

BUFFER_SIZE = 256
"""Size of the receive buffer; a partial frame reaching it is discarded."""

_FRAME_START = 0x55
_WRITE_PREFIX = (0xFF, 0xAA)
_MODBUS_WRITE = 0x06
_MODBUS_READ = 0x03

SerialWriter = Callable[[bytes], object]
CanWriter = Callable[[int, bytes], object]
I2cWriter = Callable[[int, int, bytes], object]
I2cReader = Callable[[int, int, int], "bytes | None"]
UpdateCallback = Callable[[int, int], object]
DelayFunction = Callable[[int], object]


class Protocol(IntEnum):
    """Transport used to talk to the sensor."""

    NORMAL = 0
    MODBUS = 1
    CAN = 2
    I2C = 3


class WitError(Exception):
    """Base class of errors reported by the sensor engine."""


class WitInvalidArgument(WitError, ValueError):
    """An argument is out of range for the register file or protocol."""


class WitNoTransport(WitError):
    """The function needed for the current protocol has not been set."""


class WitNoMemory(WitError):
    """The request would not fit in the receive buffer."""


# Where the words of each output frame land: (first register, word count).
_FRAME_LAYOUT: dict[int, tuple[tuple[int, int], ...]] = {
    OutputHead.ACC: ((Register.AX, 3), (Register.TEMP, 1)),
    OutputHead.ANGLE: ((Register.ROLL, 3), (Register.VERSION, 1)),
    OutputHead.TIME: ((Register.YYMM, 4),),
    OutputHead.GYRO: ((Register.GX, 3),),
    OutputHead.MAGNETIC: ((Register.HX, 3),),
    OutputHead.DPORT: ((Register.D0STATUS, 4),),
    OutputHead.PRESS: ((Register.PRESSUREL, 4),),
    OutputHead.GPS: ((Register.LONL, 4),),
    OutputHead.VELOCITY: ((Register.GPSHEIGHT, 4),),
    OutputHead.QUATER: ((Register.Q0, 4),),
    OutputHead.GSA: ((Register.SVNUM, 4),),
}


def _to_int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _words_le(data: Sequence[int]) -> list[int]:
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data) - 1, 2)]


class WitSensor:
    """State of one sensor link: the register mirror and the receive parser.

    Received frames update :attr:`registers` (signed 16-bit values) and
    report each updated span to the update callback as
    ``callback(first_register, count)``.
    """

    def __init__(self, protocol: int = Protocol.NORMAL, address: int = 0xFF) -> None:
        self.registers: list[int] = [0] * REGISTER_COUNT
        self.protocol = Protocol.NORMAL
        self.address = 0xFF
        self._buffer = bytearray()
        self._read_index = 0
        self._serial_writer: SerialWriter | None = None
        self._i2c_writer: I2cWriter | None = None
        self._i2c_reader: I2cReader | None = None
        self._can_writer: CanWriter | None = None
        self._callback: UpdateCallback | None = None
        self._delay: DelayFunction | None = None
        self.init(protocol, address)

    def init(self, protocol: int, address: int) -> None:
        """Select the protocol and device address and clear the receive buffer."""
        try:
            selected = Protocol(protocol)
        except ValueError:
            raise WitInvalidArgument(f"unknown protocol {protocol!r}") from None
        if not 0 <= address <= 0xFF:
            raise WitInvalidArgument(f"address {address!r} is not a byte")
        self.protocol = selected
        self.address = address
        self._buffer.clear()

    def reset(self) -> None:
        """Forget all transport functions and the callback; return to defaults."""
        self._serial_writer = None
        self._i2c_writer = None
        self._i2c_reader = None
        self._can_writer = None
        self._callback = None
        self.address = 0xFF
        self._buffer.clear()
        self.protocol = Protocol.NORMAL

    def set_serial_writer(self, writer: SerialWriter) -> None:
        """Set the function that sends bytes on the serial line."""
        if writer is None:
            raise WitInvalidArgument("serial writer is required")
        self._serial_writer = writer

    def set_i2c_functions(self, writer: I2cWriter, reader: I2cReader) -> None:
        """Set the I2C functions.

        ``writer(address, register, data)`` sends *data*;
        ``reader(address, register, length)`` returns the bytes read, or
        ``None`` when the transfer failed.
        """
        if writer is None or reader is None:
            raise WitInvalidArgument("both I2C functions are required")
        self._i2c_writer = writer
        self._i2c_reader = reader

    def set_can_writer(self, writer: CanWriter) -> None:
        """Set the function ``writer(std_id, data)`` that sends a CAN frame."""
        if writer is None:
            raise WitInvalidArgument("CAN writer is required")
        self._can_writer = writer

    def set_delay(self, delay: DelayFunction) -> None:
        """Set the function that waits the given number of milliseconds."""
        if delay is None:
            raise WitInvalidArgument("delay function is required")
        self._delay = delay

    def set_update_callback(self, callback: UpdateCallback) -> None:
        """Set the function called with ``(first_register, count)`` on updates."""
        if callback is None:
            raise WitInvalidArgument("update callback is required")
        self._callback = callback

    def _delay_ms(self, milliseconds: int) -> None:
        if self._delay is not None:
            self._delay(milliseconds)
        else:
            time.sleep(milliseconds / 1000)

    # Receiving

    def feed_serial(self, data: int | Iterable[int]) -> None:
        """Pass bytes received on the serial line to the parser."""
        if self._callback is None:
            return
        for byte in [data] if isinstance(data, int) else data:
            self._feed_byte(byte & 0xFF)

    def _feed_byte(self, byte: int) -> None:
        buffer = self._buffer
        buffer.append(byte)
        if self.protocol is Protocol.NORMAL:
            if buffer[0] != _FRAME_START:
                del buffer[0]
                return
            if len(buffer) >= 11:
                if checksum8(buffer[:10]) != buffer[10]:
                    del buffer[0]
                    return
                self._apply_frame(buffer[1], _words_le(buffer[2:10]))
                buffer.clear()
        elif self.protocol is Protocol.MODBUS:
            if len(buffer) > 2:
                if buffer[1] != _MODBUS_READ:
                    del buffer[0]
                    return
                if len(buffer) < buffer[2] + 5:
                    return
                received = (buffer[-2] << 8) | buffer[-1]
                if received != crc16(buffer[:-2]):
                    del buffer[0]
                    return
                count = buffer[2] >> 1
                payload = buffer[3 : 3 + 2 * count]
                words = [(payload[i] << 8) | payload[i + 1] for i in range(0, 2 * count, 2)]
                self._store(self._read_index, words)
                buffer.clear()
        else:
            buffer.clear()
        if len(buffer) == BUFFER_SIZE:
            buffer.clear()

    def feed_can(self, frame: Sequence[int]) -> None:
        """Pass one received 8-byte CAN frame to the parser."""
        if self._callback is None or len(frame) < 8:
            return
        if self.protocol is not Protocol.CAN or frame[0] != _FRAME_START:
            return
        self._apply_frame(frame[1], _words_le(frame[2:8]))

    def _apply_frame(self, head: int, words: list[int]) -> None:
        if head == OutputHead.REGVALUE:
            layout: tuple[tuple[int, int], ...] = ((self._read_index, 4),)
        elif head in _FRAME_LAYOUT:
            layout = _FRAME_LAYOUT[head]
        else:
            return
        if len(words) == 3:
            layout = ((layout[0][0], 3),)
        offset = 0
        for start, count in layout:
            self._store(start, words[offset : offset + count])
            offset += count

    def _store(self, start: int, words: Sequence[int]) -> None:
        for position, word in enumerate(words, start):
            if position < REGISTER_COUNT:
                self.registers[position] = _to_int16(word)
        if self._callback is not None:
            self._callback(start, len(words))

    # Sending

    def _require_serial(self) -> SerialWriter:
        if self._serial_writer is None:
            raise WitNoTransport("no serial writer set")
        return self._serial_writer

    def _require_can(self) -> CanWriter:
        if self._can_writer is None:
            raise WitNoTransport("no CAN writer set")
        return self._can_writer

    def _modbus_frame(self, function: int, first: int, second: int) -> bytes:
        head = bytes(
            [self.address, function, first >> 8, first & 0xFF, second >> 8, second & 0xFF]
        )
        return head + crc16(head).to_bytes(2, "big")

    def write_register(self, register: int, value: int) -> None:
        """Write a 16-bit *value* to *register* over the current protocol."""
        if not 0 <= register < REGISTER_COUNT:
            raise WitInvalidArgument(f"register {register!r} out of range")
        value &= 0xFFFF
        low, high = value & 0xFF, value >> 8
        if self.protocol is Protocol.NORMAL:
            self._require_serial()(bytes([*_WRITE_PREFIX, register & 0xFF, low, high]))
        elif self.protocol is Protocol.MODBUS:
            writer = self._require_serial()
            writer(self._modbus_frame(_MODBUS_WRITE, register, value))
        elif self.protocol is Protocol.CAN:
            writer = self._require_can()
            writer(self.address, bytes([*_WRITE_PREFIX, register & 0xFF, low, high]))
        else:
            if self._i2c_writer is None:
                raise WitNoTransport("no I2C writer set")
            self._i2c_writer((self.address << 1) & 0xFF, register, bytes([low, high]))

    def read_registers(self, register: int, count: int) -> None:
        """Request *count* registers starting at *register*.

        Over serial and CAN the answer arrives later through
        :meth:`feed_serial` or :meth:`feed_can`; over I2C it is read at once.
        """
        if register < 0 or count < 0 or register + count >= REGISTER_COUNT:
            raise WitInvalidArgument(f"registers {register!r}+{count!r} out of range")
        read_frame = bytes([*_WRITE_PREFIX, Register.READADDR, register & 0xFF, register >> 8])
        if self.protocol is Protocol.NORMAL:
            if count > 4:
                raise WitInvalidArgument("at most 4 registers per serial read")
            self._require_serial()(read_frame)
        elif self.protocol is Protocol.MODBUS:
            writer = self._require_serial()
            if 2 * count + 5 > BUFFER_SIZE:
                raise WitNoMemory("answer would not fit in the receive buffer")
            writer(self._modbus_frame(_MODBUS_READ, register, count))
        elif self.protocol is Protocol.CAN:
            if count > 3:
                raise WitInvalidArgument("at most 3 registers per CAN read")
            self._require_can()(self.address, read_frame)
        else:
            if self._i2c_reader is None:
                raise WitNoTransport("no I2C reader set")
            length = 2 * count
            if length > BUFFER_SIZE:
                raise WitNoMemory("answer would not fit in the receive buffer")
            data = self._i2c_reader((self.address << 1) & 0xFF, register, length)
            if data is not None and len(data) >= length:
                if self._callback is None:
                    raise WitNoTransport("no update callback set")
                self._store(register, _words_le(data[:length]))
        self._read_index = register