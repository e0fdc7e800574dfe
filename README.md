# witimu

A transport-agnostic driver for WIT inertial measurement units. It builds
register read and write requests for the sensor's four link types (plain
serial, Modbus, CAN and I2C), parses incoming frames into a table of
registers and calls you back with the span of registers that changed.

The package never opens a port itself. You give it functions that send
bytes, and you feed it the bytes you receive.

## Install

    pip install witimu

The test suite uses pytest, available through the `test` extra:

    pip install "witimu[test]"

## Usage

```python
import time

from witimu.device import WitImu
from witimu.registers import OutputRate, Register
from witimu.sensor import Protocol

imu = WitImu(Protocol.NORMAL, 0x50)
imu.set_serial_writer(port.write)            # any callable taking bytes
imu.set_delay(lambda ms: time.sleep(ms / 1000))

def on_update(first, count):
    print("registers", first, "to", first + count - 1, "=",
          imu.registers[first:first + count])

imu.set_update_callback(on_update)

imu.set_output_rate(OutputRate.RATE_10HZ)
imu.read_registers(Register.AX, 3)

for chunk in iter(lambda: port.read(64), b""):
    imu.feed_serial(chunk)
```

Here `port` is whatever object you use for the serial line.

### The link: `witimu.sensor`

`WitSensor(protocol, address)` holds the link state. `protocol` is a
`Protocol` (`NORMAL`, `MODBUS`, `CAN`, `I2C`) and `address` a byte; both
default to `Protocol.NORMAL` and `0xFF`. `init(protocol, address)` changes
them and clears the receive buffer; `reset()` forgets every function set on
the link and returns to the defaults.

Transport functions:

- `set_serial_writer(writer)` — `writer(data)`, used by `NORMAL` and `MODBUS`.
- `set_can_writer(writer)` — `writer(std_id, data)`.
- `set_i2c_functions(writer, reader)` — `writer(address, register, data)` and
  `reader(address, register, length)`, which returns the bytes read or
  `None` on failure.
- `set_delay(delay)` — `delay(milliseconds)`; without it, `time.sleep` is used.
- `set_update_callback(callback)` — `callback(first_register, count)`.

Incoming data goes to `feed_serial(data)` (one byte or an iterable of bytes)
or `feed_can(frame)` (an 8-byte frame). Nothing is parsed until an update
callback is set. Decoded values are stored in `registers`, a list of
signed 16-bit integers indexed by register address.

`write_register(register, value)` sends a 16-bit value. `read_registers(register, count)`
sends a read request; the answer arrives later through `feed_serial` or
`feed_can`, except on I2C, where it is read and stored at once. A serial read
takes at most 4 registers and a CAN read at most 3.

Errors are `WitError` subclasses: `WitInvalidArgument` (also a `ValueError`)
for out-of-range arguments, `WitNoTransport` when the function needed for the
current protocol is not set, and `WitNoMemory` when an answer would not fit in
the 256-byte receive buffer.

### Configuration: `witimu.device`

`WitImu` is a `WitSensor` with configuration commands. Each writes the unlock
key, waits (20 ms on Modbus, 1 ms on plain serial), then writes the setting:

- `start_acc_calibration()`, `stop_acc_calibration()` (which saves the result)
- `start_mag_calibration()`, `stop_mag_calibration()`
- `set_uart_baud(index)` — `UartBaud.BAUD_4800` to `UartBaud.BAUD_230400`
- `set_can_baud(index)` — any `CanBaud`
- `set_bandwidth(bandwidth)` — any `Bandwidth`
- `set_output_rate(rate)` — any `OutputRate`
- `set_content(content)` — `ContentFlag` bits

An out-of-range setting raises `WitInvalidArgument` before anything is sent; a
failed write raises `WitError`. `check_range(value, low, high)` is the closed
interval test these commands use.

### Register map and checksums

`witimu.registers` holds `Register` (addresses), `CalibrationMode`,
`OutputHead`, `ContentFlag`, `OutputRate`, `UartBaud`, `CanBaud`, `Bandwidth`,
`Orientation` and `Algorithm`, plus `REGISTER_COUNT`, `KEY_UNLOCK`,
`SAVE_PARAM` and `SAVE_SWRST`. `UartBaud`, `CanBaud` and `Bandwidth` members
expose their rate as `bps` or `hertz`.

`witimu.checksum` provides `crc16(data)` (Modbus CRC, high byte first on the
wire) and `checksum8(data)` (the byte sum of a serial frame).

## What it does not do

witimu has no command-line tool, does not open serial ports, CAN interfaces
or I2C buses, and does not store or log readings; all I/O is done by the
functions you provide.