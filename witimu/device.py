"""High-level configuration commands for WIT motion sensors."""

from __future__ import annotations

from witimu.registers import (
    KEY_UNLOCK,
    SAVE_PARAM,
    Bandwidth,
    CalibrationMode,
    CanBaud,
    ContentFlag,
    OutputRate,
    Register,
    UartBaud,
)
from witimu.sensor import Protocol, WitError, WitInvalidArgument, WitSensor

_SETTLE_MS = {Protocol.MODBUS: 20, Protocol.NORMAL: 1}


def check_range(value: int, low: int, high: int) -> bool:
    """Return whether *value* lies in the closed interval [*low*, *high*]."""
    return low <= value <= high


class WitImu(WitSensor):
    """A sensor link with calibration and configuration commands.

    Every command that changes a setting writes the unlock key first, waits
    for the sensor to accept it, then writes the new value.  A failed write
    raises :class:`WitError`; an out-of-range setting raises
    :class:`WitInvalidArgument` before anything is sent.
    """

    def _write(self, register: int, value: int) -> None:
        try:
            self.write_register(register, value)
        except WitError as exc:
            raise WitError(f"writing register {register:#04x} failed: {exc}") from exc

    def _settle(self) -> None:
        milliseconds = _SETTLE_MS.get(self.protocol)
        if milliseconds is not None:
            self._delay_ms(milliseconds)

    def _unlock(self) -> None:
        self._write(Register.KEY, KEY_UNLOCK)
        self._settle()

    def _unlocked_write(self, register: int, value: int) -> None:
        self._unlock()
        self._write(register, value)

    def start_acc_calibration(self) -> None:
        """Start gyroscope and accelerometer calibration; keep the sensor level."""
        self._unlocked_write(Register.CALSW, CalibrationMode.CALGYROACC)

    def stop_acc_calibration(self) -> None:
        """End accelerometer calibration and save the result."""
        self._write(Register.CALSW, CalibrationMode.NORMAL)
        self._settle()
        self._write(Register.SAVE, SAVE_PARAM)

    def start_mag_calibration(self) -> None:
        """Start magnetometer calibration."""
        self._unlocked_write(Register.CALSW, CalibrationMode.CALMAGMM)

    def stop_mag_calibration(self) -> None:
        """End magnetometer calibration."""
        self._unlocked_write(Register.CALSW, CalibrationMode.NORMAL)

    def set_uart_baud(self, index: int) -> None:
        """Set the serial baud rate; indexes from 4800 to 230400 are accepted."""
        if not check_range(index, UartBaud.BAUD_4800, UartBaud.BAUD_230400):
            raise WitInvalidArgument(f"UART baud index {index!r} out of range")
        self._unlocked_write(Register.BAUD, index)

    def set_can_baud(self, index: int) -> None:
        """Set the CAN bus rate from its index."""
        if not check_range(index, CanBaud.BAUD_1000000, CanBaud.BAUD_3000):
            raise WitInvalidArgument(f"CAN baud index {index!r} out of range")
        self._unlocked_write(Register.BAUD, index)

    def set_bandwidth(self, bandwidth: int) -> None:
        """Set the filter bandwidth."""
        if not check_range(bandwidth, Bandwidth.HZ_256, Bandwidth.HZ_5):
            raise WitInvalidArgument(f"bandwidth {bandwidth!r} out of range")
        self._unlocked_write(Register.BANDWIDTH, bandwidth)

    def set_output_rate(self, rate: int) -> None:
        """Set the output rate."""
        if not check_range(rate, OutputRate.RATE_0_2HZ, OutputRate.NONE):
            raise WitInvalidArgument(f"output rate {rate!r} out of range")
        self._unlocked_write(Register.RRATE, rate)

    def set_content(self, content: int) -> None:
        """Choose which frames the sensor sends, as :class:`ContentFlag` bits."""
        if not check_range(int(content), ContentFlag.TIME, ContentFlag.MASK):
            raise WitInvalidArgument(f"content flags {content!r} out of range")
        self._unlocked_write(Register.RSW, int(content))