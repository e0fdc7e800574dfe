"""Driver for WIT inertial measurement units over serial, Modbus, CAN and I2C."""

__version__ = "1.0.0"
__all__ = ["checksum", "device", "registers", "sensor"]