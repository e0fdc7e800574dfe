import pytest

from witimu.checksum import checksum8, crc16
from witimu.registers import KEY_UNLOCK, REGISTER_COUNT, OutputHead, Register
from witimu.sensor import (
    Protocol,
    WitInvalidArgument,
    WitNoTransport,
    WitSensor,
)


def le(value):
    return value.to_bytes(2, "little", signed=value < 0)


def be(value):
    return value.to_bytes(2, "big", signed=value < 0)


def serial_frame(head, words):
    body = bytes([0x55, head]) + b"".join(le(w) for w in words)
    return body + bytes([checksum8(body)])


@pytest.fixture
def link():
    calls = []
    sent = []
    sensor = WitSensor(Protocol.NORMAL, 0x50)
    sensor.set_update_callback(lambda reg, count: calls.append((reg, count)))
    sensor.set_serial_writer(sent.append)
    return sensor, calls, sent


def test_write_register_normal_frame(link):
    sensor, _, sent = link
    sensor.write_register(Register.KEY, KEY_UNLOCK)
    assert sent == [bytes([0xFF, 0xAA, Register.KEY, 0x88, 0xB5])]


def test_write_register_modbus_frame(link):
    sensor, _, sent = link
    sensor.init(Protocol.MODBUS, 0x50)
    sensor.write_register(Register.KEY, KEY_UNLOCK)
    frame = sent[0]
    assert frame[:6] == bytes([0x50, 0x06, 0x00, Register.KEY, 0xB5, 0x88])
    assert frame[6:] == crc16(frame[:6]).to_bytes(2, "big")


def test_write_register_can_frame():
    sent = []
    sensor = WitSensor(Protocol.CAN, 0x50)
    sensor.set_can_writer(lambda std_id, data: sent.append((std_id, data)))
    sensor.write_register(Register.CALSW, 1)
    assert sent == [(0x50, bytes([0xFF, 0xAA, Register.CALSW, 1, 0]))]


def test_write_register_i2c():
    sent = []
    sensor = WitSensor(Protocol.I2C, 0x50)
    sensor.set_i2c_functions(lambda a, r, d: sent.append((a, r, d)), lambda a, r, n: None)
    sensor.write_register(Register.KEY, KEY_UNLOCK)
    assert sent == [(0xA0, Register.KEY, bytes([0x88, 0xB5]))]


def test_write_register_out_of_range(link):
    sensor, _, sent = link
    with pytest.raises(WitInvalidArgument):
        sensor.write_register(REGISTER_COUNT, 0)
    assert sent == []


def test_write_without_writer_raises():
    sensor = WitSensor()
    with pytest.raises(WitNoTransport):
        sensor.write_register(Register.SAVE, 0)


def test_read_registers_normal_frame(link):
    sensor, _, sent = link
    sensor.read_registers(Register.AX, 3)
    assert sent == [bytes([0xFF, 0xAA, 0x27, Register.AX, 0x00])]


def test_read_registers_normal_limit(link):
    sensor, _, _ = link
    with pytest.raises(WitInvalidArgument):
        sensor.read_registers(Register.AX, 5)


def test_read_registers_bounds(link):
    sensor, _, _ = link
    with pytest.raises(WitInvalidArgument):
        sensor.read_registers(REGISTER_COUNT - 2, 2)


def test_read_registers_modbus_frame(link):
    sensor, _, sent = link
    sensor.init(Protocol.MODBUS, 0x50)
    sensor.read_registers(Register.AX, 2)
    frame = sent[0]
    assert frame[:6] == bytes([0x50, 0x03, 0x00, Register.AX, 0x00, 2])
    assert frame[6:] == crc16(frame[:6]).to_bytes(2, "big")


def test_read_registers_can_limit():
    sensor = WitSensor(Protocol.CAN, 0x50)
    sensor.set_can_writer(lambda std_id, data: None)
    with pytest.raises(WitInvalidArgument):
        sensor.read_registers(Register.AX, 4)


def test_read_registers_i2c_updates_registers():
    calls = []
    sensor = WitSensor(Protocol.I2C, 0x50)
    sensor.set_update_callback(lambda reg, count: calls.append((reg, count)))
    sensor.set_i2c_functions(lambda a, r, d: 1, lambda a, r, n: le(1000) + le(-2))
    sensor.read_registers(Register.ROLL, 2)
    assert sensor.registers[Register.ROLL : Register.ROLL + 2] == [1000, -2]
    assert calls == [(Register.ROLL, 2)]


def test_read_registers_i2c_failure_leaves_registers():
    calls = []
    sensor = WitSensor(Protocol.I2C, 0x50)
    sensor.set_update_callback(lambda reg, count: calls.append((reg, count)))
    sensor.set_i2c_functions(lambda a, r, d: 1, lambda a, r, n: None)
    sensor.read_registers(Register.ROLL, 2)
    assert sensor.registers[Register.ROLL] == 0
    assert calls == []


def test_feed_serial_acc_frame(link):
    sensor, calls, _ = link
    sensor.feed_serial(serial_frame(OutputHead.ACC, [1000, -2, 300, 2500]))
    assert sensor.registers[Register.AX : Register.AZ + 1] == [1000, -2, 300]
    assert sensor.registers[Register.TEMP] == 2500
    assert calls == [(Register.AX, 3), (Register.TEMP, 1)]


def test_feed_serial_resyncs_after_junk(link):
    sensor, calls, _ = link
    sensor.feed_serial(b"\x01\x02\x03" + serial_frame(OutputHead.ANGLE, [10, 20, 30, 40]))
    assert sensor.registers[Register.ROLL : Register.YAW + 1] == [10, 20, 30]
    assert sensor.registers[Register.VERSION] == 40
    assert calls == [(Register.ROLL, 3), (Register.VERSION, 1)]


def test_feed_serial_bad_checksum_ignored(link):
    sensor, calls, _ = link
    frame = bytearray(serial_frame(OutputHead.ACC, [1, 2, 3, 4]))
    frame[10] ^= 0xFF
    sensor.feed_serial(frame)
    assert calls == []
    assert sensor.registers[Register.AX] == 0


def test_feed_serial_gyro_keeps_three_words(link):
    sensor, calls, _ = link
    sensor.feed_serial(serial_frame(OutputHead.GYRO, [5, 6, 7, 8]))
    assert sensor.registers[Register.GX : Register.GZ + 1] == [5, 6, 7]
    assert sensor.registers[Register.GZ + 1] == 0
    assert calls == [(Register.GX, 3)]


def test_feed_serial_regvalue_uses_read_index(link):
    sensor, calls, _ = link
    sensor.read_registers(Register.BAUD, 4)
    sensor.feed_serial(serial_frame(OutputHead.REGVALUE, [1, 2, 3, 4]))
    assert sensor.registers[Register.BAUD : Register.BAUD + 4] == [1, 2, 3, 4]
    assert calls == [(Register.BAUD, 4)]


def test_feed_serial_unknown_head_ignored(link):
    sensor, calls, _ = link
    sensor.feed_serial(serial_frame(0x20, [1, 2, 3, 4]))
    assert calls == []


def test_feed_serial_without_callback_does_nothing():
    sensor = WitSensor()
    sensor.feed_serial(serial_frame(OutputHead.ACC, [1, 2, 3, 4]))
    assert sensor.registers[Register.AX] == 0


def test_feed_modbus_response(link):
    sensor, calls, _ = link
    sensor.init(Protocol.MODBUS, 0x50)
    sensor.read_registers(Register.AX, 2)
    payload = bytes([0x50, 0x03, 4]) + be(1000) + be(-2)
    sensor.feed_serial(payload + crc16(payload).to_bytes(2, "big"))
    assert sensor.registers[Register.AX : Register.AX + 2] == [1000, -2]
    assert calls == [(Register.AX, 2)]


def test_feed_modbus_bad_crc_ignored(link):
    sensor, calls, _ = link
    sensor.init(Protocol.MODBUS, 0x50)
    sensor.read_registers(Register.AX, 1)
    payload = bytes([0x50, 0x03, 2]) + be(7)
    bad = (crc16(payload) ^ 0xFFFF).to_bytes(2, "big")
    sensor.feed_serial(payload + bad)
    assert calls == []
    assert sensor.registers[Register.AX] == 0


def test_feed_can_frame():
    calls = []
    sensor = WitSensor(Protocol.CAN, 0x50)
    sensor.set_update_callback(lambda reg, count: calls.append((reg, count)))
    sensor.feed_can(bytes([0x55, OutputHead.ACC]) + le(11) + le(-12) + le(13))
    assert sensor.registers[Register.AX : Register.AZ + 1] == [11, -12, 13]
    assert sensor.registers[Register.TEMP] == 0
    assert calls == [(Register.AX, 3)]


def test_feed_can_ignored_when_short_or_wrong_protocol():
    calls = []
    sensor = WitSensor(Protocol.NORMAL, 0x50)
    sensor.set_update_callback(lambda reg, count: calls.append((reg, count)))
    frame = bytes([0x55, OutputHead.ACC]) + le(1) + le(2) + le(3)
    sensor.feed_can(frame)
    sensor.init(Protocol.CAN, 0x50)
    sensor.feed_can(frame[:7])
    assert calls == []


def test_init_rejects_unknown_protocol():
    sensor = WitSensor()
    with pytest.raises(WitInvalidArgument):
        sensor.init(4, 0x50)


def test_reset_forgets_transports(link):
    sensor, calls, _ = link
    sensor.init(Protocol.MODBUS, 0x50)
    sensor.reset()
    assert sensor.protocol is Protocol.NORMAL
    assert sensor.address == 0xFF
    with pytest.raises(WitNoTransport):
        sensor.write_register(Register.SAVE, 0)
    sensor.feed_serial(serial_frame(OutputHead.ACC, [1, 2, 3, 4]))
    assert calls == []


@pytest.mark.parametrize(
    "setter",
    [
        lambda s: s.set_serial_writer(None),
        lambda s: s.set_can_writer(None),
        lambda s: s.set_delay(None),
        lambda s: s.set_update_callback(None),
        lambda s: s.set_i2c_functions(lambda a, r, d: 1, None),
    ],
)
def test_setters_reject_none(setter):
    with pytest.raises(WitInvalidArgument):
        setter(WitSensor())