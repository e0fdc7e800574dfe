"""Register map and enumerated register values of WIT motion sensors."""

from __future__ import annotations

from enum import IntEnum, IntFlag

REGISTER_COUNT = 0x90
"""Number of 16-bit registers in the sensor's register file."""

KEY_UNLOCK = 0xB588
"""Value written to :attr:`Register.KEY` to unlock configuration registers."""

SAVE_PARAM = 0x00
"""Value written to :attr:`Register.SAVE` to persist the configuration."""

SAVE_SWRST = 0xFF
"""Value written to :attr:`Register.SAVE` to trigger a software reset."""


class Register(IntEnum):
    """Addresses of the sensor's 16-bit registers."""

    SAVE = 0x00
    CALSW = 0x01
    RSW = 0x02
    RRATE = 0x03
    BAUD = 0x04
    AXOFFSET = 0x05
    AYOFFSET = 0x06
    AZOFFSET = 0x07
    GXOFFSET = 0x08
    GYOFFSET = 0x09
    GZOFFSET = 0x0A
    HXOFFSET = 0x0B
    HYOFFSET = 0x0C
    HZOFFSET = 0x0D
    D0MODE = 0x0E
    D1MODE = 0x0F
    D2MODE = 0x10
    D3MODE = 0x11
    D0PWMH = 0x12
    D1PWMH = 0x13
    D2PWMH = 0x14
    D3PWMH = 0x15
    D0PWMT = 0x16
    D1PWMT = 0x17
    D2PWMT = 0x18
    D3PWMT = 0x19
    IICADDR = 0x1A
    LEDOFF = 0x1B
    MAGRANGX = 0x1C
    MAGRANGY = 0x1D
    MAGRANGZ = 0x1E
    BANDWIDTH = 0x1F
    GYRORANGE = 0x20
    ACCRANGE = 0x21
    SLEEP = 0x22
    ORIENT = 0x23
    AXIS6 = 0x24
    FILTK = 0x25
    GPSBAUD = 0x26
    READADDR = 0x27
    BWSCALE = 0x28
    MOVETHR = 0x28
    MOVESTA = 0x29
    ACCFILT = 0x2A
    GYROFILT = 0x2B
    MAGFILT = 0x2C
    POWONSEND = 0x2D
    VERSION = 0x2E
    CCBW = 0x2F
    YYMM = 0x30
    DDHH = 0x31
    MMSS = 0x32
    MS = 0x33
    AX = 0x34
    AY = 0x35
    AZ = 0x36
    GX = 0x37
    GY = 0x38
    GZ = 0x39
    HX = 0x3A
    HY = 0x3B
    HZ = 0x3C
    ROLL = 0x3D
    PITCH = 0x3E
    YAW = 0x3F
    TEMP = 0x40
    D0STATUS = 0x41
    D1STATUS = 0x42
    D2STATUS = 0x43
    D3STATUS = 0x44
    PRESSUREL = 0x45
    PRESSUREH = 0x46
    HEIGHTL = 0x47
    HEIGHTH = 0x48
    LONL = 0x49
    LONH = 0x4A
    LATL = 0x4B
    LATH = 0x4C
    GPSHEIGHT = 0x4D
    GPSYAW = 0x4E
    GPSVL = 0x4F
    GPSVH = 0x50
    Q0 = 0x51
    Q1 = 0x52
    Q2 = 0x53
    Q3 = 0x54
    SVNUM = 0x55
    PDOP = 0x56
    HDOP = 0x57
    VDOP = 0x58
    DELAYT = 0x59
    XMIN = 0x5A
    XMAX = 0x5B
    BATVAL = 0x5C
    ALARMPIN = 0x5D
    YMIN = 0x5E
    YMAX = 0x5F
    GYROZSCALE = 0x60
    GYROCALITHR = 0x61
    ALARMLEVEL = 0x62
    GYROCALTIME = 0x63
    REFROLL = 0x64
    REFPITCH = 0x65
    REFYAW = 0x66
    GPSTYPE = 0x67
    TRIGTIME = 0x68
    KEY = 0x69
    WERROR = 0x6A
    TIMEZONE = 0x6B
    CALICNT = 0x6C
    WZCNT = 0x6D
    WZTIME = 0x6E
    WZSTATIC = 0x6F
    ACCSENSOR = 0x70
    GYROSENSOR = 0x71
    MAGSENSOR = 0x72
    PRESSENSOR = 0x73
    MODDELAY = 0x74
    ANGLEAXIS = 0x75
    XRSCALE = 0x76
    YRSCALE = 0x77
    ZRSCALE = 0x78
    XREFROLL = 0x79
    YREFPITCH = 0x7A
    ZREFYAW = 0x7B
    ANGXOFFSET = 0x7C
    ANGYOFFSET = 0x7D
    ANGZOFFSET = 0x7E
    NUMBERID1 = 0x7F
    NUMBERID2 = 0x80
    NUMBERID3 = 0x81
    NUMBERID4 = 0x82
    NUMBERID5 = 0x83
    NUMBERID6 = 0x84
    XA85PSCALE = 0x85
    XA85NSCALE = 0x86
    YA85PSCALE = 0x87
    YA85NSCALE = 0x88
    XA30PSCALE = 0x89
    XA30NSCALE = 0x8A
    YA30PSCALE = 0x8B
    YA30NSCALE = 0x8C
    CHIPIDL = 0x8D
    CHIPIDH = 0x8E
    REGINITFLAG = REGISTER_COUNT - 1


class Algorithm(IntEnum):
    """Values of :attr:`Register.AXIS6`."""

    NINE_AXIS = 0
    SIX_AXIS = 1


class CalibrationMode(IntEnum):
    """Values of :attr:`Register.CALSW`."""

    NORMAL = 0x00
    CALGYROACC = 0x01
    CALMAG = 0x02
    CALALTITUDE = 0x03
    CALANGLEZ = 0x04
    CALACCL = 0x05
    CALACCR = 0x06
    CALMAGMM = 0x07
    CALREFANGLE = 0x08
    CALMAG2STEP = 0x09
    CALACCX = 0x09
    ACC45PRX = 0x0A
    ACC45NRX = 0x0B
    CALACCY = 0x0C
    ACC45PRY = 0x0D
    ACC45NRY = 0x0E
    CALREFANGLER = 0x0F
    CALACCINIT = 0x10
    CALREFANGLEINIT = 0x11
    CALHEXAHEDRON = 0x12


class OutputHead(IntEnum):
    """Second byte of an 11-byte serial output frame: what the frame carries."""

    TIME = 0x50
    ACC = 0x51
    GYRO = 0x52
    ANGLE = 0x53
    MAGNETIC = 0x54
    DPORT = 0x55
    PRESS = 0x56
    GPS = 0x57
    VELOCITY = 0x58
    QUATER = 0x59
    GSA = 0x5A
    REGVALUE = 0x5F


class ContentFlag(IntFlag):
    """Bits of :attr:`Register.RSW` selecting which frames the sensor sends."""

    TIME = 0x01
    ACC = 0x02
    GYRO = 0x04
    ANGLE = 0x08
    MAG = 0x10
    PORT = 0x20
    PRESS = 0x40
    GPS = 0x80
    V = 0x100
    Q = 0x200
    GSA = 0x400
    MASK = 0xFFF


class OutputRate(IntEnum):
    """Values of :attr:`Register.RRATE`."""

    RATE_0_2HZ = 0x01
    RATE_0_5HZ = 0x02
    RATE_1HZ = 0x03
    RATE_2HZ = 0x04
    RATE_5HZ = 0x05
    RATE_10HZ = 0x06
    RATE_20HZ = 0x07
    RATE_50HZ = 0x08
    RATE_100HZ = 0x09
    RATE_125HZ = 0x0A  # WT931 only
    RATE_200HZ = 0x0B
    ONCE = 0x0C
    NONE = 0x0D


class UartBaud(IntEnum):
    """Serial baud-rate indexes written to :attr:`Register.BAUD`."""

    BAUD_4800 = 1
    BAUD_9600 = 2
    BAUD_19200 = 3
    BAUD_38400 = 4
    BAUD_57600 = 5
    BAUD_115200 = 6
    BAUD_230400 = 7
    BAUD_460800 = 8
    BAUD_921600 = 9

    @property
    def bps(self) -> int:
        """The baud rate in bits per second."""
        return int(self.name.partition("_")[2])


class CanBaud(IntEnum):
    """CAN bus baud-rate indexes written to :attr:`Register.BAUD`."""

    BAUD_1000000 = 0
    BAUD_800000 = 1
    BAUD_500000 = 2
    BAUD_400000 = 3
    BAUD_250000 = 4
    BAUD_200000 = 5
    BAUD_125000 = 6
    BAUD_100000 = 7
    BAUD_80000 = 8
    BAUD_50000 = 9
    BAUD_40000 = 10
    BAUD_20000 = 11
    BAUD_10000 = 12
    BAUD_5000 = 13
    BAUD_3000 = 14

    @property
    def bps(self) -> int:
        """The bus rate in bits per second."""
        return int(self.name.partition("_")[2])


class Orientation(IntEnum):
    """Values of :attr:`Register.ORIENT`."""

    HORIZONTAL = 0
    VERTICAL = 1


class Bandwidth(IntEnum):
    """Values of :attr:`Register.BANDWIDTH`."""

    HZ_256 = 0
    HZ_184 = 1
    HZ_94 = 2
    HZ_44 = 3
    HZ_21 = 4
    HZ_10 = 5
    HZ_5 = 6

    @property
    def hertz(self) -> int:
        """The filter bandwidth in hertz."""
        return int(self.name.partition("_")[2])