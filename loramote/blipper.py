"""Sensor, IO-expander and LED helpers for the LoRaMote (Blipper) board.

The functions build I2C request payloads and decode or format the register data
read back from the MPL3115A2, MMA8451Q and SX1509 devices.
"""

from __future__ import annotations

import enum

__all__ = [
    "Led",
    "LedMode",
    "format_temperature",
    "format_acceleration",
    "decode_temperature",
    "decode_altitude",
    "decode_acceleration",
    "ioexp_init_payload",
    "ioexp_write_payload",
    "led_is_on",
    "apply_led",
]

# Altimeter, thermometer and pressure sensor MPL3115A2
MPL3115A2_ADDR = 0x60 << 1
MPL3115A2_CTRL_REG1 = 0x26
MPL3115A2_CTRL_REG1_SBYB_ACTIVE = 0x81
MPL3115A2_OUT_P_MSB = 0x01
MPL3115A2_OUT_T_MSB = 0x04
TEMP_INIT_PAYLOAD = bytes((MPL3115A2_CTRL_REG1, MPL3115A2_CTRL_REG1_SBYB_ACTIVE))

# 3-axis accelerometer MMA8451Q
MMA8451Q_ADDR = 0x1C << 1
MMA8451Q_CTRL_REG1 = 0x2A
MMA8451Q_CTRL_REG1_ACTIVE = 0x01
MMA8451Q_STATUS = 0x00
ACCEL_INIT_PAYLOAD = bytes((MMA8451Q_CTRL_REG1, MMA8451Q_CTRL_REG1_ACTIVE))

# IO expander SX1509
SX1509_ADDR = 0x3E << 1
SX1509_REG_DIR_B = 0x0E
SX1509_REG_DIR_A = 0x0F
SX1509_REG_DATA_B = 0x10
SX1509_REG_DATA_A = 0x11
IOEXP_DEFAULT_DIR = 0x8FFF
IOEXP_DEFAULT_DATA = 0x7000

_LED_BASE_PIN = 12


class Led(enum.IntEnum):
    """LEDs wired to the IO expander."""

    RED = 0
    GREEN = 1
    YELLOW = 2


class LedMode(enum.IntEnum):
    """What :func:`apply_led` does to an LED."""

    OFF = 0
    ON = 1
    TOGGLE = 2


def _need(name: str, data: bytes, size: int) -> bytes:
    data = bytes(data)
    if len(data) < size:
        raise ValueError(f"{name} needs {size} bytes, got {len(data)}")
    return data


def format_temperature(temp: int) -> str:
    """Format an MPL3115A2 temperature word as a 5-character string like ``+99.9``.

    The high byte holds whole degrees in two's complement; the upper nibble of the
    low byte holds unsigned sixteenths of a degree.
    """
    whole = (temp >> 8) & 0xFF
    frac = temp & 0xFF
    if whole & 0x80:
        sign = "-"
        whole = 256 - whole
    else:
        sign = "+"
    tens, ones = divmod(whole, 10)
    tens_char = chr(ord("0") + tens) if tens else " "
    tenth = (frac >> 4) * 10 // 16
    return f"{sign}{tens_char}{ones}.{tenth}"


def format_acceleration(acc: int) -> str:
    """Format an 8-bit MMA8451Q axis reading as a 5-character string like ``+0.00``."""
    acc &= 0xFF
    if acc & 0x80:
        sign = "-"
        acc = 256 - acc
    else:
        sign = "+"
    g = acc * 200 // 128
    return f"{sign}{(g // 100) % 10}.{(g // 10) % 10}{g % 10}"


def decode_temperature(data: bytes) -> int:
    """Raw temperature word from the OUT_T_MSB and OUT_T_LSB registers."""
    data = _need("temperature", data, 2)
    return data[0] << 8 | data[1]


def decode_altitude(data: bytes) -> int:
    """Signed whole metres from the OUT_P_MSB and OUT_P_CSB registers."""
    data = _need("altitude", data, 2)
    return int.from_bytes(data[:2], "big", signed=True)


def decode_acceleration(data: bytes) -> int:
    """Pack STATUS and the X, Y, Z MSB registers of a 7-byte read as ``0xSSXXYYZZ``."""
    data = _need("acceleration", data, 7)
    return data[0] << 24 | data[1] << 16 | data[3] << 8 | data[5]


def ioexp_init_payload(direction: int = 0, data: int = 0) -> bytes:
    """I2C write that sets the expander's direction and data registers.

    A direction of zero selects the defaults: LED pins as outputs driven high (off),
    all other pins as inputs.
    """
    if direction == 0:
        direction = IOEXP_DEFAULT_DIR
        data = IOEXP_DEFAULT_DATA
    return bytes(
        (
            SX1509_REG_DIR_B,
            (direction >> 8) & 0xFF,
            direction & 0xFF,
            (data >> 8) & 0xFF,
            data & 0xFF,
        )
    )


def ioexp_write_payload(data: int) -> bytes:
    """I2C write that sets the expander's pin states."""
    return bytes((SX1509_REG_DATA_B, (data >> 8) & 0xFF, data & 0xFF))


def _led_mask(no: int) -> int:
    return 1 << (_LED_BASE_PIN + no)


def led_is_on(state: int, no: int) -> bool:
    """True if LED ``no`` is lit in the expander pin state (LEDs are active low)."""
    return (state & _led_mask(no)) == 0


def apply_led(state: int, no: int, mode: int) -> int:
    """Return the expander pin state with LED ``no`` switched off, on or toggled.

    An unknown mode leaves the state unchanged.
    """
    mask = _led_mask(no)
    if mode == LedMode.OFF:
        state |= mask
    elif mode == LedMode.ON:
        state &= ~mask
    elif mode == LedMode.TOGGLE:
        state ^= mask
    return state & 0xFFFF