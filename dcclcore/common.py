"""Bit/byte conversions and decimal rounding helpers."""

from __future__ import annotations

import math

__all__ = [
    "BITS_IN_BYTE",
    "floor_bits2bytes",
    "ceil_bits2bytes",
    "round_float",
    "round_int",
]

BITS_IN_BYTE = 8


def floor_bits2bytes(bits: int) -> int:
    """Number of whole bytes in `bits` bits."""
    return bits >> 3


def ceil_bits2bytes(bits: int) -> int:
    """Number of bytes needed to hold `bits` bits."""
    return floor_bits2bytes(bits) + (1 if bits & 7 else 0)


def round_float(value: float, precision: int = 0) -> float:
    """Round to `precision` decimal places, halves rounding up (toward +infinity)."""
    scaling = 10.0 ** precision
    return math.floor(value * scaling + 0.5) / scaling


def round_int(value: int, precision: int = 0) -> int:
    """Round an integer to a negative `precision` (e.g. -2 rounds to hundreds).

    Non-negative precision leaves the value unchanged. The remainder keeps the
    sign of the value, so a negative value is only ever rounded toward zero.
    """
    if precision >= 0:
        return value
    scaling = 10 ** (-precision)
    remainder = abs(value) % scaling
    if value < 0:
        remainder = -remainder
    value -= remainder
    if remainder >= scaling / 2:
        value += scaling
    return value