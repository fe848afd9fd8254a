"""Conversion of msgpack-style values into typed setting values.

Each parser takes the current value and a received value and returns the
new value. When the received value has the wrong type, an error is logged
and the current value is returned unchanged.
"""

from __future__ import annotations

import logging
import math
import struct
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_U64_MAX = (1 << 64) - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_i64(value: Any) -> bool:
    return _is_int(value) and _I64_MIN <= value <= _I64_MAX


def _is_u64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= _U64_MAX


def _to_f32(number: float | int) -> float:
    try:
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _wrap(number: int, bits: int, signed: bool) -> int:
    mask = (1 << bits) - 1
    number &= mask
    if signed and number >> (bits - 1):
        number -= 1 << bits
    return number


def parse_f32(current: float, value: Any) -> float:
    if isinstance(value, float):
        return _to_f32(value)
    if _is_i64(value) or _is_u64(value):
        return _to_f32(value)
    logger.error("Setting expected an f32, but received %r", value)
    return current


def parse_u64(current: int, value: Any) -> int:
    if _is_u64(value):
        return value
    logger.error("Setting expected a u64, but received %r", value)
    return current


def parse_u32(current: int, value: Any) -> int:
    if _is_u64(value):
        return _wrap(value, 32, signed=False)
    logger.error("Setting expected a u32, but received %r", value)
    return current


def parse_i32(current: int, value: Any) -> int:
    if _is_i64(value):
        return _wrap(value, 32, signed=True)
    logger.error("Setting expected an i32, but received %r", value)
    return current


def parse_string(current: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    logger.error("Setting expected a string, but received %r", value)
    return current


def parse_bool(current: bool, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_u64(value):
        return value != 0
    logger.error("Setting expected a bool or 0/1, but received %r", value)
    return current


def parse_optional(
    current: T | None,
    value: Any,
    parser: Callable[[T, Any], T],
    default: T,
) -> T:
    """Parse into an optional setting, starting from ``default`` when unset."""
    base = default if current is None else current
    return parser(base, value)