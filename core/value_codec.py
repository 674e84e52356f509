from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import Any

from .errors import ParseFailure
from .model import PrefType, PrefValue

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
# Invariant-culture float: '.' decimal point, optional exponent, no grouping.
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")

_FLOAT_SPECIALS = {
    "nan": math.nan,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
}


def to_float32(v: float) -> float:
    """Round a Python float to the nearest single-precision value.

    Raises OverflowError for finite values outside the float32 range.
    """
    return struct.unpack("<f", struct.pack("<f", float(v)))[0]


def parse_int(text: str) -> int:
    s = (text or "").strip()
    if not _INT_RE.match(s):
        raise ParseFailure("Int", text)
    n = int(s)
    if n < INT32_MIN or n > INT32_MAX:
        raise ParseFailure("Int", text)
    return n


def parse_float(text: str) -> float:
    """Parse a float using '.' as the decimal point regardless of locale."""
    s = (text or "").strip()
    special = _FLOAT_SPECIALS.get(s.lower())
    if special is not None:
        return special
    if not _FLOAT_RE.match(s):
        raise ParseFailure("Float", text)
    try:
        v = float(s)
        if math.isinf(v):
            raise OverflowError(s)
        return to_float32(v)
    except OverflowError:
        raise ParseFailure("Float", text) from None


def parse_pref_value(kind: PrefType, text: str) -> PrefValue:
    if kind == "Int":
        return parse_int(text)
    if kind == "Float":
        return parse_float(text)
    if kind == "String":
        return "" if text is None else str(text)
    raise ValueError(f"unknown preference type: {kind!r}")


def format_float(v: float) -> str:
    """Shortest text that parses back to the same single-precision value."""
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    f32 = to_float32(v)
    s = repr(f32)
    for digits in range(1, 10):
        cand = f"{f32:.{digits}g}"
        if to_float32(float(cand)) == f32:
            s = cand
            break
    if "e" in s and 1e-5 <= abs(f32) < 1e16:
        s = format(Decimal(s), "f")
    return s


def format_pref_value(kind: PrefType, value: Any) -> str:
    if value is None:
        return ""
    if kind == "Int":
        return str(int(value))
    if kind == "Float":
        return format_float(float(value))
    return str(value)
