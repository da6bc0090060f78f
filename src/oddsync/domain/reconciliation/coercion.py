"""Numeric coercion of raw feed values."""

from __future__ import annotations

import math
import re
from typing import Final

from oddsync.domain.errors import NumericCoercionError

_DECIMAL: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_probability(key: str, value: object) -> float:
    """Return ``value`` as a finite float or raise ``NumericCoercionError``.

    Accepts decimal text with surrounding whitespace and an optional trailing
    percent sign. Native ints and floats pass through; booleans do not.
    """

    if isinstance(value, bool):
        raise NumericCoercionError(key, value)
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().removesuffix("%").rstrip()
        if not _DECIMAL.fullmatch(text):
            raise NumericCoercionError(key, value)
        number = float(text)
    else:
        raise NumericCoercionError(key, value)

    if not math.isfinite(number):
        raise NumericCoercionError(key, value)
    return number
