# Shared parsing for user-entered road weights

import math
from typing import Any, Optional


def is_finite_number(value: Any) -> bool:
    # bool is an int in python, but True is not a distance
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints past the float range, json.loads happily produces them
        return False


def is_valid_weight(value: Any) -> bool:
    return is_finite_number(value) and value > 0


def parse_weight(text: Optional[str]) -> Optional[float]:
    # Returns None for cancelled, non-numeric, non-finite and non-positive input
    if text is None:
        return None

    try:
        value = float(str(text).strip())
    except ValueError:
        return None

    if not is_valid_weight(value):
        return None

    # Keep whole numbers as int so they display as "8" rather than "8.0"
    if value.is_integer():
        return int(value)
    return value
