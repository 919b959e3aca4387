"""
Numeric helpers shared by the extractor, the normalizers and the
movement-stats engine.
"""

import math
import re
from typing import Optional, Union

Number = Union[int, float]

_INT_PATTERN = re.compile(r'^[+-]?\d+$')
_FLOAT_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')


def is_number(value) -> bool:
    """True for finite ints/floats. Booleans are flags, not numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def parse_number(text: str) -> Optional[Number]:
    """
    Parses a decimal literal into an int (integral literal) or float.
    Returns None for anything else, including nan/inf spellings.
    """
    text = text.strip()
    if _INT_PATTERN.match(text):
        return int(text)
    if _FLOAT_PATTERN.match(text):
        value = float(text)
        return value if math.isfinite(value) else None
    return None


def format_number(value: float) -> str:
    """
    Display formatting for derived figures: magnitudes of 1000 and above
    get no decimals (with thousands separators), smaller values get up
    to two decimals with trailing zeros dropped.
    """
    value = round(value, 2)
    if abs(value) >= 1000:
        return f"{value:,.0f}"
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return "0" if text in ("-0", "") else text
