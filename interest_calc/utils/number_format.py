"""Number formatting utilities"""

import math
from decimal import Decimal


def format_number(value: float) -> str:
    """
    Shortest text that parses back to the same float, without exponent notation.

    Examples: 100.0 -> "100", 1.07 -> "1.07", 1e-05 -> "0.00001", nan -> "NaN"
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def parse_number(text: str) -> float:
    """Inverse of format_number; raises ValueError for anything else"""
    return float(text.strip())
