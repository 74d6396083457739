"""Display formatting.

One display format only: Colombian peso style, "$" with "." as the
thousands separator and "," before decimals.
"""

import math


def format_price(amount: float) -> str:
    """Format a price for display.

    Args:
        amount: Price in pesos.

    Returns:
        Formatted price, e.g. "$38.000" or "$1.234,5".
    """
    whole, _, fraction = f"{amount:,.3f}".partition(".")
    fraction = fraction.rstrip("0")
    text = whole.replace(",", ".")
    if fraction:
        text = f"{text},{fraction}"
    return f"${text}"


def calc_discount(original: float, current: float) -> int:
    """Whole discount percentage, rounding halves up."""
    return math.floor((1 - current / original) * 100 + 0.5)


def results_count_label(count: int) -> str:
    """Label for the results counter; empty when nothing matches."""
    if count == 0:
        return ""
    return f"{count} producto{'s' if count != 1 else ''}"
