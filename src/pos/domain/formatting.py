"""Money and fixed-width text helpers shared by every renderer.

Keeping rounding and currency display in one place means the thermal
receipt, the structured receipt and the report export can never disagree
about how an amount looks.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

DEFAULT_CURRENCY_SYMBOL = "₹"


def round_money(amount: Decimal, decimals: int = 2) -> Decimal:
    """Round half-up to *decimals* places (display-time rounding only)."""
    return Decimal(amount).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, decimals: int = 2) -> str:
    """Plain number with a fixed number of decimals, e.g. ``621.86``."""
    return f"{round_money(amount, decimals):.{decimals}f}"


def format_money(
    amount: Decimal,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    decimals: int = 2,
) -> str:
    """Currency-prefixed amount; negatives keep the sign before the symbol."""
    rounded = round_money(amount, decimals)
    if rounded < 0:
        return f"-{currency_symbol}{-rounded:.{decimals}f}"
    return f"{currency_symbol}{rounded:.{decimals}f}"


def format_rate(rate: Decimal) -> str:
    """Tax rate without trailing zeros: ``18`` or ``12.5``."""
    text = f"{Decimal(rate):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def center_text(text: str, width: int) -> str:
    """Pad *text* equally on both sides to sit in the middle of *width*."""
    padding = max(0, (width - len(text)) // 2)
    return " " * padding + text + " " * padding


def justify_text(left: str, right: str, width: int) -> str:
    """Push *left* and *right* to opposite edges of a *width*-wide line.

    Lines that would not fit are joined by a single space; nothing wraps.
    """
    total_length = len(left) + len(right)
    if total_length >= width:
        return f"{left} {right}"
    return left + " " * (width - total_length) + right
