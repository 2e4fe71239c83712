"""
currency.py — Indian number and rupee formatting
Digits are grouped 3 then 2 (12,34,567) as in lakh/crore notation.
"""

from fintrack.config import CURRENCY_SYMBOL

LAKH = 100_000
CRORE = 10_000_000


def format_indian_number(value: float, decimals: int = 0) -> str:
    """1234567 -> '12,34,567'; negative values keep their sign."""
    text = f"{abs(value):.{decimals}f}"
    # No sign when the value rounds to zero (-0.4 -> "0").
    sign = "-" if value < 0 and float(text) != 0 else ""
    whole, _, fraction = text.partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}{whole}.{fraction}" if fraction else f"{sign}{whole}"


def format_indian_currency(value: float, decimals: int = 0, symbol: str = CURRENCY_SYMBOL) -> str:
    """12345.6 -> '₹12,346'."""
    text = format_indian_number(value, decimals)
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"


def format_compact(value: float) -> str:
    """Short form used on dashboards: '₹1.5Cr', '₹12.3L', '₹45.0K'."""
    sign = "-" if value < 0 else ""
    amount = abs(value)
    if amount >= CRORE:
        return f"{sign}{CURRENCY_SYMBOL}{amount / CRORE:.1f}Cr"
    if amount >= LAKH:
        return f"{sign}{CURRENCY_SYMBOL}{amount / LAKH:.1f}L"
    if amount >= 1000:
        return f"{sign}{CURRENCY_SYMBOL}{amount / 1000:.1f}K"
    return format_indian_currency(value)
