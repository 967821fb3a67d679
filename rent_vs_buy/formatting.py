"""Display formatting for currency and percentage values."""

from decimal import ROUND_HALF_UP, Decimal


def format_currency(amount: float, symbol: str = "$") -> str:
    """Render an amount in whole currency units, e.g. ``-$1,235``.

    Halves round away from zero, so 2.5 renders as ``$3``.
    """
    rounded = int(Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,}"


def format_percentage(rate: float) -> str:
    """Render a percentage with two decimals, e.g. ``9.80%``."""
    return f"{rate:.2f}%"
