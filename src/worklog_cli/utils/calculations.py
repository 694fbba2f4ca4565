"""Money calculations for tracked time."""

from __future__ import annotations


def calculate_cost(seconds: int | None, hourly_rate: float | None) -> int:
    """Cost of *seconds* of work at *hourly_rate*, rounded to whole units.

    Example:
        calculate_cost(5400, 2000) -> 3000  (1.5 h x 2000)
    """
    if not seconds or not hourly_rate:
        return 0
    hours = seconds / 3600
    return int(hours * hourly_rate + 0.5)


def format_money(
    amount: int | float | None,
    currency_symbol: str = "₽",
    thousands_separator: str = " ",
) -> str:
    """Format an amount with grouped thousands, e.g. ``15 000 ₽``."""
    if amount is None:
        amount = 0
    grouped = f"{round(amount):,}".replace(",", thousands_separator)
    return f"{grouped} {currency_symbol}".strip()
