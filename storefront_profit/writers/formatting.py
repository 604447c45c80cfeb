"""
Sayı / para / yüzde biçimlendirme - CLI çıktısı ve Excel başlıkları için.
"""
from __future__ import annotations

import math

from storefront_profit.config.settings import CURRENCY_SYMBOL


def _finite(number) -> bool:
    return isinstance(number, (int, float)) and math.isfinite(number)


def format_price(number) -> str:
    """1234567.891 → '1,234,567.89'"""
    if not _finite(number):
        return "0"
    return f"{number:,.2f}"


def format_number(number) -> str:
    """Ondalıksız, binlik ayraçlı."""
    if not _finite(number):
        return "0"
    return f"{round(number):,}"


def format_currency(number, currency: str = CURRENCY_SYMBOL) -> str:
    if not _finite(number):
        return f"0 {currency}"
    return f"{format_price(number)} {currency}"


def format_large_number(number) -> str:
    """1500 → '1.5K', 2500000 → '2.5M'"""
    if not _finite(number):
        return "0"
    sign = "-" if number < 0 else ""
    n = abs(number)
    if n >= 1_000_000_000:
        return f"{sign}{n / 1_000_000_000:.1f}B"
    if n >= 1_000_000:
        return f"{sign}{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{sign}{n / 1_000:.1f}K"
    return f"{sign}{n:g}"


def format_percentage(number, decimals: int = 1) -> str:
    if not _finite(number):
        return "0%"
    return f"{number:.{decimals}f}%"
