"""
Belge alanlarını güvenle sayıya çeviren ortak yardımcılar.

Katalog ve sipariş belgelerinde eksik veya bozuk sayısal alanlar hata değil,
0 / None kabul edilir. Kasa defteri strict_* yardımcılarıyla okunur.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from storefront_profit.errors import RecordFormatError


def parse_money(value: Any) -> float:
    """Sayı veya sayısal metni float'a çevirir. '1,250.50' → 1250.50"""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = str(value).replace(",", "").replace("ج.م", "").replace("$", "").strip()
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def optional_money(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return parse_money(value)


def parse_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# ── Katı okuma (kasa defteri) ─────────────────────────────
# Alan yoksa varsayılan döner, var ama okunamıyorsa RecordFormatError.

def strict_money(value: Any, name: str, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise RecordFormatError(f"{name} sayı değil: {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = str(value).replace(",", "").replace("ج.م", "").replace("$", "").strip()
        try:
            number = float(cleaned)
        except ValueError:
            raise RecordFormatError(f"{name} sayı değil: {value!r}") from None
    if not math.isfinite(number):
        raise RecordFormatError(f"{name} sonlu değil: {value!r}")
    return number


def strict_int(value: Any, name: str, default: int = 0) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise RecordFormatError(f"{name} tam sayı değil: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise RecordFormatError(f"{name} tam sayı değil: {value!r}")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        raise RecordFormatError(f"{name} tam sayı değil: {value!r}") from None
