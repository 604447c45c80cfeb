"""
Tarih yardımcıları - farklı kaynaklardan gelen zaman damgalarını datetime'a çevirir.

Uzak depo belgeleri Firestore tarzı {"seconds": ..., "nanoseconds": ...}
sözlükleri, yerel defter ise ISO metinleri taşır. Hepsi UTC'li datetime olur.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from storefront_profit.config.settings import MONTH_KEY_FORMAT


def as_utc(value: datetime) -> datetime:
    """Saat dilimi olmayan değerleri UTC kabul eder."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Zaman damgasını datetime'a çevirir, çözülemezse None döner.

    Desteklenenler: datetime, ISO metin ("Z" sonekli dahil),
    epoch milisaniye (int/float), {"seconds": ..} / {"_seconds": ..} sözlüğü
    ve to_datetime()/toDate() metodu olan nesneler.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return None
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
            try:
                return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
            except (OverflowError, OSError, ValueError, TypeError):
                return None
        return None
    for attr in ("to_datetime", "toDate"):
        method = getattr(value, attr, None)
        if callable(method):
            converted = method()
            if isinstance(converted, datetime):
                return as_utc(converted)
    return None


def month_key(value: datetime) -> str:
    """"2024-03-15" → "2024-03" (UTC)."""
    return as_utc(value).strftime(MONTH_KEY_FORMAT)


def to_iso(value: datetime) -> str:
    """JavaScript toISOString() biçimi: 2024-03-15T10:00:00.000Z"""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
