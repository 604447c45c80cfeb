"""
Raporu indirilebilir JSON belgesi olarak yazar: analytics-<YYYY-MM-DD>.json

Belge = raporun to_dict() çıktısı + exportDate (ISO) + timeRange ("30 days").
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from storefront_profit.config.settings import EXPORT_FILENAME_PATTERN
from storefront_profit.utils.dates import as_utc, to_iso, utc_now


def export_filename(now: Optional[datetime] = None) -> str:
    now = as_utc(now) if now else utc_now()
    return EXPORT_FILENAME_PATTERN.format(date=now.strftime("%Y-%m-%d"))


def build_export_document(report, window_days: Optional[int], now: Optional[datetime] = None) -> dict:
    now = now or utc_now()
    document = report.to_dict()
    document["exportDate"] = to_iso(now)
    document["timeRange"] = f"{window_days} days" if window_days is not None else "all time"
    return document


def export_report(
    report,
    output_dir: Path,
    window_days: Optional[int],
    now: Optional[datetime] = None,
) -> Path:
    """
    JSON dışa aktarımı.

    Returns: oluşturulan dosya yolu
    """
    now = now or utc_now()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / export_filename(now)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(build_export_document(report, window_days, now), f, ensure_ascii=False, indent=2)

    return output_path
