"""
Kar analizi servisi - veri kaynaklarını çağırır, analiz motorunu çalıştırır.

Kaynaklar dışarıdan verilen fonksiyonlardır, böylece motor bellekteki
verilerle test edilebilir ve depolama değişse de etkilenmez:

    orders_provider(window_days) -> list[Order]
    sales_provider()             -> list[Sale]      (tüm geçmiş)
    catalog_provider()           -> list[Product]

Bozuk kasa defteri raporu durdurmaz: o kaynağın katkısı sıfır olur ve
uyarı listesine yazılır, ne gösterileceğine çağıran karar verir.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from storefront_profit.config.settings import DEFAULT_WINDOW_DAYS
from storefront_profit.engine.analyzer import aggregate, build_revenue_report
from storefront_profit.errors import LedgerError
from storefront_profit.models.order import Order
from storefront_profit.models.product import Product
from storefront_profit.models.report import ProfitReport, RevenueReport
from storefront_profit.models.sale import Sale
from storefront_profit.utils.dates import utc_now

logger = logging.getLogger(__name__)

OrdersProvider = Callable[[Optional[int]], list[Order]]
SalesProvider = Callable[[], list[Sale]]
CatalogProvider = Callable[[], list[Product]]


@dataclass
class AnalysisResult:
    report: ProfitReport
    window_days: Optional[int]
    generated_at: datetime
    warnings: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.warnings


def _no_sales() -> list[Sale]:
    return []


class ProfitAnalysisService:
    """Siparişler + kasa satışları + katalog → kar raporu."""

    def __init__(
        self,
        orders_provider: OrdersProvider,
        catalog_provider: CatalogProvider,
        sales_provider: SalesProvider = _no_sales,
    ):
        self._orders_provider = orders_provider
        self._sales_provider = sales_provider
        self._catalog_provider = catalog_provider

    def _load_sales(self, warnings: list[str]) -> list[Sale]:
        try:
            return self._sales_provider()
        except LedgerError as exc:
            logger.warning("Kasa defteri okunamadı, kasa satışları rapora dahil edilmedi: %s", exc)
            warnings.append(f"Kasa satışları okunamadı: {exc}")
            return []

    def profit_analysis(
        self,
        window_days: Optional[int] = DEFAULT_WINDOW_DAYS,
        now: Optional[datetime] = None,
    ) -> AnalysisResult:
        now = now or utc_now()
        warnings: list[str] = []

        orders = self._orders_provider(window_days)
        sales = self._load_sales(warnings)
        catalog = self._catalog_provider()

        report = aggregate(orders, sales, catalog, window_days, now)
        return AnalysisResult(
            report=report,
            window_days=window_days,
            generated_at=now,
            warnings=warnings,
        )

    def revenue(self) -> tuple[RevenueReport, list[str]]:
        """Tüm zamanların ciro özeti (pencere yok)."""
        warnings: list[str] = []
        orders = self._orders_provider(None)
        sales = self._load_sales(warnings)
        return build_revenue_report(orders, sales), warnings
