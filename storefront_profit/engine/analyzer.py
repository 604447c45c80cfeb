"""
Sipariş ve kasa satışlarını analiz eder, kar / ciro raporları üretir.

Sadece teslim edilmiş siparişler ve tüm kasa satışları gerçekleşmiş ciroya
girer. Durum tablosu ise bekleyen siparişleri de gösterir.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from storefront_profit.config.settings import (
    DEFAULT_WINDOW_DAYS,
    ORDER_STATUSES,
    TOP_PRODUCTS_LIMIT,
    UNKNOWN_PRODUCT_NAME,
)
from storefront_profit.engine.transactions import (
    Transaction,
    TransactionKind,
    build_transactions,
)
from storefront_profit.models.order import Order, OrderStatus
from storefront_profit.models.product import Product
from storefront_profit.models.report import (
    MonthlyMetrics,
    OrderStatistics,
    ProductProfit,
    ProductSales,
    ProfitReport,
    RevenueReport,
    SourceSplit,
    StatusTotals,
    empty_status_table,
)
from storefront_profit.models.sale import Sale
from storefront_profit.utils.dates import as_utc, month_key, utc_now

logger = logging.getLogger(__name__)


def window_start(window_days: int, now: Optional[datetime] = None) -> datetime:
    """Son N günün başlangıç anı."""
    now = as_utc(now) if now else utc_now()
    return now - timedelta(days=window_days)


def filter_orders(
    orders: Iterable[Order],
    window_days: Optional[int],
    now: Optional[datetime] = None,
) -> list[Order]:
    if window_days is None:
        return list(orders)
    cutoff = window_start(window_days, now)
    return [o for o in orders if as_utc(o.created_at) >= cutoff]


def filter_sales(
    sales: Iterable[Sale],
    window_days: Optional[int],
    now: Optional[datetime] = None,
) -> list[Sale]:
    """Yerel defter tüm geçmişi tutar, pencere burada uygulanır."""
    if window_days is None:
        return list(sales)
    cutoff = window_start(window_days, now)
    return [s for s in sales if as_utc(s.timestamp) >= cutoff]


def _accumulate_products(
    transactions: list[Transaction],
) -> dict[str, dict]:
    """Ürün bazında adet / ciro / maliyet - iki kaynak aynı anahtarda toplanır."""
    product_stats: dict[str, dict] = defaultdict(
        lambda: {"name": "", "quantity": 0, "revenue": 0.0, "cost": 0.0}
    )

    for tx in transactions:
        if not tx.revenue_eligible:
            continue
        for line in tx.lines:
            stats = product_stats[line.product_id]
            if not stats["name"] and line.product_name:
                stats["name"] = line.product_name
            stats["quantity"] += line.quantity
            stats["revenue"] += line.revenue
            stats["cost"] += line.cost

    return product_stats


def get_top_profitable(
    product_stats: dict[str, dict],
    limit: int = TOP_PRODUCTS_LIMIT,
) -> list[ProductProfit]:
    """En kârlı ürünler (kar = ciro - maliyet)."""
    sorted_products = sorted(
        product_stats.items(),
        key=lambda x: x[1]["revenue"] - x[1]["cost"],
        reverse=True,
    )

    return [
        ProductProfit(
            product_id=pid,
            product_name=stats["name"] or UNKNOWN_PRODUCT_NAME,
            total_sold=stats["quantity"],
            total_revenue=stats["revenue"],
            total_cost=stats["cost"],
        )
        for pid, stats in sorted_products[:limit]
    ]


def get_top_sellers(
    product_stats: dict[str, dict],
    limit: int = TOP_PRODUCTS_LIMIT,
) -> list[ProductSales]:
    """En çok satan ürünler (adet)."""
    sorted_products = sorted(
        product_stats.items(),
        key=lambda x: x[1]["quantity"],
        reverse=True,
    )

    return [
        ProductSales(
            product_id=pid,
            product_name=stats["name"] or UNKNOWN_PRODUCT_NAME,
            total_quantity=stats["quantity"],
            total_revenue=stats["revenue"],
        )
        for pid, stats in sorted_products[:limit]
    ]


def get_monthly_analysis(transactions: list[Transaction]) -> list[MonthlyMetrics]:
    """
    Aylık seri. Ciro ve maliyet sadece ciroya giren işlemlerden gelir,
    sipariş / satış sayıları ise her işlemi sayar.
    """
    monthly: dict[str, MonthlyMetrics] = {}

    for tx in transactions:
        key = month_key(tx.timestamp)
        bucket = monthly.get(key)
        if bucket is None:
            bucket = monthly[key] = MonthlyMetrics(month=key)

        if tx.revenue_eligible:
            bucket.revenue += tx.total
            bucket.cost += tx.cost

        if tx.kind == TransactionKind.ONLINE:
            bucket.orders += 1
        else:
            bucket.sales += 1

    # YYYY-MM metin sıralaması kronolojik sıradır
    return [monthly[key] for key in sorted(monthly)]


def get_status_breakdown(orders: Iterable[Order]) -> dict[str, StatusTotals]:
    """Her durum için sipariş toplamı ve sayısı (ciro kuralından bağımsız)."""
    table = empty_status_table()
    for order in orders:
        totals = table.get(order.status.value)
        if totals is None:
            logger.warning("Bilinmeyen sipariş durumu atlandı: %s", order.status)
            continue
        totals.revenue += order.total
        totals.orders += 1
    return table


def aggregate(
    orders: Iterable[Order],
    sales: Iterable[Sale],
    catalog: Iterable[Product],
    window_days: Optional[int] = DEFAULT_WINDOW_DAYS,
    now: Optional[datetime] = None,
) -> ProfitReport:
    """
    Kar analizi raporu oluşturur.

    Args:
        orders: Uzak depodan gelen siparişler (genelde zaten pencereli)
        sales: Yerel defterdeki kasa satışları (tüm geçmiş)
        catalog: Güncel ürün listesi - sipariş maliyeti buradan okunur
        window_days: Son N gün, None ise filtre yok
        now: Pencerenin bitişi (test için sabitlenebilir)

    Returns: ProfitReport
    """
    now = as_utc(now) if now else utc_now()
    period_orders = filter_orders(orders or (), window_days, now)
    period_sales = filter_sales(sales or (), window_days, now)

    transactions = build_transactions(period_orders, period_sales, catalog)

    revenue = SourceSplit()
    cost = SourceSplit()
    for tx in transactions:
        if not tx.revenue_eligible:
            continue
        if tx.kind == TransactionKind.ONLINE:
            revenue.online += tx.total
            cost.online += tx.cost
        else:
            revenue.cashier += tx.total
            cost.cashier += tx.cost

    product_stats = _accumulate_products(transactions)

    report = ProfitReport(
        total_orders=len(period_orders),
        total_cashier_sales=len(period_sales),
        revenue_by_source=revenue,
        cost_by_source=cost,
        top_profitable_products=get_top_profitable(product_stats),
        top_selling_products=get_top_sellers(product_stats),
        monthly_analysis=get_monthly_analysis(transactions),
        analysis_by_status=get_status_breakdown(period_orders),
    )

    logger.debug(
        "Kar analizi: %d siparis, %d kasa satisi, ciro=%.2f kar=%.2f",
        report.total_orders,
        report.total_cashier_sales,
        report.total_revenue,
        report.total_profit,
    )
    return report


def build_revenue_report(
    orders: Iterable[Order],
    sales: Iterable[Sale],
) -> RevenueReport:
    """Teslim edilen siparişler + tüm kasa satışlarından ciro özeti."""
    orders = list(orders or ())
    sales = list(sales or ())

    by_status = {status: 0.0 for status in ORDER_STATUSES}
    counts = {status: 0 for status in ORDER_STATUSES}
    for order in orders:
        if order.status.value in by_status:
            by_status[order.status.value] += order.total
            counts[order.status.value] += 1

    cashier = sum(s.total_amount for s in sales)
    delivered = by_status[OrderStatus.DELIVERED.value]

    return RevenueReport(
        total_revenue=delivered + cashier,
        revenue_by_status={**by_status, "cashier": cashier},
        order_statistics=OrderStatistics(
            total_orders=len(orders),
            pending_orders=counts["pending"],
            confirmed_orders=counts["confirmed"],
            shipped_orders=counts["shipped"],
            delivered_orders=counts["delivered"],
            cancelled_orders=counts["cancelled"],
            total_cashier_sales=len(sales),
        ),
    )
