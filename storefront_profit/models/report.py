"""
Kar ve ciro raporu veri modelleri - ekranlar, JSON ve Excel dışa aktarımı için.

to_dict() çıktısındaki anahtarlar dışa aktarılan JSON belgesinin sözleşmesidir
(camelCase), bu yüzden alan adları değişse de anahtarlar sabit kalmalı.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from storefront_profit.config.settings import ORDER_STATUSES


def safe_margin(profit: float, revenue: float) -> float:
    """Kar marjı (%) - ciro sıfırsa 0."""
    if revenue == 0:
        return 0.0
    return (profit / revenue) * 100


@dataclass
class SourceSplit:
    """Çevrimiçi / kasa kırılımı."""
    online: float = 0.0
    cashier: float = 0.0

    @property
    def total(self) -> float:
        return self.online + self.cashier

    def to_dict(self) -> dict:
        return {"online": self.online, "cashier": self.cashier}


@dataclass
class ProductProfit:
    """En kârlı ürünler sıralaması."""
    product_id: str
    product_name: str
    total_sold: int = 0
    total_revenue: float = 0.0
    total_cost: float = 0.0

    @property
    def total_profit(self) -> float:
        return self.total_revenue - self.total_cost

    @property
    def profit_margin(self) -> float:
        return safe_margin(self.total_profit, self.total_revenue)

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "totalSold": self.total_sold,
            "totalRevenue": self.total_revenue,
            "totalCost": self.total_cost,
            "totalProfit": self.total_profit,
            "profitMargin": self.profit_margin,
        }


@dataclass
class ProductSales:
    """En çok satan ürünler sıralaması."""
    product_id: str
    product_name: str
    total_quantity: int = 0
    total_revenue: float = 0.0

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "totalQuantity": self.total_quantity,
            "totalRevenue": self.total_revenue,
        }


@dataclass
class MonthlyMetrics:
    """Bir ay (YYYY-MM) için metrikler."""
    month: str
    revenue: float = 0.0
    cost: float = 0.0
    orders: int = 0
    sales: int = 0

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "revenue": self.revenue,
            "cost": self.cost,
            "profit": self.profit,
            "orders": self.orders,
            "sales": self.sales,
        }


@dataclass
class StatusTotals:
    revenue: float = 0.0
    orders: int = 0

    def to_dict(self) -> dict:
        return {"revenue": self.revenue, "orders": self.orders}


def empty_status_table() -> dict[str, StatusTotals]:
    return {status: StatusTotals() for status in ORDER_STATUSES}


@dataclass
class ProfitReport:
    """Çevrimiçi siparişler ve kasa satışlarının birleşik kar analizi."""
    total_orders: int = 0
    total_cashier_sales: int = 0

    revenue_by_source: SourceSplit = field(default_factory=SourceSplit)
    cost_by_source: SourceSplit = field(default_factory=SourceSplit)

    top_profitable_products: list[ProductProfit] = field(default_factory=list)
    top_selling_products: list[ProductSales] = field(default_factory=list)
    monthly_analysis: list[MonthlyMetrics] = field(default_factory=list)
    analysis_by_status: dict[str, StatusTotals] = field(default_factory=empty_status_table)

    @property
    def total_sales(self) -> int:
        return self.total_orders + self.total_cashier_sales

    @property
    def total_revenue(self) -> float:
        return self.revenue_by_source.total

    @property
    def total_cost(self) -> float:
        return self.cost_by_source.total

    @property
    def total_profit(self) -> float:
        return self.total_revenue - self.total_cost

    @property
    def profit_margin(self) -> float:
        return safe_margin(self.total_profit, self.total_revenue)

    @property
    def profit_by_source(self) -> SourceSplit:
        return SourceSplit(
            online=self.revenue_by_source.online - self.cost_by_source.online,
            cashier=self.revenue_by_source.cashier - self.cost_by_source.cashier,
        )

    def to_dict(self) -> dict:
        return {
            "totalSales": self.total_sales,
            "totalOrders": self.total_orders,
            "totalCashierSales": self.total_cashier_sales,
            "totalRevenue": self.total_revenue,
            "totalCost": self.total_cost,
            "totalProfit": self.total_profit,
            "profitMargin": self.profit_margin,
            "revenueBySource": self.revenue_by_source.to_dict(),
            "profitBySource": self.profit_by_source.to_dict(),
            "topProfitableProducts": [p.to_dict() for p in self.top_profitable_products],
            "topSellingProducts": [p.to_dict() for p in self.top_selling_products],
            "monthlyAnalysis": [m.to_dict() for m in self.monthly_analysis],
            "analysisByStatus": {
                status: totals.to_dict()
                for status, totals in self.analysis_by_status.items()
            },
        }


@dataclass
class OrderStatistics:
    total_orders: int = 0
    pending_orders: int = 0
    confirmed_orders: int = 0
    shipped_orders: int = 0
    delivered_orders: int = 0
    cancelled_orders: int = 0
    total_cashier_sales: int = 0

    def to_dict(self) -> dict:
        return {
            "totalOrders": self.total_orders,
            "pendingOrders": self.pending_orders,
            "confirmedOrders": self.confirmed_orders,
            "shippedOrders": self.shipped_orders,
            "deliveredOrders": self.delivered_orders,
            "cancelledOrders": self.cancelled_orders,
            "totalCashierSales": self.total_cashier_sales,
        }


@dataclass
class RevenueReport:
    """Hafif ciro özeti (durum bazında ciro + sipariş sayıları)."""
    total_revenue: float = 0.0
    revenue_by_status: dict[str, float] = field(default_factory=dict)
    order_statistics: OrderStatistics = field(default_factory=OrderStatistics)

    def to_dict(self) -> dict:
        return {
            "totalRevenue": self.total_revenue,
            "revenueByStatus": dict(self.revenue_by_status),
            "orderStatistics": self.order_statistics.to_dict(),
        }
