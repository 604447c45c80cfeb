"""
Çevrimiçi siparişleri ve kasa satışlarını tek bir işlem şekline dönüştürür.

Analiz motoru iki kaynağı ayrı ayrı dolaşmak yerine Transaction listesi
üzerinde tek bir geçiş yapar. Kaynağa özgü tek kural revenue_eligible:
ONLINE sadece teslim edilmişse, CASHIER her zaman ciroya girer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from storefront_profit.models.order import Order, OrderItem
from storefront_profit.models.product import Product
from storefront_profit.models.sale import Sale, SaleItem


class TransactionKind(str, Enum):
    ONLINE = "online"
    CASHIER = "cashier"


@dataclass
class TransactionLine:
    product_id: str
    product_name: str
    quantity: int
    revenue: float
    unit_cost: Optional[float] = None

    @property
    def cost(self) -> float:
        """Maliyet bilgisi yoksa 0."""
        if self.unit_cost is None:
            return 0.0
        return self.unit_cost * self.quantity


@dataclass
class Transaction:
    kind: TransactionKind
    source_id: str
    timestamp: datetime
    total: float
    revenue_eligible: bool
    lines: list[TransactionLine] = field(default_factory=list)
    status: Optional[str] = None

    @property
    def cost(self) -> float:
        return sum(line.cost for line in self.lines)


def index_catalog(catalog: Iterable[Product]) -> dict[str, Product]:
    """Ürün kimliğine göre katalog. Aynı kimlik tekrar ederse ilki geçerli."""
    index: dict[str, Product] = {}
    for product in catalog or ():
        index.setdefault(product.product_id, product)
    return index


def _order_line(item: OrderItem, catalog: dict[str, Product]) -> TransactionLine:
    product = catalog.get(item.product_id)

    unit_cost = item.unit_cost
    if unit_cost is None and product is not None:
        unit_cost = product.unit_cost

    name = product.name if product is not None else item.product_name

    return TransactionLine(
        product_id=item.product_id,
        product_name=name,
        quantity=item.quantity,
        revenue=item.line_total,
        unit_cost=unit_cost,
    )


def _sale_line(item: SaleItem) -> TransactionLine:
    return TransactionLine(
        product_id=item.product.product_id,
        product_name=item.product.name,
        quantity=item.quantity,
        revenue=item.line_total,
        unit_cost=item.unit_cost,
    )


def from_order(order: Order, catalog: dict[str, Product]) -> Transaction:
    return Transaction(
        kind=TransactionKind.ONLINE,
        source_id=order.order_id,
        timestamp=order.created_at,
        total=order.total,
        revenue_eligible=order.is_delivered,
        lines=[_order_line(item, catalog) for item in order.items],
        status=order.status.value,
    )


def from_sale(sale: Sale) -> Transaction:
    return Transaction(
        kind=TransactionKind.CASHIER,
        source_id=sale.sale_id,
        timestamp=sale.timestamp,
        total=sale.total_amount,
        revenue_eligible=True,
        lines=[_sale_line(item) for item in sale.items],
    )


def build_transactions(
    orders: Iterable[Order],
    sales: Iterable[Sale],
    catalog: Iterable[Product],
) -> list[Transaction]:
    """Önce siparişler, sonra satışlar - sıralama eşitlik durumlarını belirler."""
    index = index_catalog(catalog)
    transactions = [from_order(o, index) for o in orders or ()]
    transactions.extend(from_sale(s) for s in sales or ())
    return transactions
