"""
Kasa satışı veri modeli - mağaza içi kasiyerin kaydettiği, yerelde saklanan satışlar.

Kasa satışlarının durumu yoktur; kaydedildiği anda kesinleşir.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from storefront_profit.config.settings import LOCAL_SALE_ID_PREFIX
from storefront_profit.models.product import ProductAddon, ProductSize


@dataclass
class SaleWholesale:
    purchase_price: float
    quantity: int = 0


@dataclass
class SaleProduct:
    """Satış anındaki ürün görüntüsü."""
    product_id: str
    name: str
    price: float
    images: list[str] = field(default_factory=list)
    wholesale_info: Optional[SaleWholesale] = None


@dataclass
class SaleItem:
    product: SaleProduct
    quantity: int
    unit_final_price: Optional[float] = None
    total_price: Optional[float] = None
    selected_size: Optional[ProductSize] = None
    selected_addons: list[ProductAddon] = field(default_factory=list)

    @property
    def unit_price(self) -> float:
        if self.unit_final_price is not None:
            return self.unit_final_price
        return self.product.price

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    @property
    def unit_cost(self) -> Optional[float]:
        if self.product.wholesale_info is None:
            return None
        return self.product.wholesale_info.purchase_price


@dataclass
class Sale:
    """Kasa satışı."""
    sale_id: str
    timestamp: datetime
    items: list[SaleItem] = field(default_factory=list)
    total_amount: float = 0.0
    customer_name: Optional[str] = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_local(self) -> bool:
        """Sadece yerel yedekte tutulan (henüz senkronize olmamış) satış."""
        return self.sale_id.startswith(LOCAL_SALE_ID_PREFIX)
