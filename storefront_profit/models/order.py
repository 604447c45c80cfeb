"""
Sipariş veri modeli - müşteri ödeme akışında oluşan, uzak depoda tutulan siparişler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from storefront_profit.config.settings import REVENUE_STATUS
from storefront_profit.models.product import ProductAddon, ProductSize


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass
class OrderItem:
    """Siparişteki tek bir ürün kalemi (fiyatı çözülmüş)."""
    product_id: str
    product_name: str
    quantity: int
    price: float
    unit_final_price: Optional[float] = None
    total_price: Optional[float] = None
    image: str = ""
    selected_size: Optional[ProductSize] = None
    selected_addons: list[ProductAddon] = field(default_factory=list)

    # Sipariş anındaki birim maliyet (varsa katalogdan önceliklidir)
    unit_cost: Optional[float] = None

    @property
    def unit_price(self) -> float:
        """Eski kayıtlarda unit_final_price yoksa price kullanılır."""
        if self.unit_final_price is not None:
            return self.unit_final_price
        return self.price

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass
class DeliveryInfo:
    full_name: str
    phone_number: str
    address: str
    city: str
    notes: Optional[str] = None


@dataclass
class Order:
    """Çevrimiçi sipariş."""
    order_id: str
    user_id: str
    status: OrderStatus
    created_at: datetime
    items: list[OrderItem] = field(default_factory=list)
    total: float = 0.0
    updated_at: Optional[datetime] = None
    delivery_info: Optional[DeliveryInfo] = None

    # Ham veri referansı
    raw_data: dict = field(default_factory=dict, repr=False)

    @property
    def is_delivered(self) -> bool:
        return self.status.value == REVENUE_STATUS

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
