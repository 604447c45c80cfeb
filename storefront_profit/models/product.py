"""
Ürün veri modeli - katalogdaki ürünler, bedenleri, ekleri ve toptan alış bilgisi.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from storefront_profit.utils.dates import as_utc, utc_now


@dataclass
class ProductSize:
    """Beden seçeneği. Fiyatı ana fiyatın yerine geçer."""
    size_id: str
    label: str
    price: float


@dataclass
class ProductAddon:
    """Ek seçenek. Fiyat farkı ana fiyata eklenir."""
    addon_id: str
    label: str
    price_delta: float


@dataclass
class WholesaleInfo:
    """Tedarikçi ve alış maliyeti (kar hesabı için)."""
    purchase_price: float
    quantity: int = 0
    purchased_quantity: int = 0
    supplier_name: str = ""
    supplier_phone: str = ""
    supplier_email: str = ""
    supplier_location: str = ""
    notes: Optional[str] = None


@dataclass
class Product:
    """Katalog ürünü."""
    product_id: str
    name: str
    price: float

    # Detaylar
    brand: str = ""
    category: str = ""
    subcategory: Optional[str] = None
    color: str = ""
    size: str = ""
    description: str = ""
    images: list[str] = field(default_factory=list)
    is_archived: bool = False

    # Seçenekler
    sizes: list[ProductSize] = field(default_factory=list)
    addons: list[ProductAddon] = field(default_factory=list)

    # Kampanya
    special_offer: bool = False
    discount_percentage: Optional[float] = None
    discount_price: Optional[float] = None
    offer_ends_at: Optional[datetime] = None

    # Maliyet
    wholesale_info: Optional[WholesaleInfo] = None

    # Tarihler
    created_at: Optional[datetime] = None

    # Ham veri referansı
    raw_data: dict = field(default_factory=dict, repr=False)

    def find_size(self, size_id: Optional[str]) -> Optional[ProductSize]:
        if not size_id:
            return None
        for s in self.sizes:
            if s.size_id == size_id:
                return s
        return None

    def find_addons(self, addon_ids) -> list[ProductAddon]:
        """Seçili eklerden katalogda karşılığı olanlar (katalog sırasıyla)."""
        wanted = set(addon_ids or ())
        return [a for a in self.addons if a.addon_id in wanted]

    def offer_active(self, now: Optional[datetime] = None) -> bool:
        """Kampanya hâlâ geçerli mi?"""
        if not self.special_offer or self.offer_ends_at is None:
            return False
        now = as_utc(now) if now else utc_now()
        return now < as_utc(self.offer_ends_at)

    @property
    def unit_cost(self) -> Optional[float]:
        if self.wholesale_info is None:
            return None
        return self.wholesale_info.purchase_price

    @property
    def stock(self) -> Optional[int]:
        """Stok adedi - toptan bilgisi yoksa bilinmiyor."""
        if self.wholesale_info is None:
            return None
        return self.wholesale_info.quantity

    @property
    def profit_margin(self) -> Optional[float]:
        """Kar marjı (%) - maliyet girilmişse."""
        if self.unit_cost is None or self.price == 0:
            return None
        return ((self.price - self.unit_cost) / self.price) * 100
