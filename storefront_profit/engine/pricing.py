"""
Ürün + seçimlerden (beden, ekler, kampanya) birim ve toplam fiyatı hesaplar.

Kurallar:
  - Seçili beden varsa fiyatı ana fiyatın yerine geçer.
  - Seçili eklerin fiyat farkları toplanır, katalogda olmayan ekler yok sayılır.
  - Kampanya indirimi resolve_price() içinde uygulanmaz; çağıran taraf
    apply_special_offer() ile tek sefer uygular.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from storefront_profit.errors import InvalidQuantityError
from storefront_profit.models.product import Product, ProductAddon, ProductSize


@dataclass
class PriceBreakdown:
    base_price: float
    size: Optional[ProductSize] = None
    addons: list[ProductAddon] = field(default_factory=list)

    @property
    def addons_total(self) -> float:
        return sum(a.price_delta for a in self.addons)


@dataclass
class PriceResolution:
    unit_price: float
    breakdown: PriceBreakdown


@dataclass
class ResolvedLineItem:
    """Fiyatı kesinleşmiş sepet / sipariş / satış kalemi."""
    product: Product
    quantity: int
    unit_final_price: float
    selected_size: Optional[ProductSize] = None
    selected_addons: list[ProductAddon] = field(default_factory=list)

    @property
    def total_price(self) -> float:
        return self.unit_final_price * self.quantity

    @property
    def selection_key(self) -> tuple:
        """Aynı ürün + beden + ek seçimi aynı satıra düşer."""
        size_id = self.selected_size.size_id if self.selected_size else None
        return (
            self.product.product_id,
            size_id,
            tuple(sorted(a.addon_id for a in self.selected_addons)),
        )


def resolve_price(
    product: Product,
    selected_size_id: Optional[str] = None,
    selected_addon_ids: Iterable[str] = (),
) -> PriceResolution:
    """İndirimsiz birim fiyat. Hiçbir durumda hata vermez."""
    size = product.find_size(selected_size_id) if product.sizes else None
    base = size.price if size is not None else product.price

    addons = product.find_addons(selected_addon_ids)
    unit_price = base + sum(a.price_delta for a in addons)

    return PriceResolution(
        unit_price=unit_price,
        breakdown=PriceBreakdown(base_price=base, size=size, addons=addons),
    )


def apply_special_offer(
    product: Product,
    price: float,
    now: Optional[datetime] = None,
) -> float:
    """
    Aktif kampanyayı fiyata bir kez uygular.

    discount_price girilmişse o kullanılır, yoksa yüzde indirimi çözülmüş
    (beden + ek) fiyata uygulanır. Süresi dolmuş kampanya fiyatı değiştirmez.
    """
    if not product.offer_active(now):
        return price
    if product.discount_price:
        return product.discount_price
    if product.discount_percentage:
        return price - (price * product.discount_percentage) / 100
    return price


def discounted_price(product: Product, now: Optional[datetime] = None) -> float:
    """Seçimsiz ürünün vitrin fiyatı."""
    return apply_special_offer(product, product.price, now)


def resolve_line_item(
    product: Product,
    quantity: int,
    selected_size_id: Optional[str] = None,
    selected_addon_ids: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> ResolvedLineItem:
    """Sepet akışı: çöz, indirimi uygula, adetle çarp."""
    if quantity <= 0:
        raise InvalidQuantityError(quantity)

    resolution = resolve_price(product, selected_size_id, selected_addon_ids)
    unit_final_price = apply_special_offer(product, resolution.unit_price, now)

    return ResolvedLineItem(
        product=product,
        quantity=quantity,
        unit_final_price=unit_final_price,
        selected_size=resolution.breakdown.size,
        selected_addons=list(resolution.breakdown.addons),
    )
