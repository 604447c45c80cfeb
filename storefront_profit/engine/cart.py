"""
Sepet - fiyatı çözülmüş kalemleri tutar, sipariş / kasa satışı kayıtlarına dönüştürür.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from storefront_profit.engine.pricing import ResolvedLineItem, resolve_line_item
from storefront_profit.errors import EmptyCartError, InsufficientStockError
from storefront_profit.models.order import Order, OrderItem, OrderStatus
from storefront_profit.models.product import Product
from storefront_profit.models.sale import Sale, SaleItem, SaleProduct, SaleWholesale
from storefront_profit.utils.dates import utc_now


class Cart:
    """Alışveriş / kasa sepeti."""

    def __init__(self):
        self.items: list[ResolvedLineItem] = []

    def __len__(self) -> int:
        return len(self.items)

    def _find(self, key: tuple) -> Optional[ResolvedLineItem]:
        for item in self.items:
            if item.selection_key == key:
                return item
        return None

    def _reserved(self, product_id: str) -> int:
        return sum(i.quantity for i in self.items if i.product.product_id == product_id)

    def _check_stock(self, product: Product, extra: int) -> None:
        """Toptan bilgisi olan ürünlerde stok kontrolü."""
        if product.stock is None:
            return
        requested = self._reserved(product.product_id) + extra
        if requested > product.stock:
            raise InsufficientStockError(product.product_id, requested, product.stock)

    def add(
        self,
        product: Product,
        quantity: int = 1,
        selected_size_id: Optional[str] = None,
        selected_addon_ids: Iterable[str] = (),
        now: Optional[datetime] = None,
    ) -> ResolvedLineItem:
        """
        Ürünü sepete ekler. Aynı ürün + beden + ek seçimi varsa adet artar,
        birim fiyat ilk eklemedeki gibi kalır.
        """
        line = resolve_line_item(product, quantity, selected_size_id, selected_addon_ids, now)
        self._check_stock(product, quantity)

        existing = self._find(line.selection_key)
        if existing is not None:
            existing.quantity += quantity
            return existing

        self.items.append(line)
        return line

    def update_quantity(self, key: tuple, quantity: int) -> None:
        """Adedi değiştirir, 0 veya altı kalemi siler."""
        item = self._find(key)
        if item is None:
            return
        if quantity <= 0:
            self.items.remove(item)
            return
        if quantity > item.quantity:
            self._check_stock(item.product, quantity - item.quantity)
        item.quantity = quantity

    def remove(self, key: tuple) -> None:
        self.items = [i for i in self.items if i.selection_key != key]

    def clear(self) -> None:
        self.items = []

    @property
    def total(self) -> float:
        return sum(item.total_price for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def _require_items(self) -> None:
        if not self.items:
            raise EmptyCartError("Sepet boş")

    def to_order(
        self,
        order_id: str,
        user_id: str,
        now: Optional[datetime] = None,
        delivery_info=None,
    ) -> Order:
        """Ödeme akışı: sepetten bekleyen sipariş. Birim maliyet o anki katalogdan alınır."""
        self._require_items()
        now = now or utc_now()
        items = [
            OrderItem(
                product_id=line.product.product_id,
                product_name=line.product.name,
                quantity=line.quantity,
                price=line.unit_final_price,
                unit_final_price=line.unit_final_price,
                total_price=line.total_price,
                image=line.product.images[0] if line.product.images else "",
                selected_size=line.selected_size,
                selected_addons=list(line.selected_addons),
                unit_cost=line.product.unit_cost,
            )
            for line in self.items
        ]
        return Order(
            order_id=order_id,
            user_id=user_id,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
            items=items,
            total=self.total,
            delivery_info=delivery_info,
        )

    def to_sale(
        self,
        sale_id: str,
        customer_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Sale:
        """Kasa akışı: ürün görüntüsüyle birlikte kesinleşmiş satış."""
        self._require_items()
        items = []
        for line in self.items:
            product = line.product
            wholesale = None
            if product.wholesale_info is not None:
                wholesale = SaleWholesale(
                    purchase_price=product.wholesale_info.purchase_price,
                    quantity=product.wholesale_info.quantity,
                )
            items.append(SaleItem(
                product=SaleProduct(
                    product_id=product.product_id,
                    name=product.name,
                    price=product.price,
                    images=list(product.images),
                    wholesale_info=wholesale,
                ),
                quantity=line.quantity,
                unit_final_price=line.unit_final_price,
                total_price=line.total_price,
                selected_size=line.selected_size,
                selected_addons=list(line.selected_addons),
            ))

        return Sale(
            sale_id=sale_id,
            timestamp=now or utc_now(),
            items=items,
            total_amount=self.total,
            customer_name=customer_name or None,
        )
