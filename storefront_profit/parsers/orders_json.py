"""
Uzak depodaki sipariş belgelerini ortak modele dönüştürür.

Beklenen belge alanları:
    id, userId, items[], total, status, deliveryInfo, createdAt, updatedAt

Kalem alanları:
    productId, productName, quantity, price, image, selectedSize,
    selectedAddons[], unitFinalPrice, totalPrice, unitCost (opsiyonel)
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

from storefront_profit.errors import RecordFormatError
from storefront_profit.models.order import DeliveryInfo, Order, OrderItem, OrderStatus
from storefront_profit.parsers.catalog_json import (
    addon_to_doc,
    parse_addon,
    parse_size,
    size_to_doc,
)
from storefront_profit.parsers.fields import optional_money, parse_int, parse_money
from storefront_profit.utils.dates import as_utc, to_datetime, to_iso, utc_now

logger = logging.getLogger(__name__)


def _map_status(status_str: Optional[str]) -> OrderStatus:
    """Bilinmeyen durumlar bekleyen sayılır."""
    try:
        return OrderStatus((status_str or "").lower().strip())
    except ValueError:
        logger.warning("Bilinmeyen sipariş durumu '%s', pending kabul edildi", status_str)
        return OrderStatus.PENDING


def parse_order_item(doc: dict) -> OrderItem:
    size = doc.get("selectedSize")
    return OrderItem(
        product_id=str(doc.get("productId", "")),
        product_name=doc.get("productName", ""),
        quantity=parse_int(doc.get("quantity"), 1),
        price=parse_money(doc.get("price")),
        unit_final_price=optional_money(doc.get("unitFinalPrice")),
        total_price=optional_money(doc.get("totalPrice")),
        image=doc.get("image", ""),
        selected_size=parse_size(size) if isinstance(size, dict) else None,
        selected_addons=[parse_addon(a) for a in doc.get("selectedAddons") or []],
        unit_cost=optional_money(doc.get("unitCost")),
    )


def _parse_delivery(doc) -> Optional[DeliveryInfo]:
    if not isinstance(doc, dict):
        return None
    return DeliveryInfo(
        full_name=doc.get("fullName", ""),
        phone_number=doc.get("phoneNumber", ""),
        address=doc.get("address", ""),
        city=doc.get("city", ""),
        notes=doc.get("notes"),
    )


def parse_order(doc: dict, doc_id: Optional[str] = None) -> Order:
    """
    Tek bir sipariş belgesi.

    Tarihi okunamayan siparişlerde şimdiki zaman kullanılır.
    """
    if not isinstance(doc, dict):
        raise RecordFormatError(f"Sipariş belgesi sözlük değil: {doc!r}")

    order_id = doc_id or doc.get("id")
    if not order_id:
        raise RecordFormatError("Sipariş belgesinde id yok")

    created_at = to_datetime(doc.get("createdAt")) or utc_now()

    return Order(
        order_id=str(order_id),
        user_id=str(doc.get("userId", "")),
        status=_map_status(doc.get("status")),
        created_at=created_at,
        items=[parse_order_item(i) for i in doc.get("items") or []],
        total=parse_money(doc.get("total")),
        updated_at=to_datetime(doc.get("updatedAt")) or created_at,
        delivery_info=_parse_delivery(doc.get("deliveryInfo")),
        raw_data=dict(doc),
    )


def parse_orders(docs: Iterable[dict]) -> list[Order]:
    return [parse_order(d) for d in docs]


def query_orders(
    docs: Iterable[dict],
    since: Optional[datetime] = None,
) -> list[Order]:
    """
    Uzak sorgunun karşılığı: createdAt >= since, en yeni önce.
    """
    orders = parse_orders(docs)
    if since is not None:
        since = as_utc(since)
        orders = [o for o in orders if o.created_at >= since]
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def load_orders(file_path: Path, window_days: Optional[int] = None) -> list[Order]:
    """Dışa aktarılmış sipariş belgelerini (JSON dizi) okur."""
    with open(file_path, "r", encoding="utf-8") as f:
        docs = json.load(f)
    if not isinstance(docs, list):
        raise RecordFormatError(f"Sipariş dosyası bir dizi değil: {file_path}")

    since = None
    if window_days is not None:
        since = utc_now() - timedelta(days=window_days)
    return query_orders(docs, since)


def order_to_doc(order: Order) -> dict:
    """Siparişi uzak depo belge şekline çevirir (tarihler ISO metin)."""
    doc = {
        "id": order.order_id,
        "userId": order.user_id,
        "items": [
            {
                "productId": item.product_id,
                "productName": item.product_name,
                "quantity": item.quantity,
                "price": item.price,
                "image": item.image,
                "selectedSize": size_to_doc(item.selected_size),
                "selectedAddons": [addon_to_doc(a) for a in item.selected_addons],
                "unitFinalPrice": item.unit_price,
                "totalPrice": item.line_total,
                "unitCost": item.unit_cost,
            }
            for item in order.items
        ],
        "total": order.total,
        "status": order.status.value,
        "createdAt": to_iso(order.created_at),
        "updatedAt": to_iso(order.updated_at or order.created_at),
    }
    if order.delivery_info is not None:
        info = order.delivery_info
        doc["deliveryInfo"] = {
            "fullName": info.full_name,
            "phoneNumber": info.phone_number,
            "address": info.address,
            "city": info.city,
            "notes": info.notes,
        }
    return doc
