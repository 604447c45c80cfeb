"""
Katalog belgelerini (uzak depodaki products koleksiyonu) ortak modele dönüştürür.

Belge alanları camelCase'tir:
    id, name, brand, price, category, subcategory, color, size, images,
    description, specialOffer, discountPercentage, discountPrice,
    offerEndsAt, isArchived, createdAt, sizes, addons, wholesaleInfo
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from storefront_profit.errors import RecordFormatError
from storefront_profit.models.product import (
    Product,
    ProductAddon,
    ProductSize,
    WholesaleInfo,
)
from storefront_profit.parsers.fields import optional_money, parse_int, parse_money
from storefront_profit.utils.dates import to_datetime


def parse_size(doc: dict) -> ProductSize:
    return ProductSize(
        size_id=str(doc.get("id", "")),
        label=doc.get("label", ""),
        price=parse_money(doc.get("price")),
    )


def parse_addon(doc: dict) -> ProductAddon:
    return ProductAddon(
        addon_id=str(doc.get("id", "")),
        label=doc.get("label", ""),
        price_delta=parse_money(doc.get("price_delta")),
    )


def parse_wholesale(doc: Optional[dict]) -> Optional[WholesaleInfo]:
    if not isinstance(doc, dict) or doc.get("purchasePrice") is None:
        return None
    return WholesaleInfo(
        purchase_price=parse_money(doc.get("purchasePrice")),
        quantity=parse_int(doc.get("quantity")),
        purchased_quantity=parse_int(doc.get("purchasedQuantity")),
        supplier_name=doc.get("supplierName", ""),
        supplier_phone=doc.get("supplierPhone", ""),
        supplier_email=doc.get("supplierEmail", ""),
        supplier_location=doc.get("supplierLocation", ""),
        notes=doc.get("notes"),
    )


def parse_product(doc: dict) -> Product:
    """Tek bir ürün belgesi. Kimliği olmayan belge kayıt hatasıdır."""
    if not isinstance(doc, dict) or not doc.get("id"):
        raise RecordFormatError(f"Ürün belgesinde id yok: {doc!r}")

    return Product(
        product_id=str(doc["id"]),
        name=doc.get("name", ""),
        price=parse_money(doc.get("price")),
        brand=doc.get("brand", ""),
        category=doc.get("category", ""),
        subcategory=doc.get("subcategory"),
        color=doc.get("color", ""),
        size=doc.get("size", ""),
        description=doc.get("description", ""),
        images=list(doc.get("images") or []),
        is_archived=bool(doc.get("isArchived", False)),
        sizes=[parse_size(s) for s in doc.get("sizes") or []],
        addons=[parse_addon(a) for a in doc.get("addons") or []],
        special_offer=bool(doc.get("specialOffer", False)),
        discount_percentage=optional_money(doc.get("discountPercentage")),
        discount_price=optional_money(doc.get("discountPrice")),
        offer_ends_at=to_datetime(doc.get("offerEndsAt")),
        wholesale_info=parse_wholesale(doc.get("wholesaleInfo")),
        created_at=to_datetime(doc.get("createdAt")),
        raw_data=dict(doc),
    )


def parse_catalog(docs: list[dict]) -> list[Product]:
    return [parse_product(d) for d in docs]


def load_catalog(file_path: Path) -> list[Product]:
    """JSON dizi olarak kaydedilmiş katalog dosyasını okur."""
    with open(file_path, "r", encoding="utf-8") as f:
        docs = json.load(f)
    if not isinstance(docs, list):
        raise RecordFormatError(f"Katalog dosyası bir dizi değil: {file_path}")
    return parse_catalog(docs)


def size_to_doc(size: Optional[ProductSize]) -> Optional[dict]:
    if size is None:
        return None
    return {"id": size.size_id, "label": size.label, "price": size.price}


def addon_to_doc(addon: ProductAddon) -> dict:
    return {"id": addon.addon_id, "label": addon.label, "price_delta": addon.price_delta}
