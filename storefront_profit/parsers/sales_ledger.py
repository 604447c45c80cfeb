"""
Kasa satışları defteri - yerel depolamada tek bir anahtar altında JSON dizi.

Yerel depolama, tarayıcıdaki localStorage gibi anahtar → metin eşlemesidir;
burada bir JSON dosyasında tutulur. Defter sadece eklenerek büyür,
en yeni satış dizinin başındadır.

Bozuk defter kısmen okunmaz: herhangi bir kayıt çözülemezse LedgerError.
"""
from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from storefront_profit.config.settings import LOCAL_SALE_ID_PREFIX, SALES_LEDGER_KEY
from storefront_profit.errors import LedgerError, RecordFormatError
from storefront_profit.models.sale import Sale, SaleItem, SaleProduct, SaleWholesale
from storefront_profit.parsers.catalog_json import (
    addon_to_doc,
    parse_addon,
    parse_size,
    size_to_doc,
)
from storefront_profit.parsers.fields import parse_int, parse_money, strict_int, strict_money
from storefront_profit.utils.dates import to_datetime, to_iso, utc_now

logger = logging.getLogger(__name__)


class LocalStorage:
    """Dosya tabanlı anahtar → metin deposu."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as exc:
            # JSONDecodeError ve UnicodeDecodeError, ValueError alt sınıflarıdır
            raise LedgerError(f"Yerel depo okunamadı: {exc}", self.path) from exc
        if not isinstance(data, dict):
            raise LedgerError("Yerel depo bir nesne değil", self.path)
        return data

    def _write_all(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            # elle düzenlenmiş dosyalarda dizi doğrudan yazılmış olabilir
            return json.dumps(value, ensure_ascii=False)
        return value

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


# ── Çözümleme ─────────────────────────────────────────────

def _parse_sale_product(doc) -> SaleProduct:
    if not isinstance(doc, dict) or not doc.get("id"):
        raise RecordFormatError(f"Satış kaleminde ürün görüntüsü yok: {doc!r}")

    wholesale = doc.get("wholesaleInfo")
    wholesale_info = None
    if isinstance(wholesale, dict) and wholesale.get("purchasePrice") is not None:
        wholesale_info = SaleWholesale(
            purchase_price=parse_money(wholesale.get("purchasePrice")),
            quantity=parse_int(wholesale.get("quantity")),
        )

    return SaleProduct(
        product_id=str(doc["id"]),
        name=doc.get("name", ""),
        price=parse_money(doc.get("price")),
        images=list(doc.get("images") or []),
        wholesale_info=wholesale_info,
    )


def _record_list(value, name: str) -> list[dict]:
    """Eksik alan boş liste, sözlük olmayan eleman kayıt hatası."""
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise RecordFormatError(f"{name} sözlük listesi değil: {value!r}")
    return value


def parse_sale_item(doc: dict) -> SaleItem:
    if not isinstance(doc, dict):
        raise RecordFormatError(f"Satış kalemi sözlük değil: {doc!r}")
    size = doc.get("selectedSize")
    return SaleItem(
        product=_parse_sale_product(doc.get("product")),
        quantity=strict_int(doc.get("quantity"), "quantity", 1),
        unit_final_price=strict_money(doc.get("unitFinalPrice"), "unitFinalPrice", None),
        total_price=strict_money(doc.get("totalPrice"), "totalPrice", None),
        selected_size=parse_size(size) if isinstance(size, dict) else None,
        selected_addons=[
            parse_addon(a) for a in _record_list(doc.get("selectedAddons"), "selectedAddons")
        ],
    )


def parse_sale(doc: dict) -> Sale:
    if not isinstance(doc, dict):
        raise RecordFormatError(f"Satış kaydı sözlük değil: {doc!r}")

    timestamp = to_datetime(doc.get("timestamp"))
    if timestamp is None:
        raise RecordFormatError(f"Satış kaydının tarihi okunamadı: {doc.get('id')}")

    return Sale(
        sale_id=str(doc.get("id", "")),
        timestamp=timestamp,
        items=[parse_sale_item(i) for i in _record_list(doc.get("items"), "items")],
        total_amount=strict_money(doc.get("totalAmount"), "totalAmount"),
        customer_name=doc.get("customerName") or None,
    )


def parse_ledger(raw: Optional[str]) -> list[Sale]:
    """Defter metnini satış listesine çevirir. Boş defter → []"""
    if not raw:
        return []
    try:
        docs = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LedgerError(f"Kasa defteri bozuk JSON: {exc}") from exc
    if not isinstance(docs, list):
        raise LedgerError("Kasa defteri bir dizi değil")

    try:
        return [parse_sale(d) for d in docs]
    except (RecordFormatError, TypeError, AttributeError, ValueError) as exc:
        raise LedgerError(f"Kasa defterinde bozuk kayıt: {exc}") from exc


# ── Yazma ─────────────────────────────────────────────────

def sale_to_doc(sale: Sale) -> dict:
    items = []
    for item in sale.items:
        product = item.product
        wholesale = None
        if product.wholesale_info is not None:
            wholesale = {
                "purchasePrice": product.wholesale_info.purchase_price,
                "quantity": product.wholesale_info.quantity,
            }
        items.append({
            "product": {
                "id": product.product_id,
                "name": product.name,
                "price": product.price,
                "images": list(product.images),
                "wholesaleInfo": wholesale,
            },
            "quantity": item.quantity,
            "selectedSize": size_to_doc(item.selected_size),
            "selectedAddons": [addon_to_doc(a) for a in item.selected_addons],
            "unitFinalPrice": item.unit_price,
            "totalPrice": item.line_total,
        })

    return {
        "id": sale.sale_id,
        "items": items,
        "totalAmount": sale.total_amount,
        "timestamp": to_iso(sale.timestamp),
        "customerName": sale.customer_name,
    }


def new_local_sale_id(now: Optional[datetime] = None) -> str:
    """local_<epoch ms>_<rastgele> - henüz uzak depoya yazılmamış satışlar için."""
    now = now or utc_now()
    return f"{LOCAL_SALE_ID_PREFIX}{int(now.timestamp() * 1000)}_{uuid.uuid4().hex[:9]}"


class SalesLedger:
    """Yerel depodaki kasa satışları."""

    def __init__(self, storage: LocalStorage, key: str = SALES_LEDGER_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> list[Sale]:
        return parse_ledger(self.storage.get_item(self.key))

    def save(self, sales: Iterable[Sale]) -> None:
        payload = json.dumps([sale_to_doc(s) for s in sales], ensure_ascii=False)
        self.storage.set_item(self.key, payload)

    def append(self, sale: Sale) -> list[Sale]:
        """Satışı defterin başına ekler ve güncel listeyi döner."""
        sales = [sale] + self.load()
        self.save(sales)
        logger.info("Kasa satışı deftere eklendi: %s (%.2f)", sale.sale_id, sale.total_amount)
        return sales

    def clear(self) -> None:
        self.storage.remove_item(self.key)


def merge_sales(remote: Iterable[Sale], local: Iterable[Sale]) -> list[Sale]:
    """
    Uzak ve yerel satışları birleştirir, uzak kayıtlar önce gelir.

    Yerel satış, aynı kimliğe ya da aynı (tarih, tutar) ikilisine sahip bir
    uzak satış varsa atlanır.
    """
    merged = list(remote)
    known_ids = {s.sale_id for s in merged}
    known_pairs = {(s.timestamp, s.total_amount) for s in merged}

    for sale in local:
        if sale.sale_id in known_ids or (sale.timestamp, sale.total_amount) in known_pairs:
            continue
        merged.append(sale)

    return merged
