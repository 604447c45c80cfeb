"""
Test için örnek katalog, sipariş ve kasa defteri dosyaları oluşturur.
"""
import json
import random
from datetime import datetime, timedelta, timezone

from storefront_profit.config.settings import (
    CATALOG_FILE,
    DATA_DIR,
    LOCAL_STORAGE_FILE,
    ORDERS_FILE,
)
from storefront_profit.engine.cart import Cart
from storefront_profit.models.order import DeliveryInfo, OrderStatus
from storefront_profit.parsers.catalog_json import parse_catalog
from storefront_profit.parsers.orders_json import order_to_doc
from storefront_profit.parsers.sales_ledger import LocalStorage, SalesLedger, new_local_sale_id
from storefront_profit.utils.dates import to_iso

# ── Örnek ürünler ─────────────────────────────────────────
# (id, ad, marka, fiyat, kategori, alış fiyatı)

PRODUCTS = [
    ("p-1001", "Gaming Laptop 15.6\"", "Lenovo", 32000.0, "Laptop", 27500.0),
    ("p-1002", "Ultrabook 14\"", "Dell", 28500.0, "Laptop", 24000.0),
    ("p-1003", "Mekanik Klavye", "Redragon", 1450.0, "Aksesuar", 980.0),
    ("p-1004", "Kablosuz Mouse", "Logitech", 650.0, "Aksesuar", 420.0),
    ("p-1005", "27\" IPS Monitör", "LG", 7800.0, "Monitör", 6400.0),
    ("p-1006", "Laptop Çantası", "Targus", 900.0, "Aksesuar", None),
    ("p-1007", "USB-C Dock", "Anker", 2100.0, "Aksesuar", 1550.0),
    ("p-1008", "SSD 1TB NVMe", "Samsung", 3300.0, "Depolama", 2700.0),
]

SIZES = {
    "p-1001": [("ram-16", "16GB RAM", 32000.0), ("ram-32", "32GB RAM", 35500.0)],
    "p-1008": [("ssd-1", "1TB", 3300.0), ("ssd-2", "2TB", 5900.0)],
}

ADDONS = {
    "p-1001": [("warranty", "Ek garanti (1 yıl)", 1200.0), ("bag", "Çanta", 600.0)],
    "p-1002": [("warranty", "Ek garanti (1 yıl)", 1000.0)],
    "p-1005": [("arm", "Monitör kolu", 750.0)],
}

FIRST_NAMES = ["Ahmed", "Mona", "Omar", "Sara", "Youssef", "Nour", "Karim", "Laila"]
CITIES = ["Kahire", "İskenderiye", "Giza", "Mansura"]


def random_date(days_back: int = 120) -> datetime:
    start = datetime.now(timezone.utc) - timedelta(days=days_back)
    return start + timedelta(
        days=random.randint(0, days_back),
        hours=random.randint(0, 23),
        minutes=random.randint(0, 59),
    )


def build_catalog_docs() -> list[dict]:
    docs = []
    now = datetime.now(timezone.utc)
    for pid, name, brand, price, category, purchase in PRODUCTS:
        doc = {
            "id": pid,
            "name": name,
            "brand": brand,
            "price": price,
            "category": category,
            "color": random.choice(["Siyah", "Gri", "Beyaz"]),
            "size": "",
            "images": [f"https://example.com/img/{pid}.jpg"],
            "description": f"{brand} {name}",
            "isArchived": False,
            "createdAt": to_iso(now - timedelta(days=200)),
            "sizes": [{"id": s, "label": l, "price": p} for s, l, p in SIZES.get(pid, [])],
            "addons": [{"id": a, "label": l, "price_delta": d} for a, l, d in ADDONS.get(pid, [])],
        }
        if purchase is not None:
            doc["wholesaleInfo"] = {
                "supplierName": random.choice(["Tech Dist.", "Nile Supply"]),
                "supplierPhone": "0100000000",
                "supplierEmail": "supplier@example.com",
                "supplierLocation": "Kahire",
                "purchasePrice": purchase,
                "purchasedQuantity": 100,
                "quantity": 10_000,
            }
        if pid == "p-1004":
            doc.update({
                "specialOffer": True,
                "discountPercentage": 15,
                "offerEndsAt": to_iso(now + timedelta(days=10)),
            })
        docs.append(doc)
    return docs


def _random_cart(catalog) -> Cart:
    cart = Cart()
    for product in random.sample(catalog, k=random.choice([1, 1, 2, 3])):
        size_id = random.choice(product.sizes).size_id if product.sizes else None
        addon_ids = [a.addon_id for a in product.addons if random.random() < 0.3]
        cart.add(product, random.choices([1, 2, 3], weights=[70, 20, 10])[0], size_id, addon_ids)
    return cart


def generate_orders(catalog, count: int = 80) -> list[dict]:
    docs = []
    for i in range(count):
        cart = _random_cart(catalog)
        created = random_date()
        delivery = DeliveryInfo(
            full_name=random.choice(FIRST_NAMES),
            phone_number="01" + str(random.randint(100000000, 999999999)),
            address="Örnek sokak 1",
            city=random.choice(CITIES),
        )
        order = cart.to_order(f"ord-{5000 + i}", f"user-{random.randint(1, 30)}", created, delivery)
        order.status = random.choices(list(OrderStatus), weights=[10, 10, 10, 60, 10])[0]

        doc = order_to_doc(order)
        # uzak depo tarihleri Firestore zaman damgası olarak döner
        doc["createdAt"] = {"seconds": int(created.timestamp()), "nanoseconds": 0}
        docs.append(doc)
    return docs


def generate_sales(catalog, storage: LocalStorage, count: int = 40) -> None:
    ledger = SalesLedger(storage)
    sales = []
    for _ in range(count):
        cart = _random_cart(catalog)
        ts = random_date()
        sales.append(cart.to_sale(new_local_sale_id(ts), random.choice(FIRST_NAMES + [None]), ts))
    sales.sort(key=lambda s: s.timestamp, reverse=True)
    ledger.save(sales)


def main():
    DATA_DIR.mkdir(parents=True, exist_ok=True)

    catalog_docs = build_catalog_docs()
    with open(CATALOG_FILE, "w", encoding="utf-8") as f:
        json.dump(catalog_docs, f, ensure_ascii=False, indent=2)
    print(f"  Katalog: {CATALOG_FILE} ({len(catalog_docs)} urun)")

    catalog = parse_catalog(catalog_docs)

    order_docs = generate_orders(catalog)
    with open(ORDERS_FILE, "w", encoding="utf-8") as f:
        json.dump(order_docs, f, ensure_ascii=False, indent=2)
    print(f"  Siparisler: {ORDERS_FILE} ({len(order_docs)} siparis)")

    storage = LocalStorage(LOCAL_STORAGE_FILE)
    generate_sales(catalog, storage)
    print(f"  Kasa defteri: {LOCAL_STORAGE_FILE}")

    print("\n  Ornek veri hazir. 'python -m storefront_profit analyze' ile analiz edin.")


if __name__ == "__main__":
    main()
