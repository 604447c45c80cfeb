"""
Ortak test verileri: katalog, siparişler, kasa satışları ve sabit "şimdi".
"""
from datetime import datetime, timedelta, timezone

import pytest

from storefront_profit.models.order import Order, OrderItem, OrderStatus
from storefront_profit.models.product import Product, ProductAddon, ProductSize, WholesaleInfo
from storefront_profit.models.sale import Sale, SaleItem, SaleProduct, SaleWholesale

NOW = datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)


def make_product(product_id="p1", price=100.0, purchase_price=60.0, **kwargs):
    wholesale = None
    if purchase_price is not None:
        wholesale = WholesaleInfo(purchase_price=purchase_price, quantity=kwargs.pop("stock", 50))
    return Product(
        product_id=product_id,
        name=kwargs.pop("name", f"Ürün {product_id}"),
        price=price,
        wholesale_info=wholesale,
        **kwargs,
    )


def make_order(order_id, status, total, items=None, created_at=NOW - timedelta(days=5)):
    return Order(
        order_id=order_id,
        user_id="u1",
        status=OrderStatus(status),
        created_at=created_at,
        items=items or [],
        total=total,
    )


def make_sale(sale_id, total, items=None, timestamp=NOW - timedelta(days=3)):
    return Sale(sale_id=sale_id, timestamp=timestamp, items=items or [], total_amount=total)


def sale_item(product_id, quantity, unit_price, purchase_price=None, name=None):
    wholesale = SaleWholesale(purchase_price=purchase_price) if purchase_price is not None else None
    return SaleItem(
        product=SaleProduct(
            product_id=product_id,
            name=name or f"Ürün {product_id}",
            price=unit_price,
            wholesale_info=wholesale,
        ),
        quantity=quantity,
        unit_final_price=unit_price,
        total_price=unit_price * quantity,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def laptop():
    """Bedenli ve ekli ürün."""
    return make_product(
        "p-laptop",
        price=100.0,
        purchase_price=80.0,
        name="Laptop",
        sizes=[ProductSize("S", "Small", 100.0), ProductSize("L", "Large", 150.0)],
        addons=[ProductAddon("a1", "Garanti", 20.0), ProductAddon("a2", "Çanta", 5.0)],
    )


@pytest.fixture
def catalog():
    return [
        make_product("p1", price=100.0, purchase_price=60.0, name="Klavye"),
        make_product("p2", price=200.0, purchase_price=None, name="Mouse"),
    ]


@pytest.fixture
def orders():
    """Biri teslim edilmiş (500), biri bekleyen (500)."""
    return [
        make_order("o1", "delivered", 500.0, [
            OrderItem("p1", "Klavye", 5, price=100.0, unit_final_price=100.0),
        ]),
        make_order("o2", "pending", 500.0, [
            OrderItem("p1", "Klavye", 5, price=100.0, unit_final_price=100.0),
        ]),
    ]


@pytest.fixture
def sales():
    return [make_sale("s1", 300.0, [sale_item("p1", 3, 100.0, purchase_price=60.0)])]
