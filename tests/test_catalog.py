import pytest

from conftest import make_product
from storefront_profit.engine.catalog import ProductFilter, facet_values, filter_products, paginate
from storefront_profit.models.product import ProductSize


@pytest.fixture
def products():
    items = [
        make_product("p1", price=300.0, name="Laptop Pro", brand="Dell", category="Laptop", color="Gri"),
        make_product("p2", price=50.0, name="Mouse", brand="Logitech", category="Aksesuar", color="Siyah"),
        make_product("p3", price=120.0, name="Klavye", brand="Logitech", category="Aksesuar",
                     sizes=[ProductSize("tr", "TR Q", 120.0)]),
        make_product("p4", price=80.0, name="Eski Laptop", brand="Dell", category="Laptop", is_archived=True),
    ]
    items[0].wholesale_info.supplier_name = "Nile Supply"
    return items


def test_archived_hidden_by_default(products):
    assert [p.product_id for p in filter_products(products)] == ["p1", "p2", "p3"]
    everything = filter_products(products, ProductFilter(include_archived=True))
    assert len(everything) == 4


def test_search_and_facets(products):
    assert [p.product_id for p in filter_products(products, ProductFilter(search=" laptop "))] == ["p1"]
    assert [p.product_id for p in filter_products(products, ProductFilter(brand="Logitech", max_price=100))] == ["p2"]
    assert [p.product_id for p in filter_products(products, ProductFilter(size="TR Q"))] == ["p3"]
    assert [p.product_id for p in filter_products(products, ProductFilter(supplier="Nile Supply"))] == ["p1"]


def test_sorting(products):
    by_price = filter_products(products, ProductFilter(sort_by="price-asc"))
    assert [p.price for p in by_price] == [50.0, 120.0, 300.0]
    by_name = filter_products(products, ProductFilter(sort_by="name-desc"))
    assert [p.name for p in by_name] == ["Mouse", "Laptop Pro", "Klavye"]


def test_invalid_sort_rejected():
    with pytest.raises(ValueError):
        ProductFilter(sort_by="popular")


def test_paginate(products):
    page = paginate(products, page=2, page_size=3)
    assert [p.product_id for p in page.items] == ["p4"]
    assert page.total_pages == 2
    assert not page.has_next
    assert paginate([], page=0).total_pages == 1
    with pytest.raises(ValueError):
        paginate(products, page_size=0)


def test_facet_values(products):
    facets = facet_values(products)
    assert facets["brands"] == ["Dell", "Logitech"]
    assert facets["categories"] == ["Aksesuar", "Laptop"]
    assert facets["suppliers"] == ["Nile Supply"]
