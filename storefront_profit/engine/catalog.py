"""
Katalog filtreleme, sıralama ve sayfalama.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from storefront_profit.config.settings import DEFAULT_PAGE_SIZE, PRODUCT_SORT_OPTIONS
from storefront_profit.models.product import Product


@dataclass
class ProductFilter:
    search: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    supplier: Optional[str] = None
    sort_by: Optional[str] = None
    include_archived: bool = False

    def __post_init__(self):
        if self.sort_by is not None and self.sort_by not in PRODUCT_SORT_OPTIONS:
            raise ValueError(f"Geçersiz sıralama: {self.sort_by}")


@dataclass
class Page:
    items: list[Product]
    page: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.page_size))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _matches_search(product: Product, term: str) -> bool:
    term = term.lower()
    return any(
        term in (value or "").lower()
        for value in (product.name, product.brand, product.description)
    )


def _matches(product: Product, f: ProductFilter) -> bool:
    if product.is_archived and not f.include_archived:
        return False
    if f.search and not _matches_search(product, f.search.strip()):
        return False
    if f.category and product.category != f.category:
        return False
    if f.subcategory and product.subcategory != f.subcategory:
        return False
    if f.brand and product.brand != f.brand:
        return False
    if f.color and product.color != f.color:
        return False
    if f.size:
        labels = {s.label for s in product.sizes}
        if product.size != f.size and f.size not in labels:
            return False
    if f.min_price is not None and product.price < f.min_price:
        return False
    if f.max_price is not None and product.price > f.max_price:
        return False
    if f.supplier:
        supplier = product.wholesale_info.supplier_name if product.wholesale_info else ""
        if supplier != f.supplier:
            return False
    return True


def filter_products(products: Iterable[Product], f: Optional[ProductFilter] = None) -> list[Product]:
    """Filtreye uyan ürünler, istenen sırada."""
    f = f or ProductFilter()
    result = [p for p in products if _matches(p, f)]

    if f.sort_by == "price-asc":
        result.sort(key=lambda p: p.price)
    elif f.sort_by == "price-desc":
        result.sort(key=lambda p: p.price, reverse=True)
    elif f.sort_by == "name-asc":
        result.sort(key=lambda p: p.name.lower())
    elif f.sort_by == "name-desc":
        result.sort(key=lambda p: p.name.lower(), reverse=True)

    return result


def paginate(products: list[Product], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """1 tabanlı sayfa."""
    if page_size <= 0:
        raise ValueError("page_size sıfırdan büyük olmalı")
    page = max(1, page)
    start = (page - 1) * page_size
    return Page(
        items=products[start:start + page_size],
        page=page,
        page_size=page_size,
        total_items=len(products),
    )


def facet_values(products: Iterable[Product]) -> dict[str, list[str]]:
    """Filtre seçenekleri için benzersiz değerler."""
    categories, brands, colors, suppliers = set(), set(), set(), set()
    for p in products:
        if p.is_archived:
            continue
        if p.category:
            categories.add(p.category)
        if p.brand:
            brands.add(p.brand)
        if p.color:
            colors.add(p.color)
        if p.wholesale_info and p.wholesale_info.supplier_name:
            suppliers.add(p.wholesale_info.supplier_name)
    return {
        "categories": sorted(categories),
        "brands": sorted(brands),
        "colors": sorted(colors),
        "suppliers": sorted(suppliers),
    }
