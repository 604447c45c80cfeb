from datetime import timedelta

import pytest

from conftest import make_product
from storefront_profit.engine.pricing import (
    apply_special_offer,
    discounted_price,
    resolve_line_item,
    resolve_price,
)
from storefront_profit.errors import InvalidQuantityError


def test_size_replaces_base_and_addons_add(laptop):
    result = resolve_price(laptop, "L", ["a1"])
    assert result.unit_price == 170.0
    assert result.breakdown.base_price == 150.0
    assert result.breakdown.size.label == "Large"
    assert [a.addon_id for a in result.breakdown.addons] == ["a1"]


def test_no_selection_uses_base_price(laptop):
    result = resolve_price(laptop)
    assert result.unit_price == 100.0
    assert result.breakdown.size is None
    assert result.breakdown.addons == []


def test_unknown_size_and_addon_are_ignored(laptop):
    result = resolve_price(laptop, "XXL", ["zz"])
    assert result.unit_price == 100.0


def test_addon_order_follows_catalog(laptop):
    result = resolve_price(laptop, None, ["a2", "a1"])
    assert [a.addon_id for a in result.breakdown.addons] == ["a1", "a2"]
    assert result.breakdown.addons_total == 25.0


def test_percentage_offer_applies_to_resolved_price(laptop, now):
    laptop.special_offer = True
    laptop.discount_percentage = 10
    laptop.offer_ends_at = now + timedelta(days=1)

    line = resolve_line_item(laptop, 2, "L", ["a1"], now=now)
    assert line.unit_final_price == pytest.approx(153.0)
    assert line.total_price == pytest.approx(306.0)


def test_discount_price_wins_over_percentage(now):
    product = make_product(
        price=100.0,
        special_offer=True,
        discount_percentage=50,
        discount_price=80.0,
        offer_ends_at=now + timedelta(hours=1),
    )
    assert apply_special_offer(product, 100.0, now) == 80.0
    assert discounted_price(product, now) == 80.0


def test_expired_offer_keeps_price(now):
    product = make_product(
        price=100.0,
        special_offer=True,
        discount_percentage=25,
        offer_ends_at=now - timedelta(minutes=1),
    )
    assert apply_special_offer(product, 100.0, now) == 100.0


def test_offer_without_end_date_is_inactive(now):
    product = make_product(price=100.0, special_offer=True, discount_percentage=25)
    assert not product.offer_active(now)
    assert discounted_price(product, now) == 100.0


@pytest.mark.parametrize("quantity", [0, -1])
def test_line_item_rejects_non_positive_quantity(laptop, quantity):
    with pytest.raises(InvalidQuantityError):
        resolve_line_item(laptop, quantity)


def test_selection_key_ignores_addon_order(laptop):
    first = resolve_line_item(laptop, 1, "S", ["a2", "a1"])
    second = resolve_line_item(laptop, 1, "S", ["a1", "a2"])
    assert first.selection_key == second.selection_key == ("p-laptop", "S", ("a1", "a2"))
