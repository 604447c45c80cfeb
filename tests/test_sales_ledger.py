import json
from datetime import datetime, timezone

import pytest

from conftest import make_sale, sale_item
from storefront_profit.errors import LedgerError, RecordFormatError
from storefront_profit.parsers.sales_ledger import (
    LocalStorage,
    SalesLedger,
    merge_sales,
    new_local_sale_id,
    parse_ledger,
    parse_sale,
)

SALE_DOC = {
    "id": "local_1710500000000_abc123def",
    "timestamp": "2024-03-15T10:00:00.000Z",
    "totalAmount": 250,
    "customerName": "",
    "items": [
        {
            "product": {
                "id": "p1",
                "name": "Klavye",
                "price": 100,
                "images": [],
                "wholesaleInfo": {"purchasePrice": 60, "quantity": 10},
            },
            "quantity": 2,
            "unitFinalPrice": 125,
            "totalPrice": 250,
            "selectedSize": {"id": "L", "label": "Large", "price": 125},
            "selectedAddons": [],
        }
    ],
}


@pytest.fixture
def ledger(tmp_path):
    return SalesLedger(LocalStorage(tmp_path / "local_storage.json"))


def test_parse_sale_document():
    sale = parse_sale(SALE_DOC)

    assert sale.sale_id == SALE_DOC["id"]
    assert sale.is_local
    assert sale.timestamp == datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)
    assert sale.customer_name is None
    [item] = sale.items
    assert item.line_total == 250.0
    assert item.unit_cost == 60.0
    assert item.selected_size.size_id == "L"


def test_sale_without_timestamp_is_rejected():
    doc = dict(SALE_DOC, timestamp=None)
    with pytest.raises(RecordFormatError):
        parse_sale(doc)


@pytest.mark.parametrize("raw", [None, ""])
def test_empty_ledger(raw):
    assert parse_ledger(raw) == []


@pytest.mark.parametrize("raw", ["{not json", '{"id": 1}', json.dumps([{"id": "x"}])])
def test_corrupt_ledger_raises(raw):
    with pytest.raises(LedgerError):
        parse_ledger(raw)


def test_corrupt_storage_file_raises(tmp_path):
    path = tmp_path / "local_storage.json"
    path.write_text("garbage", encoding="utf-8")
    with pytest.raises(LedgerError) as exc_info:
        SalesLedger(LocalStorage(path)).load()
    assert exc_info.value.path == path


def test_missing_file_is_empty_ledger(ledger):
    assert ledger.load() == []


def test_append_puts_newest_first(ledger):
    first = make_sale("local_1", 100.0, [sale_item("p1", 1, 100.0, purchase_price=60.0)])
    second = make_sale("local_2", 50.0, [sale_item("p2", 1, 50.0)])

    ledger.append(first)
    sales = ledger.append(second)

    assert [s.sale_id for s in sales] == ["local_2", "local_1"]
    loaded = ledger.load()
    assert [s.sale_id for s in loaded] == ["local_2", "local_1"]
    assert loaded[1].items[0].unit_cost == 60.0
    assert loaded[0].items[0].unit_cost is None
    assert loaded[1].timestamp == first.timestamp


def test_ledger_stored_as_string_under_key(ledger):
    ledger.append(make_sale("local_1", 10.0))
    data = json.loads(ledger.storage.path.read_text(encoding="utf-8"))
    assert isinstance(data["cashier-sales"], str)


def test_clear_keeps_other_keys(ledger):
    ledger.storage.set_item("theme", "dark")
    ledger.append(make_sale("local_1", 10.0))

    ledger.clear()

    assert ledger.load() == []
    assert ledger.storage.get_item("theme") == "dark"


def test_ledger_written_as_raw_list_is_accepted(tmp_path):
    path = tmp_path / "local_storage.json"
    path.write_text(json.dumps({"cashier-sales": [SALE_DOC]}), encoding="utf-8")
    [sale] = SalesLedger(LocalStorage(path)).load()
    assert sale.total_amount == 250.0


def test_new_local_sale_id():
    now = datetime(2024, 3, 15, tzinfo=timezone.utc)
    sale_id = new_local_sale_id(now)
    assert sale_id.startswith(f"local_{int(now.timestamp() * 1000)}_")
    assert sale_id != new_local_sale_id(now)


def test_merge_skips_local_duplicates():
    remote = [make_sale("r1", 100.0), make_sale("r2", 40.0)]
    local = [
        make_sale("r1", 100.0),
        make_sale("local_x", 40.0, timestamp=remote[1].timestamp),
        make_sale("local_y", 15.0),
    ]

    merged = merge_sales(remote, local)
    assert [s.sale_id for s in merged] == ["r1", "r2", "local_y"]


# ── Bozuk kayıt şekilleri ─────────────────────────────────

def _with_item(**changes):
    item = dict(SALE_DOC["items"][0], **changes)
    return dict(SALE_DOC, items=[item])


@pytest.mark.parametrize("doc", [
    dict(SALE_DOC, items=5),
    dict(SALE_DOC, items=["x"]),
    _with_item(selectedAddons=[5]),
    _with_item(selectedAddons="warranty"),
    dict(SALE_DOC, timestamp={"seconds": 1e20}),
    dict(SALE_DOC, timestamp={"seconds": 1, "nanoseconds": "x"}),
    _with_item(product={"id": "p1", "images": 5}),
])
def test_malformed_record_shapes_raise_ledger_error(doc):
    with pytest.raises(LedgerError):
        parse_ledger(json.dumps([doc]))


@pytest.mark.parametrize("doc", [
    dict(SALE_DOC, totalAmount="abc"),
    dict(SALE_DOC, totalAmount=True),
    _with_item(quantity="many"),
    _with_item(quantity=1.5),
    _with_item(unitFinalPrice="free"),
    _with_item(totalPrice="NaN"),
])
def test_unreadable_numbers_raise_ledger_error(doc):
    with pytest.raises(LedgerError):
        parse_ledger(json.dumps([doc]))


def test_missing_numbers_keep_defaults():
    item = {k: v for k, v in SALE_DOC["items"][0].items() if k not in ("quantity", "unitFinalPrice")}
    doc = {k: v for k, v in SALE_DOC.items() if k != "totalAmount"}
    doc["items"] = [item]

    [sale] = parse_ledger(json.dumps([doc]))
    assert sale.total_amount == 0.0
    assert sale.items[0].quantity == 1
    assert sale.items[0].unit_final_price is None


def test_numeric_strings_are_accepted():
    [sale] = parse_ledger(json.dumps([dict(SALE_DOC, totalAmount="1,250.50")]))
    assert sale.total_amount == 1250.5


def test_invalid_utf8_storage_raises(tmp_path):
    path = tmp_path / "local_storage.json"
    path.write_bytes(b'{"cashier-sales": "\xff\xfe"}')
    with pytest.raises(LedgerError):
        SalesLedger(LocalStorage(path)).load()
