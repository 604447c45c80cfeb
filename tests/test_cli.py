import json
from datetime import timedelta

import pytest

from storefront_profit import __main__ as cli
from storefront_profit.config import settings
from storefront_profit.utils.dates import to_iso, utc_now


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    created = to_iso(utc_now() - timedelta(days=3))
    products = [
        {
            "id": "p1",
            "name": "Klavye",
            "price": 100,
            "sizes": [{"id": "L", "label": "Large", "price": 150}],
            "addons": [{"id": "a1", "label": "Garanti", "price_delta": 20}],
            "wholesaleInfo": {"purchasePrice": 60, "quantity": 10},
        }
    ]
    orders = [
        {"id": "o1", "status": "delivered", "total": 200, "createdAt": created,
         "items": [{"productId": "p1", "productName": "Klavye", "quantity": 2, "price": 100}]},
        {"id": "o2", "status": "pending", "total": 100, "createdAt": created, "items": []},
    ]
    (tmp_path / "products.json").write_text(json.dumps(products), encoding="utf-8")
    (tmp_path / "orders.json").write_text(json.dumps(orders), encoding="utf-8")

    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    monkeypatch.setattr(settings, "CATALOG_FILE", tmp_path / "products.json")
    monkeypatch.setattr(settings, "ORDERS_FILE", tmp_path / "orders.json")
    monkeypatch.setattr(settings, "LOCAL_STORAGE_FILE", tmp_path / "local_storage.json")
    return tmp_path


def test_analyze(data_dir, capsys):
    assert cli.main(["analyze", "--days", "30"]) == 0
    out = capsys.readouterr().out
    assert "KAR ANALIZI (Son 30 Gun)" in out
    assert "Klavye" in out


def test_corrupt_ledger_is_reported(data_dir, capsys):
    (data_dir / "local_storage.json").write_text("{broken", encoding="utf-8")
    assert cli.main(["analyze"]) == 0
    assert "Kasa satışları okunamadı" in capsys.readouterr().out


def test_export(data_dir, capsys):
    assert cli.main(["export", "--out", str(data_dir / "reports")]) == 0
    [path] = (data_dir / "reports").glob("analytics-*.json")
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["totalRevenue"] == 200
    assert document["timeRange"] == "30 days"


def test_report(data_dir):
    assert cli.main(["report", "--days", "7", "--out", str(data_dir / "reports")]) == 0
    assert list((data_dir / "reports").glob("kar-analizi-*.xlsx"))


def test_price(data_dir, capsys):
    assert cli.main(["price", "p1", "--size", "L", "--addon", "a1", "--qty", "2"]) == 0
    out = capsys.readouterr().out
    assert "170.00" in out
    assert "340.00" in out


def test_unknown_product(data_dir):
    assert cli.main(["price", "nope"]) == 1


def test_missing_catalog(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(settings, "CATALOG_FILE", tmp_path / "missing.json")
    assert cli.main(["revenue"]) == 1
    assert "Veri bulunamadi" in capsys.readouterr().out


def test_revenue(data_dir, capsys):
    assert cli.main(["revenue"]) == 0
    out = capsys.readouterr().out
    assert "CIRO OZETI" in out
    assert "pending" in out


@pytest.mark.parametrize("qty", ["0", "-2"])
def test_price_rejects_non_positive_quantity(data_dir, capsys, qty):
    assert cli.main(["price", "p1", "--qty", qty]) == 1
    assert "Adet sıfırdan büyük olmalı" in capsys.readouterr().out
