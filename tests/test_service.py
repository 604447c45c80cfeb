import json

import pytest

from storefront_profit.engine.service import ProfitAnalysisService
from storefront_profit.errors import LedgerError
from storefront_profit.parsers.sales_ledger import LocalStorage, SalesLedger


def _broken_ledger():
    raise LedgerError("Kasa defteri bozuk JSON")


def test_profit_analysis_passes_window_to_orders(orders, sales, catalog, now):
    seen = []

    def orders_provider(window_days):
        seen.append(window_days)
        return orders

    service = ProfitAnalysisService(orders_provider, lambda: catalog, lambda: sales)
    result = service.profit_analysis(7, now)

    assert seen == [7]
    assert result.complete
    assert result.window_days == 7
    assert result.generated_at == now
    assert result.report.total_revenue == 800.0


def test_corrupt_ledger_zeroes_cashier_and_warns(orders, catalog, now):
    service = ProfitAnalysisService(lambda days: orders, lambda: catalog, _broken_ledger)
    result = service.profit_analysis(30, now)

    assert not result.complete
    assert len(result.warnings) == 1
    assert result.report.revenue_by_source.cashier == 0.0
    assert result.report.total_cashier_sales == 0
    assert result.report.revenue_by_source.online == 500.0


def test_sales_source_is_optional(orders, catalog, now):
    service = ProfitAnalysisService(lambda days: orders, lambda: catalog)
    result = service.profit_analysis(30, now)
    assert result.report.total_cashier_sales == 0


def test_revenue_summary_uses_all_time(orders, sales):
    seen = []

    def orders_provider(window_days):
        seen.append(window_days)
        return orders

    service = ProfitAnalysisService(orders_provider, lambda: [], lambda: sales)
    report, warnings = service.revenue()

    assert seen == [None]
    assert warnings == []
    assert report.total_revenue == 800.0


def test_revenue_summary_with_corrupt_ledger(orders):
    service = ProfitAnalysisService(lambda days: orders, lambda: [], _broken_ledger)
    report, warnings = service.revenue()
    assert report.total_revenue == 500.0
    assert warnings


def _ledger_file(tmp_path, content: bytes):
    path = tmp_path / "local_storage.json"
    path.write_bytes(content)
    return SalesLedger(LocalStorage(path))


def _sale_doc(**changes):
    doc = {
        "id": "local_1",
        "timestamp": "2024-03-18T10:00:00.000Z",
        "totalAmount": 300,
        "items": [{"product": {"id": "p1", "name": "Klavye", "price": 100}, "quantity": 3}],
    }
    doc.update(changes)
    return doc


@pytest.mark.parametrize("content", [
    json.dumps({"cashier-sales": json.dumps([_sale_doc(items=5)])}).encode(),
    json.dumps({"cashier-sales": json.dumps([_sale_doc(items=[
        {"product": {"id": "p1"}, "quantity": 1, "selectedAddons": [5]},
    ])])}).encode(),
    json.dumps({"cashier-sales": json.dumps([_sale_doc(timestamp={"seconds": 1e20})])}).encode(),
    json.dumps({"cashier-sales": json.dumps([_sale_doc(totalAmount="abc")])}).encode(),
    b'{"cashier-sales": "\xff"}',
])
def test_malformed_ledger_file_never_breaks_report(tmp_path, orders, catalog, now, content):
    ledger = _ledger_file(tmp_path, content)
    service = ProfitAnalysisService(lambda days: orders, lambda: catalog, ledger.load)

    result = service.profit_analysis(None, now)
    assert len(result.warnings) == 1
    assert result.report.revenue_by_source.cashier == 0.0
    assert result.report.total_cashier_sales == 0
    assert result.report.revenue_by_source.online == 500.0

    report, warnings = service.revenue()
    assert warnings
    assert report.revenue_by_status["cashier"] == 0.0


def test_readable_ledger_file_counts(tmp_path, orders, catalog, now):
    content = json.dumps({"cashier-sales": json.dumps([_sale_doc()])}).encode()
    ledger = _ledger_file(tmp_path, content)
    service = ProfitAnalysisService(lambda days: orders, lambda: catalog, ledger.load)

    result = service.profit_analysis(None, now)
    assert result.complete
    assert result.report.revenue_by_source.cashier == 300.0
