"""
storefront_profit CLI - mağaza kar / ciro analizi.

Kullanım:
    python -m storefront_profit sample              → Örnek veri oluştur
    python -m storefront_profit analyze --days 30   → Kar analizini göster
    python -m storefront_profit revenue             → Ciro özeti
    python -m storefront_profit export --days 30    → JSON dışa aktar
    python -m storefront_profit report --days 30    → Excel rapor oluştur
    python -m storefront_profit price p-1001 --size ram-32 --addon warranty
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _build_service():
    """Dosya tabanlı veri kaynaklarıyla servis kurar."""
    from storefront_profit.config.settings import CATALOG_FILE, LOCAL_STORAGE_FILE, ORDERS_FILE
    from storefront_profit.engine.service import ProfitAnalysisService
    from storefront_profit.parsers.catalog_json import load_catalog
    from storefront_profit.parsers.orders_json import load_orders
    from storefront_profit.parsers.sales_ledger import LocalStorage, SalesLedger

    if not CATALOG_FILE.exists():
        return None

    ledger = SalesLedger(LocalStorage(LOCAL_STORAGE_FILE))

    def orders_provider(window_days):
        if not ORDERS_FILE.exists():
            return []
        return load_orders(ORDERS_FILE, window_days)

    return ProfitAnalysisService(
        orders_provider=orders_provider,
        catalog_provider=lambda: load_catalog(CATALOG_FILE),
        sales_provider=ledger.load,
    )


def _no_data():
    from storefront_profit.config.settings import DATA_DIR

    print("\n  Veri bulunamadi!")
    print("  Once 'python -m storefront_profit sample' ile ornek veri olusturun.")
    print(f"  Veya JSON dosyalarinizi su klasore koyun: {DATA_DIR}")


def cmd_sample(args):
    """Örnek veri oluşturur."""
    from storefront_profit.scripts.generate_sample import main as generate
    generate()


def cmd_analyze(args):
    """Kar analizini hesaplar ve özet gösterir."""
    service = _build_service()
    if service is None:
        _no_data()
        return 1

    result = service.profit_analysis(args.days)
    _print_warnings(result.warnings)
    _print_report(result.report, args.days)
    return 0


def cmd_revenue(args):
    """Tüm zamanların ciro özeti."""
    from storefront_profit.writers.formatting import format_currency

    service = _build_service()
    if service is None:
        _no_data()
        return 1

    report, warnings = service.revenue()
    _print_warnings(warnings)

    stats = report.order_statistics
    print(f"\n{'='*60}")
    print("  CIRO OZETI")
    print(f"{'='*60}\n")
    print(f"  Toplam Ciro:     {format_currency(report.total_revenue)}")
    print(f"  Toplam Siparis:  {stats.total_orders}")
    print(f"  Kasa Satisi:     {stats.total_cashier_sales}")
    print("\n  Duruma Gore:")
    for status, value in report.revenue_by_status.items():
        print(f"    {status:10s} {format_currency(value)}")
    return 0


def cmd_export(args):
    """Raporu JSON olarak dışa aktarır."""
    from storefront_profit.writers.json_export import export_report

    service = _build_service()
    if service is None:
        _no_data()
        return 1

    result = service.profit_analysis(args.days)
    _print_warnings(result.warnings)
    path = export_report(result.report, args.out, args.days, result.generated_at)
    print(f"  JSON rapor: {path}")
    return 0


def cmd_report(args):
    """Excel kar raporu oluşturur."""
    from storefront_profit.config.settings import EXCEL_FILENAME_PATTERN
    from storefront_profit.writers.excel_report import generate_report

    service = _build_service()
    if service is None:
        _no_data()
        return 1

    result = service.profit_analysis(args.days)
    _print_warnings(result.warnings)
    filename = EXCEL_FILENAME_PATTERN.format(date=result.generated_at.strftime("%Y-%m-%d"))
    path = generate_report(result.report, args.out / filename, args.days, now=result.generated_at)
    print(f"  Excel rapor: {path}")
    return 0


def cmd_price(args):
    """Tek bir ürünün seçimlere göre fiyatını gösterir."""
    from storefront_profit.config.settings import CATALOG_FILE
    from storefront_profit.engine.pricing import resolve_line_item, resolve_price
    from storefront_profit.errors import InvalidQuantityError
    from storefront_profit.parsers.catalog_json import load_catalog
    from storefront_profit.writers.formatting import format_currency

    if not CATALOG_FILE.exists():
        _no_data()
        return 1

    product = next((p for p in load_catalog(CATALOG_FILE) if p.product_id == args.product_id), None)
    if product is None:
        print(f"  Urun bulunamadi: {args.product_id}")
        return 1

    try:
        line = resolve_line_item(product, args.qty, args.size, args.addon)
    except InvalidQuantityError as exc:
        print(f"  {exc}")
        return 1
    resolution = resolve_price(product, args.size, args.addon)
    breakdown = resolution.breakdown

    print(f"\n  {product.name}")
    size_label = f" ({breakdown.size.label})" if breakdown.size else ""
    print(f"    Taban fiyat:   {format_currency(breakdown.base_price)}{size_label}")
    for addon in breakdown.addons:
        print(f"    + {addon.label:20s} {format_currency(addon.price_delta)}")
    print(f"    Birim (indirimsiz): {format_currency(resolution.unit_price)}")
    if line.unit_final_price != resolution.unit_price:
        print(f"    Kampanyali birim:   {format_currency(line.unit_final_price)}")
    print(f"    Toplam ({line.quantity} adet): {format_currency(line.total_price)}")
    return 0


def _print_warnings(warnings):
    for w in warnings:
        print(f"  ⚠ {w}")


def _print_report(report, days):
    """Kar raporunu ekrana yazdırır."""
    from storefront_profit.writers.formatting import format_currency, format_percentage

    period = f"Son {days} Gun" if days is not None else "Tum Zamanlar"
    print(f"\n{'='*60}")
    print(f"  KAR ANALIZI ({period})")
    print(f"{'='*60}\n")

    print(f"  Toplam Islem:   {report.total_sales} "
          f"({report.total_orders} siparis, {report.total_cashier_sales} kasa)")
    print(f"  Toplam Ciro:    {format_currency(report.total_revenue)}")
    print(f"  Toplam Maliyet: {format_currency(report.total_cost)}")
    print(f"  Net Kar:        {format_currency(report.total_profit)}")
    print(f"  Kar Marji:      {format_percentage(report.profit_margin)}")

    print(f"\n{'─'*60}")
    print("  KAYNAK KIRILIMI")
    print(f"{'─'*60}")
    profit = report.profit_by_source
    print(f"  Cevrimici: ciro {format_currency(report.revenue_by_source.online)}"
          f"  kar {format_currency(profit.online)}")
    print(f"  Kasa:      ciro {format_currency(report.revenue_by_source.cashier)}"
          f"  kar {format_currency(profit.cashier)}")

    if report.top_profitable_products:
        print("\n  En Karli Urunler:")
        for i, p in enumerate(report.top_profitable_products[:5], 1):
            print(f"    {i}. {p.product_name[:35]:35s} {format_currency(p.total_profit)}"
                  f"  ({format_percentage(p.profit_margin)})")

    if report.top_selling_products:
        print("\n  En Cok Satanlar:")
        for i, p in enumerate(report.top_selling_products[:5], 1):
            print(f"    {i}. {p.product_name[:35]:35s} {p.total_quantity:4d} adet")

    if report.monthly_analysis:
        print("\n  Aylik:")
        for m in report.monthly_analysis:
            print(f"    {m.month}  ciro {format_currency(m.revenue):>18s}"
                  f"  kar {format_currency(m.profit):>18s}  {m.orders} sip. / {m.sales} kasa")

    print("\n  Siparis Durumlari:")
    for status, totals in report.analysis_by_status.items():
        print(f"    {status:10s} {totals.orders:4d}  {format_currency(totals.revenue)}")

    print()


def main(argv=None):
    from storefront_profit.config.settings import DEFAULT_WINDOW_DAYS, REPORTS_DIR, WINDOW_CHOICES

    parser = argparse.ArgumentParser(
        prog="storefront_profit",
        description="Magaza Kar ve Ciro Analizi",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Ayrintili log")
    sub = parser.add_subparsers(dest="command", help="Komutlar")

    def window_arg(p):
        p.add_argument("--days", type=int, default=DEFAULT_WINDOW_DAYS, choices=WINDOW_CHOICES,
                       help="Son N gun")

    sub.add_parser("sample", help="Ornek veri olustur")
    window_arg(sub.add_parser("analyze", help="Kar analizini goster"))
    sub.add_parser("revenue", help="Ciro ozeti")

    p_export = sub.add_parser("export", help="JSON rapor disa aktar")
    window_arg(p_export)
    p_export.add_argument("--out", type=Path, default=REPORTS_DIR, help="Cikti klasoru")

    p_report = sub.add_parser("report", help="Excel rapor olustur")
    window_arg(p_report)
    p_report.add_argument("--out", type=Path, default=REPORTS_DIR, help="Cikti klasoru")

    p_price = sub.add_parser("price", help="Urun fiyatini hesapla")
    p_price.add_argument("product_id")
    p_price.add_argument("--size", default=None, help="Beden kimligi")
    p_price.add_argument("--addon", action="append", default=[], help="Ek kimligi (tekrarlanabilir)")
    p_price.add_argument("--qty", type=int, default=1, help="Adet")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "sample": cmd_sample,
        "analyze": cmd_analyze,
        "revenue": cmd_revenue,
        "export": cmd_export,
        "report": cmd_report,
        "price": cmd_price,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args) or 0


if __name__ == "__main__":
    sys.exit(main())
