"""
Excel kar analizi raporu yazıcı.
4 sayfa: OZET, URUNLER, AYLIK, DURUM
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.chart import BarChart, LineChart, PieChart, Reference
from openpyxl.chart.label import DataLabelList
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from storefront_profit.config.settings import CURRENCY_SYMBOL, ORDER_STATUSES, REPORT_DATE_FORMAT
from storefront_profit.models.report import ProfitReport
from storefront_profit.utils.dates import utc_now

# ── Stil Sabitleri ────────────────────────────────────────
HEADER_FILL = PatternFill(start_color="2E86AB", end_color="2E86AB", fill_type="solid")
HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
TITLE_FONT = Font(name="Calibri", bold=True, size=14, color="2E86AB")
SUBTITLE_FONT = Font(name="Calibri", bold=True, size=11, color="444444")
NORMAL_FONT = Font(name="Calibri", size=10)
BOLD_FONT = Font(name="Calibri", bold=True, size=10)
MONEY_FORMAT = f'#,##0.00 "{CURRENCY_SYMBOL}"'
PERCENT_FORMAT = '0.0%'
THIN_BORDER = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)
TOTAL_FILL = PatternFill(start_color="E0E0E0", end_color="E0E0E0", fill_type="solid")

# KPI kartları için renkler
KPI_FILLS = {
    "green": PatternFill(start_color="E8F5E9", end_color="E8F5E9", fill_type="solid"),
    "blue": PatternFill(start_color="E3F2FD", end_color="E3F2FD", fill_type="solid"),
    "orange": PatternFill(start_color="FFF3E0", end_color="FFF3E0", fill_type="solid"),
    "red": PatternFill(start_color="FFEBEE", end_color="FFEBEE", fill_type="solid"),
    "purple": PatternFill(start_color="F3E5F5", end_color="F3E5F5", fill_type="solid"),
}
ONLINE_FILL = PatternFill(start_color="E3F2FD", end_color="E3F2FD", fill_type="solid")
CASHIER_FILL = PatternFill(start_color="FFF8E1", end_color="FFF8E1", fill_type="solid")
LOSS_FONT = Font(name="Calibri", bold=True, color="C62828")
GAIN_FONT = Font(name="Calibri", bold=True, color="2E7D32")

STATUS_LABELS = {
    "pending": "Bekliyor",
    "confirmed": "Onaylandı",
    "shipped": "Kargoda",
    "delivered": "Teslim Edildi",
    "cancelled": "İptal",
}


def _apply_header_row(ws, row: int, col_start: int, col_end: int):
    """Başlık satırına stil uygular."""
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = THIN_BORDER


def _apply_data_row(ws, row: int, col_start: int, col_end: int):
    """Veri satırına stil uygular."""
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = NORMAL_FONT
        cell.border = THIN_BORDER
        cell.alignment = Alignment(vertical="center")


def _apply_total_row(ws, row: int, col_start: int, col_end: int):
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = Font(name="Calibri", bold=True)
        cell.border = THIN_BORDER
        cell.fill = TOTAL_FILL


def _write_headers(ws, row: int, headers: list[str]):
    for i, h in enumerate(headers, 1):
        ws.cell(row=row, column=i, value=h)
    _apply_header_row(ws, row, 1, len(headers))


def _auto_width(ws, min_width: int = 10, max_width: int = 40):
    """Sütun genişliklerini otomatik ayarlar."""
    for col_cells in ws.columns:
        max_len = min_width
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            if cell.value:
                cell_len = len(str(cell.value))
                if cell_len > max_len:
                    max_len = min(cell_len + 2, max_width)
        ws.column_dimensions[col_letter].width = max_len


def generate_report(
    report: ProfitReport,
    output_path: Path,
    window_days: Optional[int] = 30,
    store_name: str = "Mağaza",
    now: Optional[datetime] = None,
) -> Path:
    """
    Excel kar analizi raporu oluşturur.

    Returns: oluşturulan dosya yolu
    """
    wb = Workbook()

    _write_summary_sheet(wb, report, window_days, store_name, now or utc_now())
    _write_products_sheet(wb, report)
    _write_monthly_sheet(wb, report)
    _write_status_sheet(wb, report)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    return output_path


# ══════════════════════════════════════════════════════════
#  SAYFA 1: ÖZET
# ══════════════════════════════════════════════════════════
def _write_summary_sheet(wb, report: ProfitReport, window_days, store_name, now):
    ws = wb.active
    ws.title = "OZET"
    ws.sheet_properties.tabColor = "2E86AB"

    period = f"Son {window_days} gün" if window_days is not None else "Tüm zamanlar"

    # Başlık
    ws.merge_cells("A1:D1")
    ws["A1"] = f"{store_name} - Kar Analizi"
    ws["A1"].font = TITLE_FONT
    ws["A1"].alignment = Alignment(horizontal="center")

    ws.merge_cells("A2:D2")
    ws["A2"] = f"Rapor Tarihi: {now.strftime(REPORT_DATE_FORMAT)} | Dönem: {period}"
    ws["A2"].font = SUBTITLE_FONT
    ws["A2"].alignment = Alignment(horizontal="center")

    # ── KPI Kartları ──
    row = 4
    kpis = [
        ("Toplam Ciro", report.total_revenue, "blue", MONEY_FORMAT),
        ("Toplam Maliyet", report.total_cost, "orange", MONEY_FORMAT),
        ("Net Kar", report.total_profit, "green" if report.total_profit >= 0 else "red", MONEY_FORMAT),
        ("Kar Marjı", report.profit_margin / 100, "purple", PERCENT_FORMAT),
        ("Toplam İşlem", report.total_sales, "blue", None),
        ("Çevrimiçi Sipariş", report.total_orders, "green", None),
        ("Kasa Satışı", report.total_cashier_sales, "orange", None),
    ]

    _write_headers(ws, row, ["Metrik", "Değer"])

    for metric_name, value, color, fmt in kpis:
        row += 1
        ws.cell(row=row, column=1, value=metric_name).font = BOLD_FONT
        cell = ws.cell(row=row, column=2, value=value)
        if fmt:
            cell.number_format = fmt
        for col in range(1, 3):
            ws.cell(row=row, column=col).fill = KPI_FILLS[color]
            ws.cell(row=row, column=col).border = THIN_BORDER

    # ── Kaynak Kırılımı ──
    row += 2
    ws.cell(row=row, column=1, value="Kaynak Kırılımı").font = SUBTITLE_FONT

    row += 1
    _write_headers(ws, row, ["Kaynak", "Ciro", "Kar", "Pay %"])
    chart_start_row = row

    profit = report.profit_by_source
    sources = [
        ("Çevrimiçi", report.revenue_by_source.online, profit.online, ONLINE_FILL),
        ("Kasa", report.revenue_by_source.cashier, profit.cashier, CASHIER_FILL),
    ]
    for label, revenue, src_profit, fill in sources:
        row += 1
        share = revenue / report.total_revenue if report.total_revenue else 0
        ws.cell(row=row, column=1, value=label).font = BOLD_FONT
        ws.cell(row=row, column=2, value=revenue).number_format = MONEY_FORMAT
        profit_cell = ws.cell(row=row, column=3, value=src_profit)
        profit_cell.number_format = MONEY_FORMAT
        if src_profit < 0:
            profit_cell.font = LOSS_FONT
        ws.cell(row=row, column=4, value=share).number_format = PERCENT_FORMAT
        for col in range(1, 5):
            ws.cell(row=row, column=col).fill = fill
            ws.cell(row=row, column=col).border = THIN_BORDER

    if report.total_revenue > 0:
        chart = PieChart()
        chart.title = "Ciro Dağılımı"
        chart.width = 14
        chart.height = 10

        data_ref = Reference(ws, min_col=2, min_row=chart_start_row, max_row=row)
        cats_ref = Reference(ws, min_col=1, min_row=chart_start_row + 1, max_row=row)
        chart.add_data(data_ref, titles_from_data=True)
        chart.set_categories(cats_ref)

        chart.dataLabels = DataLabelList()
        chart.dataLabels.showPercent = True
        chart.dataLabels.showVal = False

        ws.add_chart(chart, "F4")

    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 2: ÜRÜNLER
# ══════════════════════════════════════════════════════════
def _write_products_sheet(wb, report: ProfitReport):
    ws = wb.create_sheet("URUNLER")
    ws.sheet_properties.tabColor = "FF9800"

    ws.cell(row=1, column=1, value="En Kârlı Ürünler").font = SUBTITLE_FONT
    headers = ["#", "Ürün", "Adet", "Ciro", "Maliyet", "Kar", "Marj %"]
    _write_headers(ws, 2, headers)

    row = 2
    for rank, p in enumerate(report.top_profitable_products, 1):
        row += 1
        values = [
            rank,
            p.product_name[:50],
            p.total_sold,
            p.total_revenue,
            p.total_cost,
            p.total_profit,
            p.profit_margin / 100,
        ]
        for col, val in enumerate(values, 1):
            ws.cell(row=row, column=col, value=val)
        _apply_data_row(ws, row, 1, len(headers))
        for col in (4, 5, 6):
            ws.cell(row=row, column=col).number_format = MONEY_FORMAT
        ws.cell(row=row, column=7).number_format = PERCENT_FORMAT
        ws.cell(row=row, column=6).font = LOSS_FONT if p.total_profit < 0 else GAIN_FONT

    # ── En Çok Satanlar ──
    row += 2
    ws.cell(row=row, column=1, value="En Çok Satan Ürünler").font = SUBTITLE_FONT
    row += 1
    sellers_header_row = row
    _write_headers(ws, row, ["#", "Ürün", "Adet", "Ciro"])

    for rank, p in enumerate(report.top_selling_products, 1):
        row += 1
        ws.cell(row=row, column=1, value=rank)
        ws.cell(row=row, column=2, value=p.product_name[:50])
        ws.cell(row=row, column=3, value=p.total_quantity)
        ws.cell(row=row, column=4, value=p.total_revenue)
        ws.cell(row=row, column=4).number_format = MONEY_FORMAT
        _apply_data_row(ws, row, 1, 4)

    if report.top_selling_products:
        chart = BarChart()
        chart.type = "col"
        chart.title = "En Çok Satan Ürünler"
        chart.y_axis.title = "Adet"
        chart.width = 25
        chart.height = 14

        data_ref = Reference(ws, min_col=3, max_col=3, min_row=sellers_header_row, max_row=row)
        cats_ref = Reference(ws, min_col=2, min_row=sellers_header_row + 1, max_row=row)
        chart.add_data(data_ref, titles_from_data=True)
        chart.set_categories(cats_ref)
        chart.shape = 4

        ws.add_chart(chart, "I2")

    ws.freeze_panes = "A3"
    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 3: AYLIK
# ══════════════════════════════════════════════════════════
def _write_monthly_sheet(wb, report: ProfitReport):
    ws = wb.create_sheet("AYLIK")
    ws.sheet_properties.tabColor = "4CAF50"

    headers = ["Ay", "Ciro", "Maliyet", "Kar", "Sipariş", "Kasa Satışı"]
    _write_headers(ws, 1, headers)

    row = 1
    for m in report.monthly_analysis:
        row += 1
        values = [m.month, m.revenue, m.cost, m.profit, m.orders, m.sales]
        for col, val in enumerate(values, 1):
            ws.cell(row=row, column=col, value=val)
        _apply_data_row(ws, row, 1, len(headers))
        for col in (2, 3, 4):
            ws.cell(row=row, column=col).number_format = MONEY_FORMAT

    # Toplam satırı
    total_row = row + 1
    ws.cell(row=total_row, column=1, value="TOPLAM")
    ws.cell(row=total_row, column=2, value=sum(m.revenue for m in report.monthly_analysis))
    ws.cell(row=total_row, column=3, value=sum(m.cost for m in report.monthly_analysis))
    ws.cell(row=total_row, column=4, value=sum(m.profit for m in report.monthly_analysis))
    ws.cell(row=total_row, column=5, value=sum(m.orders for m in report.monthly_analysis))
    ws.cell(row=total_row, column=6, value=sum(m.sales for m in report.monthly_analysis))
    _apply_total_row(ws, total_row, 1, len(headers))
    for col in (2, 3, 4):
        ws.cell(row=total_row, column=col).number_format = MONEY_FORMAT

    if len(report.monthly_analysis) > 1:
        chart = LineChart()
        chart.title = "Aylık Ciro ve Kar"
        chart.style = 10
        chart.y_axis.title = f"Tutar ({CURRENCY_SYMBOL})"
        chart.x_axis.title = "Ay"
        chart.width = 25
        chart.height = 12

        data_ref = Reference(ws, min_col=2, max_col=4, min_row=1, max_row=row)
        cats_ref = Reference(ws, min_col=1, min_row=2, max_row=row)
        chart.add_data(data_ref, titles_from_data=True)
        chart.set_categories(cats_ref)

        ws.add_chart(chart, "H2")

    ws.freeze_panes = "A2"
    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 4: DURUM
# ══════════════════════════════════════════════════════════
def _write_status_sheet(wb, report: ProfitReport):
    ws = wb.create_sheet("DURUM")
    ws.sheet_properties.tabColor = "9C27B0"

    headers = ["Durum", "Sipariş Sayısı", "Toplam Tutar", "Pay %"]
    _write_headers(ws, 1, headers)

    table = report.analysis_by_status
    total_orders = sum(t.orders for t in table.values())
    total_value = sum(t.revenue for t in table.values())

    row = 1
    for status in ORDER_STATUSES:
        totals = table[status]
        row += 1
        share = totals.orders / total_orders if total_orders > 0 else 0
        ws.cell(row=row, column=1, value=STATUS_LABELS.get(status, status))
        ws.cell(row=row, column=2, value=totals.orders)
        ws.cell(row=row, column=3, value=totals.revenue).number_format = MONEY_FORMAT
        ws.cell(row=row, column=4, value=share).number_format = PERCENT_FORMAT
        _apply_data_row(ws, row, 1, len(headers))

    row += 1
    ws.cell(row=row, column=1, value="TOPLAM")
    ws.cell(row=row, column=2, value=total_orders)
    ws.cell(row=row, column=3, value=total_value).number_format = MONEY_FORMAT
    ws.cell(row=row, column=4, value=1.0 if total_orders else 0).number_format = PERCENT_FORMAT
    _apply_total_row(ws, row, 1, len(headers))

    _auto_width(ws)
