"""
Proje ayarları ve sabit değerler.
"""
import os
from pathlib import Path

# ── Dizinler ──────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("STOREFRONT_DATA_DIR", PROJECT_ROOT / "data"))
CATALOG_FILE = DATA_DIR / "products.json"
ORDERS_FILE = DATA_DIR / "orders.json"
LOCAL_STORAGE_FILE = DATA_DIR / "local_storage.json"
REPORTS_DIR = PROJECT_ROOT / "reports"

# ── Yerel Depolama ────────────────────────────────────────
SALES_LEDGER_KEY = "cashier-sales"     # kasa satışlarının tutulduğu anahtar
LOCAL_SALE_ID_PREFIX = "local_"

# ── Sipariş Durumları ─────────────────────────────────────
ORDER_STATUSES = ("pending", "confirmed", "shipped", "delivered", "cancelled")
REVENUE_STATUS = "delivered"           # sadece teslim edilenler ciroya girer

# ── Analiz Ayarları ───────────────────────────────────────
DEFAULT_WINDOW_DAYS = 30
WINDOW_CHOICES = (7, 30, 90, 365)
TOP_PRODUCTS_LIMIT = 10
UNKNOWN_PRODUCT_NAME = "Bilinmeyen ürün"

# ── Para Birimi ───────────────────────────────────────────
CURRENCY_SYMBOL = "ج.م"

# ── Rapor Ayarları ────────────────────────────────────────
REPORT_DATE_FORMAT = "%d.%m.%Y"
EXPORT_FILENAME_PATTERN = "analytics-{date}.json"
EXCEL_FILENAME_PATTERN = "kar-analizi-{date}.xlsx"
MONTH_KEY_FORMAT = "%Y-%m"

# ── Katalog ───────────────────────────────────────────────
PRODUCT_SORT_OPTIONS = ("price-asc", "price-desc", "name-asc", "name-desc")
DEFAULT_PAGE_SIZE = 12
