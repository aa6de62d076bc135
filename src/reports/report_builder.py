# src/reports/report_builder.py
"""
Sinh các báo cáo dạng bảng từ snapshot sản phẩm / giao dịch.

Mỗi báo cáo có một schema cột khai báo sẵn; mỗi dòng là tuple các cặp
(tên cột, giá trị) theo đúng thứ tự schema.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from src.inventory.product import Product
from src.sales.transaction import StockTransaction
from src.utils import settings
from src.utils.time_zone import to_local

ReportRow = Tuple[Tuple[str, Any], ...]

NOT_AVAILABLE = "N/A"
TOTAL_LABEL = "TOTAL"
_CENTS = Decimal("0.01")

INVENTORY_COLUMNS: Tuple[str, ...] = (
    "SKU", "Name", "Category", "Quantity", "Unit", "Unit Cost", "Selling Price",
    "Total Value", "Reorder Level", "Location", "Status",
)
LOW_STOCK_COLUMNS: Tuple[str, ...] = (
    "SKU", "Name", "Category", "Current Quantity", "Reorder Level",
    "Units Below Reorder", "Location", "Supplier",
)
TRANSACTION_COLUMNS: Tuple[str, ...] = ("Date", "Product", "Type", "Quantity", "User", "Reason")
VALUATION_COLUMNS: Tuple[str, ...] = (
    "SKU", "Name", "Category", "Quantity", "Unit Cost", "Stock Value",
    "Potential Revenue", "Potential Profit",
)


# ==============================
# 🔧 Helper Functions
# ==============================

def format_money(value: Any) -> str:
    """Làm tròn half-up về 2 chữ số thập phân: 50 -> "50.00"."""
    q = Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if q == 0:
        q = q.copy_abs()
    return str(q)


def format_number(value: Any) -> Any:
    """Số gọn không có số 0 thừa: Decimal("10.50") -> "10.5", Decimal("10") -> "10"."""
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    return value


def make_row(columns: Sequence[str], values: Sequence[Any]) -> ReportRow:
    if len(columns) != len(values):
        raise ValueError(f"Row has {len(values)} values for {len(columns)} columns")
    return tuple(zip(columns, values))


def is_low_stock(product: Product) -> bool:
    return product.quantity <= product.reorder_level


# ==============================
# 📊 Reports
# ==============================

def build_inventory_report(products: Iterable[Product]) -> List[ReportRow]:
    """Toàn bộ sản phẩm, không lọc."""
    return [
        make_row(INVENTORY_COLUMNS, (
            p.sku,
            p.name,
            p.category_name,
            p.quantity,
            p.unit,
            format_number(p.unit_cost),
            format_number(p.selling_price),
            format_money(p.stock_value),
            p.reorder_level,
            p.location,
            p.status,
        ))
        for p in products
    ]


def build_low_stock_report(products: Iterable[Product]) -> List[ReportRow]:
    """Sản phẩm Active có quantity <= reorder_level."""
    return [
        make_row(LOW_STOCK_COLUMNS, (
            p.sku,
            p.name,
            p.category_name,
            p.quantity,
            p.reorder_level,
            p.reorder_level - p.quantity,
            p.location,
            p.supplier or NOT_AVAILABLE,
        ))
        for p in products
        if is_low_stock(p) and p.is_active
    ]


def build_transaction_report(
    transactions: Iterable[StockTransaction],
    date_format: Optional[str] = None,
) -> List[ReportRow]:
    fmt = date_format or settings.TRANSACTION_DATE_FORMAT
    return [
        make_row(TRANSACTION_COLUMNS, (
            to_local(tx.transaction_date).strftime(fmt),
            tx.product_name,
            tx.transaction_type,
            tx.quantity,
            tx.user_name,
            tx.reason or NOT_AVAILABLE,
        ))
        for tx in transactions
    ]


def build_valuation_report(products: Iterable[Product]) -> List[ReportRow]:
    """Mỗi sản phẩm một dòng + dòng TOTAL ở cuối (luôn có, kể cả khi rỗng)."""
    rows: List[ReportRow] = []
    total_value = Decimal("0")
    total_revenue = Decimal("0")

    for p in products:
        rows.append(make_row(VALUATION_COLUMNS, (
            p.sku,
            p.name,
            p.category_name,
            p.quantity,
            format_money(p.unit_cost),
            format_money(p.stock_value),
            format_money(p.potential_revenue),
            format_money(p.potential_profit),
        )))
        total_value += p.stock_value
        total_revenue += p.potential_revenue

    # Quantity = 0 on the TOTAL row; the column is not summed
    rows.append(make_row(VALUATION_COLUMNS, (
        TOTAL_LABEL,
        "",
        "",
        0,
        "",
        format_money(total_value),
        format_money(total_revenue),
        format_money(total_revenue - total_value),
    )))
    return rows


# ==============================
# 🗂️ Registry
# ==============================

@dataclass(frozen=True)
class ReportDefinition:
    report_id: str
    title: str
    description: str
    source: str  # "products" | "transactions"
    builder: Callable[..., List[ReportRow]]
    columns: Tuple[str, ...]


REPORTS: Dict[str, ReportDefinition] = {
    d.report_id: d for d in (
        ReportDefinition(
            "inventory_report",
            "Complete Inventory Report",
            "Full list of all products with stock levels and valuations",
            "products",
            build_inventory_report,
            INVENTORY_COLUMNS,
        ),
        ReportDefinition(
            "low_stock_report",
            "Low Stock Alert Report",
            "Products that need reordering based on reorder levels",
            "products",
            build_low_stock_report,
            LOW_STOCK_COLUMNS,
        ),
        ReportDefinition(
            "transaction_report",
            "Transaction History Report",
            "Complete log of all stock movements and adjustments",
            "transactions",
            build_transaction_report,
            TRANSACTION_COLUMNS,
        ),
        ReportDefinition(
            "valuation_report",
            "Inventory Valuation Report",
            "Stock value, potential revenue, and profit analysis",
            "products",
            build_valuation_report,
            VALUATION_COLUMNS,
        ),
    )
}


def build_report(report_id: str, snapshot: Any) -> List[ReportRow]:
    """
    Sinh báo cáo theo id từ snapshot (có .products và .transactions).

    Raises:
        KeyError: report_id không có trong REPORTS.
    """
    definition = REPORTS[report_id]
    records = snapshot.products if definition.source == "products" else snapshot.transactions
    return definition.builder(records)
