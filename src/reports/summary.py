# src/reports/summary.py
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional, Sequence

from src.inventory.product import Product
from src.reports.report_builder import is_low_stock
from src.sales.transaction import StockTransaction
from src.utils.time_zone import now_local, to_local

PESO = "₱"
DOLLAR = "$"
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class DashboardSummary:
    active_products: int
    total_stock_value: Decimal
    total_transactions: int
    low_stock_items: int
    todays_transactions: int


def total_stock_value(products: Iterable[Product]) -> Decimal:
    return sum((p.stock_value for p in products), Decimal("0"))


def compute_dashboard_summary(
    products: Sequence[Product],
    transactions: Sequence[StockTransaction],
    now: Optional[datetime] = None,
) -> DashboardSummary:
    """
    Các chỉ số hiển thị trên thẻ tổng quan.

    low_stock_items đếm mọi sản phẩm có quantity <= reorder_level, kể cả
    Inactive (báo cáo low-stock thì chỉ lấy Active).
    "Hôm nay" là cùng ngày/tháng/năm theo giờ địa phương, không phải 24h gần nhất.
    """
    today = to_local(now).date() if now is not None else now_local().date()
    return DashboardSummary(
        active_products=sum(1 for p in products if p.is_active),
        total_stock_value=total_stock_value(products),
        total_transactions=len(transactions),
        low_stock_items=sum(1 for p in products if is_low_stock(p)),
        todays_transactions=sum(1 for t in transactions if to_local(t.transaction_date).date() == today),
    )


def stock_value_by_category(products: Iterable[Product]) -> Dict[str, Decimal]:
    """Tổng giá trị tồn theo danh mục, sắp xếp giảm dần."""
    totals: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for p in products:
        totals[p.category_name or UNCATEGORIZED] += p.stock_value
    return dict(sorted(totals.items(), key=lambda kv: kv[1], reverse=True))


def _round2(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_peso(value: Any) -> str:
    """₱ có phân cách hàng nghìn: 1234.5 -> "₱1,234.50"."""
    return f"{PESO}{_round2(value):,.2f}"


def format_dollars(value: Any) -> str:
    """$ không phân cách hàng nghìn: 1234.5 -> "$1234.50"."""
    return f"{DOLLAR}{_round2(value):.2f}"
