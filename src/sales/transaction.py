# src/sales/transaction.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
import logging

from src.utils.time_zone import now_local
from src.utils.validators import ensure_int, parse_iso_datetime, optional_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockTransaction:
    """
    Model cho một lần di chuyển kho (nhập / xuất / điều chỉnh).
    - transaction_type: giữ nguyên giá trị từ nguồn ("Stock In", "Stock Out", "Adjustment", ...)
    - transaction_date: timezone-aware datetime
    """
    transaction_date: datetime
    product_name: str
    transaction_type: str
    quantity: int
    user_name: str
    reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StockTransaction":
        """
        Tạo StockTransaction từ dict (hỗ trợ tên trường snake_case và camelCase).
        Ngày không hợp lệ / thiếu -> thời điểm hiện tại.
        """
        date_raw = data.get("transaction_date") or data.get("transactionDate") or data.get("date")
        product = data.get("product_name") or data.get("productName") or ""
        ttype = data.get("transaction_type") or data.get("transactionType") or data.get("type") or ""
        user = data.get("user_name") or data.get("userName") or ""

        try:
            dt = parse_iso_datetime(date_raw, default_now=False) or now_local()
        except ValueError:
            logger.warning("Invalid transaction date %r, using current time", date_raw)
            dt = now_local()

        return cls(
            transaction_date=dt,
            product_name=str(product),
            transaction_type=str(ttype),
            quantity=ensure_int(data.get("quantity"), default=0),
            user_name=str(user),
            reason=optional_text(data.get("reason")),
        )
