# src/inventory/product.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from src.utils.validators import to_decimal, ensure_int, optional_text

STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    """Lấy giá trị đầu tiên khác None theo nhiều tên trường (snake_case / camelCase)."""
    for k in keys:
        v = data.get(k)
        if v is not None:
            return v
    return None


@dataclass(frozen=True)
class Product:
    """
    Snapshot một sản phẩm trong kho.

    Không validate range: quantity / unit_cost / selling_price được tin theo
    nguồn dữ liệu. Giá trị số hỏng sẽ về 0 khi đọc qua from_dict.
    """
    sku: str
    name: str
    category_name: str
    quantity: int
    unit: str
    unit_cost: Decimal
    selling_price: Decimal
    reorder_level: int
    location: str
    supplier: Optional[str] = None
    status: str = STATUS_ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    @property
    def stock_value(self) -> Decimal:
        return self.quantity * self.unit_cost

    @property
    def potential_revenue(self) -> Decimal:
        return self.quantity * self.selling_price

    @property
    def potential_profit(self) -> Decimal:
        return self.quantity * (self.selling_price - self.unit_cost)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        sku = _pick(data, "sku", "SKU")
        if sku is None or not str(sku).strip():
            raise ValueError("Thiếu sku trong dữ liệu")

        return cls(
            sku=str(sku).strip(),
            name=str(_pick(data, "name") or ""),
            category_name=str(_pick(data, "category_name", "categoryName", "category") or ""),
            quantity=ensure_int(_pick(data, "quantity"), default=0),
            unit=str(_pick(data, "unit") or ""),
            unit_cost=to_decimal(_pick(data, "unit_cost", "unitCost"), default=0),
            selling_price=to_decimal(_pick(data, "selling_price", "sellingPrice"), default=0),
            reorder_level=ensure_int(_pick(data, "reorder_level", "reorderLevel"), default=0),
            location=str(_pick(data, "location") or ""),
            supplier=optional_text(_pick(data, "supplier")),
            status=str(_pick(data, "status") or ""),
        )

    @classmethod
    def from_csv_row(cls, row: Dict[str, Any]) -> "Product":
        # map empty strings to None so from_dict can handle defaults
        cleaned = {k: (v if v != "" else None) for k, v in row.items()}
        return cls.from_dict(cleaned)
