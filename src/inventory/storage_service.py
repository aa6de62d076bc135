# src/inventory/storage_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from src.inventory.product import Product
from src.inventory.product_manager import ProductManager
from src.sales.transaction import StockTransaction
from src.sales.transaction_manager import TransactionManager
from src.utils import settings
from src.utils.time_zone import now_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventorySnapshot:
    """Bản sao bất biến của dữ liệu kho, đọc một lần mỗi phiên trang."""
    products: Tuple[Product, ...] = ()
    transactions: Tuple[StockTransaction, ...] = ()
    loaded_at: datetime = field(default_factory=now_local)


class StorageService:
    """
    Nguồn dữ liệu cho dashboard: get_products() / get_transactions() trả về
    snapshot hiện tại của các bản ghi.
    """

    def __init__(self,
                 products_file: Optional[Union[str, Path]] = None,
                 transactions_file: Optional[Union[str, Path]] = None) -> None:
        self.product_mgr = ProductManager(products_file or settings.PRODUCTS_FILE)
        self.transaction_mgr = TransactionManager(transactions_file or settings.TRANSACTIONS_FILE)

    def get_products(self) -> Tuple[Product, ...]:
        return tuple(self.product_mgr.list_products())

    def get_transactions(self) -> Tuple[StockTransaction, ...]:
        return tuple(self.transaction_mgr.list_transactions())

    def refresh(self) -> None:
        """Đọc lại cả hai file từ đĩa."""
        self.product_mgr.reload()
        self.transaction_mgr.reload()

    def load_snapshot(self) -> InventorySnapshot:
        snapshot = InventorySnapshot(products=self.get_products(), transactions=self.get_transactions())
        logger.info(
            "Loaded snapshot: %d products, %d transactions",
            len(snapshot.products), len(snapshot.transactions),
        )
        return snapshot
