# src/sales/transaction_manager.py
from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from src.sales.transaction import StockTransaction

logger = logging.getLogger(__name__)


class TransactionManager:
    """
    Read-only access to stock transactions stored as CSV (default) or JSON.

    Notes:
      - Rows that cannot be parsed are skipped and logged.
    """

    def __init__(self, storage_file: Union[str, Path] = "data/transactions.csv") -> None:
        self.storage_file = Path(storage_file)
        self.transactions: List[StockTransaction] = []
        self._load_transactions()

    def _read_rows(self) -> Iterable[Dict[str, Any]]:
        if self.storage_file.suffix.lower() == ".json":
            data = json.loads(self.storage_file.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                logger.warning("Transactions file %s doesn't contain a list. Ignoring.", self.storage_file)
                return []
            return data
        with self.storage_file.open(mode="r", encoding="utf-8", newline="") as f:
            # empty CSV cells -> None so optional fields default
            return [{k: (v if v != "" else None) for k, v in row.items()} for row in csv.DictReader(f)]

    def _load_transactions(self) -> None:
        """Load transactions (fallback to empty list on error)."""
        self.transactions = []
        if not self.storage_file.exists():
            logger.info("Transactions file %s not found. Starting with empty list.", self.storage_file)
            return

        try:
            rows = self._read_rows()
        except (OSError, csv.Error, json.JSONDecodeError):
            logger.exception("Failed to read transactions file %s", self.storage_file)
            return

        for i, row in enumerate(rows, start=1):
            if not isinstance(row, dict):
                logger.warning("Skipping non-object transaction entry %s", i)
                continue
            try:
                self.transactions.append(StockTransaction.from_dict(row))
            except ValueError:
                logger.exception("Skipping bad transaction row %s. Row content: %s", i, row)

        logger.info("Loaded %d transactions from %s", len(self.transactions), self.storage_file)

    def reload(self) -> None:
        self._load_transactions()

    def list_transactions(self) -> List[StockTransaction]:
        """Return a shallow copy of transactions list."""
        return list(self.transactions)
