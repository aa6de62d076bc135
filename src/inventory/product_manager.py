# src/inventory/product_manager.py
from __future__ import annotations
from typing import List, Union
from pathlib import Path
import json
import csv
import logging
from .product import Product

logger = logging.getLogger(__name__)


class ProductManager:
    """
    Đọc danh sách Product từ file JSON hoặc CSV (chỉ đọc, không ghi ngược).
    File không tồn tại / hỏng -> danh sách rỗng; dòng hỏng bị bỏ qua.
    """

    def __init__(self, storage_file: Union[str, Path] = "data/products.json") -> None:
        self.storage_file = Path(storage_file)
        self._use_json = self.storage_file.suffix.lower() == ".json"
        self.products: List[Product] = []
        self._load_products()

    # ---------------------------
    # Load
    # ---------------------------
    def _load_products(self) -> None:
        self.products = []
        if not self.storage_file.exists():
            logger.info("Products file %s not found. Starting with empty list.", self.storage_file)
            return

        if self._use_json:
            try:
                data = json.loads(self.storage_file.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                logger.exception("Failed to load products from json. Starting with empty list.")
                return
            if not isinstance(data, list):
                logger.warning("Products file %s doesn't contain a list. Ignoring.", self.storage_file)
                return
            rows = data
            parse = Product.from_dict
        else:
            try:
                with self.storage_file.open(mode="r", encoding="utf-8", newline="") as f:
                    rows = list(csv.DictReader(f))
            except (OSError, csv.Error):
                logger.exception("Failed to load products from csv. Starting with empty list.")
                return
            parse = Product.from_csv_row

        for i, row in enumerate(rows, start=1):
            if not isinstance(row, dict):
                logger.warning("Skipping non-object product entry %s in %s", i, self.storage_file)
                continue
            try:
                self.products.append(parse(row))
            except ValueError:
                logger.warning("Skipping bad product row %s. Row content: %s", i, row)

        logger.info("Loaded %d products from %s", len(self.products), self.storage_file)

    def reload(self) -> None:
        self._load_products()

    # ---------------------------
    # Query
    # ---------------------------
    def list_products(self) -> List[Product]:
        return list(self.products)
