import json
from datetime import datetime
from decimal import Decimal

import pytest

from src.inventory.storage_service import InventorySnapshot
from src.utils.time_zone import LOCAL_TZ
from tests.factories import RecordingNotifier, make_product, make_transaction


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def sample_products():
    return [
        make_product("A1"),
        make_product("B2", name="Soap", category_name="Household", quantity=50, unit_cost=Decimal("2.50"),
                     selling_price=Decimal("4"), reorder_level=10, supplier="Brightclean"),
        make_product("C3", name="Old Stock", quantity=1, reorder_level=5, status="Inactive"),
        make_product("D4", name="Rice", category_name="Pantry", quantity=40, unit_cost=Decimal("265"),
                     selling_price=Decimal("310"), reorder_level=40),
    ]


@pytest.fixture
def sample_transactions():
    return [
        make_transaction(),
        make_transaction(datetime(2026, 10, 18, 23, 59, tzinfo=LOCAL_TZ), product_name="Soap",
                         transaction_type="Stock Out", quantity=2, user_name="jun", reason="Sale"),
        make_transaction(datetime(2026, 10, 19, 0, 0, tzinfo=LOCAL_TZ), transaction_type="Adjustment",
                         quantity=-1, reason="Damaged"),
    ]


@pytest.fixture
def snapshot(sample_products, sample_transactions):
    return InventorySnapshot(products=tuple(sample_products), transactions=tuple(sample_transactions))


@pytest.fixture
def empty_snapshot():
    return InventorySnapshot()


@pytest.fixture
def storage_files(tmp_path):
    """products.json (camelCase như kho dữ liệu gốc) + transactions.csv."""
    products_file = tmp_path / "products.json"
    products_file.write_text(json.dumps([
        {"sku": "A1", "name": "Water", "categoryName": "Beverages", "quantity": 5, "unit": "bottle",
         "unitCost": 10, "sellingPrice": 15, "reorderLevel": 10, "location": "Aisle 1", "status": "Active"},
        {"sku": "B2", "name": "Soap", "categoryName": "Household", "quantity": "abc", "unit": "bar",
         "unitCost": "2,5", "sellingPrice": 4, "reorderLevel": 3, "location": "Aisle 5",
         "supplier": "Brightclean", "status": "Inactive"},
        {"name": "No SKU", "quantity": 1},
    ]), encoding="utf-8")

    transactions_file = tmp_path / "transactions.csv"
    transactions_file.write_text(
        "transaction_date,product_name,transaction_type,quantity,user_name,reason\n"
        "2026-10-18T08:05:00,Water,Stock In,12,maria,Weekly delivery\n"
        "2026-10-19T10:00:00Z,Soap,Stock Out,2,jun,\n",
        encoding="utf-8",
    )
    return products_file, transactions_file
