import json
from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from src.utils import settings

APP_FILE = str(Path(__file__).resolve().parents[1] / "src" / "main" / "streamlit_app.py")


def write_products(path, count):
    path.write_text(json.dumps([
        {"sku": f"P{i}", "name": f"Item {i}", "categoryName": "Pantry", "quantity": 20, "unit": "pc",
         "unitCost": 5, "sellingPrice": 8, "reorderLevel": 10, "location": "A1", "status": "Active"}
        for i in range(count)
    ]), encoding="utf-8")


def metric_value(at, label):
    return next(m.value for m in at.metric if m.label == label)


def run_app():
    at = AppTest.from_file(APP_FILE, default_timeout=30)
    at.run()
    assert not at.exception
    return at


@pytest.fixture
def products_file(tmp_path, monkeypatch):
    products = tmp_path / "products.json"
    transactions = tmp_path / "transactions.csv"
    write_products(products, 2)
    transactions.write_text(
        "transaction_date,product_name,transaction_type,quantity,user_name,reason\n", encoding="utf-8"
    )
    monkeypatch.setattr(settings, "PRODUCTS_FILE", products)
    monkeypatch.setattr(settings, "TRANSACTIONS_FILE", transactions)
    monkeypatch.setattr(settings, "SAVE_EXPORT_COPIES", False)
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    st.cache_resource.clear()
    yield products
    st.cache_resource.clear()


def test_page_shows_summary_cards(products_file):
    at = run_app()

    assert metric_value(at, "Total Products") == "2"
    assert metric_value(at, "Total Transactions") == "0"
    assert metric_value(at, "Total Stock Value") == "₱200.00"


def test_new_session_reads_current_records(products_file):
    assert metric_value(run_app(), "Total Products") == "2"

    products_file.write_text("[]", encoding="utf-8")

    assert metric_value(run_app(), "Total Products") == "0"


def test_rerun_keeps_session_snapshot(products_file):
    at = run_app()
    write_products(products_file, 5)
    at.run()

    assert metric_value(at, "Total Products") == "2"


def test_export_with_no_rows_shows_toast(products_file):
    products_file.write_text("[]", encoding="utf-8")
    at = run_app()

    at.button(key="csv_inventory_report").click().run()

    assert [t.value for t in at.toast] == ["No data to export"]
