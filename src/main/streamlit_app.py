# streamlit_app.py
from __future__ import annotations
import sys
from pathlib import Path
import streamlit as st
import pandas as pd
import altair as alt

# =================================================================================
# === KHẮC PHỤC LỖI MODULE NOT FOUND
# =================================================================================

PROJECT_ROOT_PATH = Path(__file__).parent.parent.parent.resolve()
if str(PROJECT_ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT_PATH))

# --- Import các module của dự án ---
try:
    from src.inventory.storage_service import StorageService, InventorySnapshot
    from src.reports.export import ExportFile, rows_to_dataframe
    from src.reports.exporter import MSG_DOWNLOADED, ReportExporter
    from src.reports.report_builder import REPORTS, build_report
    from src.reports.summary import (
        compute_dashboard_summary,
        format_dollars,
        format_peso,
        stock_value_by_category,
    )
    from src.utils import settings
    from src.utils.logger import setup_logging
    from src.utils.time_zone import apply_system_locale, now_local
except ImportError as e:
    st.error(
        "**Module `src` not found!**\n\n"
        "Run `streamlit run src/main/streamlit_app.py` from the project root."
    )
    st.exception(e)
    st.stop()

setup_logging()
apply_system_locale()


class StreamlitNotifier:
    """Thông báo dạng toast trên trang."""

    def notify_success(self, message: str) -> None:
        st.toast(message, icon="✅")

    def notify_error(self, message: str) -> None:
        st.toast(message, icon="❌")


@st.cache_resource
def get_storage() -> StorageService:
    return StorageService(settings.PRODUCTS_FILE, settings.TRANSACTIONS_FILE)


def get_snapshot() -> InventorySnapshot:
    # nạp một lần mỗi phiên (đọc lại file), các lần rerun dùng lại
    if "snapshot" not in st.session_state:
        storage = get_storage()
        storage.refresh()
        st.session_state.snapshot = storage.load_snapshot()
    return st.session_state.snapshot


def get_exporter(snapshot: InventorySnapshot) -> ReportExporter:
    out_dir = settings.REPORTS_DIR if settings.SAVE_EXPORT_COPIES else None
    return ReportExporter(snapshot, StreamlitNotifier(), out_dir=out_dir, notify_downloads=False)


def remember_exports(*files: ExportFile) -> None:
    exports = st.session_state.setdefault("exports", {})
    for f in files:
        exports[f.file_name] = f


def render_download(export_file: ExportFile, key_prefix: str) -> None:
    st.download_button(
        f"📥 {export_file.file_name}",
        data=export_file.data,
        file_name=export_file.file_name,
        mime=export_file.mime,
        key=f"{key_prefix}_{export_file.file_name}",
        on_click=StreamlitNotifier().notify_success,
        args=(MSG_DOWNLOADED,),
        use_container_width=True,
    )


# =================================================================================
# === GIAO DIỆN STREAMLIT
# =================================================================================

st.set_page_config(page_title="Reports & Analytics", layout="wide")

snapshot = get_snapshot()
products, transactions = snapshot.products, snapshot.transactions
summary = compute_dashboard_summary(products, transactions)
exporter = get_exporter(snapshot)

with st.sidebar:
    st.title("📦 Inventory")
    st.info(f"🗓️ Today: {now_local().strftime('%Y-%m-%d')}")
    st.caption(f"Data loaded at {snapshot.loaded_at.strftime('%H:%M:%S')}")

st.title("Reports & Analytics")
st.caption("Generate and export inventory reports")

# --- Summary cards ---
col1, col2, col3 = st.columns(3)
with col1, st.container(border=True):
    st.metric("Total Products", summary.active_products)
    st.caption("Active items")
with col2, st.container(border=True):
    st.metric("Total Stock Value", format_peso(summary.total_stock_value))
    st.caption("Current inventory value")
with col3, st.container(border=True):
    st.metric("Total Transactions", summary.total_transactions)
    st.caption("All time movements")

by_category = stock_value_by_category(products)
if by_category:
    df_cat = pd.DataFrame(
        [{"Category": k, "Stock Value": float(v)} for k, v in by_category.items()]
    )
    chart_cat = alt.Chart(df_cat).mark_bar().encode(
        x=alt.X("Category:N", sort="-y", title="Category"),
        y=alt.Y("Stock Value:Q", title="Stock Value"),
        tooltip=["Category", "Stock Value"],
    ).properties(title="Stock value by category")
    st.altair_chart(chart_cat, use_container_width=True)

st.markdown("---")

# --- Report cards ---
report_cols = st.columns(2)
for index, definition in enumerate(REPORTS.values()):
    with report_cols[index % 2], st.container(border=True):
        st.subheader(definition.title)
        st.markdown(definition.description)

        b1, b2 = st.columns(2)
        if b1.button("Export as CSV", key=f"csv_{definition.report_id}", type="primary", use_container_width=True):
            export_file = exporter.export(definition.report_id)
            if export_file is not None:
                remember_exports(export_file)
        if b2.button("Excel", key=f"xlsx_{definition.report_id}", use_container_width=True):
            export_file = exporter.export(definition.report_id, fmt="xlsx")
            if export_file is not None:
                remember_exports(export_file)

        for export_file in st.session_state.get("exports", {}).values():
            if export_file.file_name.startswith(definition.report_id):
                render_download(export_file, definition.report_id)

        with st.expander("Preview"):
            rows = build_report(definition.report_id, snapshot)
            if rows:
                st.dataframe(rows_to_dataframe(rows), use_container_width=True, hide_index=True)
            else:
                st.info("No data to export")

# --- End of Day ---
with st.container(border=True):
    st.subheader("📅 End of Day Report")
    st.caption("Complete daily snapshot of inventory status")

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Active Products", summary.active_products)
    m2.metric("Low Stock Items", summary.low_stock_items)
    m3.metric("Today's Transactions", summary.todays_transactions)
    m4.metric("Total Value", format_dollars(summary.total_stock_value))

    if st.button("Generate End of Day Report", type="primary", use_container_width=True):
        remember_exports(*exporter.export_end_of_day())
