# src/reports/export.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import pandas as pd
from openpyxl import Workbook

from src.reports.report_builder import ReportRow
from src.utils.io_utils import atomic_write_bytes

logger = logging.getLogger(__name__)

CSV_MIME = "text/csv"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DEFAULT_ENCODING = "utf-8"


class ReportError(Exception):
    """Base class for report export errors."""


class NoDataToExportError(ReportError):
    def __init__(self, message: str = "No data to export") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ExportFile:
    file_name: str
    mime: str
    data: bytes


def _header(rows: Sequence[ReportRow]) -> List[str]:
    if not rows:
        raise NoDataToExportError()
    return [column for column, _ in rows[0]]


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


# ==============================
# CSV / DataFrame / Excel
# ==============================

def rows_to_csv(rows: Sequence[ReportRow]) -> str:
    """
    Nối các dòng báo cáo thành CSV.

    Header lấy từ cột của dòng đầu tiên; các dòng sau xuất giá trị theo đúng
    thứ tự header. Không quote / escape: giá trị chứa dấu phẩy hoặc xuống
    dòng sẽ làm lệch cột.

    Raises:
        NoDataToExportError: rows rỗng.
    """
    header = _header(rows)
    lines = [",".join(header)]
    for row in rows:
        values = dict(row)
        lines.append(",".join(_cell(values.get(column)) for column in header))
    return "\n".join(lines)


def rows_to_dataframe(rows: Sequence[ReportRow]) -> pd.DataFrame:
    """DataFrame giữ thứ tự cột; rows rỗng -> DataFrame rỗng."""
    if not rows:
        return pd.DataFrame()
    header = _header(rows)
    return pd.DataFrame([[dict(row).get(c) for c in header] for row in rows], columns=header)


def rows_to_xlsx_bytes(rows: Sequence[ReportRow], sheet_title: str = "Report") -> bytes:
    """Xuất rows sang một sheet Excel (header + giá trị)."""
    header = _header(rows)
    wb = Workbook()
    ws = wb.active
    if ws is None:
        ws = wb.create_sheet(sheet_title)
        wb.active = ws
    # Excel giới hạn tên sheet 31 ký tự
    ws.title = sheet_title[:31]
    ws.append(header)
    for row in rows:
        values = dict(row)
        ws.append([values.get(column) for column in header])

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


# ==============================
# 💾 Export files
# ==============================

def export_filename(base: str, ext: str = "csv", today: Optional[date] = None) -> str:
    """`{base}_{YYYY-MM-DD}.{ext}`, ngày hiện tại theo UTC."""
    day = today or datetime.now(timezone.utc).date()
    return f"{base}_{day.isoformat()}.{ext}"


def build_export_file(csv_text: str, base: str, today: Optional[date] = None) -> ExportFile:
    return ExportFile(
        file_name=export_filename(base, "csv", today),
        mime=CSV_MIME,
        data=csv_text.encode(DEFAULT_ENCODING),
    )


def build_xlsx_export_file(rows: Sequence[ReportRow], base: str, today: Optional[date] = None) -> ExportFile:
    return ExportFile(
        file_name=export_filename(base, "xlsx", today),
        mime=XLSX_MIME,
        data=rows_to_xlsx_bytes(rows, sheet_title=base),
    )


def save_export_file(export_file: ExportFile, out_dir: Union[str, Path]) -> Path:
    """Ghi bản sao file export vào out_dir (atomic). Lỗi I/O được propagate."""
    path = Path(out_dir) / export_file.file_name
    atomic_write_bytes(path, export_file.data)
    logger.info("Wrote report copy: %s", path)
    return path
