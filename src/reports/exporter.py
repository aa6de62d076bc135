# src/reports/exporter.py
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from src.inventory.storage_service import InventorySnapshot
from src.reports.export import (
    ExportFile,
    NoDataToExportError,
    build_export_file,
    build_xlsx_export_file,
    rows_to_csv,
    save_export_file,
)
from src.reports.notifications import LoggingNotifier, Notifier
from src.reports.report_builder import REPORTS, build_report

logger = logging.getLogger(__name__)

MSG_DOWNLOADED = "Report downloaded successfully"
MSG_END_OF_DAY = "End of Day reports generated"
END_OF_DAY_REPORTS = ("inventory_report", "low_stock_report")


class ReportExporter:
    """
    Xử lý các nút "Export" trên trang báo cáo: sinh rows -> CSV -> file tải về.

    Mọi thao tác chạy đồng bộ trên snapshot đã nạp; không đọc lại dữ liệu.
    """

    def __init__(self,
                 snapshot: InventorySnapshot,
                 notifier: Optional[Notifier] = None,
                 out_dir: Optional[Union[str, Path]] = None,
                 notify_downloads: bool = True) -> None:
        self.snapshot = snapshot
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.out_dir = Path(out_dir) if out_dir else None
        # False: the caller sends MSG_DOWNLOADED when the user actually downloads
        self.notify_downloads = notify_downloads

    def export(self, report_id: str, fmt: str = "csv", today: Optional[date] = None) -> Optional[ExportFile]:
        """
        Xuất một báo cáo. Trả về ExportFile, hoặc None nếu báo cáo rỗng
        (khi đó người dùng nhận thông báo "No data to export").

        Raises:
            KeyError: report_id không tồn tại.
            ValueError: fmt không phải "csv" / "xlsx".
        """
        if report_id not in REPORTS:
            raise KeyError(report_id)
        if fmt not in ("csv", "xlsx"):
            raise ValueError(f"Unsupported export format: {fmt!r}")

        rows = build_report(report_id, self.snapshot)
        try:
            if fmt == "csv":
                export_file = build_export_file(rows_to_csv(rows), report_id, today)
            else:
                export_file = build_xlsx_export_file(rows, report_id, today)
        except NoDataToExportError as e:
            logger.info("Export of %s skipped: %s", report_id, e)
            self.notifier.notify_error(str(e))
            return None

        if self.out_dir is not None:
            save_export_file(export_file, self.out_dir)

        logger.info("Exported %s (%d rows) as %s", report_id, len(rows), export_file.file_name)
        if self.notify_downloads:
            self.notifier.notify_success(MSG_DOWNLOADED)
        return export_file

    def export_end_of_day(self, today: Optional[date] = None) -> List[ExportFile]:
        """Inventory + low-stock; thông báo hoàn tất luôn được gửi."""
        files: List[ExportFile] = []
        for report_id in END_OF_DAY_REPORTS:
            export_file = self.export(report_id, today=today)
            if export_file is not None:
                files.append(export_file)
        self.notifier.notify_success(MSG_END_OF_DAY)
        return files
