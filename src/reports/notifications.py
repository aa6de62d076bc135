# src/reports/notifications.py
from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Nơi nhận thông báo cho người dùng (fire-and-forget)."""

    def notify_success(self, message: str) -> None: ...

    def notify_error(self, message: str) -> None: ...


class LoggingNotifier:
    """Ghi thông báo ra log; dùng khi không có giao diện."""

    def notify_success(self, message: str) -> None:
        logger.info(message)

    def notify_error(self, message: str) -> None:
        logger.error(message)
