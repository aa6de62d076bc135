# src/utils/time_zone.py
import locale
import logging
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from tzlocal import get_localzone

from src.utils import settings

logger = logging.getLogger(__name__)


def resolve_local_tz(name: Optional[str] = None) -> tzinfo:
    """Trả về múi giờ theo tên IANA; rỗng -> múi giờ hệ thống (có DST, qua tzlocal)."""
    if name:
        return ZoneInfo(name)
    return get_localzone()


LOCAL_TZ = resolve_local_tz(settings.LOCAL_TIMEZONE)


def now_local() -> datetime:
    return datetime.now(LOCAL_TZ)


def to_local(dt: datetime) -> datetime:
    """Naive datetime được coi là giờ địa phương."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=LOCAL_TZ)
    return dt.astimezone(LOCAL_TZ)


def apply_system_locale() -> bool:
    """
    Dùng locale của máy cho LC_TIME để "%c" ra đúng định dạng ngày giờ địa phương.
    Trả về False (giữ locale C) nếu hệ thống không hỗ trợ locale đó.
    """
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.warning("System locale is not available, dates use the C locale")
        return False
    return True
