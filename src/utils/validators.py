from decimal import Decimal, InvalidOperation
from datetime import datetime
from typing import Any, Optional
from src.utils.time_zone import now_local, to_local

_MISSING = object()


def to_decimal(value: Any, default: Any = _MISSING) -> Decimal:
    """
    Ép value về Decimal, hỗ trợ cả input dạng str với dấu phẩy.

    Args:
        value: Giá trị số hoặc chuỗi cần chuyển.
        default: Nếu được truyền, trả về default thay vì raise khi không parse được.

    Returns:
        Decimal của giá trị.

    Raises:
        ValueError: Nếu không thể chuyển về Decimal và không có default.
    """
    try:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, bool):
            raise TypeError("bool is not a number")
        s = str(value).strip().replace(",", ".")
        result = Decimal(s)
        if not result.is_finite():
            raise InvalidOperation(s)
        return result
    except (InvalidOperation, ValueError, TypeError):
        if default is not _MISSING:
            return Decimal(str(default))
        raise ValueError(f"Giá trị không hợp lệ cho Decimal: {value!r}")


def parse_iso_datetime(value: Optional[Any], default_now: bool = False) -> Optional[datetime]:
    """
    Parse ISO datetime thành datetime object timezone-aware.

    Naive datetime được gắn LOCAL_TZ. Chuỗi kết thúc bằng "Z" (JS toISOString)
    được hiểu là UTC.

    Nếu parsing lỗi hoặc value=None:
      - trả về None nếu default_now=False
      - trả về datetime hiện tại (LOCAL_TZ) nếu default_now=True

    Raises:
        ValueError: Nếu định dạng datetime không hợp lệ và default_now=False.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return now_local() if default_now else None

    if isinstance(value, datetime):
        return value if value.tzinfo else to_local(value)

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        return parsed if parsed.tzinfo else to_local(parsed)
    except ValueError:
        if default_now:
            return now_local()
        raise ValueError(f"Invalid datetime format: {value!r}")


def ensure_int(value: Any, default: Any = _MISSING) -> int:
    """
    Ép value về int. Chấp nhận "5", 5.0, "5.0".

    Raises:
        ValueError: Nếu không thể chuyển và không có default.
    """
    try:
        if isinstance(value, bool):
            raise TypeError("bool is not a number")
        if isinstance(value, int):
            return value
        return int(Decimal(str(value).strip()))
    except (TypeError, ValueError, InvalidOperation, OverflowError):
        if default is not _MISSING:
            return int(default)
        raise ValueError(f"Trường số phải là số nguyên hợp lệ: {value!r}")


def optional_text(value: Any) -> Optional[str]:
    """Chuỗi rỗng / None -> None."""
    if value is None:
        return None
    s = str(value).strip()
    return s or None
