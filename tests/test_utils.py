import logging
from datetime import datetime, timezone
from decimal import Decimal
from logging.handlers import RotatingFileHandler

import pytest

from src.utils.io_utils import atomic_write_bytes
from src.utils.logger import setup_logging
from src.utils.time_zone import LOCAL_TZ, resolve_local_tz, to_local
from src.utils.validators import ensure_int, optional_text, parse_iso_datetime, to_decimal


def test_atomic_write_bytes_creates_parent_and_replaces(tmp_path):
    path = tmp_path / "out" / "report.csv"
    atomic_write_bytes(path, b"old")
    atomic_write_bytes(path, b"Hello World")

    assert path.read_bytes() == b"Hello World"
    assert [p.name for p in path.parent.iterdir()] == ["report.csv"]


def test_to_decimal():
    assert to_decimal("2,5") == Decimal("2.5")
    assert to_decimal(10) == Decimal("10")
    assert to_decimal("abc", default=0) == Decimal("0")
    assert to_decimal(None, default=0) == Decimal("0")
    with pytest.raises(ValueError):
        to_decimal("abc")
    with pytest.raises(ValueError):
        to_decimal("NaN")


def test_ensure_int():
    assert ensure_int("5") == 5
    assert ensure_int(5.0) == 5
    assert ensure_int(" 7 ") == 7
    assert ensure_int("x", default=0) == 0
    with pytest.raises(ValueError):
        ensure_int(None)


def test_parse_iso_datetime():
    assert parse_iso_datetime(None) is None
    assert parse_iso_datetime("2026-10-19T10:00:00Z") == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
    assert parse_iso_datetime("2026-10-19T10:00:00").tzinfo is LOCAL_TZ
    assert parse_iso_datetime("garbage", default_now=True) is not None
    with pytest.raises(ValueError):
        parse_iso_datetime("garbage")


def test_optional_text():
    assert optional_text("  ") is None
    assert optional_text(None) is None
    assert optional_text(" Acme ") == "Acme"


def test_time_zone_helpers():
    assert str(resolve_local_tz("Asia/Manila")) == "Asia/Manila"
    naive = datetime(2026, 10, 19, 8, 0)
    assert to_local(naive).tzinfo is LOCAL_TZ
    assert to_local(naive).hour == 8


def test_setup_logging_adds_handlers_once(tmp_path):
    name = "inventory-test-logger"
    logger = setup_logging(name, log_level=logging.DEBUG, log_dir=tmp_path)
    setup_logging(name, log_level=logging.DEBUG, log_dir=tmp_path)

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    logger.info("hello")
    for h in logger.handlers:
        h.flush()
    assert "hello" in (tmp_path / "app.log").read_text(encoding="utf-8")

    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
