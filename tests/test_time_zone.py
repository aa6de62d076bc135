import locale
from datetime import datetime, timedelta, timezone

import pytest
from tzlocal import reload_localzone

from src.reports import report_builder as rb
from src.reports import summary
from src.utils import time_zone
from tests.factories import make_transaction

WINTER_UTC = datetime(2026, 1, 15, 4, 30, tzinfo=timezone.utc)
SUMMER_UTC = datetime(2026, 7, 15, 4, 30, tzinfo=timezone.utc)


@pytest.fixture
def new_york_system_tz(monkeypatch):
    """Máy đặt TZ=America/New_York, LOCAL_TIMEZONE để trống."""
    monkeypatch.setenv("TZ", "America/New_York")
    reload_localzone()
    tz = time_zone.resolve_local_tz("")
    monkeypatch.setattr(time_zone, "LOCAL_TZ", tz)
    yield tz
    monkeypatch.undo()
    reload_localzone()


def test_system_zone_is_named_zone(new_york_system_tz):
    assert str(new_york_system_tz) == "America/New_York"


def test_system_zone_follows_dst(new_york_system_tz):
    winter = time_zone.to_local(WINTER_UTC)
    summer = time_zone.to_local(SUMMER_UTC)

    assert winter.utcoffset() == timedelta(hours=-5)
    assert summer.utcoffset() == timedelta(hours=-4)
    assert winter.strftime("%Y-%m-%d %H:%M") == "2026-01-14 23:30"
    assert summer.strftime("%Y-%m-%d %H:%M") == "2026-07-15 00:30"


def test_transaction_date_uses_offset_of_its_own_instant(new_york_system_tz):
    rows = rb.build_transaction_report([make_transaction(WINTER_UTC)], date_format="%Y-%m-%d %H:%M")

    assert dict(rows[0])["Date"] == "2026-01-14 23:30"


def test_todays_transactions_across_dst(new_york_system_tz):
    now = datetime(2026, 1, 15, 12, 0, tzinfo=new_york_system_tz)
    s = summary.compute_dashboard_summary([], [make_transaction(WINTER_UTC)], now=now)

    # 04:30Z is 23:30 the evening before in EST
    assert s.todays_transactions == 0


def test_apply_system_locale_sets_lc_time(monkeypatch):
    calls = []
    monkeypatch.setattr(locale, "setlocale", lambda category, name=None: calls.append((category, name)))

    assert time_zone.apply_system_locale() is True
    assert calls == [(locale.LC_TIME, "")]


def test_apply_system_locale_unsupported(monkeypatch, caplog):
    def fail(category, name=None):
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", fail)

    assert time_zone.apply_system_locale() is False
    assert "C locale" in caplog.text
