from __future__ import annotations

import re
from datetime import date, datetime, time

DEFAULT_DURATION_MINUTES = 30

_LEADING_INT = re.compile(r"(\d+)")


def time_to_minutes(value: str | None) -> int:
    # "HH:MM" -> phút tính từ nửa đêm; chuỗi lỗi (thiếu ":", không phải số) -> 0
    if not value or ":" not in value:
        return 0
    parts = value.split(":")
    hours = _to_int(parts[0])
    minutes = _to_int(parts[1][:2])
    if hours is None or minutes is None:
        return 0
    return hours * 60 + minutes


def _to_int(text: str) -> int | None:
    text = text.strip()
    if not text:
        return 0
    match = re.match(r"[+-]?\d+", text)
    if not match:
        return None
    return int(match.group(0))


def clock_minutes(now: datetime | time) -> int:
    if not isinstance(now, (datetime, time)):
        raise TypeError(f"now must be a datetime or time, got {type(now).__name__}")
    return now.hour * 60 + now.minute


def duration_minutes(value: str | int | None) -> int:
    """
    Lấy số phút từ ô "thời lượng" dạng chữ, ví dụ "90 phút" -> 90.
    - Lấy số nguyên đầu tiên xuất hiện trong chuỗi
    - Không có số -> mặc định 30 phút
    """
    if isinstance(value, int):
        return value
    if not value:
        return DEFAULT_DURATION_MINUTES
    match = _LEADING_INT.search(value)
    if not match:
        return DEFAULT_DURATION_MINUTES
    return int(match.group(1))


def as_calendar_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"expected a date, got {type(value).__name__}")


def iso_day(value: date) -> str:
    return as_calendar_date(value).isoformat()


def sunday_weekday(value: date) -> int:
    # 0=Chủ nhật ... 6=Thứ bảy (date.weekday() thì bắt đầu từ Thứ hai)
    return as_calendar_date(value).isoweekday() % 7
