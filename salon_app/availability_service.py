from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Collection, Iterable, Literal

from salon_app.parsing import as_calendar_date, clock_minutes, duration_minutes, time_to_minutes

logger = logging.getLogger(__name__)

# Chỉ thợ làm dịch vụ mới được xếp khách (lễ tân/quản lý không tính)
SERVICE_ROLES: tuple[str, ...] = ("thợ", "thợ chính", "phụ tá")

FREE = "Rảnh"
ABOUT_TO_FINISH = "Sắp xong"
BUSY = "Đang bận"
RIGHT_NOW = "Ngay bây giờ"

# Còn <= 15 phút thì coi là sắp xong
ABOUT_TO_FINISH_MINUTES = 15

StaffStatus = Literal["Rảnh", "Sắp xong", "Đang bận"]


@dataclass
class AvailabilityEntry:
    employee: Any
    priority: int  # 1 rảnh / 2 sắp xong / 3 đang bận
    status: StaffStatus
    next_available: str
    appointment_count: int

    def to_dict(self) -> dict:
        employee = self.employee
        if hasattr(employee, "model_dump"):
            employee = employee.model_dump(mode="json")
        return {
            "employee": employee,
            "priority": self.priority,
            "status": self.status,
            "nextAvailable": self.next_available,
            "appointmentCount": self.appointment_count,
        }


def _get(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def on_shift_employee_ids(time_records: Iterable[Any], day: date) -> set[int]:
    """
    Nhân viên "đang trong ca" của ngày: có bản ghi chấm công cho ngày đó và trạng thái khác absent.
    Không có bản ghi -> không tính là trong ca.
    """
    day = as_calendar_date(day)
    out: set[int] = set()
    for r in time_records:
        r_day = _get(r, "day")
        if isinstance(r_day, str):
            r_day = date.fromisoformat(r_day[:10])
        if r_day != day:
            continue
        if _get(r, "status") == "absent":
            continue
        out.add(_get(r, "employee_id"))
    return out


def appointments_for_employee(employee: Any, day_appointments: Iterable[Any]) -> list[Any]:
    # staff_id là khóa chính thức; lịch hẹn cũ chưa có staff_id thì so theo tên hiển thị
    emp_id = _get(employee, "id")
    emp_name = _get(employee, "name")
    out = []
    for apt in day_appointments:
        staff_id = _get(apt, "staff_id")
        if staff_id is not None:
            if emp_id is not None and str(staff_id) == str(emp_id):
                out.append(apt)
            continue
        if _get(apt, "staff") == emp_name:
            out.append(apt)
    return out


def _appointment_window(apt: Any) -> tuple[int, int]:
    start = time_to_minutes(_get(apt, "time"))
    return start, start + duration_minutes(_get(apt, "duration"))


def _entry_for(employee: Any, appointments: list[Any], now_min: int) -> AvailabilityEntry:
    count = len(appointments)
    current = None
    for apt in appointments:
        start, end = _appointment_window(apt)
        if start <= now_min < end:
            current = apt
            break

    if current is None:
        # không có lịch hẹn, hoặc đang trống giữa hai lịch hẹn
        return AvailabilityEntry(employee, 1, FREE, RIGHT_NOW, count)

    _, end = _appointment_window(current)
    remaining = end - now_min
    if remaining <= ABOUT_TO_FINISH_MINUTES:
        return AvailabilityEntry(employee, 2, ABOUT_TO_FINISH, f"{remaining} phút nữa", count)
    return AvailabilityEntry(employee, 3, BUSY, f"{remaining} phút nữa", count)


def rank_availability(
    employees: Iterable[Any],
    day_appointments: Iterable[Any],
    now: datetime | time,
    on_shift_ids: Collection[Any],
) -> list[AvailabilityEntry]:
    """
    Xếp hạng ai nhận khách tiếp theo.

    Args:
        employees: danh sách nhân viên (model hoặc dict có id/name)
        day_appointments: lịch hẹn của đúng ngày đang xem (caller tự lọc theo ngày)
        now: giờ hiện tại theo đồng hồ địa phương, chỉ dùng giờ:phút
        on_shift_ids: id nhân viên đang trong ca (xem on_shift_employee_ids)

    Returns:
        list[AvailabilityEntry] sắp theo priority tăng dần; cùng priority giữ nguyên thứ tự đầu vào
    """
    now_min = clock_minutes(now)
    appointments = list(day_appointments)

    entries: list[AvailabilityEntry] = []
    for employee in employees:
        if _get(employee, "id") not in on_shift_ids:
            continue
        mine = appointments_for_employee(employee, appointments)
        entries.append(_entry_for(employee, mine, now_min))

    entries.sort(key=lambda e: e.priority)  # sort ổn định
    logger.debug(
        "rank_availability now=%02d:%02d: %d on shift, %d free",
        now_min // 60,
        now_min % 60,
        len(entries),
        sum(1 for e in entries if e.priority == 1),
    )
    return entries
