from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Literal, Optional

from salon_app.parsing import as_calendar_date, iso_day, sunday_weekday, time_to_minutes
from salon_app.work_schedule import DaySchedule, WorkSchedule, as_work_schedule, work_schedule_of

logger = logging.getLogger(__name__)

OFF_REASON = "Nghỉ"

ScheduleStatusLabel = Literal["working", "off", "partial"]


@dataclass
class AvailabilityVerdict:
    available: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {"available": self.available}
        if self.reason is not None:
            out["reason"] = self.reason
        return out


@dataclass
class ScheduleStatus:
    status: ScheduleStatusLabel
    details: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {"status": self.status}
        if self.details is not None:
            out["details"] = self.details
        return out


def _lookup(work_schedule: WorkSchedule, day: date) -> tuple[DaySchedule | None, str | None]:
    # override theo ngày cụ thể > lịch mặc định theo thứ trong tuần
    override = work_schedule.find_override(iso_day(day))
    if override is not None:
        return override.schedule, override.reason
    return work_schedule.default_schedule.get(sunday_weekday(day)), None


def resolve_effective_schedule(work_schedule: WorkSchedule | dict | None, day: date) -> DaySchedule | None:
    day = as_calendar_date(day)
    ws = as_work_schedule(work_schedule)
    if ws is None:
        return None
    schedule, _ = _lookup(ws, day)
    return schedule


def is_available_at(employee: Any, day: date, time_slot: str) -> AvailabilityVerdict:
    """
    Nhân viên có nhận khách được vào `day` lúc `time_slot` ("HH:MM") không.

    - Chưa cấu hình lịch / không có lịch cho ngày đó -> rảnh
    - off, không giờ -> nghỉ cả ngày
    - off có giờ -> chỉ bận trong [start, end)
    - loại làm việc có giờ -> chỉ làm trong [start, end)
    """
    day = as_calendar_date(day)
    ws = work_schedule_of(employee)
    if ws is None:
        return AvailabilityVerdict(available=True)

    schedule, override_reason = _lookup(ws, day)
    if schedule is None:
        return AvailabilityVerdict(available=True)

    if schedule.work_type == "off" and not schedule.start_time and not schedule.end_time:
        return AvailabilityVerdict(available=False, reason=override_reason or OFF_REASON)

    if schedule.has_window:
        slot_min = time_to_minutes(time_slot)
        start_min = time_to_minutes(schedule.start_time)
        end_min = time_to_minutes(schedule.end_time)

        if schedule.work_type == "off":
            if start_min <= slot_min < end_min:
                return AvailabilityVerdict(
                    available=False,
                    reason=override_reason or f"{OFF_REASON} {schedule.window_label}",
                )
        elif slot_min < start_min or slot_min >= end_min:
            return AvailabilityVerdict(
                available=False,
                reason=f"Không trong giờ làm việc ({schedule.window_label})",
            )

    return AvailabilityVerdict(available=True)


def schedule_status(employee: Any, day: date) -> ScheduleStatus:
    day = as_calendar_date(day)
    ws = work_schedule_of(employee)
    if ws is None:
        return ScheduleStatus(status="working")

    schedule, override_reason = _lookup(ws, day)
    if schedule is None:
        return ScheduleStatus(status="working")

    if schedule.work_type == "off":
        if schedule.has_window:
            return ScheduleStatus(status="partial", details=f"{OFF_REASON} {schedule.window_label}")
        return ScheduleStatus(status="off", details=override_reason or OFF_REASON)

    if schedule.has_window:
        return ScheduleStatus(status="working", details=schedule.window_label)
    return ScheduleStatus(status="working")


def available_employees_at(employees: Iterable[Any], day: date, time_slot: str) -> list[tuple[Any, AvailabilityVerdict]]:
    out = [(e, is_available_at(e, day, time_slot)) for e in employees]
    logger.debug(
        "available_employees_at %s %s: %d/%d available",
        iso_day(day),
        time_slot,
        sum(1 for _, v in out if v.available),
        len(out),
    )
    return out
