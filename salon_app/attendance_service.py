from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from sqlmodel import Session, select

from salon_app.models import Employee, TimeRecord

logger = logging.getLogger(__name__)


class AttendanceError(Exception):
    pass


def _record_for(session: Session, employee_id: int, day: date) -> TimeRecord | None:
    return session.exec(
        select(TimeRecord).where(TimeRecord.employee_id == employee_id, TimeRecord.day == day)
    ).first()


def check_in(session: Session, employee: Employee, now: datetime) -> TimeRecord:
    # Đã có bản ghi trong ngày (kể cả absent) -> cập nhật lại giờ vào
    day = now.date()
    stamp = now.strftime("%H:%M:%S")
    record = _record_for(session, employee.id, day)  # type: ignore[arg-type]
    if record:
        record.check_in = stamp
        record.status = "working"
    else:
        record = TimeRecord(
            employee_id=employee.id,  # type: ignore[arg-type]
            employee_name=employee.name,
            day=day,
            check_in=stamp,
            status="working",
        )
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info("check-in employee=%s day=%s at %s", employee.id, day.isoformat(), stamp)
    return record


def check_out(session: Session, employee: Employee, now: datetime) -> TimeRecord:
    day = now.date()
    record = _record_for(session, employee.id, day)  # type: ignore[arg-type]
    if not record or not record.check_in:
        raise AttendanceError(f"{employee.name} chưa chấm công vào ngày {day.isoformat()}")

    check_in_at = datetime.combine(day, datetime.strptime(record.check_in, "%H:%M:%S").time(), tzinfo=now.tzinfo)
    record.check_out = now.strftime("%H:%M:%S")
    record.total_hours = round((now - check_in_at).total_seconds() / 3600, 2)
    record.status = "completed"
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info("check-out employee=%s day=%s hours=%s", employee.id, day.isoformat(), record.total_hours)
    return record


def mark_absent(session: Session, employee: Employee, day: date) -> TimeRecord:
    record = _record_for(session, employee.id, day)  # type: ignore[arg-type]
    if record:
        record.status = "absent"
    else:
        record = TimeRecord(employee_id=employee.id, employee_name=employee.name, day=day, status="absent")  # type: ignore[arg-type]
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info("absent employee=%s day=%s", employee.id, day.isoformat())
    return record


def records_for_employee(
    session: Session,
    employee_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[TimeRecord]:
    q = select(TimeRecord).where(TimeRecord.employee_id == employee_id)
    if start:
        q = q.where(TimeRecord.day >= start)
    if end:
        q = q.where(TimeRecord.day <= end)
    return list(session.exec(q.order_by(TimeRecord.day.desc())).all())  # type: ignore[attr-defined]


def records_for_day(session: Session, day: date) -> list[TimeRecord]:
    return list(session.exec(select(TimeRecord).where(TimeRecord.day == day)).all())
