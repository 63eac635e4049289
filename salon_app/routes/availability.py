from __future__ import annotations

from datetime import date, datetime, time

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from salon_app.attendance_service import records_for_day
from salon_app.availability_service import SERVICE_ROLES, on_shift_employee_ids, rank_availability
from salon_app.db import get_session
from salon_app.models import Appointment, Employee

router = APIRouter(prefix="/availability", tags=["availability"])


def parse_clock(value: str | None) -> time:
    if not value:
        return datetime.now().time()
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        raise HTTPException(status_code=400, detail="now phải có dạng HH:MM")


def staff_ranking(session: Session, day: date, now: time) -> list[dict]:
    # {employee, priority, status, nextAvailable, appointmentCount} theo AvailabilityEntry.to_dict()
    employees = session.exec(
        select(Employee)
        .where(Employee.status == "đang làm", Employee.role.in_(SERVICE_ROLES))  # type: ignore[attr-defined]
        .order_by(Employee.id)
    ).all()
    appointments = session.exec(select(Appointment).where(Appointment.day == day).order_by(Appointment.time)).all()
    on_shift = on_shift_employee_ids(records_for_day(session, day), day)

    return [entry.to_dict() for entry in rank_availability(employees, appointments, now, on_shift)]


@router.get("")
def get_availability(
    day: date = Query(..., description="YYYY-MM-DD"),
    now: str | None = Query(None, description="HH:MM, mặc định là giờ máy chủ"),
    session: Session = Depends(get_session),
) -> list[dict]:
    return staff_ranking(session, day, parse_clock(now))
