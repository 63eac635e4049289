from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session

from salon_app.attendance_service import AttendanceError, check_in, check_out, mark_absent, records_for_employee
from salon_app.db import get_session
from salon_app.models import Employee, TimeRecord

router = APIRouter(prefix="/time-records", tags=["time-records"])


class ClockRequest(BaseModel):
    employee_id: int
    at: datetime | None = None  # bỏ trống = giờ máy chủ


class AbsentRequest(BaseModel):
    employee_id: int
    day: date


def _get_employee(session: Session, employee_id: int) -> Employee:
    e = session.get(Employee, employee_id)
    if not e:
        raise HTTPException(status_code=404, detail="employee not found")
    return e


@router.get("")
def list_records(
    employee_id: int = Query(...),
    start: date | None = Query(None),
    end: date | None = Query(None),
    session: Session = Depends(get_session),
) -> list[TimeRecord]:
    return records_for_employee(session, employee_id, start, end)


@router.post("/check-in")
def post_check_in(payload: ClockRequest, session: Session = Depends(get_session)) -> TimeRecord:
    e = _get_employee(session, payload.employee_id)
    return check_in(session, e, payload.at or datetime.now())


@router.post("/check-out")
def post_check_out(payload: ClockRequest, session: Session = Depends(get_session)) -> TimeRecord:
    e = _get_employee(session, payload.employee_id)
    try:
        return check_out(session, e, payload.at or datetime.now())
    except AttendanceError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/absent")
def post_absent(payload: AbsentRequest, session: Session = Depends(get_session)) -> TimeRecord:
    e = _get_employee(session, payload.employee_id)
    return mark_absent(session, e, payload.day)
