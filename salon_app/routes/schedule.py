from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session, select

from salon_app.db import get_session
from salon_app.models import Employee
from salon_app.schedule_service import available_employees_at, is_available_at, schedule_status

router = APIRouter(prefix="/schedule", tags=["schedule"])


class VerdictDTO(BaseModel):
    employee_id: int
    employee_name: str
    available: bool
    reason: str | None = None


class StatusDTO(BaseModel):
    employee_id: int
    employee_name: str
    status: str
    details: str | None = None


def _active_employees(session: Session) -> list[Employee]:
    return list(session.exec(select(Employee).where(Employee.status == "đang làm").order_by(Employee.id)).all())


@router.get("/availability")
def employee_availability(
    employee_id: int = Query(...),
    day: date = Query(..., description="YYYY-MM-DD"),
    time: str = Query(..., description="HH:MM"),
    session: Session = Depends(get_session),
) -> VerdictDTO:
    e = session.get(Employee, employee_id)
    if not e:
        raise HTTPException(status_code=404, detail="employee not found")
    verdict = is_available_at(e, day, time)
    return VerdictDTO(employee_id=e.id, employee_name=e.name, available=verdict.available, reason=verdict.reason)  # type: ignore[arg-type]


@router.get("/status")
def day_status(
    day: date = Query(..., description="YYYY-MM-DD"),
    session: Session = Depends(get_session),
) -> list[StatusDTO]:
    out: list[StatusDTO] = []
    for e in _active_employees(session):
        st = schedule_status(e, day)
        out.append(StatusDTO(employee_id=e.id, employee_name=e.name, status=st.status, details=st.details))  # type: ignore[arg-type]
    return out


@router.get("/available-staff")
def available_staff(
    day: date = Query(..., description="YYYY-MM-DD"),
    time: str = Query(..., description="HH:MM"),
    session: Session = Depends(get_session),
) -> list[VerdictDTO]:
    return [
        VerdictDTO(employee_id=e.id, employee_name=e.name, available=v.available, reason=v.reason)  # type: ignore[arg-type]
        for e, v in available_employees_at(_active_employees(session), day, time)
    ]
