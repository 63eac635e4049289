from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session, select

from salon_app.db import get_session
from salon_app.models import Appointment, Employee, TimeRecord
from salon_app.work_schedule import WorkSchedule

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


class EmployeeCreate(BaseModel):
    name: str
    role: str = "thợ"
    status: str = "đang làm"
    phone: str | None = None
    specialties: list[str] = []
    assigned_services: list[str] = []
    work_schedule: WorkSchedule | None = None


class EmployeeUpdate(BaseModel):
    name: str | None = None
    role: str | None = None
    status: str | None = None
    phone: str | None = None
    specialties: list[str] | None = None
    assigned_services: list[str] | None = None


def _get_employee(session: Session, employee_id: int) -> Employee:
    e = session.get(Employee, employee_id)
    if not e:
        raise HTTPException(status_code=404, detail="employee not found")
    return e


def _stamp_schedule(e: Employee, ws: WorkSchedule) -> dict:
    # employeeId/employeeName trong lịch luôn theo nhân viên sở hữu
    ws = ws.model_copy(update={"employee_id": str(e.id), "employee_name": e.name})
    return ws.to_storage()


@router.get("")
def list_employees(session: Session = Depends(get_session)) -> list[Employee]:
    return session.exec(select(Employee).order_by(Employee.status, Employee.id)).all()


@router.post("", status_code=201)
def create_employee(payload: EmployeeCreate, session: Session = Depends(get_session)) -> Employee:
    e = Employee(
        name=payload.name.strip(),
        role=payload.role,
        status=payload.status,
        phone=payload.phone,
        specialties=payload.specialties,
        assigned_services=payload.assigned_services,
    )
    if not e.name:
        raise HTTPException(status_code=400, detail="name không được để trống")
    session.add(e)
    session.commit()
    session.refresh(e)
    if payload.work_schedule is not None:
        e.work_schedule = _stamp_schedule(e, payload.work_schedule)
        session.add(e)
        session.commit()
        session.refresh(e)
    return e


@router.patch("/{employee_id}")
def update_employee(
    employee_id: int, payload: EmployeeUpdate, session: Session = Depends(get_session)
) -> Employee:
    e = _get_employee(session, employee_id)
    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(e, k, v)
    if e.name is not None:
        e.name = e.name.strip()
    if not e.name:
        raise HTTPException(status_code=400, detail="name không được để trống")
    # đổi tên thì tên trong lịch làm việc cũng đổi theo
    ws = e.schedule()
    if ws is not None and ws.employee_name != e.name:
        e.work_schedule = _stamp_schedule(e, ws)
    session.add(e)
    session.commit()
    session.refresh(e)
    return e


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: int, session: Session = Depends(get_session)) -> None:
    e = session.get(Employee, employee_id)
    if not e:
        return
    # lịch hẹn giữ lại tên thợ (so theo tên), bỏ khóa staff_id; chấm công của người đã xóa thì xóa luôn
    for apt in session.exec(select(Appointment).where(Appointment.staff_id == employee_id)).all():
        apt.staff_id = None
        apt.staff = apt.staff or e.name
        session.add(apt)
    for r in session.exec(select(TimeRecord).where(TimeRecord.employee_id == employee_id)).all():
        session.delete(r)
    session.flush()
    logger.info("employee deleted id=%s name=%s", employee_id, e.name)
    session.delete(e)
    session.commit()


@router.get("/{employee_id}/work-schedule")
def get_work_schedule(employee_id: int, session: Session = Depends(get_session)) -> dict | None:
    e = _get_employee(session, employee_id)
    ws = e.schedule()
    return ws.to_storage() if ws else None


@router.put("/{employee_id}/work-schedule")
def put_work_schedule(
    employee_id: int, payload: WorkSchedule, session: Session = Depends(get_session)
) -> dict:
    e = _get_employee(session, employee_id)
    e.work_schedule = _stamp_schedule(e, payload)
    session.add(e)
    session.commit()
    session.refresh(e)
    logger.info(
        "work schedule updated employee=%s weekdays=%s overrides=%d",
        e.id,
        sorted(payload.default_schedule),
        len(payload.schedule_overrides),
    )
    return e.work_schedule or {}
