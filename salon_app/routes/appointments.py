from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session, select

from salon_app.db import get_session
from salon_app.models import Appointment, Employee

router = APIRouter(prefix="/appointments", tags=["appointments"])


class AppointmentCreate(BaseModel):
    day: date
    time: str
    duration: str = "30 phút"
    staff: str = ""
    staff_id: int | None = None
    customer: str = ""
    phone: str | None = None
    service: str = ""
    price: str | None = None
    status: str = "Đã đặt"
    notes: str | None = None


class AppointmentUpdate(BaseModel):
    day: date | None = None
    time: str | None = None
    duration: str | None = None
    staff: str | None = None
    staff_id: int | None = None
    customer: str | None = None
    phone: str | None = None
    service: str | None = None
    price: str | None = None
    status: str | None = None
    notes: str | None = None


def _sync_staff_name(session: Session, apt: Appointment) -> None:
    # có staff_id thì tên hiển thị lấy theo nhân viên (chỉ gọi khi staff_id vừa được gửi lên)
    if apt.staff_id is None:
        return
    e = session.get(Employee, apt.staff_id)
    if not e:
        raise HTTPException(status_code=400, detail="staff_id không tồn tại")
    apt.staff = e.name


def _employee_id_by_name(session: Session, name: str) -> int | None:
    if not name:
        return None
    matches = session.exec(select(Employee).where(Employee.name == name)).all()
    # trùng tên thì không đoán, để lại cho phép so theo tên
    if len(matches) != 1:
        return None
    return matches[0].id


@router.get("")
def list_appointments(
    day: date = Query(..., description="YYYY-MM-DD"),
    session: Session = Depends(get_session),
) -> list[Appointment]:
    return session.exec(
        select(Appointment).where(Appointment.day == day).order_by(Appointment.time, Appointment.id)
    ).all()


@router.post("", status_code=201)
def create_appointment(payload: AppointmentCreate, session: Session = Depends(get_session)) -> Appointment:
    apt = Appointment(**payload.model_dump())
    apt.staff = apt.staff.strip()
    _sync_staff_name(session, apt)
    session.add(apt)
    session.commit()
    session.refresh(apt)
    return apt


@router.patch("/{appointment_id}")
def update_appointment(
    appointment_id: int, payload: AppointmentUpdate, session: Session = Depends(get_session)
) -> Appointment:
    apt = session.get(Appointment, appointment_id)
    if not apt:
        raise HTTPException(status_code=404, detail="appointment not found")
    data = payload.model_dump(exclude_unset=True)
    if "staff" in data and "staff_id" not in data:
        # đổi thợ bằng tên: tìm lại nhân viên theo tên, không thấy thì bỏ staff_id (so theo tên)
        data["staff"] = (data["staff"] or "").strip()
        data["staff_id"] = _employee_id_by_name(session, data["staff"])
    for k, v in data.items():
        setattr(apt, k, v)
    if data.get("staff_id") is not None:
        _sync_staff_name(session, apt)
    session.add(apt)
    session.commit()
    session.refresh(apt)
    return apt


@router.delete("/{appointment_id}", status_code=204)
def delete_appointment(appointment_id: int, session: Session = Depends(get_session)) -> None:
    apt = session.get(Appointment, appointment_id)
    if not apt:
        return
    session.delete(apt)
    session.commit()
