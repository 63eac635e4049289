from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from salon_app.work_schedule import WorkSchedule, as_work_schedule


class Employee(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    role: str = Field(default="thợ", description="thợ chính / phụ tá / lễ tân / quản lý / thợ")
    status: str = Field(default="đang làm", index=True, description="đang làm / đã nghỉ")
    phone: Optional[str] = None
    specialties: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    assigned_services: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    # Lịch làm việc (defaultSchedule + scheduleOverrides), lưu nguyên JSON camelCase
    work_schedule: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    def schedule(self) -> WorkSchedule | None:
        return as_work_schedule(self.work_schedule)


class Appointment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    day: date = Field(index=True)
    time: str = Field(description="HH:MM")
    duration: str = Field(default="30 phút", description="chữ tự do, số đầu tiên là số phút")
    # staff: tên hiển thị (dữ liệu cũ); staff_id: khóa nhân viên nếu có
    staff: str = Field(default="", index=True)
    staff_id: Optional[int] = Field(default=None, index=True, foreign_key="employee.id")
    customer: str = ""
    phone: Optional[str] = None
    service: str = ""
    price: Optional[str] = None
    status: str = Field(default="Đã đặt")
    notes: Optional[str] = None


class TimeRecord(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("employee_id", "day", name="uq_timerecord_employee_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(index=True, foreign_key="employee.id")
    employee_name: str = ""
    day: date = Field(index=True)
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    total_hours: Optional[float] = None
    status: str = Field(default="working", description="working / completed / absent")
