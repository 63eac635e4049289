from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

WorkType = Literal["off", "full", "half", "quarter", "custom"]


class _CamelModel(BaseModel):
    # Dữ liệu cũ lưu theo camelCase (workType, startTime ...); nhận cả hai kiểu tên
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DaySchedule(_CamelModel):
    work_type: WorkType
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @property
    def has_window(self) -> bool:
        return bool(self.start_time) and bool(self.end_time)

    @property
    def window_label(self) -> str:
        return f"{self.start_time}-{self.end_time}"


class ScheduleOverride(_CamelModel):
    date: str
    schedule: DaySchedule
    reason: Optional[str] = None


class WorkSchedule(_CamelModel):
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    default_schedule: dict[int, DaySchedule] = Field(default_factory=dict)
    schedule_overrides: list[ScheduleOverride] = Field(default_factory=list)

    @field_validator("employee_id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("default_schedule")
    @classmethod
    def _weekday_keys(cls, v: dict[int, DaySchedule]) -> dict[int, DaySchedule]:
        bad = [k for k in v if not 0 <= k <= 6]
        if bad:
            raise ValueError(f"weekday keys must be 0..6 (0=Sunday), got {sorted(bad)}")
        return v

    def find_override(self, date_string: str) -> ScheduleOverride | None:
        # Nếu trùng ngày thì lấy override đầu tiên theo thứ tự lưu
        for override in self.schedule_overrides:
            if override.date == date_string:
                return override
        return None

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


def as_work_schedule(value: Any) -> WorkSchedule | None:
    """
    Chuyển dữ liệu lịch làm việc thô (dict từ DB/JSON, model, hoặc None) thành WorkSchedule.
    Đây là chỗ duy nhất đọc dữ liệu lịch chưa kiểm tra; bên trong resolver chỉ dùng model đã validate.
    """
    if value is None:
        return None
    if isinstance(value, WorkSchedule):
        return value
    return WorkSchedule.model_validate(value)


def work_schedule_of(employee: Any) -> WorkSchedule | None:
    if isinstance(employee, dict):
        raw = employee.get("work_schedule", employee.get("workSchedule"))
    else:
        raw = getattr(employee, "work_schedule", None)
    return as_work_schedule(raw)
