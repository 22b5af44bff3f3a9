from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.schemas.course import UNASSIGNED_TEACHER, UNLINKED_CLASS, UNTITLED_COURSE


class ScheduleItem(BaseModel):
    """
    A CourseRecord as the schedule page keeps it: placeholders filled in,
    clazz falling back to room, non-numeric duration/attendance dropped.
    `datetime` is the preformatted "周X HH:MM - HH:MM" label.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = UNTITLED_COURSE
    datetime: str = ""
    teacher: str = UNASSIGNED_TEACHER
    clazz: str = UNLINKED_CLASS
    status: str = ""
    duration_minutes: Optional[float] = None
    attendance_rate: Optional[float] = None
    date_start: Optional[str] = None
    date_end: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _fill_placeholders(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        data["name"] = data.get("name") or UNTITLED_COURSE
        data["teacher"] = data.get("teacher") or UNASSIGNED_TEACHER
        data["clazz"] = data.get("clazz") or data.get("room") or UNLINKED_CLASS
        data["status"] = data.get("status") or ""
        return data

    @field_validator("duration_minutes", "attendance_rate", mode="before")
    @classmethod
    def _numbers_only(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        return v

    @field_validator("date_start", "date_end", mode="before")
    @classmethod
    def _empty_date_is_none(cls, v):
        return v if isinstance(v, str) and v else None
