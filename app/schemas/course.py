from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


UNTITLED_COURSE = "未命名课程"
UNASSIGNED_TEACHER = "未指定老师"
UNLINKED_CLASS = "未关联班级"


class CourseRecord(BaseModel):
    """One scheduled session as served by GET /api/courses (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = UNTITLED_COURSE
    date_start: Optional[str] = None
    date_end: Optional[str] = None
    teacher: str = UNASSIGNED_TEACHER
    room: str = ""
    clazz: str = ""
    status: str = ""
    duration_minutes: Optional[int] = None
    attendance_rate: Optional[float] = None


class CoursesOut(BaseModel):
    ok: bool = True
    data: List[CourseRecord] = []


class ErrorOut(BaseModel):
    ok: bool = False
    error: str
    detail: Any = None


class HealthOut(BaseModel):
    status: str
    time: str
