from typing import Any, Dict, Optional

from app.config import Settings, settings as default_settings
from app.schemas.course import CourseRecord, UNASSIGNED_TEACHER, UNTITLED_COURSE
from app.utils.dates import parse_iso_datetime, round_half_up, to_epoch_ms
from app.utils.notion_props import (
    read_date_range,
    read_number_like,
    read_property_text,
    read_status,
)


def compute_duration_minutes(start_iso: Optional[str], end_iso: Optional[str]) -> Optional[int]:
    """
    (end - start) in whole minutes, never negative.
    None unless both ends are present and parseable.
    """
    if not start_iso or not end_iso:
        return None
    start = parse_iso_datetime(start_iso)
    end = parse_iso_datetime(end_iso)
    if start is None or end is None:
        return None
    diff_ms = max(0, to_epoch_ms(end) - to_epoch_ms(start))
    return round_half_up(diff_ms / 60000)


def read_course_title(props: Dict[str, Any], keys) -> str:
    for key in keys:
        title = read_property_text(props, key)
        if title:
            return title
    return ""


def page_to_course(page: Dict[str, Any], cfg: Settings | None = None) -> CourseRecord:
    """One Notion database page -> CourseRecord (all display fields filled)."""
    cfg = cfg or default_settings
    props = page.get("properties") or {}
    if not isinstance(props, dict):
        props = {}

    title = read_course_title(props, cfg.NOTION_TITLE_PROPERTIES)
    teacher = read_property_text(props, cfg.NOTION_TEACHER_PROPERTY)
    # room 先用關聯班級名稱佔位；clazz 同值，前端顯示「班级」
    room = read_property_text(props, cfg.NOTION_CLASS_PROPERTY)
    status = read_status(props, cfg.NOTION_STATUS_PROPERTY)
    attendance = read_number_like(props, cfg.NOTION_ATTENDANCE_PROPERTY)
    start_iso, end_iso = read_date_range(props, cfg.NOTION_DATE_PROPERTY)

    return CourseRecord(
        name=title or UNTITLED_COURSE,
        date_start=start_iso,
        date_end=end_iso,
        teacher=teacher or UNASSIGNED_TEACHER,
        room=room,
        clazz=room,
        status=status,
        duration_minutes=compute_duration_minutes(start_iso, end_iso),
        attendance_rate=attendance,
    )
