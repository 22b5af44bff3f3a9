# app/client/render.py
from datetime import datetime
from typing import Iterable, Optional

from jinja2 import DictLoader, Environment
from markupsafe import Markup

from app.schemas.course import UNASSIGNED_TEACHER, UNLINKED_CLASS, UNTITLED_COURSE
from app.utils.dates import parse_iso_datetime, round_half_up


NO_TIME = "未设置时间"
EMPTY_WEEK = "本周暂无课程"
WEEKDAYS = ["周一", "周二", "周三", "周四", "周五", "周六", "周日"]

# 四種標準狀態名稱
STATUS_CLASSES = {
    "进行中": "status-ongoing",
    "计划中": "status-planned",
    "已完成": "status-completed",
    "已取消": "status-cancelled",
}

# 其他文案用關鍵字比對，順序有意義
STATUS_KEYWORDS = [
    (("进行",), "status-ongoing"),
    (("计划", "未开始"), "status-planned"),
    (("完成",), "status-completed"),
    (("取消",), "status-cancelled"),
]
DEFAULT_STATUS_CLASS = "status-planned"

PAGE_TITLES = {"current": "本周课表", "next": "下周课表"}
TAB_LABELS = {"current": "本周", "next": "下周"}


def map_status_to_class(status_text) -> str:
    s = str(status_text or "").strip()
    if s in STATUS_CLASSES:
        return STATUS_CLASSES[s]
    for keywords, css_class in STATUS_KEYWORDS:
        if any(k in s for k in keywords):
            return css_class
    return DEFAULT_STATUS_CLASS


def attendance_percent(value: float) -> int:
    """
    Attendance comes either as a fraction (0.85) or a percentage (85).
    <= 1 is read as a fraction, so a true "1%" shows as 100%.
    The data source does not say which unit it uses; keep this rule until it does.
    """
    return round_half_up(value * 100) if value <= 1 else round_half_up(value)


def format_attendance(value) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    return f"出勤率 {attendance_percent(value)}%"


def _local(dt: datetime) -> datetime:
    # 帶時區的轉成本地時間，naive 視為已是本地
    return dt.astimezone() if dt.tzinfo else dt


def format_week_time(start_iso: Optional[str], end_iso: Optional[str]) -> str:
    """Start/end ISO strings -> "周三 09:00" or "周三 09:00 - 10:30" in local time."""
    start = parse_iso_datetime(start_iso)
    if start is None:
        return NO_TIME
    start = _local(start)
    start_str = f"{WEEKDAYS[start.weekday()]} {start:%H:%M}"

    end = parse_iso_datetime(end_iso)
    if end is None:
        return start_str
    return f"{start_str} - {_local(end):%H:%M}"


# 卡片與頁面模板，文字一律經 autoescape
CARD_TEMPLATE = (
    '{% macro meta(label, value) %}'
    '<div class="meta"><span class="meta-label">{{ label }}</span>'
    '<span class="meta-value">{{ value }}</span></div>'
    '{% endmacro %}'
    '<section class="class-card">'
    '{% if item.attendance_rate is number %}'
    '<div class="attendance-badge">{{ item.attendance_rate | attendance }}</div>'
    '{% endif %}'
    '<div class="card-left">'
    '{% if item.status %}'
    '<span class="status-badge {{ item.status | status_class }}">{{ item.status }}</span>'
    '{% endif %}'
    '<div class="course-name">{{ item.name or untitled }}</div>'
    '<div class="course-datetime">{{ item.datetime or no_time }}'
    '{% if item.duration_minutes is number and item.duration_minutes > 0 %}'
    ' · {{ item.duration_minutes | minutes }}分钟'
    '{% endif %}</div>'
    '</div>'
    '<div class="card-right">'
    '{{ meta("老师", item.teacher or unassigned) }}'
    '{{ meta("班级", item.clazz or unlinked) }}'
    '</div>'
    '</section>'
)

SCHEDULE_TEMPLATE = (
    '{% if not items %}<div class="empty">{{ empty_week }}</div>'
    '{% else %}{% for item in items %}'
    '{% if not loop.first %}\n{% endif %}{% include "card.html" %}'
    '{% endfor %}{% endif %}'
)

TAB_TEMPLATE = (
    '<button class="week-tab{% if view.tabs[week].active %} active{% endif %}" '
    'data-week="{{ week }}" '
    'aria-selected="{{ "true" if view.tabs[week].active else "false" }}" '
    'aria-label="{{ tab_aria_label(week, view.tabs[week].count) }}">'
    '{{ tab_labels[week] }}'
    '<span class="tab-count"{% if view.tabs[week].count == 0 %} style="display:none"{% endif %}>'
    '{{ view.tabs[week].count }}</span>'
    '</button>'
)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ view.page_title }}</title>
<link rel="stylesheet" href="style.css">
</head>
<body>
<h1 class="page-title">{{ view.page_title }}</h1>
<nav class="week-tabs" role="tablist">{% for week in weeks %}{% include "tab.html" %}{% endfor %}</nav>
<div id="loading" style="display:{{ "block" if view.loading else "none" }}">{{ view.loading_text }}</div>
<div id="error" style="display:{{ "block" if view.error else "none" }}">{{ view.error or "" }}</div>
<div id="schedule" class="schedule{% if view.is_fading %} is-fading{% endif %}">
{{ content }}
</div>
</body>
</html>
"""


def tab_aria_label(week: str, count: int) -> str:
    return f"{TAB_LABELS[week]}（{count}节课）"


def _format_minutes(value) -> str:
    return f"{value:g}"


def build_environment() -> Environment:
    env = Environment(
        loader=DictLoader({
            "card.html": CARD_TEMPLATE,
            "schedule.html": SCHEDULE_TEMPLATE,
            "tab.html": TAB_TEMPLATE,
            "page.html": PAGE_TEMPLATE,
        }),
        autoescape=True,
        keep_trailing_newline=True,
    )
    env.filters["status_class"] = map_status_to_class
    env.filters["attendance"] = format_attendance
    env.filters["minutes"] = _format_minutes
    env.globals.update(
        tab_aria_label=tab_aria_label,
        tab_labels=TAB_LABELS,
        untitled=UNTITLED_COURSE,
        unassigned=UNASSIGNED_TEACHER,
        unlinked=UNLINKED_CLASS,
        no_time=NO_TIME,
        empty_week=EMPTY_WEEK,
    )
    return env


env = build_environment()


def render_schedule(items: Iterable) -> str:
    """HTML for the #schedule container: one card per course, or the empty-week placeholder."""
    return env.get_template("schedule.html").render(items=list(items or []))


def render_page(view) -> str:
    """Full HTML document for a ScheduleView snapshot."""
    return env.get_template("page.html").render(
        view=view,
        weeks=("current", "next"),
        # content_html 已由 render_schedule 轉義過
        content=Markup(view.content_html),
    )
