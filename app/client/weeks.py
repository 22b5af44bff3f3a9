"""
Week bucketing for the schedule page.

All comparisons happen on epoch milliseconds in local time. A bare
calendar date ("2025-10-20") means the whole local day: midnight when it is
used as a start bound, 23:59:59.999 when it is used as an end bound.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, NamedTuple, Optional, Tuple

from app.utils.dates import DATE_ONLY_RE, parse_iso_datetime, to_epoch_ms

END_OF_DAY = time(23, 59, 59, 999000)

WEEK_OFFSETS = {"current": 0, "next": 1}


class WeekRange(NamedTuple):
    start: datetime
    end: datetime


def week_offset(week: str) -> int:
    return WEEK_OFFSETS.get(week, 0)


def get_week_range(offset: int = 0, today: Optional[date] = None) -> WeekRange:
    """Monday 00:00:00.000 .. Sunday 23:59:59.999 of the week containing today, shifted by offset weeks."""
    today = today or date.today()
    monday = today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    sunday = monday + timedelta(days=6)
    return WeekRange(datetime.combine(monday, time.min), datetime.combine(sunday, END_OF_DAY))


def get_week_range_ts(offset: int = 0, today: Optional[date] = None) -> Tuple[int, int]:
    start, end = get_week_range(offset, today)
    return to_epoch_ms(start), to_epoch_ms(end)


def is_date_only_string(value) -> bool:
    return isinstance(value, str) and bool(DATE_ONLY_RE.match(value))


def _split_date(value: str) -> date:
    y, m, d = (int(part) for part in value.split("-"))
    return date(y, m, d)


def to_local_start_of_day_ts(value: str) -> int:
    return to_epoch_ms(datetime.combine(_split_date(value), time.min))


def to_local_end_of_day_ts(value: str) -> int:
    return to_epoch_ms(datetime.combine(_split_date(value), END_OF_DAY))


def normalize_to_timestamp(value, as_end: bool = False) -> Optional[int]:
    if not value:
        return None
    if is_date_only_string(value):
        try:
            return to_local_end_of_day_ts(value) if as_end else to_local_start_of_day_ts(value)
        except ValueError:
            # 2025-02-30 之類格式正確但不存在的日期
            return None
    dt = parse_iso_datetime(value)
    return to_epoch_ms(dt) if dt is not None else None


def overlaps_ts(a_start: int, a_end: Optional[int], b_start: int, b_end: int) -> bool:
    # 沒有結束時間就當作瞬時事件
    e = a_end if a_end is not None else a_start
    return a_start <= b_end and e >= b_start


def filter_by_week(items: Iterable, offset: int = 0, today: Optional[date] = None) -> List:
    """Items whose [start, end] overlaps the target week (inclusive). Items without a usable start are dropped."""
    start_ts, end_ts = get_week_range_ts(offset, today)
    out = []
    for item in items or ():
        s = normalize_to_timestamp(getattr(item, "date_start", None), as_end=False)
        if s is None:
            continue
        date_end = getattr(item, "date_end", None)
        e = normalize_to_timestamp(date_end, as_end=bool(date_end))
        if overlaps_ts(s, e, start_ts, end_ts):
            out.append(item)
    return out
