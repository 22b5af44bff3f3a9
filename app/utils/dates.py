import math
import re
from datetime import datetime
from typing import Optional

DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_datetime(value) -> Optional[datetime]:
    """
    Notion 回傳的日期字串 -> datetime
    "2025-10-20", "2025-10-20T09:00:00.000+08:00", "2025-10-20T01:00:00Z" ...
    Unparseable or non-string input -> None
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def to_epoch_ms(dt: datetime) -> int:
    # naive datetime 視為本地時間（datetime.timestamp 的預設行為）
    whole_seconds = dt.replace(microsecond=0).timestamp()
    return int(whole_seconds) * 1000 + dt.microsecond // 1000


def round_half_up(x: float) -> int:
    # 與瀏覽器 Math.round 一致：0.5 一律進位
    return math.floor(x + 0.5)
