import os
import tempfile
from datetime import date

import pytest

# keep test runs from writing into ./logs
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="schedule-logs-"))

# Wednesday; its week runs 2025-10-20 (Mon) .. 2025-10-26 (Sun)
WEDNESDAY = date(2025, 10, 22)


def make_page(
    title="钢琴基础",
    teachers=1,
    classes=2,
    status="进行中",
    attendance=0.85,
    start="2025-10-20T09:00:00.000+08:00",
    end="2025-10-20T10:30:00.000+08:00",
):
    props = {
        "课程主题/日期": {"type": "title", "title": [{"plain_text": title}] if title else []},
        "老师": {"type": "people", "people": [{"id": f"u{i}"} for i in range(teachers)]},
        "关联班级": {"type": "relation", "relation": [{"id": f"c{i}"} for i in range(classes)]},
        "课程状态": {"type": "status", "status": {"name": status} if status else None},
        "出勤率": {"type": "formula", "formula": {"type": "number", "number": attendance}},
        "日期": {"type": "date", "date": {"start": start, "end": end} if start else None},
    }
    return {"object": "page", "id": "page-1", "properties": props}


@pytest.fixture()
def notion_page():
    return make_page()
