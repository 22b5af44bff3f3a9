from datetime import datetime, timezone
from fastapi import APIRouter

from app.schemas.course import HealthOut

router = APIRouter(tags=["Health"])


def iso_now() -> str:
    # 2025-10-20T01:02:03.456Z，與瀏覽器 toISOString 同格式
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# liveness only，不檢查 Notion 連線
@router.get("/health", response_model=HealthOut)
def health():
    return HealthOut(status="ok", time=iso_now())
