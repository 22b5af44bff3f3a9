# app/routers/courses.py
from fastapi import APIRouter

from app.schemas.course import CoursesOut
from app.utils.course_mapping import page_to_course
from app.utils.notion_client import query_database

import logging
logger = logging.getLogger("app.courses")


router = APIRouter(prefix="/api", tags=["Courses"])


@router.get("/courses", response_model=CoursesOut, response_model_by_alias=True)
def list_courses():
    """
    查詢 Notion 資料庫並回傳精簡後的課程清單。
    Upstream failures raise NotionAPIError, turned into the error envelope in main.py.
    """
    payload = query_database()

    results = payload.get("results") or []
    if not isinstance(results, list):
        results = []
    logger.info("[Notion] results=%d", len(results))
    first = results[0] if results and isinstance(results[0], dict) else None
    if first and isinstance(first.get("properties"), dict):
        logger.debug("[Notion] property keys: %s", list(first["properties"].keys()))

    courses = [page_to_course(page) for page in results if isinstance(page, dict)]

    logger.info("[Courses] mapped=%d", len(courses))
    logger.debug("[Courses] preview: %s", [c.model_dump(by_alias=True) for c in courses[:2]])

    return CoursesOut(ok=True, data=courses)
