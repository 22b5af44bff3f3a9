import logging
from typing import List

import requests
from pydantic import ValidationError

from app.client.render import format_week_time
from app.schemas.schedule import ScheduleItem

logger = logging.getLogger("app.client")

GENERIC_API_FAILURE = "接口返回失败"


class ScheduleClientError(Exception):
    """The proxy could not be reached or answered with an error."""


def fetch_courses_from_api(api_url: str) -> List[ScheduleItem]:
    """
    GET {api_url}/api/courses and turn each record into a ScheduleItem.

    Raises ScheduleClientError for non-2xx answers, for {"ok": false} and for
    records whose fields do not validate.
    Connection errors from requests propagate unchanged.
    """
    url = f"{api_url.rstrip('/')}/api/courses"
    res = requests.get(url)
    if not res.ok:
        raise ScheduleClientError(f"代理接口错误({res.status_code}): {res.text}")

    try:
        payload = res.json()
    except ValueError as e:
        raise ScheduleClientError(GENERIC_API_FAILURE) from e

    if not isinstance(payload, dict) or not payload.get("ok"):
        error = payload.get("error") if isinstance(payload, dict) else None
        raise ScheduleClientError(error or GENERIC_API_FAILURE)

    items = []
    for raw in payload.get("data") or []:
        if not isinstance(raw, dict):
            continue
        try:
            item = ScheduleItem.model_validate(raw)
        except ValidationError as e:
            logger.warning("[Client] malformed course record: %s", e)
            raise ScheduleClientError(GENERIC_API_FAILURE) from e
        items.append(item.model_copy(update={"datetime": format_week_time(item.date_start, item.date_end)}))

    logger.info("[Client] fetched %d courses from %s", len(items), url)
    return items
