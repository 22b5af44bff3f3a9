import logging
from typing import Any, Dict

import requests

from app.config import Settings, settings as default_settings

logger = logging.getLogger("app.notion")

UNKNOWN_ERROR = "未知错误"


class NotionAPIError(Exception):
    """Upstream call failed; status_code/detail are passed through to our caller as-is."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"Notion API error ({status_code})")
        self.status_code = status_code
        self.detail = detail


def build_query_body(cfg: Settings) -> Dict[str, Any]:
    return {
        "page_size": cfg.NOTION_PAGE_SIZE,
        "sorts": [
            {"property": cfg.NOTION_DATE_PROPERTY, "direction": "ascending"},
        ],
    }


def build_headers(cfg: Settings) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {cfg.NOTION_API_TOKEN}",
        "Notion-Version": cfg.NOTION_API_VERSION,
        "Content-Type": "application/json",
    }


def query_database(cfg: Settings | None = None) -> Dict[str, Any]:
    """
    POST /databases/{id}/query, first page only (no cursor follow-up).

    Returns the decoded JSON body. A 2xx body that is not a JSON object comes
    back as {} so callers just see zero results.
    Raises NotionAPIError on network failure (500) or any non-2xx response.
    """
    cfg = cfg or default_settings
    url = f"{cfg.NOTION_API_BASE_URL.rstrip('/')}/databases/{cfg.NOTION_DATABASE_ID}/query"

    try:
        resp = requests.post(url, json=build_query_body(cfg), headers=build_headers(cfg))
    except requests.RequestException as e:
        raise NotionAPIError(500, str(e) or UNKNOWN_ERROR) from e

    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text or UNKNOWN_ERROR
        raise NotionAPIError(resp.status_code, detail)

    try:
        data = resp.json()
    except ValueError:
        logger.warning("[Notion] non-JSON body from %s (%s bytes)", url, len(resp.content or b""))
        return {}

    return data if isinstance(data, dict) else {}
