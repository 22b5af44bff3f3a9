# app/utils/notion_props.py
import re
from typing import Any, Dict, NamedTuple, Optional

from app.schemas.notion import (
    DateProperty,
    FormulaProperty,
    MultiSelectProperty,
    NumberProperty,
    PeopleProperty,
    RelationProperty,
    RichTextProperty,
    RollupProperty,
    SelectProperty,
    StatusProperty,
    TitleProperty,
    parse_property,
)

PERCENT_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)%")
MULTI_SELECT_SEP = "、"


class DateRange(NamedTuple):
    start: Optional[str]
    end: Optional[str]


def _join_plain_text(items) -> str:
    return "".join(t.plain_text for t in items if t.plain_text)


def read_property_text(props: Dict[str, Any], key: str) -> str:
    """
    Flatten a text-like property into a display string.

    title / rich_text -> concatenated plain_text
    select / status   -> option name
    multi_select      -> names joined with "、"
    people / relation -> "3位老师" / "2个班级" (count only, names need extra API calls)
    anything else     -> ""
    """
    p = parse_property((props or {}).get(key))

    if isinstance(p, TitleProperty):
        return _join_plain_text(p.title)
    if isinstance(p, RichTextProperty):
        return _join_plain_text(p.rich_text)
    if isinstance(p, SelectProperty):
        return (p.select.name if p.select else None) or ""
    if isinstance(p, StatusProperty):
        return (p.status.name if p.status else None) or ""
    if isinstance(p, MultiSelectProperty):
        return MULTI_SELECT_SEP.join(s.name for s in p.multi_select if s.name)
    if isinstance(p, PeopleProperty):
        return f"{len(p.people)}位老师" if p.people else ""
    if isinstance(p, RelationProperty):
        return f"{len(p.relation)}个班级" if p.relation else ""
    return ""


def read_number_like(props: Dict[str, Any], key: str) -> Optional[float]:
    """number / rollup / formula, or a "85.5%" style string inside rich_text."""
    p = parse_property((props or {}).get(key))

    if isinstance(p, NumberProperty):
        return p.number
    if isinstance(p, RollupProperty):
        return p.rollup.number if p.rollup else None
    if isinstance(p, FormulaProperty):
        return p.formula.number if p.formula else None
    if isinstance(p, RichTextProperty):
        txt = "".join(t.plain_text or "" for t in p.rich_text)
        if not txt:
            return None
        m = PERCENT_RE.search(txt)
        if m:
            return float(m.group(1))
        return _parse_leading_float(txt)
    return None


def _parse_leading_float(txt: str) -> Optional[float]:
    # 同 parseFloat：只取開頭的數字部分，"92 分" -> 92.0
    m = re.match(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)", txt)
    return float(m.group(1)) if m else None


def read_date_range(props: Dict[str, Any], key: str) -> DateRange:
    p = parse_property((props or {}).get(key))
    if isinstance(p, DateProperty) and p.date:
        return DateRange(p.date.start or None, p.date.end or None)
    return DateRange(None, None)


def read_status(props: Dict[str, Any], key: str) -> str:
    p = parse_property((props or {}).get(key))
    if isinstance(p, StatusProperty) and p.status:
        return p.status.name or ""
    return ""
