"""
Notion page property shapes.

Every property object Notion returns carries a ``type`` tag plus a payload
under the key of the same name, e.g. ``{"type": "select", "select": {...}}``.
Each tag we read gets its own model; anything else becomes ``UnknownProperty``
so readers never have to poke at raw dicts.
"""
from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel, ValidationError


class RichTextItem(BaseModel):
    plain_text: Optional[str] = None


class SelectOption(BaseModel):
    name: Optional[str] = None


class DateValue(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None


class NumberValue(BaseModel):
    # rollup / formula 只取數值結果，其餘型別（array、string...）忽略
    number: Optional[float] = None


class TitleProperty(BaseModel):
    type: Literal["title"]
    title: List[RichTextItem] = []


class RichTextProperty(BaseModel):
    type: Literal["rich_text"]
    rich_text: List[RichTextItem] = []


class SelectProperty(BaseModel):
    type: Literal["select"]
    select: Optional[SelectOption] = None


class MultiSelectProperty(BaseModel):
    type: Literal["multi_select"]
    multi_select: List[SelectOption] = []


class StatusProperty(BaseModel):
    type: Literal["status"]
    status: Optional[SelectOption] = None


class DateProperty(BaseModel):
    type: Literal["date"]
    date: Optional[DateValue] = None


class PeopleProperty(BaseModel):
    type: Literal["people"]
    people: List[Any] = []


class RelationProperty(BaseModel):
    type: Literal["relation"]
    relation: List[Any] = []


class NumberProperty(BaseModel):
    type: Literal["number"]
    number: Optional[float] = None


class RollupProperty(BaseModel):
    type: Literal["rollup"]
    rollup: Optional[NumberValue] = None


class FormulaProperty(BaseModel):
    type: Literal["formula"]
    formula: Optional[NumberValue] = None


class UnknownProperty(BaseModel):
    type: str = ""


NotionProperty = Union[
    TitleProperty,
    RichTextProperty,
    SelectProperty,
    MultiSelectProperty,
    StatusProperty,
    DateProperty,
    PeopleProperty,
    RelationProperty,
    NumberProperty,
    RollupProperty,
    FormulaProperty,
    UnknownProperty,
]

PROPERTY_MODELS = {
    "title": TitleProperty,
    "rich_text": RichTextProperty,
    "select": SelectProperty,
    "multi_select": MultiSelectProperty,
    "status": StatusProperty,
    "date": DateProperty,
    "people": PeopleProperty,
    "relation": RelationProperty,
    "number": NumberProperty,
    "rollup": RollupProperty,
    "formula": FormulaProperty,
}


def parse_property(raw: Any) -> Optional[NotionProperty]:
    """
    Raw property dict -> tagged model.

    None when the property is missing or has no type tag; UnknownProperty for
    tags we do not read and for payloads that do not match their tag's shape.
    """
    if not isinstance(raw, dict) or not raw.get("type"):
        return None

    tag = raw["type"]
    if not isinstance(tag, str):
        return UnknownProperty()
    model = PROPERTY_MODELS.get(tag)
    if model is None:
        return UnknownProperty(type=str(tag))

    try:
        return model.model_validate(raw)
    except ValidationError:
        return UnknownProperty(type=str(tag))
