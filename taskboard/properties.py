"""
User-defined task properties.

A property is a named, typed value attached to a task. The type decides both
how the UI renders the input and which values are accepted; the rules live
in coerce_value() so the API, the default-property template and the sorting
code all agree on what a stored value looks like.
"""
from __future__ import annotations

import math
import re
import uuid
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)


class PropertyType(str, Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    CHECKBOX = "CHECKBOX"
    SELECT = "SELECT"
    MULTI_SELECT = "MULTI_SELECT"
    DATE = "DATE"
    URL = "URL"
    EMAIL = "EMAIL"
    PHONE = "PHONE"


PROPERTY_TYPES = [t.value for t in PropertyType]
OPTION_TYPES = {PropertyType.SELECT, PropertyType.MULTI_SELECT}

_PHONE_RE = re.compile(r"^\+?[\d ().\-]+$")
_MAX_PHONE_LENGTH = 20
_MIN_PHONE_DIGITS = 7

_email = TypeAdapter(EmailStr)
_url = TypeAdapter(AnyHttpUrl)
_date = TypeAdapter(date)
_bool = TypeAdapter(bool)


def new_id() -> str:
    return str(uuid.uuid4())


class SelectOption(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return v.strip()


def clean_options(ptype: PropertyType, options: Optional[Iterable[SelectOption]]) -> Optional[List[SelectOption]]:
    """Options only exist on select types; blank-named options are dropped."""
    if PropertyType(ptype) not in OPTION_TYPES:
        return None
    return [o for o in options or [] if o.name]


def blank_value(ptype: PropertyType | str) -> Any:
    ptype = PropertyType(ptype)
    if ptype is PropertyType.MULTI_SELECT:
        return []
    if ptype is PropertyType.CHECKBOX:
        return False
    return None


def _require_str(ptype: PropertyType, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{ptype.value} value must be a string")
    return value.strip()


def coerce_value(ptype: PropertyType | str, value: Any, options: Optional[Iterable[SelectOption]] = None) -> Any:
    """Validate `value` for `ptype` and return its stored form. Raises ValueError."""
    ptype = PropertyType(ptype)
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return blank_value(ptype)

    if ptype is PropertyType.TEXT:
        if not isinstance(value, str):
            raise ValueError("TEXT value must be a string")
        return value

    if ptype is PropertyType.NUMBER:
        if isinstance(value, bool):
            raise ValueError("NUMBER value must be numeric")
        if isinstance(value, (int, float)):
            num = value
        elif isinstance(value, str):
            try:
                num = float(value.strip())
            except ValueError:
                raise ValueError("NUMBER value must be numeric") from None
        else:
            raise ValueError("NUMBER value must be numeric")
        if isinstance(num, float):
            if not math.isfinite(num):
                raise ValueError("NUMBER value must be finite")
            if num.is_integer():
                return int(num)
        return num

    if ptype is PropertyType.CHECKBOX:
        try:
            return _bool.validate_python(value)
        except ValidationError:
            raise ValueError("CHECKBOX value must be true or false") from None

    names = [o.name for o in options or []]

    if ptype is PropertyType.SELECT:
        if not isinstance(value, str) or value not in names:
            raise ValueError(f"SELECT value must be one of {names}")
        return value

    if ptype is PropertyType.MULTI_SELECT:
        if not isinstance(value, list):
            raise ValueError("MULTI_SELECT value must be a list")
        out: List[str] = []
        for item in value:
            if not isinstance(item, str) or item not in names:
                raise ValueError(f"MULTI_SELECT values must be among {names}")
            if item not in out:
                out.append(item)
        return out

    if ptype is PropertyType.DATE:
        raw = _require_str(ptype, value)
        try:
            return _date.validate_python(raw).isoformat()
        except ValidationError:
            raise ValueError("DATE value must be an ISO date (YYYY-MM-DD)") from None

    if ptype is PropertyType.URL:
        raw = _require_str(ptype, value)
        try:
            _url.validate_python(raw)
        except ValidationError:
            raise ValueError("URL value must be an http(s) URL") from None
        return raw

    if ptype is PropertyType.EMAIL:
        raw = _require_str(ptype, value)
        try:
            _email.validate_python(raw)
        except ValidationError:
            raise ValueError("EMAIL value must be an email address") from None
        return raw

    # PHONE
    raw = _require_str(ptype, value)
    if (
        len(raw) > _MAX_PHONE_LENGTH
        or not _PHONE_RE.match(raw)
        or sum(c.isdigit() for c in raw) < _MIN_PHONE_DIGITS
    ):
        raise ValueError("PHONE value must be a phone number")
    return raw


class TaskProperty(BaseModel):
    """A property instance carried by a task."""

    id: str = Field(default_factory=new_id)
    name: str = Field(max_length=50)
    type: PropertyType
    value: Any = None
    options: Optional[List[SelectOption]] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @model_validator(mode="after")
    def _check_value(self) -> "TaskProperty":
        self.options = clean_options(self.type, self.options)
        self.value = coerce_value(self.type, self.value, self.options)
        return self

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True) | {"value": self.value}


TaskPropertyList = TypeAdapter(List[TaskProperty])


def reset_changed_types(stored: Iterable[Dict[str, Any]], incoming: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """A property that keeps its id but switches type starts over with a blank value."""
    previous = {p.get("id"): p.get("type") for p in stored or []}
    out = []
    for prop in incoming:
        prop = dict(prop)
        pid = prop.get("id")
        if pid in previous and prop.get("type") != previous[pid]:
            prop["value"] = None
        out.append(prop)
    return out


def instantiate_defaults(defaults: Iterable[Any]) -> List[Dict[str, Any]]:
    """Turn DefaultProperty rows into fresh task properties with blank values."""
    out = []
    for d in defaults:
        ptype = PropertyType(d.type)
        prop: Dict[str, Any] = {"id": new_id(), "name": d.name, "type": ptype.value, "value": blank_value(ptype)}
        if ptype in OPTION_TYPES:
            prop["options"] = list(d.options or [])
        out.append(prop)
    return out
