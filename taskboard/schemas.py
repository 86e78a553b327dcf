from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from .properties import PropertyType, SelectOption, TaskProperty, clean_options


# ---------- Auth ----------
class LoginIn(BaseModel):
    email: EmailStr
    name: Optional[str] = Field(default=None, max_length=200)
    image: Optional[str] = Field(default=None, max_length=1000)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    streak: int = 0


# ---------- Tasks ----------
TaskTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class TaskCreate(BaseModel):
    title: TaskTitle
    duration: int = Field(ge=1, le=1440)
    properties: Optional[List[TaskProperty]] = None


class TaskPatch(BaseModel):
    title: Optional[TaskTitle] = None
    duration: Optional[int] = Field(default=None, ge=1, le=1440)
    completed: Optional[bool] = None
    # validated in the route, after type changes against the stored task are known
    properties: Optional[List[Dict[str, Any]]] = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    duration: int
    completed: bool
    completed_at: Optional[datetime] = None
    properties: List[Dict[str, Any]] = []
    created_at: datetime
    updated_at: datetime


class TaskListOut(BaseModel):
    active: List[TaskOut]
    completed: List[TaskOut]


# ---------- Properties ----------
class PropertyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    type: PropertyType

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class PropertyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    type: PropertyType
    created_at: datetime


class DefaultPropertyIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(max_length=50)
    type: PropertyType
    options: Optional[List[SelectOption]] = None
    value: Any = None  # accepted for symmetry with task properties, not stored

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    def stored_options(self) -> List[Dict[str, Any]]:
        return [o.model_dump(exclude_none=True) for o in clean_options(self.type, self.options) or []]


class DefaultPropertyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    type: PropertyType
    options: List[Dict[str, Any]] = []
    order: int


# ---------- Settings ----------
class AppearanceIn(BaseModel):
    theme: Optional[Literal["system", "light", "dark"]] = None
    task_spacing: Optional[Literal["default", "compact", "comfortable"]] = None


class SettingsOut(BaseModel):
    theme: str
    task_spacing: str
    property_visibility: Dict[str, bool]
    streak: int
    last_completed_on: Optional[date] = None


# ---------- AI ----------
class RecommendIn(BaseModel):
    title: Any = None


class RecommendationOut(BaseModel):
    duration: int
    confidence: float
    choices: List[int]
