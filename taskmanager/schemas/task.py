"""Pydantic schemas for task request/response validation."""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Priority = Literal["low", "medium", "high"]
Tag = Annotated[str, Field(max_length=20)]
TaskId = Annotated[int, Field(gt=0)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # on stocke tout en UTC naïf
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def strip_whitespace(value):
    if isinstance(value, str):
        return value.strip()
    return value


class Attachment(CamelModel):
    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)


# Schemas tâches

class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    due_date: datetime
    priority: Priority = "medium"
    category: Optional[str] = Field(None, max_length=50)
    tags: List[Tag] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("title", "description", "category", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return strip_whitespace(value)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return to_naive_utc(value)


class TaskUpdate(CamelModel):
    """Mise à jour partielle : seuls les champs envoyés sont appliqués."""

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    is_completed: Optional[bool] = None
    category: Optional[str] = Field(None, max_length=50)
    tags: Optional[List[Tag]] = None
    attachments: Optional[List[Attachment]] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("title", "description", "category", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return strip_whitespace(value)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def reject_null_required(self):
        # ces colonnes sont NOT NULL : null explicite interdit
        for name in ("title", "due_date", "priority", "is_completed", "tags", "attachments"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        if "attachments" in changes:
            changes["attachments"] = [a.model_dump() for a in self.attachments]
        return changes


class BulkUpdateRequest(CamelModel):
    task_ids: List[TaskId] = Field(min_length=1)
    updates: TaskUpdate


class BulkDeleteRequest(CamelModel):
    task_ids: List[TaskId] = Field(min_length=1)


class TaskResponse(CamelModel):
    id: int
    user_id: int
    title: str
    description: Optional[str]
    due_date: datetime
    priority: str
    is_completed: bool
    completed_at: Optional[datetime]
    category: Optional[str]
    tags: List[str] = []
    attachments: List[Attachment] = []
    notes: Optional[str]
    status: str
    days_until_due: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", "attachments", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or []


def serialize_task(task) -> dict:
    return TaskResponse.model_validate(task).model_dump(by_alias=True, mode="json")


def serialize_tasks(tasks) -> List[dict]:
    return [serialize_task(task) for task in tasks]
