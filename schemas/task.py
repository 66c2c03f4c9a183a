"""Task schema."""
from typing import Any, ClassVar, Optional, Tuple

from pydantic import AliasChoices, Field, field_validator

from schemas.common import CrmRecord, Priority, RecordId, TaskCategory, TaskStatus
from schemas.fields import normalize_date, reference_id


class Task(CrmRecord):
    entity_fields: ClassVar[Tuple[str, ...]] = (
        "title", "description", "priority", "status", "due_date", "category",
        "assignee_id", "subtasks", "comments", "project_id",
    )

    # title -> name -> Name, first non-blank wins
    title: str = Field(default="", validation_alias=AliasChoices("title", "name", "Name"))
    description: str = ""
    priority: Priority = "medium"
    status: TaskStatus = "todo"
    category: TaskCategory = "work"
    due_date: Optional[str] = Field(default=None, validation_alias=AliasChoices("due_date", "dueDate"))
    project_id: Optional[RecordId] = Field(default=None, validation_alias=AliasChoices("project_id", "projectId"))
    assignee_id: Optional[RecordId] = Field(default=None, validation_alias=AliasChoices("assignee_id", "assigneeId"))
    subtasks: str = ""
    comments: str = ""

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value: Any) -> Optional[str]:
        return normalize_date(value)

    @field_validator("project_id", "assignee_id", mode="before")
    @classmethod
    def unwrap_reference(cls, value: Any) -> Any:
        return reference_id(value)
