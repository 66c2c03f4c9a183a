"""Project schema."""
from typing import Any, ClassVar, Optional, Tuple

from pydantic import AliasChoices, Field, field_validator

from schemas.common import CrmRecord, Priority, ProjectStatus
from schemas.fields import normalize_date


class Project(CrmRecord):
    # The project name lives in the store's generic Name column.
    entity_fields: ClassVar[Tuple[str, ...]] = ("description", "priority", "due_date", "status")

    name: str = Field(default="", validation_alias=AliasChoices("name", "Name"))
    description: str = ""
    priority: Priority = "medium"
    status: ProjectStatus = "active"
    due_date: Optional[str] = Field(default=None, validation_alias=AliasChoices("due_date", "dueDate"))

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value: Any) -> Optional[str]:
        return normalize_date(value)
