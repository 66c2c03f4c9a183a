"""Opportunity schema."""
from typing import Any, ClassVar, Optional, Tuple

from pydantic import AliasChoices, Field, field_validator

from schemas.common import CrmRecord, RecordId, Stage
from schemas.fields import coerce_float, coerce_int, reference_id


class Opportunity(CrmRecord):
    entity_fields: ClassVar[Tuple[str, ...]] = (
        "title", "value", "stage", "probability", "assigned_to", "contact",
    )

    title: str = Field(default="", validation_alias=AliasChoices("title", "Name"))
    value: float = 0.0
    stage: Stage = "lead"
    probability: int = 0  # percent, 0-100
    assigned_to: str = Field(default="", validation_alias=AliasChoices("assignedTo", "assigned_to"))
    contact: Optional[RecordId] = Field(default=None, validation_alias=AliasChoices("contactId", "contact"))

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, value: Any) -> float:
        return coerce_float(value)

    @field_validator("probability", mode="before")
    @classmethod
    def parse_probability(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("contact", mode="before")
    @classmethod
    def unwrap_contact(cls, value: Any) -> Any:
        return reference_id(value)
