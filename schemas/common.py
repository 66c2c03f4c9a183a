"""Shared CRM enumerations and the base record schema."""
from collections.abc import Mapping
from typing import Any, ClassVar, List, Literal, Optional, Set, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from schemas.fields import reference_id, split_tags

Stage = Literal["lead", "qualified", "proposal", "negotiation", "closed"]
Priority = Literal["low", "medium", "high"]
ProjectStatus = Literal["active", "on-hold", "completed", "cancelled"]
TaskStatus = Literal["todo", "progress", "review", "done"]
TaskCategory = Literal["work", "personal", "shopping", "health", "learning"]

PIPELINE_STAGES: Tuple[str, ...] = ("lead", "qualified", "proposal", "negotiation", "closed")

RecordId = Union[int, str]

# Columns every table carries; the audit ones are read-only.
COMMON_FIELDS: Tuple[str, ...] = ("Name", "Tags", "Owner")
AUDIT_FIELDS: Tuple[str, ...] = ("CreatedOn", "CreatedBy", "ModifiedOn", "ModifiedBy")


class CrmRecord(BaseModel):
    """Fields and coercions common to every CRM entity."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    entity_fields: ClassVar[Tuple[str, ...]] = ()

    id: Optional[RecordId] = Field(default=None, validation_alias=AliasChoices("Id", "id"))
    tags: List[str] = Field(default_factory=list, validation_alias=AliasChoices("tags", "Tags"))
    owner: Optional[Any] = Field(default=None, validation_alias=AliasChoices("owner", "Owner"))

    created_on: Optional[Any] = Field(default=None, validation_alias=AliasChoices("CreatedOn", "created_on"))
    created_by: Optional[Any] = Field(default=None, validation_alias=AliasChoices("CreatedBy", "created_by"))
    modified_on: Optional[Any] = Field(default=None, validation_alias=AliasChoices("ModifiedOn", "modified_on"))
    modified_by: Optional[Any] = Field(default=None, validation_alias=AliasChoices("ModifiedBy", "modified_by"))

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        # Store records carry nulls and "" for unset columns; let defaults apply.
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None and v != ""}
        return data

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value: Any) -> List[str]:
        return split_tags(value)

    @field_validator("owner", mode="before")
    @classmethod
    def unwrap_owner(cls, value: Any) -> Any:
        return reference_id(value)

    @classmethod
    def supplied_fields(cls, data: Mapping[str, Any]) -> Set[str]:
        """Names of the fields a raw draft carries a key for, under any alias.

        Blank values count: ``{"comments": ""}`` supplies ``comments``.
        """
        supplied = set()
        for name, info in cls.model_fields.items():
            keys = {name}
            alias = info.validation_alias
            if isinstance(alias, AliasChoices):
                keys.update(choice for choice in alias.choices if isinstance(choice, str))
            elif isinstance(alias, str):
                keys.add(alias)
            if keys & set(data):
                supplied.add(name)
        return supplied

    @classmethod
    def updateable_fields(cls) -> Tuple[str, ...]:
        return COMMON_FIELDS + cls.entity_fields

    @classmethod
    def fetch_fields(cls) -> List[str]:
        return [*COMMON_FIELDS, *AUDIT_FIELDS, *cls.entity_fields]
