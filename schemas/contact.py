"""Contact schema."""
from typing import ClassVar, Tuple

from pydantic import AliasChoices, Field

from schemas.common import CrmRecord, Stage


class Contact(CrmRecord):
    entity_fields: ClassVar[Tuple[str, ...]] = (
        "first_name", "last_name", "email", "phone", "company", "position", "stage",
    )

    first_name: str = Field(default="", validation_alias=AliasChoices("firstName", "first_name"))
    last_name: str = Field(default="", validation_alias=AliasChoices("lastName", "last_name"))
    email: str = ""
    phone: str = ""
    company: str = ""
    position: str = ""
    stage: Stage = "lead"

    @property
    def display_name(self) -> str:
        """The store's ``Name`` column: first and last name joined."""
        return f"{self.first_name} {self.last_name}".strip()
