"""Contact adapter — the CRM's people, table ``contact4``."""
from typing import ClassVar, Tuple

from schemas import Contact
from store.repositories.base import RecordAdapter


class ContactAdapter(RecordAdapter[Contact]):
    entity: ClassVar[str] = "Contact"
    table: ClassVar[str] = "contact4"
    model = Contact
    filter_keys: ClassVar[Tuple[str, ...]] = ("stage",)
