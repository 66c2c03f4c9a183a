"""Opportunity adapter — sales pipeline deals."""
from typing import ClassVar, Tuple

from schemas import Opportunity
from store.repositories.base import RecordAdapter


class OpportunityAdapter(RecordAdapter[Opportunity]):
    entity: ClassVar[str] = "Opportunity"
    table: ClassVar[str] = "opportunity"
    model = Opportunity
    filter_keys: ClassVar[Tuple[str, ...]] = ("stage",)
