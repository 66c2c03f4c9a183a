"""Project adapter."""
from typing import ClassVar, Tuple

from schemas import Project
from store.repositories.base import RecordAdapter


class ProjectAdapter(RecordAdapter[Project]):
    entity: ClassVar[str] = "Project"
    table: ClassVar[str] = "project"
    model = Project
    filter_keys: ClassVar[Tuple[str, ...]] = ("status", "priority")
