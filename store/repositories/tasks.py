"""Task adapter — tasks can be filtered down to a single project."""
from typing import ClassVar, Tuple

from schemas import Task
from store.repositories.base import RecordAdapter


class TaskAdapter(RecordAdapter[Task]):
    entity: ClassVar[str] = "Task"
    table: ClassVar[str] = "task1"
    model = Task
    filter_keys: ClassVar[Tuple[str, ...]] = ("status", "priority", "category", "project_id")
