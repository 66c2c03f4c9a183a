from .common import (
    PIPELINE_STAGES,
    CrmRecord,
    Priority,
    ProjectStatus,
    RecordId,
    Stage,
    TaskCategory,
    TaskStatus,
)
from .contact import Contact
from .opportunity import Opportunity
from .project import Project
from .task import Task

__all__ = [
    "PIPELINE_STAGES", "CrmRecord", "RecordId",
    "Stage", "Priority", "ProjectStatus", "TaskStatus", "TaskCategory",
    "Contact", "Opportunity", "Project", "Task",
]
