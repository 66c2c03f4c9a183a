"""Record adapters for the CRM entities.

Each adapter exposes the same contract over its store table:
- fetch(filters), get_by_id(id), create(records), update(records), delete(ids)

- contacts: ContactAdapter (filter: stage)
- opportunities: OpportunityAdapter (filter: stage)
- projects: ProjectAdapter (filters: status, priority)
- tasks: TaskAdapter (filters: status, priority, category, project_id)
"""
from store.repositories.base import BulkFailure, BulkResult, RecordAdapter
from store.repositories.contacts import ContactAdapter
from store.repositories.opportunities import OpportunityAdapter
from store.repositories.projects import ProjectAdapter
from store.repositories.tasks import TaskAdapter

__all__ = [
    "RecordAdapter", "BulkResult", "BulkFailure",
    "ContactAdapter", "OpportunityAdapter", "ProjectAdapter", "TaskAdapter",
]
