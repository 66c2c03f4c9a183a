"""Service bundle — the adapters the UI layer is handed.

Built around one injected store so callers (and tests) decide which store
the adapters talk to; nothing is constructed at import time.
"""
from dataclasses import dataclass

from store.client import RecordStore
from store.repositories import (
    ContactAdapter,
    OpportunityAdapter,
    ProjectAdapter,
    RecordAdapter,
    TaskAdapter,
)

ENTITY_NAMES = ("contacts", "opportunities", "projects", "tasks")


@dataclass
class CrmServices:
    contacts: ContactAdapter
    opportunities: OpportunityAdapter
    projects: ProjectAdapter
    tasks: TaskAdapter

    def adapter(self, name: str) -> RecordAdapter:
        """Look an adapter up by its plural entity name (e.g. "tasks")."""
        if name not in ENTITY_NAMES:
            raise ValueError(f"Unknown entity {name!r}; expected one of {', '.join(ENTITY_NAMES)}")
        return getattr(self, name)


def build_services(store: RecordStore) -> CrmServices:
    return CrmServices(
        contacts=ContactAdapter(store),
        opportunities=OpportunityAdapter(store),
        projects=ProjectAdapter(store),
        tasks=TaskAdapter(store),
    )
