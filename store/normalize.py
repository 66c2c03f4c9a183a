"""Schema normalizer — application records <-> store payloads.

Outbound (before create/update): canonical snake_case columns, tags collapsed
into the comma-joined ``Tags`` column, the generic ``Name`` column derived
from the entity, dates cut to YYYY-MM-DD, numbers coerced. Fields without a
value are left out of the payload rather than sent as null. An update sends
only the fields its draft supplied, so the store keeps the rest.

Inbound (opening an edit form): a store record becomes the entity model with
every declared field defaulted, so forms never see a missing key.

Alias acceptance happens when the model is validated, see ``schemas/``.
"""
import logging
from typing import AbstractSet, Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar

from dateutil import parser as date_parser

from schemas import Contact, CrmRecord, Opportunity, Project, Task
from schemas.fields import (
    coerce_float,
    coerce_int,
    join_tags,
    normalize_date,
    reference_id,
    split_tags,
)

logger = logging.getLogger(__name__)

__all__ = [
    "outbound", "inbound", "format_display_date",
    "join_tags", "split_tags", "normalize_date", "coerce_float", "coerce_int",
]

RecordT = TypeVar("RecordT", bound=CrmRecord)


def _wants(fields: Optional[AbstractSet[str]], *names: str) -> bool:
    # fields=None means a full payload (create path).
    return fields is None or all(name in fields for name in names)


def _put(payload: Dict[str, Any], fields: Optional[AbstractSet[str]], values: Dict[str, Any]) -> None:
    for column, value in values.items():
        if value is not None and _wants(fields, column):
            payload[column] = value


def _common(
    record: CrmRecord,
    fields: Optional[AbstractSet[str]],
    name: str,
    name_parts: Tuple[str, ...],
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    # Name is derived, so only send it when every part it is built from is known.
    if _wants(fields, *name_parts):
        payload["Name"] = name
    tags = join_tags(record.tags)
    if fields is None:
        if tags:
            payload["Tags"] = tags
    elif "tags" in fields:
        payload["Tags"] = tags or ""
    if record.owner is not None and _wants(fields, "owner"):
        payload["Owner"] = reference_id(record.owner)
    return payload


def _contact(contact: Contact, fields: Optional[AbstractSet[str]]) -> Dict[str, Any]:
    payload = _common(contact, fields, contact.display_name, ("first_name", "last_name"))
    _put(payload, fields, {
        "first_name": contact.first_name,
        "last_name": contact.last_name,
        "email": contact.email,
        "phone": contact.phone,
        "company": contact.company,
        "position": contact.position,
        "stage": contact.stage,
    })
    return payload


def _opportunity(opportunity: Opportunity, fields: Optional[AbstractSet[str]]) -> Dict[str, Any]:
    payload = _common(opportunity, fields, opportunity.title, ("title",))
    _put(payload, fields, {
        "title": opportunity.title,
        "stage": opportunity.stage,
        "assigned_to": opportunity.assigned_to,
        "contact": opportunity.contact,
    })
    # Always sent, coerced (a missing amount goes out as 0).
    payload["value"] = coerce_float(opportunity.value)
    payload["probability"] = coerce_int(opportunity.probability)
    return payload


def _project(project: Project, fields: Optional[AbstractSet[str]]) -> Dict[str, Any]:
    payload = _common(project, fields, project.name, ("name",))
    _put(payload, fields, {
        "description": project.description,
        "priority": project.priority,
        "status": project.status,
        "due_date": normalize_date(project.due_date),
    })
    return payload


def _task(task: Task, fields: Optional[AbstractSet[str]]) -> Dict[str, Any]:
    payload = _common(task, fields, task.title, ("title",))
    _put(payload, fields, {
        "title": task.title,
        "description": task.description,
        "priority": task.priority,
        "status": task.status,
        "category": task.category,
        "due_date": normalize_date(task.due_date),
        "assignee_id": task.assignee_id,
        "project_id": task.project_id,
    })
    # Free-text columns: a new task only sends them when filled in, an
    # update sends whatever it was given so clearing the text sticks.
    for column in ("subtasks", "comments"):
        text = getattr(task, column)
        if (fields is None and text) or (fields is not None and column in fields):
            payload[column] = text
    return payload


_OUTBOUND: Dict[Type[CrmRecord], Callable[[Any, Optional[AbstractSet[str]]], Dict[str, Any]]] = {
    Contact: _contact,
    Opportunity: _opportunity,
    Project: _project,
    Task: _task,
}


def outbound(
    record: CrmRecord,
    *,
    include_id: bool = False,
    fields: Optional[AbstractSet[str]] = None,
) -> Dict[str, Any]:
    """Build the store payload for one record.

    ``fields`` limits the payload to those model fields (the update path
    passes the fields the draft supplied); ``None`` builds the full payload.
    With ``include_id`` the record's ``Id`` is included; callers must have
    checked that it is set.
    """
    try:
        formatter = _OUTBOUND[type(record)]
    except KeyError:
        raise TypeError(f"No store mapping for {type(record).__name__}") from None
    payload = formatter(record, fields)
    if include_id:
        payload = {"Id": record.id, **payload}
    return payload


def inbound(model: Type[RecordT], record: Optional[Mapping[str, Any]]) -> RecordT:
    """Build a form-ready entity from a store record (or an empty one)."""
    return model.model_validate(dict(record or {}))


def format_display_date(value: Any) -> str:
    """Render a stored date or date-time as e.g. ``May 01, 2024``.

    Returns "" for empty or unparseable values.
    """
    if not value:
        return ""
    try:
        parsed = date_parser.isoparse(str(value))
    except (ValueError, OverflowError):
        logger.debug("Unparseable date value %r", value)
        return ""
    return parsed.strftime("%b %d, %Y")
