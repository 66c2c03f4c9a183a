"""Pipeline aggregation over already-fetched contacts/opportunities.

Inputs are small in-memory lists (store records or schema models). All
helpers are pure and keep the input order within each stage.
"""
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Sequence

from schemas import PIPELINE_STAGES
from schemas.fields import coerce_float


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def group_by_stage(items: Iterable[Any]) -> Dict[Any, List[Any]]:
    """Partition items by ``stage``.

    Every pipeline stage is present, in pipeline order, even when empty.
    Items with any other stage value are grouped under that value after the
    known stages, so each item lands in exactly one group.
    """
    groups: Dict[Any, List[Any]] = {stage: [] for stage in PIPELINE_STAGES}
    for item in items:
        groups.setdefault(_field(item, "stage"), []).append(item)
    return groups


def total_value(items: Iterable[Any]) -> float:
    """Sum of ``value``; missing or non-numeric values count as 0."""
    return float(sum(coerce_float(_field(item, "value")) for item in items))


def sum_by_stage(items: Iterable[Any]) -> Dict[Any, float]:
    return {stage: total_value(group) for stage, group in group_by_stage(items).items()}


def percentage_of_total(count: int, total: int) -> float:
    """``count / total * 100``, or 0 when there is nothing to divide by."""
    if total == 0:
        return 0.0
    return count / total * 100


def stage_summary(items: Sequence[Any]) -> List[Dict[str, Any]]:
    """Per-stage count, value and share of all items (the analytics breakdown)."""
    total = len(items)
    return [
        {
            "stage": stage,
            "count": len(group),
            "value": total_value(group),
            "percentage": percentage_of_total(len(group), total),
        }
        for stage, group in group_by_stage(items).items()
    ]
