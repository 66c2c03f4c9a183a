"""Shared record adapter — uniform CRUD over one store table."""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Generic, Iterator, List, Optional, Sequence, Set, Tuple, Type, TypeVar, Union

from pydantic import ValidationError

from schemas import CrmRecord, RecordId
from store.client import RecordStore
from store.errors import RecordStoreError
from store.normalize import outbound

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CrmRecord)

ORDER_NEWEST_FIRST = [{"fieldName": "CreatedOn", "SortType": "DESC"}]


@dataclass
class BulkFailure:
    """One item of a bulk create/update the store rejected."""

    index: int  # position in the submitted batch
    message: str = ""
    errors: List[Any] = field(default_factory=list)


@dataclass
class BulkResult:
    """Outcome of a bulk create/update.

    Iterating (or ``len()``) covers only the records the store accepted, in
    submission order. ``failures`` lists the rejected items; ``partial`` is
    True when there are any.
    """

    records: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[BulkFailure] = field(default_factory=list)
    submitted: int = 0

    @property
    def partial(self) -> bool:
        return bool(self.failures)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> Dict[str, Any]:
        return self.records[index]


class RecordAdapter(Generic[RecordT]):
    """Create/read/update/delete for one entity table.

    Subclasses set ``entity``, ``table``, ``model`` and ``filter_keys``.
    Every failed store call is logged and re-raised as RecordStoreError;
    nothing is retried.
    """

    entity: ClassVar[str] = "Record"
    table: ClassVar[str] = ""
    model: ClassVar[Type[CrmRecord]] = CrmRecord
    filter_keys: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, store: RecordStore):
        self.store = store

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self.table!r})"

    # ------------------------------------------------------------------
    # Query building
    # ------------------------------------------------------------------

    def build_where(self, filters: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """One ExactMatch condition per supplied filter, in filter_keys order."""
        filters = filters or {}
        unknown = set(filters) - set(self.filter_keys)
        if unknown:
            logger.debug("Ignoring %s filters not supported: %s", self.entity, sorted(unknown))
        return [
            {"fieldName": key, "operator": "ExactMatch", "values": [filters[key]]}
            for key in self.filter_keys
            if filters.get(key) not in (None, "")
        ]

    def fetch_params(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "fields": self.model.fetch_fields(),
            "orderBy": [dict(order) for order in ORDER_NEWEST_FIRST],
        }
        where = self.build_where(filters)
        if where:
            params["where"] = where
        return params

    def to_model(self, record: Union[CrmRecord, Mapping[str, Any]]) -> RecordT:
        """Validate a draft into the entity model (alias acceptance happens here)."""
        if isinstance(record, self.model):
            return record  # type: ignore[return-value]
        if isinstance(record, Mapping):
            return self.model.model_validate(dict(record))  # type: ignore[return-value]
        raise TypeError(f"Cannot build a {self.entity} from {type(record).__name__}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def fetch(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return matching records, newest first; [] when there are none."""
        params = self.fetch_params(filters)
        try:
            response = await self.store.fetch_records(self.table, params)
        except Exception as exc:
            logger.exception("Error fetching %s records (filters=%s)", self.entity, filters)
            raise RecordStoreError(self.entity, "fetch") from exc
        if response is not None and not isinstance(response, Mapping):
            logger.error("Unexpected %s fetch response: %r", self.entity, response)
            raise RecordStoreError(self.entity, "fetch")
        if not response or not response.get("data"):
            return []
        return list(response["data"])

    async def get_by_id(self, record_id: RecordId) -> Optional[Dict[str, Any]]:
        """Return one record, or None when the store has no data for the id."""
        params = {"fields": self.model.fetch_fields()}
        try:
            response = await self.store.get_record_by_id(self.table, record_id, params)
        except Exception as exc:
            logger.exception("Error fetching %s with ID %s", self.entity, record_id)
            raise RecordStoreError(self.entity, "get", record_id) from exc
        if not isinstance(response, Mapping) or not response.get("data"):
            return None
        return response["data"]

    def _drafts(
        self, operation: str, records: Sequence[Union[RecordT, Mapping[str, Any]]]
    ) -> List[Tuple[RecordT, Set[str]]]:
        """Validate each draft and note which fields it supplied."""
        drafts = []
        for position, record in enumerate(records):
            try:
                model = self.to_model(record)
            except ValidationError as exc:
                logger.exception("Invalid %s draft for %s (record %d)", self.entity, operation, position)
                raise RecordStoreError(self.entity, operation) from exc
            if isinstance(record, Mapping):
                supplied = self.model.supplied_fields(record)
            else:
                supplied = set(model.model_fields_set)
            drafts.append((model, supplied))
        return drafts

    async def create(self, records: Sequence[Union[RecordT, Mapping[str, Any]]]) -> BulkResult:
        """Create records in one bulk call; see BulkResult for partial failures."""
        payload = [outbound(model) for model, _ in self._drafts("create", records)]
        if not payload:
            return BulkResult()
        try:
            response = await self.store.create_record(self.table, {"records": payload})
        except Exception as exc:
            logger.exception("Error creating %s records", self.entity)
            raise RecordStoreError(self.entity, "create") from exc
        return self._bulk_result("create", response, len(payload))

    async def update(self, records: Sequence[Union[RecordT, Mapping[str, Any]]]) -> BulkResult:
        """Update records in one bulk call. Every record must carry its id.

        Only the fields each draft supplies are sent; the store keeps the rest.
        """
        drafts = self._drafts("update", records)
        for position, (model, _) in enumerate(drafts):
            if model.id is None:
                raise ValueError(f"{self.entity} update requires an Id (record {position})")
        if not drafts:
            return BulkResult()
        payload = [outbound(model, include_id=True, fields=supplied) for model, supplied in drafts]
        try:
            response = await self.store.update_record(self.table, {"records": payload})
        except Exception as exc:
            ids = [model.id for model, _ in drafts]
            logger.exception("Error updating %s records %s", self.entity, ids)
            raise RecordStoreError(self.entity, "update") from exc
        return self._bulk_result("update", response, len(payload))

    async def delete(self, record_ids: Union[RecordId, Iterable[RecordId]]) -> bool:
        """Delete one id or a sequence of ids in one bulk call."""
        if isinstance(record_ids, (str, int)) or not isinstance(record_ids, Iterable):
            ids = [record_ids]
        else:
            ids = list(record_ids)
        try:
            response = await self.store.delete_record(self.table, {"RecordIds": ids})
        except Exception as exc:
            logger.exception("Error deleting %s records %s", self.entity, ids)
            raise RecordStoreError(self.entity, "delete", ids) from exc
        if not response or not response.get("success"):
            logger.error("%s delete rejected for %s: %r", self.entity, ids, response)
            raise RecordStoreError(self.entity, "delete", ids)
        return True

    # ------------------------------------------------------------------

    def _bulk_result(self, operation: str, response: Any, submitted: int) -> BulkResult:
        if (
            not isinstance(response, Mapping)
            or not response.get("success")
            or response.get("results") is None
        ):
            logger.error("%s %s rejected: %r", self.entity, operation, response)
            raise RecordStoreError(self.entity, operation)

        result = BulkResult(submitted=submitted)
        for index, item in enumerate(response["results"]):
            if item and item.get("success"):
                result.records.append(item.get("data"))
            else:
                item = item or {}
                result.failures.append(BulkFailure(
                    index=index,
                    message=item.get("message", ""),
                    errors=list(item.get("errors") or []),
                ))
        if result.partial:
            logger.warning(
                "%s %s partially failed: %d of %d records rejected",
                self.entity, operation, len(result.failures), submitted,
            )
        return result
