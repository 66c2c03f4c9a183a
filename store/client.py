"""HTTP client for the hosted record store.

Calls the store's REST surface directly (there is no Python SDK). Requests
run in a worker thread so the adapters can await them. Errors propagate as
``requests`` exceptions; wrapping them is the adapters' job.
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Protocol

import requests

from schemas import RecordId
from store.config import StoreConfig

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """The table-scoped operations the record adapters rely on."""

    async def fetch_records(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]: ...

    async def get_record_by_id(
        self, table: str, record_id: RecordId, params: Dict[str, Any]
    ) -> Dict[str, Any]: ...

    async def create_record(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]: ...

    async def update_record(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]: ...

    async def delete_record(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]: ...


class RecordStoreClient:
    """RecordStore implementation over HTTP.

    Endpoints, relative to ``config.base_url``:
      POST   /tables/{table}/records/query   list with fields/orderBy/where
      POST   /tables/{table}/records/{id}    single record with fields
      POST   /tables/{table}/records         bulk create {"records": [...]}
      PUT    /tables/{table}/records         bulk update {"records": [...]}
      DELETE /tables/{table}/records         bulk delete {"RecordIds": [...]}
    """

    def __init__(self, config: StoreConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._session = session or requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "X-Apper-Project-Id": config.project_id,
            "X-Apper-Public-Key": config.public_key,
        })

    def _url(self, table: str, suffix: str = "") -> str:
        return f"{self.config.base_url.rstrip('/')}/tables/{table}/records{suffix}"

    def _request(self, method: str, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("%s %s", method, url)
        resp = self._session.request(method, url, json=payload, timeout=self.config.timeout)
        resp.raise_for_status()
        return resp.json()

    async def fetch_records(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request, "POST", self._url(table, "/query"), params)

    async def get_record_by_id(
        self, table: str, record_id: RecordId, params: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request, "POST", self._url(table, f"/{record_id}"), params)

    async def create_record(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request, "POST", self._url(table), params)

    async def update_record(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request, "PUT", self._url(table), params)

    async def delete_record(self, table: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request, "DELETE", self._url(table), params)

    def close(self) -> None:
        self._session.close()
