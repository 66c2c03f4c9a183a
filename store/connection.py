"""Record store bootstrap.

Provides:
- get_store(config): async context manager yielding a connected RecordStoreClient
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from store.client import RecordStoreClient
from store.config import StoreConfig, load_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def get_store(config: Optional[StoreConfig] = None) -> AsyncIterator[RecordStoreClient]:
    """Async context manager that yields a record store client.

    Usage:
        async with get_store(config) as store:
            services = build_services(store)
            contacts = await services.contacts.fetch()

    Without a config the environment is read via load_config().
    """
    client = RecordStoreClient(config or load_config())
    try:
        yield client
    except Exception:
        logger.exception("Record store session ended with an error")
        raise
    finally:
        client.close()
