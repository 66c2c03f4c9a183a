"""Record store package for the CRM: config, client, normalizer and adapters."""
from store.client import RecordStore, RecordStoreClient
from store.config import StoreConfig, load_config
from store.connection import get_store
from store.errors import RecordStoreError
from store.services import CrmServices, build_services

__all__ = [
    "StoreConfig", "load_config", "get_store",
    "RecordStore", "RecordStoreClient", "RecordStoreError",
    "CrmServices", "build_services",
]
