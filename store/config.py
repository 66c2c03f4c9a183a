"""Record store configuration.

The store client never reads the environment itself: build a StoreConfig once
at start-up (``load_config()`` for the usual .env setup) and pass it down.
"""
import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    project_id: str
    public_key: str
    base_url: str
    timeout: float = Field(default=30.0, gt=0)


def _required(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise RuntimeError(
            f"{name} environment variable is not set. "
            "Copy .env.example to .env and set your record store credentials."
        )
    return value


def load_config() -> StoreConfig:
    """Read APPER_* settings from the environment (and .env, if present)."""
    load_dotenv()
    config = StoreConfig(
        project_id=_required("APPER_PROJECT_ID"),
        public_key=_required("APPER_PUBLIC_KEY"),
        base_url=_required("APPER_BASE_URL"),
        timeout=float(os.environ.get("APPER_TIMEOUT", "30")),
    )
    logger.debug("Record store config loaded (project=%s, url=%s)", config.project_id, config.base_url)
    return config
