"""Errors raised by the record adapters."""
from typing import Any, Optional


class RecordStoreError(RuntimeError):
    """A store call failed or came back in an unexpected shape.

    Carries the entity and operation so the UI can report which action
    failed; the underlying exception is chained as ``__cause__``.
    """

    def __init__(self, entity: str, operation: str, record_id: Optional[Any] = None):
        self.entity = entity
        self.operation = operation
        self.record_id = record_id
        message = f"{entity} {operation} failed"
        if record_id is not None:
            message += f" (id={record_id})"
        super().__init__(message)
