from riskeval.services.kv_backends import (
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
    KeyValueBackend,
    KeyValueBackendError,
    QuotaExceededError,
)
from riskeval.services.record_store import RecordStore
from riskeval.services.record_manager import RecordManager, SubmissionResult
from riskeval.services.container import get_container, get_record_manager, reset_container

__all__ = [
    "InMemoryKeyValueBackend",
    "JsonFileKeyValueBackend",
    "KeyValueBackend",
    "KeyValueBackendError",
    "QuotaExceededError",
    "RecordManager",
    "RecordStore",
    "SubmissionResult",
    "get_container",
    "get_record_manager",
    "reset_container",
]
