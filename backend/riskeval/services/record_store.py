"""
Record persistence over a flat key-value medium.

One entry per record under `prefix + id`, holding the JSON of every
field, derived ones included. Corrupt entries are skipped on load.
"""

from typing import Iterable

from pydantic import ValidationError

from riskeval.core.config import settings
from riskeval.core.exceptions import DeserializationFailure, StorageFailure
from riskeval.core.logging import get_logger
from riskeval.schemas.records import RiskRecord
from riskeval.services.kv_backends import KeyValueBackend, KeyValueBackendError

logger = get_logger(__name__)

_BACKEND_ERRORS = (KeyValueBackendError, OSError)


class RecordStore:
    """Gateway de persistencia: una entrada por registro, clave = prefijo + id.

    Load order is unspecified; callers sort before display.
    """

    def __init__(self, backend: KeyValueBackend, prefix: str | None = None):
        self._backend = backend
        self._prefix = prefix or settings.storage_prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def key_for(self, record_id: int) -> str:
        return f"{self._prefix}{record_id}"

    def keys(self) -> list[str]:
        """Claves del namespace actualmente persistidas."""
        try:
            return [k for k in self._backend.keys() if k.startswith(self._prefix)]
        except _BACKEND_ERRORS as e:
            raise StorageFailure("Could not enumerate keys", operation="load", original_error=e)

    def _decode(self, key: str) -> RiskRecord:
        try:
            raw = self._backend.get(key)
            if raw is None:
                raise DeserializationFailure(key, details="entry vanished during load")
            record = RiskRecord.from_storage(raw)
        except (ValidationError, ValueError) as e:
            raise DeserializationFailure(key, original_error=e) from e

        # La clave es la identidad: un id distinto dejaría la entrada huérfana
        if self.key_for(record.id) != key:
            raise DeserializationFailure(key, details=f"entry holds id={record.id}")
        return record

    def load_all(self) -> list[RiskRecord]:
        """Deserializa todas las entradas del namespace, saltando las corruptas."""
        records: list[RiskRecord] = []
        skipped = 0
        for key in self.keys():
            try:
                records.append(self._decode(key))
            except DeserializationFailure as e:
                skipped += 1
                logger.error(f"Skipping entry: {e}")
            except _BACKEND_ERRORS as e:
                raise StorageFailure("Could not read entry", operation="load", key=key, original_error=e)

        logger.info(f"Loaded {len(records)} record(s) under prefix '{self._prefix}'"
                    + (f" ({skipped} skipped)" if skipped else ""))
        return records

    def save(self, record: RiskRecord) -> None:
        """Escribe (o sobrescribe) la entrada del registro."""
        key = self.key_for(record.id)
        try:
            self._backend.set(key, record.to_storage())
        except _BACKEND_ERRORS as e:
            logger.error(f"Error al guardar '{key}': {e}")
            raise StorageFailure("Could not save record", operation="save", key=key, original_error=e)

    def delete(self, record_id: int) -> None:
        """Elimina la entrada; eliminar un id inexistente no es un error."""
        key = self.key_for(record_id)
        try:
            self._backend.delete(key)
        except _BACKEND_ERRORS as e:
            logger.error(f"Error al eliminar '{key}': {e}")
            raise StorageFailure("Could not delete record", operation="delete", key=key, original_error=e)

    def delete_all(self, records: Iterable[RiskRecord]) -> None:
        """
        Elimina la entrada de cada registro, deteniéndose en el primer fallo.

        The raised StorageFailure lists the ids already removed. Nothing is
        rolled back here; the caller reconciles.
        """
        removed: list[int] = []
        for record in records:
            key = self.key_for(record.id)
            try:
                self._backend.delete(key)
            except _BACKEND_ERRORS as e:
                logger.error(f"Error al eliminar todos en '{key}' tras {len(removed)} borrado(s): {e}")
                raise StorageFailure(
                    "Bulk delete interrupted",
                    operation="delete_all",
                    key=key,
                    removed_ids=removed,
                    original_error=e,
                )
            removed.append(record.id)
