"""
Flat key-value media for record persistence.

Both backends expose the same four operations as browser local storage
(keys, get, set, delete). Values are opaque strings; the store decides
their encoding.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from riskeval.core.logging import get_logger

logger = get_logger(__name__)


class KeyValueBackendError(Exception):
    """El medio rechazó la operación."""
    pass


class QuotaExceededError(KeyValueBackendError):
    """La escritura supera la capacidad del medio."""
    def __init__(self, required: int, quota: int):
        self.required = required
        self.quota = quota
        super().__init__(f"Storage quota exceeded: {required} bytes needed, quota is {quota}")


@runtime_checkable
class KeyValueBackend(Protocol):
    """
    Protocol defining the interface for key-value media.

    Any implementation raising KeyValueBackendError or OSError on
    failure can back a RecordStore.
    """

    def keys(self) -> list[str]:
        ...

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class InMemoryKeyValueBackend:
    """Medio en memoria con cuota opcional en bytes. Se pierde al reiniciar."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    @property
    def used_bytes(self) -> int:
        return sum(_entry_size(k, v) for k, v in self._data.items())

    def keys(self) -> list[str]:
        return list(self._data)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            current = self._data.get(key)
            required = self.used_bytes + _entry_size(key, value)
            if current is not None:
                required -= _entry_size(key, current)
            if required > self._quota_bytes:
                raise QuotaExceededError(required, self._quota_bytes)
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueBackend:
    """
    Medio persistente en un único documento JSON.

    Cada escritura reemplaza el archivo de forma atómica (archivo
    temporal + os.replace), así un fallo a mitad de escritura deja el
    contenido anterior intacto. Un documento ilegible se renombra a
    `<archivo>.corrupt` y el medio arranca vacío.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._data: Optional[dict[str, str]] = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def quarantine_path(self) -> Path:
        """Destino del documento corrupto apartado al abrir."""
        return self._path.with_name(f"{self._path.name}.corrupt")

    def _quarantine(self, reason: str) -> None:
        """Aparta el documento ilegible para que la próxima escritura no lo pise."""
        try:
            os.replace(self._path, self.quarantine_path)
        except OSError as e:
            raise KeyValueBackendError(
                f"Corrupt storage file '{self._path}' could not be set aside: {e}"
            ) from e
        logger.error(
            f"Corrupt storage file '{self._path}' ({reason}), moved to "
            f"'{self.quarantine_path}'; starting empty"
        )

    def _load(self) -> dict[str, str]:
        if self._data is None:
            if not self._path.exists():
                self._data = {}
                return self._data

            try:
                content = json.loads(self._path.read_text(encoding="utf-8") or "{}")
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                self._quarantine(str(e))
                content = {}
            if not isinstance(content, dict):
                self._quarantine("not a JSON object")
                content = {}
            self._data = {str(k): str(v) for k, v in content.items()}
            logger.debug(f"Storage file '{self._path}' opened with {len(self._data)} key(s)")
        return self._data

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def keys(self) -> list[str]:
        return list(self._load())

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = dict(self._load())
        data[key] = value
        self._write(data)
        self._data = data

    def delete(self, key: str) -> None:
        current = self._load()
        if key not in current:
            return
        data = {k: v for k, v in current.items() if k != key}
        self._write(data)
        self._data = data
