"""
Key-value backends for the persisted locale preference.

Every backend exposes ``get(key)``, ``set(key, value)``, ``delete(key)`` and
``close()`` and raises StorageError when the underlying medium fails.
"""
import json
from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import delete, select

from ..exceptions import StorageError, StorageUnavailableError
from ..utils.logger import get_logger
from .db import Database
from .models import Preference, utcnow

logger = get_logger("storage.backends")


class MemoryStorage:
    """Process-local storage, lost when the object goes away."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def close(self) -> None:
        pass


class JsonFileStorage:
    """Stores all keys in a single JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def close(self) -> None:
        pass


class SqlStorage:
    """Stores preferences as rows of the ``preferences`` table."""

    def __init__(self, database: Database):
        self.database = database
        self.database.create_tables()

    @classmethod
    def from_dsn(cls, dsn: str, echo: bool = False) -> "SqlStorage":
        return cls(Database(dsn, echo=echo))

    def get(self, key: str) -> Optional[str]:
        with self.database.session() as session:
            result = session.execute(select(Preference.value).where(Preference.key == key))
            return result.scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        with self.database.session() as session:
            preference = session.get(Preference, key)
            if preference is None:
                session.add(Preference(key=key, value=value, updated_at=utcnow()))
            else:
                preference.value = value
                preference.updated_at = utcnow()

    def delete(self, key: str) -> None:
        with self.database.session() as session:
            session.execute(delete(Preference).where(Preference.key == key))

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        self.database.close()


def create_storage(storage_config):
    """Build the backend named by a StorageConfig."""
    if storage_config.backend == "memory":
        return MemoryStorage()
    if storage_config.backend == "file":
        return JsonFileStorage(storage_config.path)
    if storage_config.backend == "sql":
        return SqlStorage.from_dsn(storage_config.dsn, echo=storage_config.echo)
    raise StorageUnavailableError(f"Unknown storage backend: {storage_config.backend}")
