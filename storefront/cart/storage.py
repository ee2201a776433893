# storefront/cart/storage.py
import logging
import os
import re
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from sqlmodel import Session

from storefront.models.storage_record import StorageRecord


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logging.debug(f"Storage setado para key: {key}")

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileStorage:
    """Um arquivo por chave dentro de um diretório do cliente."""

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{_SAFE_KEY.sub('_', key)}.json")

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            fh.write(value)
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)


class DatabaseStorage:
    """Guarda os valores na tabela tb_storage_record, separados por namespace (ex.: cookie do carrinho)."""

    def __init__(self, session: Session, namespace: str):
        self.session = session
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        record = self.session.get(StorageRecord, self._key(key))
        return record.value if record else None

    def set(self, key: str, value: str) -> None:
        record = self.session.get(StorageRecord, self._key(key))
        if record:
            record.value = value
            record.updated_at = datetime.now(timezone.utc)
        else:
            record = StorageRecord(key=self._key(key), value=value)
        self.session.add(record)
        self.session.commit()

    def delete(self, key: str) -> None:
        record = self.session.get(StorageRecord, self._key(key))
        if record:
            self.session.delete(record)
            self.session.commit()
