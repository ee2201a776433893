# storefront/utils/cache.py
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

DEFAULT_TTL = timedelta(minutes=15)


class DataCache:
    """Cache em memória por processo; cada entrada guarda (dados, expira_em)."""

    def __init__(self, default_ttl: timedelta = DEFAULT_TTL):
        self._entries: Dict[str, Tuple[Any, datetime]] = {}
        self.default_ttl = default_ttl

    def set(self, key: str, data: Any, ttl: Optional[int] = None) -> None:
        lifetime = timedelta(seconds=ttl) if ttl else self.default_ttl
        self._entries[key] = (data, datetime.now() + lifetime)
        logging.debug(f"Cache setado para key: {key}")

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        data, expires_at = entry
        if datetime.now() > expires_at:
            self.clear(key)
            logging.debug(f"Cache expirado para key: {key}")
            return None
        return data

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear_prefix(self, prefix: str) -> int:
        """Remove todas as chaves que começam com o prefixo; devolve quantas saíram."""
        keys = [key for key in self._entries if key.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)
