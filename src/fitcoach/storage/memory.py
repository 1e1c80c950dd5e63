"""In-process key-value store."""

import json
from typing import Any, Dict, Optional

from ..exceptions import StorageReadError, StorageWriteError


class InMemoryStore:
    """
    Dict-backed store.

    Values are kept JSON-encoded so callers get the same copy semantics as
    with a persistent adapter: mutating a returned value never changes
    what is stored.
    """

    def __init__(self, namespace: str = "fitcoach") -> None:
        self.namespace = namespace
        self._data: Dict[str, str] = {}

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageReadError(key, str(e)) from e

    async def set(self, key: str, value: Any) -> None:
        try:
            self._data[self._key(key)] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(key, str(e)) from e

    def clear(self) -> None:
        self._data.clear()
