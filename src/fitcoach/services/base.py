"""
Base service class for the progression stores.

Every store sits directly on a KeyValueStore. Reads come back as a
ReadResult; the collapse of "absent" and "error" into a default happens
in ``_read_or_default`` so it stays visible at each call site.
"""

from abc import ABC
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar
import logging

from ..exceptions import StorageError
from ..storage.base import KeyValueStore, ReadResult
from ..utils.dates import Clock, to_local_naive


T = TypeVar("T")


class BaseService(ABC):
    """
    Abstract base class for services backed by the key-value store.

    Provides common functionality:
    - Logging setup
    - Injected clock
    - Best-effort reads and writes
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._clock = clock or datetime.now
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying key-value store."""
        return self._store

    def now(self) -> datetime:
        """Current local time from the injected clock, without tzinfo."""
        return to_local_naive(self._clock())

    async def _read(self, key: str) -> ReadResult[Any]:
        """Read a raw value, reporting absence and failure separately."""
        try:
            value = await self._store.get(key)
        except StorageError as e:
            return ReadResult.failed(e)
        if value is None:
            return ReadResult.absent()
        return ReadResult.ok(value)

    async def _read_or_default(
        self,
        key: str,
        parse: Callable[[Any], T],
        default: Callable[[], T],
    ) -> T:
        """
        Read and parse a value, falling back to default().

        Storage failures and values that no longer parse are logged and
        treated as "no data".
        """
        result = await self._read(key)
        if result.is_error:
            self._logger.error(f"Error reading '{key}': {result.error}")
            return default()
        if result.is_absent:
            return default()
        try:
            return parse(result.value)
        except (ValueError, TypeError) as e:
            self._logger.error(f"Discarding malformed '{key}': {e}")
            return default()

    async def _write(self, key: str, value: Any) -> bool:
        """Write a value; failures are logged and reported as False."""
        try:
            await self._store.set(key, value)
            return True
        except StorageError as e:
            self._logger.error(f"Error writing '{key}': {e}")
            return False
