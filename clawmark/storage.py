"""
Keyed record stores for the trust-state services.

Every service owns exactly one key space and receives its store by
injection. The in-memory store is process-local and volatile; a restart
loses everything it holds.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class KeyValueStore(ABC, Generic[T]):
    @abstractmethod
    def get(self, key: str) -> Optional[T]:
        raise NotImplementedError

    @abstractmethod
    def put(self, key: str, value: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def put_if_absent(self, key: str, value: T) -> bool:
        """Insert ``value`` unless ``key`` exists. Returns True when inserted."""
        raise NotImplementedError

    @abstractmethod
    def update(self, key: str, fn: Callable[[T], T]) -> Optional[T]:
        """Atomically replace the value under ``key`` with ``fn(value)``.

        Returns the new value, or None when ``key`` is absent (``fn`` is not called).
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> Optional[T]:
        raise NotImplementedError

    @abstractmethod
    def delete_if(self, key: str, predicate: Callable[[T], bool]) -> bool:
        """Atomically delete ``key`` only when ``predicate(value)`` holds."""
        raise NotImplementedError

    @abstractmethod
    def items(self) -> List[Tuple[str, T]]:
        """Snapshot of all entries in insertion order."""
        raise NotImplementedError

    def values(self) -> List[T]:
        return [value for _, value in self.items()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self.items())

    def __iter__(self) -> Iterator[str]:
        return iter([key for key, _ in self.items()])


class InMemoryStore(KeyValueStore[T]):
    def __init__(self):
        # dicts preserve insertion order, which the paginated listings rely on
        self._data: Dict[str, T] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._data[key] = value

    def put_if_absent(self, key: str, value: T) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    def update(self, key: str, fn: Callable[[T], T]) -> Optional[T]:
        with self._lock:
            if key not in self._data:
                return None
            new_value = fn(self._data[key])
            self._data[key] = new_value
            return new_value

    def delete(self, key: str) -> Optional[T]:
        with self._lock:
            return self._data.pop(key, None)

    def delete_if(self, key: str, predicate: Callable[[T], bool]) -> bool:
        with self._lock:
            if key in self._data and predicate(self._data[key]):
                del self._data[key]
                return True
            return False

    def items(self) -> List[Tuple[str, T]]:
        with self._lock:
            return list(self._data.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
