"""
Bounded LRU map and striped locks for per-user and global profiling state.

Eviction order: least recently touched first. A "touch" is any get/put through
the map. All operations hold one internal lock for O(1) work only.
"""

import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BoundedLRU(Generic[K, V]):
    """Thread-safe fixed-capacity map with LRU eviction."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._data: "OrderedDict[K, V]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            if key not in self._data:
                return default
            self._data.move_to_end(key)
            return self._data[key]

    def peek(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Read without touching."""
        with self._lock:
            return self._data.get(key, default)

    def put(self, key: K, value: V) -> List[K]:
        """Insert or replace; returns the keys evicted to stay within capacity."""
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            return self._evict()

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                return self._data[key]
            value = factory()
            self._data[key] = value
            self._evict()
            return value

    def pop(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            return self._data.pop(key, default)

    def items(self) -> List[Tuple[K, V]]:
        """Snapshot of entries, oldest first."""
        with self._lock:
            return list(self._data.items())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def _evict(self) -> List[K]:
        evicted = []
        while len(self._data) > self.capacity:
            key, _ = self._data.popitem(last=False)
            evicted.append(key)
        return evicted

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[K]:
        return iter([k for k, _ in self.items()])


class StripedLock:
    """Fixed pool of locks; a key always maps to the same lock."""

    def __init__(self, stripes: int = 64):
        self._locks = [threading.Lock() for _ in range(max(1, stripes))]

    def for_key(self, key: Hashable) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]
