"""
Generic in-memory repository used for finance report names.
"""

from typing import Generic, List, TypeVar
import threading

T = TypeVar("T")


class Repository(Generic[T]):
    """Thread-safe ordered collection"""
    
    def __init__(self):
        self._items: List[T] = []
        self._lock = threading.RLock()
    
    def add(self, item: T) -> None:
        with self._lock:
            self._items.append(item)
    
    def get(self, index: int) -> T:
        """Get item by position; raises IndexError when out of range"""
        with self._lock:
            return self._items[index]
    
    def get_all(self) -> List[T]:
        """Snapshot of all items"""
        with self._lock:
            return list(self._items)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
