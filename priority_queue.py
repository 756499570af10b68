"""
Queue interface and a heap-backed priority queue.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Optional, TypeVar

from heap import Heap

E = TypeVar("E")


class Queue(ABC, Generic[E]):
    """Minimal FIFO-style queue contract."""

    @abstractmethod
    def enqueue(self, element: E) -> bool:
        raise NotImplementedError

    @abstractmethod
    def dequeue(self) -> Optional[E]:
        """Next element, or None when the queue is empty."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek(self) -> Optional[E]:
        raise NotImplementedError


class PriorityQueue(Queue[E]):
    """
    Queue whose dequeue order is defined by the heap's sort predicate.
    """

    def __init__(self, sort: Callable[[E, E], bool], elements: Iterable[E] = ()) -> None:
        self._heap: Heap[E] = Heap(sort, elements)

    def enqueue(self, element: E) -> bool:
        self._heap.insert(element)
        return True

    def dequeue(self) -> Optional[E]:
        return self._heap.remove()

    @property
    def is_empty(self) -> bool:
        return self._heap.is_empty

    def peek(self) -> Optional[E]:
        return self._heap.peek()

    def __len__(self) -> int:
        return len(self._heap)
