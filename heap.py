"""
Array-backed binary heap ordered by a caller-supplied predicate.

sort(a, b) returns True when a belongs closer to the root than b, so
Heap(operator.lt) is a min-heap and Heap(operator.gt) a max-heap.
"""

from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

E = TypeVar("E")


class Heap(Generic[E]):
    """
    Binary heap over a Python list.

    Complexity:
        peek O(1); insert / remove / remove_at O(log n); heapify O(n).
    """

    def __init__(self, sort: Callable[[E, E], bool], elements: Iterable[E] = ()) -> None:
        self.sort = sort
        self._elements: List[E] = list(elements)
        self._heapify()

    def _heapify(self) -> None:
        for i in range(len(self._elements) // 2 - 1, -1, -1):
            self._sift_down(i)

    # --- Introspection -------------------------------------------------------

    @property
    def elements(self) -> Tuple[E, ...]:
        return tuple(self._elements)

    @property
    def count(self) -> int:
        return len(self._elements)

    @property
    def is_empty(self) -> bool:
        return not self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def peek(self) -> Optional[E]:
        """Root element, or None when empty."""
        return self._elements[0] if self._elements else None

    @staticmethod
    def left_child_index(parent: int) -> int:
        return 2 * parent + 1

    @staticmethod
    def right_child_index(parent: int) -> int:
        return 2 * parent + 2

    @staticmethod
    def parent_index(child: int) -> int:
        return (child - 1) // 2

    # --- Mutation ------------------------------------------------------------

    def insert(self, element: E) -> None:
        self._elements.append(element)
        self._sift_up(len(self._elements) - 1)

    def remove(self) -> Optional[E]:
        """Pop the root, or return None when empty."""
        if not self._elements:
            return None
        last = len(self._elements) - 1
        self._swap(0, last)
        root = self._elements.pop()
        self._sift_down(0)
        return root

    def remove_at(self, index: int) -> Optional[E]:
        """
        Remove the element stored at index.

        Returns None for an out-of-range index. The replacement element is
        sifted both ways since it may belong above or below the hole.
        """
        if index < 0 or index >= len(self._elements):
            return None
        last = len(self._elements) - 1
        if index == last:
            return self._elements.pop()
        self._swap(index, last)
        removed = self._elements.pop()
        self._sift_down(index)
        self._sift_up(index)
        return removed

    def index_of(self, element: E, start: int = 0) -> Optional[int]:
        """
        Position of element, or None.

        Subtrees are pruned once element would have been placed above the
        node being inspected.
        """
        if start >= len(self._elements):
            return None
        current = self._elements[start]
        if self.sort(element, current):
            return None
        if element == current:
            return start
        found = self.index_of(element, self.left_child_index(start))
        if found is not None:
            return found
        return self.index_of(element, self.right_child_index(start))

    def merge(self, other: "Heap[E] | Iterable[E]") -> None:
        incoming = other.elements if isinstance(other, Heap) else other
        self._elements.extend(incoming)
        self._heapify()

    # --- Queries -------------------------------------------------------------

    def is_heap(self) -> bool:
        """True when no child is ordered strictly before its parent."""
        for child in range(1, len(self._elements)):
            parent = self.parent_index(child)
            if self.sort(self._elements[child], self._elements[parent]):
                return False
        return True

    def sorted(self) -> List[E]:
        """
        Heap sort: elements in sort order, root first.

        Works on a copy; the heap itself is left untouched.
        """
        scratch = Heap(self.sort)
        scratch._elements = list(self._elements)
        ordered: List[E] = []
        while not scratch.is_empty:
            ordered.append(scratch.remove())  # type: ignore[arg-type]
        return ordered

    # --- Internals -----------------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        self._elements[i], self._elements[j] = self._elements[j], self._elements[i]

    def _sift_up(self, index: int) -> None:
        child = index
        parent = self.parent_index(child)
        while child > 0 and self.sort(self._elements[child], self._elements[parent]):
            self._swap(child, parent)
            child = parent
            parent = self.parent_index(child)

    def _sift_down(self, index: int) -> None:
        parent = index
        count = len(self._elements)
        while True:
            left = self.left_child_index(parent)
            right = self.right_child_index(parent)
            candidate = parent
            if left < count and self.sort(self._elements[left], self._elements[candidate]):
                candidate = left
            if right < count and self.sort(self._elements[right], self._elements[candidate]):
                candidate = right
            if candidate == parent:
                return
            self._swap(parent, candidate)
            parent = candidate
