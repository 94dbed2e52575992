"""Binary max-heap of items ordered by their ``priority`` attribute."""

from typing import Iterable, Iterator, Optional


class PriorityQueue:
    """Heap of items; the item with the greatest ``priority`` pops first.

    Items must carry writable ``priority`` and ``index`` attributes. The
    queue keeps ``index`` equal to the item's position in the heap and sets
    it to -1 once the item is popped.
    """

    def __init__(self, items: Optional[Iterable] = None) -> None:
        self._heap: list = list(items) if items is not None else []
        for position, item in enumerate(self._heap):
            item.index = position
        for i in reversed(range(len(self._heap) // 2)):
            self._down(i, len(self._heap))

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator:
        """Iterate in heap order, which is not priority order."""
        return iter(list(self._heap))

    def push(self, item) -> None:
        item.index = len(self._heap)
        self._heap.append(item)
        self._up(len(self._heap) - 1)

    def pop(self):
        """Remove and return the item with the greatest priority."""
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        last = len(self._heap) - 1
        self._swap(0, last)
        self._down(0, last)
        item = self._heap.pop()
        item.index = -1
        return item

    def fix(self, index: int) -> None:
        """Restore heap order after the item at ``index`` changed priority."""
        if not self._down(index, len(self._heap)):
            self._up(index)

    def _less(self, i: int, j: int) -> bool:
        return self._heap[i].priority > self._heap[j].priority

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].index = i
        heap[j].index = j

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if not self._less(j, parent):
                break
            self._swap(parent, j)
            j = parent

    def _down(self, start: int, n: int) -> bool:
        i = start
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and self._less(right, left):
                child = right
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child
        return i > start