"""Bar heap bookkeeping and column width synchronization."""

import queue as _stdqueue
import threading
from collections import defaultdict
from typing import Iterator, Optional, Sequence

from progbars.decorator import WidthSync
from progbars.queue import PriorityQueue

_POLL_INTERVAL = 0.02


def max_width_distributor(
    column: Sequence[WidthSync], drop: Optional[threading.Event]
) -> Optional[int]:
    """Collect one width from every member, then send each the maximum.

    Returns the distributed width, or None if ``drop`` was set before all
    widths arrived, in which case nothing is sent.
    """
    max_width = 0
    for ws in column:
        while True:
            if drop is not None and drop.is_set():
                return None
            try:
                width = ws.collect(timeout=None if drop is None else _POLL_INTERVAL)
            except _stdqueue.Empty:
                continue
            break
        max_width = max(max_width, width)
    for ws in column:
        ws.reply(max_width)
    return max_width


def sync_width(
    matrix: dict, drop: Optional[threading.Event]
) -> list[threading.Thread]:
    """Start a distributor for each column of ``matrix``; return the threads."""
    threads = []
    for column in matrix.values():
        thread = threading.Thread(
            target=max_width_distributor, args=(list(column), drop), daemon=True
        )
        thread.start()
        threads.append(thread)
    return threads


def _sync_table(item) -> tuple[Sequence[WidthSync], Sequence[WidthSync]]:
    table = getattr(item, "w_sync_table", None)
    if table is None:
        return (), ()
    prepend, append = table()
    return prepend, append


class HeapManager:
    """Thread-safe owner of the bar heap and its width sync matrices.

    Items need ``priority`` and ``index`` attributes; an item may provide
    ``w_sync_table()`` returning its prepend and append WidthSync lists.
    """

    def __init__(self) -> None:
        self._queue = PriorityQueue()
        self._lock = threading.RLock()
        self._pending_sync = False
        self._synced_len = 0
        self._prepend: dict = {}
        self._append: dict = {}
        self._ended = False

    def _check_open(self) -> None:
        if self._ended:
            raise RuntimeError("heap manager has ended")

    def push(self, item, sync: bool) -> None:
        """Add ``item``; ``sync`` forces the sync matrices to be rebuilt."""
        with self._lock:
            self._check_open()
            self._queue.push(item)
            self._pending_sync = self._pending_sync or sync

    def sync(self, drop: Optional[threading.Event]) -> list[threading.Thread]:
        """Start width synchronization for all sync-enabled decorator columns."""
        with self._lock:
            self._check_open()
            if self._pending_sync or self._synced_len != len(self._queue):
                prepend: dict = defaultdict(list)
                append: dict = defaultdict(list)
                for item in self._queue:
                    pre, post = _sync_table(item)
                    for column, ws in enumerate(pre):
                        prepend[column].append(ws)
                    for column, ws in enumerate(post):
                        append[column].append(ws)
                self._prepend = dict(prepend)
                self._append = dict(append)
                self._pending_sync = False
                self._synced_len = len(self._queue)
            prepend_matrix, append_matrix = self._prepend, self._append
        return sync_width(prepend_matrix, drop) + sync_width(append_matrix, drop)

    def items(self) -> Iterator:
        """Iterate over a snapshot of the items in heap order."""
        with self._lock:
            self._check_open()
            snapshot = list(self._queue)
        return iter(snapshot)

    def drain(self) -> Iterator:
        """Pop items in priority order; popped items leave the heap."""
        while True:
            with self._lock:
                self._check_open()
                if not len(self._queue):
                    return
                item = self._queue.pop()
            yield item

    def fix(self, item, priority: int, lazy: bool) -> None:
        """Set ``item``'s priority; reorder now unless ``lazy``."""
        with self._lock:
            self._check_open()
            if item.index < 0:
                return
            item.priority = priority
            if not lazy:
                self._queue.fix(item.index)

    def state(self) -> bool:
        """True if the sync matrices are out of date."""
        with self._lock:
            self._check_open()
            return self._pending_sync or self._synced_len != len(self._queue)

    def end(self) -> list:
        """Stop the manager and return the remaining items in heap order."""
        with self._lock:
            self._check_open()
            self._ended = True
            return list(self._queue)