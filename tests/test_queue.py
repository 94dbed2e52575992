from dataclasses import dataclass

import pytest

from progbars.queue import PriorityQueue


@dataclass(eq=False)
class Item:
    id: int
    priority: int
    index: int = -1


def _ids(items):
    return [item.id for item in items]


def _pop_all(pq):
    out = []
    while len(pq):
        out.append(pq.pop())
    return out


def test_pristine_pop_order():
    pq = PriorityQueue()
    a, b, c = Item(1, 1), Item(2, 2), Item(3, 3)
    for item in (a, b, c):
        pq.push(item)
    assert _ids(_pop_all(pq)) == [3, 2, 1]


def test_indexes_track_positions():
    pq = PriorityQueue()
    items = [Item(i, p) for i, p in enumerate([5, 1, 9, 3, 7, 2])]
    for item in items:
        pq.push(item)
    heap_items = list(pq)
    assert [item.index for item in heap_items] == list(range(len(items)))
    popped = pq.pop()
    assert popped.id == 2
    assert popped.index == -1
    assert [item.index for item in pq] == list(range(len(items) - 1))


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        PriorityQueue().pop()


def test_constructor_builds_heap():
    items = [Item(i, p) for i, p in enumerate([1, 4, 2, 8, 5])]
    pq = PriorityQueue(items)
    assert len(pq) == 5
    assert [item.priority for item in _pop_all(pq)] == [8, 5, 4, 2, 1]


def test_fix_after_priority_update():
    pq = PriorityQueue()
    a, b, c = Item(1, 1), Item(2, 2), Item(3, 3)
    for item in (a, b, c):
        pq.push(item)
    c.priority = 2
    pq.fix(c.index)
    b.priority = 3
    pq.fix(b.index)
    assert _ids(_pop_all(pq)) == [2, 3, 1]


def test_unfixed_priority_change_keeps_pristine_order():
    pq = PriorityQueue()
    a, b, c = Item(1, 1), Item(2, 2), Item(3, 3)
    for item in (a, b, c):
        pq.push(item)
    c.priority = 2
    b.priority = 3
    assert _ids(_pop_all(pq)) == [3, 2, 1]


def test_iteration_does_not_consume():
    pq = PriorityQueue([Item(1, 1), Item(2, 2)])
    assert sorted(_ids(pq)) == [1, 2]
    assert len(pq) == 2