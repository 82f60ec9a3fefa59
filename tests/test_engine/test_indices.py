"""Tests for the append-only indices and the deferred queue."""

import pytest
from shapely.geometry import Point

from osmtopo.engine.deferred import DeferredQueue
from osmtopo.engine.errors import DuplicateEntityError
from osmtopo.engine.indices import EntityIndex


def test_add_and_get():
    index = EntityIndex("point")
    index.add("1", Point(1, 2))
    assert "1" in index
    assert index.get("1").equals(Point(1, 2))
    assert index.get("2") is None
    assert len(index) == 1


def test_add_never_overwrites():
    index = EntityIndex("path")
    index.add("1", Point(0, 0))
    with pytest.raises(DuplicateEntityError):
        index.add("1", Point(5, 5))
    assert index.get("1").equals(Point(0, 0))


def test_duplicate_error_is_value_error():
    index = EntityIndex("composite")
    index.add("r", Point(0, 0))
    with pytest.raises(ValueError, match="Duplicate composite id: r"):
        index.add("r", Point(0, 0))


def test_ids_in_insertion_order():
    index = EntityIndex("point")
    for pid in ["3", "1", "2"]:
        index.add(pid, Point(0, 0))
    assert index.ids() == ["3", "1", "2"]
    assert list(index) == ["3", "1", "2"]


def test_queue_deduplicates():
    queue = DeferredQueue()
    assert queue.push("a")
    assert queue.push("b")
    assert not queue.push("a")
    assert list(queue) == ["a", "b"]
    assert len(queue) == 2


def test_queue_retain_keeps_fifo_order():
    queue = DeferredQueue()
    for cid in ["a", "b", "c"]:
        queue.push(cid)
    queue.retain(["c", "a"])
    assert queue.pending() == ["a", "c"]
    assert "b" not in queue


def test_queue_remembers_drained_ids():
    queue = DeferredQueue()
    queue.push("a")
    queue.retain([])
    assert "a" not in queue
    assert queue.was_queued("a")
    assert not queue.push("a")
