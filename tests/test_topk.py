# tests/test_topk.py
import random

from smart_autocomplete.core.topk import TopKSelector


def test_keeps_k_best():
    heap = TopKSelector(3)
    pairs = [(5, "e"), (1, "a"), (9, "i"), (3, "c"), (7, "g")]
    for s, w in pairs:
        heap.insert(s, w)
    assert len(heap) == 3
    assert heap.get_all() == [(9, "i"), (7, "g"), (5, "e")]


def test_kept_scores_dominate_discarded():
    rng = random.Random(7)
    heap = TopKSelector(10)
    scores = [rng.random() for _ in range(500)]
    for i, s in enumerate(scores):
        heap.insert(s, f"w{i}")
    kept = heap.get_all()
    assert len(kept) == 10
    kept_min = min(s for s, _ in kept)
    kept_items = {w for _, w in kept}
    discarded = [s for i, s in enumerate(scores) if f"w{i}" not in kept_items]
    assert all(kept_min >= s for s in discarded)


def test_equal_score_does_not_replace():
    heap = TopKSelector(2)
    heap.insert(1.0, "a")
    heap.insert(1.0, "b")
    assert not heap.insert(1.0, "c")
    assert [w for _, w in heap.get_all()] == ["a", "b"]


def test_ties_sorted_by_item():
    heap = TopKSelector(5)
    for w in ["delta", "alpha", "charlie", "bravo"]:
        heap.insert(0.0, w)
    assert [w for _, w in heap.get_all()] == ["alpha", "bravo", "charlie", "delta"]


def test_tied_minimum_evicts_largest_item():
    heap = TopKSelector(2)
    heap.insert(1.0, "a")
    heap.insert(1.0, "b")
    heap.insert(2.0, "z")
    assert heap.get_all() == [(2.0, "z"), (1.0, "a")]


def test_extract_and_peek_on_empty_return_none():
    heap = TopKSelector(3)
    assert heap.peek_min() is None
    assert heap.extract_min() is None


def test_extract_min_order():
    heap = TopKSelector(4)
    for s, w in [(3, "c"), (1, "a"), (2, "b")]:
        heap.insert(s, w)
    assert heap.peek_min() == (1, "a")
    assert heap.extract_min() == (1, "a")
    assert heap.extract_min() == (2, "b")
    assert len(heap) == 1


def test_clear_and_zero_capacity():
    heap = TopKSelector(2)
    heap.insert(1, "a")
    heap.insert(2, "b")
    assert heap.is_full
    heap.clear()
    assert len(heap) == 0
    zero = TopKSelector(0)
    assert not zero.insert(10, "x")
    assert zero.get_all() == []
