# tests/test_ranker.py
import math

import pytest

from smart_autocomplete.core.cooccurrence_graph import CooccurrenceGraph
from smart_autocomplete.core.freq_store import FrequencyStore
from smart_autocomplete.core.ranker import Ranker
from smart_autocomplete.core.session import Session


@pytest.fixture
def ranker():
    fs = FrequencyStore()
    g = CooccurrenceGraph()
    return Ranker(fs, g)


def test_score_is_frequency_without_last_token(ranker):
    ranker.freq.bump("apple", 3)
    ranker.graph.add_edge("red", "apple")
    assert ranker.compute_score("apple") == 3.0


def test_score_adds_graph_boost(ranker):
    ranker.freq.bump("apple", 3)
    ranker.graph.add_edge("red", "apple")
    ranker.set_last_token("red")
    assert ranker.compute_score("apple") == pytest.approx(3 + math.log(2) * 0.5)


def test_explicit_session_overrides_default(ranker):
    ranker.graph.add_edge("red", "apple")
    ranker.set_last_token("red")
    other = Session()
    assert ranker.compute_score("apple", other) == 0.0
    other.set_last_token("red")
    assert ranker.compute_score("apple", other) > 0.0


def test_rank_results_orders_and_truncates(ranker):
    ranker.freq.bump("b", 5)
    ranker.freq.bump("c", 2)
    out = ranker.rank_results(["a", "b", "c", "d"], 3)
    assert [c.text for c in out] == ["b", "c", "a"]
    assert [c.score for c in out] == [5.0, 2.0, 0.0]
    assert all(c.source == "token" for c in out)


def test_rank_results_empty(ranker):
    assert ranker.rank_results([], 5) == []
    assert ranker.rank_results(["a"], 0) == []


def test_pinned_pairs_compete(ranker):
    ranker.freq.bump("for", 9)
    out = ranker.rank_results(["for", "foreach"], 2, pinned=[("for(i=0;i<n;i++)", 5.0)])
    assert [(c.text, c.source) for c in out] == [("for", "token"), ("for(i=0;i<n;i++)", "phrase")]
