"""
smart_autocomplete.core

The in-process autocomplete engine.
Contains:
 - prefix index over the dictionary (ternary search tree in a node arena)
 - frequency store and co-occurrence graph (write-through persisted)
 - top-k selection, substring fallback search, ranking
 - per-session result cache and edit history
 - learned phrase store
 - AutocompleteEngine, the facade the shell/editor talks to
"""

from .prefix_index import PrefixIndex
from .freq_store import FrequencyStore
from .cooccurrence_graph import CooccurrenceGraph
from .topk import TopKSelector
from .substring_search import SubstringSearcher, contains, find_all
from .ranker import Ranker
from .result_cache import ResultCache
from .phrase_store import Phrase, PhraseStore
from .undo_redo import Edit, HistoryResult, UndoRedoStack
from .session import Session
from .models import RankedCandidate
from .engine import AutocompleteEngine

__all__ = [
    "PrefixIndex",
    "FrequencyStore",
    "CooccurrenceGraph",
    "TopKSelector",
    "SubstringSearcher",
    "contains",
    "find_all",
    "Ranker",
    "ResultCache",
    "Phrase",
    "PhraseStore",
    "Edit",
    "HistoryResult",
    "UndoRedoStack",
    "Session",
    "RankedCandidate",
    "AutocompleteEngine",
]
