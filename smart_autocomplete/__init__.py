"""smart_autocomplete - prefix/frequency/co-occurrence autocomplete engine with learned phrases."""

from smart_autocomplete.core.engine import AutocompleteEngine
from smart_autocomplete.core.models import RankedCandidate
from smart_autocomplete.utils.config_manager import Config, EngineConfig

__all__ = ["AutocompleteEngine", "RankedCandidate", "Config", "EngineConfig"]

__version__ = "0.1.0"
