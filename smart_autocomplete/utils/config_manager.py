# config_manager.py - JSON config manager + immutable engine knobs

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "max_suggestions": 5,
    "candidate_multiplier": 2,  # prefix candidates fetched per requested result
    "cache_capacity": 50,
    "cache_ttl": 0.0,  # seconds, 0 disables expiry
    "invalidate_on_write": False,
    "substring_search": False,
    "substring_threshold": 3,
    "bump_amount": 5,
    "phrase_suggestions": True,
    "phrase_limit": 3,
    "phrase_score": 5.0,
    "persist_graph": False,
}


@dataclass(frozen=True)
class EngineConfig:
    """
    Knobs read by AutocompleteEngine. Build one directly in code/tests,
    or from a Config file via EngineConfig.from_mapping(cfg.data).
    """
    max_suggestions: int = 5
    candidate_multiplier: int = 2
    cache_capacity: int = 50
    cache_ttl: float = 0.0
    invalidate_on_write: bool = False
    substring_search: bool = False
    substring_threshold: int = 3
    bump_amount: int = 5
    phrase_suggestions: bool = True
    phrase_limit: int = 3
    phrase_score: float = 5.0
    persist_graph: bool = False

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class Config:
    """JSON file of user settings layered over DEFAULTS."""

    def __init__(self, path: Optional[str] = "config.json"):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self) -> None:
        if not self.path:
            return
        if not os.path.exists(self.path):
            self.save()
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config %s unreadable, using defaults: %s", self.path, e)
            return
        if not isinstance(raw, dict):
            logger.warning("config %s is not an object, using defaults", self.path)
            return
        for key, val in raw.items():
            if key in DEFAULTS:
                coerced = _coerce(DEFAULTS[key], val)
                if coerced is not None:
                    self.data[key] = coerced

    def save(self) -> None:
        if not self.path:
            return
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self) -> List[Tuple[str, Any]]:
        return list(self.data.items())

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, val: Any) -> bool:
        """Set an option, coercing to the default's type. False if unknown or bad value."""
        if key not in DEFAULTS:
            return False
        coerced = _coerce(DEFAULTS[key], val)
        if coerced is None:
            return False
        self.data[key] = coerced
        self.save()
        return True

    def engine_config(self) -> EngineConfig:
        return EngineConfig.from_mapping(self.data)


def _coerce(template: Any, val: Any) -> Any:
    """Convert val to type(template); None when it cannot be converted."""
    if isinstance(template, bool):
        if isinstance(val, bool):
            return val
        s = str(val).strip().lower()
        if s in ("1", "true", "yes", "on"):
            return True
        if s in ("0", "false", "no", "off"):
            return False
        return None
    try:
        return type(template)(val)
    except (TypeError, ValueError):
        return None
