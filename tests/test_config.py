# tests/test_config.py
import json

from smart_autocomplete.utils.config_manager import DEFAULTS, Config, EngineConfig


def test_defaults_written_when_missing(tmp_path):
    p = tmp_path / "cfg" / "config.json"
    cfg = Config(str(p))
    assert p.exists()
    assert cfg.data == DEFAULTS


def test_file_values_override_defaults(tmp_path):
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"max_suggestions": 8, "substring_search": "yes", "unknown": 1}), encoding="utf8")
    cfg = Config(str(p))
    assert cfg.get("max_suggestions") == 8
    assert cfg.get("substring_search") is True
    assert "unknown" not in cfg.data


def test_corrupt_file_falls_back(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("{not json", encoding="utf8")
    cfg = Config(str(p))
    assert cfg.data == DEFAULTS


def test_set_coerces_and_saves(tmp_path):
    p = tmp_path / "config.json"
    cfg = Config(str(p))
    assert cfg.set("cache_capacity", "20")
    assert cfg.get("cache_capacity") == 20
    assert json.loads(p.read_text(encoding="utf8"))["cache_capacity"] == 20
    assert cfg.set("invalidate_on_write", "on")
    assert cfg.get("invalidate_on_write") is True
    assert not cfg.set("cache_capacity", "lots")
    assert not cfg.set("nope", "1")


def test_engine_config_from_config():
    cfg = Config(path=None)
    cfg.set("phrase_limit", 1)
    ecfg = cfg.engine_config()
    assert isinstance(ecfg, EngineConfig)
    assert ecfg.phrase_limit == 1
    assert ecfg.max_suggestions == DEFAULTS["max_suggestions"]
