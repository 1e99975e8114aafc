# tests/test_logger_utils.py
import logging

from smart_autocomplete.utils.logger_utils import ROOT_LOGGER, Log


def test_setup_writes_formatted_lines(tmp_path):
    path = tmp_path / "logs" / "app.log"
    Log.setup(path, console=False, level=logging.DEBUG)
    try:
        Log.info("hello")
        Log.metric("suggest", 0.5, "ms")
        with Log.time_block("block"):
            pass
        for h in logging.getLogger(ROOT_LOGGER).handlers:
            h.flush()
        text = path.read_text(encoding="utf-8")
        assert "INFO    | hello" in text
        assert "suggest: 0.5ms" in text
        assert "block done:" in text
    finally:
        Log.setup(None)


def test_setup_replaces_previous_handlers(tmp_path):
    Log.setup(tmp_path / "a.log")
    Log.setup(tmp_path / "b.log")
    try:
        owned = [h for h in logging.getLogger(ROOT_LOGGER).handlers if getattr(h, "_sac_owned", False)]
        assert len(owned) == 1
    finally:
        Log.setup(None)
