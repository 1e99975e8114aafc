# logger_utils.py - logging and timing helpers for the engine and the shell

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "smart_autocomplete"
LINE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = logging.getLogger(ROOT_LOGGER)
_logger.addHandler(logging.NullHandler())


class Log:
    """
    Small facade over the package logger.
    Library code logs through here or through logging.getLogger(__name__);
    nothing is written anywhere until setup() attaches handlers.
    """

    @staticmethod
    def setup(
        path: Optional[Union[str, Path]] = None,
        console: bool = False,
        level: int = logging.INFO,
    ) -> logging.Logger:
        """
        Attach a file handler and/or a rich console handler.
        Calling it again replaces the handlers installed by the previous call.
        """
        for h in list(_logger.handlers):
            if getattr(h, "_sac_owned", False):
                _logger.removeHandler(h)
                h.close()

        if path is not None:
            p = Path(path)
            p.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(p, encoding="utf-8")
            fh.setFormatter(logging.Formatter(LINE_FORMAT, DATE_FORMAT))
            fh._sac_owned = True  # type: ignore[attr-defined]
            _logger.addHandler(fh)

        if console:
            from rich.logging import RichHandler

            rh = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
            rh._sac_owned = True  # type: ignore[attr-defined]
            _logger.addHandler(rh)

        _logger.setLevel(level)
        return _logger

    @staticmethod
    def write(msg: str, level: int = logging.INFO) -> None:
        _logger.log(level, msg)

    @staticmethod
    def debug(msg: str) -> None:
        _logger.debug(msg)

    @staticmethod
    def info(msg: str) -> None:
        _logger.info(msg)

    @staticmethod
    def warning(msg: str) -> None:
        _logger.warning(msg)

    @staticmethod
    def error(msg: str) -> None:
        _logger.error(msg)

    @staticmethod
    def metric(tag: str, value, unit: str = "") -> None:
        """
        Record a metric (timings, counts).
        Example: [2026-01-01 12:45:02] INFO    | load_seeds done: 0.012s
        """
        _logger.info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label: str) -> "_Timer":
        """
        Measure a block and log its duration as a metric:
            with Log.time_block("load_seeds"):
                engine.load_seeds(path)
        """
        return _Timer(label)


class _Timer:
    """Context manager used by Log.time_block."""

    def __init__(self, label: str):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self) -> "_Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self.start
        Log.metric(f"{self.label} done", round(self.elapsed, 4), "s")
