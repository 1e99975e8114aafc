# model_store.py - line-oriented persistence shared by the frequency, graph and phrase stores

# every store file is UTF-8 text with one record per line.
# - reading is tolerant: a missing or unreadable file yields no lines
# - writing rewrites the whole file (stores call it on every mutation)

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_records(path: Optional[PathLike]) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_number, line) for every non-blank line of the file, newline stripped.
    Missing file -> nothing. Undecodable/unreadable file -> logged, nothing more.
    """
    if path is None:
        return
    p = Path(path)
    if not p.exists():
        logger.debug("store file %s missing, starting empty", p)
        return
    try:
        with open(p, "r", encoding="utf-8") as fh:
            for lineno, raw in enumerate(fh, 1):
                line = raw.rstrip("\r\n")
                if line.strip():
                    yield lineno, line
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("could not read %s: %s", p, e)


def write_records(path: PathLike, lines: Iterable[str]) -> None:
    """
    Rewrite the file with the given records.
    Written to a sibling temp file first and swapped in, so a crash mid-write
    leaves the previous version intact.
    """
    p = Path(path)
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")
    with open(tmp, "w", encoding="utf-8", newline="\n") as fh:
        for line in lines:
            fh.write(line)
            fh.write("\n")
    os.replace(tmp, p)
