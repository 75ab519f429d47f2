"""
Atomic file-write utilities used by every exporter.

Output is written to a temporary file in the destination directory and
moved into place with ``os.replace()``, so an interrupted export never
leaves a truncated dataset on disk.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from typing import IO, Iterator

__all__ = ['atomic_writer']


@contextmanager
def atomic_writer(path: str | os.PathLike, encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Open a text stream whose content replaces *path* only on clean exit.

    Lines are written exactly as given (no newline translation), so exported
    files use ``\\n`` on every platform.

    Parameters
    ----------
    path:
        Destination file path.
    encoding:
        Text encoding (default utf-8).
    """
    path = os.fspath(path)
    dir_path = os.path.dirname(path) or "."
    tmp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", dir=dir_path, suffix=".tmp", delete=False,
            encoding=encoding, newline="",
        ) as tmp:
            tmp_path = tmp.name
            yield tmp
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
