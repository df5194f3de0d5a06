from __future__ import annotations

import os
import time
from pathlib import Path

from .errors import IOFailed, NoSavedSession


def atomic_write_text(path: Path, text: str) -> None:
    """Replace `path` with `text` so readers never observe a partial file."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + f".tmp.{os.getpid()}.{int(time.time() * 1000)}")
        try:
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(path)
        finally:
            tmp.unlink(missing_ok=True)
    except OSError as e:
        raise IOFailed(path, cause=e.strerror or str(e)) from e


def read_text(path: Path) -> str:
    if not path.exists():
        raise NoSavedSession(path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise NoSavedSession(path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailed(path, cause=str(e)) from e
