from __future__ import annotations

from pathlib import Path

STATE_DIRNAME = ".tici"
SAVE_SUFFIX = ".tmux"


def tici_state_root(home: Path) -> Path:
    return home / STATE_DIRNAME


def save_file_name(dir_hash: str, session_name: str) -> str:
    return f"session_{dir_hash}_{session_name}{SAVE_SUFFIX}"
