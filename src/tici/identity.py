from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import EnvironmentMissing, PathResolutionFailed
from .paths import save_file_name, tici_state_root
from .tmux_target import check_session_name

HASH_LENGTH = 16


@dataclass(frozen=True)
class SessionIdentity:
    canonical_dir: Path
    save_path: Path
    session_name: str


def session_hash(canonical_dir: Path) -> str:
    h = hashlib.sha256(os.fsencode(str(canonical_dir))).hexdigest()
    return h[:HASH_LENGTH]


def _canonicalize(working_dir: Path | None) -> Path:
    try:
        cwd = Path.cwd()
    except OSError as e:
        raise PathResolutionFailed(".", cause=str(e)) from e

    path = cwd if working_dir is None else cwd / Path(working_dir).expanduser()
    try:
        resolved = path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathResolutionFailed(working_dir or cwd, cause=str(e)) from e

    if not resolved.is_dir():
        raise PathResolutionFailed(resolved, cause="not a directory")
    return resolved


def resolve_identity(working_dir: Path | None = None) -> SessionIdentity:
    """Map a working directory to its canonical path, save file and session name.

    This is the only place that reads HOME and the process cwd; everything
    downstream receives the resulting identity.
    """

    canonical_dir = _canonicalize(working_dir)

    home = os.environ.get("HOME")
    if not home:
        raise EnvironmentMissing("HOME is not set", cause="needed to locate saved sessions")

    session_name = check_session_name(canonical_dir.name)
    save_path = tici_state_root(Path(home)) / save_file_name(session_hash(canonical_dir), session_name)

    return SessionIdentity(canonical_dir=canonical_dir, save_path=save_path, session_name=session_name)
