from __future__ import annotations

from pathlib import Path


class TiciError(Exception):
    """Base class for every error the CLI reports to the user."""

    def __init__(self, message: str, *, cause: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (cause: {self.cause})"
        return self.message


class EnvironmentMissing(TiciError):
    """HOME is unset or the tmux binary cannot be launched."""


class PathResolutionFailed(TiciError):
    def __init__(self, path: Path | str, *, cause: str | None = None) -> None:
        super().__init__(f"Failed to resolve directory path: {path}", cause=cause)
        self.path = Path(path)


class InvalidSessionName(TiciError):
    def __init__(self, name: str) -> None:
        if not name:
            message = "Directory name is empty and cannot be used as a session name"
        else:
            message = f"Directory name {name!r} cannot be used as a tmux session name"
        super().__init__(message, cause="session names must be non-empty and free of ':' and '.'")
        self.name = name


class MultiplexerOperationFailed(TiciError):
    def __init__(self, op: str, target: str | None = None, *, cause: str | None = None) -> None:
        where = f" on {target}" if target else ""
        super().__init__(f"tmux {op} failed{where}", cause=cause)
        self.op = op
        self.target = target


class MalformedMultiplexerOutput(MultiplexerOperationFailed):
    def __init__(self, op: str, line: str) -> None:
        super().__init__(op, cause=f"unexpected output line {line!r}")
        self.line = line


class CodecError(TiciError):
    """Raised when a save file cannot be parsed or a session cannot be written."""


class MalformedRecord(CodecError):
    def __init__(self, line: str, *, cause: str | None = None) -> None:
        super().__init__(f"Malformed record in saved session: {line!r}", cause=cause)
        self.line = line


class EmptySession(CodecError):
    def __init__(self, cause: str | None = None) -> None:
        super().__init__("No windows found in saved session", cause=cause)


class UnserializableField(CodecError):
    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            f"Cannot save {field} {value!r}",
            cause="values may not contain '|' or line breaks",
        )
        self.field = field
        self.value = value


class NoSavedSession(TiciError):
    def __init__(self, path: Path) -> None:
        super().__init__("No saved session found for this directory", cause=f"{path} does not exist")
        self.path = path


class IOFailed(TiciError):
    def __init__(self, path: Path, *, cause: str | None = None) -> None:
        super().__init__(f"Failed to access saved session file: {path}", cause=cause)
        self.path = path
