"""
Events fed into the state machine and effects it asks the runner to perform.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from rich.text import Text


class Event:
    """Input to the state machine."""


class Effect:
    """I/O request produced by the state machine."""


# Events

@dataclass(frozen=True)
class KeyPressed(Event):
    key: str


@dataclass(frozen=True)
class LoggerInstalled(Event):
    """Install finished; error is set when it failed."""
    package_file: str = ""
    overwritten: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class InstallSkipped(Event):
    """Install requested but no language was detected."""


@dataclass(frozen=True)
class LogsListed(Event):
    files: Tuple[str, ...]


@dataclass(frozen=True)
class ProjectsListed(Event):
    projects: Tuple[str, ...]


@dataclass(frozen=True)
class LogLoaded(Event):
    path: str
    content: Text = field(default_factory=Text)


@dataclass(frozen=True)
class LogLoadFailed(Event):
    path: str
    error: str


@dataclass(frozen=True)
class OldLogsFound(Event):
    paths: Tuple[str, ...]


@dataclass(frozen=True)
class LogDeleted(Event):
    path: str
    error: Optional[str] = None


@dataclass(frozen=True)
class OldLogsCleared(Event):
    deleted: int
    errors: Tuple[str, ...] = ()


# Effects

@dataclass(frozen=True)
class InstallLogger(Effect):
    pass


@dataclass(frozen=True)
class RefreshLogs(Effect):
    """Re-list logs of a global project, or of the local project when empty."""
    project: str = ""


@dataclass(frozen=True)
class ScanProjects(Effect):
    pass


@dataclass(frozen=True)
class LoadLog(Effect):
    path: str


@dataclass(frozen=True)
class FindOldLogs(Effect):
    paths: Tuple[str, ...]
    retention_days: int


@dataclass(frozen=True)
class DeleteLog(Effect):
    path: str


@dataclass(frozen=True)
class ClearOldLogs(Effect):
    paths: Tuple[str, ...]
    retention_days: int


@dataclass(frozen=True)
class Redraw(Effect):
    """Repaint the whole terminal."""


@dataclass(frozen=True)
class Quit(Effect):
    pass

