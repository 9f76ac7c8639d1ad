"""
Effect runner: performs the I/O the state machine asks for.
"""
import logging
from collections import deque
from typing import Callable, Dict, List, Optional, Tuple

from ..detector import InstallError
from ..models.context import ProjectContext
from ..models.state import UIState
from ..parsers.log_formatter import format_lines
from .events import (
    ClearOldLogs, DeleteLog, Effect, Event, FindOldLogs, InstallLogger, InstallSkipped,
    LoadLog, LogDeleted, LoggerInstalled, LogLoaded, LogLoadFailed, LogsListed,
    OldLogsCleared, OldLogsFound, ProjectsListed, Quit, Redraw, RefreshLogs, ScanProjects,
)
from .log_store import LogStore, log_store
from .machine import update

logger = logging.getLogger(__name__)

# Effects handled by the terminal front end rather than the runner
UI_EFFECTS = (Redraw, Quit)


class EffectRunner:
    """Drives the state machine and executes its effects synchronously."""

    def __init__(self, context: ProjectContext, store: Optional[LogStore] = None):
        self.context = context
        self.store = store or log_store
        self._handlers: Dict[type, Callable[[Effect], Event]] = {
            InstallLogger: self._install_logger,
            RefreshLogs: self._refresh_logs,
            ScanProjects: self._scan_projects,
            LoadLog: self._load_log,
            FindOldLogs: self._find_old_logs,
            DeleteLog: self._delete_log,
            ClearOldLogs: self._clear_old_logs,
        }

    def initial_state(self, retention_days: int = 7) -> UIState:
        """Build the startup state from what is on disk right now."""
        return UIState(
            log_files=list(self._list_logs("")),
            global_projects=self.store.list_projects(self.context.global_root),
            retention_days=retention_days,
        )

    def dispatch(self, state: UIState, event: Event) -> Tuple[UIState, List[Effect]]:
        """Apply event and every follow-up effect until the machine settles.

        Returns the final state and the effects meant for the UI (redraw, quit).
        """
        pending = deque([event])
        ui_effects: List[Effect] = []

        while pending:
            state, effects = update(state, pending.popleft())
            for effect in effects:
                if isinstance(effect, UI_EFFECTS):
                    ui_effects.append(effect)
                else:
                    pending.append(self.perform(effect))

        return state, ui_effects

    def perform(self, effect: Effect) -> Event:
        """Execute one effect and return the event describing its outcome."""
        handler = self._handlers.get(type(effect))
        if handler is None:
            raise TypeError(f"Unhandled effect: {effect!r}")
        logger.debug("Performing %r", effect)
        return handler(effect)

    def _list_logs(self, project: str) -> Tuple[str, ...]:
        if project:
            return tuple(self.store.list_logs(self.context.global_root / project, recursive=True))
        if self.context.language is None:
            return ()
        return tuple(self.context.language.get_log_paths(self.context.project_path, self.context.config))

    def _install_logger(self, effect: InstallLogger) -> Event:
        language = self.context.language
        if language is None:
            return InstallSkipped()

        try:
            result = language.install(self.context.project_path, self.context.config)
        except InstallError as e:
            logger.error("Install into %s failed: %s", self.context.project_path, e)
            return LoggerInstalled(error=str(e))

        try:
            package_file = result.package_file.relative_to(self.context.project_path)
        except ValueError:
            package_file = result.package_file
        return LoggerInstalled(
            package_file=package_file.as_posix(),
            overwritten=result.overwritten,
        )

    def _refresh_logs(self, effect: RefreshLogs) -> Event:
        return LogsListed(self._list_logs(effect.project))

    def _scan_projects(self, effect: ScanProjects) -> Event:
        return ProjectsListed(tuple(self.store.list_projects(self.context.global_root)))

    def _load_log(self, effect: LoadLog) -> Event:
        try:
            lines = self.store.read_lines(effect.path)
        except OSError as e:
            logger.warning("Cannot read %s: %s", effect.path, e)
            return LogLoadFailed(effect.path, str(e))
        return LogLoaded(effect.path, format_lines(lines))

    def _find_old_logs(self, effect: FindOldLogs) -> Event:
        return OldLogsFound(tuple(self.store.select_old_logs(list(effect.paths), effect.retention_days)))

    def _delete_log(self, effect: DeleteLog) -> Event:
        try:
            self.store.remove(effect.path)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", effect.path, e)
            return LogDeleted(effect.path, error=str(e))
        return LogDeleted(effect.path)

    def _clear_old_logs(self, effect: ClearOldLogs) -> Event:
        deleted, errors = self.store.clear_old_logs(list(effect.paths), effect.retention_days)
        logger.info("Cleared %d log files older than %d days", deleted, effect.retention_days)
        return OldLogsCleared(deleted, tuple(errors))
