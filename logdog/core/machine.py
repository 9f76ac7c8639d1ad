"""
Screen state machine.

update() is pure: it takes the current UIState and one Event and returns the
next UIState plus the effects (disk I/O, redraw, quit) the caller must carry
out. Effect results come back as further events. See effects.EffectRunner.
"""
import os
from typing import Callable, Dict, List, Tuple

from rich.text import Text

from ..models.state import MAIN_MENU, MAX_RETENTION_DAYS, MIN_RETENTION_DAYS, Screen, UIState
from .events import (
    ClearOldLogs, DeleteLog, Effect, Event, FindOldLogs, InstallLogger, InstallSkipped,
    KeyPressed, LoadLog, LogDeleted, LoggerInstalled, LogLoaded, LogLoadFailed, LogsListed,
    OldLogsCleared, OldLogsFound, ProjectsListed, Quit, Redraw, RefreshLogs, ScanProjects,
)

Transition = Tuple[UIState, List[Effect]]

QUIT_KEYS = ("q", "ctrl+c")
UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
BACK_KEYS = ("esc",)
CONFIRM_KEY = "y"

CONFIRM_PROMPT = "Press 'y' to confirm, any other key to cancel"

# Highest cursor position per screen, before flooring at 0
MAX_CURSOR: Dict[Screen, Callable[[UIState], int]] = {
    Screen.MAIN: lambda state: len(MAIN_MENU) - 1,
    Screen.INSTALL: lambda state: 0,
    Screen.SETTINGS: lambda state: 0,
    Screen.LOG_LIST: lambda state: len(state.log_files) - 1,
    Screen.LOG_VIEW: lambda state: len(state.content_lines()) - 1,
    Screen.GLOBAL_PROJECTS: lambda state: len(state.global_projects) - 1,
}


def max_cursor(state: UIState) -> int:
    return max(0, MAX_CURSOR[state.screen](state))


def clamp_cursor(state: UIState) -> UIState:
    """Pull the cursor back inside the current screen's bounds."""
    cursor = min(max(state.cursor, 0), max_cursor(state))
    if cursor == state.cursor:
        return state
    return state.evolve(cursor=cursor)


def update(state: UIState, event: Event) -> Transition:
    """Apply one event."""
    handler = EVENT_HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unhandled event: {event!r}")
    return handler(state, event)


# Keys

def _on_key(state: UIState, event: KeyPressed) -> Transition:
    key = event.key

    if state.confirming:
        return _on_confirmation_key(state, key)
    if key in QUIT_KEYS:
        return state, [Quit()]
    if key in UP_KEYS:
        return _move_cursor(state, -1)
    if key in DOWN_KEYS:
        return _move_cursor(state, 1)
    if key in BACK_KEYS:
        return _go_back(state)

    handler = SCREEN_KEYS[state.screen].get(key)
    if handler is None:
        return state.evolve(message=""), []
    return handler(state)


def _on_confirmation_key(state: UIState, key: str) -> Transition:
    if key != CONFIRM_KEY:
        return state.evolve(confirming_delete=False, confirming_clear=False, message=""), []

    if state.confirming_delete:
        next_state = state.evolve(confirming_delete=False)
        if 0 <= state.delete_index < len(state.log_files):
            return next_state, [DeleteLog(state.log_files[state.delete_index])]
        return next_state.evolve(message=""), []

    return (state.evolve(confirming_clear=False),
            [ClearOldLogs(tuple(state.log_files), state.retention_days)])


def _move_cursor(state: UIState, delta: int) -> Transition:
    return clamp_cursor(state.evolve(cursor=state.cursor + delta, message="")), []


def _go_back(state: UIState) -> Transition:
    # Leaving a global project puts the local logs back in the list
    effects: List[Effect] = [RefreshLogs()] if state.selected_project else []
    next_state = state.evolve(
        screen=Screen.MAIN,
        cursor=0,
        message="",
        confirming_delete=False,
        confirming_clear=False,
        viewed_file="",
        log_content=Text(),
        selected_project="",
    )
    return next_state, effects


def _main_enter(state: UIState) -> Transition:
    _, target = MAIN_MENU[state.cursor]
    if target is None:
        return state, [Quit()]

    next_state = state.evolve(screen=target, cursor=0, message="")
    if target == Screen.GLOBAL_PROJECTS:
        return next_state, [ScanProjects()]
    if target == Screen.LOG_LIST:
        return next_state, [RefreshLogs()]
    return next_state, []


def _install_enter(state: UIState) -> Transition:
    return state.evolve(screen=Screen.MAIN, cursor=0, message=""), [InstallLogger(), Redraw()]


def _view_log(state: UIState) -> Transition:
    path = state.selected_log
    if path is None:
        return state, []
    return state, [LoadLog(path)]


def _delete_log(state: UIState) -> Transition:
    path = state.selected_log
    if path is None:
        return state, []
    return state.evolve(
        confirming_delete=True,
        delete_index=state.cursor,
        message=f"Delete {os.path.basename(path)}? {CONFIRM_PROMPT}",
    ), []


def _clear_old_logs(state: UIState) -> Transition:
    if not state.log_files:
        return state, []
    return state, [FindOldLogs(tuple(state.log_files), state.retention_days)]


def _select_project(state: UIState) -> Transition:
    if not 0 <= state.cursor < len(state.global_projects):
        return state, []
    project = state.global_projects[state.cursor]
    next_state = state.evolve(
        selected_project=project,
        screen=Screen.LOG_LIST,
        log_files=[],
        cursor=0,
        message="",
    )
    return next_state, [RefreshLogs(project)]


def _adjust_retention(delta: int) -> Callable[[UIState], Transition]:
    def handler(state: UIState) -> Transition:
        days = state.retention_days + delta
        if not MIN_RETENTION_DAYS <= days <= MAX_RETENTION_DAYS:
            return state, []
        return state.evolve(retention_days=days, message=f"Retention set to {days} days"), []
    return handler


SCREEN_KEYS: Dict[Screen, Dict[str, Callable[[UIState], Transition]]] = {
    Screen.MAIN: {"enter": _main_enter},
    Screen.INSTALL: {"enter": _install_enter},
    Screen.LOG_LIST: {"v": _view_log, "d": _delete_log, "c": _clear_old_logs},
    Screen.LOG_VIEW: {},
    Screen.SETTINGS: {
        "+": _adjust_retention(1),
        "=": _adjust_retention(1),
        "-": _adjust_retention(-1),
        "_": _adjust_retention(-1),
    },
    Screen.GLOBAL_PROJECTS: {"enter": _select_project},
}


# Effect results

def _on_logger_installed(state: UIState, event: LoggerInstalled) -> Transition:
    if event.error:
        return state.evolve(message=f"❌ Error: {event.error}"), []

    message = f"✅ Logger installed successfully! Check {event.package_file}"
    if event.overwritten:
        message += " (replaced the existing logger)"
    return state.evolve(message=message), [RefreshLogs(state.selected_project)]


def _on_install_skipped(state: UIState, event: InstallSkipped) -> Transition:
    return state.evolve(message="❌ No supported language detected"), []


def _on_logs_listed(state: UIState, event: LogsListed) -> Transition:
    return clamp_cursor(state.evolve(log_files=list(event.files))), []


def _on_projects_listed(state: UIState, event: ProjectsListed) -> Transition:
    return clamp_cursor(state.evolve(global_projects=list(event.projects))), []


def _on_log_loaded(state: UIState, event: LogLoaded) -> Transition:
    return state.evolve(
        screen=Screen.LOG_VIEW,
        viewed_file=event.path,
        log_content=event.content,
        cursor=0,
        message="",
    ), []


def _on_log_load_failed(state: UIState, event: LogLoadFailed) -> Transition:
    return state.evolve(message=f"❌ Error reading log: {event.error}"), []


def _on_old_logs_found(state: UIState, event: OldLogsFound) -> Transition:
    days = state.retention_days
    if not event.paths:
        return state.evolve(message=f"No log files older than {days} days found"), []
    return state.evolve(
        confirming_clear=True,
        confirming_delete=False,
        message=f"Clear {len(event.paths)} log files older than {days} days? {CONFIRM_PROMPT}",
    ), []


def _on_log_deleted(state: UIState, event: LogDeleted) -> Transition:
    if event.error:
        message = f"❌ Failed to delete: {event.error}"
    else:
        message = f"✅ Deleted {os.path.basename(event.path)}"
    return state.evolve(message=message), [RefreshLogs(state.selected_project)]


def _on_old_logs_cleared(state: UIState, event: OldLogsCleared) -> Transition:
    if event.errors:
        message = f"✅ Deleted {event.deleted} files. ❌ Errors: {'; '.join(event.errors)}"
    else:
        message = f"✅ Cleared {event.deleted} old log files"
    return state.evolve(message=message), [RefreshLogs(state.selected_project)]


EVENT_HANDLERS: Dict[type, Callable[[UIState, Event], Transition]] = {
    KeyPressed: _on_key,
    LoggerInstalled: _on_logger_installed,
    InstallSkipped: _on_install_skipped,
    LogsListed: _on_logs_listed,
    ProjectsListed: _on_projects_listed,
    LogLoaded: _on_log_loaded,
    LogLoadFailed: _on_log_load_failed,
    OldLogsFound: _on_old_logs_found,
    LogDeleted: _on_log_deleted,
    OldLogsCleared: _on_old_logs_cleared,
}
