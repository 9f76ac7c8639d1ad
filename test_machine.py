"""
Tests for the pure screen state machine. No filesystem involved.
"""
import itertools

import pytest
from rich.text import Text

from logdog.core.events import (
    ClearOldLogs, DeleteLog, FindOldLogs, InstallLogger, InstallSkipped, KeyPressed, LoadLog,
    LogDeleted, LoggerInstalled, LogLoaded, LogLoadFailed, LogsListed, OldLogsCleared,
    OldLogsFound, ProjectsListed, Quit, Redraw, RefreshLogs, ScanProjects,
)
from logdog.core.machine import max_cursor, update
from logdog.models.state import MAIN_MENU, Screen, UIState

LOGS = ["/p/logdog/logs/logdog-2024-01-01.json",
        "/p/logdog/logs/logdog-2024-01-02.json",
        "/p/logdog/logs/logdog-2024-01-03.json"]


def press(state, *keys):
    """Press keys in order, collecting every effect."""
    effects = []
    for key in keys:
        state, new_effects = update(state, KeyPressed(key))
        effects.extend(new_effects)
    return state, effects


def log_list(**changes):
    return UIState(screen=Screen.LOG_LIST, log_files=list(LOGS), **changes)


def test_initial_state():
    state = UIState()
    assert state.screen == Screen.MAIN
    assert state.cursor == 0
    assert state.message == ""
    assert not state.confirming
    assert state.retention_days == 7


@pytest.mark.parametrize("state", [
    UIState(),
    UIState(screen=Screen.INSTALL),
    UIState(screen=Screen.SETTINGS),
    log_list(),
    UIState(screen=Screen.LOG_LIST),
    UIState(screen=Screen.GLOBAL_PROJECTS, global_projects=["a", "b"]),
    UIState(screen=Screen.GLOBAL_PROJECTS),
    UIState(screen=Screen.LOG_VIEW, log_content=Text("one\ntwo\nthree")),
])
def test_cursor_stays_in_bounds(state):
    """Every up/down sequence keeps the cursor within [0, max_cursor]."""
    for keys in itertools.product(["up", "down", "j", "k"], repeat=4):
        current = state
        for key in keys + ("down",) * 6:
            current, _ = update(current, KeyPressed(key))
            assert 0 <= current.cursor <= max_cursor(current)


def test_max_cursor_per_screen():
    assert max_cursor(UIState()) == len(MAIN_MENU) - 1
    assert max_cursor(UIState(screen=Screen.SETTINGS)) == 0
    assert max_cursor(log_list()) == 2
    assert max_cursor(UIState(screen=Screen.LOG_LIST)) == 0
    assert max_cursor(UIState(screen=Screen.GLOBAL_PROJECTS, global_projects=["a"])) == 0


def test_navigation_clears_message():
    state, _ = press(UIState(message="hello"), "down")
    assert state.cursor == 1
    assert state.message == ""


@pytest.mark.parametrize("cursor, screen", [
    (0, Screen.INSTALL),
    (3, Screen.SETTINGS),
])
def test_main_enter_opens_screen(cursor, screen):
    state, effects = press(UIState(cursor=cursor, message="old"), "enter")
    assert state.screen == screen
    assert state.cursor == 0
    assert state.message == ""
    assert effects == []


def test_main_enter_view_logs_relists():
    state, effects = press(UIState(cursor=1), "enter")
    assert state.screen == Screen.LOG_LIST
    assert effects == [RefreshLogs()]


def test_main_enter_global_rescans_projects():
    state, effects = press(UIState(cursor=2), "enter")
    assert state.screen == Screen.GLOBAL_PROJECTS
    assert effects == [ScanProjects()]


def test_main_enter_quit_entry():
    _, effects = press(UIState(cursor=len(MAIN_MENU) - 1), "enter")
    assert effects == [Quit()]


@pytest.mark.parametrize("key", ["q", "ctrl+c"])
def test_quit_keys(key):
    _, effects = press(log_list(), key)
    assert effects == [Quit()]


def test_install_enter_returns_to_main():
    state, effects = press(UIState(screen=Screen.INSTALL), "enter")
    assert state.screen == Screen.MAIN
    assert effects == [InstallLogger(), Redraw()]


def test_install_results():
    state, effects = update(UIState(), LoggerInstalled(package_file="internal/logdog/logger.go"))
    assert state.message == "✅ Logger installed successfully! Check internal/logdog/logger.go"
    assert effects == [RefreshLogs()]

    state, _ = update(UIState(), LoggerInstalled(package_file="x.go", overwritten=True))
    assert "replaced the existing logger" in state.message

    state, effects = update(UIState(), LoggerInstalled(error="disk full"))
    assert state.message == "❌ Error: disk full"
    assert effects == []

    state, effects = update(UIState(), InstallSkipped())
    assert state.message == "❌ No supported language detected"
    assert effects == []


def test_view_requests_load_and_opens_viewer():
    state, effects = press(log_list(cursor=1), "v")
    assert effects == [LoadLog(LOGS[1])]

    state, _ = update(state, LogLoaded(LOGS[1], Text("a\nb")))
    assert state.screen == Screen.LOG_VIEW
    assert state.viewed_file == LOGS[1]
    assert state.log_content.plain == "a\nb"
    assert state.cursor == 0


def test_view_failure_stays_on_list():
    state, _ = update(log_list(), LogLoadFailed(LOGS[0], "Permission denied"))
    assert state.screen == Screen.LOG_LIST
    assert state.message == "❌ Error reading log: Permission denied"


@pytest.mark.parametrize("key", ["v", "d", "c"])
def test_list_keys_need_files(key):
    state = UIState(screen=Screen.LOG_LIST)
    assert press(state, key) == (state, [])


def test_list_keys_only_work_on_list_screen():
    state, effects = press(UIState(screen=Screen.SETTINGS, log_files=list(LOGS)), "d")
    assert not state.confirming_delete
    assert effects == []


def test_delete_flow():
    state, effects = press(log_list(cursor=2), "d")
    assert state.confirming_delete
    assert state.delete_index == 2
    assert state.message == "Delete logdog-2024-01-03.json? Press 'y' to confirm, any other key to cancel"
    assert effects == []

    state, effects = press(state, "y")
    assert not state.confirming_delete
    assert effects == [DeleteLog(LOGS[2])]

    state, effects = update(state, LogDeleted(LOGS[2]))
    assert state.message == "✅ Deleted logdog-2024-01-03.json"
    assert effects == [RefreshLogs()]

    state, _ = update(state, LogsListed(tuple(LOGS[:2])))
    assert state.log_files == LOGS[:2]
    assert state.cursor == 1


def test_delete_failure_still_relists():
    state, effects = update(log_list(), LogDeleted(LOGS[0], error="Permission denied"))
    assert state.message == "❌ Failed to delete: Permission denied"
    assert effects == [RefreshLogs()]


@pytest.mark.parametrize("key", ["n", "esc", "up", "down", "q", "enter", "c"])
def test_any_other_key_cancels_pending_delete(key):
    pending, _ = press(log_list(cursor=1), "d")
    state, effects = press(pending, key)
    assert not state.confirming
    assert state.message == ""
    assert state.cursor == 1
    assert state.screen == Screen.LOG_LIST
    assert effects == []


def test_clear_flow():
    state, effects = press(log_list(), "c")
    assert effects == [FindOldLogs(tuple(LOGS), 7)]

    state, _ = update(state, OldLogsFound(tuple(LOGS[:2])))
    assert state.confirming_clear
    assert not state.confirming_delete
    assert state.message.startswith("Clear 2 log files older than 7 days?")

    state, effects = press(state, "y")
    assert not state.confirming_clear
    assert effects == [ClearOldLogs(tuple(LOGS), 7)]

    state, effects = update(state, OldLogsCleared(2))
    assert state.message == "✅ Cleared 2 old log files"
    assert effects == [RefreshLogs()]


def test_clear_nothing_old():
    state, _ = update(log_list(retention_days=30), OldLogsFound(()))
    assert not state.confirming_clear
    assert state.message == "No log files older than 30 days found"


def test_clear_reports_errors_with_successes():
    state, _ = update(log_list(), OldLogsCleared(1, ("Failed to delete a.json: denied",
                                                      "Failed to delete b.json: denied")))
    assert state.message == ("✅ Deleted 1 files. ❌ Errors: "
                             "Failed to delete a.json: denied; Failed to delete b.json: denied")


def test_any_other_key_cancels_pending_clear():
    state, _ = update(log_list(), OldLogsFound(tuple(LOGS)))
    state, effects = press(state, "x")
    assert not state.confirming
    assert effects == []


def test_confirmations_never_overlap():
    """Random-ish key sequences never leave both flags set."""
    keys = ["d", "c", "y", "n", "up", "down", "esc", "v"]
    for sequence in itertools.product(keys, repeat=3):
        state = log_list()
        for key in sequence:
            state, effects = update(state, KeyPressed(key))
            for effect in effects:
                if isinstance(effect, FindOldLogs):
                    state, _ = update(state, OldLogsFound(effect.paths))
            assert not (state.confirming_delete and state.confirming_clear)


def test_settings_adjust_retention():
    state, _ = press(UIState(screen=Screen.SETTINGS), "+")
    assert state.retention_days == 8
    assert state.message == "Retention set to 8 days"

    state, _ = press(state, "-", "_", "=")
    assert state.retention_days == 7


def test_retention_bounds():
    state, _ = press(UIState(screen=Screen.SETTINGS, retention_days=365), "+")
    assert state.retention_days == 365

    state, _ = press(UIState(screen=Screen.SETTINGS, retention_days=1), "-")
    assert state.retention_days == 1


def test_retention_keys_ignored_elsewhere():
    state, _ = press(log_list(), "+")
    assert state.retention_days == 7


def test_global_project_selection():
    state = UIState(screen=Screen.GLOBAL_PROJECTS, global_projects=["api", "web"], cursor=1)
    state, effects = press(state, "enter")
    assert state.screen == Screen.LOG_LIST
    assert state.selected_project == "web"
    assert state.cursor == 0
    assert effects == [RefreshLogs("web")]

    state, effects = update(state, LogDeleted("/home/logdog/web/x.json"))
    assert effects == [RefreshLogs("web")]


def test_global_enter_without_projects():
    state = UIState(screen=Screen.GLOBAL_PROJECTS)
    assert press(state, "enter") == (state, [])


def test_projects_listed_clamps_cursor():
    state = UIState(screen=Screen.GLOBAL_PROJECTS, global_projects=["a", "b", "c"], cursor=2)
    state, _ = update(state, ProjectsListed(("a",)))
    assert state.cursor == 0


def test_esc_resets_to_main():
    state = UIState(
        screen=Screen.LOG_VIEW,
        cursor=3,
        message="hi",
        viewed_file=LOGS[0],
        log_content=Text("a\nb\nc\nd"),
    )
    state, effects = press(state, "esc")
    assert state.screen == Screen.MAIN
    assert state.cursor == 0
    assert state.message == ""
    assert state.viewed_file == ""
    assert state.log_content.plain == ""
    assert effects == []


def test_esc_from_global_project_restores_local_logs():
    state = log_list(selected_project="web")
    state, effects = press(state, "esc")
    assert state.selected_project == ""
    assert effects == [RefreshLogs()]


def test_log_view_scrolls():
    state = UIState(screen=Screen.LOG_VIEW, log_content=Text("a\nb\nc"))
    state, _ = press(state, "down", "down", "down")
    assert state.cursor == 2
    state, _ = press(state, "up")
    assert state.cursor == 1


def test_unknown_key_clears_message():
    state, effects = press(UIState(message="hello"), "x")
    assert state.message == ""
    assert effects == []


def test_update_rejects_unknown_events():
    with pytest.raises(TypeError):
        update(UIState(), object())
