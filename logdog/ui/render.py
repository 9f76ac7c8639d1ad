"""
Text rendering for each screen.

Rendering never changes state. The log list screen reads every file to show
its entry count, so it does touch the disk.
"""
import os
from typing import Callable, Dict, List, Optional

from rich.text import Text

from ..core.log_store import LogStore, log_store
from ..models.context import ProjectContext
from ..models.state import MAIN_MENU, Screen, UIState

TITLE_STYLE = "bold color(99)"
HINT_STYLE = "color(240)"
MESSAGE_STYLE = "color(226)"
NORMAL_STYLE = "color(252)"
SELECTED_STYLE = "color(230) on color(57)"

# Lines used by the log view header and footer
LOG_VIEW_CHROME = 8


def _message(state: UIState, separator: str = "\n") -> Text:
    if not state.message:
        return Text()
    return Text.assemble(separator, (state.message, MESSAGE_STYLE))


def _selectable_rows(labels: List[str], cursor: int) -> Text:
    rows = []
    for i, label in enumerate(labels):
        if i == cursor:
            rows.append(Text("> " + label, style=SELECTED_STYLE))
        else:
            rows.append(Text("  " + label, style=NORMAL_STYLE))
    return Text("\n").join(rows)


def render_main(state: UIState, context: ProjectContext, store: LogStore,
                height: Optional[int]) -> Text:
    if context.language is not None:
        status = f"Detected: {context.language_name} project in {context.project_path}"
        if state.log_files:
            status += f" ({len(state.log_files)} log files)"
    else:
        status = f"No supported project detected in {context.project_path}"

    options = Text()
    for i, (label, _) in enumerate(MAIN_MENU):
        cursor = ">" if i == state.cursor else " "
        options.append(f"{cursor} {label}\n")

    return Text.assemble(
        ("🐕 Logdog", TITLE_STYLE), "\n\n",
        status, "\n\n",
        options,
        _message(state),
    )


def render_install(state: UIState, context: ProjectContext, store: LogStore,
                   height: Optional[int]) -> Text:
    if context.language is None:
        return Text("No supported language detected. Press ESC to go back.")

    targets = "\n".join(f"- {target}" for target in context.language.install_targets(context.config))
    return Text(
        f"Installing logger for {context.language_name} project...\n\n"
        f"This will create:\n{targets}\n\n"
        "Press ENTER to install or ESC to cancel"
    )


def render_log_list(state: UIState, context: ProjectContext, store: LogStore,
                    height: Optional[int]) -> Text:
    if not state.log_files:
        return Text.assemble("No log files found. Press ESC to go back.", _message(state, "\n\n"))

    header = "Log Files"
    if state.selected_project:
        header = f"Log Files - {state.selected_project}"

    labels = [
        f"{os.path.basename(path):<25} {store.count_entries(path):>8} entries"
        for path in state.log_files
    ]

    return Text.assemble(
        (header, TITLE_STYLE), "\n\n",
        _selectable_rows(labels, state.cursor),
        ("\nPress 'v' to view, 'd' to delete, 'c' to clear old logs, ESC to go back", HINT_STYLE),
        _message(state, "\n\n"),
    )


def render_log_view(state: UIState, context: ProjectContext, store: LogStore,
                    height: Optional[int]) -> Text:
    lines = state.content_lines()
    if height is not None:
        visible = lines[state.cursor:state.cursor + max(1, height - LOG_VIEW_CHROME)]
    else:
        visible = lines[state.cursor:]

    position = ""
    if lines:
        position = f" ({state.cursor + 1}/{len(lines)})"

    return Text.assemble(
        (f"📋 Viewing: {os.path.basename(state.viewed_file)}{position}", TITLE_STYLE), "\n\n",
        Text("\n").join(visible), "\n\n",
        ("Use ↑/↓ to scroll, ESC to go back", HINT_STYLE),
        _message(state, "\n\n"),
    )


def render_settings(state: UIState, context: ProjectContext, store: LogStore,
                    height: Optional[int]) -> Text:
    return Text.assemble(
        ("⚙️ Settings", TITLE_STYLE), "\n\n",
        f"Log Retention: {state.retention_days} days\n\n",
        f"Global log root: {context.global_root}",
        ("\nPress +/- to adjust, ESC to go back", HINT_STYLE),
        _message(state, "\n\n"),
    )


def render_global_projects(state: UIState, context: ProjectContext, store: LogStore,
                           height: Optional[int]) -> Text:
    if not state.global_projects:
        return Text(f"No projects found in {context.global_root}\n\nPress ESC to go back")

    return Text.assemble(
        ("🌐 Select Project", TITLE_STYLE), "\n\n",
        _selectable_rows(state.global_projects, state.cursor),
        ("\nPress ENTER to view logs, ESC to go back", HINT_STYLE),
        _message(state, "\n\n"),
    )


RENDERERS: Dict[Screen, Callable[..., Text]] = {
    Screen.MAIN: render_main,
    Screen.INSTALL: render_install,
    Screen.LOG_LIST: render_log_list,
    Screen.LOG_VIEW: render_log_view,
    Screen.SETTINGS: render_settings,
    Screen.GLOBAL_PROJECTS: render_global_projects,
}


def render(state: UIState, context: ProjectContext, store: Optional[LogStore] = None,
           height: Optional[int] = None) -> Text:
    """Render the active screen. height limits the log view to what fits."""
    return RENDERERS[state.screen](state, context, store or log_store, height)
