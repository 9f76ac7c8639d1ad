"""
Textual front end: feeds key presses to the state machine and shows the
rendered screen.
"""
import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from ..core.effects import EffectRunner
from ..core.events import KeyPressed, Quit, Redraw
from ..models.context import ProjectContext
from .render import render

logger = logging.getLogger(__name__)

# Textual key names -> key names understood by the state machine
KEY_ALIASES = {
    "escape": "esc",
    "plus": "+",
    "equals_sign": "=",
    "minus": "-",
    "underscore": "_",
}


def normalize_key(key: str) -> str:
    return KEY_ALIASES.get(key, key)


class LogdogApp(App):
    """Full-screen Logdog interface."""

    CSS = """
    #screen {
        padding: 1 2;
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    TITLE = "Logdog"

    def __init__(self, context: ProjectContext, runner: Optional[EffectRunner] = None,
                 retention_days: int = 7):
        super().__init__()
        self.context = context
        self.runner = runner or EffectRunner(context)
        self.state = self.runner.initial_state(retention_days)

    def compose(self) -> ComposeResult:
        yield Static(id="screen")

    def on_mount(self) -> None:
        """Draw the first screen."""
        logger.info("Interface started in %s (language: %s)",
                    self.context.project_path, self.context.language_name or "none")
        self._update_view()

    def on_resize(self, event: events.Resize) -> None:
        self._update_view()

    def on_key(self, event: events.Key) -> None:
        """Run every key through the state machine."""
        event.stop()
        event.prevent_default()

        self.state, ui_effects = self.runner.dispatch(self.state, KeyPressed(normalize_key(event.key)))
        for effect in ui_effects:
            if isinstance(effect, Quit):
                logger.info("Quit requested")
                self.exit()
                return
            if isinstance(effect, Redraw):
                self.refresh(layout=True)

        self._update_view()

    def _update_view(self) -> None:
        view = self.query_one("#screen", Static)
        view.update(render(self.state, self.context, self.runner.store, self.size.height))
