"""
Interactive UI state models.
"""
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from rich.text import Text

MIN_RETENTION_DAYS = 1
MAX_RETENTION_DAYS = 365


class Screen(str, Enum):
    """Screens of the interactive interface."""
    MAIN = "Main"
    INSTALL = "Install"
    LOG_LIST = "LogList"
    LOG_VIEW = "LogView"
    SETTINGS = "Settings"
    GLOBAL_PROJECTS = "GlobalProjectSelect"


# Main menu entries and the screen each opens; None quits
MAIN_MENU: List[Tuple[str, Optional[Screen]]] = [
    ("📦 Install/Setup Logger", Screen.INSTALL),
    ("📋 View Logs", Screen.LOG_LIST),
    ("🌐 View All Logs (Global)", Screen.GLOBAL_PROJECTS),
    ("⚙️  Settings", Screen.SETTINGS),
    ("❌ Quit", None),
]


class UIState(BaseModel):
    """Snapshot of everything the interface shows.

    Instances are frozen; transitions build the next snapshot with evolve().
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    screen: Screen = Screen.MAIN
    cursor: int = 0
    message: str = ""

    # Confirmations guarding destructive actions
    confirming_delete: bool = False
    confirming_clear: bool = False
    delete_index: int = 0

    # Log currently open in the viewer
    viewed_file: str = ""
    log_content: Text = Field(default_factory=Text)

    # Filesystem query results
    log_files: List[str] = Field(default_factory=list)
    global_projects: List[str] = Field(default_factory=list)
    selected_project: str = ""

    retention_days: int = Field(7, ge=MIN_RETENTION_DAYS, le=MAX_RETENTION_DAYS)

    @property
    def confirming(self) -> bool:
        """True while a destructive action waits for confirmation."""
        return self.confirming_delete or self.confirming_clear

    @property
    def selected_log(self) -> Optional[str]:
        """Log file under the cursor, if the cursor points at one."""
        if 0 <= self.cursor < len(self.log_files):
            return self.log_files[self.cursor]
        return None

    def content_lines(self) -> List[Text]:
        """Lines of the viewed log."""
        if not self.log_content.plain:
            return []
        return list(self.log_content.split("\n", allow_blank=True))

    def evolve(self, **changes) -> "UIState":
        """Return a copy with the given fields replaced."""
        return self.model_copy(update=changes)
