"""
Per-run project context.
"""
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config.settings import Config, LoggingConfig
from ..detector import Language, detect_language


class ProjectContext(BaseModel):
    """Working directory, detected language and config, fixed at startup."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    project_path: Path
    language: Optional[Language] = None
    config: LoggingConfig = Field(default_factory=LoggingConfig)
    global_root: Path

    @classmethod
    def from_directory(cls, project_path: Optional[Path] = None,
                       config: Optional[Config] = None) -> "ProjectContext":
        """Detect the project in project_path (default: cwd)."""
        config = config or Config()
        project_path = Path(project_path or os.getcwd())
        return cls(
            project_path=project_path,
            language=detect_language(project_path),
            config=config.logging,
            global_root=config.get_global_root(),
        )

    @property
    def language_name(self) -> Optional[str]:
        return self.language.name() if self.language else None
