"""
Language handles and project detection.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config.settings import LoggingConfig


class InstallError(Exception):
    """Raised when the logger package cannot be written into a project."""


@dataclass
class InstallResult:
    """Outcome of a successful install."""
    package_file: Path
    output_dir: Path
    overwritten: bool = False


class Language(ABC):
    """A supported project type."""

    @abstractmethod
    def name(self) -> str:
        """Human readable language name."""

    @abstractmethod
    def detect(self, project_path: Path) -> bool:
        """True if project_path is a project of this language."""

    @abstractmethod
    def install(self, project_path: Path, config: LoggingConfig) -> InstallResult:
        """Write the logger package and create the output directory.

        Raises InstallError on any filesystem failure.
        """

    @abstractmethod
    def get_log_paths(self, project_path: Path, config: Optional[LoggingConfig] = None) -> List[str]:
        """Log files the installed logger has produced, sorted by name."""

    @abstractmethod
    def install_targets(self, config: LoggingConfig) -> List[str]:
        """Relative paths install creates, for display."""
