"""
Detector package for Logdog.

Maps a project directory to the Language handle able to install a logger
into it and find the logs that logger writes.
"""
from pathlib import Path
from typing import Optional, Union

from .base import InstallError, InstallResult, Language
from .golang import GoLanguage

# Checked in order; the first match wins
SUPPORTED_LANGUAGES = [
    GoLanguage(),
]


def detect_language(project_path: Union[str, Path]) -> Optional[Language]:
    """Return the first supported language matching project_path, or None."""
    for language in SUPPORTED_LANGUAGES:
        if language.detect(Path(project_path)):
            return language
    return None


__all__ = [
    'InstallError',
    'InstallResult',
    'Language',
    'GoLanguage',
    'SUPPORTED_LANGUAGES',
    'detect_language'
]
