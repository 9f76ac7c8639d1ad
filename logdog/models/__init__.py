"""
Models package for Logdog.

Contains the UI state snapshot, screens and the per-run project context.
"""

from .state import Screen, UIState, MAIN_MENU, MIN_RETENTION_DAYS, MAX_RETENTION_DAYS
from .context import ProjectContext

__all__ = [
    'Screen',
    'UIState',
    'MAIN_MENU',
    'MIN_RETENTION_DAYS',
    'MAX_RETENTION_DAYS',
    'ProjectContext'
]
