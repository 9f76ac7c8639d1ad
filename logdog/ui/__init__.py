"""
UI package for Logdog.

Contains the per-screen renderers and the Textual application.
"""

from .render import render
from .app import LogdogApp, normalize_key

__all__ = [
    'render',
    'LogdogApp',
    'normalize_key'
]
