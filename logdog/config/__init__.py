"""
Configuration package for Logdog.

Contains the pydantic config models and the shared ConfigManager.
"""

from .settings import Config, ConfigManager, LoggingConfig, UIConfig, DirectoryConfig, config_manager

__all__ = [
    'Config',
    'ConfigManager',
    'LoggingConfig',
    'UIConfig',
    'DirectoryConfig',
    'config_manager'
]
