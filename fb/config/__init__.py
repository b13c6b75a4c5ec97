"""Configuration management for fb.

This package contains:
- settings: Settings dataclass with configuration fields
- manager: ConfigManager class for loading and validating configuration
"""

from fb.config.manager import ConfigManager
from fb.config.settings import Settings

__all__ = [
    "Settings",
    "ConfigManager",
]
