"""Configuration management.

This module handles configuration loading and validation.
"""

from __future__ import annotations

from hired.config.config import ConfigManager, load_config
from hired.models import Config

__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
]
