"""
Configuration package for the translation proxy.
"""

from .config import (
    Config,
    Environment,
    ModelAvailability,
    SystemStatus,
    config,
    load_config
)

__all__ = [
    "Config",
    "Environment",
    "ModelAvailability",
    "SystemStatus",
    "config",
    "load_config"
]
