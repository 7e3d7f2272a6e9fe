"""
Config Module

Engine settings and YAML config loading.
"""

from .loader import (
    ConfigLoader,
    EngineConfig,
    LayoutSettings,
    ValidationSettings,
    ServiceSettings,
    load_config,
)

__all__ = [
    "ConfigLoader",
    "EngineConfig",
    "LayoutSettings",
    "ValidationSettings",
    "ServiceSettings",
    "load_config",
]
