"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import (
    LoggingConfig,
    OutputConfig,
    RuntimeConfig,
    SnapshotConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "OutputConfig",
    "RuntimeConfig",
    "SnapshotConfig",
    "get_default_config",
    "set_default_config",
]
