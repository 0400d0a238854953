"""
Runtime Configuration

Central configuration for logging, output encoding, and snapshot building.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from airdrop_core.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "AIRDROP_"


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class OutputConfig:
    """How roots and proofs are written out."""
    hex_prefix: bool = True
    indent: int = 2


@dataclass
class SnapshotConfig:
    """Configuration for delegation snapshot aggregation."""
    min_amount: int = 0

    def __post_init__(self):
        if self.min_amount < 0:
            raise ConfigException(
                f"min_amount must be non-negative, got {self.min_amount}",
                details={"min_amount": self.min_amount},
            )


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - AIRDROP_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - AIRDROP_LOG_FILE: Also log to this file
        - AIRDROP_HEX_PREFIX: Emit 0x-prefixed hex (true/false)
        - AIRDROP_INDENT: JSON indent for written files
        - AIRDROP_MIN_AMOUNT: Minimum aggregated balance kept in a snapshot
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}HEX_PREFIX"):
            overrides.setdefault("output", {})["hex_prefix"] = _env_bool(
                f"{ENV_PREFIX}HEX_PREFIX", "true"
            )
        if os.getenv(f"{ENV_PREFIX}INDENT"):
            overrides.setdefault("output", {})["indent"] = _env_int(f"{ENV_PREFIX}INDENT")

        if os.getenv(f"{ENV_PREFIX}MIN_AMOUNT"):
            overrides.setdefault("snapshot", {})["min_amount"] = _env_int(
                f"{ENV_PREFIX}MIN_AMOUNT"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigException(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigException(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        try:
            logging_config = LoggingConfig(**data.get("logging", {}))
            output = OutputConfig(**data.get("output", {}))
            snapshot = SnapshotConfig(**data.get("snapshot", {}))
        except TypeError as e:
            raise ConfigException(f"Unknown configuration key: {e}") from e

        return cls(
            logging=logging_config,
            output=output,
            snapshot=snapshot,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "output": {
                "hex_prefix": self.output.hex_prefix,
                "indent": self.output.indent,
            },
            "snapshot": {
                "min_amount": self.snapshot.min_amount,
            },
            "extra": self.extra,
        }


def _env_int(name: str) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigException(f"{name} must be an integer, got {raw!r}") from e


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
