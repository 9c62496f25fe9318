"""Application settings and configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

CONFIG_ENV_VAR = "PANTRYCHEF_CONFIG"


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".pantrychef"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "pantrychef.db"


def default_config_path() -> Path:
    """Return the config file path, honoring PANTRYCHEF_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return _default_config_dir() / "config.yaml"


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class PantryConfig:
    """Pantry behaviour."""

    expiring_within_days: int = 7


@dataclass
class GenerationConfig:
    """Recipe generation configuration."""

    seed: Optional[int] = None  # fixed seed makes template recipes reproducible


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    pantry: PantryConfig = field(default_factory=PantryConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses PANTRYCHEF_CONFIG
                or ~/.pantrychef/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "database" in data:
            db_data = data["database"] or {}
            if db_data.get("path"):
                settings.database.path = Path(db_data["path"]).expanduser()

        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                settings.logging.level = str(log_data["level"]).upper()

        if "pantry" in data:
            pantry_data = data["pantry"] or {}
            if "expiring_within_days" in pantry_data:
                settings.pantry.expiring_within_days = int(
                    pantry_data["expiring_within_days"]
                )

        if "generation" in data:
            gen_data = data["generation"] or {}
            if gen_data.get("seed") is not None:
                settings.generation.seed = int(gen_data["seed"])

        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses the default path
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {
                "path": str(self.database.path),
            },
            "logging": {
                "level": self.logging.level,
            },
            "pantry": {
                "expiring_within_days": self.pantry.expiring_within_days,
            },
            "generation": {
                "seed": self.generation.seed,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
