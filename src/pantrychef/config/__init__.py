"""Configuration loading."""

from pantrychef.config.settings import Settings, default_config_path

__all__ = ["Settings", "default_config_path"]
