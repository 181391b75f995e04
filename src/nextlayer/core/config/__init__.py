"""Configuration loading for nextlayer."""

from .manager import CONFIG_ENV, DEFAULT_CONFIG_NAME, ENV_PREFIX, PATH_ENV, ConfigManager

__all__ = ["ConfigManager", "CONFIG_ENV", "DEFAULT_CONFIG_NAME", "ENV_PREFIX", "PATH_ENV"]
