"""Configuration management for Ambitype."""

from .config import AmbitypeConfig
from .defaults import create_default_config

__all__ = ["AmbitypeConfig", "create_default_config"]
