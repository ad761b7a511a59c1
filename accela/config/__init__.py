"""Configuration module for accela."""

from .defaults import COMMAND_ALIASES
from .settings import Config, EditorConfig, LoggingConfig

__all__ = ["COMMAND_ALIASES", "Config", "EditorConfig", "LoggingConfig"]
