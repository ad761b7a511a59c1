"""Configuration settings for accela."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..exceptions import ConfigError
from .defaults import DEFAULT_LOG_LEVEL, DEFAULT_STYLE, DEFAULT_TAB_SIZE, HIGHLIGHT_MARGIN

logger = logging.getLogger(__name__)


@dataclass
class EditorConfig:
    """Editor-related settings."""

    theme: str = DEFAULT_STYLE
    tab_size: int = DEFAULT_TAB_SIZE
    show_line_numbers: bool = True
    highlight_margin: int = HIGHLIGHT_MARGIN

    def validate(self) -> None:
        """Raise ConfigError if a value is out of range."""
        if self.tab_size < 1:
            raise ConfigError(f"tab_size must be at least 1, got {self.tab_size}")
        if self.highlight_margin < 0:
            raise ConfigError(
                f"highlight_margin must not be negative, got {self.highlight_margin}"
            )


@dataclass
class LoggingConfig:
    """Logging-related settings."""

    file: str = ""  # Empty means no log file
    level: str = DEFAULT_LOG_LEVEL

    def get_level(self) -> int:
        """Get the numeric logging level, falling back to the default."""
        level = logging.getLevelName(self.level.upper())
        if isinstance(level, int):
            return level
        return logging.getLevelName(DEFAULT_LOG_LEVEL)


@dataclass
class Config:
    """Main configuration class for accela."""

    editor: EditorConfig = field(default_factory=EditorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # XDG config directory
    CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME") or (Path.home() / ".config")) / "accela"
    CONFIG_FILE = CONFIG_DIR / "config.toml"
    PROJECT_CONFIG_FILE = ".accela.toml"

    @classmethod
    def load(cls, project_path: Optional[Path] = None) -> "Config":
        """Load configuration from files.

        Priority (highest to lowest):
        1. Project-specific config (.accela.toml in the working directory)
        2. User config (~/.config/accela/config.toml)
        3. Default values
        """
        config = cls()

        # Load user config
        if cls.CONFIG_FILE.exists():
            config._load_from_file(cls.CONFIG_FILE)

        # Load project config (overrides user config)
        if project_path:
            project_config = project_path / cls.PROJECT_CONFIG_FILE
            if project_config.exists():
                config._load_from_file(project_config)

        return config

    def _load_from_file(self, path: Path) -> None:
        """Load configuration from a TOML file.

        Args:
            path: Path to the TOML configuration file.

        Note:
            Invalid configurations are logged but don't raise exceptions.
            The editor continues with default values.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError:
            return  # File doesn't exist, use defaults
        except tomllib.TOMLDecodeError as e:
            logger.warning("Invalid TOML in %s: %s", path, e)
            return
        except OSError as e:
            logger.warning("Cannot read config file %s: %s", path, e)
            return

        # Editor settings
        if "editor" in data:
            editor_data = data["editor"]
            candidate = EditorConfig(
                theme=self.editor.theme,
                tab_size=self.editor.tab_size,
                show_line_numbers=self.editor.show_line_numbers,
                highlight_margin=self.editor.highlight_margin,
            )
            try:
                if "theme" in editor_data:
                    candidate.theme = str(editor_data["theme"])
                if "tab_size" in editor_data:
                    candidate.tab_size = int(editor_data["tab_size"])
                if "show_line_numbers" in editor_data:
                    candidate.show_line_numbers = bool(editor_data["show_line_numbers"])
                if "highlight_margin" in editor_data:
                    candidate.highlight_margin = int(editor_data["highlight_margin"])
                candidate.validate()
            except (TypeError, ValueError, ConfigError) as e:
                logger.warning("Ignoring [editor] section of %s: %s", path, e)
            else:
                self.editor = candidate

        # Logging settings
        if "logging" in data:
            logging_data = data["logging"]
            if "file" in logging_data:
                self.logging.file = str(logging_data["file"])
            if "level" in logging_data:
                self.logging.level = str(logging_data["level"])

    def save(self) -> None:
        """Save configuration to user config file."""
        self.CONFIG_DIR.mkdir(parents=True, exist_ok=True)

        content = f"""# accela configuration

[editor]
theme = "{self.editor.theme}"
tab_size = {self.editor.tab_size}
show_line_numbers = {str(self.editor.show_line_numbers).lower()}
highlight_margin = {self.editor.highlight_margin}

[logging]
file = "{self.logging.file}"  # Empty string disables the log file
level = "{self.logging.level}"
"""
        with open(self.CONFIG_FILE, "w") as f:
            f.write(content)
