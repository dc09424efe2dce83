"""Configuration management for cyk_engine."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

CONFIG_FILENAME = ".cyk_engine.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """
    Configuration for a recognition run.

    Attributes:
        start_symbol: Start symbol of the grammar
        splitter: Name of the registered splitter used for rules and input
        output_format: Output format (text, json)
        show_table: Whether to print the recognition table
        log_level: Logging level name for the command-line tool
    """
    start_symbol: str = "S"
    splitter: str = "whitespace"
    output_format: str = "text"
    show_table: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from a TOML file.

        If config_path is None, searches for .cyk_engine.toml in current directory
        and parent directories.
        """
        if config_path is None:
            config_path = cls._find_config_file()

        if config_path is None or not config_path.exists():
            return cls()

        with open(config_path, "r") as f:
            data = toml.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "grammar" in data:
            grammar = data["grammar"]
            if "start" in grammar:
                config.start_symbol = grammar["start"]
            if "splitter" in grammar:
                config.splitter = grammar["splitter"]

        if "output" in data:
            output = data["output"]
            if "format" in output:
                config.output_format = output["format"]
            if "show_table" in output:
                config.show_table = output["show_table"]

        if "logging" in data:
            if "level" in data["logging"]:
                level = data["logging"]["level"]
                if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
                    raise ValueError(f"[logging] level must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")
                config.log_level = level.upper()

        return config

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search for .cyk_engine.toml in current and parent directories."""
        current = Path.cwd()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path

            # Check if we've reached the root
            parent = current.parent
            if parent == current:
                break
            current = parent

        return None
