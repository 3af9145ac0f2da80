import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import colorlog
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

"""
Configuration Management for Azure Identity Map

Settings come from the environment (optionally seeded from a .env file) and
are validated when the dataclasses are constructed.
"""

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = field(
        default_factory=lambda: os.getenv(
            "LOG_FORMAT", "%(log_color)s%(levelname)s:%(name)s:%(message)s"
        )
    )
    file_output: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE"))

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        self.level = self.level.upper()

    def get_log_level(self) -> int:
        """Convert string log level to logging constant."""
        level_attr = getattr(logging, self.level, None)
        if level_attr is None:
            raise ValueError(f"Invalid log level: {self.level}")
        return int(level_attr)


@dataclass
class OutputConfig:
    """Configuration for JSON rendered by the CLI."""

    json_indent: Optional[int] = field(
        default_factory=lambda: (
            int(os.environ["AZIM_JSON_INDENT"])
            if os.getenv("AZIM_JSON_INDENT", "").strip()
            else 2
        )
    )
    sort_keys: bool = field(
        default_factory=lambda: os.getenv("AZIM_SORT_KEYS", "false").lower() == "true"
    )

    def __post_init__(self) -> None:
        if self.json_indent is not None and self.json_indent < 0:
            raise ValueError("JSON indent must be zero or greater")


@dataclass
class IdentityMapConfig:
    """Main configuration class combining all configuration sections."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (for logging)."""
        return {
            "logging": {
                "level": self.logging.level,
                "file_output": self.logging.file_output,
            },
            "output": {
                "json_indent": self.output.json_indent,
                "sort_keys": self.output.sort_keys,
            },
        }


def create_config_from_env(log_level: Optional[str] = None) -> IdentityMapConfig:
    """
    Create configuration from environment variables.

    Args:
        log_level: Optional override for LOG_LEVEL

    Returns:
        IdentityMapConfig: Configured instance
    """
    try:
        config = IdentityMapConfig()
        if log_level:
            config.logging = LoggingConfig(
                level=log_level,
                format=config.logging.format,
                file_output=config.logging.file_output,
            )
        return config
    except ValueError:
        logger.exception("Failed to create configuration")
        raise


def setup_logging(config: LoggingConfig) -> None:
    """
    Setup logging configuration based on config.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()  # Remove any existing handlers
    root_logger.setLevel(config.get_log_level())

    console_handler = colorlog.StreamHandler()
    console_handler.setFormatter(colorlog.ColoredFormatter(config.format))
    root_logger.addHandler(console_handler)

    # Add file handler if file output is configured
    if config.file_output:
        file_handler = logging.FileHandler(config.file_output)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s:%(name)s:%(message)s"
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    logger.debug(f"Logging configured at level {config.level}")
