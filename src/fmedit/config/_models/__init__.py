"""Configuration models.

Pydantic models for the configuration sections and the Config container.
"""

from fmedit.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from fmedit.config._models._config import Config
from fmedit.config._models._editor import EditorConfig
from fmedit.config._models._logging import LoggingConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "EditorConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
]
