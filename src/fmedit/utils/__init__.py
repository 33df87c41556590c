"""Shared utilities: logging factories, JSON helpers and well-known paths."""

from ._json import dump_json
from ._logging import (
    LogFormatType,
    create_cli_logger,
    create_logger,
)
from ._paths import (
    PROJECT_CONFIG_FILENAME,
    get_fmedit_cli_log_file,
    get_fmedit_log_dir,
    get_project_config_path,
    get_user_config_path,
)

__all__ = [
    "PROJECT_CONFIG_FILENAME",
    "LogFormatType",
    "create_cli_logger",
    "create_logger",
    "dump_json",
    "get_fmedit_cli_log_file",
    "get_fmedit_log_dir",
    "get_project_config_path",
    "get_user_config_path",
]
