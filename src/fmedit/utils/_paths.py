from pathlib import Path

import platformdirs

PROJECT_CONFIG_FILENAME = ".fmedit.toml"
"""Name of the project-level configuration file."""


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/fmedit/config.toml``
    - macOS: ``~/Library/Application Support/fmedit/config.toml``
    - Windows: ``%APPDATA%\fmedit\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path("fmedit") / "config.toml"


def get_project_config_path(project_root: Path) -> Path:
    """Get the path to the project configuration file in *project_root*."""
    return project_root / PROJECT_CONFIG_FILENAME


def get_fmedit_log_dir() -> Path:
    """Get the platform-specific directory holding fmedit logs."""
    return platformdirs.user_log_path("fmedit")


def get_fmedit_cli_log_file() -> Path:
    """Get the path to the default CLI log file."""
    return get_fmedit_log_dir() / "cli.log"
