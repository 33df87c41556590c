"""fmedit configuration.

Loading, validation and typed access to configuration values.

Example:
    >>> from fmedit.config import Config
    >>> config = Config.from_dict({"editor": {"field_key": "field"}})
    >>> config.editor.field_key
    'field'
"""

from fmedit.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import (
    WORKTREE_CONFIG_FILENAME,
    discover_sources,
    find_project_root,
    get_git_dir,
)
from ._load import STRICT_ENV_VAR, safe_load_config
from ._loader import (
    ENV_PREFIX,
    copy_value,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    EditorConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from ._validation import (
    ValidationIssue,
    get_config_schema,
    raise_if_validation_errors,
    validate_config,
    validate_source,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "STRICT_ENV_VAR",
    "WORKTREE_CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "EditorConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ValidationIssue",
    "copy_value",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_config_schema",
    "get_git_dir",
    "parse_env_vars",
    "parse_string_value",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
    "validate_source",
]
