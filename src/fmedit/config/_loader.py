"""TOML configuration file loading and merging."""

import os
import tomllib
from typing import TYPE_CHECKING, Any

import orjson

from fmedit.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path

ENV_PREFIX = "FMEDIT_"
"""Prefix of environment variables that carry configuration values."""

_RESERVED_ENV_KEYS = frozenset({"DEBUG", "LOG_LEVEL", "STRICT_CONFIG"})


def read_toml_file(path: "Path") -> dict[str, Any]:  # noqa: UP037
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=e.lineno,
            column=e.colno,
        ) from e


def copy_value(value: Any) -> Any:
    """Return a deep copy of a configuration value.

    Dicts and lists are copied recursively; scalars are returned as-is.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely
        - Scalars are replaced with the override value
        - Keys missing from override keep the base value

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.
    """
    result: dict[str, Any] = {key: copy_value(value) for key, value in base.items()}

    for key, override_val in override.items():
        base_val = result.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            result[key] = deep_merge(base_val, override_val)
        else:
            result[key] = copy_value(override_val)

    return result


def parse_string_value(value: str) -> Any:
    """Parse a string value with automatic type inference.

    Precedence:
    1. Boolean: true/false (case-insensitive)
    2. Integer: parseable as int
    3. Float: parseable as float and containing a decimal point
    4. JSON array/object: wrapped in [] or {}
    5. String: fallback

    Examples:
        >>> parse_string_value("true")
        True
        >>> parse_string_value("42")
        42
        >>> parse_string_value("new_entry")
        'new_entry'
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    try:
        return int(value)
    except ValueError:
        pass

    if "." in value:
        try:
            return float(value)
        except ValueError:
            pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            pass

    return value


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed, replacing any non-dict
    value found on the way.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "editor.field_key", "field")
        >>> d
        {'editor': {'field_key': 'field'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value


def parse_env_vars(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Parse environment variables into a nested config dictionary.

    ``FMEDIT_EDITOR__MAX_KEY_PROBES=50`` becomes
    ``{"editor": {"max_key_probes": 50}}``. Double underscores separate
    nesting levels. Variables that only control logging bootstrap or
    strict mode (``FMEDIT_DEBUG``, ``FMEDIT_LOG_LEVEL``,
    ``FMEDIT_STRICT_CONFIG``) are skipped.

    Args:
        prefix: Environment variable prefix.

    Returns:
        Dictionary of parsed config values.
    """
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        if not config_key or config_key in _RESERVED_ENV_KEYS:
            continue

        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, parse_string_value(value))

    return result
